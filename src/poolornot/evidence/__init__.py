"""Evidence estimators for the pooled and two-component models."""

from poolornot.evidence.quadrature import (
    evidence_one_component_by_quadrature,
    evidence_two_component_by_quadrature,
)
from poolornot.evidence.sampling import (
    evidence_one_component_by_sampling,
    evidence_two_component_by_sampling,
)

__all__ = [
    "evidence_one_component_by_quadrature",
    "evidence_two_component_by_quadrature",
    "evidence_one_component_by_sampling",
    "evidence_two_component_by_sampling",
    "favors_pooled",
    "METHODS",
]


METHODS = ("sampling", "quadrature")


def favors_pooled(pooled: float, differ: float) -> bool:
    """Decide whether the single-Gaussian model wins.

    Ties do not favour the pooled model.

    Args:
        pooled: Evidence (or log evidence) of the one-component model.
        differ: Evidence (or log evidence) of the two-component model,
            on the same scale.

    Returns:
        True only if pooled strictly exceeds differ.
    """
    return pooled > differ
