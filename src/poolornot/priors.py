"""Prior model over Gaussian component parameters.

Means are drawn from a Gaussian, precisions from a Gamma distribution
(converted to standard deviations) and mixing coefficients from a symmetric
Beta distribution, Jeffreys' Beta(0.5, 0.5) by default.
"""

import math
from dataclasses import dataclass

import numpy as np

from poolornot.config import PriorConfig


class DegeneratePrecisionError(ValueError):
    """Raised when a sampled precision cannot be turned into a stddev."""


@dataclass(frozen=True)
class GaussParams:
    """One Gaussian component."""

    mean: float
    stddev: float


@dataclass(frozen=True)
class MixtureParams:
    """Two-component Gaussian mixture; mix_coef weights component1."""

    mix_coef: float
    component1: GaussParams
    component2: GaussParams


def stddev_of_precision(precision: float) -> float:
    """Convert a precision (1/variance) into a standard deviation.

    Raises:
        DegeneratePrecisionError: If precision is not strictly positive.
    """
    if not precision > 0:
        raise DegeneratePrecisionError(f"precision must be positive, got {precision}")
    return 1.0 / math.sqrt(precision)


class PriorModel:
    """Samples component and mixture parameters from the priors.

    The random generator is owned by the caller; every draw advances it.
    """

    def __init__(self, config: PriorConfig, rng: np.random.Generator):
        """Initialize the prior model.

        Args:
            config: Prior hyperparameters.
            rng: Random generator to draw from.
        """
        self.config = config
        self.rng = rng

    def _draw_precisions(self, size: int | None = None) -> np.ndarray | float:
        # numpy parameterises the Gamma by scale.
        return self.rng.gamma(
            self.config.precision_shape,
            1.0 / self.config.precision_rate,
            size=size,
        )

    def sample_gauss_params(self) -> GaussParams:
        """Draw one Gaussian component from the prior."""
        mean = self.rng.normal(self.config.mean_mean, self.config.mean_stddev)
        precision = self._draw_precisions()
        return GaussParams(mean=float(mean), stddev=stddev_of_precision(float(precision)))

    def sample_mixture_params(self) -> MixtureParams:
        """Draw a mixing coefficient and two independent components."""
        mix_coef = float(self.sample_mixing_coefs())
        component1 = self.sample_gauss_params()
        component2 = self.sample_gauss_params()
        return MixtureParams(mix_coef=mix_coef, component1=component1, component2=component2)

    def sample_gauss_arrays(self, size: int) -> tuple[np.ndarray, np.ndarray]:
        """Draw many Gaussian components at once.

        Args:
            size: Number of components.

        Returns:
            Tuple of (means, stddevs) arrays of length size.

        Raises:
            DegeneratePrecisionError: If any precision draw is not positive.
        """
        means = self.rng.normal(self.config.mean_mean, self.config.mean_stddev, size=size)
        precisions = self._draw_precisions(size)
        if np.any(precisions <= 0):
            raise DegeneratePrecisionError(
                f"precision draw of {precisions.min()} cannot be converted to a stddev"
            )
        return means, 1.0 / np.sqrt(precisions)

    def sample_mixing_coefs(self, size: int | None = None) -> np.ndarray | float:
        """Draw mixing coefficients from the symmetric Beta prior."""
        c = self.config.mixing_concentration
        return self.rng.beta(c, c, size=size)
