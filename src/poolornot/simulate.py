"""Synthetic data generation from the one- and two-component models."""

import numpy as np

from poolornot.priors import GaussParams, MixtureParams


def _as_dataset(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


def _check_size(n: int) -> None:
    if n < 1:
        raise ValueError(f"Dataset size must be positive, got {n}")


def generate_one_component(params: GaussParams, n: int, rng: np.random.Generator) -> np.ndarray:
    """Draw n observations from a single Gaussian.

    Args:
        params: Generating component.
        n: Number of observations.
        rng: Random generator.

    Returns:
        New read-only array of length n.
    """
    _check_size(n)
    return _as_dataset(rng.normal(params.mean, params.stddev, size=n))


def generate_two_component(params: MixtureParams, n: int, rng: np.random.Generator) -> np.ndarray:
    """Draw n observations from a two-component mixture.

    Each observation comes from component1 when a uniform draw falls below
    mix_coef, otherwise from component2.

    Args:
        params: Generating mixture.
        n: Number of observations.
        rng: Random generator.

    Returns:
        New read-only array of length n.
    """
    _check_size(n)
    from_first = rng.random(n) < params.mix_coef
    means = np.where(from_first, params.component1.mean, params.component2.mean)
    stddevs = np.where(from_first, params.component1.stddev, params.component2.stddev)
    return _as_dataset(rng.normal(means, stddevs))
