"""Probability densities of observations under the two models."""

import math

import numpy as np

from poolornot.priors import GaussParams, MixtureParams

_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


def gaussian_pdf(x, mean, stddev):
    """Gaussian density with numpy broadcasting.

    An infinite stddev gives density 0.
    """
    z = (np.asarray(x) - mean) / stddev
    return np.exp(-0.5 * z * z) / (stddev * math.sqrt(2.0 * math.pi))


def gaussian_logpdf(x, mean, stddev):
    """Gaussian log density with numpy broadcasting.

    An infinite stddev gives log density -inf.
    """
    z = (np.asarray(x) - mean) / stddev
    return -0.5 * z * z - np.log(stddev) - _LOG_SQRT_2PI


def gaussian_density(x: float, params: GaussParams) -> float:
    """Density of x under one Gaussian component."""
    return float(gaussian_pdf(x, params.mean, params.stddev))


def mixture_density(x: float, params: MixtureParams) -> float:
    """Density of x under a two-component mixture."""
    return params.mix_coef * gaussian_density(x, params.component1) + (
        1.0 - params.mix_coef
    ) * gaussian_density(x, params.component2)


def dataset_likelihood(data: np.ndarray, params: GaussParams | MixtureParams) -> float:
    """Product of per-observation densities over a dataset.

    Args:
        data: Observations.
        params: Parameters of either model.

    Returns:
        Joint density of the data (may underflow to 0 for long datasets).
    """
    data = np.asarray(data, dtype=float)
    if isinstance(params, MixtureParams):
        c1, c2 = params.component1, params.component2
        densities = params.mix_coef * gaussian_pdf(data, c1.mean, c1.stddev) + (
            1.0 - params.mix_coef
        ) * gaussian_pdf(data, c2.mean, c2.stddev)
    else:
        densities = gaussian_pdf(data, params.mean, params.stddev)
    return float(np.prod(densities))
