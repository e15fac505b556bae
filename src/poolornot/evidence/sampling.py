"""Evidence by simple Monte Carlo over prior draws.

The prior itself is the sampling distribution, so the evidence estimate is
the mean data likelihood across draws. Draws are processed in batches to
bound memory.
"""

import logging
import math

import numpy as np
from scipy.special import logsumexp

from poolornot.likelihood import gaussian_logpdf, gaussian_pdf
from poolornot.priors import PriorModel
from poolornot.utils import iter_batches

logger = logging.getLogger(__name__)


def _check_inputs(data, n_samples: int) -> np.ndarray:
    data = np.asarray(data, dtype=float)
    if data.ndim != 1 or data.size == 0:
        raise ValueError("data must be a non-empty one-dimensional array")
    if n_samples < 1:
        raise ValueError(f"n_samples must be positive, got {n_samples}")
    return data


def _finish(batch_results: list[float], n_samples: int, log_domain: bool, model: str) -> float:
    if log_domain:
        return float(logsumexp(batch_results) - math.log(n_samples))

    evidence = math.fsum(batch_results) / n_samples
    if evidence == 0.0:
        logger.warning(
            "%s sampling evidence underflowed to zero; rerun with log_domain=True",
            model,
        )
    return evidence


def evidence_one_component_by_sampling(
    data: np.ndarray,
    prior: PriorModel,
    n_samples: int = 2_000_000,
    batch_size: int = 50_000,
    log_domain: bool = False,
) -> float:
    """Monte Carlo evidence of the single-Gaussian model.

    Args:
        data: Observations.
        prior: Prior model to draw (mean, stddev) pairs from.
        n_samples: Number of prior draws.
        batch_size: Draws evaluated per vectorised batch.
        log_domain: Accumulate log-likelihoods and return the log evidence.

    Returns:
        Evidence (or its natural log when log_domain is set).
    """
    data = _check_inputs(data, n_samples)
    batch_results = []

    for size in iter_batches(n_samples, batch_size):
        means, stddevs = prior.sample_gauss_arrays(size)
        if log_domain:
            log_lik = gaussian_logpdf(data[None, :], means[:, None], stddevs[:, None]).sum(axis=1)
            batch_results.append(float(logsumexp(log_lik)))
        else:
            lik = np.prod(gaussian_pdf(data[None, :], means[:, None], stddevs[:, None]), axis=1)
            batch_results.append(float(lik.sum()))

    return _finish(batch_results, n_samples, log_domain, "One-component")


def evidence_two_component_by_sampling(
    data: np.ndarray,
    prior: PriorModel,
    n_samples: int = 2_000_000,
    batch_size: int = 50_000,
    log_domain: bool = False,
) -> float:
    """Monte Carlo evidence of the two-component mixture model.

    Args:
        data: Observations.
        prior: Prior model to draw mixtures from.
        n_samples: Number of prior draws.
        batch_size: Draws evaluated per vectorised batch.
        log_domain: Accumulate log-likelihoods and return the log evidence.

    Returns:
        Evidence (or its natural log when log_domain is set).
    """
    data = _check_inputs(data, n_samples)
    batch_results = []

    for size in iter_batches(n_samples, batch_size):
        mix_coefs = prior.sample_mixing_coefs(size)[:, None]
        means1, stddevs1 = prior.sample_gauss_arrays(size)
        means2, stddevs2 = prior.sample_gauss_arrays(size)

        if log_domain:
            with np.errstate(divide="ignore"):
                log_c, log_1mc = np.log(mix_coefs), np.log1p(-mix_coefs)
            log_densities = np.logaddexp(
                log_c + gaussian_logpdf(data[None, :], means1[:, None], stddevs1[:, None]),
                log_1mc + gaussian_logpdf(data[None, :], means2[:, None], stddevs2[:, None]),
            )
            batch_results.append(float(logsumexp(log_densities.sum(axis=1))))
        else:
            densities = mix_coefs * gaussian_pdf(
                data[None, :], means1[:, None], stddevs1[:, None]
            ) + (1.0 - mix_coefs) * gaussian_pdf(data[None, :], means2[:, None], stddevs2[:, None])
            batch_results.append(float(np.prod(densities, axis=1).sum()))

    return _finish(batch_results, n_samples, log_domain, "Two-component")
