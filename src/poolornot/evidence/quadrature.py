"""Evidence by Riemann sum over the precomputed quantile grids.

Every grid node has equal prior mass, so the evidence is approximated by
the plain average of the data likelihood over all grid cells.
"""

import logging
import math

import numpy as np
from scipy.special import logsumexp

from poolornot.grid import QuantileGrid
from poolornot.likelihood import gaussian_logpdf, gaussian_pdf

logger = logging.getLogger(__name__)


def _check_data(data) -> np.ndarray:
    data = np.asarray(data, dtype=float)
    if data.ndim != 1 or data.size == 0:
        raise ValueError("data must be a non-empty one-dimensional array")
    return data


def _component_table(data: np.ndarray, grid: QuantileGrid, log_domain: bool) -> np.ndarray:
    """Per-observation (log) densities for every component cell.

    Returns:
        Array of shape (n_cells, len(data)).
    """
    means, stddevs = grid.component_cells()
    density = gaussian_logpdf if log_domain else gaussian_pdf
    return density(data[None, :], means[:, None], stddevs[:, None])


def _warn_if_underflow(evidence: float, model: str) -> None:
    if evidence == 0.0:
        logger.warning(
            "%s quadrature evidence underflowed to zero; rerun with log_domain=True",
            model,
        )


def evidence_one_component_by_quadrature(
    data: np.ndarray,
    grid: QuantileGrid,
    log_domain: bool = False,
) -> float:
    """Evidence of the single-Gaussian model over the (mean, precision) grid.

    Args:
        data: Observations.
        grid: Precomputed quantile grid.
        log_domain: Accumulate log-likelihoods and return the log evidence.

    Returns:
        Evidence (or its natural log when log_domain is set).
    """
    data = _check_data(data)
    table = _component_table(data, grid, log_domain)

    if log_domain:
        return float(logsumexp(table.sum(axis=1)) - math.log(grid.n_cells))

    evidence = float(np.prod(table, axis=1).sum() / grid.n_cells)
    _warn_if_underflow(evidence, "One-component")
    return evidence


def _mixture_block_sum(table: np.ndarray, mix_coef: float) -> float:
    """Sum of the mixture likelihood over all component-cell pairs."""
    densities = mix_coef * table[:, None, :] + (1.0 - mix_coef) * table[None, :, :]
    return float(np.prod(densities, axis=2).sum())


def _mixture_block_logsumexp(log_table: np.ndarray, mix_coef: float) -> float:
    """Log of the mixture likelihood sum over all component-cell pairs."""
    with np.errstate(divide="ignore"):
        log_c, log_1mc = np.log(mix_coef), np.log1p(-mix_coef)
    log_densities = np.logaddexp(
        log_c + log_table[:, None, :],
        log_1mc + log_table[None, :, :],
    )
    return float(logsumexp(log_densities.sum(axis=2)))


def evidence_two_component_by_quadrature(
    data: np.ndarray,
    grid: QuantileGrid,
    log_domain: bool = False,
) -> float:
    """Evidence of the two-component mixture over the full five-axis grid.

    The cells are (mean1, precision1) x (mean2, precision2) x mixing
    coefficient. Each mixing node contributes one vectorised block over all
    component-cell pairs; the blocks are folded into a single sum.

    Args:
        data: Observations.
        grid: Precomputed quantile grid.
        log_domain: Accumulate log-likelihoods and return the log evidence.

    Returns:
        Evidence (or its natural log when log_domain is set).
    """
    data = _check_data(data)
    table = _component_table(data, grid, log_domain)
    n_cells = grid.n_cells * grid.n_cells * len(grid.mixing)

    if log_domain:
        block_logs = [_mixture_block_logsumexp(table, float(c)) for c in grid.mixing]
        return float(logsumexp(block_logs) - math.log(n_cells))

    total = math.fsum(_mixture_block_sum(table, float(c)) for c in grid.mixing)
    evidence = total / n_cells
    _warn_if_underflow(evidence, "Two-component")
    return evidence
