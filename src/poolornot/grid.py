"""Precomputed quantile grids for the quadrature estimator.

Each prior is discretised at evenly spaced probability levels through its
inverse CDF, so every grid node carries equal prior mass and a plain
average over nodes approximates the integral over the prior.
"""

import logging
from dataclasses import dataclass, replace

import numpy as np
from scipy import stats

from poolornot.config import GridConfig, PriorConfig

logger = logging.getLogger(__name__)


def _read_only(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=float)
    values.setflags(write=False)
    return values


@dataclass(frozen=True)
class QuantileGrid:
    """Inverse-CDF values of the three priors.

    Attributes:
        means: Candidate component means (Gaussian prior).
        precisions: Candidate precisions (Gamma prior), starting at the
            lower bound 0.
        mixing: Candidate mixing coefficients in [0, 0.5) (Beta prior).
    """

    means: np.ndarray
    precisions: np.ndarray
    mixing: np.ndarray

    @property
    def stddevs(self) -> np.ndarray:
        """Precision nodes as standard deviations.

        The zero-precision node maps to an infinite stddev, whose density is
        zero everywhere.
        """
        with np.errstate(divide="ignore"):
            return 1.0 / np.sqrt(self.precisions)

    @property
    def n_cells(self) -> int:
        """Number of (mean, precision) cells for one component."""
        return len(self.means) * len(self.precisions)

    def component_cells(self) -> tuple[np.ndarray, np.ndarray]:
        """Cartesian product of mean and stddev nodes, mean-major.

        Returns:
            Tuple of (means, stddevs), each of length n_cells.
        """
        mean_grid, stddev_grid = np.meshgrid(self.means, self.stddevs, indexing="ij")
        return mean_grid.ravel(), stddev_grid.ravel()

    def with_full_mixing(self) -> "QuantileGrid":
        """Return a copy whose mixing axis covers [0, 1].

        The upper half mirrors the lower one: node i of the upper half is
        1 - mixing[N-1-i].
        """
        upper = 1.0 - self.mixing[::-1]
        return replace(self, mixing=_read_only(np.concatenate([self.mixing, upper])))


def precompute(prior: PriorConfig, grid: GridConfig | None = None) -> QuantileGrid:
    """Tabulate the prior inverse CDFs.

    Depends only on the hyperparameters, so repeated calls give identical
    grids.

    Args:
        prior: Prior hyperparameters.
        grid: Grid resolution (defaults to 20/10/40).

    Returns:
        QuantileGrid with read-only arrays.
    """
    if grid is None:
        grid = GridConfig()

    # Normal support is unbounded: use levels 1/(n+1) ... n/(n+1)
    n = grid.n_mean
    levels = np.arange(1, n + 1) / (n + 1)
    means = stats.norm.ppf(levels, loc=prior.mean_mean, scale=prior.mean_stddev)

    n = grid.n_precision
    levels = np.arange(n) / n
    precisions = stats.gamma.ppf(
        levels,
        prior.precision_shape,
        scale=1.0 / prior.precision_rate,
    )

    # Symmetric Beta: only p < 0.5 is needed, p > 0.5 is the same mixture
    # with the components swapped.
    n = grid.n_mixing
    levels = 0.5 * np.arange(n) / n
    c = prior.mixing_concentration
    mixing = stats.beta.ppf(levels, c, c)

    logger.debug(
        "Precomputed quantile grids: %d means, %d precisions, %d mixing coefficients",
        len(means),
        len(precisions),
        len(mixing),
    )

    return QuantileGrid(
        means=_read_only(means),
        precisions=_read_only(precisions),
        mixing=_read_only(mixing),
    )
