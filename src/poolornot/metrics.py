"""Dataset summaries and model-selection accuracy statistics."""

import numpy as np
from scipy import stats


def sample_mean(data: np.ndarray) -> float:
    """Compute the mean of a dataset.

    Args:
        data: Observations.

    Returns:
        Sample mean (0.0 for an empty dataset).
    """
    if len(data) == 0:
        return 0.0
    return float(np.mean(data))


def sample_variance(data: np.ndarray) -> float:
    """Compute the population variance of a dataset (divides by n).

    Args:
        data: Observations.

    Returns:
        Variance of the data (0.0 for an empty dataset).
    """
    if len(data) == 0:
        return 0.0
    return float(np.var(data))


def compute_accuracy(correct: int, total: int) -> float:
    """Fraction of trials with the correct model selected.

    Args:
        correct: Number of correct selections.
        total: Number of trials.

    Returns:
        Accuracy in [0, 1] (0.0 when there are no trials).
    """
    if total == 0:
        return 0.0
    return correct / total


def compute_stderr_accuracy(correct: int, total: int) -> float:
    """Binomial standard error of the accuracy.

    Args:
        correct: Number of correct selections.
        total: Number of trials.

    Returns:
        Standard error (0.0 with fewer than two trials).
    """
    if total < 2:
        return 0.0
    p = correct / total
    return float(np.sqrt(p * (1.0 - p) / total))


def compute_accuracy_interval(
    correct: int,
    total: int,
    confidence: float = 0.95,
) -> tuple[float, float]:
    """Clopper-Pearson confidence interval for the accuracy.

    Args:
        correct: Number of correct selections.
        total: Number of trials.
        confidence: Coverage of the interval.

    Returns:
        Tuple of (lower, upper) bounds; (0.0, 1.0) when there are no trials.
    """
    if total == 0:
        return 0.0, 1.0

    alpha = 1.0 - confidence
    lower = 0.0 if correct == 0 else stats.beta.ppf(alpha / 2, correct, total - correct + 1)
    upper = 1.0 if correct == total else stats.beta.ppf(1 - alpha / 2, correct + 1, total - correct)
    return float(lower), float(upper)
