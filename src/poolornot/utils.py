"""Utility functions for the pool-or-not experiments."""

from typing import Iterator

import numpy as np
from dotenv import load_dotenv


def setup_environment() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def make_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """Create the random generator threaded through an experiment.

    Generators are not safe to share between threads; give each thread
    its own, e.g. via ``np.random.SeedSequence(seed).spawn(n)``.

    Args:
        seed: Seed value or sequence (fresh OS entropy if None).

    Returns:
        A numpy Generator.
    """
    return np.random.default_rng(seed)


def iter_batches(total: int, batch_size: int) -> Iterator[int]:
    """Yield batch sizes that add up to total.

    Args:
        total: Number of items to cover.
        batch_size: Largest batch to yield.

    Returns:
        Iterator over batch sizes; all but the last equal batch_size.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    remaining = total
    while remaining > 0:
        size = min(batch_size, remaining)
        yield size
        remaining -= size
