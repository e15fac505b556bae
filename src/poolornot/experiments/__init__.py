"""Experiments module for the model-selection trials."""

from poolornot.experiments.pool_or_not import run_pool_or_not

__all__ = ["run_pool_or_not"]
