"""
Pool or not: Bayesian model selection between one and two Gaussian components.

This package estimates the evidence of a single-Gaussian ("pooled") model and a
two-component mixture ("differ") model by grid quadrature and by Monte Carlo
sampling from the priors, and measures how often each estimate recovers the
model that generated synthetic data.
"""

__version__ = "0.1.0"
