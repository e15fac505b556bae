"""Shared fixtures."""

import numpy as np
import pytest

from poolornot.config import Config, PriorConfig
from poolornot.grid import precompute
from poolornot.priors import GaussParams
from poolornot.simulate import generate_one_component
from poolornot.utils import make_rng


@pytest.fixture
def prior_config() -> PriorConfig:
    return PriorConfig()


@pytest.fixture(scope="session")
def grid():
    return precompute(PriorConfig())


@pytest.fixture
def standard_normal_data() -> np.ndarray:
    """40 draws from N(0, 1) with a fixed seed."""
    return generate_one_component(GaussParams(mean=0.0, stddev=1.0), 40, make_rng(0))


@pytest.fixture
def small_config() -> Config:
    """Configuration with a single dataset per model and few Monte Carlo draws."""
    config = Config(seed=7)
    config.experiment.n_datasets = 1
    config.experiment.sample_repeat_num = 2000
    config.experiment.batch_size = 500
    return config
