"""Tests for the prior model."""

import dataclasses

import numpy as np
import pytest

from poolornot.priors import (
    DegeneratePrecisionError,
    GaussParams,
    MixtureParams,
    PriorModel,
    stddev_of_precision,
)
from poolornot.utils import make_rng


class ZeroGammaRng:
    """Generator stand-in whose Gamma draws are all zero."""

    def normal(self, loc, scale, size=None):
        return np.zeros(size) if size is not None else 0.0

    def gamma(self, shape, scale, size=None):
        return np.zeros(size) if size is not None else 0.0


class TestStddevOfPrecision:
    """Tests for precision to stddev conversion."""

    def test_conversion(self):
        """stddev is 1/sqrt(precision)."""
        assert stddev_of_precision(4.0) == pytest.approx(0.5)
        assert stddev_of_precision(0.25) == pytest.approx(2.0)

    def test_zero_precision(self):
        """Zero precision is a fault."""
        with pytest.raises(DegeneratePrecisionError):
            stddev_of_precision(0.0)

    def test_negative_precision(self):
        """Negative precision is a fault."""
        with pytest.raises(ValueError):
            stddev_of_precision(-1.0)


class TestParams:
    """Tests for the parameter types."""

    def test_immutable(self):
        """Parameters cannot be modified after construction."""
        params = GaussParams(mean=0.0, stddev=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.mean = 1.0


class TestPriorModel:
    """Tests for prior sampling."""

    def test_gauss_params_positive_stddev(self, prior_config):
        """Sampled components always have a positive stddev."""
        prior = PriorModel(prior_config, make_rng(1))
        for _ in range(200):
            params = prior.sample_gauss_params()
            assert isinstance(params, GaussParams)
            assert params.stddev > 0
            assert np.isfinite(params.mean)

    def test_mixture_params(self, prior_config):
        """Mixtures have a coefficient in [0, 1] and two components."""
        prior = PriorModel(prior_config, make_rng(2))
        for _ in range(200):
            params = prior.sample_mixture_params()
            assert isinstance(params, MixtureParams)
            assert 0.0 <= params.mix_coef <= 1.0
            assert params.component1.stddev > 0
            assert params.component2.stddev > 0

    def test_deterministic(self, prior_config):
        """Same seed gives the same draws."""
        first = PriorModel(prior_config, make_rng(3)).sample_mixture_params()
        second = PriorModel(prior_config, make_rng(3)).sample_mixture_params()
        assert first == second

    def test_array_moments(self, prior_config):
        """Vectorised draws match the prior moments."""
        prior = PriorModel(prior_config, make_rng(4))
        means, stddevs = prior.sample_gauss_arrays(200_000)

        assert means.shape == stddevs.shape == (200_000,)
        assert np.mean(means) == pytest.approx(0.0, abs=0.05)
        assert np.std(means) == pytest.approx(4.0, abs=0.05)
        # Gamma(shape 0.5, rate 2) has mean 0.25
        assert np.mean(1.0 / stddevs**2) == pytest.approx(0.25, abs=0.01)

    def test_mixing_coefs_symmetric(self, prior_config):
        """Jeffreys Beta draws are centred on 0.5."""
        prior = PriorModel(prior_config, make_rng(5))
        coefs = prior.sample_mixing_coefs(100_000)

        assert np.all((coefs >= 0.0) & (coefs <= 1.0))
        assert np.mean(coefs) == pytest.approx(0.5, abs=0.01)

    def test_degenerate_precision_draw(self, prior_config):
        """A zero precision draw raises instead of giving an infinite stddev."""
        prior = PriorModel(prior_config, ZeroGammaRng())

        with pytest.raises(DegeneratePrecisionError):
            prior.sample_gauss_params()
        with pytest.raises(DegeneratePrecisionError):
            prior.sample_gauss_arrays(10)
