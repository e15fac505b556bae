"""Tests for configuration loading."""

from typing import get_args

import pytest
from pydantic import ValidationError

from poolornot.config import (
    Config,
    ExperimentConfig,
    ConfigError,
    default_config,
    expand_env_vars,
    load_config,
)
from poolornot.evidence import METHODS


class TestExpandEnvVars:
    """Tests for environment variable expansion."""

    def test_plain_var(self, monkeypatch):
        monkeypatch.setenv("POOLORNOT_TEST_VAR", "17")
        assert expand_env_vars("${POOLORNOT_TEST_VAR}") == "17"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("POOLORNOT_TEST_VAR", raising=False)
        assert expand_env_vars("${POOLORNOT_TEST_VAR:-5}") == "5"

    def test_unset_without_default(self, monkeypatch):
        monkeypatch.delenv("POOLORNOT_TEST_VAR", raising=False)
        with pytest.raises(ConfigError, match="POOLORNOT_TEST_VAR"):
            expand_env_vars("${POOLORNOT_TEST_VAR}")

    def test_set_to_empty(self, monkeypatch):
        monkeypatch.setenv("POOLORNOT_TEST_VAR", "")
        assert expand_env_vars("${POOLORNOT_TEST_VAR:-5}") == ""

    def test_nested(self, monkeypatch):
        monkeypatch.setenv("POOLORNOT_TEST_VAR", "x")
        value = {"a": ["${POOLORNOT_TEST_VAR}", 1], "b": {"c": "${POOLORNOT_TEST_VAR}"}}
        assert expand_env_vars(value) == {"a": ["x", 1], "b": {"c": "x"}}


class TestDefaults:
    """Tests for the reference configuration."""

    def test_reference_values(self):
        config = Config()

        assert config.prior.mean_mean == 0.0
        assert config.prior.mean_stddev == 4.0
        assert config.prior.precision_shape == 0.5
        assert config.prior.precision_rate == 2.0
        assert config.prior.mixing_concentration == 0.5
        assert (config.grid.n_mean, config.grid.n_precision, config.grid.n_mixing) == (20, 10, 40)
        assert config.experiment.n_datasets == 10
        assert config.experiment.data_n == 40
        assert config.experiment.sample_repeat_num == 2_000_000
        assert config.experiment.log_domain is False

    def test_methods_match_estimators(self):
        """Every configurable method has an estimator and vice versa."""
        annotation = ExperimentConfig.model_fields["methods"].annotation
        (literal,) = get_args(annotation)
        assert get_args(literal) == METHODS
        assert tuple(Config().experiment.methods) == METHODS

    def test_seed_from_environment(self, monkeypatch):
        monkeypatch.setenv("POOLORNOT_SEED", "123")
        assert default_config().seed == 123

    def test_seed_without_environment(self, monkeypatch):
        monkeypatch.delenv("POOLORNOT_SEED", raising=False)
        assert default_config().seed == 0

    def test_invalid_seed(self, monkeypatch):
        monkeypatch.setenv("POOLORNOT_SEED", "abc")
        with pytest.raises(ValueError):
            default_config()


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load(self, tmp_path, monkeypatch):
        monkeypatch.setenv("POOLORNOT_SEED", "99")
        path = tmp_path / "config.yaml"
        path.write_text(
            "seed: ${POOLORNOT_SEED:-0}\n"
            "grid:\n"
            "  n_mean: 5\n"
            "experiment:\n"
            "  n_datasets: 3\n"
            "  methods: [quadrature]\n"
        )
        config = load_config(path)

        assert config.seed == 99
        assert config.grid.n_mean == 5
        assert config.grid.n_precision == 10
        assert config.experiment.n_datasets == 3
        assert config.experiment.methods == ["quadrature"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).experiment.n_datasets == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("grid:\n  n_mean: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_unknown_method(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("experiment:\n  methods: [bogus]\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- seed\n- 3\n")
        with pytest.raises(ConfigError, match="list.yaml.*mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("grid: [n_mean\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_unset_variable(self, tmp_path, monkeypatch):
        """Unset variables without a default name the file and the variable."""
        monkeypatch.delenv("POOLORNOT_SEED", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("seed: ${POOLORNOT_SEED}\n")
        with pytest.raises(ConfigError, match=r"config.yaml.*POOLORNOT_SEED"):
            load_config(path)
