"""Configuration loading and management."""

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

SEED_ENV_VAR = "POOLORNOT_SEED"


class PriorConfig(BaseModel):
    """Hyperparameters of the priors over component parameters."""

    mean_mean: float = 0.0
    mean_stddev: float = Field(default=4.0, gt=0)
    precision_shape: float = Field(default=0.5, gt=0)
    precision_rate: float = Field(default=2.0, gt=0)
    # Symmetric Beta(c, c); 0.5 is the Jeffreys prior.
    mixing_concentration: float = Field(default=0.5, gt=0)


class GridConfig(BaseModel):
    """Resolution of the quantile grids used by the quadrature estimator."""

    n_mean: int = Field(default=20, ge=1)
    n_precision: int = Field(default=10, ge=1)
    n_mixing: int = Field(default=40, ge=1)


class ExperimentConfig(BaseModel):
    """Configuration for the repeated model-selection trials."""

    n_datasets: int = Field(default=10, ge=1)
    data_n: int = Field(default=40, ge=1)
    sample_repeat_num: int = Field(default=2_000_000, ge=1)
    batch_size: int = Field(default=50_000, ge=1)
    # Same names as poolornot.evidence.METHODS
    methods: list[Literal["sampling", "quadrature"]] = Field(
        default_factory=lambda: ["sampling", "quadrature"]
    )
    log_domain: bool = False


class Config(BaseModel):
    """Main configuration model."""

    prior: PriorConfig = Field(default_factory=PriorConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    experiment: ExperimentConfig = Field(default_factory=ExperimentConfig)
    seed: int = 0


class ConfigError(ValueError):
    """A configuration file that cannot be turned into a Config."""


# ${VAR} or ${VAR:-default}
_ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def expand_env_vars(value: Any) -> Any:
    """Substitute environment variables into raw YAML values.

    Strings may reference ``${VAR}`` or ``${VAR:-default}``; the reference
    config uses ``seed: ${POOLORNOT_SEED:-0}``. Dicts and lists are walked
    recursively, other scalars pass through. The result is validated by
    pydantic afterwards, so "17" for an int field is fine.

    Raises:
        ConfigError: If a variable without a default is unset.
    """
    if isinstance(value, str):
        def substitute(match: re.Match) -> str:
            name, default = match.group(1), match.group(2)
            if name in os.environ:
                return os.environ[name]
            if default is None:
                raise ConfigError(f"${{{name}}} is not set and has no default")
            return default

        return _ENV_REFERENCE.sub(substitute, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def default_config() -> Config:
    """Build the default configuration, seeded from the environment.

    The seed is read from $POOLORNOT_SEED when set, otherwise it is 0.

    Raises:
        ValueError: If $POOLORNOT_SEED is not an integer.
    """
    seed = os.environ.get(SEED_ENV_VAR)
    if seed is None or not seed.strip():
        return Config()
    return Config(seed=seed)


def load_config(config_path: str | Path) -> Config:
    """Read a run configuration from YAML.

    Top-level keys are ``prior``, ``grid``, ``experiment`` and ``seed``;
    any of them may be omitted and an empty file gives the defaults.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Validated Config.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not a YAML mapping or references an
            unset environment variable.
        pydantic.ValidationError: If a value is out of range or unknown.
    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{config_path}: invalid YAML: {e}") from e

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            f"{config_path}: expected a mapping of sections, got {type(raw_config).__name__}"
        )

    try:
        expanded_config = expand_env_vars(raw_config)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    return Config(**expanded_config)
