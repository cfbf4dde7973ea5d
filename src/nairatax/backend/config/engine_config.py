"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    CurrencyConfig,
    EngineConfiguration,
    ExpenseCategory,
    HistoryConfig,
    OverrideConfig,
    PensionConfig,
    ReliefConfig,
    SpecializedRate,
    TaxBand,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULT_CONFIG_FILE = CONFIG_DIRECTORY / "paye.yaml"
CONFIG_PATH_ENV = "NAIRATAX_CONFIG"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_config_path() -> Path:
    """Return the configuration file, honouring the ``NAIRATAX_CONFIG`` override."""

    override = os.getenv(CONFIG_PATH_ENV)
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return DEFAULT_CONFIG_FILE


def load_configuration_file(path: Path) -> EngineConfiguration:
    """Parse and validate the configuration stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Configuration file missing: {path}")

    raw_config = _load_yaml(path)

    try:
        return EngineConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(
            f"Configuration validation failed for {path.name}: {error}"
        ) from error


@lru_cache(maxsize=1)
def load_engine_configuration() -> EngineConfiguration:
    """Load and cache the engine configuration from disk."""

    return load_configuration_file(resolve_config_path())


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_PATH_ENV",
    "ConfigurationError",
    "CurrencyConfig",
    "DEFAULT_CONFIG_FILE",
    "EngineConfiguration",
    "ExpenseCategory",
    "HistoryConfig",
    "OverrideConfig",
    "PensionConfig",
    "ReliefConfig",
    "SpecializedRate",
    "TaxBand",
    "load_configuration_file",
    "load_engine_configuration",
    "resolve_config_path",
]
