"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings defaults    - harvester/config/settings.py
#   2. config/config.yaml   - static defaults checked into the repo
#   3. .env file / env vars - HARVESTER_* values actually set
#   4. CLI flags            - passed to build_settings() as overrides
#
# Only environment values that were explicitly provided override the YAML;
# a Settings default never masks a YAML value.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml

from harvester.config.settings import Settings
from harvester.utils.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "config/config.yaml"


def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load YAML config and merge explicitly set environment values on top.

    Args:
        path: Path to the YAML configuration file.  A missing file yields
              an empty base configuration.

    Returns:
        Configuration dictionary with a ``harvester`` section holding
        :class:`Settings` field values.

    Raises:
        ConfigurationError: If the file exists but is not valid YAML.
    """
    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(message=f"Invalid YAML in {config_path}: {exc}") from exc
    else:
        yaml_config = {}

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(message=f"{config_path} must contain a mapping")

    env_settings = Settings()
    env_overrides = {"harvester": env_settings.model_dump(exclude_unset=True)}

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def build_settings(config: dict, **overrides: Any) -> Settings:
    """Build :class:`Settings` from a loaded config plus CLI overrides.

    ``None`` overrides are ignored so unset CLI flags keep lower layers.
    """
    values: dict[str, Any] = dict(config.get("harvester") or {})
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return Settings(**values)
    except ValueError as exc:
        raise ConfigurationError(message=f"Invalid configuration: {exc}") from exc


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
