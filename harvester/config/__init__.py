"""Configuration module - exports Settings and the YAML loader helpers."""

from harvester.config.loader import build_settings, load_config
from harvester.config.settings import Settings

__all__ = ["Settings", "build_settings", "load_config"]
