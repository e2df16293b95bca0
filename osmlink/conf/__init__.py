"""Configuration for track link resolution and export."""

from .settings import Settings, settings, override_settings
from .export_config import DEFAULT_CONFIG, load_export_config

__all__ = [
    "Settings",
    "settings",
    "override_settings",
    "DEFAULT_CONFIG",
    "load_export_config",
]
