"""Configuration management for fitrun."""
from __future__ import annotations

from fitrun.config.paths import FitrunPaths, get_paths, reset_paths
from fitrun.config.settings import Settings, get_settings_path, settings

__all__ = [
    "FitrunPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
