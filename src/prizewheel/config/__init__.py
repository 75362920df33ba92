"""Configuration for PRIZEWHEEL."""

from prizewheel.config.settings import WheelSettings, get_settings
from prizewheel.config.theme import WheelTheme, load_theme

__all__ = ["WheelSettings", "get_settings", "WheelTheme", "load_theme"]
