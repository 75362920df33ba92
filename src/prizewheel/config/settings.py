"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WindowSettings(BaseSettings):
    """Simulator window settings."""

    model_config = SettingsConfigDict(env_prefix="PRIZEWHEEL_WINDOW_", extra="ignore")

    width: int = Field(default=720, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = Field(default=60, gt=0)
    title: str = "Prize Wheel"
    background: str = "#14141e"


class WheelSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PRIZEWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Spin defaults
    min_turns: int = Field(default=5, ge=0)
    max_turns: int = Field(default=8, ge=0)
    duration_ms: int = Field(default=5200, gt=0)

    # Hub
    brand_text: str = "SIENA"
    emblem_path: Optional[Path] = None
    emblem_max_scale: float = Field(default=1.45, gt=0.0)

    # Paths
    font_path: Optional[Path] = None
    theme_path: Optional[Path] = None
    segments_path: Optional[Path] = None

    # Rendering
    pixel_ratio: float = Field(default=1.0, gt=0.0)

    # Nested settings
    window: WindowSettings = Field(default_factory=WindowSettings)

    @model_validator(mode="after")
    def _check_turns(self) -> "WheelSettings":
        if self.min_turns > self.max_turns:
            raise ValueError("min_turns must not exceed max_turns")
        return self


@lru_cache
def get_settings() -> WheelSettings:
    """Get cached settings instance."""
    return WheelSettings()
