"""
Wheel theme and theme loading utilities.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

RGBA = tuple[int, int, int, int]


def parse_color(value: str) -> RGBA:
    """Convert ``#RRGGBB`` or ``#RRGGBBAA`` to an RGBA tuple.

    Raises:
        ValueError: If the string is not a hex color
    """
    hex_color = value.strip().lstrip("#")
    if len(hex_color) not in (6, 8):
        raise ValueError(f"Invalid color: {value!r}")
    try:
        channels = [int(hex_color[i:i + 2], 16) for i in range(0, len(hex_color), 2)]
    except ValueError:
        raise ValueError(f"Invalid color: {value!r}") from None
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)


@dataclass
class WheelColors:
    """Wheel color palette. Wedges alternate even/odd by index."""
    even_fill: str = "#fcc917"
    even_text: str = "#006b55"
    odd_fill: str = "#006b54"
    odd_text: str = "#fcc917"
    divider: str = "#ffffff38"
    outer_ring: str = "#fffffff2"
    inner_ring: str = "#0000002e"
    hub: str = "#1b4932"
    hub_outline: str = "#ffffffe6"
    brand_text: str = "#fffffff2"
    text_shadow: str = "#00000047"
    empty_fill: str = "#ffffff1a"
    empty_outline: str = "#ffffffe6"
    empty_text: str = "#fffffff2"
    pointer: str = "#ffffff"

    def rgba(self, color_name: str) -> RGBA:
        """Get a palette entry as RGBA."""
        return parse_color(getattr(self, color_name))

    def wedge(self, index: int) -> tuple[RGBA, RGBA]:
        """(fill, text) colors for a wedge."""
        if index % 2 == 0:
            return self.rgba("even_fill"), self.rgba("even_text")
        return self.rgba("odd_fill"), self.rgba("odd_text")


@dataclass
class WheelTheme:
    """Complete wheel theme."""
    name: str = "siena"
    colors: WheelColors = field(default_factory=WheelColors)
    empty_message: str = "Waiting for operator..."

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "WheelTheme":
        """Create theme from YAML data.

        Raises:
            ValueError: On unknown or malformed color entries
        """
        theme = cls(
            name=data.get("name", "siena"),
            empty_message=data.get("empty_message", cls.empty_message),
        )

        if "colors" in data:
            known = {f.name for f in fields(WheelColors)}
            unknown = set(data["colors"]) - known
            if unknown:
                raise ValueError(f"Unknown theme colors: {sorted(unknown)}")
            theme.colors = WheelColors(**data["colors"])
            for name in known:
                theme.colors.rgba(name)

        return theme


def load_theme(path: Path | str | None = None) -> WheelTheme:
    """
    Load a theme from a YAML file.

    Args:
        path: Theme file; the built-in theme is returned when None

    Returns:
        WheelTheme instance
    """
    if path is None:
        return WheelTheme()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Theme file {path} must contain a mapping")
    return WheelTheme.from_yaml(data)
