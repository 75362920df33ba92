"""Graphics module for PRIZEWHEEL rendering."""

from prizewheel.graphics.renderer import WheelRenderer, WheelGeometry
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.graphics.emblem import AssetState, EmblemAsset
from prizewheel.graphics.text_layout import LayoutResult, fit_text, wrap_text

__all__ = [
    "WheelRenderer",
    "WheelGeometry",
    "DrawingSurface",
    "AssetState",
    "EmblemAsset",
    "LayoutResult",
    "fit_text",
    "wrap_text",
]
