"""PRIZEWHEEL - operator-controlled prize wheel for live quiz shows."""

from prizewheel.core.state import SegmentEntry
from prizewheel.graphics.emblem import AssetState
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.wheel.component import PrizeWheel, WheelOptions

__version__ = "0.1.0"

__all__ = [
    "PrizeWheel",
    "WheelOptions",
    "SegmentEntry",
    "DrawingSurface",
    "AssetState",
]
