"""Animation module for PRIZEWHEEL."""

from prizewheel.animation.easing import Easing, get_easing, interpolate
from prizewheel.animation.scheduler import FrameScheduler, ManualFrameScheduler
from prizewheel.animation.spin import SpinAnimator

__all__ = [
    # Easing
    "Easing",
    "get_easing",
    "interpolate",
    # Scheduling
    "FrameScheduler",
    "ManualFrameScheduler",
    # Spin
    "SpinAnimator",
]
