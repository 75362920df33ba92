"""Easing functions for the spin animation.

All functions take a normalized time t (0.0 to 1.0) and return a normalized value.
"""

from enum import Enum, auto
from typing import Callable


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()
    EASE_OUT_CUBIC = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Constant speed."""
    return t


def ease_out_cubic(t: float) -> float:
    """Fast start, smooth stop. Default for wheel spins."""
    return 1 - pow(1 - t, 3)


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
}

_EASING_BY_NAME: dict[str, Easing] = {e.name.lower(): e for e in Easing}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    return _EASING_FUNCTIONS[easing]


def clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values, clamping progress to [0, 1]."""
    eased_t = get_easing(easing)(clamp01(t))
    return start + (end - start) * eased_t
