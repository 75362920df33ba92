"""Rotation and targeting math for the prize wheel.

Angles are radians in screen space (y axis pointing down), so a positive
rotation turns the wheel clockwise and the pointer at the top sits at -pi/2.
"""

import math
import random
from typing import Optional

TWO_PI = math.pi * 2

# Pointer position ("up")
POINTER_ANGLE = -math.pi / 2


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    x = math.fmod(angle, TWO_PI)
    if x < 0:
        x += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2*pi
    if x >= TWO_PI:
        x -= TWO_PI
    return x


def slice_angle(count: int) -> float:
    """Angular width of one wedge."""
    return TWO_PI / count


def segment_center(index: int, count: int) -> float:
    """Angle of a wedge's center in the unrotated wheel."""
    return (index + 0.5) * slice_angle(count)


def base_target_angle(index: int, count: int, pointer_angle: float = POINTER_ANGLE) -> float:
    """Rotation in [0, 2*pi) that puts the wedge center under the pointer."""
    return normalize_angle(pointer_angle - segment_center(index, count))


def sample_turns(min_turns: int, max_turns: int, rng: Optional[random.Random] = None) -> int:
    """Pick a whole number of extra revolutions in [min_turns, max_turns].

    A reversed range is treated as the range between the two values.
    Negative bounds count as zero turns.
    """
    lo = max(0, math.ceil(min(min_turns, max_turns)))
    hi = max(0, math.floor(max(min_turns, max_turns)))
    if hi < lo:
        hi = lo
    return (rng or random).randint(lo, hi)


def final_rotation(
    current: float,
    index: int,
    count: int,
    turns: int,
    pointer_angle: float = POINTER_ANGLE,
) -> float:
    """Compute where a spin to ``index`` must stop.

    The result keeps the revolution base of ``current`` so the wheel only
    ever moves forward, and is always strictly greater than ``current``.

    Args:
        current: Rotation at spin start
        index: Target segment index
        count: Number of segments
        turns: Extra full revolutions
        pointer_angle: Fixed pointer angle

    Returns:
        Final rotation in radians
    """
    target = base_target_angle(index, count, pointer_angle) + turns * TWO_PI
    target += current - normalize_angle(current)
    while target <= current:
        target += TWO_PI
    return target


def segment_under_pointer(rotation: float, count: int, pointer_angle: float = POINTER_ANGLE) -> int:
    """Index of the wedge the pointer currently points at."""
    local = normalize_angle(pointer_angle - rotation)
    return min(count - 1, int(local / slice_angle(count)))
