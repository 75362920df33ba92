"""Clip masks for wheel rendering.

Masks are numpy arrays of shape (height, width) with values 0 or 255,
sampled at pixel centers.
"""

from typing import Tuple
import math

import numpy as np
from numpy.typing import NDArray

Mask = NDArray[np.uint8]

TWO_PI = math.pi * 2


def _grid(size: Tuple[int, int], cx: float, cy: float) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    w, h = size
    y_indices, x_indices = np.ogrid[:h, :w]
    return x_indices + 0.5 - cx, y_indices + 0.5 - cy


def circle_mask(size: Tuple[int, int], cx: float, cy: float, radius: float) -> Mask:
    """Filled disc mask."""
    dx, dy = _grid(size, cx, cy)
    inside = dx ** 2 + dy ** 2 <= radius ** 2
    return inside.astype(np.uint8) * 255


def sector_mask(
    size: Tuple[int, int],
    cx: float,
    cy: float,
    radius: float,
    start: float,
    end: float,
) -> Mask:
    """Pie-slice mask from ``start`` to ``end`` radians (clockwise, y down).

    Args:
        size: (width, height) of the mask
        cx, cy: Center of the wheel
        radius: Slice radius
        start: Start angle; any real value
        end: End angle, start < end <= start + 2*pi
    """
    dx, dy = _grid(size, cx, cy)
    span = end - start
    inside = dx ** 2 + dy ** 2 <= radius ** 2
    if span >= TWO_PI:
        return inside.astype(np.uint8) * 255

    angles = np.mod(np.arctan2(dy, dx) - start, TWO_PI)
    inside &= angles < span
    return inside.astype(np.uint8) * 255
