"""Drawing surface for the wheel.

A square RGBA Pillow image whose backing pixel size follows the size it is
displayed at and the device pixel density.
"""

from typing import Optional, Tuple
import math
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image

logger = logging.getLogger(__name__)

# Backing size before the first successful sync (HTML canvas default)
DEFAULT_BACKING_SIZE = (300, 150)


def backing_size(displayed_width: float, displayed_height: float, pixel_ratio: float) -> int:
    """Side of the square backing store for a displayed size."""
    ratio = pixel_ratio if pixel_ratio and pixel_ratio > 0 else 1.0
    return math.floor(min(displayed_width, displayed_height) * ratio)


class DrawingSurface:
    """
    Pillow-backed drawing surface with a displayed size.

    Attributes:
        displayed_width, displayed_height: Size the surface is shown at
        pixel_ratio: Device pixels per displayed pixel
        image: RGBA backing image
    """

    def __init__(
        self,
        displayed_width: float,
        displayed_height: float,
        pixel_ratio: float = 1.0,
    ) -> None:
        self.displayed_width = displayed_width
        self.displayed_height = displayed_height
        self.pixel_ratio = pixel_ratio
        self.image: Image.Image = Image.new("RGBA", DEFAULT_BACKING_SIZE, (0, 0, 0, 0))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def set_displayed_size(
        self,
        width: float,
        height: float,
        pixel_ratio: Optional[float] = None,
    ) -> None:
        """Record a new displayed size (and optionally pixel density)."""
        self.displayed_width = width
        self.displayed_height = height
        if pixel_ratio is not None:
            self.pixel_ratio = pixel_ratio

    def sync_size(self) -> bool:
        """Resize the backing image to match the displayed size.

        The surface is kept square. A zero size (hidden surface) leaves the
        current image untouched.

        Returns:
            True if the backing image was reallocated
        """
        side = backing_size(self.displayed_width, self.displayed_height, self.pixel_ratio)
        if side <= 0:
            logger.debug("Surface has no displayed size, keeping backing image")
            return False
        if self.image.size == (side, side):
            return False
        self.image = Image.new("RGBA", (side, side), (0, 0, 0, 0))
        logger.debug(f"Surface resized to {side}x{side}")
        return True

    def clear(self) -> None:
        """Reset every pixel to transparent."""
        self.image.paste((0, 0, 0, 0), (0, 0, self.width, self.height))

    def get_buffer(self) -> NDArray[np.uint8]:
        """Copy of the pixels, shape (height, width, 4)."""
        return np.array(self.image, dtype=np.uint8)
