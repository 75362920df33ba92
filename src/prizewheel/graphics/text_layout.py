"""Text layout for wheel labels.

Greedy word wrap against a measured pixel width, ellipsis truncation and
shrink-to-fit font sizing. Measurement is injected as a callable so the
same code runs against Pillow fonts in production and fixed-width fakes in
tests.
"""

from typing import Callable, List
from dataclasses import dataclass, field
import math
import logging

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

# Font size decrement per shrink step, in pixels
FONT_STEP = 2

# Line height relative to font size
LINE_HEIGHT_RATIO = 1.08

# Returns rendered width of a string in pixels
Measure = Callable[[str], float]
MeasureFactory = Callable[[int], Measure]


@dataclass
class LayoutResult:
    """Wrapped lines plus whether they fit without truncation."""
    lines: List[str] = field(default_factory=list)
    fit: bool = True


@dataclass
class FittedLabel:
    """Layout chosen by shrink-to-fit and the font size it was computed at."""
    font_size: int
    layout: LayoutResult

    @property
    def line_height(self) -> int:
        return line_height(self.font_size)


def max_lines_for(segment_count: int) -> int:
    """Line budget per label: narrow wedges get fewer lines."""
    return 3 if segment_count <= 10 else 2


def line_height(font_size: int) -> int:
    return math.floor(font_size * LINE_HEIGHT_RATIO)


def line_offsets(line_count: int, height: int) -> List[float]:
    """Vertical centers of lines in a block centered on y=0."""
    top = -(line_count * height) / 2 + height / 2
    return [top + i * height for i in range(line_count)]


def ellipsize(text: str, max_width: float, measure: Measure) -> str:
    """Trim trailing characters until ``text`` plus an ellipsis fits.

    Trailing whitespace is dropped at every step. Falls back to the bare
    ellipsis when nothing else fits.
    """
    s = text
    while s and measure(s + ELLIPSIS) > max_width:
        s = s[:-1].rstrip()
    return s + ELLIPSIS if s else ELLIPSIS


def wrap_text(text: str, max_width: float, max_lines: int, measure: Measure) -> LayoutResult:
    """Greedy word wrap with a line budget.

    Words are added to the current line while it stays within ``max_width``.
    Once ``max_lines - 1`` lines are closed, the last line takes words until
    the next one does not fit; if words remain, that line is ellipsized and
    the result is marked as not fitting. A word wider than ``max_width``
    gets a line of its own.

    Args:
        text: Label text
        max_width: Available width in pixels
        max_lines: Maximum number of lines (at least 1)
        measure: Width function for the current font

    Returns:
        LayoutResult with at most ``max_lines`` lines
    """
    max_lines = max(1, max_lines)
    words = text.split()
    if not words:
        return LayoutResult(lines=[""], fit=True)

    lines: List[str] = []
    line = ""
    consumed = 0

    while consumed < len(words):
        word = words[consumed]
        candidate = f"{line} {word}" if line else word
        if line and measure(candidate) > max_width:
            if len(lines) >= max_lines - 1:
                break
            lines.append(line)
            candidate = word
        line = candidate
        consumed += 1

    if line:
        lines.append(line)

    if consumed < len(words):
        lines[-1] = ellipsize(lines[-1], max_width, measure)
        return LayoutResult(lines=lines, fit=False)

    return LayoutResult(lines=lines, fit=all(measure(l) <= max_width for l in lines))


def fit_text(
    text: str,
    max_width: float,
    max_lines: int,
    start_size: int,
    min_size: int,
    measure_for: MeasureFactory,
    step: int = FONT_STEP,
) -> FittedLabel:
    """Shrink the font until the wrapped label fits.

    Sizes go from ``start_size`` down to ``min_size`` in ``step`` pixel
    steps. The first fitting size wins; otherwise the smallest size tried is
    used with its (possibly ellipsized) layout.
    """
    sizes = list(range(start_size, min_size - 1, -max(1, step)))
    if not sizes:
        sizes = [max(1, start_size)]

    result = LayoutResult(lines=[text], fit=True)
    size = sizes[0]
    for size in sizes:
        result = wrap_text(text, max_width, max_lines, measure_for(size))
        if result.fit:
            break

    if not result.fit:
        logger.debug(f"Label {text!r} truncated at {size}px")
    return FittedLabel(font_size=size, layout=result)
