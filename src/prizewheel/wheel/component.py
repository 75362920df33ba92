"""Prize wheel component.

Binds wheel state, the spin animator, the renderer and the emblem asset to
one drawing surface. Every public operation is safe to call at any time:
requests that cannot be honored are ignored, never raised.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional
import logging
import math
import numbers
import random

from prizewheel.animation.scheduler import FrameScheduler, ManualFrameScheduler
from prizewheel.animation.spin import SpinAnimator
from prizewheel.config.settings import WheelSettings
from prizewheel.config.theme import WheelTheme
from prizewheel.core.state import SpinRequest, StopListener, WheelState
from prizewheel.graphics.emblem import AssetState, EmblemAsset
from prizewheel.graphics.fonts import FontSet
from prizewheel.graphics.renderer import DEFAULT_EMBLEM_MAX_SCALE, WheelRenderer
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.wheel import targeting

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    """Finite real number, bools excluded."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass
class WheelOptions:
    """Per-instance wheel options."""
    emblem_source: Optional[str | Path] = None
    brand_fallback_text: str = "SIENA"
    on_stopped: Optional[StopListener] = None
    emblem_max_scale: float = DEFAULT_EMBLEM_MAX_SCALE


class PrizeWheel:
    """
    Spinning prize wheel bound to one drawing surface.

    Usage:
        wheel = PrizeWheel(surface, WheelOptions(on_stopped=print), scheduler=scheduler)
        wheel.set_segments([SegmentEntry("Question one"), SegmentEntry("Question two")])
        wheel.request_spin(1)
    """

    def __init__(
        self,
        surface: DrawingSurface,
        options: Optional[WheelOptions] = None,
        *,
        scheduler: Optional[FrameScheduler] = None,
        settings: Optional[WheelSettings] = None,
        theme: Optional[WheelTheme] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.options = options or WheelOptions()
        self.surface = surface
        self.scheduler = scheduler or ManualFrameScheduler()
        self._settings = settings
        self._rng = rng or random.Random()

        self._state = WheelState()
        self._animator = SpinAnimator(
            self._state,
            self.scheduler,
            on_frame=self.redraw,
            on_stopped=self.options.on_stopped,
        )

        font_path = settings.font_path if settings is not None else None
        self._renderer = WheelRenderer(
            theme=theme,
            fonts=FontSet(font_path),
            emblem_max_scale=self.options.emblem_max_scale,
        )

        self._emblem = EmblemAsset(self.scheduler, on_change=lambda _state: self.redraw())
        if self.options.emblem_source:
            self._emblem.request(self.options.emblem_source)

        self.surface.sync_size()
        self.redraw()
        logger.info(f"PrizeWheel created ({self.surface.width}x{self.surface.height})")

    # --- State -------------------------------------------------------------

    @property
    def state(self) -> WheelState:
        return self._state

    @property
    def rotation(self) -> float:
        return self._state.rotation

    @property
    def is_spinning(self) -> bool:
        return self._state.spinning

    @property
    def segments(self) -> list[Any]:
        """Shallow copy of the current entries."""
        return list(self._state.segments)

    @property
    def emblem(self) -> EmblemAsset:
        return self._emblem

    @property
    def asset_state(self) -> AssetState:
        return self._emblem.state

    @property
    def renderer(self) -> WheelRenderer:
        return self._renderer

    # --- Operations --------------------------------------------------------

    def set_segments(self, entries: Optional[Iterable[Any]]) -> None:
        """Replace the wheel entries. Anything that is not iterable clears it."""
        if entries is None or isinstance(entries, (str, bytes)):
            items: list[Any] = []
        else:
            try:
                items = list(entries)
            except TypeError:
                items = []

        self._state.segments = items
        self._renderer.invalidate()
        logger.info(f"Segments set: {len(items)}")
        self.redraw()

    def subscribe_once(self, callback: Callable[[Any], None]) -> None:
        """Call ``callback(selected)`` once, when the next spin stops."""
        if callable(callback):
            self._state.once_listeners.append(callback)

    def request_spin(
        self,
        index: int,
        *,
        min_turns: Optional[int] = None,
        max_turns: Optional[int] = None,
        duration_ms: Optional[float] = None,
    ) -> bool:
        """Spin so that segment ``index`` stops under the pointer.

        Ignored while spinning, with no segments, for an index out of
        range, or when an option is not a finite number. Negative turn
        counts are treated as zero.

        Returns:
            True if a spin started
        """
        request = self._spin_request(index, min_turns, max_turns, duration_ms)

        if self._state.spinning:
            logger.debug("Spin ignored: already spinning")
            return False
        count = self._state.segment_count
        if count == 0:
            logger.debug("Spin ignored: no segments")
            return False
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < count:
            logger.debug(f"Spin ignored: index {index!r} out of range for {count} segments")
            return False
        options = (request.min_turns, request.max_turns, request.duration_ms)
        if not all(_is_number(value) for value in options):
            logger.debug(f"Spin ignored: invalid options {options!r}")
            return False

        turns = targeting.sample_turns(request.min_turns, request.max_turns, self._rng)
        final = targeting.final_rotation(self._state.rotation, index, count, turns)
        return self._animator.start(final, request.duration_ms, index)

    def _spin_request(
        self,
        index: int,
        min_turns: Optional[int],
        max_turns: Optional[int],
        duration_ms: Optional[float],
    ) -> SpinRequest:
        """Fill missing spin options from settings or built-in defaults."""
        defaults = SpinRequest(index=index)
        if self._settings is not None:
            defaults = SpinRequest(
                index=index,
                min_turns=self._settings.min_turns,
                max_turns=self._settings.max_turns,
                duration_ms=self._settings.duration_ms,
            )
        return SpinRequest(
            index=index,
            min_turns=defaults.min_turns if min_turns is None else min_turns,
            max_turns=defaults.max_turns if max_turns is None else max_turns,
            duration_ms=defaults.duration_ms if duration_ms is None else duration_ms,
        )

    # --- Surface -----------------------------------------------------------

    def resize(self, width: float, height: float, pixel_ratio: Optional[float] = None) -> None:
        """Displayed size changed: resync the backing store and redraw."""
        self.surface.set_displayed_size(width, height, pixel_ratio)
        self.surface.sync_size()
        self.redraw()

    def redraw(self) -> None:
        """Full redraw of the current state."""
        self._renderer.render(
            self.surface,
            self._state.segments,
            self._state.rotation,
            emblem=self._emblem.image,
            brand_text=self.options.brand_fallback_text,
        )
