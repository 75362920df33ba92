"""Spin animator - frame-driven interpolation of the wheel rotation.

IDLE -> SPINNING -> IDLE. One spin at a time; a spin always runs to the
end of its duration.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from prizewheel.core.state import SpinPhase, StopListener, WheelState
from prizewheel.animation.easing import Easing, EasingFunc, get_easing, clamp01
from prizewheel.animation.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


@dataclass
class ActiveSpin:
    """Bookkeeping for the running spin."""
    start_rotation: float
    final_rotation: float
    start_time: float
    duration_ms: float
    selected_index: int

    def progress(self, now_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return clamp01((now_ms - self.start_time) / self.duration_ms)


class SpinAnimator:
    """
    Drives ``WheelState.rotation`` from a start to a final angle.

    Each frame sets ``rotation = start + (final - start) * ease(t)`` and calls
    ``on_frame`` so the owner can redraw. On the last frame the rotation is
    snapped to the final value and completion listeners are notified.
    """

    def __init__(
        self,
        state: WheelState,
        scheduler: FrameScheduler,
        on_frame: Callable[[], None],
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
        on_stopped: Optional[StopListener] = None,
    ) -> None:
        self._state = state
        self._scheduler = scheduler
        self._on_frame = on_frame
        self._ease: EasingFunc = get_easing(easing)
        self.on_stopped = on_stopped
        self._active: Optional[ActiveSpin] = None

    @property
    def active(self) -> Optional[ActiveSpin]:
        return self._active

    def start(self, final_rotation: float, duration_ms: float, selected_index: int) -> bool:
        """Begin a spin. Returns False if one is already running."""
        if not self._state.transition(SpinPhase.SPINNING):
            return False

        self._active = ActiveSpin(
            start_rotation=self._state.rotation,
            final_rotation=final_rotation,
            start_time=self._scheduler.now(),
            duration_ms=duration_ms,
            selected_index=selected_index,
        )
        logger.info(
            f"Spin started: index={selected_index} "
            f"from={self._state.rotation:.3f} to={final_rotation:.3f} "
            f"duration={duration_ms}ms"
        )
        self._scheduler.request_frame(self._tick)
        return True

    def _tick(self, now_ms: float) -> None:
        spin = self._active
        if spin is None:
            return

        t = spin.progress(now_ms)
        delta = spin.final_rotation - spin.start_rotation
        self._state.rotation = spin.start_rotation + delta * self._ease(t)

        if t < 1:
            self._on_frame()
            self._scheduler.request_frame(self._tick)
            return

        # Snap to avoid floating point residue
        self._state.rotation = spin.final_rotation
        self._active = None
        self._state.transition(SpinPhase.IDLE)
        self._on_frame()

        segments = self._state.segments
        idx = spin.selected_index
        selected = segments[idx] if 0 <= idx < len(segments) else None
        logger.info(f"Spin finished: index={idx} rotation={self._state.rotation:.3f}")
        self._notify(selected)

    def _notify(self, selected: Any) -> None:
        """Run one-shot listeners, then the persistent one, isolating errors."""
        for listener in self._state.drain_once_listeners():
            self._call_listener(listener, selected)

        if self.on_stopped is not None:
            self._call_listener(self.on_stopped, selected)

    @staticmethod
    def _call_listener(listener: StopListener, selected: Any) -> None:
        try:
            listener(selected)
        except Exception:
            logger.exception(f"Error in stop listener {listener!r}")
