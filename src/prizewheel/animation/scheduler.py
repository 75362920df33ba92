"""Frame scheduling for wheel animations.

The wheel never owns a loop. It asks a scheduler for "the next frame" and
gets called back with the frame timestamp in milliseconds.
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Abstract frame source, one callback queue per frame."""

    def __init__(self) -> None:
        self._pending: List[FrameCallback] = []

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in milliseconds."""
        ...

    def request_frame(self, callback: FrameCallback) -> None:
        """Queue a callback for the next frame."""
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def dispatch(self, now_ms: float) -> int:
        """Run callbacks queued before this frame.

        Callbacks queued while dispatching wait for the following frame.

        Returns:
            Number of callbacks run
        """
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(now_ms)
        return len(callbacks)


class ManualFrameScheduler(FrameScheduler):
    """Scheduler driven by explicit time steps (tests, headless rendering)."""

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._time = start_ms
        self.frames = 0

    def now(self) -> float:
        return self._time

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward and run one frame."""
        self._time += delta_ms
        self.frames += 1
        return self.dispatch(self._time)

    def run_until_idle(self, step_ms: float = 1000 / 60, max_frames: int = 100_000) -> int:
        """Pump frames until nothing is queued.

        Returns:
            Number of frames run
        """
        count = 0
        while self._pending and count < max_frames:
            self.advance(step_ms)
            count += 1
        if self._pending:
            logger.warning(f"Scheduler still busy after {max_frames} frames")
        return count
