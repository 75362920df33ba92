"""
Wheel state for PRIZEWHEEL.

States:
    IDLE: Wheel at rest, ready to accept a spin
    SPINNING: A spin animation is running
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
import logging

logger = logging.getLogger(__name__)


class SpinPhase(Enum):
    """Animator phases."""
    IDLE = auto()
    SPINNING = auto()


@dataclass(frozen=True)
class SegmentEntry:
    """A selectable wheel entry. Only ``text`` is used by the wheel."""
    text: str
    id: str = ""
    data: dict[str, Any] = field(default_factory=dict, compare=False)


def label_of(entry: Any) -> str:
    """Get the display label of a segment entry.

    Accepts objects with a ``text`` attribute, mappings with a ``"text"``
    key and plain strings.
    """
    if entry is None:
        return ""
    if isinstance(entry, str):
        return entry.strip()
    if isinstance(entry, Mapping):
        text = entry.get("text")
    else:
        text = getattr(entry, "text", None)
    if text is None:
        return ""
    return str(text).strip()


@dataclass
class SpinRequest:
    """Parameters of a single spin. Lives only while the spin runs."""
    index: int
    min_turns: int = 5
    max_turns: int = 8
    duration_ms: float = 5200.0


StopListener = Callable[[Any], None]


@dataclass
class WheelState:
    """
    Mutable state owned by one wheel instance.

    Attributes:
        segments: Ordered entries; order defines angular position
        rotation: Current rotation in radians (unbounded)
        phase: IDLE or SPINNING
        once_listeners: One-shot completion listeners for the next stop
    """
    segments: list[Any] = field(default_factory=list)
    rotation: float = 0.0
    phase: SpinPhase = SpinPhase.IDLE
    once_listeners: list[StopListener] = field(default_factory=list)

    # Valid phase transitions
    VALID_TRANSITIONS = frozenset({
        (SpinPhase.IDLE, SpinPhase.SPINNING),
        (SpinPhase.SPINNING, SpinPhase.IDLE),
    })

    @property
    def spinning(self) -> bool:
        """Check if a spin is running."""
        return self.phase == SpinPhase.SPINNING

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def transition(self, to_phase: SpinPhase) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if transition happened, False if it is not allowed
        """
        if (self.phase, to_phase) not in self.VALID_TRANSITIONS:
            logger.debug(f"Ignored phase transition: {self.phase.name} -> {to_phase.name}")
            return False
        logger.debug(f"Phase: {self.phase.name} -> {to_phase.name}")
        self.phase = to_phase
        return True

    def drain_once_listeners(self) -> list[StopListener]:
        """Swap out the one-shot queue, leaving an empty one behind."""
        listeners, self.once_listeners = self.once_listeners, []
        return listeners
