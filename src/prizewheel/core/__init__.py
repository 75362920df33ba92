"""Core state and messaging for PRIZEWHEEL."""

from .state import SegmentEntry, SpinPhase, SpinRequest, WheelState, label_of
from .channel import ChannelMessage, MessageType, WheelChannel

__all__ = [
    "SegmentEntry",
    "SpinPhase",
    "SpinRequest",
    "WheelState",
    "label_of",
    "ChannelMessage",
    "MessageType",
    "WheelChannel",
]
