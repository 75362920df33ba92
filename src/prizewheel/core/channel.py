"""
Named message channel for PRIZEWHEEL.

In-process publish/subscribe used by the host application to pass operator
actions and spin results around. Handlers run synchronously in post order.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum
import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "siena_question_wheel_channel_v1"


class MessageType(str, Enum):
    """Message types understood by the wheel host."""
    SET_SEGMENTS = "set_segments"
    SPIN = "spin"
    RESULT = "result"


@dataclass
class ChannelMessage:
    """
    Message container.

    Attributes:
        type: Message type (MessageType or custom string)
        data: Message payload
        source: Component that posted the message
        timestamp: When the message was created
    """
    type: MessageType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


MessageHandler = Callable[[ChannelMessage], None]


class WheelChannel:
    """
    Publish/subscribe channel with a name and a bounded history.
    """

    def __init__(self, name: str = DEFAULT_CHANNEL, history_limit: int = 100) -> None:
        self.name = name
        self._handlers: list[MessageHandler] = []
        self._history: list[ChannelMessage] = []
        self._history_limit = history_limit

    def on_message(self, handler: MessageHandler) -> Callable[[], None]:
        """
        Register a handler for every message on this channel.

        Returns:
            Unsubscribe function
        """
        self._handlers.append(handler)
        logger.debug(f"Handler subscribed to {self.name}")

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)
                logger.debug(f"Handler unsubscribed from {self.name}")

        return unsubscribe

    def post(self, message: ChannelMessage) -> None:
        """Deliver a message to all handlers registered at post time."""
        self._add_to_history(message)
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception as e:
                logger.error(f"Error in channel handler for {message.type}: {e}")

    def _add_to_history(self, message: ChannelMessage) -> None:
        """Add message to history, maintaining limit."""
        self._history.append(message)
        if len(self._history) > self._history_limit:
            self._history.pop(0)

    def get_history(self, message_type: MessageType | str | None = None, limit: int = 10) -> list[ChannelMessage]:
        """Get recent messages from history."""
        history = self._history
        if message_type is not None:
            history = [m for m in history if m.type == message_type]
        return history[-limit:]


# Convenience functions for creating common messages
def set_segments_message(entries: list[Any], source: str = "operator") -> ChannelMessage:
    """Create a message that replaces the wheel entries."""
    return ChannelMessage(MessageType.SET_SEGMENTS, data={"segments": list(entries)}, source=source)


def spin_message(index: int, source: str = "operator", **options: Any) -> ChannelMessage:
    """Create a spin request message."""
    return ChannelMessage(MessageType.SPIN, data={"index": index, **options}, source=source)


def result_message(index: int, selected: Any, label: str, source: str = "wheel") -> ChannelMessage:
    """Create a spin result message."""
    return ChannelMessage(
        MessageType.RESULT,
        data={"index": index, "selected": selected, "label": label},
        source=source,
    )
