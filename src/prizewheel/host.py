"""Host wiring between a message channel and a prize wheel.

The wheel knows nothing about channels. The host turns ``set_segments`` and
``spin`` messages into wheel calls and posts a ``result`` message when a
spin stops.
"""

from typing import Any, Callable, Optional
import logging

from prizewheel.core.channel import (
    ChannelMessage,
    MessageType,
    WheelChannel,
    result_message,
)
from prizewheel.core.state import label_of
from prizewheel.wheel.component import PrizeWheel

logger = logging.getLogger(__name__)

SPIN_OPTION_KEYS = ("min_turns", "max_turns", "duration_ms")


class WheelHost:
    """
    Connects one wheel to one channel.

    Pass ``host.on_stopped`` as the wheel's persistent stop listener, then
    ``bind`` the wheel.
    """

    def __init__(self, channel: WheelChannel) -> None:
        self.channel = channel
        self.wheel: Optional[PrizeWheel] = None
        self._pending_index: Optional[int] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def bind(self, wheel: PrizeWheel) -> None:
        """Start listening for operator messages for ``wheel``."""
        self.wheel = wheel
        if self._unsubscribe is None:
            self._unsubscribe = self.channel.on_message(self._handle)
        logger.info(f"Host bound to channel {self.channel.name}")

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _handle(self, message: ChannelMessage) -> None:
        if self.wheel is None:
            return

        if message.type == MessageType.SET_SEGMENTS:
            self.wheel.set_segments(message.data.get("segments"))
        elif message.type == MessageType.SPIN:
            self.spin(message.data.get("index"), **{
                k: message.data[k] for k in SPIN_OPTION_KEYS if k in message.data
            })

    def spin(self, index: Any, **options: Any) -> bool:
        """Request a spin and remember the index for the result message."""
        if self.wheel is None:
            return False
        started = self.wheel.request_spin(index, **options)
        if started:
            self._pending_index = index
        return started

    def on_stopped(self, selected: Any) -> None:
        """Persistent stop listener: publish the result."""
        index = self._pending_index
        self._pending_index = None
        label = label_of(selected)
        logger.info(f"Result: #{index} {label!r}")
        self.channel.post(result_message(index if index is not None else -1, selected, label))
