"""
Desktop window hosting the prize wheel, using pygame.

Keyboard Mapping:
    SPACE: Spin to a random segment
    1-9, 0: Spin to segment 1-10
    S: Shuffle segments
    ESC / Q: Exit
"""

import asyncio
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Optional

import pygame

from prizewheel.animation.scheduler import FrameScheduler
from prizewheel.config.settings import WheelSettings
from prizewheel.config.theme import WheelTheme, parse_color
from prizewheel.core.channel import (
    ChannelMessage,
    MessageType,
    WheelChannel,
    set_segments_message,
    spin_message,
)
from prizewheel.core.segments import shuffled
from prizewheel.graphics.renderer import WheelGeometry
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.host import WheelHost
from prizewheel.wheel.component import PrizeWheel, WheelOptions

logger = logging.getLogger(__name__)


class PygameFrameScheduler(FrameScheduler):
    """Frame scheduler pumped once per pygame loop iteration."""

    def now(self) -> float:
        return float(pygame.time.get_ticks())

    def pump(self) -> int:
        return self.dispatch(self.now())


@dataclass
class WindowLayout:
    """Where the wheel sits inside the window, in window pixels."""
    x: int
    y: int
    side: int
    caption_y: int


class SimulatorWindow:
    """
    pygame window: renders the wheel, the fixed pointer and a status line.

    Operator input is posted to the channel, as a remote operator panel
    would do, and the host turns it into wheel calls.
    """

    MARGIN = 24
    CAPTION_HEIGHT = 36

    def __init__(
        self,
        settings: WheelSettings,
        segments: list[Any],
        channel: Optional[WheelChannel] = None,
        theme: Optional[WheelTheme] = None,
    ) -> None:
        self.settings = settings
        self.channel = channel or WheelChannel()
        self.theme = theme or WheelTheme()
        self._initial_segments = segments
        self._rng = random.Random()

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._running = False
        self._status = "Ready"

        self.scheduler = PygameFrameScheduler()
        self.host = WheelHost(self.channel)
        self.wheel: Optional[PrizeWheel] = None
        self._layout = self._calculate_layout(settings.window.width, settings.window.height)

        logger.info("SimulatorWindow created")

    def _calculate_layout(self, width: int, height: int) -> WindowLayout:
        side = max(0, min(width, height - self.CAPTION_HEIGHT) - self.MARGIN * 2)
        x = (width - side) // 2
        y = self.MARGIN
        return WindowLayout(x=x, y=y, side=side, caption_y=y + side + 8)

    def _init_pygame(self) -> None:
        """Initialize pygame, create the window and the wheel."""
        pygame.init()
        pygame.display.set_caption(self.settings.window.title)
        self._screen = pygame.display.set_mode(
            (self.settings.window.width, self.settings.window.height),
            pygame.RESIZABLE | pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()
        pygame.font.init()
        self._font = pygame.font.SysFont(None, 26)

        surface = DrawingSurface(self._layout.side, self._layout.side, self.settings.pixel_ratio)
        options = WheelOptions(
            emblem_source=self.settings.emblem_path,
            brand_fallback_text=self.settings.brand_text,
            on_stopped=self.host.on_stopped,
            emblem_max_scale=self.settings.emblem_max_scale,
        )
        self.wheel = PrizeWheel(
            surface,
            options,
            scheduler=self.scheduler,
            settings=self.settings,
            theme=self.theme,
        )
        self._bind_wheel(self.wheel)

    def _bind_wheel(self, wheel: PrizeWheel) -> None:
        """Attach the host, then the status listener, and load the entries."""
        self.wheel = wheel
        self.host.bind(wheel)
        # Subscribed after the host so spin messages are already applied
        self.channel.on_message(self._on_channel_message)
        self.channel.post(set_segments_message(self._initial_segments, source="simulator"))

    def _on_channel_message(self, message: ChannelMessage) -> None:
        if message.type == MessageType.RESULT:
            self._status = f"Selected: {message.data.get('label') or '-'}"
        elif message.type == MessageType.SPIN:
            spinning = self.wheel is not None and self.wheel.is_spinning
            self._status = "Spinning..." if spinning else "Spin ignored"

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _on_resize(self, width: int, height: int) -> None:
        self._layout = self._calculate_layout(width, height)
        if self.wheel is not None:
            self.wheel.resize(self._layout.side, self._layout.side)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key
        count = len(self.wheel.segments) if self.wheel else 0

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_SPACE:
            if count:
                self.channel.post(spin_message(self._rng.randrange(count), source="keyboard"))
        elif pygame.K_0 <= key <= pygame.K_9:
            digit = key - pygame.K_0
            index = 9 if digit == 0 else digit - 1
            self.channel.post(spin_message(index, source="keyboard"))
        elif key == pygame.K_s:
            if self.wheel is not None and not self.wheel.is_spinning:
                entries = shuffled(self.wheel.segments, self._rng)
                self.channel.post(set_segments_message(entries, source="keyboard"))

    def _render(self) -> None:
        """Blit the wheel, draw the pointer and the status line."""
        if not self._screen or self.wheel is None:
            return

        self._screen.fill(parse_color(self.settings.window.background)[:3])
        layout = self._layout
        image = self.wheel.surface.image
        wheel_surf = pygame.image.frombuffer(image.tobytes(), image.size, "RGBA")
        if image.width != layout.side and layout.side > 0:
            wheel_surf = pygame.transform.smoothscale(wheel_surf, (layout.side, layout.side))
        self._screen.blit(wheel_surf, (layout.x, layout.y))

        self._draw_pointer()

        if self._font:
            text = self._font.render(self._status, True, (220, 220, 230))
            self._screen.blit(text, text.get_rect(midtop=(self._screen.get_width() // 2, layout.caption_y)))

        pygame.display.flip()

    def _draw_pointer(self) -> None:
        """Fixed pointer at the top of the wheel. Not part of the rotating body."""
        layout = self._layout
        geo = WheelGeometry.for_size(layout.side, layout.side)
        tip_x = layout.x + geo.cx
        tip_y = layout.y + geo.cy - geo.radius * 0.94
        half = max(6.0, geo.radius * 0.06)
        height = half * 1.7
        points = [
            (tip_x, tip_y),
            (tip_x - half, tip_y - height),
            (tip_x + half, tip_y - height),
        ]
        color = self.theme.colors.rgba("pointer")[:3]
        pygame.draw.polygon(self._screen, color, points)
        pygame.draw.polygon(self._screen, (0, 0, 0), points, width=max(1, math.floor(half * 0.15)))

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            self.scheduler.pump()
            self._render()

            if self._clock:
                self._clock.tick(self.settings.window.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.host.close()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        self._running = False
