"""Center emblem image and its load state.

NOT_REQUESTED -> LOADING -> READY | FAILED. The terminal transition happens
once; a failed emblem is never retried and the hub shows brand text.
"""

from enum import Enum, auto
from pathlib import Path
from typing import Callable, Optional
import logging

from PIL import Image

from prizewheel.animation.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class AssetState(Enum):
    """Emblem load states."""
    NOT_REQUESTED = auto()
    LOADING = auto()
    READY = auto()
    FAILED = auto()


class EmblemAsset:
    """
    Optional hub image.

    The file is opened on the frame after ``request`` so callers never wait
    on disk I/O. ``on_change`` runs after every state transition.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        on_change: Optional[Callable[[AssetState], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._on_change = on_change
        self._state = AssetState.NOT_REQUESTED
        self._image: Optional[Image.Image] = None
        self.source: Optional[str] = None
        self.error: Optional[Exception] = None

    @property
    def state(self) -> AssetState:
        return self._state

    @property
    def image(self) -> Optional[Image.Image]:
        """Loaded image, only while READY."""
        return self._image if self._state == AssetState.READY else None

    @property
    def ready(self) -> bool:
        return self._state == AssetState.READY

    def request(self, source: str | Path, load: bool = True) -> bool:
        """Start loading an emblem.

        Args:
            source: Image file path
            load: Open the file on the next frame; pass False when the host
                reports the outcome through ``resolve``/``fail``

        Returns:
            False if an emblem was already requested
        """
        if self._state != AssetState.NOT_REQUESTED:
            logger.debug(f"Emblem already requested ({self._state.name}), ignoring {source}")
            return False

        self.source = str(source)
        self._set_state(AssetState.LOADING)
        if load:
            self._scheduler.request_frame(lambda _now: self._load())
        return True

    def _load(self) -> None:
        try:
            with Image.open(self.source) as img:
                image = img.convert("RGBA")
        except (OSError, ValueError) as e:
            self.fail(e)
            return
        self.resolve(image)

    def resolve(self, image: Image.Image) -> None:
        """Report a successful load."""
        if self._state != AssetState.LOADING:
            logger.debug(f"Ignoring emblem result in state {self._state.name}")
            return
        self._image = image
        logger.info(f"Emblem loaded: {self.source} ({image.width}x{image.height})")
        self._set_state(AssetState.READY)

    def fail(self, error: Optional[Exception] = None) -> None:
        """Report a failed load. Brand text is shown instead."""
        if self._state != AssetState.LOADING:
            logger.debug(f"Ignoring emblem failure in state {self._state.name}")
            return
        self.error = error
        self._image = None
        logger.warning(f"Emblem failed to load: {self.source}: {error}")
        self._set_state(AssetState.FAILED)

    def _set_state(self, state: AssetState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
