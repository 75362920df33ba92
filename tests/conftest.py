import random

import pytest

from prizewheel.animation.scheduler import ManualFrameScheduler
from prizewheel.core.state import SegmentEntry
from prizewheel.graphics.surface import DrawingSurface
from prizewheel.wheel.component import PrizeWheel, WheelOptions


def fixed_width_measure(char_width: float):
    """Every character is ``char_width`` pixels wide."""
    return lambda text: len(text) * char_width


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def surface():
    # Small surface keeps renders fast
    return DrawingSurface(96, 96)


@pytest.fixture
def entries():
    return [SegmentEntry(text=f"Question {i}", id=str(i)) for i in range(8)]


@pytest.fixture
def make_wheel(scheduler, surface):
    """Factory for wheels sharing the test scheduler and a seeded RNG."""

    def _make(options=None, seed=1234, **kwargs):
        return PrizeWheel(
            surface,
            options or WheelOptions(),
            scheduler=scheduler,
            rng=random.Random(seed),
            **kwargs,
        )

    return _make
