import logging
import math

import pytest

from prizewheel.animation.scheduler import ManualFrameScheduler
from prizewheel.animation.spin import SpinAnimator
from prizewheel.core.state import SegmentEntry, SpinPhase, WheelState
from prizewheel.wheel.component import WheelOptions
from prizewheel.wheel.targeting import POINTER_ANGLE, TWO_PI, normalize_angle, segment_center


def make_animator(segments=("a", "b", "c"), on_stopped=None):
    state = WheelState(segments=list(segments))
    scheduler = ManualFrameScheduler()
    frames = []
    animator = SpinAnimator(state, scheduler, on_frame=lambda: frames.append(state.rotation), on_stopped=on_stopped)
    return state, scheduler, animator, frames


def test_animator_interpolates_with_ease_out_cubic():
    state, scheduler, animator, frames = make_animator()
    assert animator.start(10.0, 1000, 1)
    assert state.phase == SpinPhase.SPINNING

    scheduler.advance(500)
    assert state.rotation == pytest.approx(10.0 * (1 - 0.5 ** 3))
    assert state.spinning


def test_animator_snaps_to_final_and_goes_idle():
    selected = []
    state, scheduler, animator, frames = make_animator(on_stopped=selected.append)
    animator.start(1.2345678901, 300, 2)

    scheduler.run_until_idle(step_ms=7)
    assert state.rotation == 1.2345678901
    assert state.phase == SpinPhase.IDLE
    assert animator.active is None
    assert selected == ["c"]
    assert frames[-1] == 1.2345678901


def test_animator_rejects_second_start():
    state, scheduler, animator, _ = make_animator()
    assert animator.start(5.0, 100, 0)
    assert not animator.start(50.0, 100, 1)
    scheduler.run_until_idle()
    assert state.rotation == 5.0


def test_zero_duration_finishes_on_next_frame():
    state, scheduler, animator, _ = make_animator()
    animator.start(3.0, 0, 0)
    assert scheduler.advance(0) == 1
    assert state.rotation == 3.0
    assert not state.spinning


def test_selected_is_none_when_segments_shrink_mid_spin():
    selected = []
    state, scheduler, animator, _ = make_animator(on_stopped=selected.append)
    animator.start(3.0, 100, 2)
    state.segments = ["only"]
    scheduler.run_until_idle()
    assert selected == [None]


def test_listener_errors_are_isolated(caplog):
    calls = []

    def broken(_selected):
        raise RuntimeError("boom")

    state, scheduler, animator, _ = make_animator(on_stopped=lambda s: calls.append(("persistent", s)))
    state.once_listeners.extend([broken, lambda s: calls.append(("once", s))])
    animator.start(2.0, 50, 0)

    with caplog.at_level(logging.ERROR):
        scheduler.run_until_idle()

    assert calls == [("once", "a"), ("persistent", "a")]
    assert "Error in stop listener" in caplog.text


def test_broken_persistent_listener_is_isolated():
    def broken(_selected):
        raise ValueError("nope")

    state, scheduler, animator, _ = make_animator(on_stopped=broken)
    animator.start(2.0, 50, 0)
    scheduler.run_until_idle()
    assert not state.spinning


# --- Through the wheel component -------------------------------------------


def test_scenario_spin_to_index_three(make_wheel, scheduler, entries):
    received = []
    wheel = make_wheel()
    wheel.set_segments(entries)
    wheel.subscribe_once(received.append)

    assert wheel.request_spin(3, min_turns=5, max_turns=5, duration_ms=1000)
    assert wheel.is_spinning
    scheduler.run_until_idle()

    assert received == [entries[3]]
    assert not wheel.is_spinning
    expected = normalize_angle(POINTER_ANGLE - segment_center(3, 8)) + 5 * TWO_PI
    assert wheel.rotation == pytest.approx(expected)


def test_rotation_never_decreases(make_wheel, scheduler, entries):
    wheel = make_wheel()
    wheel.set_segments(entries)
    last = wheel.rotation
    for index in (7, 0, 0, 4, 2):
        assert wheel.request_spin(index, duration_ms=200)
        while wheel.is_spinning:
            scheduler.advance(16)
            assert wheel.rotation >= last
            last = wheel.rotation
        center = wheel.rotation + segment_center(index, len(entries))
        assert abs(math.remainder(center - POINTER_ANGLE, TWO_PI)) < 1e-6


def test_turn_count_within_range(make_wheel, scheduler, entries):
    wheel = make_wheel(seed=99)
    wheel.set_segments(entries)
    seen = set()
    for _ in range(40):
        start = wheel.rotation
        start_base = start - normalize_angle(start)
        wheel.request_spin(5, min_turns=2, max_turns=4, duration_ms=10)
        scheduler.run_until_idle()
        target = normalize_angle(POINTER_ANGLE - segment_center(5, 8))
        turns = (wheel.rotation - start_base - target) / TWO_PI
        assert turns == pytest.approx(round(turns), abs=1e-6)
        seen.add(round(turns))
    assert seen <= {2, 3, 4}
    assert len(seen) > 1


def test_scenario_no_segments_is_noop(make_wheel, scheduler):
    fired = []
    wheel = make_wheel(WheelOptions(on_stopped=fired.append))
    wheel.subscribe_once(fired.append)

    assert not wheel.request_spin(0)
    assert not wheel.is_spinning
    assert scheduler.pending == 0
    assert fired == []


def test_scenario_second_spin_ignored(make_wheel, scheduler, entries):
    once_calls, persistent_calls = [], []
    wheel = make_wheel(WheelOptions(on_stopped=persistent_calls.append))
    wheel.set_segments(entries)
    wheel.subscribe_once(once_calls.append)

    assert wheel.request_spin(1, duration_ms=500)
    scheduler.advance(100)
    assert not wheel.request_spin(6, duration_ms=500)
    scheduler.run_until_idle()

    assert once_calls == [entries[1]]
    assert persistent_calls == [entries[1]]


@pytest.mark.parametrize("index", [-1, 8, 100, 1.5, "2", True, None])
def test_invalid_index_is_noop(make_wheel, scheduler, entries, index):
    wheel = make_wheel()
    wheel.set_segments(entries)
    assert not wheel.request_spin(index)
    assert not wheel.is_spinning
    assert wheel.rotation == 0.0


def test_once_listener_fires_only_once(make_wheel, scheduler, entries):
    calls = []
    wheel = make_wheel()
    wheel.set_segments(entries)
    wheel.subscribe_once(calls.append)

    wheel.request_spin(0, duration_ms=50)
    scheduler.run_until_idle()
    wheel.request_spin(1, duration_ms=50)
    scheduler.run_until_idle()

    assert calls == [entries[0]]


def test_listener_registered_during_spin_applies_to_that_spin(make_wheel, scheduler, entries):
    calls = []
    wheel = make_wheel()
    wheel.set_segments(entries)
    wheel.request_spin(2, duration_ms=100)
    scheduler.advance(30)
    wheel.subscribe_once(calls.append)
    scheduler.run_until_idle()
    assert calls == [entries[2]]


def test_listener_can_start_next_spin(make_wheel, scheduler, entries):
    order = []
    wheel = make_wheel()
    wheel.set_segments(entries)

    def chain(selected):
        order.append(("first", selected))
        assert not wheel.is_spinning
        assert wheel.request_spin(5, duration_ms=50)
        wheel.subscribe_once(lambda s: order.append(("second", s)))

    wheel.subscribe_once(chain)
    wheel.request_spin(4, duration_ms=50)
    scheduler.run_until_idle()

    assert order == [("first", entries[4]), ("second", entries[5])]


def test_non_callable_subscriber_ignored(make_wheel, entries):
    wheel = make_wheel()
    wheel.subscribe_once("not callable")
    assert wheel.state.once_listeners == []


def test_spin_defaults_come_from_settings(make_wheel, scheduler, entries):
    from prizewheel.config.settings import WheelSettings

    settings = WheelSettings(min_turns=1, max_turns=1, duration_ms=100, _env_file=None)
    wheel = make_wheel(settings=settings)
    wheel.set_segments(entries)
    wheel.request_spin(0)
    assert wheel._animator.active.duration_ms == 100
    scheduler.run_until_idle()
    expected = normalize_angle(POINTER_ANGLE - segment_center(0, 8)) + TWO_PI
    assert wheel.rotation == pytest.approx(expected)


def test_negative_turns_still_move_forward(make_wheel, scheduler, entries):
    wheel = make_wheel()
    wheel.set_segments(entries)
    wheel.request_spin(0, min_turns=5, max_turns=5, duration_ms=100)
    scheduler.run_until_idle()
    start = wheel.rotation

    assert wheel.request_spin(4, min_turns=-3, max_turns=-3, duration_ms=100)
    final = wheel._animator.active.final_rotation
    assert start < final <= start + TWO_PI
    while wheel.is_spinning:
        scheduler.advance(16)
        assert wheel.rotation >= start


@pytest.mark.parametrize(
    "options",
    [
        {"duration_ms": "1000"},
        {"duration_ms": float("nan")},
        {"duration_ms": True},
        {"min_turns": "2"},
        {"max_turns": None, "min_turns": float("inf")},
        {"max_turns": [8]},
    ],
)
def test_invalid_spin_options_are_noop(make_wheel, scheduler, entries, options):
    wheel = make_wheel()
    wheel.set_segments(entries)

    assert not wheel.request_spin(2, **options)
    assert not wheel.is_spinning
    assert scheduler.pending == 0

    # The wheel is still usable afterwards
    assert wheel.request_spin(2, duration_ms=50)
    scheduler.run_until_idle()
    assert not wheel.is_spinning
