import pytest

from prizewheel.animation.easing import Easing, ease_out_cubic, get_easing, interpolate


def test_ease_out_cubic_endpoints():
    assert ease_out_cubic(0.0) == 0.0
    assert ease_out_cubic(1.0) == 1.0
    assert ease_out_cubic(0.5) == pytest.approx(0.875)


def test_ease_out_cubic_decelerates():
    first = ease_out_cubic(0.1) - ease_out_cubic(0.0)
    last = ease_out_cubic(1.0) - ease_out_cubic(0.9)
    assert first > last


def test_get_easing_by_name():
    assert get_easing("ease_out_cubic") is ease_out_cubic
    assert get_easing(Easing.EASE_OUT_CUBIC) is ease_out_cubic


def test_get_easing_unknown():
    with pytest.raises(ValueError):
        get_easing("wobble")


def test_interpolate_clamps():
    assert interpolate(10, 20, 2.0, Easing.LINEAR) == 20
    assert interpolate(10, 20, -1.0, "ease_out_cubic") == 10


def test_only_spin_curves_are_registered():
    assert {e.name for e in Easing} == {"LINEAR", "EASE_OUT_CUBIC"}
    assert get_easing("linear")(0.3) == 0.3
