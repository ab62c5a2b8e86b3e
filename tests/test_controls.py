"""Unit tests for simulator orientation nudges."""

import pytest

from arsunpath.controls import (
    DEFAULT_ORIENTATION,
    RESET,
    OrientationDelta,
    apply_orientation_delta,
    delta_for_key,
)
from arsunpath.models import DeviceOrientation


def test_key_bindings():
    assert delta_for_key("KeyA") == OrientationDelta(alpha=-5)
    assert delta_for_key("ArrowDown") == OrientationDelta(beta=1)
    assert delta_for_key("Space") is RESET
    assert delta_for_key("KeyZ") is None


@pytest.mark.parametrize(
    "start,delta,expected",
    [
        (358.0, 5.0, 3.0),  # wraps past 360
        (2.0, -5.0, 357.0),  # wraps below 0
        (355.0, 5.0, 0.0),  # exactly 360 → 0
    ],
)
def test_alpha_wraps(start, delta, expected):
    out = apply_orientation_delta(
        DeviceOrientation(start, 0.0, 0.0), OrientationDelta(alpha=delta)
    )
    assert out.alpha == pytest.approx(expected)
    assert 0.0 <= out.alpha < 360.0


def test_beta_and_gamma_clamp():
    edge = DeviceOrientation(10.0, 178.0, -88.0)
    out = apply_orientation_delta(edge, OrientationDelta(beta=5, gamma=-5))
    assert out.beta == 180.0
    assert out.gamma == -90.0


def test_missing_axes_start_at_zero():
    out = apply_orientation_delta(
        DeviceOrientation(None, None, None), OrientationDelta(alpha=1, beta=1, gamma=1)
    )
    assert (out.alpha, out.beta, out.gamma) == (1.0, 1.0, 1.0)


def test_reset_zeroes_and_keeps_absolute():
    start = DeviceOrientation(100.0, 40.0, -20.0, absolute=True)
    out = apply_orientation_delta(start, RESET)
    assert out == DeviceOrientation(0.0, 0.0, 0.0, absolute=True)


def test_returns_new_record():
    out = apply_orientation_delta(DEFAULT_ORIENTATION, OrientationDelta(alpha=1))
    assert out is not DEFAULT_ORIENTATION
    assert DEFAULT_ORIENTATION.alpha == 180.0
    assert out.alpha == 181.0
