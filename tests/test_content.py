"""Unit tests for sun path projection and AR content building."""

import math
from datetime import datetime, timedelta

import pytest
from conftest import LA, LA_TZ, FakeEphemeris

from arsunpath.compute import build_trajectory
from arsunpath.content import (
    COMPASS_RADIUS,
    DISPLAY_SCALE,
    build_ar_content,
    sun_position_to_point,
)
from arsunpath.models import SunPosition, SunTrajectory

T0 = LA_TZ.localize(datetime(2024, 6, 21, 0))


def make_trajectory(altitudes, current=None) -> SunTrajectory:
    positions = tuple(
        SunPosition(azimuth=15.0 * i, altitude=alt, time=T0 + timedelta(hours=i))
        for i, alt in enumerate(altitudes)
    )
    return SunTrajectory(
        positions=positions, sunrise=None, sunset=None, current_position=current
    )


# ------------------ 1. projection ------------------
def test_projection_is_unit_length():
    for az in range(0, 361, 15):
        for alt in range(-90, 91, 10):
            p = sun_position_to_point(SunPosition(float(az), float(alt), T0))
            assert abs(p.norm() - 1.0) < 1e-9


@pytest.mark.parametrize(
    "azimuth,altitude,expected",
    [
        (180.0, 0.0, (0.0, 0.0, 1.0)),  # South sample lands on +Z
        (0.0, 0.0, (0.0, 0.0, -1.0)),
        (90.0, 0.0, (-1.0, 0.0, 0.0)),
        (270.0, 0.0, (1.0, 0.0, 0.0)),
        (123.0, 90.0, (0.0, 1.0, 0.0)),  # Zenith
    ],
)
def test_projection_reference_is_south(azimuth, altitude, expected):
    p = sun_position_to_point(SunPosition(azimuth, altitude, T0))
    assert (p.x, p.y, p.z) == pytest.approx(expected, abs=1e-12)


# ------------------ 2. partitioning ------------------
def test_all_above_horizon():
    content = build_ar_content(make_trajectory([5.0 + i for i in range(24)]))
    assert len(content.above_horizon_arc.points) == 24
    assert content.below_horizon_arc.points == ()
    # First and last hour get no marker
    assert len(content.markers) == 22
    assert content.markers[0].time == T0 + timedelta(hours=1)
    assert content.markers[-1].time == T0 + timedelta(hours=22)


def test_split_keeps_time_order():
    altitudes = [-10.0, -2.0, 0.0, 15.0, 30.0, 12.0, -1.0, -20.0]
    trajectory = make_trajectory(altitudes)
    content = build_ar_content(trajectory)

    expected_above = [
        sun_position_to_point(p).scaled(DISPLAY_SCALE)
        for p in trajectory.positions
        if p.altitude >= 0
    ]
    expected_below = [
        sun_position_to_point(p).scaled(DISPLAY_SCALE)
        for p in trajectory.positions
        if p.altitude < 0
    ]
    assert list(content.above_horizon_arc.points) == expected_above
    assert list(content.below_horizon_arc.points) == expected_below
    # altitude == 0 counts as above and gets a marker
    assert [m.time.hour for m in content.markers] == [2, 3, 4, 5]


def test_markers_only_above_horizon_and_interior():
    content = build_ar_content(make_trajectory([10.0, -5.0, 20.0, 30.0]))
    assert [m.time.hour for m in content.markers] == [2]


def test_points_scaled_to_display_distance():
    content = build_ar_content(make_trajectory([0.0, 45.0, 80.0]))
    for p in content.above_horizon_arc.points:
        assert p.norm() == pytest.approx(DISPLAY_SCALE)


# ------------------ 3. current marker ------------------
def test_current_indicator_present_only_with_current_position():
    now = SunPosition(azimuth=200.0, altitude=40.0, time=T0 + timedelta(hours=13))
    with_current = build_ar_content(make_trajectory([10.0] * 5, current=now))
    without = build_ar_content(make_trajectory([10.0] * 5))

    assert without.current_indicator is None
    indicator = with_current.current_indicator
    assert indicator is not None
    assert indicator.time == now.time
    assert indicator.position == sun_position_to_point(now).scaled(DISPLAY_SCALE)
    assert indicator.radius > with_current.markers[0].radius


# ------------------ 4. fixed scene elements ------------------
@pytest.mark.parametrize("altitudes", [[], [10.0] * 24, [-10.0] * 24])
def test_always_four_compass_markers(altitudes):
    content = build_ar_content(make_trajectory(altitudes))
    assert [c.label for c in content.compass] == ["N", "E", "S", "W"]
    for c in content.compass:
        assert c.position.norm() == pytest.approx(COMPASS_RADIUS)
        assert c.direction.norm() == pytest.approx(1.0)
        assert c.position.y == 0.0
    north = content.compass[0]
    assert (north.direction.x, north.direction.z) == (0.0, 1.0)


def test_empty_trajectory():
    content = build_ar_content(make_trajectory([]))
    assert content.above_horizon_arc.points == ()
    assert content.below_horizon_arc.points == ()
    assert content.markers == ()
    assert content.current_indicator is None
    assert content.horizon_plane.height == 0.0


def test_idempotent():
    trajectory = build_trajectory(
        LA, T0, LA_TZ.localize(datetime(2024, 6, 21, 11)), FakeEphemeris()
    )
    first = build_ar_content(trajectory)
    second = build_ar_content(trajectory)
    assert first == second
    assert first is not second


def test_realistic_day_has_visual_break_at_horizon():
    trajectory = build_trajectory(LA, T0, T0, FakeEphemeris())
    content = build_ar_content(trajectory)
    # Fake sun is up 06:00..18:00 inclusive
    assert len(content.above_horizon_arc.points) == 13
    assert len(content.below_horizon_arc.points) == 11
    assert math.isclose(content.above_horizon_arc.points[0].y, 0.0, abs_tol=1e-9)
