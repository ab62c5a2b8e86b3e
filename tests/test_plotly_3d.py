"""Tests for the Plotly 3D scene renderer."""

import math

import plotly.graph_objects as go
import pytest
from conftest import LA, LA_TZ, FakeEphemeris

from arsunpath.compute import build_trajectory
from arsunpath.content import build_ar_content
from arsunpath.controls import DEFAULT_ORIENTATION
from arsunpath.geometry import Quaternion
from arsunpath.orientation import orientation_to_rotation
from arsunpath.renderers.plotly_3d import first_person_camera, frustum_corners, render_scene


@pytest.fixture
def content(summer_day):
    now = LA_TZ.localize(summer_day.replace(tzinfo=None, hour=10))
    return build_ar_content(build_trajectory(LA, summer_day, now, FakeEphemeris()))


def test_render_scene_traces(content):
    fig = render_scene(content)
    assert isinstance(fig, go.Figure)
    names = [t.name for t in fig.data]
    assert names[:3] == ["horizon", "below horizon", "above horizon"]
    assert "hours" in names
    assert "sun now" in names
    arrows = [n for n in names if n in {"compass N", "compass E", "compass S", "compass W"}]
    assert arrows == ["compass N", "compass E", "compass S", "compass W"]
    assert names.count("compass labels") == 1
    labels = next(t for t in fig.data if t.name == "compass labels")
    assert list(labels.text) == ["N", "E", "S", "W"]
    assert "device camera" not in names
    assert fig.layout.scene.camera.up.y == 1


def test_render_scene_with_frustum(content):
    fig = render_scene(content, Quaternion(), fov=60.0)
    assert fig.data[-1].name == "device camera"


def test_frustum_faces_north_in_default_pose():
    rotation = orientation_to_rotation(DEFAULT_ORIENTATION)
    corners = frustum_corners(rotation, fov=90.0, depth=6.0)
    assert len(corners) == 4
    for c in corners:
        assert c.z == pytest.approx(6.0, abs=1e-9)
        # 90° vertical FOV at depth 6 spans ±6 vertically
        assert abs(c.y) == pytest.approx(6.0, abs=1e-9)
        assert abs(c.x) == pytest.approx(6.0, abs=1e-9)


def test_frustum_width_follows_aspect():
    corners = frustum_corners(Quaternion(), fov=60.0, aspect=2.0, depth=1.0)
    half_h = math.tan(math.radians(30.0))
    top_left = corners[0]
    assert top_left.y == pytest.approx(half_h)
    assert top_left.x == pytest.approx(-2.0 * half_h)
    assert top_left.z == pytest.approx(-1.0)


def test_first_person_camera_looks_forward():
    camera = first_person_camera(orientation_to_rotation(DEFAULT_ORIENTATION))
    center = camera["center"]
    assert (center["x"], center["y"], center["z"]) == pytest.approx((0.0, 0.0, 1.0), abs=1e-9)
    assert camera["eye"]["z"] < 0
    assert camera["up"]["y"] == pytest.approx(1.0)
