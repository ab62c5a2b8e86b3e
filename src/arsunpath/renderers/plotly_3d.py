"""Plotly 3D third-person preview of the AR scene.

Draws ARContent in its own Y-up scene coordinates and, optionally, the
device camera as a view frustum so orientation changes can be checked
against the sun arc and compass.
"""

import math

import numpy as np
import plotly.graph_objects as go

from arsunpath.geometry import Quaternion, Vector3
from arsunpath.models import ARContent, Marker, Point3, Polyline
from arsunpath.orientation import camera_forward, camera_right, camera_up

_BG = "#0a0a0a"
_LABEL_COLOR = "#ffffff"
_FRUSTUM_COLOR = "#7ec8e3"
_SCENE_EXTENT = 12.0


def _polyline_trace(line: Polyline, name: str) -> go.Scatter3d:
    return go.Scatter3d(
        x=[p.x for p in line.points],
        y=[p.y for p in line.points],
        z=[p.z for p in line.points],
        mode="lines",
        line=dict(color=line.color, width=line.width),
        opacity=line.opacity,
        hoverinfo="skip",
        name=name,
    )


def _marker_trace(markers: tuple[Marker, ...], name: str) -> go.Scatter3d:
    # Scatter3d marker size is in pixels; radius 0.1 → 6 px
    return go.Scatter3d(
        x=[m.position.x for m in markers],
        y=[m.position.y for m in markers],
        z=[m.position.z for m in markers],
        mode="markers",
        marker=dict(
            size=[m.radius * 60 for m in markers],
            color=[m.color for m in markers],
            line=dict(width=0),
        ),
        text=[m.time.strftime("%H:%M") for m in markers],
        hoverinfo="text",
        name=name,
    )


def _compass_traces(content: ARContent) -> list[go.Scatter3d]:
    # Arrows lie just below the horizon plane; labels float above them
    traces: list[go.Scatter3d] = []
    for c in content.compass:
        tip = Point3(
            c.position.x + c.direction.x * c.length,
            -0.1,
            c.position.z + c.direction.z * c.length,
        )
        traces.append(
            go.Scatter3d(
                x=[c.position.x, tip.x],
                y=[-0.1, tip.y],
                z=[c.position.z, tip.z],
                mode="lines",
                line=dict(color=c.color, width=6),
                hoverinfo="skip",
                name=f"compass {c.label}",
            )
        )
    traces.append(
        go.Scatter3d(
            x=[c.position.x for c in content.compass],
            y=[0.3] * len(content.compass),
            z=[c.position.z for c in content.compass],
            mode="text",
            text=[c.label for c in content.compass],
            textfont=dict(color=_LABEL_COLOR, size=18, family="sans-serif"),
            hoverinfo="skip",
            name="compass labels",
        )
    )
    return traces


def _horizon_trace(content: ARContent) -> go.Mesh3d:
    half = content.horizon_plane.size / 2
    h = content.horizon_plane.height
    return go.Mesh3d(
        x=[-half, half, half, -half],
        y=[h, h, h, h],
        z=[-half, -half, half, half],
        i=[0, 0],
        j=[1, 2],
        k=[2, 3],
        color=content.horizon_plane.color,
        opacity=content.horizon_plane.opacity,
        hoverinfo="skip",
        name="horizon",
    )


def frustum_corners(
    rotation: Quaternion, fov: float, aspect: float = 1.0, depth: float = 6.0
) -> list[Vector3]:
    """Far-plane corners of the camera frustum in scene space.

    Args:
        rotation: Camera rotation.
        fov: Vertical field of view in degrees.
        aspect: Width / height of the camera image.
        depth: Distance of the far plane drawn.

    Returns:
        Four corners, counter-clockwise from top-left as seen by the camera.
    """
    half_h = math.tan(math.radians(fov) / 2) * depth
    half_w = half_h * aspect
    forward = camera_forward(rotation) * depth
    up = camera_up(rotation) * half_h
    right = camera_right(rotation) * half_w
    return [
        forward + up - right,
        forward - up - right,
        forward - up + right,
        forward + up + right,
    ]


def _frustum_trace(rotation: Quaternion, fov: float, aspect: float) -> go.Scatter3d:
    corners = frustum_corners(rotation, fov, aspect)
    xs: list[float | None] = []
    ys: list[float | None] = []
    zs: list[float | None] = []
    for c in corners:
        xs += [0.0, c.x, None]
        ys += [0.0, c.y, None]
        zs += [0.0, c.z, None]
    ring = corners + corners[:1]
    xs += [c.x for c in ring]
    ys += [c.y for c in ring]
    zs += [c.z for c in ring]
    return go.Scatter3d(
        x=xs,
        y=ys,
        z=zs,
        mode="lines",
        line=dict(color=_FRUSTUM_COLOR, width=2),
        hoverinfo="skip",
        name="device camera",
    )


def render_scene(
    content: ARContent,
    rotation: Quaternion | None = None,
    fov: float = 75.0,
    aspect: float = 1.0,
) -> go.Figure:
    """Render ARContent as an interactive Plotly 3D scene.

    Args:
        content: Geometry bundle from build_ar_content().
        rotation: Device camera rotation; a frustum is drawn when given.
        fov: Vertical field of view of the device camera in degrees.
        aspect: Device camera aspect ratio.

    Returns:
        Plotly Figure object.
    """
    traces: list = [
        _horizon_trace(content),
        _polyline_trace(content.below_horizon_arc, "below horizon"),
        _polyline_trace(content.above_horizon_arc, "above horizon"),
    ]
    if content.markers:
        traces.append(_marker_trace(content.markers, "hours"))
    if content.current_indicator is not None:
        traces.append(_marker_trace((content.current_indicator,), "sun now"))
    traces += _compass_traces(content)
    if rotation is not None:
        traces.append(_frustum_trace(rotation, fov, aspect))

    axis = dict(
        visible=False,
        range=[-_SCENE_EXTENT, _SCENE_EXTENT],
        autorange=False,
    )
    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="cube",
            bgcolor=_BG,
            # Scene is Y-up; Plotly defaults to Z-up
            camera=dict(
                up=dict(x=0, y=1, z=0),
                eye=dict(x=1.2, y=0.9, z=1.2),
            ),
        ),
    )
    return fig


def first_person_camera(rotation: Quaternion) -> dict:
    """Plotly scene camera placed at the origin looking along the device's view."""
    f = camera_forward(rotation).as_array()
    u = camera_up(rotation).as_array()
    # Plotly needs eye != center; step back a hair behind the observer
    eye = -0.01 * f / np.linalg.norm(f)
    return dict(
        eye=dict(x=float(eye[0]), y=float(eye[1]), z=float(eye[2])),
        center=dict(x=float(f[0]), y=float(f[1]), z=float(f[2])),
        up=dict(x=float(u[0]), y=float(u[1]), z=float(u[2])),
    )
