"""Sun path → renderable AR geometry.

Projection convention: a sample's North-referenced azimuth is shifted by
−180° before the spherical → Cartesian conversion, so azimuth 180° (due
South) lands on +Z. The compass markers are fixed scene directions and are
not derived from sun data.
"""

import logging
import math

from arsunpath.models import (
    ARContent,
    CompassMarker,
    HorizonPlane,
    Marker,
    Point3,
    Polyline,
    SunPosition,
    SunTrajectory,
)

logger = logging.getLogger(__name__)

# Rendering distance of the sun sphere, not a physical unit
DISPLAY_SCALE = 10.0

ABOVE_ARC_COLOR = "#ffaa00"
BELOW_ARC_COLOR = "#666666"
HOUR_MARKER_COLOR = "#ffff00"
CURRENT_MARKER_COLOR = "#ff0000"
HOUR_MARKER_RADIUS = 0.1
CURRENT_MARKER_RADIUS = 0.2

COMPASS_RADIUS = 3.0
COMPASS_ARROW_LENGTH = 2.0

HORIZON_PLANE = HorizonPlane(size=100.0, height=0.0, color="#2a2a2a", opacity=0.15)

_CARDINALS: tuple[tuple[str, Point3, str], ...] = (
    ("N", Point3(0.0, 0.0, 1.0), "#ff0000"),
    ("E", Point3(1.0, 0.0, 0.0), "#00ff00"),
    ("S", Point3(0.0, 0.0, -1.0), "#4444ff"),
    ("W", Point3(-1.0, 0.0, 0.0), "#ffff00"),
)

COMPASS: tuple[CompassMarker, ...] = tuple(
    CompassMarker(
        label=label,
        direction=direction,
        position=direction.scaled(COMPASS_RADIUS),
        color=color,
        length=COMPASS_ARROW_LENGTH,
    )
    for label, direction, color in _CARDINALS
)


def sun_position_to_point(position: SunPosition) -> Point3:
    """Unit-sphere point for a sun sample (x East-West, y up, z North-South)."""
    azimuth = math.radians(position.azimuth - 180.0)
    altitude = math.radians(position.altitude)
    return Point3(
        x=math.cos(altitude) * math.sin(azimuth),
        y=math.sin(altitude),
        z=math.cos(altitude) * math.cos(azimuth),
    )


def _display_point(position: SunPosition) -> Point3:
    return sun_position_to_point(position).scaled(DISPLAY_SCALE)


def _log_bounds(points: list[Point3]) -> None:
    if not points or not logger.isEnabledFor(logging.DEBUG):
        return
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    zs = [p.z for p in points]
    logger.debug(
        f"Trajectory bounds x=[{min(xs):.2f}, {max(xs):.2f}] "
        f"y=[{min(ys):.2f}, {max(ys):.2f}] z=[{min(zs):.2f}, {max(zs):.2f}]"
    )


def build_ar_content(trajectory: SunTrajectory) -> ARContent:
    """Build the full AR geometry bundle for one trajectory.

    Samples are split by altitude sign (altitude >= 0 is above) keeping their
    time order; a horizon crossing simply breaks the line. Hour markers go on
    above-horizon samples except the first and last hour of the day.

    Args:
        trajectory: Sun samples for one day.

    Returns:
        A new ARContent. Equal input gives equal output.
    """
    above: list[Point3] = []
    below: list[Point3] = []
    markers: list[Marker] = []
    last = len(trajectory.positions) - 1

    for index, position in enumerate(trajectory.positions):
        point = _display_point(position)
        if position.altitude >= 0:
            above.append(point)
            if 0 < index < last:
                markers.append(
                    Marker(
                        position=point,
                        time=position.time,
                        radius=HOUR_MARKER_RADIUS,
                        color=HOUR_MARKER_COLOR,
                    )
                )
        else:
            below.append(point)

    _log_bounds(above + below)

    current: Marker | None = None
    if trajectory.current_position is not None:
        current = Marker(
            position=_display_point(trajectory.current_position),
            time=trajectory.current_position.time,
            radius=CURRENT_MARKER_RADIUS,
            color=CURRENT_MARKER_COLOR,
        )

    return ARContent(
        above_horizon_arc=Polyline(tuple(above), ABOVE_ARC_COLOR, width=5.0),
        below_horizon_arc=Polyline(
            tuple(below), BELOW_ARC_COLOR, width=3.0, opacity=0.4
        ),
        markers=tuple(markers),
        current_indicator=current,
        horizon_plane=HORIZON_PLANE,
        compass=COMPASS,
    )
