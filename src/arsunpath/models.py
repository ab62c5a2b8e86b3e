"""Data model definitions: explicit boundaries between sensor, compute, and render layers."""

import math
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DeviceOrientation:
    """One orientation sensor sample. None marks an unavailable axis."""

    alpha: float | None  # Yaw about the device's vertical axis, [0, 360)
    beta: float | None  # Pitch, [-180, 180]
    gamma: float | None  # Roll, [-90, 90]
    absolute: bool = False  # True if referenced to the Earth frame


@dataclass(frozen=True)
class Location:
    """Observer position. Not validated here."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive


@dataclass(frozen=True)
class TrajectoryQuery:
    """Raw request for a day's sun path."""

    location: Location
    day: date  # Local calendar day at the location


@dataclass(frozen=True)
class HorizontalAngles:
    """Ephemeris output. Radians; azimuth measured from South, West positive."""

    azimuth: float
    altitude: float


@dataclass(frozen=True)
class SunTimes:
    """Sunrise/sunset for a calendar day. None when the event does not occur."""

    sunrise: datetime | None
    sunset: datetime | None


@dataclass(frozen=True)
class SunPosition:
    """Sun in horizontal coordinates at one instant."""

    azimuth: float  # Degrees, 0=N, 90=E, 180=S, 270=W
    altitude: float  # Degrees, negative below the horizon
    time: datetime


@dataclass(frozen=True)
class SunTrajectory:
    """A full day of hourly sun samples. Rebuilt wholesale, never patched."""

    positions: tuple[SunPosition, ...]  # Hours 00..23 local, ascending
    sunrise: datetime | None
    sunset: datetime | None
    current_position: SunPosition | None  # None outside [sunrise, sunset]


@dataclass(frozen=True)
class Point3:
    """Cartesian scene coordinate."""

    x: float
    y: float
    z: float

    def scaled(self, factor: float) -> "Point3":
        return Point3(self.x * factor, self.y * factor, self.z * factor)

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


@dataclass(frozen=True)
class Polyline:
    """Connected line through points, in drawing order."""

    points: tuple[Point3, ...]
    color: str
    width: float
    opacity: float = 1.0


@dataclass(frozen=True)
class Marker:
    """Sphere marker at a sun sample."""

    position: Point3
    time: datetime
    radius: float
    color: str


@dataclass(frozen=True)
class CompassMarker:
    """Flat arrow plus label for one cardinal direction."""

    label: str  # "N", "E", "S", "W"
    direction: Point3  # Unit vector the arrow points along
    position: Point3  # Arrow origin on the ground
    color: str
    length: float


@dataclass(frozen=True)
class HorizonPlane:
    """Square ground plane centred on the observer."""

    size: float
    height: float  # y of the plane
    color: str
    opacity: float


@dataclass(frozen=True)
class ARContent:
    """The sole input to renderers. Display-only, regenerated in full."""

    above_horizon_arc: Polyline
    below_horizon_arc: Polyline
    markers: tuple[Marker, ...]  # Interior hours above the horizon
    current_indicator: Marker | None
    horizon_plane: HorizonPlane
    compass: tuple[CompassMarker, ...]  # Always N, E, S, W
