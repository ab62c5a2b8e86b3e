"""Sun path computation layer: time zone lookup and hourly trajectory sampling."""

import logging
import math
from datetime import date, datetime, time

from pytz import timezone, utc
from pytz.tzinfo import BaseTzInfo
from timezonefinder import TimezoneFinder

from arsunpath.ephemeris import SkyfieldEphemeris, SunEphemeris, at_local_hour
from arsunpath.models import (
    HorizontalAngles,
    Location,
    SunPosition,
    SunTrajectory,
    TrajectoryQuery,
)

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24

_tf: TimezoneFinder | None = None


class TimezoneLookupError(Exception):
    """No time zone found for a location."""


def observer_timezone(location: Location) -> BaseTzInfo:
    """Resolve the IANA time zone at a location.

    Raises:
        TimezoneLookupError: When the coordinates fall outside every zone.
    """
    global _tf
    if _tf is None:
        _tf = TimezoneFinder()
    tz_str = _tf.timezone_at(lat=location.latitude, lng=location.longitude)
    if tz_str is None:
        raise TimezoneLookupError(
            f"Timezone not found: lat={location.latitude}, lng={location.longitude}"
        )
    return timezone(tz_str)


def local_day(location: Location, day: date) -> datetime:
    """Aware local midnight of ``day`` at ``location``."""
    tz = observer_timezone(location)
    return tz.localize(datetime.combine(day, time(0, 0)))


def _to_sun_position(angles: HorizontalAngles, when: datetime) -> SunPosition:
    # Ephemeris azimuth is from South; +180° makes 0° = North
    return SunPosition(
        azimuth=math.degrees(angles.azimuth) + 180.0,
        altitude=math.degrees(angles.altitude),
        time=when,
    )


def build_trajectory(
    location: Location,
    reference_date: datetime,
    now: datetime,
    ephemeris: SunEphemeris,
) -> SunTrajectory:
    """Sample the sun once per local hour of ``reference_date``.

    Args:
        location: Observer coordinates, passed through to the ephemeris as-is.
        reference_date: Any instant on the day to sample. Its tzinfo defines
            the local hours.
        now: Instant for the current-position sample.
        ephemeris: Sun position / rise-set provider.

    Returns:
        A new SunTrajectory with 24 positions in ascending time order. The
        current position is set only when sunrise <= now <= sunset.

    Raises:
        Whatever the ephemeris raises (e.g. EphemerisError for out-of-range
        coordinates); nothing is retried or defaulted here.
    """
    lat, lon = location.latitude, location.longitude
    times = ephemeris.sunrise_sunset(reference_date, lat, lon)

    positions: list[SunPosition] = []
    for hour in range(HOURS_PER_DAY):
        when = at_local_hour(reference_date, hour)
        positions.append(_to_sun_position(ephemeris.sun_position(when, lat, lon), when))

    current: SunPosition | None = None
    if (
        times.sunrise is not None
        and times.sunset is not None
        and times.sunrise <= now <= times.sunset
    ):
        current = _to_sun_position(ephemeris.sun_position(now, lat, lon), now)

    logger.info(
        f"Sun trajectory for ({lat:.4f}, {lon:.4f}) on "
        f"{reference_date.date().isoformat()}: sunrise={times.sunrise}, "
        f"sunset={times.sunset}, current={'yes' if current else 'no'}"
    )
    return SunTrajectory(
        positions=tuple(positions),
        sunrise=times.sunrise,
        sunset=times.sunset,
        current_position=current,
    )


def run(
    query: TrajectoryQuery,
    ephemeris: SunEphemeris | None = None,
    now: datetime | None = None,
) -> SunTrajectory:
    """Top-level entry point: takes a TrajectoryQuery and returns a SunTrajectory.

    Args:
        query: Location and local calendar day.
        ephemeris: Defaults to a SkyfieldEphemeris with default settings.
        now: Defaults to the current UTC time.

    Returns:
        Fully computed SunTrajectory.
    """
    reference_date = local_day(query.location, query.day)
    if ephemeris is None:
        ephemeris = SkyfieldEphemeris()
    if now is None:
        now = datetime.now(utc)
    return build_trajectory(query.location, reference_date, now, ephemeris)
