"""Sun ephemeris interface and a skyfield-backed implementation.

The trajectory sampler depends only on SunEphemeris. SkyfieldEphemeris is
the production adapter; tests substitute a deterministic fake.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Protocol

from skyfield import almanac
from skyfield.api import Loader, wgs84

from arsunpath.config import Settings
from arsunpath.models import HorizontalAngles, SunTimes

logger = logging.getLogger(__name__)


class EphemerisError(Exception):
    """Ephemeris call rejected its inputs."""


class SunEphemeris(Protocol):
    """Interface for sun position and rise/set lookups."""

    def sun_position(
        self, time: datetime, latitude: float, longitude: float
    ) -> HorizontalAngles:
        """Return the sun's azimuth (from South, West positive) and altitude in radians."""

    def sunrise_sunset(
        self, date: datetime, latitude: float, longitude: float
    ) -> SunTimes:
        """Return sunrise and sunset on the local calendar day of ``date``."""


def _check_inputs(time: datetime, latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise EphemerisError(f"Latitude out of range [-90, 90]: {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise EphemerisError(f"Longitude out of range [-180, 180]: {longitude}")
    if time.tzinfo is None:
        raise EphemerisError(f"Datetime must be timezone-aware: {time.isoformat()}")


def at_local_hour(dt: datetime, hour: int) -> datetime:
    """Same local calendar day as ``dt``, at hour:00:00 in the same zone."""
    naive = dt.replace(tzinfo=None, hour=hour, minute=0, second=0, microsecond=0)
    tz = dt.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, "localize"):  # pytz zones must localize, not replace
        return tz.localize(naive)  # type: ignore[union-attr]
    return naive.replace(tzinfo=tz)


class SkyfieldEphemeris:
    """SunEphemeris backed by skyfield and a JPL kernel.

    The kernel is loaded (and downloaded into ``settings.resources_dir`` if
    missing) on first use.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._loader = Loader(str(self.settings.resources_dir))
        self._eph = None
        self._ts = None

    def _ensure_loaded(self) -> tuple:
        """Loaded (kernel, timescale) pair."""
        if self._eph is None or self._ts is None:
            logger.info(f"Loading ephemeris {self.settings.ephemeris_path}")
            self._eph = self._loader(self.settings.ephemeris_file)
            self._ts = self._loader.timescale()
        return self._eph, self._ts

    def sun_position(
        self, time: datetime, latitude: float, longitude: float
    ) -> HorizontalAngles:
        """Apparent sun position for an observer at sea level.

        Raises:
            EphemerisError: On out-of-range coordinates or a naive datetime.
        """
        _check_inputs(time, latitude, longitude)
        eph, ts = self._ensure_loaded()

        t = ts.from_datetime(time)
        # altaz() requires observing from a ground observer (earth + latlon)
        ground = eph["earth"] + wgs84.latlon(
            latitude_degrees=latitude, longitude_degrees=longitude
        )
        alt, az, _ = ground.at(t).observe(eph["sun"]).apparent().altaz()
        # skyfield azimuth is from North; shift to a South reference
        return HorizontalAngles(azimuth=az.radians - math.pi, altitude=alt.radians)

    def sunrise_sunset(
        self, date: datetime, latitude: float, longitude: float
    ) -> SunTimes:
        """First sunrise and first sunset within the local day of ``date``.

        Returns None for an event that does not happen that day (polar day
        or night).

        Raises:
            EphemerisError: On out-of-range coordinates or a naive datetime.
        """
        _check_inputs(date, latitude, longitude)
        eph, ts = self._ensure_loaded()

        start = at_local_hour(date, 0)
        end = start + timedelta(days=1)
        topos = wgs84.latlon(latitude_degrees=latitude, longitude_degrees=longitude)
        times, events = almanac.find_discrete(
            ts.from_datetime(start),
            ts.from_datetime(end),
            almanac.sunrise_sunset(eph, topos),
        )

        sunrise: datetime | None = None
        sunset: datetime | None = None
        for t, is_rise in zip(times, events):
            local = t.utc_datetime().astimezone(start.tzinfo)
            if is_rise and sunrise is None:
                sunrise = local
            elif not is_rise and sunset is None:
                sunset = local
        return SunTimes(sunrise=sunrise, sunset=sunset)
