"""Shared fixtures: a deterministic stand-in for the sun ephemeris."""

import math
from datetime import datetime

import pytest
from pytz import timezone

from arsunpath.ephemeris import EphemerisError, at_local_hour
from arsunpath.models import HorizontalAngles, Location, SunTimes

LA = Location(latitude=34.18, longitude=-118.37)
LA_TZ = timezone("America/Los_Angeles")


class FakeEphemeris:
    """Sun rises due East at 06:00, peaks at 60° at noon, sets due West at 18:00.

    Records every call so tests can check what the sampler asked for.
    """

    def __init__(self, peak_altitude: float = 60.0, always_up: bool = False) -> None:
        self.peak_altitude = peak_altitude
        self.always_up = always_up
        self.position_calls: list[datetime] = []
        self.times_calls: list[datetime] = []

    @staticmethod
    def _check(latitude: float, longitude: float) -> None:
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise EphemerisError(f"bad location {latitude}, {longitude}")

    def sun_position(
        self, time: datetime, latitude: float, longitude: float
    ) -> HorizontalAngles:
        self._check(latitude, longitude)
        self.position_calls.append(time)
        h = time.hour + time.minute / 60 + time.second / 3600
        altitude = self.peak_altitude * math.sin(math.pi * (h - 6) / 12)
        if self.always_up:
            altitude = abs(altitude) + 1.0
        north_azimuth = 90.0 + (h - 6) * 15.0
        return HorizontalAngles(
            azimuth=math.radians(north_azimuth - 180.0),
            altitude=math.radians(altitude),
        )

    def sunrise_sunset(
        self, date: datetime, latitude: float, longitude: float
    ) -> SunTimes:
        self._check(latitude, longitude)
        self.times_calls.append(date)
        return SunTimes(sunrise=at_local_hour(date, 6), sunset=at_local_hour(date, 18))


@pytest.fixture
def fake_ephemeris() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture
def summer_day() -> datetime:
    return LA_TZ.localize(datetime(2024, 6, 21, 0, 0))
