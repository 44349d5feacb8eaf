"""Sun events for one calendar day at one location."""

import math
from datetime import date, datetime, timedelta

from pytz import utc

from salati.angle import Angle
from salati.astronomy import (
    approximate_transit,
    corrected_hour_angle,
    corrected_transit,
    julian_day,
    solar_coordinates,
)
from salati.models import Coordinates

# Standard refraction (34') plus the sun's semi-diameter (16')
SUNRISE_ALTITUDE = -50.0 / 60.0


class SolarTime:
    """Sunrise, transit and sunset for ``day`` at ``coordinates``.

    Instants are UTC datetimes, or None when the sun never crosses the
    requested altitude that day. ``anchor`` is the civil date the hour
    values are laid on; it differs from ``day`` only when the events of a
    neighbouring day are borrowed for a polar location.

    Instances are not mutated after construction.
    """

    def __init__(self, day: date, coordinates: Coordinates, anchor: date | None = None):
        self.date = day
        self.coordinates = coordinates
        self.anchor = anchor or day

        jd = julian_day(day.year, day.month, day.day)
        self._previous = solar_coordinates(jd - 1)
        self._solar = solar_coordinates(jd)
        self._next = solar_coordinates(jd + 1)
        self._approx_transit = approximate_transit(
            coordinates.longitude,
            self._solar.apparent_sidereal_time,
            self._solar.right_ascension,
        )

        self.transit: datetime | None = self._instant(
            corrected_transit(
                self._approx_transit,
                coordinates.longitude,
                self._solar.apparent_sidereal_time,
                self._solar.right_ascension,
                self._previous.right_ascension,
                self._next.right_ascension,
            )
        )
        self.sunrise: datetime | None = self.time_for_solar_angle(
            Angle(SUNRISE_ALTITUDE), after_transit=False
        )
        self.sunset: datetime | None = self.time_for_solar_angle(
            Angle(SUNRISE_ALTITUDE), after_transit=True
        )

    def __repr__(self) -> str:
        return (
            f"SolarTime(date={self.date!r}, coordinates={self.coordinates!r}, "
            f"sunrise={self.sunrise!r}, transit={self.transit!r}, sunset={self.sunset!r})"
        )

    @property
    def declination(self) -> float:
        """Solar declination at 0h UTC of ``date`` (degrees)."""
        return self._solar.declination

    @property
    def is_valid(self) -> bool:
        """Whether both sunrise and sunset exist."""
        return self.sunrise is not None and self.sunset is not None

    def anchored(self, anchor: date) -> "SolarTime":
        """The same sun events laid on another civil date."""
        return SolarTime(self.date, self.coordinates, anchor=anchor)

    def time_for_solar_angle(self, angle: Angle, after_transit: bool) -> datetime | None:
        """Instant when the sun is at ``angle`` altitude before or after transit.

        Args:
            angle: Solar altitude; negative below the horizon (e.g. -18° for Fajr).
            after_transit: True for the evening crossing, False for the morning one.

        Returns:
            UTC datetime, or None when the sun never reaches that altitude.
        """
        hours = corrected_hour_angle(
            self._approx_transit,
            angle.degrees,
            self.coordinates.latitude,
            self.coordinates.longitude,
            after_transit,
            self._solar.apparent_sidereal_time,
            self._solar.right_ascension,
            self._previous.right_ascension,
            self._next.right_ascension,
            self._solar.declination,
            self._previous.declination,
            self._next.declination,
        )
        return self._instant(hours)

    def afternoon(self, shadow_length: float) -> datetime | None:
        """Asr: when an object's shadow is ``shadow_length`` times its height plus the noon shadow."""
        tangent = abs(self.coordinates.latitude - self._solar.declination)
        inverse = shadow_length + math.tan(Angle(tangent).radians())
        angle = Angle.from_radians(math.atan(1.0 / inverse))
        return self.time_for_solar_angle(angle, after_transit=True)

    def _instant(self, hours: float | None) -> datetime | None:
        if hours is None or not math.isfinite(hours):
            return None
        midnight = utc.localize(datetime(self.anchor.year, self.anchor.month, self.anchor.day))
        return midnight + timedelta(seconds=math.floor(hours * 3600.0))
