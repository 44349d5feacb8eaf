"""The computed day of prayer times and read-only queries over it."""

import math
from dataclasses import dataclass
from datetime import datetime

from salati.models import Coordinates, Parameters, Prayer, PrayerTime


class PrayerTimeUnavailable(LookupError):
    """The requested prayer has no instant for this date and location."""


# Forward order; FajrTomorrow closes the day
PRAYER_ORDER: tuple[Prayer, ...] = (
    Prayer.FAJR,
    Prayer.SUNRISE,
    Prayer.DHUHR,
    Prayer.ASR,
    Prayer.MAGHRIB,
    Prayer.ISHA,
    Prayer.MIDDLE_OF_THE_NIGHT,
    Prayer.QIYAM,
    Prayer.FAJR_TOMORROW,
)


@dataclass(frozen=True)
class PrayerSchedule:
    """Prayer times of one day. Build a new schedule for another day."""

    fajr: PrayerTime
    sunrise: PrayerTime  # Adjusted sunrise
    solar_sunrise: PrayerTime  # Raw astronomical sunrise
    dhuhr: PrayerTime
    asr: PrayerTime
    maghrib: PrayerTime
    solar_sunset: PrayerTime  # Raw astronomical sunset
    isha: PrayerTime
    middle_of_the_night: PrayerTime
    qiyam: PrayerTime  # Start of the last third of the night
    fajr_tomorrow: PrayerTime
    coordinates: Coordinates
    date: datetime  # 0h UTC of the computed day
    parameters: Parameters

    def prayer_time(self, prayer: Prayer) -> PrayerTime:
        return getattr(self, prayer.value)

    def time(self, prayer: Prayer) -> datetime:
        """Instant of ``prayer``.

        Raises:
            PrayerTimeUnavailable: When the sun geometry has no solution.
        """
        value = self.prayer_time(prayer).time
        if value is None:
            raise PrayerTimeUnavailable(
                f"{prayer.value} is not observable at {self.coordinates} on "
                f"{self.date:%Y-%m-%d}"
            )
        return value

    def current(self, now: datetime) -> Prayer | None:
        """The most recently started prayer at ``now``.

        Returns None when ``now`` precedes today's Fajr. Prayers without an
        instant are skipped.
        """
        for prayer in reversed(PRAYER_ORDER):
            value = self.prayer_time(prayer).time
            if value is not None and value <= now:
                return prayer
        return None

    def next(self, now: datetime) -> Prayer:
        """The prayer following current(now). Fajr when the day has not started."""
        current = self.current(now)
        if current is None:
            return Prayer.FAJR
        if current is Prayer.FAJR_TOMORROW:
            return Prayer.FAJR_TOMORROW
        return PRAYER_ORDER[PRAYER_ORDER.index(current) + 1]

    def time_remaining(self, now: datetime) -> tuple[int, int]:
        """Whole hours and rounded minutes until next(now); (0, 0) once it has passed."""
        seconds = (self.time(self.next(now)) - now).total_seconds()
        if seconds <= 0:
            return 0, 0
        whole = seconds / 3600.0
        hours = int(whole)
        minutes = math.floor((whole - hours) * 60.0 + 0.5)
        if minutes == 60:
            return hours + 1, 0
        return hours, minutes
