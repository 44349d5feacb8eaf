"""Prayer time computation layer — sun events, high-latitude fallbacks and night points."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from pytz import utc

from salati.angle import Angle
from salati.astronomy import (
    adjust_time,
    day_of_year,
    nearest_minute,
    season_adjusted_evening_twilight,
    season_adjusted_morning_twilight,
    tomorrow,
    yesterday,
)
from salati.models import (
    HIGH_LATITUDE_RESOLUTION_MESSAGE,
    POLAR_CIRCLE_RESOLUTION_MESSAGE,
    Coordinates,
    Method,
    Parameters,
    PolarCircleResolution,
    Prayer,
    PrayerTime,
    PrayerTimeResolution,
    is_high_latitude,
)
from salati.schedule import PrayerSchedule
from salati.solar import SolarTime

logger = logging.getLogger(__name__)

UNSAFE_LATITUDE = 65.0  # Nearest-town search stops below this |latitude|
LATITUDE_VARIATION_STEP = 0.5
MAX_DAY_SEARCH = 183  # Half a year in either direction


@dataclass(frozen=True)
class _SolarDay:
    """Sun events of a day and of the day after, as used for one computation."""

    today: SolarTime
    tomorrow: SolarTime
    resolution: PrayerTimeResolution  # NORMAL or POLAR_CIRCLE


def _solve(day: date, coordinates: Coordinates) -> tuple[SolarTime, SolarTime] | None:
    today = SolarTime(day, coordinates)
    following = SolarTime(tomorrow(day), coordinates)
    if today.is_valid and following.is_valid:
        return today, following
    return None


def _nearest_day(day: date, coordinates: Coordinates) -> _SolarDay | None:
    later = earlier = day
    for _ in range(MAX_DAY_SEARCH):
        later, earlier = tomorrow(later), yesterday(earlier)
        for candidate in (later, earlier):
            solved = _solve(candidate, coordinates)
            if solved is not None:
                logger.debug(
                    "Polar circle: borrowing sun events of %s for %s", candidate, day
                )
                return _SolarDay(
                    today=solved[0].anchored(day),
                    tomorrow=solved[1].anchored(tomorrow(day)),
                    resolution=PrayerTimeResolution.POLAR_CIRCLE,
                )
    return None


def _nearest_town(day: date, coordinates: Coordinates) -> _SolarDay | None:
    latitude = coordinates.latitude
    while abs(latitude) >= UNSAFE_LATITUDE:
        latitude -= LATITUDE_VARIATION_STEP if latitude > 0 else -LATITUDE_VARIATION_STEP
        solved = _solve(day, Coordinates(latitude, coordinates.longitude))
        if solved is not None:
            logger.debug(
                "Polar circle: borrowing sun events of latitude %.1f for %.4f",
                latitude,
                coordinates.latitude,
            )
            return _SolarDay(
                today=solved[0],
                tomorrow=solved[1],
                resolution=PrayerTimeResolution.POLAR_CIRCLE,
            )
    return None


def calculate_solar_day(
    day: date,
    coordinates: Coordinates,
    parameters: Parameters,
    today: SolarTime | None = None,
) -> _SolarDay:
    """Sun events for ``day`` and the day after, resolving polar days if configured.

    ``today`` may carry the already solved events of ``day``. With Unresolved
    (or UmmAlQura, which has no published polar rule) the unsolvable geometry
    is kept and the affected times come out absent.
    """
    if today is None:
        today = SolarTime(day, coordinates)
    following = SolarTime(tomorrow(day), coordinates)
    if today.is_valid and following.is_valid:
        return _SolarDay(today, following, PrayerTimeResolution.NORMAL)

    if today.is_valid:
        logger.debug("No sunrise or sunset at %s on %s", coordinates, tomorrow(day))
    else:
        logger.warning("No sunrise or sunset at %s on %s", coordinates, day)
    strategy = parameters.polar_circle_resolution
    resolved = None
    if strategy is PolarCircleResolution.NEAREST_DAY:
        resolved = _nearest_day(day, coordinates)
    elif strategy is PolarCircleResolution.NEAREST_TOWN:
        resolved = _nearest_town(day, coordinates)

    if resolved is None:
        return _SolarDay(today, following, PrayerTimeResolution.NORMAL)
    return resolved


def _night_duration(solar_day: _SolarDay) -> timedelta | None:
    if solar_day.today.sunset is None or solar_day.tomorrow.sunrise is None:
        return None
    return solar_day.tomorrow.sunrise - solar_day.today.sunset


def _fraction(night: timedelta, portion: float) -> timedelta:
    return timedelta(seconds=int(portion * int(night.total_seconds())))


def _resolved(
    value: datetime | None, resolution: PrayerTimeResolution, message: str = ""
) -> PrayerTime:
    if value is None:
        return PrayerTime(None)
    if resolution is PrayerTimeResolution.POLAR_CIRCLE and not message:
        message = POLAR_CIRCLE_RESOLUTION_MESSAGE
    return PrayerTime(value, resolution, message)


def _finish(
    value: datetime | None,
    prayer: Prayer,
    parameters: Parameters,
    resolution: PrayerTimeResolution,
    message: str = "",
) -> PrayerTime:
    if value is not None:
        value = adjust_time(value, parameters.time_adjustment(prayer))
    return _resolved(value, resolution, message)


def calculate_fajr(
    parameters: Parameters,
    solar_day: _SolarDay,
    coordinates: Coordinates,
    day: date,
) -> PrayerTime:
    """Fajr of ``day``: the twilight angle, bounded by the high-latitude safety floor."""
    solar = solar_day.today
    night = _night_duration(solar_day)
    fajr = solar.time_for_solar_angle(Angle(-parameters.fajr_angle), after_transit=False)
    resolution = solar_day.resolution
    message = ""

    is_moonsighting = parameters.method is Method.MOONSIGHTING_COMMITTEE
    if (
        is_moonsighting
        and is_high_latitude(coordinates, parameters.method)
        and solar.sunrise is not None
        and night is not None
    ):
        fajr = solar.sunrise - timedelta(seconds=int(night.total_seconds()) // 7)

    safe_fajr = None
    if solar.sunrise is not None:
        if is_moonsighting:
            safe_fajr = season_adjusted_morning_twilight(
                coordinates.latitude, day_of_year(day), day.year, solar.sunrise
            )
        elif night is not None:
            safe_fajr = solar.sunrise - _fraction(night, parameters.night_portions()[0])

    if (
        is_high_latitude(coordinates)
        and safe_fajr is not None
        and (fajr is None or fajr < safe_fajr)
    ):
        logger.debug("High latitude rule: Fajr %s moved to %s", fajr, safe_fajr)
        fajr = safe_fajr
        resolution = PrayerTimeResolution.HIGH_LATITUDE_RULE
        message = HIGH_LATITUDE_RESOLUTION_MESSAGE

    return _finish(fajr, Prayer.FAJR, parameters, resolution, message)


def calculate_isha(
    parameters: Parameters,
    solar_day: _SolarDay,
    coordinates: Coordinates,
    day: date,
) -> PrayerTime:
    """Isha of ``day``: a fixed interval after sunset, or the twilight angle under a safety ceiling."""
    solar = solar_day.today
    resolution = solar_day.resolution
    message = ""

    if parameters.isha_interval > 0:
        isha = None
        if solar.sunset is not None:
            isha = solar.sunset + timedelta(minutes=parameters.isha_interval)
        return _finish(isha, Prayer.ISHA, parameters, resolution)

    night = _night_duration(solar_day)
    isha = solar.time_for_solar_angle(Angle(-parameters.isha_angle), after_transit=True)

    is_moonsighting = parameters.method is Method.MOONSIGHTING_COMMITTEE
    if (
        is_moonsighting
        and is_high_latitude(coordinates, parameters.method)
        and solar.sunset is not None
        and night is not None
    ):
        isha = solar.sunset + timedelta(seconds=int(night.total_seconds()) // 7)

    safe_isha = None
    if solar.sunset is not None:
        if is_moonsighting:
            safe_isha = season_adjusted_evening_twilight(
                coordinates.latitude, day_of_year(day), day.year, solar.sunset
            )
        elif night is not None:
            safe_isha = solar.sunset + _fraction(night, parameters.night_portions()[1])

    if (
        is_high_latitude(coordinates)
        and safe_isha is not None
        and (isha is None or isha > safe_isha)
    ):
        logger.debug("High latitude rule: Isha %s moved to %s", isha, safe_isha)
        isha = safe_isha
        resolution = PrayerTimeResolution.HIGH_LATITUDE_RULE
        message = HIGH_LATITUDE_RESOLUTION_MESSAGE

    return _finish(isha, Prayer.ISHA, parameters, resolution, message)


def calculate_night(
    maghrib: datetime | None,
    fajr_tomorrow: datetime | None,
    resolution: PrayerTimeResolution = PrayerTimeResolution.NORMAL,
) -> tuple[PrayerTime, PrayerTime]:
    """Middle of the night and start of its last third, each to the nearest minute."""
    if maghrib is None or fajr_tomorrow is None:
        return PrayerTime(None), PrayerTime(None)
    night = (fajr_tomorrow - maghrib).total_seconds()
    middle = maghrib + timedelta(seconds=int(night / 2.0))
    last_third = maghrib + timedelta(seconds=int(night * (2.0 / 3.0)))
    return (
        _resolved(nearest_minute(middle), resolution),
        _resolved(nearest_minute(last_third), resolution),
    )


def _shifted(
    value: datetime | None,
    prayer: Prayer,
    parameters: Parameters,
    resolution: PrayerTimeResolution,
) -> PrayerTime:
    if value is None:
        logger.warning("%s has no solution", prayer.value)
    return _finish(value, prayer, parameters, resolution)


def compute_prayer_times(
    day: date, coordinates: Coordinates, parameters: Parameters
) -> PrayerSchedule:
    """Compute the full prayer schedule of ``day``.

    Args:
        day: Calendar date; sun events are solved from 0h UTC of that date.
        coordinates: Observer position.
        parameters: Calculation convention (see salati.methods.parameters_for).

    Returns:
        PrayerSchedule whose entries carry a UTC instant or None, a resolution
        code and an advisory message when a fallback fired.
    """
    next_day = tomorrow(day)
    solar_day = calculate_solar_day(day, coordinates, parameters)
    solar = solar_day.today
    resolution = solar_day.resolution
    solar_next_day = calculate_solar_day(
        next_day,
        coordinates,
        parameters,
        today=solar_day.tomorrow if resolution is PrayerTimeResolution.NORMAL else None,
    )
    fajr = calculate_fajr(parameters, solar_day, coordinates, day)
    sunrise = _shifted(solar.sunrise, Prayer.SUNRISE, parameters, resolution)
    dhuhr = _shifted(solar.transit, Prayer.DHUHR, parameters, resolution)
    asr = _shifted(
        solar.afternoon(parameters.madhab.shadow_length_ratio),
        Prayer.ASR,
        parameters,
        resolution,
    )
    maghrib = _shifted(solar.sunset, Prayer.MAGHRIB, parameters, resolution)
    isha = calculate_isha(parameters, solar_day, coordinates, day)

    fajr_tomorrow = calculate_fajr(parameters, solar_next_day, coordinates, next_day)
    night_resolution = (
        PrayerTimeResolution.POLAR_CIRCLE
        if PrayerTimeResolution.POLAR_CIRCLE in (resolution, solar_next_day.resolution)
        else PrayerTimeResolution.NORMAL
    )
    middle_of_the_night, qiyam = calculate_night(
        maghrib.time, fajr_tomorrow.time, night_resolution
    )

    return PrayerSchedule(
        fajr=fajr,
        sunrise=sunrise,
        solar_sunrise=_resolved(solar.sunrise, resolution),
        dhuhr=dhuhr,
        asr=asr,
        maghrib=maghrib,
        solar_sunset=_resolved(solar.sunset, resolution),
        isha=isha,
        middle_of_the_night=middle_of_the_night,
        qiyam=qiyam,
        fajr_tomorrow=fajr_tomorrow,
        coordinates=coordinates,
        date=utc.localize(datetime(day.year, day.month, day.day)),
        parameters=parameters,
    )

