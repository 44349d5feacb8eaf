"""Astronomical primitives — Julian day, low-precision solar position, transit and hour angle.

Formulas follow Jean Meeus, *Astronomical Algorithms* (2nd ed.). Times are
returned as fractional hours from 0h UTC of the day being solved.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from salati.angle import Angle, normalized_to_scale

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
SIDEREAL_RATE = 360.985647  # Degrees of sidereal rotation per solar day


@dataclass(frozen=True)
class SolarCoordinates:
    """Apparent solar position for one Julian day (all values in degrees)."""

    declination: float
    right_ascension: float
    apparent_sidereal_time: float


# --- Calendar ---


def julian_day(year: int, month: int, day: int, hours: float = 0.0) -> float:
    """Julian Day for a proleptic Gregorian date (Meeus ch. 7).

    Args:
        year: Gregorian year.
        month: Month, 1-12.
        day: Day of month.
        hours: Fractional UTC hour added to the day.

    Returns:
        Continuous day count; 2000-01-01 12h UTC is 2451545.0.
    """
    y = year if month > 2 else year - 1
    m = month if month > 2 else month + 12
    d = day + hours / 24.0

    a = int(y / 100)
    b = 2 - a + int(a / 4)

    i0 = int(365.25 * (y + 4716))
    i1 = int(30.6001 * (m + 1))
    return i0 + i1 + d + b - 1524.5


def julian_century(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


def is_leap_year(year: int) -> bool:
    if year % 4 != 0:
        return False
    if year % 100 == 0 and year % 400 != 0:
        return False
    return True


def tomorrow(day: date) -> date:
    return day + timedelta(days=1)


def yesterday(day: date) -> date:
    return day - timedelta(days=1)


def day_of_year(day: date) -> int:
    return day.timetuple().tm_yday


def nearest_minute(when: datetime) -> datetime:
    """Round to the minute: up from 30 seconds, otherwise truncate."""
    truncated = when.replace(second=0, microsecond=0)
    if when.second >= 30:
        return truncated + timedelta(minutes=1)
    return truncated


def adjust_time(when: datetime, minutes: int) -> datetime:
    return when + timedelta(minutes=minutes)


# --- Solar position series ---


def mean_solar_longitude(t: float) -> float:
    """Geometric mean longitude of the sun (Meeus 25.2)."""
    term1 = 280.4664567
    term2 = 36000.76983 * t
    term3 = 0.0003032 * t**2
    return Angle(term1 + term2 + term3).unwound().degrees


def mean_lunar_longitude(t: float) -> float:
    """Geometric mean longitude of the moon (Meeus p. 144)."""
    return Angle(218.3165 + 481267.8813 * t).unwound().degrees


def ascending_lunar_node_longitude(t: float) -> float:
    term1 = 125.04452
    term2 = 1934.136261 * t
    term3 = 0.0020708 * t**2
    term4 = t**3 / 450000.0
    return Angle(term1 - term2 + term3 + term4).unwound().degrees


def mean_solar_anomaly(t: float) -> float:
    """Mean anomaly of the sun (Meeus 25.3)."""
    term1 = 357.52911
    term2 = 35999.05029 * t
    term3 = 0.0001537 * t**2
    return Angle(term1 + term2 - term3).unwound().degrees


def solar_equation_of_the_center(t: float, mean_anomaly: float) -> float:
    """Sun's equation of the center (Meeus p. 164)."""
    m = Angle(mean_anomaly).radians()
    term1 = (1.914602 - 0.004817 * t - 0.000014 * t**2) * math.sin(m)
    term2 = (0.019993 - 0.000101 * t) * math.sin(2 * m)
    term3 = 0.000289 * math.sin(3 * m)
    return term1 + term2 + term3


def apparent_solar_longitude(t: float, mean_longitude: float) -> float:
    """Apparent longitude of the sun, corrected for nutation and aberration (Meeus p. 164)."""
    longitude = mean_longitude + solar_equation_of_the_center(t, mean_solar_anomaly(t))
    omega = 125.04 - 1934.136 * t
    lam = longitude - 0.00569 - 0.00478 * math.sin(Angle(omega).radians())
    return Angle(lam).unwound().degrees


def mean_obliquity_of_the_ecliptic(t: float) -> float:
    """Mean obliquity of the ecliptic (Meeus 22.2)."""
    term1 = 23.439291
    term2 = 0.013004167 * t
    term3 = 0.0000001639 * t**2
    term4 = 0.0000005036 * t**3
    return term1 - term2 - term3 + term4


def apparent_obliquity_of_the_ecliptic(t: float, mean_obliquity: float) -> float:
    """Apparent obliquity, used for the apparent position of the sun (Meeus p. 165)."""
    omega = 125.04 - 1934.136 * t
    return mean_obliquity + 0.00256 * math.cos(Angle(omega).radians())


def mean_sidereal_time(t: float) -> float:
    """Mean sidereal time at Greenwich at 0h UT (Meeus 12.4)."""
    jd = t * DAYS_PER_CENTURY + J2000
    term1 = 280.46061837
    term2 = 360.98564736629 * (jd - J2000)
    term3 = 0.000387933 * t**2
    term4 = t**3 / 38710000.0
    return Angle(term1 + term2 + term3 - term4).unwound().degrees


def nutation_in_longitude(
    solar_longitude: float, lunar_longitude: float, ascending_node: float
) -> float:
    """Nutation in longitude in degrees (Meeus p. 144)."""
    l0 = Angle(solar_longitude).radians()
    lp = Angle(lunar_longitude).radians()
    omega = Angle(ascending_node).radians()
    term1 = (-17.2 / 3600.0) * math.sin(omega)
    term2 = (1.32 / 3600.0) * math.sin(2 * l0)
    term3 = (0.23 / 3600.0) * math.sin(2 * lp)
    term4 = (0.21 / 3600.0) * math.sin(2 * omega)
    return term1 - term2 - term3 + term4


def nutation_in_obliquity(
    solar_longitude: float, lunar_longitude: float, ascending_node: float
) -> float:
    """Nutation in obliquity in degrees (Meeus p. 144)."""
    l0 = Angle(solar_longitude).radians()
    lp = Angle(lunar_longitude).radians()
    omega = Angle(ascending_node).radians()
    term1 = (9.2 / 3600.0) * math.cos(omega)
    term2 = (0.57 / 3600.0) * math.cos(2 * l0)
    term3 = (0.10 / 3600.0) * math.cos(2 * lp)
    term4 = (0.09 / 3600.0) * math.cos(2 * omega)
    return term1 + term2 + term3 - term4


def solar_coordinates(jd: float) -> SolarCoordinates:
    """Apparent declination, right ascension and sidereal time of the sun at jd."""
    t = julian_century(jd)
    l0 = mean_solar_longitude(t)
    lp = mean_lunar_longitude(t)
    omega = ascending_lunar_node_longitude(t)
    lam = Angle(apparent_solar_longitude(t, l0)).radians()
    theta0 = mean_sidereal_time(t)
    d_psi = nutation_in_longitude(l0, lp, omega)
    d_epsilon = nutation_in_obliquity(l0, lp, omega)
    epsilon0 = mean_obliquity_of_the_ecliptic(t)
    epsilon_app = Angle(apparent_obliquity_of_the_ecliptic(t, epsilon0)).radians()

    # Meeus 25.7
    declination = Angle.from_radians(math.asin(math.sin(epsilon_app) * math.sin(lam)))
    # Meeus 25.6
    right_ascension = Angle.from_radians(
        math.atan2(math.cos(epsilon_app) * math.sin(lam), math.cos(lam))
    ).unwound()
    # Meeus p. 88
    apparent_sidereal_time = theta0 + (
        d_psi * 3600.0 * math.cos(Angle(epsilon0 + d_epsilon).radians())
    ) / 3600.0

    return SolarCoordinates(
        declination=declination.degrees,
        right_ascension=right_ascension.degrees,
        apparent_sidereal_time=apparent_sidereal_time,
    )


def equation_of_time(jd: float) -> float:
    """Apparent minus mean solar time, in minutes (Meeus 28.3).

    Positive when the sundial runs ahead of the clock.
    """
    t = julian_century(jd)
    l0 = mean_solar_longitude(t)
    lp = mean_lunar_longitude(t)
    omega = ascending_lunar_node_longitude(t)
    d_psi = nutation_in_longitude(l0, lp, omega)
    epsilon = apparent_obliquity_of_the_ecliptic(t, mean_obliquity_of_the_ecliptic(t))
    alpha = solar_coordinates(jd).right_ascension

    e = l0 - 0.0057183 - alpha + d_psi * math.cos(Angle(epsilon).radians())
    return Angle(e).quadrant_shifted().degrees * 4.0


# --- Transit and hour angle ---


def altitude_of_celestial_body(
    observer_latitude: float, declination: float, local_hour_angle: float
) -> float:
    """Altitude of a body above the horizon in degrees (Meeus 13.6)."""
    phi = Angle(observer_latitude).radians()
    delta = Angle(declination).radians()
    h = Angle(local_hour_angle).radians()
    term1 = math.sin(phi) * math.sin(delta)
    term2 = math.cos(phi) * math.cos(delta) * math.cos(h)
    return Angle.from_radians(math.asin(term1 + term2)).degrees


def interpolate(value: float, previous: float, following: float, factor: float) -> float:
    """Three-point interpolation (Meeus 3.3)."""
    a = value - previous
    b = following - value
    c = b - a
    return value + (factor / 2.0) * (a + b + factor * c)


def interpolate_angles(value: float, previous: float, following: float, factor: float) -> float:
    """Three-point interpolation that tolerates wrap-around at 360°."""
    a = Angle(value - previous).unwound().degrees
    b = Angle(following - value).unwound().degrees
    c = b - a
    return value + (factor / 2.0) * (a + b + factor * c)


def approximate_transit(
    longitude: float, sidereal_time: float, right_ascension: float
) -> float:
    """Fraction of the UTC day at which the sun transits the meridian (Meeus 15.2).

    The transit nearest the location's mean noon is chosen, so the result
    lies within half a day of ``0.5 - longitude/360`` and may fall outside
    [0, 1) near the date line. Consecutive dates then stay about 24 h apart.
    """
    longitude_west = -longitude
    fraction = (right_ascension + longitude_west - sidereal_time) / 360.0
    mean_noon = 0.5 + longitude_west / 360.0
    return mean_noon + normalized_to_scale(fraction - mean_noon + 0.5, 1.0) - 0.5


def corrected_transit(
    approx_transit: float,
    longitude: float,
    sidereal_time: float,
    right_ascension: float,
    previous_right_ascension: float,
    next_right_ascension: float,
) -> float:
    """Transit time in hours from 0h UTC after one correction step (Meeus p. 102)."""
    longitude_west = -longitude
    theta = Angle(sidereal_time + SIDEREAL_RATE * approx_transit).unwound().degrees
    alpha = Angle(
        interpolate_angles(
            right_ascension,
            previous_right_ascension,
            next_right_ascension,
            approx_transit,
        )
    ).unwound().degrees
    hour_angle = Angle(theta - longitude_west - alpha).quadrant_shifted().degrees
    delta_m = hour_angle / -360.0
    return (approx_transit + delta_m) * 24.0


def corrected_hour_angle(
    approx_transit: float,
    angle: float,
    latitude: float,
    longitude: float,
    after_transit: bool,
    sidereal_time: float,
    right_ascension: float,
    previous_right_ascension: float,
    next_right_ascension: float,
    declination: float,
    previous_declination: float,
    next_declination: float,
) -> float | None:
    """Time in hours from 0h UTC when the sun reaches altitude ``angle`` (Meeus p. 102).

    Args:
        approx_transit: Day fraction returned by approximate_transit().
        angle: Target solar altitude in degrees, negative below the horizon.
        latitude: Observer latitude in degrees.
        longitude: Observer longitude in degrees, east positive.
        after_transit: Solve for the afternoon crossing when True.
        sidereal_time: Apparent sidereal time at 0h UT.
        right_ascension: Solar right ascension for the day and its neighbours.
        declination: Solar declination for the day and its neighbours.

    Returns:
        Fractional hours, or None when the sun never reaches that altitude.
    """
    longitude_west = -longitude
    phi = Angle(latitude).radians()
    delta = Angle(declination).radians()
    term1 = math.sin(Angle(angle).radians()) - math.sin(phi) * math.sin(delta)
    term2 = math.cos(phi) * math.cos(delta)
    if term2 == 0.0:
        return None
    cos_h0 = term1 / term2
    if cos_h0 < -1.0 or cos_h0 > 1.0:
        return None

    h0 = Angle.from_radians(math.acos(cos_h0)).degrees
    m = approx_transit + h0 / 360.0 if after_transit else approx_transit - h0 / 360.0
    theta = Angle(sidereal_time + SIDEREAL_RATE * m).unwound().degrees
    alpha = Angle(
        interpolate_angles(right_ascension, previous_right_ascension, next_right_ascension, m)
    ).unwound().degrees
    delta_m_declination = interpolate(declination, previous_declination, next_declination, m)
    hour_angle = theta - longitude_west - alpha
    altitude = altitude_of_celestial_body(latitude, delta_m_declination, hour_angle)

    term3 = altitude - angle
    term4 = (
        360.0
        * math.cos(Angle(delta_m_declination).radians())
        * math.cos(phi)
        * math.sin(Angle(hour_angle).radians())
    )
    if term4 == 0.0:
        return m * 24.0
    return (m + term3 / term4) * 24.0


# --- Seasonal twilight (Moonsighting Committee) ---


def days_since_solstice(day_number: int, year: int, latitude: float) -> int:
    """Days elapsed since the winter solstice of the observer's hemisphere."""
    northern_offset = 10
    southern_offset = 173 if is_leap_year(year) else 172
    days_in_year = 366 if is_leap_year(year) else 365

    if latitude >= 0:
        days = day_number + northern_offset
        if days >= days_in_year:
            days -= days_in_year
    else:
        days = day_number - southern_offset
        if days < 0:
            days += days_in_year
    return days


def _seasonal_minutes(a: float, b: float, c: float, d: float, dyy: int) -> float:
    if dyy < 91:
        return a + (b - a) / 91.0 * dyy
    if dyy < 137:
        return b + (c - b) / 46.0 * (dyy - 91)
    if dyy < 183:
        return c + (d - c) / 46.0 * (dyy - 137)
    if dyy < 229:
        return d + (c - d) / 46.0 * (dyy - 183)
    if dyy < 275:
        return c + (b - c) / 46.0 * (dyy - 229)
    return b + (a - b) / 91.0 * (dyy - 275)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def season_adjusted_morning_twilight(
    latitude: float, day_number: int, year: int, sunrise: datetime
) -> datetime:
    """Earliest safe Fajr per the Moonsighting Committee's seasonal model.

    Coefficients are the committee's published empirical constants; the
    offset before sunrise grows linearly with |latitude|.
    """
    lat = abs(latitude)
    a = 75 + 28.65 / 55.0 * lat
    b = 75 + 19.44 / 55.0 * lat
    c = 75 + 32.74 / 55.0 * lat
    d = 75 + 48.10 / 55.0 * lat

    dyy = days_since_solstice(day_number, year, latitude)
    minutes = _seasonal_minutes(a, b, c, d, dyy)
    return sunrise - timedelta(seconds=_round_half_away(minutes * 60.0))


def season_adjusted_evening_twilight(
    latitude: float, day_number: int, year: int, sunset: datetime
) -> datetime:
    """Latest safe Isha per the Moonsighting Committee's seasonal model (general shafaq)."""
    lat = abs(latitude)
    a = 75 + 25.60 / 55.0 * lat
    b = 75 + 2.050 / 55.0 * lat
    c = 75 - 9.21 / 55.0 * lat
    d = 75 + 6.14 / 55.0 * lat

    dyy = days_since_solstice(day_number, year, latitude)
    minutes = _seasonal_minutes(a, b, c, d, dyy)
    return sunset + timedelta(seconds=_round_half_away(minutes * 60.0))
