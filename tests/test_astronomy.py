from datetime import date, datetime, timedelta

import pytest
from pytz import utc

from salati import astronomy as astro


def test_julian_day_epochs() -> None:
    assert astro.julian_day(2000, 1, 1, 12.0) == 2451545.0
    assert astro.julian_day(2022, 8, 1) == 2459792.5
    # Sputnik launch, Meeus example 7.a
    assert astro.julian_day(1957, 10, 4, 19.44) == pytest.approx(2436116.31, abs=1e-6)


def test_julian_century() -> None:
    assert astro.julian_century(astro.J2000) == 0.0
    assert astro.julian_century(astro.J2000 + 36525.0) == 1.0


@pytest.mark.parametrize(
    "year, expected",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False), (2400, True)],
)
def test_is_leap_year(year: int, expected: bool) -> None:
    assert astro.is_leap_year(year) is expected


@pytest.mark.parametrize(
    "start, expected",
    [
        (date(2015, 1, 31), date(2015, 2, 1)),
        (date(2000, 2, 28), date(2000, 2, 29)),
        (date(2001, 2, 28), date(2001, 3, 1)),
        (date(2006, 12, 31), date(2007, 1, 1)),
    ],
)
def test_tomorrow_crosses_boundaries(start: date, expected: date) -> None:
    assert astro.tomorrow(start) == expected
    assert astro.yesterday(expected) == start


def test_day_of_year() -> None:
    assert astro.day_of_year(date(2022, 1, 1)) == 1
    assert astro.day_of_year(date(2024, 12, 31)) == 366


@pytest.mark.parametrize(
    "given, expected",
    [
        (datetime(2015, 7, 13, 4, 37, 30), datetime(2015, 7, 13, 4, 38)),
        (datetime(2015, 7, 13, 5, 59, 20), datetime(2015, 7, 13, 5, 59)),
        (datetime(2015, 7, 13, 23, 59, 45), datetime(2015, 7, 14, 0, 0)),
    ],
)
def test_nearest_minute(given: datetime, expected: datetime) -> None:
    assert astro.nearest_minute(given) == expected


def test_adjust_time_negative_minutes() -> None:
    when = utc.localize(datetime(2022, 8, 1, 0, 1))
    assert astro.adjust_time(when, -3) == when - timedelta(minutes=3)


def test_solar_coordinates_meeus_25a() -> None:
    # 1992 October 13.0 TD
    coords = astro.solar_coordinates(2448908.5)
    assert coords.declination == pytest.approx(-7.78507, abs=1e-3)
    assert coords.right_ascension == pytest.approx(198.38083, abs=1e-3)


def test_mean_sidereal_time_meeus_12a() -> None:
    # 1987 April 10, 0h UT
    t = astro.julian_century(2446895.5)
    assert astro.mean_sidereal_time(t) == pytest.approx(197.693195, abs=1e-4)


def test_nutation_meeus_22a() -> None:
    t = astro.julian_century(2446895.5)
    l0 = astro.mean_solar_longitude(t)
    lp = astro.mean_lunar_longitude(t)
    omega = astro.ascending_lunar_node_longitude(t)
    assert astro.nutation_in_longitude(l0, lp, omega) * 3600.0 == pytest.approx(-3.788, abs=0.5)
    assert astro.nutation_in_obliquity(l0, lp, omega) * 3600.0 == pytest.approx(9.443, abs=0.5)


def test_equation_of_time_meeus_28b() -> None:
    assert astro.equation_of_time(2448908.5) == pytest.approx(13.709, abs=0.1)


def test_equation_of_time_matches_transit() -> None:
    jd = astro.julian_day(2022, 8, 1)
    longitude = 10.1815
    coords = astro.solar_coordinates(jd)
    approx = astro.approximate_transit(
        longitude, coords.apparent_sidereal_time, coords.right_ascension
    )
    previous = astro.solar_coordinates(jd - 1)
    following = astro.solar_coordinates(jd + 1)
    transit_hours = astro.corrected_transit(
        approx,
        longitude,
        coords.apparent_sidereal_time,
        coords.right_ascension,
        previous.right_ascension,
        following.right_ascension,
    )
    mean_noon = 12.0 - longitude / 15.0
    assert transit_hours == pytest.approx(mean_noon - astro.equation_of_time(jd) / 60.0, abs=1 / 60)


def test_altitude_overhead() -> None:
    assert astro.altitude_of_celestial_body(0.0, 0.0, 0.0) == pytest.approx(90.0)


def test_interpolate_meeus_3a() -> None:
    assert astro.interpolate(0.877366, 0.884226, 0.870531, 4.35 / 24.0) == pytest.approx(
        0.876125, abs=1e-6
    )


def test_interpolate_angles_wraps() -> None:
    assert astro.interpolate_angles(1.0, 359.0, 3.0, 0.5) == pytest.approx(2.0)


def test_approximate_transit_is_nearest_mean_noon() -> None:
    # mean noon at longitude -170 is 0.972 of the UTC day
    assert abs(astro.approximate_transit(-170.0, 10.0, 300.0) - (0.5 + 170.0 / 360.0)) <= 0.5
    assert 0.0 <= astro.approximate_transit(10.1815, 310.0, 130.0) < 1.0


@pytest.mark.parametrize("longitude", [178.4, 180.0, -178.0, -180.0])
def test_approximate_transit_advances_one_day_per_day(longitude: float) -> None:
    previous = None
    for day in range(1, 32):
        jd = astro.julian_day(2022, 12, day)
        coords = astro.solar_coordinates(jd)
        transit = jd + astro.approximate_transit(
            longitude, coords.apparent_sidereal_time, coords.right_ascension
        )
        if previous is not None:
            assert transit - previous == pytest.approx(1.0, abs=0.01)
        previous = transit


def test_corrected_hour_angle_no_solution_in_polar_night() -> None:
    assert (
        astro.corrected_hour_angle(
            0.45, -50.0 / 60.0, 70.0, 19.0, False, 90.0, 270.0, 269.0, 271.0,
            -23.44, -23.44, -23.44,
        )
        is None
    )


@pytest.mark.parametrize(
    "doy, year, latitude, expected",
    [
        (172, 2022, 51.5, 182),
        (15, 2022, 56.0, 25),
        (200, 2024, -40.0, 27),
        (360, 2022, 10.0, 5),
        (100, 2022, -10.0, 293),
    ],
)
def test_days_since_solstice(doy: int, year: int, latitude: float, expected: int) -> None:
    assert astro.days_since_solstice(doy, year, latitude) == expected


@pytest.mark.parametrize(
    "latitude, doy, year, morning, evening",
    [
        (51.5, 172, 2022, 7184, 4826),
        (56.0, 15, 2022, 6096, 5669),
        (-40.0, 200, 2024, 5631, 5312),
        (35.0, 300, 2023, 5378, 4924),
        (0.0, 1, 2022, 4500, 4500),
    ],
)
def test_season_adjusted_twilight(
    latitude: float, doy: int, year: int, morning: int, evening: int
) -> None:
    sunrise = utc.localize(datetime(year, 1, 1, 6, 0))
    sunset = utc.localize(datetime(year, 1, 1, 18, 0))
    assert astro.season_adjusted_morning_twilight(latitude, doy, year, sunrise) == (
        sunrise - timedelta(seconds=morning)
    )
    assert astro.season_adjusted_evening_twilight(latitude, doy, year, sunset) == (
        sunset + timedelta(seconds=evening)
    )
