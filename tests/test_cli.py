from datetime import date, datetime

import pytest
from pytz import timezone, utc

from salati.cli import (
    format_schedule,
    main,
    parse_adjustments,
    parse_coordinates,
    resolve_timezone,
)
from salati.compute import compute_prayer_times
from salati.models import Coordinates, Parameters, TimeAdjustment
from salati.schedule import PrayerSchedule

TUNIS_ARGS = ["--coordinates", "36.8065,10.1815", "--date", "2022-08-01", "--timezone", "Africa/Tunis"]
WIDTH = len("Middle Of The Night")


@pytest.fixture
def schedule(tunis: Coordinates, tunis_day: date, mwl: Parameters) -> PrayerSchedule:
    return compute_prayer_times(tunis_day, tunis, mwl)


def test_parse_coordinates() -> None:
    assert parse_coordinates("36.8065, 10.1815") == Coordinates(36.8065, 10.1815)
    assert parse_coordinates("-33.9,18.4") == Coordinates(-33.9, 18.4)


@pytest.mark.parametrize("raw", ["36.8", "a,b", "1,2,3", "91,0"])
def test_parse_coordinates_rejects(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_coordinates(raw)


def test_parse_adjustments() -> None:
    assert parse_adjustments("fajr=2, isha=-1") == TimeAdjustment(fajr=2, isha=-1)
    assert parse_adjustments("") == TimeAdjustment()


@pytest.mark.parametrize("raw", ["fajr", "qiyam=3", "dhuhr=soon"])
def test_parse_adjustments_rejects(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_adjustments(raw)


def test_resolve_timezone() -> None:
    assert resolve_timezone("Asia/Karachi", Coordinates(0.0, 0.0)).zone == "Asia/Karachi"
    assert resolve_timezone(None, Coordinates(36.8065, 10.1815)).zone == "Africa/Tunis"


def test_format_schedule(schedule: PrayerSchedule) -> None:
    now = utc.localize(datetime(2022, 8, 1, 5, 0))
    lines = format_schedule(schedule, timezone("Africa/Tunis"), now)

    assert lines[0] == f"{'Fajr':<{WIDTH}} : 03:43"
    assert lines[1] == f"{'Sunrise':<{WIDTH}} : 05:24"
    assert lines[2] == f"{'Dhuhr':<{WIDTH}} : 12:26"
    assert lines[3] == f"{'Asr':<{WIDTH}} : 16:13"
    assert lines[-3:] == ["Current : Sunrise", "Next : Dhuhr", "Remaining: 6h 27m"]
    assert not any(line.startswith("* ") for line in lines)


def test_format_schedule_twelve_hour_arabic(schedule: PrayerSchedule) -> None:
    now = utc.localize(datetime(2022, 8, 1, 1, 0))
    lines = format_schedule(schedule, timezone("Africa/Tunis"), now, lang="ar", clock="12h")

    assert lines[0].startswith("الفجر")
    assert lines[0].endswith("03:43 AM")
    assert "قبل الفجر" in lines[-3]


def test_format_schedule_marks_fallbacks() -> None:
    day = date(2022, 12, 21)
    polar = compute_prayer_times(day, Coordinates(70.0, 19.0), Parameters(18.0, 17.0))
    lines = format_schedule(polar, utc, utc.localize(datetime(2022, 12, 21, 12, 0)))

    assert f"{'Sunrise':<{WIDTH}} : --:--" in lines
    # Maghrib has no instant, so no countdown is printed
    assert not any(line.startswith("Remaining") for line in lines)


def test_format_schedule_lists_messages_once() -> None:
    london = compute_prayer_times(
        date(2022, 6, 21), Coordinates(51.5074, -0.1278), Parameters(18.0, 17.0)
    )
    lines = format_schedule(london, utc, utc.localize(datetime(2022, 6, 21, 12, 0)))

    assert lines[0].endswith("  *")
    assert sum(1 for line in lines if line.startswith("* ")) == 1


def test_main(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(TUNIS_ARGS) == 0
    out = capsys.readouterr().out
    assert "Using coordinates: 36.8065, 10.1815, method: muslim_world_league" in out
    assert "2022-08-01" in out
    assert f"{'Fajr':<{WIDTH}} : 03:43" in out


def test_main_friday_names_jumua(capsys: pytest.CaptureFixture[str]) -> None:
    args = ["--coordinates", "36.8065,10.1815", "--date", "2022-08-05", "--timezone", "UTC"]
    assert main(args) == 0
    assert "Jumua" in capsys.readouterr().out


def test_main_reads_coordinates_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("SALATI_LATITUDE", "36.8065")
    monkeypatch.setenv("SALATI_LONGITUDE", "10.1815")
    monkeypatch.setenv("SALATI_TIMEZONE", "Africa/Tunis")
    assert main(["--date", "2022-08-01", "--method", "egyptian"]) == 0
    assert "method: egyptian" in capsys.readouterr().out


def test_main_rejects_bad_configuration(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("SALATI_METHOD", "tehran")
    assert main(TUNIS_ARGS) == 2
    assert "SALATI_METHOD" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["--coordinates", "north"],
        ["--date", "2022-08-01"],
        TUNIS_ARGS + ["--adjustments", "fajr"],
        ["--coordinates", "36.8,10.1", "--timezone", "Mars/Olympus"],
    ],
)
def test_main_usage_errors(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
