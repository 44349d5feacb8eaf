"""CLI entry point for prayer times.

    salati --coordinates "36.8065,10.1815" --method muslim_world_league
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date, datetime, tzinfo

from dotenv import load_dotenv
from pytz import UnknownTimeZoneError, timezone, utc
from timezonefinder import TimezoneFinder

from salati.compute import compute_prayer_times
from salati.config import ConfigError, Settings, load_settings
from salati.i18n import prayer_name, t
from salati.methods import parameters_for
from salati.models import (
    Coordinates,
    HighLatitudeRule,
    Madhab,
    Method,
    PolarCircleResolution,
    Prayer,
    TimeAdjustment,
    Twilight,
)
from salati.schedule import PrayerSchedule

logger = logging.getLogger(__name__)

_DISPLAYED: tuple[Prayer, ...] = (
    Prayer.FAJR,
    Prayer.SUNRISE,
    Prayer.DHUHR,
    Prayer.ASR,
    Prayer.MAGHRIB,
    Prayer.ISHA,
    Prayer.MIDDLE_OF_THE_NIGHT,
    Prayer.QIYAM,
)
_CLOCK_FORMATS = {"24h": "%H:%M", "12h": "%I:%M %p"}


def parse_coordinates(raw: str) -> Coordinates:
    """Parse 'latitude,longitude' into Coordinates."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected two comma-separated numbers, got {raw!r}")
    return Coordinates(float(parts[0]), float(parts[1]))


def parse_adjustments(raw: str) -> TimeAdjustment:
    """Parse 'fajr=2,isha=-1' into a TimeAdjustment."""
    values: dict[str, int] = {}
    for item in filter(None, (p.strip() for p in raw.split(","))):
        name, sep, minutes = item.partition("=")
        if not sep or name.strip() not in TimeAdjustment.__dataclass_fields__:
            raise ValueError(f"invalid adjustment: {item!r}")
        values[name.strip()] = int(minutes)
    return TimeAdjustment(**values)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salati", description="Compute Islamic prayer times for a location and date."
    )
    parser.add_argument("-c", "--coordinates", help="'latitude,longitude' in degrees")
    parser.add_argument("-d", "--date", type=date.fromisoformat, help="YYYY-MM-DD")
    parser.add_argument(
        "--method",
        choices=[m.value for m in Method],
        default=settings.method.value,
    )
    parser.add_argument(
        "--madhab",
        choices=[m.name.lower() for m in Madhab],
        default=settings.madhab.name.lower(),
    )
    parser.add_argument(
        "--twilight", choices=[tw.value for tw in Twilight], default=Twilight.RED.value
    )
    parser.add_argument(
        "--high-latitude-rule",
        choices=[r.value for r in HighLatitudeRule],
        help="defaults to the recommended rule for the coordinates",
    )
    parser.add_argument(
        "--polar-circle-resolution",
        choices=[r.value for r in PolarCircleResolution],
        default=PolarCircleResolution.UNRESOLVED.value,
    )
    parser.add_argument("--adjustments", default="", help="e.g. 'fajr=2,isha=-1'")
    parser.add_argument("--timezone", default=settings.timezone, help="IANA zone name")
    parser.add_argument("--lang", choices=["en", "ar"], default=settings.lang)
    parser.add_argument("--clock", choices=sorted(_CLOCK_FORMATS), default="24h")
    return parser


def resolve_timezone(name: str | None, coordinates: Coordinates) -> tzinfo:
    """Explicit zone name, else the zone containing the coordinates, else UTC."""
    if name:
        return timezone(name)
    tz_str = TimezoneFinder().timezone_at(lat=coordinates.latitude, lng=coordinates.longitude)
    if tz_str is None:
        logger.warning("Timezone not found for %s, using UTC", coordinates)
        return utc
    return timezone(tz_str)


def format_schedule(
    schedule: PrayerSchedule,
    tz: tzinfo,
    now: datetime,
    lang: str = "en",
    clock: str = "24h",
) -> list[str]:
    """Render a schedule as display lines in ``tz``.

    Args:
        schedule: Computed prayer times.
        tz: Display timezone.
        now: Reference instant for the current/next prayer lines (aware).
        lang: Language code for names.
        clock: '24h' or '12h'.

    Returns:
        One line per prayer followed by the current/next/remaining summary.
    """
    fmt = _CLOCK_FORMATS[clock]
    day = schedule.date.date()
    width = max(len(prayer_name(p, lang, day)) for p in _DISPLAYED)
    lines: list[str] = []
    for prayer in _DISPLAYED:
        entry = schedule.prayer_time(prayer)
        value = (
            entry.time.astimezone(tz).strftime(fmt)
            if entry.time is not None
            else t("not_applicable", lang)
        )
        line = f"{prayer_name(prayer, lang, day):<{width}} : {value}"
        if entry.message:
            line += "  *"
        lines.append(line)

    messages = dict.fromkeys(
        schedule.prayer_time(p).message for p in _DISPLAYED if schedule.prayer_time(p).message
    )
    lines.extend(f"* {m}" for m in messages)

    current = schedule.current(now)
    upcoming = schedule.next(now)
    lines.append("")
    lines.append(
        f"{t('label_current', lang)} : "
        + (prayer_name(current, lang, day) if current else t("label_before_fajr", lang))
    )
    lines.append(f"{t('label_next', lang)} : {prayer_name(upcoming, lang, day)}")
    if schedule.prayer_time(upcoming).time is not None:
        hours, minutes = schedule.time_remaining(now)
        lines.append(t("label_remaining", lang).format(hours=hours, minutes=minutes))
    return lines


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"salati: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    try:
        coordinates = (
            parse_coordinates(args.coordinates) if args.coordinates else settings.coordinates
        )
    except ValueError as e:
        parser.error(t("error_coordinates", args.lang).format(error=e))
    try:
        adjustments = parse_adjustments(args.adjustments)
    except ValueError as e:
        parser.error(str(e))
    if coordinates is None:
        parser.error("--coordinates is required (or set SALATI_LATITUDE/SALATI_LONGITUDE)")

    try:
        tz = resolve_timezone(args.timezone, coordinates)
    except UnknownTimeZoneError as e:
        parser.error(f"unknown timezone: {e}")

    method = Method(args.method)
    rule = (
        HighLatitudeRule(args.high_latitude_rule)
        if args.high_latitude_rule
        else HighLatitudeRule.recommended(coordinates)
    )
    parameters = replace(
        parameters_for(method, Madhab[args.madhab.upper()]),
        twilight=Twilight(args.twilight),
        high_latitude_rule=rule,
        polar_circle_resolution=PolarCircleResolution(args.polar_circle_resolution),
        adjustments=adjustments,
    )

    now = datetime.now(utc)
    day = args.date or now.astimezone(tz).date()
    schedule = compute_prayer_times(day, coordinates, parameters)

    print(
        t("label_coordinates", args.lang).format(
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
            method=method.value,
        )
    )
    print(day.isoformat())
    print()
    for line in format_schedule(schedule, tz, now, lang=args.lang, clock=args.clock):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
