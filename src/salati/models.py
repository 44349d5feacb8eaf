"""Data model definitions — enums, observer position and calculation parameters shared by every layer."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

HIGH_LATITUDE_THRESHOLD = 48.0
MOONSIGHTING_COMMITTEE_HIGH_LATITUDE = 55.0
HIGH_LATITUDE_RESOLUTION_MESSAGE = (
    "At higher latitudes, where Fajr and Isha times are very close to each other, "
    "we fallback to high latitude resolution strategy."
)
POLAR_CIRCLE_RESOLUTION_MESSAGE = (
    "The sun does not rise or set at this location on this date; "
    "times are borrowed from the polar circle resolution strategy."
)


class Method(Enum):
    """Preset conventions published by calculation authorities."""

    MUSLIM_WORLD_LEAGUE = "muslim_world_league"
    EGYPTIAN = "egyptian"  # Egyptian General Authority of Survey
    KARACHI = "karachi"  # University of Islamic Sciences, Karachi
    UMM_AL_QURA = "umm_al_qura"  # Umm al-Qura University, Makkah
    DUBAI = "dubai"  # The Gulf Region
    MOONSIGHTING_COMMITTEE = "moonsighting_committee"
    NORTH_AMERICA = "north_america"  # ISNA
    KUWAIT = "kuwait"
    QATAR = "qatar"
    SINGAPORE = "singapore"
    OTHER = "other"


class Madhab(Enum):
    """School used for the Asr shadow length. Hanafi Asr is later."""

    SHAFI = 1
    HANAFI = 2

    @property
    def shadow_length_ratio(self) -> int:
        return self.value


class Twilight(Enum):
    """Which twilight colour (shafaq) marks the end of Maghrib."""

    WHITE = "white"
    RED = "red"


class PolarCircleResolution(Enum):
    NEAREST_TOWN = "nearest_town"
    NEAREST_DAY = "nearest_day"
    UMM_AL_QURA = "umm_al_qura"
    UNRESOLVED = "unresolved"


class Prayer(Enum):
    """Obligatory prayers plus sunrise and the night points."""

    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"
    MIDDLE_OF_THE_NIGHT = "middle_of_the_night"
    QIYAM = "qiyam"
    FAJR_TOMORROW = "fajr_tomorrow"


class PrayerTimeResolution(Enum):
    NORMAL = "normal"  # No adjustment or correction applied
    HIGH_LATITUDE_RULE = "high_latitude_rule"  # Clamped by the high latitude rule
    INVALID = "invalid"  # No solution for this date/location
    POLAR_CIRCLE = "polar_circle"  # Borrowed from a polar circle resolution


@dataclass(frozen=True)
class Coordinates:
    """Observer position. Validated on construction."""

    latitude: float  # Latitude (decimal degrees, north positive)
    longitude: float  # Longitude (decimal degrees, east positive)

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range [-180, 180]: {self.longitude}")


def is_high_latitude(coordinates: Coordinates, method: Method | None = None) -> bool:
    """Whether the latitude is beyond the threshold where twilight degenerates.

    The Moonsighting Committee uses its own 55° threshold; every other
    convention uses 48°. The test is on the magnitude of the latitude, so a
    southern location such as -51° is high latitude too; a signed comparison
    would never clamp the southern hemisphere.
    """
    if method is Method.MOONSIGHTING_COMMITTEE:
        return abs(coordinates.latitude) >= MOONSIGHTING_COMMITTEE_HIGH_LATITUDE
    return abs(coordinates.latitude) >= HIGH_LATITUDE_THRESHOLD


class HighLatitudeRule(Enum):
    MIDDLE_OF_THE_NIGHT = "middle_of_the_night"
    SEVENTH_OF_THE_NIGHT = "seventh_of_the_night"
    TWILIGHT_ANGLE = "twilight_angle"

    @classmethod
    def recommended(cls, coordinates: Coordinates) -> "HighLatitudeRule":
        if is_high_latitude(coordinates):
            return cls.SEVENTH_OF_THE_NIGHT
        return cls.MIDDLE_OF_THE_NIGHT


@dataclass(frozen=True)
class TimeAdjustment:
    """Per-prayer offsets in minutes. Positive or negative."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def for_prayer(self, prayer: Prayer) -> int:
        return getattr(self, prayer.value, 0)


@dataclass(frozen=True)
class Parameters:
    """Full configuration for one computation. Immutable once built.

    A positive ``isha_interval`` (minutes after sunset) takes precedence over
    ``isha_angle``, which is zeroed on construction.
    """

    fajr_angle: float  # Sun depression for Fajr (degrees)
    isha_angle: float  # Sun depression for Isha (degrees)
    method: Method = Method.OTHER
    isha_interval: int = 0  # Minutes after sunset; 0 means use isha_angle
    madhab: Madhab = Madhab.SHAFI
    twilight: Twilight = Twilight.RED
    high_latitude_rule: HighLatitudeRule = HighLatitudeRule.MIDDLE_OF_THE_NIGHT
    polar_circle_resolution: PolarCircleResolution = PolarCircleResolution.UNRESOLVED
    adjustments: TimeAdjustment = field(default_factory=TimeAdjustment)  # User supplied
    method_adjustments: TimeAdjustment = field(default_factory=TimeAdjustment)

    def __post_init__(self) -> None:
        if self.isha_interval < 0:
            raise ValueError(f"isha_interval must be >= 0: {self.isha_interval}")
        if self.isha_interval > 0 and self.isha_angle != 0.0:
            object.__setattr__(self, "isha_angle", 0.0)

    def with_isha_interval(self, minutes: int) -> "Parameters":
        return replace(self, isha_interval=minutes, isha_angle=0.0)

    def night_portions(self) -> tuple[float, float]:
        """Fractions of the night used as Fajr/Isha safety bounds."""
        if self.high_latitude_rule is HighLatitudeRule.MIDDLE_OF_THE_NIGHT:
            return 1.0 / 2.0, 1.0 / 2.0
        if self.high_latitude_rule is HighLatitudeRule.SEVENTH_OF_THE_NIGHT:
            return 1.0 / 7.0, 1.0 / 7.0
        return self.fajr_angle / 60.0, self.isha_angle / 60.0

    def time_adjustment(self, prayer: Prayer) -> int:
        """Summed user and method offset in minutes. Night points are never shifted."""
        if prayer in (Prayer.MIDDLE_OF_THE_NIGHT, Prayer.QIYAM, Prayer.FAJR_TOMORROW):
            return 0
        return self.adjustments.for_prayer(prayer) + self.method_adjustments.for_prayer(
            prayer
        )


@dataclass(frozen=True)
class PrayerTime:
    """One computed instant and how it was resolved."""

    time: datetime | None  # UTC instant, None when there is no solution
    code: PrayerTimeResolution | None = None
    message: str = ""  # Advisory text, empty unless a fallback fired

    def __post_init__(self) -> None:
        if self.code is None:
            code = (
                PrayerTimeResolution.NORMAL
                if self.time is not None
                else PrayerTimeResolution.INVALID
            )
            object.__setattr__(self, "code", code)
