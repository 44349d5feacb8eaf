"""Simple two-language (en/ar) translation helper."""

from datetime import date

from salati.models import Prayer

_STRINGS: dict[str, dict[str, str]] = {
    "prayer_fajr": {
        "en": "Fajr",
        "ar": "الفجر",
    },
    "prayer_sunrise": {
        "en": "Sunrise",
        "ar": "الشروق",
    },
    "prayer_dhuhr": {
        "en": "Dhuhr",
        "ar": "الظهر",
    },
    "prayer_jumua": {
        "en": "Jumua",
        "ar": "الجمعة",
    },
    "prayer_asr": {
        "en": "Asr",
        "ar": "العصر",
    },
    "prayer_maghrib": {
        "en": "Maghrib",
        "ar": "المغرب",
    },
    "prayer_isha": {
        "en": "Isha",
        "ar": "العشاء",
    },
    "prayer_middle_of_the_night": {
        "en": "Middle Of The Night",
        "ar": "منتصف الليل",
    },
    "prayer_qiyam": {
        "en": "Qiyam",
        "ar": "القيام",
    },
    "label_coordinates": {
        "en": "Using coordinates: {latitude}, {longitude}, method: {method}",
        "ar": "الإحداثيات: {latitude}، {longitude}، الطريقة: {method}",
    },
    "label_current": {
        "en": "Current",
        "ar": "الحالية",
    },
    "label_next": {
        "en": "Next",
        "ar": "التالية",
    },
    "label_remaining": {
        "en": "Remaining: {hours}h {minutes}m",
        "ar": "المتبقي: {hours} س {minutes} د",
    },
    "label_before_fajr": {
        "en": "Before Fajr",
        "ar": "قبل الفجر",
    },
    "not_applicable": {
        "en": "--:--",
        "ar": "--:--",
    },
    "error_coordinates": {
        "en": "Coordinates must look like 'latitude,longitude' ({error})",
        "ar": "يجب أن تكون الإحداثيات بالشكل 'خط العرض,خط الطول' ({error})",
    },
}

_FRIDAY = 4  # date.weekday()


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def prayer_name(prayer: Prayer, lang: str = "en", on: date | None = None) -> str:
    """Display name of a prayer.

    Args:
        prayer: Prayer to name. FajrTomorrow is named like Fajr.
        lang: Language code ('en' or 'ar').
        on: Day the name is shown for; Dhuhr becomes Jumua on Fridays.

    Returns:
        Localized prayer name.
    """
    if prayer is Prayer.FAJR_TOMORROW:
        prayer = Prayer.FAJR
    if prayer is Prayer.DHUHR and on is not None and on.weekday() == _FRIDAY:
        return t("prayer_jumua", lang)
    return t(f"prayer_{prayer.value}", lang)
