"""Runtime settings read from the environment (optionally populated from a .env file)."""

import os
from dataclasses import dataclass

from salati.models import Coordinates, Madhab, Method


class ConfigError(ValueError):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Defaults for the CLI. Every field may be overridden by a flag."""

    coordinates: Coordinates | None  # SALATI_LATITUDE / SALATI_LONGITUDE
    method: Method  # SALATI_METHOD
    madhab: Madhab  # SALATI_MADHAB ("shafi" or "hanafi")
    timezone: str | None  # SALATI_TIMEZONE, IANA name
    lang: str  # SALATI_LANG ("en" or "ar")
    log_level: str  # SALATI_LOG_LEVEL


def _float_env(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} is not a number: {raw!r}") from e


def _coordinates_env() -> Coordinates | None:
    latitude = _float_env("SALATI_LATITUDE")
    longitude = _float_env("SALATI_LONGITUDE")
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ConfigError("SALATI_LATITUDE and SALATI_LONGITUDE must be set together")
    try:
        return Coordinates(latitude, longitude)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def _method_env() -> Method:
    raw = os.environ.get("SALATI_METHOD", "").strip().lower()
    if not raw:
        return Method.MUSLIM_WORLD_LEAGUE
    try:
        return Method(raw)
    except ValueError as e:
        raise ConfigError(f"SALATI_METHOD is not a known method: {raw!r}") from e


def _madhab_env() -> Madhab:
    raw = os.environ.get("SALATI_MADHAB", "").strip().upper()
    if not raw:
        return Madhab.SHAFI
    try:
        return Madhab[raw]
    except KeyError as e:
        raise ConfigError(f"SALATI_MADHAB must be shafi or hanafi: {raw!r}") from e


def load_settings() -> Settings:
    """Read Settings from os.environ.

    Raises:
        ConfigError: When a variable is present but malformed.
    """
    return Settings(
        coordinates=_coordinates_env(),
        method=_method_env(),
        madhab=_madhab_env(),
        timezone=os.environ.get("SALATI_TIMEZONE") or None,
        lang=os.environ.get("SALATI_LANG", "en").strip() or "en",
        log_level=os.environ.get("SALATI_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )
