"""
Pytest configuration for the salati suite.

- Registers Hypothesis profiles for local dev and CI.
- Shared locations and parameter sets used across test modules.
"""

import os
from datetime import date

import pytest
from hypothesis import HealthCheck, settings

from salati.methods import parameters_for
from salati.models import Coordinates, Madhab, Method, Parameters

# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,  # a schedule solves ~30 sun events; avoid flaky timeouts
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=150,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Global fixtures
# ──────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SALATI_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("SALATI_"):
            monkeypatch.delenv(name)


@pytest.fixture
def tunis() -> Coordinates:
    return Coordinates(36.8065, 10.1815)


@pytest.fixture
def tunis_day() -> date:
    return date(2022, 8, 1)


@pytest.fixture
def mwl() -> Parameters:
    return parameters_for(Method.MUSLIM_WORLD_LEAGUE, Madhab.SHAFI)
