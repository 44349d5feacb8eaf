import pytest

from salati.methods import parameters_for
from salati.models import HighLatitudeRule, Madhab, Method, TimeAdjustment


@pytest.mark.parametrize(
    "method, fajr, isha, interval, adjustments",
    [
        (Method.MUSLIM_WORLD_LEAGUE, 18.0, 17.0, 0, TimeAdjustment(dhuhr=1)),
        (Method.EGYPTIAN, 19.5, 17.5, 0, TimeAdjustment(dhuhr=1)),
        (Method.KARACHI, 18.0, 18.0, 0, TimeAdjustment(dhuhr=1)),
        (Method.UMM_AL_QURA, 18.5, 0.0, 90, TimeAdjustment()),
        (Method.DUBAI, 18.2, 18.2, 0, TimeAdjustment(sunrise=-3, dhuhr=3, asr=3, maghrib=3)),
        (Method.MOONSIGHTING_COMMITTEE, 18.0, 18.0, 0, TimeAdjustment(dhuhr=5, maghrib=3)),
        (Method.NORTH_AMERICA, 15.0, 15.0, 0, TimeAdjustment(dhuhr=1)),
        (Method.KUWAIT, 18.0, 17.5, 0, TimeAdjustment()),
        (Method.QATAR, 18.0, 0.0, 90, TimeAdjustment()),
        (Method.SINGAPORE, 20.0, 18.0, 0, TimeAdjustment(dhuhr=1)),
        (Method.OTHER, 0.0, 0.0, 0, TimeAdjustment()),
    ],
)
def test_presets(
    method: Method, fajr: float, isha: float, interval: int, adjustments: TimeAdjustment
) -> None:
    params = parameters_for(method)
    assert params.method is method
    assert params.fajr_angle == fajr
    assert params.isha_angle == isha
    assert params.isha_interval == interval
    assert params.method_adjustments == adjustments
    assert params.adjustments == TimeAdjustment()


def test_every_method_has_a_preset() -> None:
    for method in Method:
        assert parameters_for(method).method is method


def test_madhab_is_passed_through() -> None:
    assert parameters_for(Method.KARACHI, Madhab.HANAFI).madhab is Madhab.HANAFI
    assert parameters_for(Method.KARACHI).madhab is Madhab.SHAFI


def test_moonsighting_committee_uses_seventh_of_the_night() -> None:
    params = parameters_for(Method.MOONSIGHTING_COMMITTEE)
    assert params.high_latitude_rule is HighLatitudeRule.SEVENTH_OF_THE_NIGHT
    assert parameters_for(Method.EGYPTIAN).high_latitude_rule is (
        HighLatitudeRule.MIDDLE_OF_THE_NIGHT
    )
