"""Preset parameters for the published calculation methods."""

from dataclasses import replace

from salati.models import (
    HighLatitudeRule,
    Madhab,
    Method,
    Parameters,
    TimeAdjustment,
)

# method -> (fajr angle, isha angle, isha interval minutes, method adjustments)
_PRESETS: dict[Method, tuple[float, float, int, TimeAdjustment]] = {
    Method.MUSLIM_WORLD_LEAGUE: (18.0, 17.0, 0, TimeAdjustment(dhuhr=1)),
    Method.EGYPTIAN: (19.5, 17.5, 0, TimeAdjustment(dhuhr=1)),
    Method.KARACHI: (18.0, 18.0, 0, TimeAdjustment(dhuhr=1)),
    Method.UMM_AL_QURA: (18.5, 0.0, 90, TimeAdjustment()),
    Method.DUBAI: (
        18.2,
        18.2,
        0,
        TimeAdjustment(sunrise=-3, dhuhr=3, asr=3, maghrib=3),
    ),
    Method.MOONSIGHTING_COMMITTEE: (18.0, 18.0, 0, TimeAdjustment(dhuhr=5, maghrib=3)),
    Method.NORTH_AMERICA: (15.0, 15.0, 0, TimeAdjustment(dhuhr=1)),
    Method.KUWAIT: (18.0, 17.5, 0, TimeAdjustment()),
    Method.QATAR: (18.0, 0.0, 90, TimeAdjustment()),
    Method.SINGAPORE: (20.0, 18.0, 0, TimeAdjustment(dhuhr=1)),
    Method.OTHER: (0.0, 0.0, 0, TimeAdjustment()),
}


def parameters_for(method: Method, madhab: Madhab = Madhab.SHAFI) -> Parameters:
    """Return the preset Parameters of ``method`` with the given madhab.

    Args:
        method: Calculation authority.
        madhab: School for the Asr shadow ratio.

    Returns:
        Parameters with the authority's angles, interval and minute adjustments.
        Further overrides go through ``dataclasses.replace``.
    """
    fajr_angle, isha_angle, isha_interval, method_adjustments = _PRESETS[method]
    params = Parameters(
        fajr_angle=fajr_angle,
        isha_angle=isha_angle,
        method=method,
        isha_interval=isha_interval,
        madhab=madhab,
        method_adjustments=method_adjustments,
    )
    if method is Method.MOONSIGHTING_COMMITTEE:
        params = replace(params, high_latitude_rule=HighLatitudeRule.SEVENTH_OF_THE_NIGHT)
    return params
