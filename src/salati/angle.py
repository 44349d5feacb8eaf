"""Angle value type and normalization helpers shared by the astronomy layer."""

import math
from dataclasses import dataclass


class InvalidAngleOperation(ArithmeticError):
    """Arithmetic that has no defined result, e.g. dividing by a zero angle."""


def normalized_to_scale(value: float, maximum: float) -> float:
    """Map value into [0, maximum) using floor division.

    A negative maximum maps into (maximum, 0], mirroring floor semantics.
    """
    return value - maximum * math.floor(value / maximum)


@dataclass(frozen=True)
class Angle:
    """A scalar angle stored in degrees."""

    degrees: float

    @classmethod
    def from_radians(cls, value: float) -> "Angle":
        return cls(value * 180.0 / math.pi)

    def radians(self) -> float:
        return self.degrees * math.pi / 180.0

    def unwound(self) -> "Angle":
        """Return the equivalent angle in [0, 360)."""
        return Angle(normalized_to_scale(self.degrees, 360.0))

    def quadrant_shifted(self) -> "Angle":
        """Return the equivalent angle in [-180, 180]."""
        if -180.0 <= self.degrees <= 180.0:
            return self
        return Angle(self.degrees - 360.0 * _round_half_away(self.degrees / 360.0))

    def __add__(self, other: "Angle") -> "Angle":
        return Angle(self.degrees + other.degrees)

    def __sub__(self, other: "Angle") -> "Angle":
        return Angle(self.degrees - other.degrees)

    def __mul__(self, other: "Angle") -> "Angle":
        return Angle(self.degrees * other.degrees)

    def __truediv__(self, other: "Angle") -> "Angle":
        if other.degrees == 0.0:
            raise InvalidAngleOperation("Cannot divide by a zero angle.")
        return Angle(self.degrees / other.degrees)


def _round_half_away(value: float) -> float:
    # round() is banker's rounding; halves go away from zero here
    return math.copysign(math.floor(abs(value) + 0.5), value)
