"""Reported winds and their components relative to a runway."""

from dataclasses import dataclass
from math import cos, sin, radians
from typing import Optional


@dataclass(frozen=True)
class Wind:
    """
    A single wind report.

    Either directional (``from_degrees`` set) or variable
    (``is_variable``), never both. A variability range
    (``vary_from_degrees`` to ``vary_to_degrees``, clockwise) may be
    attached to either.

    Examples:
        Wind.directional(340, 13, gusts=24)   # 34013G24KT
        Wind.variable(3)                      # VRB03KT
    """

    from_degrees: Optional[int] = None
    is_variable: bool = False
    velocity: Optional[int] = None
    gusts: Optional[int] = None
    vary_from_degrees: Optional[int] = None
    vary_to_degrees: Optional[int] = None

    def __post_init__(self):
        if (self.from_degrees is not None) == self.is_variable:
            raise ValueError(f"Wind must be either directional or variable: {self!r}")
        if (self.vary_from_degrees is None) != (self.vary_to_degrees is None):
            raise ValueError(f"Wind variability needs both bounds: {self!r}")

    @classmethod
    def directional(cls, from_degrees: int, velocity: int, gusts: Optional[int] = None,
                    vary_from_degrees: Optional[int] = None,
                    vary_to_degrees: Optional[int] = None) -> 'Wind':
        return cls(from_degrees=from_degrees, velocity=velocity, gusts=gusts,
                   vary_from_degrees=vary_from_degrees, vary_to_degrees=vary_to_degrees)

    @classmethod
    def variable(cls, velocity: int, gusts: Optional[int] = None,
                 vary_from_degrees: Optional[int] = None,
                 vary_to_degrees: Optional[int] = None) -> 'Wind':
        return cls(is_variable=True, velocity=velocity, gusts=gusts,
                   vary_from_degrees=vary_from_degrees, vary_to_degrees=vary_to_degrees)

    @property
    def has_variability_range(self) -> bool:
        return self.vary_from_degrees is not None

    def __str__(self) -> str:
        speed = "//" if self.velocity is None else f"{self.velocity:02d}"
        if self.is_variable:
            result = f"VRB{speed}"
        else:
            result = f"{self.from_degrees:03d}{speed}"
        if self.gusts is not None:
            result += f"G{self.gusts:02d}"
        result += "KT"
        if self.has_variability_range:
            result += f" {self.vary_from_degrees:03d}V{self.vary_to_degrees:03d}"
        return result


@dataclass(frozen=True)
class WindComponents:
    """
    Crosswind and headwind for one runway, in whole knots.

    Negative headwind is a tailwind.
    """

    crosswind: int
    headwind: int

    @property
    def tailwind(self) -> int:
        return -self.headwind if self.headwind < 0 else 0

    def maximize(self, other: Optional['WindComponents']) -> 'WindComponents':
        """Worst of both: the larger crosswind and the larger tailwind."""
        if other is None:
            return self
        return WindComponents(
            crosswind=max(self.crosswind, other.crosswind),
            headwind=min(self.headwind, other.headwind),
        )

    def __str__(self) -> str:
        return f"xwind:{self.crosswind:02d} tailwind:{self.tailwind:02d}"


class WindComponentCalculator:
    """
    Decompose a wind onto a runway.

    Runways are given by number; the heading is ten times the number.
    Components are truncated toward zero.

    Variable winds are treated conservatively: with no stated range they
    count as a full crosswind and a full tailwind at the same time; with
    a range, the worst crosswind and the worst tailwind found anywhere
    in the range are used.
    """

    @staticmethod
    def calculate_excluding_gusts(wind: Wind, runway_number: int) -> WindComponents:
        if wind.velocity is None:
            raise ValueError(f"Wind must have a velocity: {wind!r}")
        return _calculate(wind, wind.velocity, runway_number)

    @staticmethod
    def calculate_including_gusts(wind: Wind, runway_number: int) -> WindComponents:
        if wind.velocity is None:
            raise ValueError(f"Wind must have a velocity: {wind!r}")
        velocity = wind.velocity
        if wind.gusts is not None and wind.gusts > velocity:
            velocity = wind.gusts
        return _calculate(wind, velocity, runway_number)


def _calculate(wind: Wind, velocity: int, runway_number: int) -> WindComponents:
    runway_heading = 10 * runway_number
    if not wind.is_variable:
        return _components(wind.from_degrees, velocity, runway_heading)
    if not wind.has_variability_range:
        return WindComponents(crosswind=velocity, headwind=-velocity)
    return _worst_case_in_range(wind.vary_from_degrees, wind.vary_to_degrees,
                                velocity, runway_heading)


def _components(from_degrees: int, velocity: int, runway_heading: int) -> WindComponents:
    angle = radians(runway_heading - from_degrees)
    return WindComponents(
        crosswind=abs(int(sin(angle) * velocity)),
        headwind=int(cos(angle) * velocity),
    )


def _in_range(direction: int, vary_from: int, vary_to: int) -> bool:
    """Whether direction lies on the clockwise arc from vary_from to vary_to."""
    return (direction - vary_from) % 360 <= (vary_to - vary_from) % 360


def _worst_case_in_range(vary_from: int, vary_to: int, velocity: int,
                         runway_heading: int) -> WindComponents:
    # Extremes of sin and cos lie on the arc endpoints unless the arc
    # spans a perpendicular or the reciprocal of the runway.
    at_from = _components(vary_from, velocity, runway_heading)
    at_to = _components(vary_to, velocity, runway_heading)
    worst = at_from.maximize(at_to)

    crosswind = worst.crosswind
    for perpendicular in ((runway_heading + 90) % 360, (runway_heading + 270) % 360):
        if _in_range(perpendicular, vary_from, vary_to):
            crosswind = velocity

    headwind = worst.headwind
    if _in_range((runway_heading + 180) % 360, vary_from, vary_to):
        headwind = -velocity

    return WindComponents(crosswind=crosswind, headwind=headwind)
