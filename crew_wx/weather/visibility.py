"""Visibility values and their ordering."""

import re
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Optional, Iterable, Union

from crew_wx.utils.compound_fraction import CompoundFraction


# Per FAR AIM 5-4-20
FEET_PER_STATUTE_MILE = 5000
RVR_MAGNITUDE = 100
MAX_RVR = 60

# FAR AIM 5-4-20. 1 1/4 is 6000, not 6250.
SM_TO_FEET = {
    CompoundFraction.parse("1/4"): 1600,
    CompoundFraction.parse("1/2"): 2400,
    CompoundFraction.parse("5/8"): 3200,
    CompoundFraction.parse("3/4"): 4000,
    CompoundFraction.parse("7/8"): 4500,
    CompoundFraction.parse("1"): 5000,
    CompoundFraction.parse("1 1/4"): 6000,
}

_METERS = re.compile(r'^(\d{4})$')
_RVR = re.compile(r'^RVR(\d{1,2})$')
_UNLIMITED_METERS = 9999


class VisibilityKind(Enum):
    """Which form a visibility was reported in."""

    RVR = "RVR"
    STATUTE_MILE = "SM"
    UNLIMITED = "P6SM"


@dataclass(frozen=True)
class Visibility:
    """
    Runway visual range, statute mile visibility, or unlimited.

    Use the factory classmethods rather than the constructor:

        Visibility.rvr(16)              # 1600 ft
        Visibility.statute_mile("1/2")  # 2400 ft
        Visibility.unlimited()          # no feet value

    Two visibilities are equal only if they have the same form and value;
    use VisibilityComparator to compare across forms.
    """

    kind: VisibilityKind
    rvr_hundreds: Optional[int] = None
    statute_miles: Optional[CompoundFraction] = None

    def __post_init__(self):
        if self.kind == VisibilityKind.RVR:
            if self.rvr_hundreds is None or self.statute_miles is not None:
                raise ValueError("RVR visibility needs an RVR value only")
            if not 0 <= self.rvr_hundreds <= MAX_RVR:
                raise ValueError(f"RVR out of range: {self.rvr_hundreds}")
        elif self.kind == VisibilityKind.STATUTE_MILE:
            if self.statute_miles is None or self.rvr_hundreds is not None:
                raise ValueError("Statute mile visibility needs a statute mile value only")
        elif self.rvr_hundreds is not None or self.statute_miles is not None:
            raise ValueError("Unlimited visibility takes no value")

    @classmethod
    def rvr(cls, hundreds: int) -> 'Visibility':
        return cls(VisibilityKind.RVR, rvr_hundreds=hundreds)

    @classmethod
    def statute_mile(cls, statute_miles: Union[str, CompoundFraction]) -> 'Visibility':
        if isinstance(statute_miles, str):
            statute_miles = CompoundFraction.parse(statute_miles)
        return cls(VisibilityKind.STATUTE_MILE, statute_miles=statute_miles)

    @classmethod
    def unlimited(cls) -> 'Visibility':
        return cls(VisibilityKind.UNLIMITED)

    greater_than_six_miles = unlimited

    @classmethod
    def parse(cls, text: str) -> 'Visibility':
        """
        Parse a visibility as written in a report or on an approach plate.

        Accepts ``P6SM``, ``9999`` (meters), ``RVR24`` and statute mile
        values with or without the ``SM`` suffix.

        Raises:
            ValueError: If the text is not a supported visibility
        """
        text = text.strip()
        meters = _METERS.match(text)
        if meters:
            if int(meters.group(1)) == _UNLIMITED_METERS:
                return cls.unlimited()
            raise ValueError(f"Metric visibility not supported: {text}")
        if text == "P6SM":
            return cls.unlimited()
        rvr = _RVR.match(text)
        if rvr:
            return cls.rvr(int(rvr.group(1)))
        if text.endswith("SM"):
            text = text[:-2]
        return cls.statute_mile(text)

    @property
    def is_unlimited(self) -> bool:
        return self.kind == VisibilityKind.UNLIMITED

    @property
    def has_feet(self) -> bool:
        return not self.is_unlimited

    @property
    def feet(self) -> Optional[int]:
        """Linear visibility in feet, None when unlimited."""
        if self.kind == VisibilityKind.RVR:
            return self.rvr_hundreds * RVR_MAGNITUDE
        if self.kind == VisibilityKind.STATUTE_MILE:
            return _statute_miles_to_feet(self.statute_miles)
        return None

    def __str__(self) -> str:
        if self.is_unlimited:
            return "P6SM"
        if self.kind == VisibilityKind.RVR:
            return f"RVR{self.rvr_hundreds}"
        return f"{self.statute_miles}SM"


def _statute_miles_to_feet(statute_miles: CompoundFraction) -> int:
    if statute_miles in SM_TO_FEET:
        return SM_TO_FEET[statute_miles]
    feet = FEET_PER_STATUTE_MILE * statute_miles.whole_or_zero
    fraction = statute_miles.remove_whole()
    if fraction is None:
        return feet
    if fraction in SM_TO_FEET:
        return feet + SM_TO_FEET[fraction]
    return feet + FEET_PER_STATUTE_MILE * fraction.numerator // fraction.denominator


class VisibilityComparator:
    """
    Total order over visibilities of any form.

    Unlimited is greater than any finite visibility; finite visibilities
    compare by feet, so ``rvr(16)`` equals ``statute_mile("1/4")`` here.
    """

    @staticmethod
    def compare(left: Visibility, right: Visibility) -> int:
        if left.is_unlimited and right.is_unlimited:
            return 0
        if left.is_unlimited != right.is_unlimited:
            return 1 if left.is_unlimited else -1
        return (left.feet > right.feet) - (left.feet < right.feet)

    @classmethod
    def lowest(cls, visibilities: Iterable[Visibility]) -> Visibility:
        """
        Governing (lowest) visibility.

        Raises:
            ValueError: If visibilities is empty
        """
        return min(visibilities, key=cmp_to_key(cls.compare))
