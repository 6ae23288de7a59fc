"""Decoded weather snapshots: observations, forecasts and forecast periods."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict

from crew_wx.weather.visibility import Visibility
from crew_wx.weather.wind import Wind


CEILING_COVERS = ('BKN', 'OVC', 'VV')


@dataclass(frozen=True)
class WindShear:
    """Low level wind shear, e.g. WS020/24045KT."""

    altitude_ft: int
    from_degrees: int
    velocity: int


@dataclass(frozen=True)
class ParsedMetar:
    """
    One decoded observation, or the conditions of one TAF period.

    Attributes:
        issued: Issue time (UTC), None if not reported
        is_automated: AUTO observation
        is_valid: False for NIL or empty reports
        wind: Reported wind
        visibility: Prevailing visibility
        rvr: Runway visual range, kept apart from prevailing visibility
        weather: Weather phenomena in report order (e.g. "-SHRA")
        ceiling: Altitude (ft) to cover code of the first reported layer
        station: Station identifier as reported
        temperature: Degrees Celsius
        dewpoint: Degrees Celsius
        altimeter_inhg: Altimeter from an Axxxx group
        altimeter_hpa: Altimeter from a Qxxxx group
        wind_shear: Low level wind shear group
        lowest_ceiling: Lowest broken, overcast or vertical visibility
            layer (ft) among all reported layers
    """

    issued: Optional[datetime] = None
    is_automated: bool = False
    is_valid: bool = False
    wind: Optional[Wind] = None
    visibility: Optional[Visibility] = None
    rvr: Optional[Visibility] = None
    weather: List[str] = field(default_factory=list)
    ceiling: Dict[int, str] = field(default_factory=dict)

    station: Optional[str] = None
    temperature: Optional[int] = None
    dewpoint: Optional[int] = None
    altimeter_inhg: Optional[float] = None
    altimeter_hpa: Optional[int] = None
    wind_shear: Optional[WindShear] = None
    lowest_ceiling: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'ceiling', dict(sorted(self.ceiling.items())))


class TafModifier(Enum):
    """Change group type of a TAF period. FM periods have no modifier."""

    BECMG = "BECMG"
    TEMPO = "TEMPO"
    PROB = "PROB"


@dataclass(frozen=True, eq=False)
class TafPeriod:
    """
    A TAF forecast period over the half-open interval [start, end).

    Periods sort by start time. Equality and hashing use the interval
    only: two periods with the same timing are the same period even if
    their modifier or probability differ.
    """

    start: datetime
    end: datetime
    modifier: Optional[TafModifier] = None
    probability: Optional[int] = None

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Period ends before it starts: {self.start} > {self.end}")
        if self.probability is not None and self.modifier != TafModifier.PROB:
            raise ValueError("Only PROB periods carry a probability")

    @property
    def interval(self) -> tuple:
        return self.start, self.end

    @property
    def is_modified(self) -> bool:
        return self.modifier is not None

    def truncate_to(self, new_end: datetime) -> 'TafPeriod':
        return TafPeriod(self.start, new_end, self.modifier, self.probability)

    def contains(self, when: datetime) -> bool:
        return self.start <= when < self.end

    def __eq__(self, other) -> bool:
        if not isinstance(other, TafPeriod):
            return NotImplemented
        return self.interval == other.interval

    def __hash__(self) -> int:
        return hash(self.interval)

    def __lt__(self, other: 'TafPeriod') -> bool:
        if not isinstance(other, TafPeriod):
            return NotImplemented
        return self.start < other.start

    def __str__(self) -> str:
        prefix = ""
        if self.modifier == TafModifier.PROB:
            prefix = f"PROB{self.probability} "
        elif self.modifier is not None:
            prefix = f"{self.modifier.value} "
        return f"{prefix}{self.start:%d%H%M}Z-{self.end:%d%H%M}Z"


@dataclass(frozen=True)
class ParsedTaf:
    """
    One decoded terminal forecast.

    ``forecast`` maps each period to its conditions, ordered by period
    start. Unmodified periods tile [valid_from, valid_to]; BECMG, TEMPO
    and PROB periods overlay them.
    """

    issued: Optional[datetime] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    forecast: Dict[TafPeriod, ParsedMetar] = field(default_factory=dict)
    station: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'forecast', dict(sorted(
            self.forecast.items(), key=lambda item: item[0].start)))

    def periods_at(self, when: datetime) -> List[TafPeriod]:
        """All periods whose interval contains the given time, in start order."""
        return [period for period in self.forecast if period.contains(when)]

    def conditions_for(self, period: TafPeriod) -> Optional[ParsedMetar]:
        return self.forecast.get(period)
