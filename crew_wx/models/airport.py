import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, List, Set, Iterable

from crew_wx import config
from crew_wx.legal.result import Result
from crew_wx.weather.visibility import Visibility
from crew_wx.weather.wind import Wind, WindComponents, WindComponentCalculator

logger = logging.getLogger(__name__)

CALM = WindComponents(crosswind=0, headwind=0)


class AirportInterface(ABC):
    """
    What the legality checks need to know about an arrival airport.

    Implementations decide which approaches can be flown given the
    expected winds and runway condition, and return their minimums.
    """

    @abstractmethod
    def get_suitable_approach_minimums(self, winds: Iterable[Wind], category_d: bool,
                                       runway_condition_code: int,
                                       result: Result) -> Set[Visibility]:
        """
        Minimum visibilities of the approaches usable in these conditions.

        Args:
            winds: Every wind expected at arrival
            category_d: Category D minimums if True, else category C
            runway_condition_code: RCC, 0 to 6
            result: Receives facts about excluded runways and worst winds

        Returns:
            Set of minimum visibilities, empty if no approach is usable
        """
        pass


@dataclass
class Approach:
    """Data class for one instrument approach and its visibility minimums."""

    name: str  # e.g., "ILS OR LOC RWY 06"
    runway_number: Optional[int] = None  # None for circling only approaches
    visibility: Optional[Visibility] = None  # all categories
    c_visibility: Optional[Visibility] = None
    d_visibility: Optional[Visibility] = None

    def minimum_visibility(self, category_d: bool) -> Optional[Visibility]:
        """Visibility minimum for the aircraft category, None if not published."""
        if self.visibility is not None:
            return self.visibility
        if category_d:
            return self.d_visibility
        return self.c_visibility


@dataclass
class Airport(AirportInterface):
    """Data class for an arrival airport and its approaches."""

    faa_id: str  # e.g., "ABE"
    icao: Optional[str] = None  # e.g., "KABE"
    name: Optional[str] = None
    variation: Optional[str] = None  # magnetic variation, e.g., "11W"
    approaches: List[Approach] = field(default_factory=list)

    def get_suitable_approach_minimums(self, winds: Iterable[Wind], category_d: bool,
                                       runway_condition_code: int,
                                       result: Result) -> Set[Visibility]:
        winds = list(winds)
        minimums = set()
        for approach in self.approaches:
            if approach.runway_number is not None and not self.is_runway_suitable(
                    approach.runway_number, winds, runway_condition_code, result):
                logger.debug("Skipping %s at %s", approach.name, self.faa_id)
                continue
            minimum = approach.minimum_visibility(category_d)
            if minimum is not None:
                minimums.add(minimum)
        return minimums

    def is_runway_suitable(self, runway_number: int, winds: List[Wind],
                           runway_condition_code: int, result: Result) -> bool:
        """
        Check winds against the limits for the runway condition code.

        A runway is unsuitable if any expected wind exceeds the limits.
        Gusts only count at RCC 4 and below. POH 3.12.3.

        Raises:
            ValueError: If the runway condition code is unknown
        """
        if runway_condition_code == 0:
            result.add_fact(f"Excluding runway {runway_number:02d} due to condition code 0")
            return False
        if runway_condition_code not in config.RUNWAY_CONDITION_WIND_LIMITS:
            raise ValueError(f"Unknown runway condition code {runway_condition_code}")

        # TODO: reported winds are true, runway numbers magnetic; apply self.variation
        worst_steady = None
        worst_gusty = None
        for wind in winds:
            steady = WindComponentCalculator.calculate_excluding_gusts(wind, runway_number)
            worst_steady = steady.maximize(worst_steady)
            gusty = WindComponentCalculator.calculate_including_gusts(wind, runway_number)
            worst_gusty = gusty.maximize(worst_gusty)
        worst_steady = worst_steady or CALM
        worst_gusty = worst_gusty or CALM

        result.add_fact(f"Runway {runway_number:02d} worst steady wind {worst_steady}")
        result.add_fact(f"Runway {runway_number:02d} worst gusty wind {worst_gusty}")

        use_gusts, max_crosswind, max_tailwind = \
            config.RUNWAY_CONDITION_WIND_LIMITS[runway_condition_code]
        worst = worst_gusty if use_gusts else worst_steady
        return worst.crosswind <= max_crosswind and worst.tailwind <= max_tailwind
