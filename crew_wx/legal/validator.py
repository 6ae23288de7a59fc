"""
Dispatch legality.

At the arrival ETA, the METAR, the TAF or any combination of them must
show weather at or above the landing minimums of an approach that can
be flown with the expected winds. Only visibility is considered.
"""

import logging
from datetime import datetime
from typing import Optional, List, Callable

from crew_wx import config
from crew_wx.legal.context import ValidationContext
from crew_wx.legal.result import Result
from crew_wx.models.airport import AirportInterface
from crew_wx.weather.models import ParsedMetar, TafPeriod
from crew_wx.weather.visibility import Visibility, VisibilityComparator
from crew_wx.weather.wind import Wind

logger = logging.getLogger(__name__)

# Receives (period, conditions); period is None for the METAR
WeatherVisitor = Callable[[Optional[TafPeriod], ParsedMetar], None]


def _unique(items: list) -> list:
    return list(dict.fromkeys(items))


class Validator:
    """
    Check one leg for legality.

    Example:
        validator = Validator(context, airport_database.get_airport("ABE"))
        validator.validate()
        validator.result.output()
    """

    def __init__(self, context: ValidationContext, arrival_airport: Optional[AirportInterface]):
        """
        Args:
            context: Weather and flight details
            arrival_airport: Approach minimums for the arrival airport
        """
        self.context = context
        self.arrival_airport = arrival_airport
        self.result = Result()

    def validate(self) -> Result:
        self.check_legal_to_dispatch()
        self.check_legal_to_takeoff()
        return self.result

    def check_legal_to_dispatch(self) -> None:
        if self.arrival_airport is None:
            self.result.add_error(f"Unknown arrival airport {self.context.arrival_faa_id}")
            return

        winds = self._collect_winds()
        minimums = self.arrival_airport.get_suitable_approach_minimums(
            winds,
            self.context.category_d_aircraft,
            self.context.arrival_runway_condition_code,
            self.result,
        )
        if not minimums:
            self.result.add_error("No suitable arrival approach minimums")
            return

        visibilities = self._collect_visibilities()
        if not visibilities:
            self.result.add_error("No suitable arrival observation or forecasts")
            return

        lowest_approach = VisibilityComparator.lowest(minimums)
        lowest_reported = VisibilityComparator.lowest(visibilities)
        logger.debug("Lowest reported %s, lowest approach %s", lowest_reported, lowest_approach)

        if VisibilityComparator.compare(lowest_reported, lowest_approach) < 0:
            self.result.add_error(
                f"lowest reported visibility {lowest_reported} is lower than "
                f"lowest approach visibility {lowest_approach}")
            return

        self.result.add_fact(
            f"Legal to dispatch: lowest reported visibility {lowest_reported} is at or above "
            f"lowest approach visibility {lowest_approach}")

    def check_legal_to_takeoff(self) -> None:
        # Takeoff minimums are the highest of the company and runway
        # specific minimums, gusts limiting at RCC 4 and below. Not
        # evaluated yet: no takeoff minimums are loaded for airports.
        logger.debug("Takeoff legality not evaluated for %s", self.context.arrival_faa_id)

    # --- Weather applicable at ETA ---

    def _collect_winds(self) -> List[Wind]:
        winds = []

        def visit(period: Optional[TafPeriod], conditions: ParsedMetar):
            if conditions.wind is None:
                return
            if period is None:
                self.result.add_fact(f"Adding arrival METAR wind {conditions.wind}")
            else:
                self.result.add_fact(f"Adding arrival TAF wind {conditions.wind} at {period}")
            winds.append(conditions.wind)

        self._visit_weather(visit)
        return _unique(winds)

    def _collect_visibilities(self) -> List[Visibility]:
        visibilities = []

        def visit(period: Optional[TafPeriod], conditions: ParsedMetar):
            description = "arrival METAR" if period is None else f"arrival TAF {period}"
            if conditions.visibility is not None:
                self.result.add_fact(f"Adding {description} visibility {conditions.visibility}")
                visibilities.append(conditions.visibility)
            if conditions.rvr is not None:
                self.result.add_fact(f"Adding {description} rvr {conditions.rvr}")
                visibilities.append(conditions.rvr)

        self._visit_weather(visit)
        return _unique(visibilities)

    def _visit_weather(self, visitor: WeatherVisitor) -> None:
        eta = self.context.arrival_eta
        if eta is None:
            logger.warning("No arrival ETA, no weather applies")
            return

        metar = self.context.arrival_metar
        if metar is not None and _metar_applies(metar, eta):
            visitor(None, metar)

        taf = self.context.arrival_taf
        if taf is not None:
            for period in taf.periods_at(eta):
                visitor(period, taf.conditions_for(period))


def _metar_applies(metar: ParsedMetar, eta: datetime) -> bool:
    if not metar.is_valid or metar.issued is None:
        return False
    return metar.issued <= eta < metar.issued + config.ASSUMED_METAR_VALIDITY
