"""Inputs of a dispatch legality check."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from crew_wx import config
from crew_wx.weather.models import ParsedMetar, ParsedTaf


@dataclass
class ValidationContext:
    """
    Weather and flight details for one leg.

    Attributes:
        departure_taf: Forecast at the departure airport
        departure_metar: Observation at the departure airport
        arrival_taf: Forecast at the arrival airport
        arrival_metar: Observation at the arrival airport
        arrival_eta: Estimated time of arrival (UTC)
        arrival_faa_id: Arrival airport, e.g. "ABE"
        arrival_runway_condition_code: RCC, 6 (dry) to 0 (nil braking)
        category_d_aircraft: Use category D minimums, else category C
    """

    departure_taf: Optional[ParsedTaf] = None
    departure_metar: Optional[ParsedMetar] = None
    arrival_taf: Optional[ParsedTaf] = None
    arrival_metar: Optional[ParsedMetar] = None

    arrival_eta: Optional[datetime] = None
    arrival_faa_id: Optional[str] = None
    arrival_runway_condition_code: int = config.DEFAULT_RUNWAY_CONDITION_CODE
    category_d_aircraft: bool = True

    def __post_init__(self):
        code = self.arrival_runway_condition_code
        if not config.MIN_RUNWAY_CONDITION_CODE <= code <= config.MAX_RUNWAY_CONDITION_CODE:
            raise ValueError(f"Unknown runway condition code {code}")
