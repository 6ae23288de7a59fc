"""
Aviation weather decoding and dispatch legality library.

This package decodes METAR observations and TAF forecasts and checks
whether a flight may be dispatched to an arrival airport given the
weather expected at its estimated arrival time.

The main public API includes:
- MetarParser, TafParser: Decode raw report text
- Visibility, Wind: Decoded values
- Validator, ValidationContext, Result: Dispatch legality check
- Airport, AirportDatabase: Approach minimums by station
"""

__version__ = '0.1.0'
__all__ = [
    'MetarParser',
    'TafParser',
    'Visibility',
    'Wind',
    'Validator',
    'ValidationContext',
    'Result',
    'Airport',
    'AirportDatabase',
]

from crew_wx.weather import MetarParser, TafParser, Visibility, Wind
from crew_wx.legal import Validator, ValidationContext, Result
from crew_wx.models import Airport
from crew_wx.sources import AirportDatabase
