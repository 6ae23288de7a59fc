"""
Weather module for decoding METAR and TAF reports.

Provides:
- MetarParser / TafParser: Decode raw report text
- ParsedMetar / ParsedTaf / TafPeriod: Decoded snapshots
- Visibility / VisibilityComparator: Visibility values and ordering
- Wind / WindComponentCalculator: Winds and runway components
- MetarFormatter / TafFormatter: Render snapshots back to text

Example:
    from crew_wx.weather import MetarParser

    metar = MetarParser.decode("KABE 031651Z 34013G24KT 10SM OVC055 10/01 A2976")
    print(metar.visibility)  # 10SM
"""

from crew_wx.weather.visibility import Visibility, VisibilityKind, VisibilityComparator
from crew_wx.weather.wind import Wind, WindComponents, WindComponentCalculator
from crew_wx.weather.models import (
    ParsedMetar,
    ParsedTaf,
    TafPeriod,
    TafModifier,
    WindShear,
)
from crew_wx.weather.metar_parser import MetarParser
from crew_wx.weather.taf_parser import TafParser
from crew_wx.weather.formatter import MetarFormatter, TafFormatter

__all__ = [
    'Visibility',
    'VisibilityKind',
    'VisibilityComparator',
    'Wind',
    'WindComponents',
    'WindComponentCalculator',
    'ParsedMetar',
    'ParsedTaf',
    'TafPeriod',
    'TafModifier',
    'WindShear',
    'MetarParser',
    'TafParser',
    'MetarFormatter',
    'TafFormatter',
]
