"""Render decoded reports back to coded text."""

from datetime import datetime
from typing import Optional, List, Dict

from crew_wx import config
from crew_wx.weather.models import ParsedMetar, ParsedTaf, TafPeriod, TafModifier


def _join(parts: List[Optional[str]], separator: str = ' ') -> str:
    return separator.join(part for part in parts if part)


def _day_hour(when: datetime) -> str:
    return f"{when.day:02d}{when.hour:02d}"


def _signed(value: Optional[int]) -> str:
    if value is None:
        return ""
    return f"M{-value:02d}" if value < 0 else f"{value:02d}"


class MetarFormatter:
    """
    Render a ParsedMetar in METAR order.

    The station is written as a placeholder; decoded snapshots do not
    keep the remarks or any sky layer after the first. Temperatures are
    integers, so M00 is written as 00.
    """

    def format(self, metar: ParsedMetar) -> str:
        issued = None
        if metar.issued is not None:
            issued = f"{metar.issued:%d%H%M}Z"

        temperature = None
        if metar.temperature is not None or metar.dewpoint is not None:
            temperature = f"{_signed(metar.temperature)}/{_signed(metar.dewpoint)}"

        altimeter = None
        if metar.altimeter_inhg is not None:
            altimeter = f"A{round(metar.altimeter_inhg * 100):04d}"
        elif metar.altimeter_hpa is not None:
            altimeter = f"Q{metar.altimeter_hpa:04d}"

        return _join([
            config.FORMATTER_STATION,
            issued,
            "AUTO" if metar.is_automated else None,
            self.format_conditions(metar),
            temperature,
            altimeter,
        ])

    def format_conditions(self, metar: ParsedMetar) -> str:
        """Wind, visibility, weather and sky, as in a TAF period."""
        wind = str(metar.wind) if metar.wind is not None else None

        visibility = str(metar.visibility) if metar.visibility is not None else None
        if metar.rvr is not None:
            visibility = _join([visibility, str(metar.rvr)])

        return _join([
            wind,
            visibility,
            _join(metar.weather, separator=''),
            self._format_ceiling(metar.ceiling),
        ])

    def _format_ceiling(self, ceiling: Dict[int, str]) -> str:
        if not ceiling:
            return "SKC"
        return _join([f"{cover}{altitude // 100:03d}" for altitude, cover in ceiling.items()])


class TafFormatter:
    """
    Render a ParsedTaf one line per period.

    The first period goes on the header line. Later unmodified periods
    are written as FM groups, modified ones with their modifier and
    range, e.g. ``PROB30 2504/2506``.
    """

    def __init__(self):
        self.metar_formatter = MetarFormatter()

    def format(self, taf: ParsedTaf) -> List[str]:
        header = ["TAF", config.FORMATTER_STATION]
        if taf.issued is not None:
            header.append(f"{taf.issued:%d%H%M}Z")
        if taf.valid_from is not None and taf.valid_to is not None:
            header.append(self._format_range(taf.valid_from, taf.valid_to))

        lines = []
        periods = iter(taf.forecast.items())
        first = next(periods, None)
        if first is None:
            return [_join(header)]

        period, conditions = first
        header.append(self._format_period(period, conditions, include_time=False))
        lines.append(_join(header))
        for period, conditions in periods:
            lines.append(self._format_period(period, conditions, include_time=True))
        return lines

    def _format_period(self, period: TafPeriod, conditions: ParsedMetar,
                       include_time: bool) -> str:
        prefix = None
        if period.modifier is None:
            if include_time:
                prefix = f"FM{period.start:%d%H%M}"
        else:
            name = period.modifier.value
            if period.modifier == TafModifier.PROB:
                name = f"PROB{period.probability}"
            prefix = f"{name} {self._format_range(period.start, period.end)}"
        return _join([prefix, self.metar_formatter.format_conditions(conditions)])

    @staticmethod
    def _format_range(start: datetime, end: datetime) -> str:
        # end falls on the next day at 00 when the report says 24
        return f"{_day_hour(start)}/{_day_hour(end)}"
