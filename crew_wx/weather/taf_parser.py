"""
TAF decoder.

A TAF is decoded into a validity envelope divided into periods. Each
period's conditions are decoded with the METAR grammar.
"""

import logging
import re
from datetime import datetime
from typing import Optional, List, Dict

from dateutil.relativedelta import relativedelta

from crew_wx import config
from crew_wx.utils.dates import resolve_day_hour, is_valid_day_hour
from crew_wx.weather.metar_parser import MetarParser
from crew_wx.weather.models import ParsedMetar, ParsedTaf, TafPeriod, TafModifier
from crew_wx.weather.tokens import TokenCursor

logger = logging.getLogger(__name__)

TIME = re.compile(r'^(\d{2})(\d{2})(\d{2})Z$')
VALID = re.compile(r'^(\d{2})(\d{2})/(\d{2})(\d{2})$')
FROM = re.compile(r'^FM(\d{2})(\d{2})(\d{2})$')
PROB = re.compile(r'^PROB(\d{2})$')

# Issue day this far from the reference day means another month
ISSUE_DAY_TOLERANCE = 2

HEADER_MARKERS = ('AMD', 'COR')


def is_period_start(token: str) -> bool:
    """Whether the token starts a new forecast period."""
    return (token in ('BECMG', 'TEMPO')
            or PROB.match(token) is not None
            or FROM.match(token) is not None)


class TafParser:
    """
    Decode a TAF into a ParsedTaf.

    The envelope starts as a single period holding the conditions that
    follow the header. Each FM group starts a new unmodified period and
    cuts the previous unmodified period short at its start. BECMG, TEMPO
    and PROBnn groups carry their own range and overlay the unmodified
    periods without cutting anything.

    Decoding never raises: an unrecognized period start abandons the rest
    of its line, and a malformed header yields an empty forecast.

    Example:
        taf = TafParser(now, [
            "TAF KABC 241732Z 2418/2524 11006KT 4SM -SHRA BKN030",
            "FM242300 22006KT 3SM -SHRA OVC030",
        ]).parse()
    """

    def __init__(self, reference_time: datetime, lines: List[str]):
        """
        Args:
            reference_time: Time near issue, resolves months (UTC)
            lines: Report lines, header first
        """
        self._reference_time = reference_time
        self._lines = lines

        self._station: Optional[str] = None
        self._issued: Optional[datetime] = None
        self._valid_from: Optional[datetime] = None
        self._valid_to: Optional[datetime] = None
        self._forecast: Dict[TafPeriod, ParsedMetar] = {}
        self._previous_period: Optional[TafPeriod] = None

    @classmethod
    def decode(cls, reference_time: datetime, text: str) -> ParsedTaf:
        """Decode a TAF given as one string, lines separated by newlines."""
        return cls(reference_time, text.splitlines()).parse()

    def parse(self) -> ParsedTaf:
        try:
            self._parse_lines()
        except Exception:
            logger.exception("Error parsing TAF %s", self._lines)
        return ParsedTaf(
            issued=self._issued,
            valid_from=self._valid_from,
            valid_to=self._valid_to,
            forecast=dict(self._forecast),
            station=self._station,
        )

    def _parse_lines(self):
        lines = [line for line in self._lines if line.strip()]
        if not lines:
            return

        header = TokenCursor.from_text(lines[0])
        if not self._parse_header(header):
            return

        self._previous_period = TafPeriod(self._valid_from, self._valid_to)
        self._forecast[self._previous_period] = self._decode_conditions(
            self._take_conditions(header))
        self._parse_periods(header)

        for line in lines[1:]:
            logger.debug("line: %s", line)
            self._parse_periods(TokenCursor.from_text(line))

    def _parse_header(self, cursor: TokenCursor) -> bool:
        # Sometimes KXXX TAF XXX, sometimes TAF XXX
        for _ in range(2):
            if cursor.at_end:
                return False
            if cursor.advance() == 'TAF':
                break
        else:
            cursor.push_back()
            cursor.push_back()

        while cursor.peek() in HEADER_MARKERS or cursor.peek() == 'TAF':
            cursor.advance()
        if cursor.at_end:
            return False
        self._station = cursor.advance()
        if cursor.peek() in HEADER_MARKERS:
            cursor.advance()

        if cursor.at_end:
            return False
        # some military tafs do not have issue time, only valid time
        issued = TIME.match(cursor.peek())
        if issued:
            self._issued = self._resolve_issue_time(*(int(group) for group in issued.groups()))
            cursor.advance()
            if cursor.at_end:
                return False

        valid = VALID.match(cursor.peek())
        if not valid:
            logger.warning("No validity range in TAF header: %s", cursor)
            return False
        cursor.advance()
        from_day, from_hour, to_day, to_hour = (int(group) for group in valid.groups())
        self._valid_from = resolve_day_hour(self._issued or self._reference_time,
                                            from_day, from_hour)
        self._valid_to = resolve_day_hour(self._valid_from, to_day, to_hour,
                                          not_before=self._valid_from)
        return True

    def _resolve_issue_time(self, day: int, hour: int, minute: int) -> Optional[datetime]:
        if not is_valid_day_hour(day, hour, minute) or hour == 24:
            logger.debug("Ignoring invalid issue time %02d%02d%02dZ", day, hour, minute)
            return None
        reference = self._reference_time
        reference_month = reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        month_end = (reference_month + relativedelta(months=1, days=-1)).day
        months = 0
        if abs(day - reference.day) > ISSUE_DAY_TOLERANCE:
            if day > reference.day:
                # Issued time 31 May but current date is 1 June
                months = -1
            elif day <= ISSUE_DAY_TOLERANCE and reference.day > month_end - ISSUE_DAY_TOLERANCE:
                # Issued time 1 June but current date is 31 May
                months = 1
            # otherwise an older report from the reference month
        month_start = reference_month + relativedelta(months=months)
        try:
            return month_start.replace(day=day, hour=hour, minute=minute)
        except ValueError:
            logger.debug("No day %d in %s", day, month_start.strftime('%B'))
            return None

    def _parse_periods(self, cursor: TokenCursor):
        while not cursor.at_end:
            period = self._parse_period_start(cursor)
            if period is None:
                logger.warning("unable to parse taf period: %s", cursor)
                return

            # periods with a modifier already have start/end times
            if not period.is_modified:
                self._truncate_previous_period(period.start)
                self._previous_period = period

            self._forecast[period] = self._decode_conditions(self._take_conditions(cursor))

    def _truncate_previous_period(self, new_end: datetime):
        previous = self._previous_period
        truncated = previous.truncate_to(new_end)
        self._forecast[truncated] = self._forecast.pop(previous)

    def _take_conditions(self, cursor: TokenCursor) -> List[str]:
        tokens = []
        while not cursor.at_end and not is_period_start(cursor.peek()):
            tokens.append(cursor.advance())
        return tokens

    def _parse_period_start(self, cursor: TokenCursor) -> Optional[TafPeriod]:
        token = cursor.advance()
        envelope_start = self._valid_from

        from_match = FROM.match(token)
        if from_match:
            # eg FM242300
            day, hour, minute = (int(group) for group in from_match.groups())
            if not is_valid_day_hour(day, hour, minute):
                return None
            start = resolve_day_hour(envelope_start, day, hour, minute)
            if not self._valid_from <= start <= self._valid_to:
                logger.warning("FM%02d%02d%02d outside validity", day, hour, minute)
                return None
            if start < self._previous_period.start:
                logger.warning("FM%02d%02d%02d before the previous period", day, hour, minute)
                return None
            return TafPeriod(start, self._valid_to)

        # eg PROB30 2504/2506, BECMG 0004/0006
        probability = None
        prob_match = PROB.match(token)
        if token == 'BECMG':
            modifier = TafModifier.BECMG
        elif token == 'TEMPO':
            modifier = TafModifier.TEMPO
        elif prob_match:
            modifier = TafModifier.PROB
            probability = int(prob_match.group(1))
            if cursor.peek() == 'TEMPO':
                cursor.advance()
        else:
            return None

        if cursor.at_end:
            return None
        range_match = VALID.match(cursor.advance())
        if not range_match:
            return None
        from_day, from_hour, to_day, to_hour = (int(group) for group in range_match.groups())
        if not (is_valid_day_hour(from_day, from_hour) and is_valid_day_hour(to_day, to_hour)):
            return None

        # ranges may cross a month boundary from the envelope start
        start = resolve_day_hour(envelope_start, from_day, from_hour)
        end = resolve_day_hour(start, to_day, to_hour, not_before=start)
        return TafPeriod(start, end, modifier, probability)

    def _decode_conditions(self, tokens: List[str]) -> ParsedMetar:
        return MetarParser(list(config.TAF_CONDITION_PREFIX) + tokens,
                           self._reference_time).parse()
