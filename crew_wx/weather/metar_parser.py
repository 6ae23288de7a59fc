"""
METAR decoder.

Covers the groups reported by US and Canadian stations
(see http://www.caa.co.uk/docs/33/CAP746.PDF for the format). European
and military variants are only partly supported.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, Iterable, List, Dict

from crew_wx.utils.compound_fraction import CompoundFraction
from crew_wx.utils.dates import resolve_day_hour, is_valid_day_hour
from crew_wx.weather.models import ParsedMetar, WindShear, CEILING_COVERS
from crew_wx.weather.tokens import TokenCursor
from crew_wx.weather.visibility import Visibility, MAX_RVR, RVR_MAGNITUDE
from crew_wx.weather.wind import Wind

logger = logging.getLogger(__name__)

TIME = re.compile(r'^(\d{2})(\d{2})(\d{2})Z$')
WIND = re.compile(r'^(VRB|\d{3})(\d{2,3})(G(\d+))?KT$')
WIND_VARY = re.compile(r'^(\d{3})V(RB)?(\d{3})$')
WHOLE_VISIBILITY = re.compile(r'^(\d)$')
VISIBILITY = re.compile(r'^(M)?(\d+)(/(\d))?SM$')
METERS_VISIBILITY = re.compile(r'^(\d{4})$')
RVR = re.compile(r'^R(\d{2}[LRC]?)/([PM])?(\d{4})(V([PM])?(\d{4}))?FT(/[UDN])?$')
WEATHER = re.compile(
    r'^(VC)?(\+|-)?(MI|BC|DR|BL|SH|TS|FZ|PR)?'
    r'((?:DZ|RA|SN|SG|IC|PL|GR|GS|UP|BR|FG|DU|SA|HZ|PY|VA|FU|PO|SQ|\+?FC|SS|DS)*)$')
SKY = re.compile(r'^(SKC|CLR|((FEW|SCT|BKN|OVC|VV|[A-Z]{3})(\d{3})(TCU|CB)?))$')
TEMP_DEW = re.compile(r'^(M)?(\d{0,2})/(M)?(\d{0,2})$')
ALTIMETER = re.compile(r'^A(\d{2})(\d{2})$')
MILLIBAR_ALTIMETER = re.compile(r'^Q(\d{4})$')
WIND_SHEAR = re.compile(r'^WS(\d{3})/(\d{3})(\d{2,3})KT$')

REPORT_TYPES = ('METAR', 'SPECI')
FLAGS = ('AUTO', 'COR', 'RTD')
CLEAR_SKY = ('SKC', 'CLR')
UNLIMITED_METERS = 9999


class MetarParser:
    """
    Decode one METAR into a ParsedMetar.

    Fields are tried in report order. Each field looks at the next
    token: if it matches, the field is filled and the token consumed;
    otherwise the field stays empty and the same token is offered to the
    next field. Running out of tokens ends decoding normally.

    Decoding is best effort and never raises: an unexpected failure is
    logged and whatever was decoded so far is returned.

    Example:
        metar = MetarParser.decode(
            "KABE 031651Z 34013G24KT 10SM OVC055 10/01 A2976",
            reference_time=datetime(2020, 4, 3, tzinfo=timezone.utc))
        metar.wind          # Wind(from_degrees=340, velocity=13, gusts=24)
        str(metar.visibility)  # "10SM"
    """

    def __init__(self, tokens: Iterable[str], reference_time: Optional[datetime] = None):
        """
        Args:
            tokens: Report tokens, station identifier first
            reference_time: Time near the issue time, used to resolve the
                month of the day-of-month group. Defaults to now (UTC).
        """
        self._cursor = TokenCursor(tokens)
        self._reference_time = reference_time or datetime.now(timezone.utc)

        self._station: Optional[str] = None
        self._issued: Optional[datetime] = None
        self._is_automated = False
        self._is_valid = False

        self._wind_from: Optional[int] = None
        self._wind_variable = False
        self._wind_velocity: Optional[int] = None
        self._wind_gusts: Optional[int] = None
        self._wind_vary_from: Optional[int] = None
        self._wind_vary_to: Optional[int] = None

        self._unlimited_visibility = False
        self._statute_miles: Optional[CompoundFraction] = None
        self._rvr: Optional[int] = None

        self._weather: List[str] = []
        self._ceiling: Dict[int, str] = {}
        self._lowest_ceiling: Optional[int] = None
        self._wind_shear: Optional[WindShear] = None
        self._temperature: Optional[int] = None
        self._dewpoint: Optional[int] = None
        self._altimeter_inhg: Optional[float] = None
        self._altimeter_hpa: Optional[int] = None

    @classmethod
    def decode(cls, text: str, reference_time: Optional[datetime] = None) -> ParsedMetar:
        """Decode a METAR given as a single string."""
        return cls(text.split(), reference_time).parse()

    def parse(self) -> ParsedMetar:
        try:
            self._parse_groups()
        except Exception:
            logger.exception("Error parsing METAR at %r", self._cursor)
        return self._build()

    def _parse_groups(self):
        if self._cursor.at_end:
            return
        if self._cursor.peek() in REPORT_TYPES:
            self._cursor.advance()
            if self._cursor.at_end:
                return

        station = self._cursor.advance()
        if station == 'NIL':
            return
        self._station = station
        self._is_valid = True

        steps = (
            self._parse_issue_time,
            self._parse_nil,
            self._parse_flags,
            self._parse_wind,
            self._parse_wind_variation,
            self._parse_visibility,
            self._parse_rvr,
            self._parse_no_significant_weather,
            self._parse_cavok_or_weather,
            self._parse_sky,
            self._parse_wind_shear,
            self._parse_temperature,
            self._parse_altimeter,
        )
        for step in steps:
            if self._cursor.at_end or not self._is_valid:
                return
            step()

    # --- Field steps ---

    def _parse_issue_time(self):
        match = TIME.match(self._cursor.peek())
        if not match:
            return
        day, hour, minute = (int(group) for group in match.groups())
        if not is_valid_day_hour(day, hour, minute):
            logger.debug("Ignoring invalid issue time %s", match.group(0))
            return
        self._issued = resolve_day_hour(self._reference_time, day, hour, minute)
        self._cursor.advance()

    def _parse_nil(self):
        if self._cursor.peek() == 'NIL':
            self._cursor.advance()
            self._is_valid = False

    def _parse_flags(self):
        while not self._cursor.at_end and self._cursor.peek() in FLAGS:
            self._is_automated = self._cursor.advance() == 'AUTO'

    def _parse_wind(self):
        match = WIND.match(self._cursor.peek())
        if not match:
            return
        whence = match.group(1)
        if whence == 'VRB':
            self._wind_variable = True
        else:
            self._wind_from = int(whence)
        self._wind_velocity = int(match.group(2))
        if match.group(4) is not None:
            self._wind_gusts = int(match.group(4))
        self._cursor.advance()

    def _parse_wind_variation(self):
        match = WIND_VARY.match(self._cursor.peek())
        if not match:
            return
        self._wind_vary_from = int(match.group(1))
        self._wind_vary_to = int(match.group(3))
        self._cursor.advance()

    def _parse_visibility(self):
        token = self._cursor.peek()

        # military visibility in meters
        meters = METERS_VISIBILITY.match(token)
        if meters:
            self._cursor.advance()
            if int(meters.group(1)) == UNLIMITED_METERS:
                self._unlimited_visibility = True
            else:
                logger.debug("Metric visibility %s not supported", token)
            return

        # this is more for TAF support
        if token == 'P6SM':
            self._cursor.advance()
            self._unlimited_visibility = True
            return

        whole = None
        whole_match = WHOLE_VISIBILITY.match(token)
        if whole_match:
            whole = int(whole_match.group(1))
            self._cursor.advance()
            if self._cursor.at_end:
                self._statute_miles = CompoundFraction(whole=whole)
                return
            token = self._cursor.peek()

        match = VISIBILITY.match(token)
        if not match:
            if whole is not None:
                self._statute_miles = CompoundFraction(whole=whole)
            return
        if match.group(1):
            logger.debug("Visibility %s is less than reported value", token)

        numerator = int(match.group(2))
        denominator = int(match.group(4)) if match.group(4) is not None else None
        if denominator == 0:
            logger.debug("Ignoring visibility %s with zero denominator", token)
            if whole is not None:
                self._statute_miles = CompoundFraction(whole=whole)
            return
        self._cursor.advance()
        if denominator is None:
            self._statute_miles = CompoundFraction(whole=numerator if whole is None else whole)
        else:
            self._statute_miles = CompoundFraction(whole, numerator, denominator)

    def _parse_rvr(self):
        # several runways may be reported, keep the lowest
        while not self._cursor.at_end:
            match = RVR.match(self._cursor.peek())
            if not match:
                return
            self._cursor.advance()
            feet = int(match.group(3))
            if match.group(6) is not None:
                feet = min(feet, int(match.group(6)))
            hundreds = min(feet // RVR_MAGNITUDE, MAX_RVR)
            if self._rvr is None or hundreds < self._rvr:
                self._rvr = hundreds

    def _parse_no_significant_weather(self):
        # for support of TAF
        if self._cursor.peek() == 'NSW':
            self._cursor.advance()

    def _parse_cavok_or_weather(self):
        # Europe
        if self._cursor.peek() == 'CAVOK':
            self._cursor.advance()
            self._unlimited_visibility = True
            return

        while not self._cursor.at_end:
            match = WEATHER.match(self._cursor.peek())
            if not match:
                return
            self._cursor.advance()
            vicinity, intensity, qualifier, phenomena = match.groups()
            self._weather.append("".join(
                part for part in (vicinity, intensity, qualifier, phenomena) if part))

    def _parse_sky(self):
        while not self._cursor.at_end:
            token = self._cursor.peek()
            if TEMP_DEW.match(token):
                return
            match = SKY.match(token)
            if not match:
                return
            self._cursor.advance()
            if match.group(1) in CLEAR_SKY:
                continue
            altitude, cover = int(match.group(4)) * 100, match.group(3)
            if cover in CEILING_COVERS and (self._lowest_ceiling is None
                                            or altitude < self._lowest_ceiling):
                self._lowest_ceiling = altitude
            if self._ceiling:
                logger.debug("Passing over sky layer %s", token)
                continue
            # lowest reported layer
            self._ceiling[altitude] = cover

    def _parse_wind_shear(self):
        match = WIND_SHEAR.match(self._cursor.peek())
        if not match:
            return
        self._cursor.advance()
        self._wind_shear = WindShear(
            altitude_ft=int(match.group(1)) * 100,
            from_degrees=int(match.group(2)),
            velocity=int(match.group(3)),
        )

    def _parse_temperature(self):
        match = TEMP_DEW.match(self._cursor.peek())
        if not match:
            return
        self._cursor.advance()
        self._temperature = _signed(match.group(1), match.group(2))
        self._dewpoint = _signed(match.group(3), match.group(4))

    def _parse_altimeter(self):
        token = self._cursor.peek()
        inches = ALTIMETER.match(token)
        if inches:
            self._cursor.advance()
            self._altimeter_inhg = int(inches.group(1)) + int(inches.group(2)) / 100
            return
        millibars = MILLIBAR_ALTIMETER.match(token)
        if millibars:
            self._cursor.advance()
            self._altimeter_hpa = int(millibars.group(1))

    # --- Result ---

    def _build(self) -> ParsedMetar:
        wind = None
        if self._wind_velocity is not None:
            wind = Wind(
                from_degrees=self._wind_from,
                is_variable=self._wind_variable,
                velocity=self._wind_velocity,
                gusts=self._wind_gusts,
                vary_from_degrees=self._wind_vary_from,
                vary_to_degrees=self._wind_vary_to,
            )
        elif self._wind_vary_from is not None:
            logger.debug("Wind variation without a wind group")

        visibility = None
        if self._unlimited_visibility:
            visibility = Visibility.unlimited()
        elif self._statute_miles is not None:
            visibility = Visibility.statute_mile(self._statute_miles)

        return ParsedMetar(
            issued=self._issued,
            is_automated=self._is_automated,
            is_valid=self._is_valid,
            wind=wind,
            visibility=visibility,
            rvr=Visibility.rvr(self._rvr) if self._rvr is not None else None,
            weather=list(self._weather),
            ceiling=dict(self._ceiling),
            station=self._station,
            temperature=self._temperature,
            dewpoint=self._dewpoint,
            altimeter_inhg=self._altimeter_inhg,
            altimeter_hpa=self._altimeter_hpa,
            wind_shear=self._wind_shear,
            lowest_ceiling=self._lowest_ceiling,
        )


def _signed(minus: Optional[str], digits: str) -> Optional[int]:
    if not digits:
        return None
    value = int(digits)
    return -value if minus else value
