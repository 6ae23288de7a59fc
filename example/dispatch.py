#!/usr/bin/env python3

import sys
import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

from dateutil import parser as date_parser

from crew_wx import config
from crew_wx.legal import Validator, ValidationContext
from crew_wx.sources import AirportDatabase
from crew_wx.weather import MetarParser, TafParser, TafFormatter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Charlotte to Allentown, Wilkes-Barre as alternate, 3 April 2020
SCENARIO_ETA = datetime(2020, 4, 3, 20, 34, tzinfo=timezone.utc)
SCENARIO_ARRIVAL = 'ABE'
SCENARIO = {
    'CLT': {
        'metar': "CLT 031652Z 29009KT 10SM FEW250 21/00 A3000 RMK AO2 SLP156 T02060000",
        'taf': [
            "CLT TAF KCLT 031734Z 0318/0424 32009KT P6SM FEW250",
            "FM040000 34004KT P6SM SCT150",
            "FM041400 01007KT P6SM SCT200",
        ],
    },
    'ABE': {
        'metar': "ABE 031651Z 34013G24KT 10SM OVC055 10/01 A2976 RMK AO2 PK WND 34026/1553 "
                 "SLP078 T01000011",
        'taf': [
            "ABE TAF KABE 031720Z 0318/0418 34014G23KT P6SM OVC060",
            "FM032200 35010KT P6SM OVC030",
            "FM041000 01005KT P6SM BKN030",
            "FM041500 02005KT P6SM BKN035",
        ],
    },
    'AVP': {
        'metar': "AVP 031654Z 36015G20KT 10SM OVC019 07/02 A2981 RMK AO2 SLP096 T00720022",
        'taf': [
            "AVP TAF KAVP 031741Z 0318/0418 33012G20KT P6SM -RA OVC015",
        ],
    },
}


class Command:
    """Command-line interface for dispatch legality checks."""

    def __init__(self, args):
        """
        Initialize the command interface.

        Args:
            args: Command line arguments
        """
        self.args = args
        self.eta = self._parse_eta(args.eta) if args.eta else None

    def _parse_eta(self, text: str) -> datetime:
        eta = date_parser.isoparse(text)
        if eta.tzinfo is None:
            eta = eta.replace(tzinfo=timezone.utc)
        return eta.astimezone(timezone.utc)

    def _read_lines(self, path: str):
        return [line for line in Path(path).read_text().splitlines() if line.strip()]

    def build_context(self) -> ValidationContext:
        if self.args.scenario:
            eta = self.eta or SCENARIO_ETA
            arrival = (self.args.arrival or SCENARIO_ARRIVAL).upper()
            if arrival not in SCENARIO:
                raise ValueError(f"No scenario weather for {arrival}, use one of {sorted(SCENARIO)}")
            departure_weather = SCENARIO['CLT']
            metar_text = SCENARIO[arrival]['metar']
            taf_lines = SCENARIO[arrival]['taf']
        else:
            if not self.eta or not self.args.arrival:
                raise ValueError("--eta and --arrival are required without --scenario")
            if not self.args.metar and not self.args.taf:
                raise ValueError("--metar or --taf is required without --scenario")
            eta = self.eta
            arrival = self.args.arrival.upper()
            departure_weather = None
            metar_text = " ".join(self._read_lines(self.args.metar)) if self.args.metar else None
            taf_lines = self._read_lines(self.args.taf) if self.args.taf else None

        context = ValidationContext(
            arrival_eta=eta,
            arrival_faa_id=arrival,
            arrival_runway_condition_code=self.args.rcc,
            category_d_aircraft=not self.args.category_c,
        )
        if departure_weather:
            context.departure_metar = MetarParser.decode(departure_weather['metar'], eta)
            context.departure_taf = TafParser(eta, departure_weather['taf']).parse()
        if metar_text:
            context.arrival_metar = MetarParser.decode(metar_text, eta)
        if taf_lines:
            context.arrival_taf = TafParser(eta, taf_lines).parse()
            for line in TafFormatter().format(context.arrival_taf):
                logger.debug(f'TAF {line}')
        return context

    def run(self) -> int:
        context = self.build_context()
        database = AirportDatabase(self.args.database)
        airport = database.get_airport(context.arrival_faa_id)
        if airport is None:
            logger.warning(f'No approach data for {context.arrival_faa_id}')

        validator = Validator(context, airport)
        result = validator.validate()
        result.output()
        return 1 if result.has_error() else 0


def main():
    parser = argparse.ArgumentParser(description='Check dispatch legality at the arrival airport')
    parser.add_argument('--scenario', action='store_true',
                        help='Use the bundled CLT/ABE/AVP weather of 3 April 2020')
    parser.add_argument('--metar', help='File with the arrival METAR')
    parser.add_argument('--taf', help='File with the arrival TAF, one period per line')
    parser.add_argument('--eta', help='Arrival ETA, ISO format, UTC if no offset')
    parser.add_argument('--arrival', help='Arrival airport FAA id, e.g. ABE')
    parser.add_argument('--rcc', type=int, default=config.DEFAULT_RUNWAY_CONDITION_CODE,
                        help='Arrival runway condition code, 0 to 6')
    parser.add_argument('--category-c', action='store_true',
                        help='Use category C minimums instead of category D')
    parser.add_argument('--database', default=config.AIRPORT_DATABASE,
                        help='Airport approach minimums CSV')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return Command(args).run()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f'{e}')
        return 1


if __name__ == '__main__':
    sys.exit(main())
