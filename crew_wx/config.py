"""
Configuration for crew_wx.

Module-level constants, some of which can be overridden from the
environment.
"""

import os
from datetime import timedelta

# Arrival METAR is considered applicable this long after issue.
# Needs reference: the operating rule has not been confirmed.
ASSUMED_METAR_VALIDITY_HOURS = int(os.getenv("CREW_WX_METAR_VALIDITY_HOURS", "24"))
ASSUMED_METAR_VALIDITY = timedelta(hours=ASSUMED_METAR_VALIDITY_HOURS)

# Runway condition codes (RCC), 6 = dry, 0 = nil braking action
DEFAULT_RUNWAY_CONDITION_CODE = 6
MIN_RUNWAY_CONDITION_CODE = 0
MAX_RUNWAY_CONDITION_CODE = 6

# RCC -> (use gusts, max crosswind kt, max tailwind kt). POH 3.12.3
RUNWAY_CONDITION_WIND_LIMITS = {
    6: (False, 27, 10),
    5: (False, 27, 10),
    4: (True, 27, 10),
    3: (True, 15, 5),
    2: (True, 10, 5),
    1: (True, 10, 0),
}

# TAF period conditions lack a station and issue time; the METAR
# grammar expects both.
TAF_CONDITION_PREFIX = ("KXYZ", "200000Z")

# Station placeholder written by the formatters
FORMATTER_STATION = "KXXX"

# Approach minimums database
AIRPORT_DATABASE = os.getenv("CREW_WX_AIRPORT_DATABASE", "data/airports.csv")
