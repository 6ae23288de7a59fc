import pytest
from datetime import datetime, timezone
from pathlib import Path

from crew_wx.weather import MetarParser, TafParser

# Reference date of the bundled TAF examples
AUGUST_2013 = datetime(2013, 8, 1, tzinfo=timezone.utc)
APRIL_2020 = datetime(2020, 4, 3, tzinfo=timezone.utc)

ABE_METAR = ("ABE 031651Z 34013G24KT 10SM OVC055 10/01 A2976 RMK AO2 PK WND 34026/1553 "
             "SLP078 T01000011")
ABE_TAF = [
    "ABE TAF KABE 031720Z 0318/0418 34014G23KT P6SM OVC060",
    " FM032200 35010KT P6SM OVC030",
    " FM041000 01005KT P6SM BKN030",
    " FM041500 02005KT P6SM BKN035 ",
]


@pytest.fixture
def test_assets_dir() -> Path:
    """Return the path to the test assets directory."""
    return Path(__file__).parent / 'assets'


@pytest.fixture
def airports_csv(test_assets_dir) -> Path:
    """Return the approach minimums test database."""
    return test_assets_dir / 'airports.csv'


@pytest.fixture
def august_2013() -> datetime:
    return AUGUST_2013


@pytest.fixture
def april_2020() -> datetime:
    return APRIL_2020


@pytest.fixture
def abe_metar():
    """KABE observation of 3 April 2020, 16:51Z."""
    return MetarParser.decode(ABE_METAR, APRIL_2020)


@pytest.fixture
def abe_taf():
    """KABE forecast issued 3 April 2020, 17:20Z."""
    return TafParser(APRIL_2020, ABE_TAF).parse()
