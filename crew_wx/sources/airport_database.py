import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Union

import pandas as pd

from crew_wx import config
from crew_wx.models.airport import Airport, Approach
from crew_wx.weather.visibility import Visibility

logger = logging.getLogger(__name__)

COLUMNS = ['faa_id', 'icao', 'name', 'variation', 'approach', 'runway',
           'visibility', 'c_visibility', 'd_visibility']


class AirportDatabase:
    """
    Approach minimums by airport, loaded from a CSV file.

    The file has one row per approach; airport columns repeat on each
    row of the same airport. A row with an empty ``approach`` declares an
    airport without approaches. Visibilities are written as on an
    approach plate: ``1/2``, ``RVR24``, ``1 1/4``.

    Airports can be looked up by FAA id ("ABE") or ICAO id ("KABE").
    """

    def __init__(self, path: Union[str, Path, None] = None):
        """
        Load the database.

        Args:
            path: CSV file, defaults to config.AIRPORT_DATABASE

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.path = Path(path or config.AIRPORT_DATABASE)
        if not self.path.exists():
            raise FileNotFoundError(f"Airport database not found: {self.path}")

        self.airports: Dict[str, Airport] = {}
        self._by_icao: Dict[str, Airport] = {}
        self._load(pd.read_csv(self.path, dtype=str, encoding='utf-8-sig'))
        logger.info(f"Loaded {len(self.airports)} airports from {self.path}")

    def get_airport(self, ident: str) -> Optional[Airport]:
        """Get an airport by FAA or ICAO id, None if unknown."""
        ident = ident.strip().upper()
        return self.airports.get(ident) or self._by_icao.get(ident)

    def get_airports(self) -> List[Airport]:
        return list(self.airports.values())

    def _load(self, df: pd.DataFrame) -> None:
        missing = [column for column in ('faa_id', 'approach') if column not in df.columns]
        if missing:
            raise ValueError(f"Airport database {self.path} missing columns {missing}")

        # Start at 2 because row 1 is header
        for row_num, (_, row) in enumerate(df.iterrows(), start=2):
            faa_id = self._safe_get(row, 'faa_id')
            if faa_id is None:
                logger.warning(f"Row {row_num}: no faa_id, skipping")
                continue
            try:
                approach = self._approach_from_row(row)
            except ValueError as e:
                logger.warning(f"Row {row_num}: {e}, skipping")
                continue

            airport = self._get_or_create_airport(faa_id.upper(), row)
            if approach is not None:
                airport.approaches.append(approach)

    def _get_or_create_airport(self, faa_id: str, row: pd.Series) -> Airport:
        airport = self.airports.get(faa_id)
        if airport is not None:
            return airport

        airport = Airport(
            faa_id=faa_id,
            icao=self._safe_get(row, 'icao'),
            name=self._safe_get(row, 'name'),
            variation=self._safe_get(row, 'variation'),
        )
        self.airports[faa_id] = airport
        if airport.icao:
            self._by_icao[airport.icao.upper()] = airport
        return airport

    def _approach_from_row(self, row: pd.Series) -> Optional[Approach]:
        name = self._safe_get(row, 'approach')
        if name is None:
            return None

        runway = self._safe_get(row, 'runway')
        runway_number = None
        if runway is not None:
            try:
                runway_number = int(runway)
            except ValueError:
                raise ValueError(f"invalid runway {runway!r} for {name}")
            if not 1 <= runway_number <= 36:
                raise ValueError(f"invalid runway {runway!r} for {name}")

        return Approach(
            name=name,
            runway_number=runway_number,
            visibility=self._visibility(row, 'visibility'),
            c_visibility=self._visibility(row, 'c_visibility'),
            d_visibility=self._visibility(row, 'd_visibility'),
        )

    def _visibility(self, row: pd.Series, key: str) -> Optional[Visibility]:
        value = self._safe_get(row, key)
        if value is None:
            return None
        try:
            return Visibility.parse(value)
        except ValueError as e:
            raise ValueError(f"invalid {key} {value!r}: {e}")

    def _safe_get(self, row: pd.Series, key: str) -> Any:
        """
        Safely get a value from a pandas Series, converting nan and blanks to None.

        Args:
            row: Pandas Series (row from DataFrame)
            key: Column key to get

        Returns:
            Stripped value or None if missing
        """
        value = row.get(key)
        if value is None or pd.isna(value):
            return None
        value = str(value).strip()
        return value or None
