"""Sources of airport data."""

from .airport_database import AirportDatabase

__all__ = ['AirportDatabase']
