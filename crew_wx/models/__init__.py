"""
Data models for the crew_wx library.

Airports and their approaches, and the interface the legality checks
use to ask an airport which approach minimums are usable.
"""

from .airport import AirportInterface, Airport, Approach

__all__ = ['AirportInterface', 'Airport', 'Approach']
