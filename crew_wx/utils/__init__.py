"""Shared utilities for the crew_wx library."""

from .compound_fraction import CompoundFraction

__all__ = ['CompoundFraction']
