"""Dispatch legality checks and their fact/error trail."""

from .result import Result
from .context import ValidationContext
from .validator import Validator

__all__ = ['Result', 'ValidationContext', 'Validator']
