"""
Compound fractions as written in weather reports and approach plates.

Values such as ``1``, ``1/2`` or ``1 1/2`` are kept exactly as written:
fractions are never reduced, so ``1/2`` and ``2/4`` are distinct values.
"""

import re
from dataclasses import dataclass
from typing import Optional


_WHOLE = re.compile(r'^(\d+)$')
_FRACTION = re.compile(r'^(\d+)/(\d+)$')


@dataclass(frozen=True)
class CompoundFraction:
    """A whole number, a fraction, or a whole number followed by a fraction."""

    whole: Optional[int] = None
    numerator: Optional[int] = None
    denominator: Optional[int] = None

    def __post_init__(self):
        if self.denominator is not None and self.denominator == 0:
            raise ValueError(f"Zero denominator in compound fraction {self!r}")
        if (self.numerator is None) != (self.denominator is None):
            raise ValueError(f"Numerator and denominator must be given together: {self!r}")
        if self.whole is None and self.numerator is None:
            raise ValueError("Empty compound fraction")

    @classmethod
    def parse(cls, text: str) -> 'CompoundFraction':
        """
        Parse ``"N"``, ``"N/D"`` or ``"N N/D"``.

        Raises:
            ValueError: If text is not a compound fraction
        """
        tokens = text.split()
        if not tokens or len(tokens) > 2:
            raise ValueError(f"Not a compound fraction [{text}]")

        whole = None
        whole_match = _WHOLE.match(tokens[0])
        if whole_match:
            whole = int(whole_match.group(1))
            tokens = tokens[1:]
            if not tokens:
                return cls(whole=whole)

        fraction_match = _FRACTION.match(tokens[0])
        if not fraction_match or len(tokens) > 1:
            raise ValueError(f"Not a compound fraction [{text}]")
        return cls(
            whole=whole,
            numerator=int(fraction_match.group(1)),
            denominator=int(fraction_match.group(2)),
        )

    @property
    def whole_or_zero(self) -> int:
        return self.whole if self.whole is not None else 0

    def remove_whole(self) -> Optional['CompoundFraction']:
        """Return the fractional part alone, or None for a whole number."""
        if self.numerator is None:
            return None
        return CompoundFraction(numerator=self.numerator, denominator=self.denominator)

    def __str__(self) -> str:
        parts = []
        if self.whole is not None:
            parts.append(str(self.whole))
        if self.numerator is not None:
            parts.append(f"{self.numerator}/{self.denominator}")
        return " ".join(parts)
