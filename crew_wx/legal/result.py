"""
Result of a legality check.

Facts record what was considered and errors record why a check failed,
both in the order they were found.
"""

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO


@dataclass
class Result:
    """Ordered trail of facts and errors from one validation."""

    facts: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def add_fact(self, fact: str) -> None:
        """Add a fact considered during validation."""
        self.facts.append(fact)

    def add_error(self, error: str) -> None:
        """Add a reason the flight is not legal."""
        self.errors.append(error)

    def has_error(self) -> bool:
        """Check if validation failed (any errors)."""
        return len(self.errors) > 0

    def output(self, stream: Optional[TextIO] = None) -> None:
        """
        Print facts then errors, one per line.

        Args:
            stream: Where to print, defaults to stdout
        """
        stream = stream or sys.stdout
        print("FACTS", file=stream)
        for fact in self.facts:
            print(fact, file=stream)
        print(file=stream)
        print("ERRORS", file=stream)
        for error in self.errors:
            print(error, file=stream)

    def __str__(self) -> str:
        if self.has_error():
            return f"Not legal ({len(self.errors)} errors)"
        return f"Legal ({len(self.facts)} facts)"
