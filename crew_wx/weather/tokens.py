"""Token cursor shared by the METAR and TAF decoders."""

from typing import Iterable, List, Optional


class TokenCursor:
    """
    Forward cursor over whitespace separated report tokens.

    Decoder steps look at the next token with ``peek()`` and consume it
    with ``advance()`` only when it matches; a token can be handed back
    with ``push_back()``.
    """

    def __init__(self, tokens: Iterable[str]):
        self._tokens: List[str] = [token for token in tokens if token]
        self._index = 0

    @classmethod
    def from_text(cls, text: str) -> 'TokenCursor':
        return cls(text.split())

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self) -> Optional[str]:
        if self.at_end:
            return None
        return self._tokens[self._index]

    def advance(self) -> str:
        if self.at_end:
            raise IndexError("No more tokens")
        token = self._tokens[self._index]
        self._index += 1
        return token

    def push_back(self) -> None:
        if self._index == 0:
            raise IndexError("Already at first token")
        self._index -= 1

    def remaining(self) -> List[str]:
        return self._tokens[self._index:]

    def __repr__(self) -> str:
        return f"TokenCursor({' '.join(self.remaining())!r})"
