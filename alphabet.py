# alphabet.py
from __future__ import annotations

from errors import ConstructionError, DuplicateSymbolError, NotFoundError, RangeError


class Alphabet:
    """Ordered set of distinct symbols, numbered 0 … size-1."""

    def __init__(self, chars: str) -> None:
        if not chars:
            raise ConstructionError("Alphabet must contain at least one symbol")

        self.chars: str = chars
        self.size: int = len(chars)
        self._index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in self._index:
                raise DuplicateSymbolError(f"Alphabet cannot have duplicates: {ch!r}")
            self._index[ch] = i

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # symbol → index
    def to_int(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise NotFoundError(f"Character {ch!r} not found in alphabet") from None

    # index → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < self.size):
            raise RangeError(f"Index {index} out of range 0–{self.size - 1}")
        return self.chars[index]

    __contains__ = contains

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        return self.chars

    def __repr__(self) -> str:
        return f"<Alphabet {self.chars!r}>"
