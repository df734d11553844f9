# permutation.py
from __future__ import annotations

from alphabet import Alphabet
from debug import Debug
from errors import ConstructionError, DuplicateError

debug = Debug()


def parse_cycles(cycles: str) -> list[str]:
    """Split "(ABC) (DE)" into ["ABC", "DE"]. Whitespace is ignored."""
    groups: list[str] = []
    current: list[str] | None = None

    for ch in cycles:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise ConstructionError(f"Nested '(' in cycles {cycles!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConstructionError(f"Unmatched ')' in cycles {cycles!r}")
            if not current:
                raise ConstructionError(f"Empty cycle in {cycles!r}")
            groups.append("".join(current))
            current = None
        elif current is None:
            raise ConstructionError(f"Symbol {ch!r} outside any cycle in {cycles!r}")
        else:
            current.append(ch)

    if current is not None:
        raise ConstructionError(f"Unclosed '(' in cycles {cycles!r}")
    return groups


class Permutation:
    """A permutation of an alphabet's index range, given in cycle notation.

    Symbols absent from every cycle map to themselves. An empty cycle string
    gives the identity, reported by `is_identity` so callers can tell
    "nothing wired" apart from a wiring that happens to fix every symbol.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self.size = alphabet.size
        self.cycles: tuple[str, ...] = tuple(parse_cycles(cycles))
        self.is_identity: bool = not self.cycles

        # every symbol is checked before any lookup
        seen: set[str] = set()
        for cycle in self.cycles:
            for ch in cycle:
                if ch not in alphabet:
                    raise ConstructionError(
                        f"Symbol {ch!r} in cycle ({cycle}) not in alphabet"
                    )
                if ch in seen:
                    raise DuplicateError(f"Symbol {ch!r} appears in more than one cycle")
                seen.add(ch)

        # dense lookup tables, forward and precomputed inverse
        self._fwd = list(range(self.size))
        for cycle in self.cycles:
            for i, ch in enumerate(cycle):
                succ = cycle[(i + 1) % len(cycle)]
                self._fwd[alphabet.to_int(ch)] = alphabet.to_int(succ)

        self._inv = [0] * self.size
        for i, j in enumerate(self._fwd):
            self._inv[j] = i
        if sorted(self._fwd) != list(range(self.size)):
            raise ConstructionError(f"Cycles {cycles!r} do not form a permutation")

        debug.log("permutation", f"{self} fwd={self._fwd}")

    def wrap(self, p: int) -> int:
        return p % self.size

    # ── index API ────────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._inv[self.wrap(c)]

    # ── symbol API ───────────────────────────────────────────────
    def permute_char(self, p: str) -> str:
        return self.alphabet.to_char(self.permute(self.alphabet.to_int(p)))

    def invert_char(self, c: str) -> str:
        return self.alphabet.to_char(self.invert(self.alphabet.to_int(c)))

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self.cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self}>" if self.cycles else "<Permutation identity>"
