# rotor.py
from __future__ import annotations

from enum import Enum

from debug import Debug
from errors import ConstructionError, MechanicalError, RangeError
from permutation import Permutation

debug = Debug()


class RotorKind(Enum):
    FIXED = "N"
    MOVING = "M"
    REFLECTOR = "R"


class Rotor:
    """One wheel of the machine.

    The three kinds share a single class; the `kind` tag decides whether the
    wheel rotates, reflects and carries notches. Build them with
    `Rotor.fixed`, `Rotor.moving` and `Rotor.reflector`.
    """

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        alphabet = permutation.alphabet
        if kind is RotorKind.MOVING:
            if not notches:
                raise ConstructionError(f"Moving rotor {name} needs at least one notch")
            bad = [ch for ch in notches if ch not in alphabet]
            if bad:
                raise ConstructionError(
                    f"Notch {bad[0]!r} of rotor {name} not in alphabet"
                )
        elif notches:
            raise ConstructionError(f"Only moving rotors carry notches ({name})")

        self.name = name
        self.permutation = permutation
        self.alphabet = alphabet
        self.size = alphabet.size
        self.kind = kind
        self.notches = frozenset(notches)

        self.setting = 0
        self.ring = 0

    # ── constructors per kind ─────────────────────────────────────
    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.REFLECTOR)

    # ── capabilities ─────────────────────────────────────────────
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    def at_notch(self) -> bool:
        """True if the symbol showing in the window is one of my notches."""
        return self.alphabet.to_char(self.setting) in self.notches

    # ── positioning ──────────────────────────────────────────────
    def _position(self, value: int | str) -> int:
        if isinstance(value, str):
            return self.alphabet.to_int(value)
        if not (0 <= value < self.size):
            raise RangeError(f"Setting {value} out of range 0–{self.size - 1}")
        return value

    def set(self, value: int | str) -> None:
        """Turn the wheel to `value`, an index or a symbol."""
        posn = self._position(value)
        if self.reflecting() and posn != 0:
            raise MechanicalError(f"Reflector {self.name} has only one position")
        self.setting = posn

    def set_ring(self, value: int | str) -> None:
        """Shift the wiring against the lettered ring (Ringstellung)."""
        posn = self._position(value)
        if self.reflecting() and posn != 0:
            raise MechanicalError(f"Reflector {self.name} has no ring setting")
        self.ring = posn

    def advance(self) -> None:
        if self.rotates():
            self.setting = (self.setting + 1) % self.size
            debug.log("rotor", f"{self.name} -> {self.alphabet.to_char(self.setting)}")

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        shift = (p + self.setting - self.ring) % self.size
        mapped = self.permutation.permute(shift)
        return (mapped - self.setting + self.ring) % self.size

    def convert_backward(self, e: int) -> int:
        shift = (e + self.setting - self.ring) % self.size
        mapped = self.permutation.invert(shift)
        return (mapped - self.setting + self.ring) % self.size

    def __repr__(self) -> str:
        return (
            f"<Rotor {self.name} {self.kind.name.lower()} "
            f"pos={self.setting} ring={self.ring}>"
        )
