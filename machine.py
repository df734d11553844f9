# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, UnknownRotorError
from permutation import Permutation
from rotor import Rotor
from utilities import preprocess_message

debug = Debug()


class Machine:
    """A complete rotor machine: reflector, rotor slots and plugboard.

    Slot 0 holds the reflector; the rightmost `num_pawls` slots hold the
    rotating wheels and every slot between them holds a fixed wheel.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ConfigError(f"Need at least 2 rotor slots, got {num_rotors}")
        if not (0 <= num_pawls < num_rotors):
            raise ConfigError(f"Invalid number of pawls: {num_pawls}")

        self.alphabet = alphabet
        self.num_rotors = num_rotors
        self.num_pawls = num_pawls

        self._all_rotors: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in self._all_rotors:
                raise ConfigError(f"Rotor {rotor.name} described twice")
            self._all_rotors[rotor.name] = rotor

        self._rotors: list[Rotor] = []
        self.plugboard = Permutation("", alphabet)

    # ── rotor inventory ─────────────────────────────────────────

    def get_all_rotors(self) -> list[Rotor]:
        return list(self._all_rotors.values())

    def get_rotor(self, name: str) -> Rotor:
        try:
            return self._all_rotors[name]
        except KeyError:
            raise UnknownRotorError(f"Rotor {name} not found") from None

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return tuple(self._rotors)

    # ── setup ───────────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the rotors called `names`, reflector first.

        Nothing changes unless every name passes validation. Inserted rotors
        start at setting 0 with ring 0.
        """
        if len(names) != self.num_rotors:
            raise ConfigError(
                f"Incorrect number of rotors: expected {self.num_rotors}, got {len(names)}"
            )

        chosen: list[Rotor] = []
        first_moving = self.num_rotors - self.num_pawls
        for i, name in enumerate(names):
            rotor = self.get_rotor(name)
            if any(r is rotor for r in chosen):
                raise ConfigError(f"Cannot insert duplicate rotor {name}")
            if i == 0:
                if not rotor.reflecting():
                    raise ConfigError(f"Reflector must be in slot 0, got {name}")
            elif rotor.reflecting():
                raise ConfigError(f"Reflector {name} may only sit in slot 0")
            elif i < first_moving and rotor.rotates():
                raise ConfigError(f"Moving rotor {name} in slot {i} has no pawl")
            elif i >= first_moving and not rotor.rotates():
                raise ConfigError(f"Fixed rotor {name} cannot sit in pawl slot {i}")
            chosen.append(rotor)

        for rotor in chosen:
            rotor.set(0)
            rotor.set_ring(0)
        self._rotors = chosen
        debug.log("config", f"inserted {' '.join(names)}")

    def _require_rotors(self) -> None:
        if not self._rotors:
            raise ConfigError("No rotors inserted")

    def _check_window_string(self, setting: str, what: str) -> None:
        self._require_rotors()
        if len(setting) != self.num_rotors - 1:
            raise ConfigError(
                f"Incorrect number of {what}: expected {self.num_rotors - 1}, "
                f"got {len(setting)}"
            )
        for ch in setting:
            if ch not in self.alphabet:
                raise ConfigError(f"{what.capitalize()} symbol {ch!r} not in alphabet")

    def set_rotors(self, setting: str) -> None:
        """Turn slots 1 … n-1 to the symbols of `setting`, left to right."""
        self._check_window_string(setting, "settings")
        for rotor, ch in zip(self._rotors[1:], setting):
            rotor.set(ch)

    def set_rings(self, rings: str) -> None:
        """Apply ring settings to slots 1 … n-1, left to right."""
        self._check_window_string(rings, "ring settings")
        for rotor, ch in zip(self._rotors[1:], rings):
            rotor.set_ring(ch)

    def reset_rotors(self) -> None:
        """Turn every non-reflector slot back to the first symbol."""
        self.set_rotors(self.alphabet.to_char(0) * (self.num_rotors - 1))

    def set_plugboard(self, plugboard: Permutation) -> None:
        self.plugboard = plugboard
        debug.log("plugboard", f"plugboard {plugboard!r}")

    def settings(self) -> str:
        """Window letters of slots 1 … n-1."""
        self._require_rotors()
        return "".join(self.alphabet.to_char(r.setting) for r in self._rotors[1:])

    # ── stepping logic ──────────────────────────────────────────

    def advance_machine(self) -> None:
        """Advance the wheels for one key-press.

        Every notch is read before any wheel moves, so a wheel stepping in
        this key-press cannot change what its neighbours see.
        """
        self._require_rotors()
        rotors = self._rotors
        move = [False] * len(rotors)
        move[-1] = True
        for i in range(len(rotors) - 1, 0, -1):
            if rotors[i].at_notch() and rotors[i].rotates() and rotors[i - 1].rotates():
                move[i] = move[i - 1] = True

        for rotor, step in zip(rotors, move):
            if step:
                rotor.advance()
        if debug.active("stepping"):
            debug.log("stepping", f"window {self.settings()}")

    # ── encipher ────────────────────────────────────────────────

    def convert(self, c: int) -> int:
        """Encipher index `c`, advancing the wheels first."""
        self._require_rotors()
        self.advance_machine()

        signal = self.plugboard.permute(c)
        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)
        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)
        out = self.plugboard.invert(signal)

        debug.log("encipher", f"{c} -> {out}")
        return out

    def convert_char(self, ch: str) -> str:
        return self.alphabet.to_char(self.convert(self.alphabet.to_int(ch)))

    def convert_message(self, msg: str) -> str:
        """Encipher every non-blank symbol of `msg` in turn.

        A symbol missing from the alphabet is upper-cased when its upper-case
        form is a member; anything else raises NotFoundError.
        """
        out = []
        for ch in preprocess_message(msg):
            if ch not in self.alphabet and ch.upper() in self.alphabet:
                ch = ch.upper()
            out.append(self.convert_char(ch))
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors) or "empty"
        return f"<Machine {names} plugboard={self.plugboard!r}>"
