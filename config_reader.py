# config_reader.py
"""Read machine descriptions and setup lines.

A configuration is a stream of whitespace-separated tokens::

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    5 3
    I MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    BETA N (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B R (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)

and a setup line looks like ``* B BETA III IV I AXLE (HQ) (EX)``, with an
optional ring-settings string right after the settings.
"""
from __future__ import annotations

from pathlib import Path

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor import Rotor, RotorKind

debug = Debug()

SETUP_MARKER = "*"
_RESERVED = set("()*")


def _take_int(tokens: list[str], pos: int, what: str) -> int:
    if pos >= len(tokens):
        raise ConfigError("configuration file truncated")
    try:
        return int(tokens[pos])
    except ValueError:
        raise ConfigError(f"Expected {what}, got {tokens[pos]!r}") from None


def read_rotor(tokens: list[str], pos: int, alphabet: Alphabet) -> tuple[Rotor, int]:
    """Build the rotor described at `tokens[pos]`; return it and the next position."""
    if pos + 1 >= len(tokens):
        raise ConfigError("bad rotor description: truncated")

    name = tokens[pos].upper()
    if _RESERVED & set(name):
        raise ConfigError(f"bad rotor description: name {tokens[pos]!r}")

    type_token = tokens[pos + 1]
    try:
        kind = RotorKind(type_token[0])
    except ValueError:
        raise ConfigError(f"Rotor {name}: unknown type {type_token[0]!r}") from None
    notches = type_token[1:]
    if notches and kind is not RotorKind.MOVING:
        raise ConfigError(f"Rotor {name}: only moving rotors have notches")

    pos += 2
    cycles = []
    while pos < len(tokens) and tokens[pos].startswith("("):
        cycles.append(tokens[pos])
        pos += 1
    perm = Permutation(" ".join(cycles), alphabet)

    if kind is RotorKind.MOVING:
        rotor = Rotor.moving(name, perm, notches)
    elif kind is RotorKind.FIXED:
        rotor = Rotor.fixed(name, perm)
    else:
        if not perm.derangement():
            raise ConfigError(f"Reflector {name} must map every symbol elsewhere")
        rotor = Rotor.reflector(name, perm)

    debug.log("config", f"read {rotor!r} {perm}")
    return rotor, pos


def read_config(text: str) -> Machine:
    """Return a machine built from configuration `text`."""
    tokens = text.split()
    if not tokens:
        raise ConfigError("configuration file truncated")

    if _RESERVED & set(tokens[0]):
        raise ConfigError(f"Alphabet {tokens[0]!r} may not contain ( ) or *")
    alphabet = Alphabet(tokens[0])
    num_rotors = _take_int(tokens, 1, "number of rotors")
    num_pawls = _take_int(tokens, 2, "number of pawls")

    rotors: list[Rotor] = []
    pos = 3
    while pos < len(tokens):
        rotor, pos = read_rotor(tokens, pos, alphabet)
        rotors.append(rotor)

    return Machine(alphabet, num_rotors, num_pawls, rotors)


def load_config(path: str | Path) -> Machine:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not open {path}: {e.strerror}") from e
    return read_config(text)


# ────────────────────────────────────────────────────────────────────────
#  Setup lines
# ────────────────────────────────────────────────────────────────────────


def is_setup_line(line: str) -> bool:
    return line.lstrip().startswith(SETUP_MARKER)


def apply_setup(machine: Machine, line: str) -> None:
    """Insert rotors, set windows, rings and plugboard from a setup line."""
    tokens = line.split()
    if not tokens or tokens[0] != SETUP_MARKER:
        raise ConfigError(f"Setup line must start with {SETUP_MARKER!r}: {line!r}")

    known = {r.name for r in machine.get_all_rotors()}
    pos = 1
    names = []
    while (
        pos < len(tokens)
        and len(names) < machine.num_rotors
        and tokens[pos].upper() in known
    ):
        names.append(tokens[pos].upper())
        pos += 1

    if pos >= len(tokens):
        raise ConfigError("Setup line is missing the rotor settings")
    settings = tokens[pos]
    pos += 1

    rings = None
    if pos < len(tokens) and not tokens[pos].startswith("("):
        rings = tokens[pos]
        pos += 1

    plug_tokens = tokens[pos:]
    if plug_tokens and not plug_tokens[0].startswith("("):
        raise ConfigError(f"Unexpected token {plug_tokens[0]!r} in setup line")
    plugboard = Permutation(" ".join(plug_tokens), machine.alphabet)

    machine.insert_rotors(names)
    machine.set_rotors(settings)
    if rings is not None:
        machine.set_rings(rings)
    machine.set_plugboard(plugboard)
    debug.log("config", f"setup {machine!r} window={machine.settings()}")
