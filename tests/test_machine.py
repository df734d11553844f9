"""Machine tests: slot validation, stepping (double step) and enciphering.

Tests cover:
    - insert_rotors / set_rotors validation and atomicity
    - advance_machine: single pass over pre-step notches, double stepping
    - convert: known naval M4 vectors, reciprocity, plugboard handling
"""

import pytest

from errors import ConfigError, NotFoundError, UnknownRotorError
from machine import Machine
from permutation import Permutation
from rotor import Rotor
from suites import load_suite

HIAWATHA_PLUGS = "(HQ) (EX) (IP) (TR) (BY)"


@pytest.fixture
def three_rotor(upper):
    """Enigma I layout: reflector B, rotors I II III, all three moving."""
    m = Machine(upper, 4, 3, load_suite("legacy").get_all_rotors())
    m.insert_rotors(["B", "I", "II", "III"])
    return m


# -- construction --------------------------------------------------------------

@pytest.mark.parametrize("num_rotors, num_pawls", [(1, 0), (5, 5), (5, -1)])
def test_bad_slot_counts(upper, num_rotors, num_pawls):
    with pytest.raises(ConfigError):
        Machine(upper, num_rotors, num_pawls, [])


def test_duplicate_rotor_names_rejected(upper):
    perm = Permutation("", upper)
    with pytest.raises(ConfigError):
        Machine(upper, 3, 1, [Rotor.fixed("X", perm), Rotor.fixed("X", perm)])


def test_inventory(machine):
    names = [r.name for r in machine.get_all_rotors()]
    assert names[:3] == ["I", "II", "III"]
    assert "GAMMA" in names
    assert machine.get_rotor("I").name == "I"
    with pytest.raises(UnknownRotorError):
        machine.get_rotor("IX")


# -- setup ---------------------------------------------------------------------

def test_settings_after_setup(machine, upper):
    assert machine.num_rotors == 5
    assert machine.num_pawls == 3
    assert machine.get_rotor("BETA").setting == 0
    assert machine.get_rotor("III").setting == upper.to_int("X")
    assert machine.get_rotor("IV").setting == upper.to_int("L")
    assert machine.get_rotor("I").setting == upper.to_int("E")
    assert machine.settings() == "AXLE"
    assert [r.name for r in machine.rotors] == ["B", "BETA", "III", "IV", "I"]


@pytest.mark.parametrize("names", [
    ["BETA", "B", "III", "IV", "I"],      # reflector not in slot 0
    ["B", "C", "III", "IV", "I"],         # second reflector
    ["B", "BETA", "III", "GAMMA", "I"],   # fixed rotor under a pawl
    ["B", "I", "III", "IV", "II"],        # moving rotor without a pawl
    ["B", "BETA", "I", "IV", "I"],        # duplicate
    ["B", "BETA", "III", "IV"],           # too few
])
def test_insert_rotors_rejects(machine, names):
    with pytest.raises(ConfigError):
        machine.insert_rotors(names)


def test_failed_insert_keeps_previous_rotors(machine):
    with pytest.raises(ConfigError):
        machine.insert_rotors(["B", "BETA", "III", "GAMMA", "I"])
    assert [r.name for r in machine.rotors] == ["B", "BETA", "III", "IV", "I"]
    assert machine.settings() == "AXLE"


def test_insert_unknown_rotor(machine):
    with pytest.raises(UnknownRotorError):
        machine.insert_rotors(["B", "BETA", "III", "IV", "IX"])


def test_insert_resets_settings(machine):
    machine.insert_rotors(["B", "GAMMA", "V", "VI", "VII"])
    machine.insert_rotors(["B", "BETA", "III", "IV", "I"])
    assert machine.settings() == "AAAA"


@pytest.mark.parametrize("setting", ["AXL", "AXLEE", "AXLe", "AX1E"])
def test_set_rotors_rejects(machine, setting):
    with pytest.raises(ConfigError):
        machine.set_rotors(setting)


def test_machine_without_rotors(upper):
    m = Machine(upper, 3, 1, [])
    with pytest.raises(ConfigError):
        m.set_rotors("AA")
    with pytest.raises(ConfigError):
        m.convert(0)


def test_reset_rotors(machine):
    machine.reset_rotors()
    assert machine.settings() == "AAAA"


# -- stepping ------------------------------------------------------------------

def test_rightmost_always_steps(machine):
    for _ in range(12):
        machine.convert_char("Y")
    assert machine.settings() == "AXLQ"


def test_double_step(three_rotor):
    three_rotor.set_rotors("ADU")
    seen = []
    for _ in range(4):
        three_rotor.advance_machine()
        seen.append(three_rotor.settings())
    assert seen == ["ADV", "AEW", "BFX", "BFY"]


def test_middle_steps_twice_per_revolution(three_rotor):
    three_rotor.set_rotors("ADA")
    middle = three_rotor.get_rotor("II")
    moves = []
    for step in range(26):
        before = middle.setting
        three_rotor.advance_machine()
        if middle.setting != before:
            moves.append(step)
    assert moves == [21, 22]
    assert three_rotor.settings() == "BFA"


def test_rightmost_period(three_rotor):
    three_rotor.set_rotors("AAA")
    right = three_rotor.get_rotor("III")
    returns = []
    for step in range(1, 26 * 26 + 1):
        three_rotor.advance_machine()
        if right.setting == 0:
            returns.append(step)
    assert returns == list(range(26, 26 * 26 + 1, 26))


def test_fixed_slots_never_move(machine):
    for _ in range(500):
        machine.advance_machine()
    assert machine.settings()[0] == "A"
    assert machine.get_rotor("B").setting == 0


# -- enciphering ---------------------------------------------------------------

def test_char_conversion(machine, upper):
    machine.set_plugboard(Permutation("(YF) (ZH)", upper))
    assert machine.convert_char("Y") == "Z"


def test_hiawatha(machine, upper):
    machine.set_plugboard(Permutation(HIAWATHA_PLUGS, upper))
    assert machine.convert_message("FROM HIS SHOULDER HIAWATHA") == "QVPQSOKOILPUBKJZPISFXDW"
    assert machine.convert_message("TOOK THE CAMERA OF ROSEWOOD") == "BHCNSCXNUOAATZXSRCFYDGU"


def test_hiawatha_decrypts(machine, upper):
    machine.set_plugboard(Permutation(HIAWATHA_PLUGS, upper))
    assert machine.convert_message("QVPQS OKOIL PUBKJ ZPISF XDW") == "FROMHISSHOULDERHIAWATHA"


def test_lower_case_is_folded(machine, upper):
    machine.set_plugboard(Permutation(HIAWATHA_PLUGS, upper))
    assert machine.convert_message("From his\tshoulder\nHiawatha") == "QVPQSOKOILPUBKJZPISFXDW"


def test_reciprocal(machine, upper):
    machine.set_plugboard(Permutation("(AQ) (LN) (CT)", upper))
    plain = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 5
    cipher = machine.convert_message(plain)
    machine.set_rotors("AXLE")
    assert machine.convert_message(cipher) == plain


def test_never_enciphers_to_itself(machine):
    for ch in "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA":
        assert machine.convert_char(ch) != ch


def test_state_carries_across_symbols(machine):
    out = machine.convert_message("AAAAAAAAAA")
    assert len(set(out)) > 1


def test_identity_plugboard_is_bypass(machine, upper):
    first = machine.convert_message("HELLOWORLD")
    machine.set_rotors("AXLE")
    machine.set_plugboard(Permutation("(A) (B) (C)", upper))
    assert machine.convert_message("HELLOWORLD") == first


def test_symbol_outside_alphabet(machine):
    with pytest.raises(NotFoundError):
        machine.convert_message("HELLO, WORLD")


def test_index_and_char_forms_agree(machine, upper):
    by_char = machine.convert_char("K")
    machine.set_rotors("AXLE")
    assert upper.to_char(machine.convert(upper.to_int("K"))) == by_char


def test_ring_settings_change_output(machine):
    plain = machine.convert_message("ATTACKATDAWN")
    machine.set_rotors("AXLE")
    machine.set_rings("AAAB")
    assert machine.convert_message("ATTACKATDAWN") != plain
    with pytest.raises(ConfigError):
        machine.set_rings("AB")
