"""Shared fixtures: the upper-case alphabet and the built-in naval wheel set."""

import pytest

from alphabet import Alphabet
from debug import Debug
from suites import Alpha26, load_suite


@pytest.fixture
def upper():
    return Alphabet(Alpha26)


@pytest.fixture
def machine():
    """Naval M4 set up as B BETA III IV I at AXLE, no plugboard."""
    m = load_suite("legacy")
    m.insert_rotors(["B", "BETA", "III", "IV", "I"])
    m.set_rotors("AXLE")
    return m


@pytest.fixture(autouse=True)
def _quiet_debug():
    """Leave every logging component off between tests."""
    yield
    dbg = Debug()
    dbg.disable(*dbg.status())
    dbg.toggle_global(True)
