from typing import Dict

from config_reader import read_config
from errors import ConfigError
from machine import Machine

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Naval Enigma M4: eight moving wheels, the two thin fixed wheels and the
# thin reflectors B and C, written as cycles.
LEGACY_CONFIG = f"""\
{Alpha26}
5 3
I    MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II   ME  (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III  MV  (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV   MJ  (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V    MZ  (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
VI   MZM (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
VII  MZM (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
VIII MZM (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
BETA  N  (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
GAMMA N  (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B R (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)
C R (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)
"""

SUITES: Dict[str, str] = {
    "legacy": LEGACY_CONFIG,
}


def load_suite(name: str) -> Machine:
    """Build a fresh machine for the built-in suite `name`."""
    try:
        text = SUITES[name.lower()]
    except KeyError:
        raise ConfigError(
            f"Unknown suite '{name}'. Expected one of {list(SUITES)}"
        ) from None
    return read_config(text)
