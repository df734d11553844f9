# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Root of every error raised by the machine and its configuration."""


# ── construction ──────────────────────────────────────────────────
class ConstructionError(EnigmaError):
    """Bad alphabet or cycle text."""


class DuplicateSymbolError(ConstructionError):
    pass


class DuplicateError(ConstructionError):
    """A symbol appears in more than one cycle."""


# ── configuration / setup ─────────────────────────────────────────
class ConfigError(EnigmaError):
    pass


# ── lookups ───────────────────────────────────────────────────────
class EnigmaLookupError(EnigmaError, LookupError):
    pass


class NotFoundError(EnigmaLookupError):
    pass


class RangeError(EnigmaLookupError):
    pass


class UnknownRotorError(EnigmaLookupError):
    pass


# ── mechanics ─────────────────────────────────────────────────────
class MechanicalError(EnigmaError):
    """Asked a wheel to do something it physically cannot."""
