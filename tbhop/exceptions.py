"""
Exceptions Module

Errors raised by tbhop when arguments fail validation. All of them are
raised before any model is modified.
"""


class TightBindingError(Exception):
    """Base class for all tbhop errors."""


class DimensionError(TightBindingError, ValueError):
    """An array argument has the wrong shape (or describes a degenerate cell)."""


class OrbitalIndexError(TightBindingError, IndexError):
    """An orbital label lies outside 1..num_orbitals."""
