"""Exception hierarchy for prime-field arithmetic.

The lookup table reports a missing entry as ``None``; the element layer
turns that absence into one of the typed errors below.
"""

from __future__ import annotations


class PrimeFieldError(Exception):
    """Base class for every error raised by primefield."""


class NotPrimeError(PrimeFieldError, ValueError):
    """The modulus is not a prime integer >= 2."""


class TableTooLargeError(PrimeFieldError, ValueError):
    """The modulus exceeds the configured lookup-table size limit."""


class ResidueOutOfRangeError(PrimeFieldError, IndexError):
    """A residue outside [0, N) was used where a reduced value is required."""

    def __init__(self, value: int, modulus: int) -> None:
        super().__init__(f"Residue {value} outside [0, {modulus})")
        self.value = value
        self.modulus = modulus


class FieldZeroDivisionError(PrimeFieldError, ZeroDivisionError):
    """Zero has no multiplicative inverse."""


class NoSquareRootError(PrimeFieldError, ValueError):
    """The value is a quadratic non-residue."""

    def __init__(self, value: int, modulus: int) -> None:
        super().__init__(f"{value} is not a quadratic residue mod {modulus}")
        self.value = value
        self.modulus = modulus


class ModulusMismatchError(PrimeFieldError, TypeError):
    """Operands belong to fields with different moduli."""
