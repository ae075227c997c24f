"""Validated prime modulus.

A ``Modulus`` is checked once, when a field family or lookup table is first
requested, so that every later computation can assume a field and not a
general ring.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from primefield.core.errors import NotPrimeError

# Deterministic Miller-Rabin witnesses for every n < 3.3 * 10**24.
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(n: int) -> bool:
    """Primality test (deterministic Miller-Rabin for native-size ints)."""
    if n < 2:
        return False
    for p in _WITNESSES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _WITNESSES:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


class Modulus(BaseModel):
    """A prime modulus N, immutable once validated."""

    model_config = ConfigDict(frozen=True)

    value: int

    @field_validator("value", mode="before")
    @classmethod
    def _must_be_prime(cls, v):
        # bool is an int subclass, but GF(True) is never intended
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"modulus must be an int, got {type(v).__name__}")
        if not is_prime(v):
            raise ValueError(f"modulus {v} is not prime")
        return v

    def __int__(self) -> int:
        return self.value


def validate_modulus(n: int | Modulus) -> int:
    """Return *n* as a plain int after checking that it is prime.

    Raises ``NotPrimeError`` rather than pydantic's ``ValidationError``.
    """
    if isinstance(n, Modulus):
        return n.value
    try:
        return Modulus(value=n).value
    except ValidationError as exc:
        raise NotPrimeError(f"Invalid modulus {n!r}: not a prime integer") from exc
