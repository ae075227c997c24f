"""Elements of the prime field GF(N).

``GF(N)`` returns the element type for modulus N; calls with the same
modulus return the same class.  Elements always hold a residue in [0, N).

    >>> F7 = GF(7)
    >>> F7(3) / F7(2)
    GF(7)(5)
    >>> F7(2).sqrt()
    GF(7)(3)

Addition and multiplication are plain modular reduction.  Negation,
subtraction, division, ``squared``, ``sqrt`` and ``inv`` read the shared
lookup table, which is fetched the first time one of them is used.  A
missing table entry is raised as ``FieldZeroDivisionError`` or
``NoSquareRootError``.

An element equals a plain int only if that int is already reduced:
``GF(7)(3) == 3`` but ``GF(7)(3) != 10``.  Hashing follows the same rule,
so elements and reduced ints can share sets and dict keys.

Compound operators (``+=``, ``-=``, ``*=``, ``/=``) update the element in
place, so an element used as a dict key must not be mutated.
"""

from __future__ import annotations

import logging
import operator
import threading
from typing import Dict, Iterator, Optional

from primefield.core.errors import (
    FieldZeroDivisionError,
    ModulusMismatchError,
    NoSquareRootError,
    ResidueOutOfRangeError,
)
from primefield.core.lookup import LookupTable, get_table
from primefield.core.modulus import Modulus, validate_modulus

logger = logging.getLogger(__name__)


class FieldElement:
    """Base class of every ``GF(N)`` element type.

    Invariant: ``0 <= value < modulus``.
    """

    __slots__ = ("_value",)

    modulus: int = 0  # set by GF()
    _table: Optional[LookupTable] = None

    def __init__(self, value: int = 0) -> None:
        if not type(self).modulus:
            raise TypeError("FieldElement is abstract; create elements through GF(N)")
        self._value = operator.index(value) % self.modulus

    # ---- construction ----

    @classmethod
    def strict(cls, value: int) -> "FieldElement":
        """Construct without wraparound: *value* must already be in [0, N)."""
        value = operator.index(value)
        if not 0 <= value < cls.modulus:
            raise ResidueOutOfRangeError(value, cls.modulus)
        return cls(value)

    @classmethod
    def zero(cls) -> "FieldElement":
        return cls(0)

    @classmethod
    def one(cls) -> "FieldElement":
        return cls(1)

    @classmethod
    def elements(cls) -> Iterator["FieldElement"]:
        """Every element of the field, in residue order."""
        return (cls(i) for i in range(cls.modulus))

    @classmethod
    def lookup(cls) -> LookupTable:
        """The lookup table shared by all elements of this field."""
        table = cls._table
        if table is None:
            table = get_table(cls.modulus)
            cls._table = table
        return table

    # ---- value access ----

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, x: int) -> None:
        """Assign from an integer, reduced mod N."""
        self._value = operator.index(x) % self.modulus

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"GF({self.modulus})({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.modulus == other.modulus and self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        # equal to a plain int only when that int is already reduced
        return hash(self._value)

    def _coerce(self, other) -> Optional[int]:
        """Residue of *other*, or None if it is not a field operand."""
        if isinstance(other, FieldElement):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(
                    f"Cannot combine GF({self.modulus}) with GF({other.modulus})"
                )
            return other._value
        if isinstance(other, int):
            return other % self.modulus
        return None

    # ---- table lookups ----

    def squared(self) -> "FieldElement":
        return type(self)(self.lookup().square(self._value))

    def sqrt(self) -> "FieldElement":
        """Smaller square root; ``-x.sqrt()`` is the other one."""
        root = self.lookup().square_root(self._value)
        if root is None:
            raise NoSquareRootError(self._value, self.modulus)
        return type(self)(root)

    def is_square(self) -> bool:
        """True for 0 and the nonzero quadratic residues."""
        return self.lookup().square_root(self._value) is not None

    def inv(self) -> "FieldElement":
        """Multiplicative inverse (x⁻¹)."""
        inverse = self.lookup().multiplicative_inverse(self._value)
        if inverse is None:
            raise FieldZeroDivisionError(f"0 has no inverse in GF({self.modulus})")
        return type(self)(inverse)

    # ---- arithmetic ----

    def __neg__(self) -> "FieldElement":
        return type(self)(self.lookup().additive_inverse(self._value))

    def __pos__(self) -> "FieldElement":
        return type(self)(self._value)

    def __iadd__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        self.set_value(self._value + v)
        return self

    def __add__(self, other):
        result = type(self)(self._value)
        return result.__iadd__(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __isub__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        self.set_value(self._value + self.lookup().additive_inverse(v))
        return self

    def __sub__(self, other):
        result = type(self)(self._value)
        return result.__isub__(other)

    def __rsub__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return type(self)(v) - self

    def __imul__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        self.set_value(self._value * v)
        return self

    def __mul__(self, other):
        result = type(self)(self._value)
        return result.__imul__(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __itruediv__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        self.set_value(self._value * type(self)(v).inv()._value)
        return self

    def __truediv__(self, other):
        result = type(self)(self._value)
        return result.__itruediv__(other)

    def __rtruediv__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return type(self)(v) / self

    def __pow__(self, exponent: int) -> "FieldElement":
        """Square-and-multiply; negative exponents go through ``inv``."""
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inv() ** -exponent
        return type(self)(pow(self._value, exponent, self.modulus))


# ---------------------------------------------------------------------------
# Field-type factory
# ---------------------------------------------------------------------------

# Calls to GF with the same modulus return the same class.
_field_cache: Dict[int, type] = {}
_field_lock = threading.Lock()


def GF(modulus: int | Modulus, eager: bool = False) -> type:
    """Return the element type of GF(*modulus*).

    The modulus is checked for primality here, once per field.  With
    *eager* the lookup table is built now instead of on first use.
    """
    n = validate_modulus(modulus)
    with _field_lock:
        cls = _field_cache.get(n)
        if cls is None:
            cls = type(f"GF({n})", (FieldElement,), {"__slots__": (), "modulus": n, "_table": None})
            _field_cache[n] = cls
            logger.debug("Created field type GF(%d)", n)
    if eager:
        cls.lookup()
    return cls


# ---- module-level helpers ----


def squared(x: FieldElement) -> FieldElement:
    """x² via the lookup table."""
    return x.squared()


def sqrt(x: FieldElement) -> FieldElement:
    return x.sqrt()


def inv(x: FieldElement) -> FieldElement:
    return x.inv()
