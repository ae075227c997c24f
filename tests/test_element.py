"""Tests for GF(N) element arithmetic."""

from __future__ import annotations

import itertools
import random

import pytest

from primefield.core import element
from primefield.core.element import GF, FieldElement
from primefield.core.errors import (
    FieldZeroDivisionError,
    ModulusMismatchError,
    NoSquareRootError,
    NotPrimeError,
    PrimeFieldError,
    ResidueOutOfRangeError,
)

PRIMES = [2, 3, 5, 7, 13]


# =========================================================================
# 1. Construction and value access
# =========================================================================


def test_reduces_on_construction():
    F = GF(7)
    assert F(10).value == 3
    assert F(-1).value == 6
    assert F(7).value == 0


@pytest.mark.parametrize("k", [-100, -8, -1, 0, 1, 6, 7, 8, 10**12])
def test_round_trip_is_k_mod_n(k):
    assert int(GF(7)(k)) == k % 7


def test_default_is_zero():
    assert GF(5)().value == 0


def test_set_value_reduces():
    a = GF(5)(1)
    a.set_value(12)
    assert a.value == 2


def test_strict_rejects_out_of_range():
    F = GF(5)
    assert F.strict(4).value == 4
    with pytest.raises(ResidueOutOfRangeError):
        F.strict(5)
    with pytest.raises(ResidueOutOfRangeError):
        F.strict(-1)


@pytest.mark.parametrize("bad", [2.9, 3.0, "3", None])
def test_non_integers_rejected(bad):
    F = GF(7)
    with pytest.raises(TypeError):
        F(bad)
    with pytest.raises(TypeError):
        F.strict(bad)
    a = F(1)
    with pytest.raises(TypeError):
        a.set_value(bad)
    assert a == 1


def test_construct_from_element_and_bool():
    F = GF(7)
    assert F(F(5)) == 5
    assert F(True) == 1


def test_same_modulus_same_class():
    assert GF(11) is GF(11)
    assert GF(11) is not GF(13)
    assert issubclass(GF(11), FieldElement)


def test_gf_rejects_non_prime():
    with pytest.raises(NotPrimeError):
        GF(6)
    with pytest.raises(NotPrimeError):
        GF(1)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        FieldElement(3)


def test_repr_and_str():
    a = GF(7)(3)
    assert repr(a) == "GF(7)(3)"
    assert str(a) == "3"


def test_bool_and_equality():
    F = GF(5)
    assert not F(0)
    assert F(3)
    assert F(3) == 3
    assert F(3) != 8
    assert F(3) != -2
    assert F(3) != GF(7)(3)
    assert hash(F(3)) == hash(F(8)) == hash(3)


def test_elements_and_reduced_ints_share_containers():
    F = GF(7)
    assert F(3) in {3}
    assert 3 in {F(3)}
    assert F(10) in {3}
    assert F(3) not in {10}
    counts = {3: "three"}
    assert counts[F(3)] == "three"
    assert len({F(3), F(10), 3}) == 1


def test_elements_and_identities():
    F = GF(5)
    assert [e.value for e in F.elements()] == [0, 1, 2, 3, 4]
    assert F.zero() == 0
    assert F.one() == 1


# =========================================================================
# 2. Pinned scenarios
# =========================================================================


def test_gf5_division_round_trip():
    F = GF(5)
    q = F(3) / F(2)
    assert q == 4
    assert q * F(2) == 3


def test_gf5_sqrt():
    F = GF(5)
    assert F(4).sqrt() == 2
    with pytest.raises(NoSquareRootError):
        F(2).sqrt()


def test_gf7_values():
    F = GF(7)
    assert F(3).inv() == 5
    assert F(3).squared() == 2
    assert F(4).squared() == 2
    assert F(2).sqrt() == 3


def test_other_root_is_negation():
    F = GF(7)
    r = F(2).sqrt()
    assert (-r).value == 4
    assert (-r).squared() == 2


def test_module_helpers():
    F = GF(7)
    assert element.squared(F(3)) == 2
    assert element.sqrt(F(2)) == 3
    assert element.inv(F(3)) == 5


# =========================================================================
# 3. Field properties
# =========================================================================


@pytest.mark.parametrize("n", PRIMES)
def test_addition_laws(n):
    F = GF(n)
    elems = list(F.elements())
    for a, b in itertools.product(elems, repeat=2):
        assert a + b == b + a
        assert a + 0 == a
        assert a + (-a) == 0
        assert a - b == a + (-b)
    for a, b, c in itertools.product(elems, repeat=3):
        assert (a + b) + c == a + (b + c)


@pytest.mark.parametrize("n", PRIMES)
def test_multiplication_laws(n):
    F = GF(n)
    for a in F.elements():
        assert a * 1 == a
        assert a * 0 == 0
        assert a.squared() == a * a
        if a:
            assert a * a.inv() == 1


@pytest.mark.parametrize("n", PRIMES)
def test_division_round_trip(n):
    F = GF(n)
    for a, b in itertools.product(F.elements(), repeat=2):
        if b:
            assert (a / b) * b == a


@pytest.mark.parametrize("n", PRIMES)
def test_sqrt_squares_back(n):
    F = GF(n)
    for a in F.elements():
        if a.is_square():
            assert a.sqrt().squared() == a
        else:
            with pytest.raises(NoSquareRootError):
                a.sqrt()


def test_random_large_field():
    F = GF(1009)
    rng = random.Random(1009)
    for _ in range(200):
        a, b = F(rng.randrange(1009)), F(rng.randrange(1, 1009))
        assert (a / b) * b == a
        assert int(a * b) == (int(a) * int(b)) % 1009


# =========================================================================
# 4. Operators
# =========================================================================


def test_compound_operators_mutate_in_place():
    F = GF(7)
    a = F(5)
    alias = a
    a += F(4)
    assert alias is a and a == 2
    a -= 3
    assert a == 6
    a *= F(3)
    assert a == 4
    a /= F(2)
    assert alias is a and a == 2


def test_binary_operators_return_new_elements():
    F = GF(7)
    a, b = F(5), F(4)
    c = a + b
    assert c is not a and a == 5


def test_reflected_int_operands():
    F = GF(7)
    assert 3 + F(5) == 1
    assert 3 - F(5) == 5
    assert 3 * F(5) == 1
    assert 1 / F(3) == 5


def test_pow():
    F = GF(7)
    assert F(3) ** 0 == 1
    assert F(3) ** 6 == 1
    assert F(3) ** -1 == 5
    assert F(2) ** 3 == 1


def test_unsupported_operand():
    with pytest.raises(TypeError):
        GF(7)(3) + 1.5


def test_mixed_moduli_rejected():
    with pytest.raises(ModulusMismatchError):
        GF(5)(1) + GF(7)(1)
    with pytest.raises(TypeError):
        GF(5)(1) * GF(7)(1)


# =========================================================================
# 5. Errors
# =========================================================================


def test_divide_by_zero():
    F = GF(5)
    with pytest.raises(FieldZeroDivisionError):
        F(3) / F(0)
    with pytest.raises(ZeroDivisionError):
        F(3) / 0


def test_inverse_of_zero():
    with pytest.raises(FieldZeroDivisionError):
        GF(5)(0).inv()
    with pytest.raises(FieldZeroDivisionError):
        GF(5)(0) ** -1


def test_errors_share_base_class():
    with pytest.raises(PrimeFieldError):
        GF(5)(2).sqrt()


def test_valid_operations_never_fail():
    F = GF(13)
    for a in F.elements():
        -a
        a.squared()
        if a:
            a.inv()
            F(1) / a


def test_zero_square_root_is_zero():
    assert GF(11)(0).sqrt() == 0
    assert GF(11)(0).is_square()
