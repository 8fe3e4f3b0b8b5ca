import itertools
import re
from fractions import Fraction

import flint
import numpy as np
import pytest

from polyrep import HalfSpace, TypeIncompatibility
from polyrep.coefficients import (
    COEFFICIENT_TYPES,
    coefficient_type,
    convert,
    convert_matrix,
    convert_vector,
    polyhedron_type,
    promote_coefficient_type,
    promote_type,
)


def test_coefficient_type():
    assert coefficient_type(3) is int
    assert coefficient_type(np.int64(3)) is int
    assert coefficient_type(True) is int
    assert coefficient_type(0.5) is float
    assert coefficient_type(np.float64(0.5)) is float
    assert coefficient_type(Fraction(1, 2)) is Fraction
    assert coefficient_type(flint.fmpz(2)) is flint.fmpz
    assert coefficient_type(flint.fmpq(1, 2)) is flint.fmpq
    with pytest.raises(TypeIncompatibility, match=re.escape("Unsupported coefficient 'a' of type str.")):
        coefficient_type("a")


def test_promote_type():
    assert promote_type() is int
    assert promote_type(int, int) is int
    assert promote_type(int, float) is float
    assert promote_type(int, flint.fmpz) is flint.fmpz
    assert promote_type(int, flint.fmpz, Fraction) is flint.fmpq
    assert promote_type(Fraction, Fraction) is Fraction
    with pytest.raises(TypeIncompatibility, match=re.escape("No common coefficient type for Fraction and float.")):
        promote_type(Fraction, float)
    with pytest.raises(TypeIncompatibility, match=re.escape("No common coefficient type for fmpz and float.")):
        promote_type(flint.fmpz, float)
    with pytest.raises(TypeIncompatibility, match=re.escape("Unsupported coefficient type")):
        promote_type(int, str)


def test_promotion_closure():
    for S, T in itertools.product(COEFFICIENT_TYPES, repeat=2):
        try:
            U = promote_type(S, T)
        except TypeIncompatibility:
            with pytest.raises(TypeIncompatibility):
                promote_type(T, S)
            continue
        assert U in COEFFICIENT_TYPES
        assert promote_type(T, S) is U
        # both sides embed into the promoted type
        assert type(convert(convert(1, S), U)) is U
        assert type(convert(convert(1, T), U)) is U

    for S, T, U in itertools.product(COEFFICIENT_TYPES, repeat=3):
        try:
            left = promote_type(promote_type(S, T), U)
        except TypeIncompatibility:
            left = None
        try:
            right = promote_type(S, promote_type(T, U))
        except TypeIncompatibility:
            right = None
        assert left is right


def test_promote_coefficient_type():
    assert promote_coefficient_type([]) is int
    assert promote_coefficient_type([1, Fraction(1, 2)]) is Fraction
    assert promote_coefficient_type([HalfSpace([1, 0], 1), 0.5]) is float
    assert promote_coefficient_type([[1, 2], np.array([flint.fmpz(1)])]) is flint.fmpz


def test_polyhedron_type():
    assert polyhedron_type(int) is flint.fmpq
    assert polyhedron_type(flint.fmpz) is flint.fmpq
    assert polyhedron_type(Fraction) is Fraction
    assert polyhedron_type(float) is float


def test_convert():
    assert convert(3, flint.fmpq) == flint.fmpq(3)
    assert type(convert(3, flint.fmpq)) is flint.fmpq
    assert convert(flint.fmpq(1, 4), float) == 0.25
    assert convert(0.5, Fraction) == Fraction(1, 2)
    assert convert(flint.fmpq(4, 2), int) == 2
    assert type(convert(2.0, flint.fmpz)) is flint.fmpz
    assert type(convert(np.int64(2), int)) is int
    with pytest.raises(TypeIncompatibility, match=re.escape("Cannot convert 1/2 exactly to int.")):
        convert(Fraction(1, 2), int)


def test_convert_vector():
    v = convert_vector([1, Fraction(1, 2)])
    assert v.dtype == object
    assert all(type(c) is Fraction for c in v)
    assert list(convert_vector([1, 2], float)) == [1.0, 2.0]
    with pytest.raises(ValueError, match=re.escape("Input vector must be a 1D array.")):
        convert_vector([[1]])


def test_convert_matrix():
    M = convert_matrix([[1, 2], [3, 4]], flint.fmpz)
    assert M.shape == (2, 2)
    assert all(type(c) is flint.fmpz for c in M.flat)
    with pytest.raises(ValueError, match=re.escape("Input matrix must be a 2D matrix.")):
        convert_matrix([1, 2])
