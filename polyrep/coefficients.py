# =============================================================================
# This file is part of polyrep.
#
# polyrep is free software: you can redistribute it and/or modify it under the
# terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.
#
# polyrep is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with
# polyrep. If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
#
# -----------------------------------------------------------------------------
# Description:  This module contains the coefficient type registry, along with
#               the promotion rules used to combine representations with
#               different coefficient types.
# -----------------------------------------------------------------------------

# 'standard' imports
from fractions import Fraction

# 3rd party imports
import flint
import numpy as np
from numpy.typing import ArrayLike

# polyrep imports
from polyrep.errors import TypeIncompatibility


# the registry
# ------------
COEFFICIENT_TYPES = (int, flint.fmpz, Fraction, flint.fmpq, float)
EXACT_TYPES = (int, flint.fmpz, Fraction, flint.fmpq)

# symmetric promotion table. Missing pairs have no common type
_PROMOTIONS = {
    (int, int): int,
    (int, flint.fmpz): flint.fmpz,
    (int, Fraction): Fraction,
    (int, flint.fmpq): flint.fmpq,
    (int, float): float,
    (flint.fmpz, flint.fmpz): flint.fmpz,
    (flint.fmpz, Fraction): flint.fmpq,
    (flint.fmpz, flint.fmpq): flint.fmpq,
    (Fraction, Fraction): Fraction,
    (Fraction, flint.fmpq): flint.fmpq,
    (flint.fmpq, flint.fmpq): flint.fmpq,
    (float, float): float,
}

# the coefficient types used by a Polyhedron, whose representations are
# computed over a field
_POLYHEDRON_TYPES = {int: flint.fmpq, flint.fmpz: flint.fmpq}


def type_name(T: type) -> str:
    return T.__name__


def coefficient_type(value) -> type:
    """
    **Description:**
    Returns the kind of the coefficient registry that a scalar belongs to.

    **Arguments:**
    - `value`: The scalar.

    **Returns:**
    *(type)* One of `int`, `flint.fmpz`, `fractions.Fraction`, `flint.fmpq`
    or `float`.

    **Example:**
    ```python {3}
    import numpy as np
    from polyrep.coefficients import coefficient_type
    coefficient_type(np.int64(3)), coefficient_type(0.5)
    # (<class 'int'>, <class 'float'>)
    ```
    """
    if isinstance(value, flint.fmpz):
        return flint.fmpz
    if isinstance(value, flint.fmpq):
        return flint.fmpq
    if isinstance(value, Fraction):
        return Fraction
    if isinstance(value, (bool, np.bool_, int, np.integer)):
        return int
    if isinstance(value, (float, np.floating)):
        return float
    raise TypeIncompatibility(
        f"Unsupported coefficient {value!r} of type {type(value).__name__}. "
        f"Options are {[type_name(T) for T in COEFFICIENT_TYPES]}."
    )


def promote_type(*types: type) -> type:
    """
    **Description:**
    Computes the coefficient type into which all of the input coefficient
    types convert without loss.

    Integers promote to any other type. The exact types `fmpz`, `Fraction`
    and `fmpq` promote among themselves to `fmpq`. Exact types other than
    `int` have no common type with `float`.

    **Arguments:**
    - `types`: The coefficient types.

    **Returns:**
    *(type)* The promoted coefficient type. With no arguments, `int`.

    **Example:**
    ```python {4,6}
    from fractions import Fraction
    import flint
    from polyrep.coefficients import promote_type
    promote_type(int, flint.fmpz, Fraction)
    # <class 'flint.fmpq'>
    promote_type(Fraction, float)
    # TypeIncompatibility: No common coefficient type for Fraction and float.
    ```
    """
    out = int
    for T in types:
        if T not in COEFFICIENT_TYPES:
            raise TypeIncompatibility(
                f"Unsupported coefficient type {T}. "
                f"Options are {[type_name(t) for t in COEFFICIENT_TYPES]}."
            )

        if (out, T) in _PROMOTIONS:
            out = _PROMOTIONS[(out, T)]
        elif (T, out) in _PROMOTIONS:
            out = _PROMOTIONS[(T, out)]
        else:
            raise TypeIncompatibility(
                "No common coefficient type for "
                f"{type_name(out)} and {type_name(T)}."
            )
    return out


def promote_coefficient_type(objs) -> type:
    """
    **Description:**
    Promotes the coefficient types of a sequence of objects. Each object can
    be an element, a representation, a polyhedron, a scalar or an array of
    scalars.

    **Arguments:**
    - `objs`: The objects.

    **Returns:**
    *(type)* The promoted coefficient type.
    """
    types = []
    for obj in objs:
        if hasattr(obj, "coefficient_type"):
            types.append(obj.coefficient_type())
        elif np.ndim(obj) == 0:
            types.append(coefficient_type(obj))
        else:
            types += [coefficient_type(c) for c in np.asarray(obj, dtype=object).flat]
    return promote_type(*types)


def polyhedron_type(T: type) -> type:
    """
    **Description:**
    Returns the coefficient type used by a polyhedron built from a
    representation with coefficient type `T`. Integer types are promoted to
    `fmpq` since vertices of integral H-representations need not be
    integral.

    **Arguments:**
    - `T`: The coefficient type of the representation.

    **Returns:**
    *(type)* The coefficient type of the polyhedron.
    """
    return _POLYHEDRON_TYPES.get(T, T)


# conversion
# ----------
def float_to_fraction(c: float) -> Fraction:
    # the rational number that most reasonably approximates the input
    return Fraction(c).limit_denominator()


def _as_fraction(value, S: type) -> Fraction:
    if S is Fraction:
        return value
    if S is flint.fmpq:
        return Fraction(int(value.p), int(value.q))
    if S is float:
        return float_to_fraction(float(value))
    return Fraction(int(value))


def convert(value, T: type):
    """
    **Description:**
    Converts a scalar to the coefficient type `T`.

    Conversions to `int` or `fmpz` must be exact, so non-integral values raise
    an error. Floats are converted to exact types via the closest rational
    number with a small denominator.

    **Arguments:**
    - `value`: The scalar to convert.
    - `T`: The target coefficient type.

    **Returns:**
    The converted scalar, whose type is exactly `T`.

    **Example:**
    ```python {3}
    import flint
    from polyrep.coefficients import convert
    convert(3, flint.fmpq), convert(flint.fmpq(1, 4), float)
    # (3, 0.25)
    ```
    """
    S = coefficient_type(value)
    if S is T and type(value) is T:
        return value

    if T is float:
        if S is flint.fmpq:
            return int(value.p) / int(value.q)
        if S is flint.fmpz:
            return float(int(value))
        return float(value)

    # exact targets
    if S is int:
        n = int(value)
        if T is int:
            return n
        if T is flint.fmpz:
            return flint.fmpz(n)
        if T is Fraction:
            return Fraction(n)
        return flint.fmpq(n)

    f = _as_fraction(value, S)
    if T is Fraction:
        return f
    if T is flint.fmpq:
        return flint.fmpq(f.numerator, f.denominator)
    if f.denominator != 1:
        raise TypeIncompatibility(
            f"Cannot convert {value} exactly to {type_name(T)}."
        )
    if T is int:
        return int(f.numerator)
    if T is flint.fmpz:
        return flint.fmpz(f.numerator)
    raise TypeIncompatibility(f"Unsupported coefficient type {T}.")


def convert_vector(values: ArrayLike, T: type = None) -> np.ndarray:
    """
    **Description:**
    Converts a vector to a numpy array of dtype object whose entries all
    have coefficient type `T`.

    **Arguments:**
    - `values`: The input vector.
    - `T`: The target coefficient type. If not specified, the promotion of
        the types of the entries.

    **Returns:**
    *(numpy.ndarray)* The converted vector.
    """
    values = np.asarray(values, dtype=object)
    if values.ndim != 1:
        raise ValueError("Input vector must be a 1D array.")

    if T is None:
        T = promote_type(*[coefficient_type(c) for c in values])
    out = np.empty(len(values), dtype=object)
    for i, c in enumerate(values):
        out[i] = convert(c, T)
    return out


def matrix_coefficient_type(P: ArrayLike) -> type:
    return promote_type(
        *[coefficient_type(c) for c in np.asarray(P, dtype=object).flat]
    )


def convert_matrix(P: ArrayLike, T: type = None) -> np.ndarray:
    """
    **Description:**
    Converts a matrix to a 2D numpy array of dtype object whose entries all
    have coefficient type `T`.

    **Arguments:**
    - `P`: The input matrix.
    - `T`: The target coefficient type. If not specified, the promotion of
        the types of the entries.

    **Returns:**
    *(numpy.ndarray)* The converted matrix.
    """
    P = np.asarray(P, dtype=object)
    if P.ndim != 2:
        raise ValueError("Input matrix must be a 2D matrix.")

    if T is None:
        T = matrix_coefficient_type(P)
    out = np.empty(P.shape, dtype=object)
    for ind in np.ndindex(P.shape):
        out[ind] = convert(P[ind], T)
    return out
