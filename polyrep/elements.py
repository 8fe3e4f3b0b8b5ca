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
# Description:  This module contains the primitive elements of H- and
#               V-representations: halfspaces, hyperplanes, points, lines and
#               rays.
# -----------------------------------------------------------------------------

# 3rd party imports
import numpy as np
from numpy.typing import ArrayLike

# polyrep imports
from polyrep.coefficients import (
    convert,
    convert_matrix,
    convert_vector,
    matrix_coefficient_type,
    promote_coefficient_type,
    promote_type,
)
from polyrep.errors import DimensionMismatch


def _fmt(v) -> str:
    return "[" + ", ".join(str(c) for c in v) + "]"


def _is_within(diff, eps) -> bool:
    # diff <= eps, without mixing exact coefficients and floats
    if eps == 0:
        return diff <= 0
    return convert(diff, float) <= eps


def _transform_matrix(P: ArrayLike, d: int, T: type) -> "tuple[np.ndarray, type]":
    P = np.asarray(P, dtype=object)
    if P.ndim != 2:
        raise ValueError("Input matrix must be a 2D matrix.")
    if P.shape[1] != d:
        raise DimensionMismatch(
            f"The number of columns of P, {P.shape[1]}, must match the "
            f"dimension of the element, {d}."
        )
    T = promote_type(T, matrix_coefficient_type(P))
    return convert_matrix(P, T), T


# H-representation elements
# -------------------------
class HRepElement:
    """
    Base class of the elements of an H-representation. Each element is a
    pair `(a, beta)` describing a relation between `<a, x>` and `beta`. All
    coefficients share a single coefficient type.
    """

    def __init__(self, a: ArrayLike, beta, coefficient_type: type = None) -> None:
        a = np.asarray(a, dtype=object)
        if coefficient_type is None:
            coefficient_type = promote_coefficient_type([a, beta])

        self._T = coefficient_type
        self._a = convert_vector(a, coefficient_type)
        self._beta = convert(beta, coefficient_type)

    @property
    def a(self) -> np.ndarray:
        return np.array(self._a)

    @property
    def beta(self):
        return self._beta

    def coefficient_type(self) -> type:
        return self._T

    def ambient_dimension(self) -> int:
        return len(self._a)

    # aliases
    ambient_dim = ambient_dimension

    def change_coefficient_type(self, T: type) -> "HRepElement":
        if T is self._T:
            return self
        return type(self)(self._a, self._beta, coefficient_type=T)

    def transform(self, P: ArrayLike) -> "HRepElement":
        """
        **Description:**
        Maps `(a, beta)` to `(P a, beta)`. This is how each constraint
        transforms when the polyhedron is mapped by `P^{-T}`.

        **Arguments:**
        - `P`: A matrix whose number of columns matches the dimension of the
            element.

        **Returns:**
        *(HRepElement)* The transformed element, of the same kind. Its
        coefficient type is promoted with that of the entries of `P`.

        **Example:**
        ```python {2}
        h = HalfSpace([1, 0], 1)
        h.transform([[2, 0], [0, 1], [1, 1]])
        # HalfSpace([2, 0, 1], 1)
        ```
        """
        P, T = _transform_matrix(P, len(self._a), self._T)
        return self._apply(P, T)

    def _apply(self, P: np.ndarray, T: type) -> "HRepElement":
        # P is already checked and converted to T
        a = P @ convert_vector(self._a, T)
        return type(self)(a, self._beta, coefficient_type=T)

    def _value(self, x: ArrayLike):
        x = np.asarray(x, dtype=object)
        if x.shape != self._a.shape:
            raise DimensionMismatch(
                f"Point of dimension {len(x)} cannot be tested against an "
                f"element of dimension {len(self._a)}."
            )
        T = promote_type(self._T, promote_coefficient_type([x]))
        val = sum(
            (convert(c, T) * convert(xi, T) for c, xi in zip(self._a, x)),
            convert(0, T),
        )
        return val - convert(self._beta, T)

    def _key(self) -> tuple:
        return tuple(self._a) + (self._beta,)

    def __eq__(self, other):
        if not isinstance(other, HRepElement):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self, other):
        if not isinstance(other, HRepElement):
            return NotImplemented
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({_fmt(self._a)}, {self._beta})"


class HalfSpace(HRepElement):
    """
    The halfspace `<a, x> <= beta`.

    **Example:**
    ```python {2}
    from polyrep import HalfSpace
    h = HalfSpace([1, -1], 0) # x_0 <= x_1
    h.is_satisfied([0, 1])
    # True
    ```
    """

    def is_satisfied(self, x: ArrayLike, eps: float = 0) -> bool:
        return _is_within(self._value(x), eps)


class HyperPlane(HRepElement):
    """
    The hyperplane `<a, x> = beta`.
    """

    def is_satisfied(self, x: ArrayLike, eps: float = 0) -> bool:
        return _is_within(abs(self._value(x)), eps)


# V-representation elements
# -------------------------
class VRepElement:
    """
    Base class of the elements of a V-representation. Each element is a
    vector whose coordinates share a single coefficient type.
    """

    def __init__(self, coords: ArrayLike, coefficient_type: type = None) -> None:
        if isinstance(coords, VRepElement):
            coords = coords._coords
        coords = np.asarray(coords, dtype=object)
        if coefficient_type is None:
            coefficient_type = promote_coefficient_type([coords])

        self._T = coefficient_type
        self._coords = convert_vector(coords, coefficient_type)

    @property
    def coords(self) -> np.ndarray:
        return np.array(self._coords)

    def coefficient_type(self) -> type:
        return self._T

    def ambient_dimension(self) -> int:
        return len(self._coords)

    # aliases
    ambient_dim = ambient_dimension

    def change_coefficient_type(self, T: type) -> "VRepElement":
        if T is self._T:
            return self
        return type(self)(self._coords, coefficient_type=T)

    def transform(self, P: ArrayLike) -> "VRepElement":
        """
        **Description:**
        Maps the vector `v` to `P v`.

        **Arguments:**
        - `P`: A matrix whose number of columns matches the dimension of the
            element.

        **Returns:**
        *(VRepElement)* The transformed element, of the same kind.
        """
        P, T = _transform_matrix(P, len(self._coords), self._T)
        return self._apply(P, T)

    def _apply(self, P: np.ndarray, T: type) -> "VRepElement":
        return type(self)(P @ convert_vector(self._coords, T), coefficient_type=T)

    def __len__(self) -> int:
        return len(self._coords)

    def __iter__(self):
        return iter(self._coords.tolist())

    def __getitem__(self, key):
        return self._coords[key]

    def __eq__(self, other):
        if not isinstance(other, VRepElement):
            return NotImplemented
        return type(self) is type(other) and tuple(self._coords) == tuple(
            other._coords
        )

    def __ne__(self, other):
        if not isinstance(other, VRepElement):
            return NotImplemented
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, tuple(self._coords)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({_fmt(self._coords)})"


class Point(VRepElement):
    """
    A point of a V-representation.
    """

    def __add__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        if len(other) != len(self):
            raise DimensionMismatch(
                f"Cannot add points of dimensions {len(self)} and {len(other)}."
            )
        T = promote_type(self._T, other._T)
        return Point(
            convert_vector(self._coords, T) + convert_vector(other._coords, T),
            coefficient_type=T,
        )


class Line(VRepElement):
    """
    A line of a V-representation, i.e. a direction spanning both ways.
    """

    pass


class Ray(VRepElement):
    """
    A ray of a V-representation, i.e. a direction spanning one way.
    """

    pass


# tagged unions
HREP_ELEMENTS = (HyperPlane, HalfSpace)
VREP_ELEMENTS = (Point, Line, Ray)
