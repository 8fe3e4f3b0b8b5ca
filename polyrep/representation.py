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
# Description:  This module contains the H- and V-representations of
#               polyhedra.
# -----------------------------------------------------------------------------

# 3rd party imports
import numpy as np
from numpy.typing import ArrayLike

# polyrep imports
from polyrep.coefficients import promote_coefficient_type, promote_type, type_name
from polyrep.elements import (
    HalfSpace,
    HRepElement,
    HyperPlane,
    Line,
    Point,
    Ray,
    VRepElement,
)
from polyrep.errors import DimensionMismatch


# helpers
# -------
def _as_element(x, cls):
    # wrap raw input as an element of kind cls
    if isinstance(x, cls):
        return x
    if isinstance(x, (HRepElement, VRepElement)):
        raise TypeError(f"Expected a {cls.__name__}, got a {type(x).__name__}.")
    if issubclass(cls, HRepElement):
        a, beta = x
        return cls(a, beta)
    return cls(x)


def _ambient_dim(elements: list, ambient_dim: int, name: str) -> int:
    if ambient_dim is None:
        if len(elements) == 0:
            raise ValueError(
                f"Must specify the ambient dimension of an empty {name}."
            )
        ambient_dim = elements[0].ambient_dim()

    for el in elements:
        if el.ambient_dim() != ambient_dim:
            raise DimensionMismatch(
                f"{el} has dimension {el.ambient_dim()}, but the {name} has "
                f"dimension {ambient_dim}."
            )
    return ambient_dim


def _coefficient_type(elements: list, T: type) -> type:
    if T is None:
        return promote_coefficient_type(elements)
    # validate T
    return promote_type(T)


# H-representation
# ----------------
class HRepresentation:
    """
    This class describes the H-representation of a polyhedron, i.e. the
    intersection of a collection of hyperplanes and halfspaces

        {x : <a, x> = beta for each hyperplane,
             <a, x> <= beta for each halfspace}.

    All elements share the ambient dimension and the coefficient type of the
    representation. No redundancy removal is ever performed.

    ## Constructor

    ### `polyrep.representation.HRepresentation`

    **Arguments:**
    - `hyperplanes`: The hyperplanes, as `HyperPlane` objects or as pairs
        `(a, beta)`.
    - `halfspaces`: The halfspaces, as `HalfSpace` objects or as pairs
        `(a, beta)`.
    - `ambient_dim`: The ambient dimension. Required if there are no
        elements.
    - `coefficient_type`: The coefficient type. If not specified, the
        promotion of the types of the elements.

    **Example:**
    We construct the unit square.
    ```python {2}
    from polyrep import HRepresentation
    h = HRepresentation(halfspaces=[([1, 0], 1), ([-1, 0], 0), ([0, 1], 1), ([0, -1], 0)])
    print(h)
    # An H-representation in RR^2 defined by 0 hyperplane(s) and 4 halfspace(s) over int
    ```
    """

    # defer numpy binary operators to this class
    __array_ufunc__ = None

    def __init__(
        self,
        hyperplanes: list = (),
        halfspaces: list = (),
        ambient_dim: int = None,
        coefficient_type: type = None,
    ) -> None:
        hyperplanes = [_as_element(h, HyperPlane) for h in hyperplanes]
        halfspaces = [_as_element(h, HalfSpace) for h in halfspaces]
        elements = hyperplanes + halfspaces

        self._ambient_dim = _ambient_dim(elements, ambient_dim, "H-representation")
        self._T = _coefficient_type(elements, coefficient_type)
        self._hyperplanes = tuple(h.change_coefficient_type(self._T) for h in hyperplanes)
        self._halfspaces = tuple(h.change_coefficient_type(self._T) for h in halfspaces)

    def __repr__(self) -> str:
        return (
            f"An H-representation in RR^{self._ambient_dim} defined by "
            f"{len(self._hyperplanes)} hyperplane(s) and "
            f"{len(self._halfspaces)} halfspace(s) over {type_name(self._T)}"
        )

    def __eq__(self, other):
        if not isinstance(other, HRepresentation):
            return NotImplemented
        return (
            self._ambient_dim == other._ambient_dim
            and self._hyperplanes == other._hyperplanes
            and self._halfspaces == other._halfspaces
        )

    def __ne__(self, other):
        if not isinstance(other, HRepresentation):
            return NotImplemented
        return not self == other

    def __hash__(self):
        return hash((self._ambient_dim, self._hyperplanes, self._halfspaces))

    def ambient_dimension(self) -> int:
        """
        **Description:**
        Returns the dimension of the ambient space.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the ambient space.

        **Aliases:**
        `ambient_dim`.
        """
        return self._ambient_dim

    # aliases
    ambient_dim = ambient_dimension

    def coefficient_type(self) -> type:
        return self._T

    def hyperplanes(self) -> tuple:
        return self._hyperplanes

    def halfspaces(self) -> tuple:
        return self._halfspaces

    def nhyperplanes(self) -> int:
        return len(self._hyperplanes)

    def nhalfspaces(self) -> int:
        return len(self._halfspaces)

    def change_coefficient_type(self, T: type) -> "HRepresentation":
        """
        **Description:**
        Returns the same representation with coefficients converted to `T`.

        **Arguments:**
        - `T`: The new coefficient type.

        **Returns:**
        *(HRepresentation)* The converted representation. If `T` is already
        the coefficient type, the representation itself.
        """
        if T is self._T:
            return self
        return self._map(lambda h: h, coefficient_type=T)

    def _map(self, f, ambient_dim: int = None, coefficient_type: type = None):
        # apply f to every element, preserving their order
        return HRepresentation(
            [f(h) for h in self._hyperplanes],
            [f(h) for h in self._halfspaces],
            ambient_dim=self._ambient_dim if ambient_dim is None else ambient_dim,
            coefficient_type=self._T if coefficient_type is None else coefficient_type,
        )

    def contains(self, x: ArrayLike, eps: float = 0) -> bool:
        """
        **Description:**
        Checks if a point satisfies all of the constraints.

        **Arguments:**
        - `x`: The point.
        - `eps`: The tolerance allowed on each constraint.

        **Returns:**
        *(bool)* Whether the point is contained.

        **Example:**
        ```python {2,4}
        h = HRepresentation(halfspaces=[([1, 0], 1), ([-1, 0], 0)])
        [1, 5] in h
        # True
        h.contains([1.25, 0], eps=0.5)
        # True
        ```
        """
        if isinstance(x, VRepElement):
            x = x.coords
        return all(h.is_satisfied(x, eps) for h in self._hyperplanes) and all(
            h.is_satisfied(x, eps) for h in self._halfspaces
        )

    def __contains__(self, x) -> bool:
        return self.contains(x)


# V-representation
# ----------------
class VRepresentation:
    """
    This class describes the V-representation of a polyhedron, i.e. the
    convex hull of a collection of points plus the cone generated by a
    collection of lines and rays

        {sum_i l_i p_i + sum_j m_j L_j + sum_k n_k r_k :
            l_i >= 0, sum_i l_i = 1, n_k >= 0}.

    A V-representation without points is empty. Use
    [`VCone`](#vcone) for cones, whose only point is the origin.

    ## Constructor

    ### `polyrep.representation.VRepresentation`

    **Arguments:**
    - `points`: The points, as `Point` objects or as vectors.
    - `lines`: The lines, as `Line` objects or as vectors.
    - `rays`: The rays, as `Ray` objects or as vectors.
    - `ambient_dim`: The ambient dimension. Required if there are no
        elements.
    - `coefficient_type`: The coefficient type. If not specified, the
        promotion of the types of the elements.

    **Example:**
    We construct the standard triangle.
    ```python {2}
    from polyrep import VRepresentation
    v = VRepresentation([[0, 0], [1, 0], [0, 1]])
    print(v)
    # A V-representation in RR^2 generated by 3 point(s), 0 line(s) and 0 ray(s) over int
    ```
    """

    # defer numpy binary operators to this class
    __array_ufunc__ = None

    def __init__(
        self,
        points: list = (),
        lines: list = (),
        rays: list = (),
        ambient_dim: int = None,
        coefficient_type: type = None,
    ) -> None:
        points = [_as_element(p, Point) for p in points]
        lines = [_as_element(l, Line) for l in lines]
        rays = [_as_element(r, Ray) for r in rays]
        elements = points + lines + rays

        self._ambient_dim = _ambient_dim(elements, ambient_dim, "V-representation")
        self._T = _coefficient_type(elements, coefficient_type)
        self._points = tuple(p.change_coefficient_type(self._T) for p in points)
        self._lines = tuple(l.change_coefficient_type(self._T) for l in lines)
        self._rays = tuple(r.change_coefficient_type(self._T) for r in rays)

    def __repr__(self) -> str:
        return (
            f"A V-representation in RR^{self._ambient_dim} generated by "
            f"{len(self._points)} point(s), {len(self._lines)} line(s) and "
            f"{len(self._rays)} ray(s) over {type_name(self._T)}"
        )

    def __eq__(self, other):
        if not isinstance(other, VRepresentation):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._ambient_dim == other._ambient_dim
            and self._points == other._points
            and self._lines == other._lines
            and self._rays == other._rays
        )

    def __ne__(self, other):
        if not isinstance(other, VRepresentation):
            return NotImplemented
        return not self == other

    def __hash__(self):
        return hash(
            (type(self).__name__, self._ambient_dim, self._points, self._lines, self._rays)
        )

    def ambient_dimension(self) -> int:
        """
        **Description:**
        Returns the dimension of the ambient space.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the ambient space.

        **Aliases:**
        `ambient_dim`.
        """
        return self._ambient_dim

    # aliases
    ambient_dim = ambient_dimension

    def coefficient_type(self) -> type:
        return self._T

    def points(self) -> tuple:
        return self._points

    def lines(self) -> tuple:
        return self._lines

    def rays(self) -> tuple:
        return self._rays

    def npoints(self) -> int:
        return len(self._points)

    def nlines(self) -> int:
        return len(self._lines)

    def nrays(self) -> int:
        return len(self._rays)

    def change_coefficient_type(self, T: type) -> "VRepresentation":
        if T is self._T:
            return self
        return self._map(lambda v: v, coefficient_type=T)

    def _map(self, f, ambient_dim: int = None, coefficient_type: type = None):
        return VRepresentation(
            [f(p) for p in self._points],
            [f(l) for l in self._lines],
            [f(r) for r in self._rays],
            ambient_dim=self._ambient_dim if ambient_dim is None else ambient_dim,
            coefficient_type=self._T if coefficient_type is None else coefficient_type,
        )


class VCone(VRepresentation):
    """
    A V-representation generated by lines and rays only. Its only point is
    the (implicit) origin, so it describes a polyhedral cone.

    **Example:**
    ```python {2}
    from polyrep import VCone
    c = VCone(rays=[[1, 0], [1, 1]])
    c.npoints()
    # 0
    ```
    """

    def __init__(
        self,
        lines: list = (),
        rays: list = (),
        ambient_dim: int = None,
        coefficient_type: type = None,
    ) -> None:
        super().__init__(
            (),
            lines,
            rays,
            ambient_dim=ambient_dim,
            coefficient_type=coefficient_type,
        )

    def __repr__(self) -> str:
        return (
            f"A V-cone in RR^{self._ambient_dim} generated by "
            f"{len(self._lines)} line(s) and {len(self._rays)} ray(s) over "
            f"{type_name(self._T)}"
        )

    def _map(self, f, ambient_dim: int = None, coefficient_type: type = None):
        return VCone(
            [f(l) for l in self._lines],
            [f(r) for r in self._rays],
            ambient_dim=self._ambient_dim if ambient_dim is None else ambient_dim,
            coefficient_type=self._T if coefficient_type is None else coefficient_type,
        )


# normalization
# -------------
def as_hrepresentation(x) -> HRepresentation:
    """
    **Description:**
    Promotes a halfspace or a hyperplane to a one-element H-representation.
    H-representations are returned as they are.

    **Arguments:**
    - `x`: The object to normalize.

    **Returns:**
    *(HRepresentation)* The H-representation.
    """
    if isinstance(x, HRepresentation):
        return x
    if isinstance(x, HyperPlane):
        return HRepresentation([x], coefficient_type=x.coefficient_type())
    if isinstance(x, HalfSpace):
        return HRepresentation((), [x], coefficient_type=x.coefficient_type())
    raise TypeError(f"Expected an H-representation, got {type(x).__name__}.")


def as_vrepresentation(x) -> VRepresentation:
    """
    **Description:**
    Promotes a point (or a vector) to a one-point V-representation, and a
    line or a ray to a one-element cone. V-representations are returned as
    they are.

    **Arguments:**
    - `x`: The object to normalize.

    **Returns:**
    *(VRepresentation)* The V-representation.
    """
    if isinstance(x, VRepresentation):
        return x
    if isinstance(x, Line):
        return VCone([x], coefficient_type=x.coefficient_type())
    if isinstance(x, Ray):
        return VCone((), [x], coefficient_type=x.coefficient_type())
    if isinstance(x, Point):
        return VRepresentation([x], coefficient_type=x.coefficient_type())
    if isinstance(x, HRepElement) or isinstance(x, HRepresentation) or np.ndim(x) != 1:
        raise TypeError(f"Expected a V-representation, got {type(x).__name__}.")
    return as_vrepresentation(Point(x))


# constructors from matrices
# --------------------------
def hrep(A: ArrayLike, b: ArrayLike, linset=()) -> HRepresentation:
    """
    **Description:**
    Constructs the H-representation `{x : A x <= b}`, where the rows listed
    in `linset` are equalities instead.

    **Arguments:**
    - `A`: The matrix of normals, one row per constraint.
    - `b`: The vector of offsets.
    - `linset`: The indices of the rows that are equalities.

    **Returns:**
    *(HRepresentation)* The H-representation.

    **Example:**
    ```python {2}
    from polyrep import hrep
    h = hrep([[1, 1], [-1, 0], [0, -1]], [1, 0, 0], linset=[0])
    h.nhyperplanes(), h.nhalfspaces()
    # (1, 2)
    ```
    """
    A = np.asarray(A, dtype=object)
    b = np.asarray(b, dtype=object)
    if A.ndim != 2:
        raise ValueError("Input A must be a 2D matrix.")
    if b.shape != (A.shape[0],):
        raise DimensionMismatch(
            f"A has {A.shape[0]} row(s) but b has shape {b.shape}."
        )

    T = promote_coefficient_type([A, b])
    linset = set(linset)
    hyperplanes = [HyperPlane(A[i], b[i], T) for i in range(len(A)) if i in linset]
    halfspaces = [HalfSpace(A[i], b[i], T) for i in range(len(A)) if i not in linset]
    return HRepresentation(
        hyperplanes, halfspaces, ambient_dim=A.shape[1], coefficient_type=T
    )


def vrep(points: ArrayLike = None, rays: ArrayLike = None, linset=()) -> VRepresentation:
    """
    **Description:**
    Constructs a V-representation from a matrix of points and a matrix of
    rays, where the rays listed in `linset` are lines instead. Without points,
    the result is a [`VCone`](#vcone).

    **Arguments:**
    - `points`: The points, one per row.
    - `rays`: The rays, one per row.
    - `linset`: The indices of the rays that are lines.

    **Returns:**
    *(VRepresentation)* The V-representation.

    **Example:**
    ```python {2}
    from polyrep import vrep
    v = vrep([[0, 0]], [[1, 0], [0, 1]], linset=[1])
    v.npoints(), v.nlines(), v.nrays()
    # (1, 1, 1)
    ```
    """
    if points is None and rays is None:
        raise ValueError('At least one of "points" and "rays" must be specified.')

    mats = {}
    for name, M in (("points", points), ("rays", rays)):
        if M is None:
            continue
        M = np.asarray(M, dtype=object)
        if M.ndim != 2:
            raise ValueError(f"Input {name} must be a 2D matrix.")
        mats[name] = M

    dims = {M.shape[1] for M in mats.values()}
    if len(dims) != 1:
        raise DimensionMismatch(
            f"Points and rays have different dimensions, {sorted(dims)}."
        )
    d = dims.pop()

    T = promote_coefficient_type(mats.values())
    R = mats.get("rays", np.zeros((0, d), dtype=object))
    linset = set(linset)
    lines = [Line(R[i], T) for i in range(len(R)) if i in linset]
    rays = [Ray(R[i], T) for i in range(len(R)) if i not in linset]

    if points is None:
        return VCone(lines, rays, ambient_dim=d, coefficient_type=T)
    return VRepresentation(
        [Point(p, T) for p in mats["points"]],
        lines,
        rays,
        ambient_dim=d,
        coefficient_type=T,
    )
