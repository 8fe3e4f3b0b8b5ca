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
# Description:  This module contains the algebra of polyhedral
#               representations: intersection, convex hull, Minkowski sum,
#               Cartesian product and linear transformations.
# -----------------------------------------------------------------------------

# 'standard' imports
import functools

# 3rd party imports
import numpy as np
from numpy.typing import ArrayLike

# polyrep imports
from polyrep.coefficients import (
    convert_matrix,
    matrix_coefficient_type,
    promote_coefficient_type,
    promote_type,
)
from polyrep.elements import (
    HREP_ELEMENTS,
    VREP_ELEMENTS,
    HalfSpace,
    HyperPlane,
    Line,
    Point,
    Ray,
)
from polyrep.errors import DimensionMismatch, UnsupportedMutation
from polyrep.fulldim import fulldim, neg_fulldim, sum_fulldim, zeropad
from polyrep.polyhedron import Polyhedron
from polyrep.representation import (
    HRepresentation,
    VCone,
    VRepresentation,
    as_hrepresentation,
    as_vrepresentation,
)


# normalization
# -------------
# H side: HyperPlane | HalfSpace | HRepresentation | Polyhedron
# V side: Point | Line | Ray | VRepresentation | Polyhedron
def _is_hany(x) -> bool:
    return isinstance(x, (HRepresentation, Polyhedron) + HREP_ELEMENTS)


def _is_vany(x) -> bool:
    return isinstance(x, (VRepresentation, Polyhedron) + VREP_ELEMENTS)


def _as_vany(x):
    # raw vectors are points
    if _is_vany(x) or _is_hany(x) or np.ndim(x) != 1:
        return x
    return Point(x)


def _hrep_of(x) -> HRepresentation:
    if isinstance(x, Polyhedron):
        return x.hrep()
    return as_hrepresentation(x)


def _vrep_of(x) -> VRepresentation:
    if isinstance(x, Polyhedron):
        return x.vrep()
    return as_vrepresentation(x)


def _check_operands(ps, is_kind, name: str) -> "tuple[type, int]":
    """
    Validates the operands before any structural work (or conversion) is
    done. Returns their promoted coefficient type and common dimension.
    """
    for p in ps:
        if not is_kind(p):
            raise TypeError(f"Expected {name}, got {type(p).__name__}.")

    T = promote_coefficient_type(ps)
    dims = [fulldim(p) for p in ps]
    if len(set(dims)) > 1:
        raise DimensionMismatch(
            f"Cannot combine operands of different dimensions, {dims}."
        )
    return T, dims[0]


# result kinds
# ------------
_ELEMENT, _REPRESENTATION, _POLYHEDRON = "element", "representation", "polyhedron"


def _kind(x) -> str:
    if isinstance(x, Polyhedron):
        return _POLYHEDRON
    if isinstance(x, (HRepresentation, VRepresentation)):
        return _REPRESENTATION
    return _ELEMENT


# (kind of operand 1, kind of operand 2) -> the operand whose flavor the
# result takes. Elements defer to the other operand.
_RESULT_FLAVOR = {
    (_ELEMENT, _ELEMENT): 0,
    (_ELEMENT, _REPRESENTATION): 1,
    (_ELEMENT, _POLYHEDRON): 1,
    (_REPRESENTATION, _ELEMENT): 0,
    (_REPRESENTATION, _REPRESENTATION): 0,
    (_REPRESENTATION, _POLYHEDRON): 0,
    (_POLYHEDRON, _ELEMENT): 0,
    (_POLYHEDRON, _REPRESENTATION): 0,
    (_POLYHEDRON, _POLYHEDRON): 0,
}


def _flavor(ps):
    # fold the decision table over the operands, from the left
    return functools.reduce(
        lambda p1, p2: (p1, p2)[_RESULT_FLAVOR[(_kind(p1), _kind(p2))]], ps
    )


def _similar(p1, p2, rep):
    """
    Wraps the representation `rep`, computed from `p1` and `p2`, so that it
    matches the flavor of the operand chosen by the decision table: a
    polyhedron of the same class and backend, or a bare representation.
    """
    return _wrap(_flavor((p1, p2)), rep)


def _wrap(flavor, rep):
    if isinstance(flavor, Polyhedron):
        return flavor._similar(rep)
    return rep


def _origin(d: int, T: type) -> Point:
    return Point([0] * d, coefficient_type=T)


def _vunion(ps: list, T: type, d: int) -> VRepresentation:
    """
    Unites the V-representations of all of the operands at once. Bare lines
    and rays only add a direction, while a cone given as a representation
    (or a polyhedron) adds its origin as soon as the result is not a cone.
    """
    vs = [_vrep_of(p) for p in ps]
    lines = tuple(l for v in vs for l in v.lines())
    rays = tuple(r for v in vs for r in v.rays())
    if all(isinstance(v, VCone) for v in vs):
        return VCone(lines, rays, ambient_dim=d, coefficient_type=T)

    points = []
    for p, v in zip(ps, vs):
        if not isinstance(v, VCone):
            points += list(v.points())
        elif not isinstance(p, (Line, Ray)):
            points.append(_origin(d, T))
    return VRepresentation(points, lines, rays, ambient_dim=d, coefficient_type=T)


def _vsum(v1: VRepresentation, v2: VRepresentation, T: type, d: int) -> VRepresentation:
    lines = v1.lines() + v2.lines()
    rays = v1.rays() + v2.rays()
    if isinstance(v1, VCone) and isinstance(v2, VCone):
        return VCone(lines, rays, ambient_dim=d, coefficient_type=T)

    # the only point of a cone is the origin, so there is nothing to add
    if isinstance(v1, VCone):
        points = v2.points()
    elif isinstance(v2, VCone):
        points = v1.points()
    else:
        q1 = [p.change_coefficient_type(T) for p in v1.points()]
        q2 = [p.change_coefficient_type(T) for p in v2.points()]
        points = [a + b for a in q1 for b in q2]
    return VRepresentation(points, lines, rays, ambient_dim=d, coefficient_type=T)


# intersection
# ------------
def _intersect2(p1, p2, T: type, d: int):
    h1, h2 = _hrep_of(p1), _hrep_of(p2)
    rep = HRepresentation(
        h1.hyperplanes() + h2.hyperplanes(),
        h1.halfspaces() + h2.halfspaces(),
        ambient_dim=d,
        coefficient_type=T,
    )
    return _similar(p1, p2, rep)


def intersect(*ps):
    """
    **Description:**
    Takes the intersection `{x : x in P_1, ..., x in P_n}` of the inputs. The
    constraints of the result are the union of the constraints of the inputs,
    without any redundancy removal.

    This is very efficient between H-representations, or between polyhedra
    whose H-representation has already been computed. If a polyhedron has
    not computed its H-representation yet, it is computed, which is costly.

    The type of the result is chosen closer to the type of the first
    operand: if `P1` is a polyhedron (resp. an H-representation) and `P2` is
    an H-representation (resp. a polyhedron), the result is a polyhedron
    (resp. an H-representation). Halfspaces and hyperplanes defer to the
    other operand. The coefficient type is promoted over all of the
    operands.

    More than two operands are folded from the left.

    **Arguments:**
    - `ps`: The operands. Halfspaces, hyperplanes, H-representations or
        polyhedra.

    **Returns:**
    The intersection.

    **Example:**
    We intersect two halfspaces and then a polyhedron.
    ```python {2,4}
    from polyrep import HalfSpace, HyperPlane, intersect
    h = intersect(HalfSpace([1, 0], 1), HyperPlane([0, 1], 0))
    # An H-representation in RR^2 defined by 1 hyperplane(s) and 1 halfspace(s) over int
    h & HalfSpace([-1, 0], 0)
    # An H-representation in RR^2 defined by 1 hyperplane(s) and 2 halfspace(s) over int
    ```
    """
    if len(ps) == 0:
        raise ValueError("At least one operand is required.")
    T, d = _check_operands(ps, _is_hany, "an H-representation")

    if len(ps) == 1:
        p = ps[0]
        return p if _kind(p) != _ELEMENT else as_hrepresentation(p)
    return functools.reduce(lambda p1, p2: _intersect2(p1, p2, T, d), ps)


def intersect_inplace(p, h) -> Polyhedron:
    """
    **Description:**
    Same as [`intersect`](#intersect), except that the polyhedron `p` is
    modified to be equal to the intersection. Its V-representation is
    dropped. `p &= h` does the same.

    **Arguments:**
    - `p`: The polyhedron to modify.
    - `h`: A halfspace, a hyperplane or an H-representation.

    **Returns:**
    *(Polyhedron)* The modified polyhedron.
    """
    if not isinstance(p, Polyhedron):
        raise UnsupportedMutation("intersect_inplace", p)

    result = intersect(p.hrep(), h)
    p.reset_hrep(result)
    p.reset_vrep(None)
    return p


# convex hull
# -----------
def convexhull(*ps):
    """
    **Description:**
    Takes the convex hull of the inputs. The points, lines and rays of the
    result are the union of those of the inputs, without any redundancy
    removal. A cone next to explicit points contributes the origin as a
    point, while a bare line or ray only contributes its direction.

    This is very efficient between V-representations, or between polyhedra
    whose V-representation has already been computed. If a polyhedron has
    not computed its V-representation yet, it is computed, which is costly.

    The type of the result follows the same rules as for
    [`intersect`](#intersect).

    **Arguments:**
    - `ps`: The operands. Points (or vectors), lines, rays,
        V-representations or polyhedra.

    **Returns:**
    The convex hull.

    **Example:**
    ```python {2}
    from polyrep import Ray, convexhull
    v = convexhull([0, 0], [1, 0], Ray([0, 1]))
    v.npoints(), v.nrays()
    # (2, 1)
    ```
    """
    if len(ps) == 0:
        raise ValueError("At least one operand is required.")
    ps = [_as_vany(p) for p in ps]
    T, d = _check_operands(ps, _is_vany, "a V-representation")

    if len(ps) == 1:
        p = ps[0]
        return p if _kind(p) != _ELEMENT else as_vrepresentation(p)
    return _wrap(_flavor(ps), _vunion(ps, T, d))


def convexhull_inplace(p, v) -> Polyhedron:
    """
    **Description:**
    Same as [`convexhull`](#convexhull), except that the polyhedron `p` is
    modified to be equal to the convex hull. Its H-representation is
    dropped. `p |= v` does the same.

    **Arguments:**
    - `p`: The polyhedron to modify.
    - `v`: A point, a line, a ray or a V-representation.

    **Returns:**
    *(Polyhedron)* The modified polyhedron.
    """
    if not isinstance(p, Polyhedron):
        raise UnsupportedMutation("convexhull_inplace", p)

    result = convexhull(p.vrep(), v)
    p.reset_vrep(result)
    p.reset_hrep(None)
    return p


def conify(x):
    """
    **Description:**
    Maps a V-side object to its conic generators: points become rays, while
    lines and rays are kept. A point gives a ray, and lines, rays and cones
    are returned as they are.

    **Arguments:**
    - `x`: A point (or a vector), a line, a ray, a V-representation or a
        polyhedron.

    **Returns:**
    A ray, a line or a `VCone`.
    """
    x = _as_vany(x)
    if isinstance(x, (VCone, Line, Ray)):
        return x
    if isinstance(x, Point):
        return Ray(x.coords, coefficient_type=x.coefficient_type())
    if isinstance(x, Polyhedron):
        x = x.vrep()
    if isinstance(x, VRepresentation):
        return VCone(
            x.lines(),
            list(x.rays()) + [Ray(p.coords, x.coefficient_type()) for p in x.points()],
            ambient_dim=x.ambient_dim(),
            coefficient_type=x.coefficient_type(),
        )
    raise TypeError(f"Expected a V-representation, got {type(x).__name__}.")


def conichull(*ps):
    """
    **Description:**
    Takes the conic hull of the inputs, i.e. the convex hull of the cones
    generated by each of them.

    **Arguments:**
    - `ps`: The operands. Points (or vectors), lines, rays,
        V-representations or polyhedra.

    **Returns:**
    The conic hull.

    **Example:**
    ```python {2}
    from polyrep import conichull
    conichull([1, 0], [1, 1])
    # A V-cone in RR^2 generated by 0 line(s) and 2 ray(s) over int
    ```
    """
    return convexhull(*[conify(p) for p in ps])


# Minkowski sum
# -------------
def _is_summand(x) -> bool:
    return isinstance(x, (VRepresentation, Polyhedron, Line, Ray))


def minkowski_sum(p1, p2):
    """
    **Description:**
    Takes the Minkowski sum `{x + y : x in P_1, y in P_2}`.

    The points of the result are all of the sums of a point of `p1` and a
    point of `p2`, so there are `m*n` of them in general. If one of the
    operands is a cone, whose only point is the origin, the points of the
    other operand are kept as they are. The lines and rays of the result are
    the union of those of the operands.

    A line or a ray is treated as the cone it generates.

    **Arguments:**
    - `p1`: A V-representation, a polyhedron, a line or a ray.
    - `p2`: A V-representation, a polyhedron, a line or a ray.

    **Returns:**
    The Minkowski sum.

    **Example:**
    ```python {3}
    from polyrep import Ray, VRepresentation
    v = VRepresentation([[1, 0]])
    v + Ray([0, 1])
    # A V-representation in RR^2 generated by 1 point(s), 0 line(s) and 1 ray(s) over int
    ```
    """
    T, d = _check_operands((p1, p2), _is_summand, "a V-representation")
    rep = _vsum(_vrep_of(p1), _vrep_of(p2), T, d)
    return _similar(p1, p2, rep)


# Cartesian product
# -----------------
def usehrep(p1: Polyhedron, p2: Polyhedron) -> bool:
    """
    **Description:**
    Decides whether the Cartesian product of two polyhedra is computed with
    their H-representations. `p1` has priority, and H-representations are
    preferred unless they would require a conversion that the
    V-representations avoid.

    **Arguments:**
    - `p1`: The first polyhedron.
    - `p2`: The second polyhedron.

    **Returns:**
    *(bool)* Whether to use the H-representations.
    """
    return p1.hrep_is_computed() and (
        not p1.vrep_is_computed() or p2.hrep_is_computed()
    )


def _product_operands(p1, p2) -> "tuple[type, int, int]":
    T = promote_coefficient_type((p1, p2))
    return T, fulldim(p1), fulldim(p2)


def hcartesianproduct(p1, p2):
    """
    **Description:**
    Computes the Cartesian product with the H-representations. The
    constraints of `p1` act on the first `d1` coordinates and those of `p2`
    on the last `d2` ones.

    **Arguments:**
    - `p1`: An H-representation or a polyhedron.
    - `p2`: An H-representation or a polyhedron.

    **Returns:**
    The Cartesian product, in dimension `d1 + d2`.
    """
    T, d1, d2 = _product_operands(p1, p2)
    d = sum_fulldim(d1, d2)

    h1 = zeropad(_hrep_of(p1), d2)
    h2 = zeropad(_hrep_of(p2), neg_fulldim(d1))
    rep = HRepresentation(
        h1.hyperplanes() + h2.hyperplanes(),
        h1.halfspaces() + h2.halfspaces(),
        ambient_dim=d,
        coefficient_type=T,
    )
    return _similar(p1, p2, rep)


def vcartesianproduct(p1, p2):
    """
    **Description:**
    Computes the Cartesian product with the V-representations. Both operands
    are embedded into the product space and then added with a Minkowski
    sum, which pairs up their points.

    **Arguments:**
    - `p1`: A V-representation or a polyhedron.
    - `p2`: A V-representation or a polyhedron.

    **Returns:**
    The Cartesian product, in dimension `d1 + d2`.
    """
    T, d1, d2 = _product_operands(p1, p2)
    d = sum_fulldim(d1, d2)

    v1 = zeropad(_vrep_of(p1), d2)
    v2 = zeropad(_vrep_of(p2), neg_fulldim(d1))
    rep = _vsum(v1, v2, T, d)
    return _similar(p1, p2, rep)


def cartesian_product(p1, p2):
    """
    **Description:**
    Takes the Cartesian product `{(x, y) : x in P_1, y in P_2}`.

    Between two polyhedra, the H-representations are used if
    [`usehrep`](#usehrep) says so, and the V-representations otherwise.
    Between a polyhedron and a representation, the side of the
    representation is used. `p1 * p2` does the same.

    **Arguments:**
    - `p1`: A representation or a polyhedron.
    - `p2`: A representation or a polyhedron.

    **Returns:**
    The Cartesian product.

    **Example:**
    ```python {3}
    from polyrep import VRepresentation
    v = VRepresentation([[0], [1]])
    v * v
    # A V-representation in RR^2 generated by 4 point(s), 0 line(s) and 0 ray(s) over int
    ```
    """
    if isinstance(p1, Polyhedron) and isinstance(p2, Polyhedron):
        if usehrep(p1, p2):
            return hcartesianproduct(p1, p2)
        return vcartesianproduct(p1, p2)

    is_h = lambda p: isinstance(p, (HRepresentation, Polyhedron))
    is_v = lambda p: isinstance(p, (VRepresentation, Polyhedron))
    if is_h(p1) and is_h(p2):
        return hcartesianproduct(p1, p2)
    if is_v(p1) and is_v(p2):
        return vcartesianproduct(p1, p2)
    raise TypeError(
        "Cannot take the Cartesian product of "
        f"{type(p1).__name__} and {type(p2).__name__}."
    )


# linear transformations
# ----------------------
def _transform_operands(p, P: ArrayLike, side: str) -> "tuple[np.ndarray, type]":
    P = np.asarray(P, dtype=object)
    if P.ndim != 2:
        raise ValueError("Input matrix must be a 2D matrix.")
    if P.shape[1] != fulldim(p):
        raise DimensionMismatch(
            f"The number of columns of P, {P.shape[1]}, must match the "
            f"dimension of the {side}-representation, {fulldim(p)}."
        )
    T = promote_type(p.coefficient_type(), matrix_coefficient_type(P))
    return convert_matrix(P, T), T


def _rewrap(p, rep):
    if isinstance(p, Polyhedron):
        return p._similar(rep)
    return rep


def hrep_transform(p, P: ArrayLike):
    """
    **Description:**
    Transforms the polyhedron into `P^{-T} p` by mapping each halfspace
    `<a, x> <= beta` to `<P a, x> <= beta` and each hyperplane `<a, x> = beta`
    to `<P a, x> = beta`. `p / P` does the same.

    **Arguments:**
    - `p`: An H-representation or a polyhedron.
    - `P`: A matrix whose number of columns matches the dimension of `p`.

    **Returns:**
    The transformed polyhedron, whose dimension is the number of rows of
    `P`.

    **Example:**
    ```python {3}
    from polyrep import HalfSpace, HRepresentation
    h = HRepresentation(halfspaces=[HalfSpace([1, 0, 0], 1)])
    h / [[1, 0, 0], [0, 0, 1]]
    # An H-representation in RR^2 defined by 0 hyperplane(s) and 1 halfspace(s) over int
    ```
    """
    if not isinstance(p, (HRepresentation, Polyhedron)):
        raise TypeError(f"Expected an H-representation, got {type(p).__name__}.")
    P, T = _transform_operands(p, P, "H")

    h = _hrep_of(p).change_coefficient_type(T)
    rep = h._map(lambda x: x._apply(P, T), ambient_dim=P.shape[0], coefficient_type=T)
    return _rewrap(p, rep)


def left_divide(P: ArrayLike, p):
    """
    **Description:**
    Transforms the polyhedron into `P^{-1} p` by mapping each halfspace
    `<a, x> <= beta` to `<P^T a, x> <= beta` and each hyperplane likewise.
    This is the transform of `p` by the transpose of `P`, i.e.
    `left_divide(P, p) == p / P.T`.

    **Arguments:**
    - `P`: A matrix whose number of rows matches the dimension of `p`.
    - `p`: An H-representation or a polyhedron.

    **Returns:**
    The transformed polyhedron.
    """
    P = np.asarray(P, dtype=object)
    if P.ndim != 2:
        raise ValueError("Input matrix must be a 2D matrix.")
    return hrep_transform(p, P.T)


def linear_map(P: ArrayLike, p):
    """
    **Description:**
    Transforms the polyhedron into `P p` by mapping each point, line and ray
    `v` to `P v`. `P * p` and `P @ p` do the same.

    **Arguments:**
    - `P`: A matrix whose number of columns matches the dimension of `p`.
    - `p`: A V-representation or a polyhedron.

    **Returns:**
    The transformed polyhedron, whose dimension is the number of rows of
    `P`.

    **Example:**
    ```python {3}
    from polyrep import VRepresentation
    v = VRepresentation([[1, 2], [3, 4]])
    [[1, 1]] * v
    # A V-representation in RR^1 generated by 2 point(s), 0 line(s) and 0 ray(s) over int
    ```
    """
    if not isinstance(p, (VRepresentation, Polyhedron)):
        raise TypeError(f"Expected a V-representation, got {type(p).__name__}.")
    P, T = _transform_operands(p, P, "V")

    v = _vrep_of(p).change_coefficient_type(T)
    rep = v._map(lambda x: x._apply(P, T), ambient_dim=P.shape[0], coefficient_type=T)
    return _rewrap(p, rep)


# operators
# ---------
def _is_matrix(x) -> bool:
    return not isinstance(
        x, (HRepresentation, VRepresentation, Polyhedron) + HREP_ELEMENTS + VREP_ELEMENTS
    ) and np.ndim(x) == 2


def _and(self, other):
    if not _is_hany(other):
        return NotImplemented
    return intersect(self, other)


def _rand(self, other):
    if not _is_hany(other):
        return NotImplemented
    return intersect(other, self)


def _or(self, other):
    if not _is_vany(other):
        return NotImplemented
    return convexhull(self, other)


def _ror(self, other):
    if not _is_vany(other):
        return NotImplemented
    return convexhull(other, self)


def _add(self, other):
    if not _is_summand(other):
        return NotImplemented
    return minkowski_sum(self, other)


def _radd(self, other):
    if not _is_summand(other):
        return NotImplemented
    return minkowski_sum(other, self)


def _mul(self, other):
    if not isinstance(other, (HRepresentation, VRepresentation, Polyhedron)):
        return NotImplemented
    return cartesian_product(self, other)


def _rmul(self, other):
    if isinstance(self, HRepresentation) or not _is_matrix(other):
        return NotImplemented
    return linear_map(other, self)


def _truediv(self, other):
    if isinstance(self, VRepresentation) or not _is_matrix(other):
        return NotImplemented
    return hrep_transform(self, other)


def _iand(self, other):
    return intersect_inplace(self, other)


def _ior(self, other):
    return convexhull_inplace(self, other)


for cls in (HRepresentation, Polyhedron, HalfSpace, HyperPlane):
    cls.__and__ = _and
    cls.__rand__ = _rand
for cls in (VRepresentation, Polyhedron, Line, Ray):
    cls.__or__ = _or
    cls.__ror__ = _ror
    cls.__add__ = _add
    cls.__radd__ = _radd
for cls in (HRepresentation, VRepresentation, Polyhedron):
    cls.__mul__ = _mul
    cls.__rmul__ = _rmul
    cls.__truediv__ = _truediv
VRepresentation.__rmatmul__ = _rmul
Polyhedron.__rmatmul__ = _rmul
Polyhedron.__iand__ = _iand
Polyhedron.__ior__ = _ior
Point.__or__ = _or
Point.__ror__ = _ror
