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
# Description:  This module contains the backends that convert between the H-
#               and V-representations of a polyhedron.
# -----------------------------------------------------------------------------

# 'standard' imports
from fractions import Fraction
import math
import warnings

# 3rd party imports
import flint
import ppl

# polyrep imports
from polyrep import config
from polyrep.coefficients import convert, type_name
from polyrep.elements import HalfSpace, HyperPlane
from polyrep.errors import ConversionFailure, TypeIncompatibility
from polyrep.representation import HRepresentation, VCone, VRepresentation

# registered backends, mapping names to (to_hrep, to_vrep) functions
_BACKENDS = {}


def register_backend(name: str, to_hrep, to_vrep) -> None:
    """
    **Description:**
    Registers a backend converting between H- and V-representations.

    **Arguments:**
    - `name`: The name of the backend.
    - `to_hrep`: A function mapping a `VRepresentation` (and a `verbosity`
        keyword) to an `HRepresentation` of the same polyhedron.
    - `to_vrep`: A function mapping an `HRepresentation` (and a `verbosity`
        keyword) to a `VRepresentation` of the same polyhedron.

    **Returns:**
    Nothing.
    """
    _BACKENDS[name] = (to_hrep, to_vrep)


def backends() -> tuple:
    """
    **Description:**
    Returns the names of the registered backends.
    """
    return tuple(_BACKENDS)


def _get_backend(backend: str) -> tuple:
    if backend is None:
        backend = config.default_backend
    if backend not in _BACKENDS:
        raise ValueError(
            f"Invalid backend, {backend}. Options are {sorted(_BACKENDS)}."
        )
    return backend, _BACKENDS[backend]


def _check_size(d: int) -> None:
    if d >= config.slow_conversion_dim:
        warnings.warn(
            f"This conversion might take a while for d > ~{config.slow_conversion_dim} "
            "and is likely impossible for d > ~18."
        )


def _conform(rep, d: int, T: type):
    # express the output of a backend with the input's dimension and type
    if rep.ambient_dim() != d:
        raise ConversionFailure(
            f"The backend returned a representation in RR^{rep.ambient_dim()} "
            f"for an input in RR^{d}."
        )
    try:
        return rep.change_coefficient_type(T)
    except TypeIncompatibility as e:
        raise ConversionFailure(
            f"The converted representation cannot be expressed over "
            f"{type_name(T)}: {e}"
        ) from e


def to_hrep(vrep: VRepresentation, backend: str = None, verbosity: int = 0) -> HRepresentation:
    """
    **Description:**
    Computes an H-representation of the polyhedron described by a
    V-representation. This can be very expensive.

    **Arguments:**
    - `vrep`: The V-representation.
    - `backend`: The backend to use. Defaults to `config.default_backend`.
    - `verbosity`: The verbosity level.

    **Returns:**
    *(HRepresentation)* An H-representation with the same ambient dimension
    and coefficient type.

    **Example:**
    ```python {3}
    from polyrep import VRepresentation
    from polyrep.backends import to_hrep
    to_hrep(VRepresentation([[0, 0], [1, 0], [0, 1]])).nhalfspaces()
    # 3
    ```
    """
    backend, (f, _) = _get_backend(backend)
    d = vrep.ambient_dim()
    _check_size(d)

    if verbosity >= 1:
        print(f"to_hrep: Converting {vrep} with the {backend} backend...", flush=True)
    return _conform(f(vrep, verbosity=verbosity), d, vrep.coefficient_type())


def to_vrep(hrep: HRepresentation, backend: str = None, verbosity: int = 0) -> VRepresentation:
    """
    **Description:**
    Computes a V-representation of the polyhedron described by an
    H-representation. This can be very expensive.

    **Arguments:**
    - `hrep`: The H-representation.
    - `backend`: The backend to use. Defaults to `config.default_backend`.
    - `verbosity`: The verbosity level.

    **Returns:**
    *(VRepresentation)* A V-representation with the same ambient dimension
    and coefficient type.
    """
    backend, (_, f) = _get_backend(backend)
    d = hrep.ambient_dim()
    _check_size(d)

    if verbosity >= 1:
        print(f"to_vrep: Converting {hrep} with the {backend} backend...", flush=True)
    return _conform(f(hrep, verbosity=verbosity), d, hrep.coefficient_type())


# ppl backend
# -----------
def _integral(values) -> "tuple[list[int], int]":
    # scale rational values to integers, returning them with the scale
    fracs = [convert(c, Fraction) for c in values]
    den = math.lcm(*[f.denominator for f in fracs])
    return [int(f * den) for f in fracs], den


def _padded(coeffs, d: int) -> list:
    coeffs = [int(c) for c in coeffs]
    return coeffs + [0] * (d - len(coeffs))


def _ppl_to_vrep(hrep: HRepresentation, verbosity: int = 0) -> VRepresentation:
    d = hrep.ambient_dim()

    # build the constraint system
    cs = ppl.Constraint_System()
    for h in hrep.hyperplanes():
        c, _ = _integral(list(h.a) + [h.beta])
        cs.insert(ppl.Linear_Expression(c[:-1], -c[-1]) == 0)
    for h in hrep.halfspaces():
        c, _ = _integral(list(h.a) + [h.beta])
        cs.insert(ppl.Linear_Expression(c[:-1], -c[-1]) <= 0)

    # find the generators
    try:
        poly = ppl.C_Polyhedron(d, "universe")
        poly.add_constraints(cs)
        gs = list(poly.minimized_generators())
    except (ValueError, ArithmeticError) as e:
        raise ConversionFailure(f"ppl failed to convert {hrep}: {e}") from e

    if verbosity >= 2:
        print(f"_ppl_to_vrep: Found {len(gs)} generators.", flush=True)

    points, lines, rays = [], [], []
    for g in gs:
        coeffs = _padded(g.coefficients(), d)
        if g.is_point():
            div = int(g.divisor())
            points.append([flint.fmpq(c, div) for c in coeffs])
        elif g.is_line():
            lines.append(coeffs)
        elif g.is_ray():
            rays.append(coeffs)
        else:
            raise ConversionFailure(f"Unexpected generator, {g}.")

    return VRepresentation(
        points, lines, rays, ambient_dim=d, coefficient_type=flint.fmpq
    )


def _ppl_to_hrep(vrep: VRepresentation, verbosity: int = 0) -> HRepresentation:
    d = vrep.ambient_dim()

    # the origin is the only point of a cone
    points = [p.coords for p in vrep.points()]
    if isinstance(vrep, VCone):
        points = [[0] * d]

    try:
        poly = ppl.C_Polyhedron(d, "empty")
        if len(points):
            # build the generator system
            gs = ppl.Generator_System()
            for p in points:
                c, den = _integral(p)
                gs.insert(ppl.point(ppl.Linear_Expression(c, 0), den))
            for l in vrep.lines():
                c, _ = _integral(l.coords)
                if any(c):
                    gs.insert(ppl.line(ppl.Linear_Expression(c, 0)))
            for r in vrep.rays():
                c, _ = _integral(r.coords)
                if any(c):
                    gs.insert(ppl.ray(ppl.Linear_Expression(c, 0)))
            poly.add_generators(gs)
        cs = list(poly.minimized_constraints())
    except (ValueError, ArithmeticError) as e:
        raise ConversionFailure(f"ppl failed to convert {vrep}: {e}") from e

    if verbosity >= 2:
        print(f"_ppl_to_hrep: Found {len(cs)} constraints.", flush=True)

    # ppl constraints read a.x + b >= 0 or a.x + b == 0
    hyperplanes, halfspaces = [], []
    for c in cs:
        a = _padded(c.coefficients(), d)
        b = int(c.inhomogeneous_term())
        if c.is_equality():
            hyperplanes.append(HyperPlane(a, -b, int))
        else:
            halfspaces.append(HalfSpace([-x for x in a], b, int))

    return HRepresentation(hyperplanes, halfspaces, ambient_dim=d, coefficient_type=int)


register_backend("ppl", _ppl_to_hrep, _ppl_to_vrep)
