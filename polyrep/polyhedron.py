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
# Description:  This module contains the Polyhedron class, which holds a pair
#               of lazily computed H- and V-representations.
# -----------------------------------------------------------------------------

# 'standard' imports
from fractions import Fraction
import math

# 3rd party imports
import flint
import numpy as np
from numpy.typing import ArrayLike

# polyrep imports
from polyrep import backends as _backends
from polyrep import config
from polyrep.coefficients import (
    EXACT_TYPES,
    convert,
    polyhedron_type,
    promote_type,
    type_name,
)
from polyrep.elements import HREP_ELEMENTS
from polyrep.errors import DimensionMismatch
from polyrep.representation import (
    HRepresentation,
    VCone,
    VRepresentation,
    as_hrepresentation,
    as_vrepresentation,
)


class Polyhedron:
    """
    This class handles a polyhedron through its H- and V-representations.
    Only one of them is given at construction. The other one is computed by
    the conversion backend the first time it is needed, and then cached for
    the lifetime of the object.

    :::important warning
    Conversions between H- and V-representations are expensive. Operations
    that only need one representation (e.g. intersections need the
    H-representation) never compute the other one.
    :::

    ## Constructor

    ### `polyrep.polyhedron.Polyhedron`

    **Description:**
    Constructs a `Polyhedron` object. This is handled by the hidden
    [`__init__`](#__init__) function.

    **Arguments:**
    - `hrep` *(HRepresentation, optional)*: The H-representation. If it is
        not specified then the V-representation must be specified.
    - `vrep` *(VRepresentation, optional)*: The V-representation. If it is
        not specified then the H-representation must be specified.
    - `backend` *(str, optional)*: The backend used for conversions. Defaults
        to `config.default_backend`.

    :::note
    Exactly one of `hrep` or `vrep` must be specified. Otherwise an exception
    is raised.
    :::

    **Example:**
    We construct the unit square from its vertices and compute its
    H-representation.
    ```python {2,4}
    from polyrep import Polyhedron, VRepresentation
    p = Polyhedron(vrep=VRepresentation([[0, 0], [1, 0], [0, 1], [1, 1]]))
    p.hrep_is_computed()
    # False
    p.hrep().nhalfspaces()
    # 4
    ```
    """

    # defer numpy binary operators to this class
    __array_ufunc__ = None

    def __init__(
        self,
        hrep: HRepresentation = None,
        vrep: VRepresentation = None,
        backend: str = None,
    ) -> None:
        """
        **Description:**
        Initializes a `Polyhedron` object.

        **Arguments:**
        - `hrep`: The H-representation.
        - `vrep`: The V-representation.
        - `backend`: The backend used for conversions.

        **Returns:**
        Nothing.
        """
        # check whether hrep or vrep was input
        if not ((hrep is None) ^ (vrep is None)):
            raise ValueError('Exactly one of "hrep" and "vrep" must be specified.')
        if hrep is not None and not isinstance(hrep, HRepresentation):
            raise TypeError(f"Expected an HRepresentation, got {type(hrep).__name__}.")
        if vrep is not None and not isinstance(vrep, VRepresentation):
            raise TypeError(f"Expected a VRepresentation, got {type(vrep).__name__}.")

        # check that backend is allowed
        if backend is None:
            backend = config.default_backend
        if backend not in _backends.backends():
            raise ValueError(
                f"Invalid backend, {backend}. "
                f"Options are {sorted(_backends.backends())}."
            )
        self._backend = backend

        rep = hrep if hrep is not None else vrep
        self._ambient_dim = rep.ambient_dim()
        self._T = polyhedron_type(rep.coefficient_type())
        self._hrep = None if hrep is None else hrep.change_coefficient_type(self._T)
        self._vrep = None if vrep is None else vrep.change_coefficient_type(self._T)

        # initialize other variables
        self.clear_cache()

    def clear_cache(self) -> None:
        """
        **Description:**
        Clears the cached results derived from the representations. The
        representations themselves are kept.

        **Arguments:**
        None.

        **Returns:**
        Nothing.
        """
        self._dim = None
        self._is_empty = None

    def __repr__(self) -> str:
        computed = [
            name
            for name, rep in (("H", self._hrep), ("V", self._vrep))
            if rep is not None
        ]
        return (
            f"A polyhedron in RR^{self._ambient_dim} over {type_name(self._T)} "
            f"with computed {'- and '.join(computed)}-representation "
            f"({self._backend} backend)"
        )

    def _similar(self, rep) -> "Polyhedron":
        # a polyhedron of the same flavor holding rep
        if isinstance(rep, HRepresentation):
            return type(self)(hrep=rep, backend=self._backend)
        return type(self)(vrep=rep, backend=self._backend)

    # basic properties
    # ----------------
    def backend(self) -> str:
        return self._backend

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

    # representations
    # ---------------
    def hrep_is_computed(self) -> bool:
        return self._hrep is not None

    def vrep_is_computed(self) -> bool:
        return self._vrep is not None

    def hrep(self, verbosity: int = 0) -> HRepresentation:
        """
        **Description:**
        Returns the H-representation, computing it from the V-representation
        if it was not computed yet.

        **Arguments:**
        - `verbosity`: The verbosity level.

        **Returns:**
        *(HRepresentation)* The H-representation.
        """
        if self._hrep is not None:
            return self._hrep

        if verbosity >= 1:
            print("Computing the H-representation...", flush=True)
        self._hrep = _backends.to_hrep(
            self._vrep, backend=self._backend, verbosity=verbosity
        )
        return self._hrep

    def vrep(self, verbosity: int = 0) -> VRepresentation:
        """
        **Description:**
        Returns the V-representation, computing it from the H-representation
        if it was not computed yet.

        **Arguments:**
        - `verbosity`: The verbosity level.

        **Returns:**
        *(VRepresentation)* The V-representation.
        """
        if self._vrep is not None:
            return self._vrep

        if verbosity >= 1:
            print("Computing the V-representation...", flush=True)
        self._vrep = _backends.to_vrep(
            self._hrep, backend=self._backend, verbosity=verbosity
        )
        return self._vrep

    def _check_reset(self, rep, cls, name: str, other):
        if rep is None:
            if other is None:
                raise ValueError(
                    f"Cannot drop the {name} since the other representation "
                    "is not computed."
                )
            return None
        if not isinstance(rep, cls):
            raise TypeError(f"Expected a {cls.__name__}, got {type(rep).__name__}.")
        if rep.ambient_dim() != self._ambient_dim:
            raise DimensionMismatch(
                f"Cannot set a {name} of dimension {rep.ambient_dim()} on a "
                f"polyhedron of dimension {self._ambient_dim}."
            )
        # raises if there is no common type
        promote_type(self._T, rep.coefficient_type())
        return rep.change_coefficient_type(self._T)

    def reset_hrep(self, hrep: HRepresentation) -> None:
        """
        **Description:**
        Replaces the H-representation and clears the cached results derived
        from it.

        :::note
        The V-representation is left untouched. It is up to the caller to make
        sure that both representations describe the same polyhedron, or to
        drop the V-representation with `reset_vrep(None)`.
        :::

        **Arguments:**
        - `hrep`: The new H-representation. `None` marks the H-representation
            as not computed, which requires the V-representation to be
            computed.

        **Returns:**
        Nothing.
        """
        self._hrep = self._check_reset(hrep, HRepresentation, "H-representation", self._vrep)
        self.clear_cache()

    def reset_vrep(self, vrep: VRepresentation) -> None:
        """
        **Description:**
        Replaces the V-representation and clears the cached results derived
        from it.

        :::note
        The H-representation is left untouched. It is up to the caller to make
        sure that both representations describe the same polyhedron, or to
        drop the H-representation with `reset_hrep(None)`.
        :::

        **Arguments:**
        - `vrep`: The new V-representation. `None` marks the V-representation
            as not computed, which requires the H-representation to be
            computed.

        **Returns:**
        Nothing.
        """
        self._vrep = self._check_reset(vrep, VRepresentation, "V-representation", self._hrep)
        self.clear_cache()

    # derived quantities
    # ------------------
    def is_empty(self) -> bool:
        """
        **Description:**
        Returns True if the polyhedron is empty. This requires the
        V-representation.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the polyhedron being empty.
        """
        if self._is_empty is not None:
            return self._is_empty

        v = self.vrep()
        self._is_empty = v.npoints() == 0 and not isinstance(v, VCone)
        return self._is_empty

    def dimension(self) -> int:
        """
        **Description:**
        Returns the dimension of the polyhedron, i.e. the dimension of its
        affine hull. This requires the V-representation. Ranks are computed
        exactly with FLINT for exact coefficient types.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the polyhedron, or -1 if it is empty.

        **Aliases:**
        `dim`.

        **Example:**
        ```python {3}
        from polyrep import Polyhedron, VRepresentation
        p = Polyhedron(vrep=VRepresentation([[0, 0, 0], [1, 0, 0], [0, 1, 0]]))
        p.dimension()
        # 2
        ```
        """
        if self._dim is not None:
            return self._dim
        if self.is_empty():
            self._dim = -1
            return self._dim

        # directions spanned from the first point
        v = self.vrep()
        pts = [p.coords for p in v.points()]
        if isinstance(v, VCone):
            pts = [np.array([convert(0, self._T)] * self._ambient_dim, dtype=object)]
        rows = [p - pts[0] for p in pts[1:]]
        rows += [l.coords for l in v.lines()] + [r.coords for r in v.rays()]

        if len(rows) == 0:
            self._dim = 0
        elif self._T in EXACT_TYPES:
            # clear denominators row by row, which preserves the rank
            rows = [[convert(c, Fraction) for c in row] for row in rows]
            scales = [math.lcm(*[c.denominator for c in row]) for row in rows]
            M = flint.fmpz_mat(
                [[int(c * s) for c in row] for row, s in zip(rows, scales)]
            )
            self._dim = int(M.rank())
        else:
            self._dim = int(np.linalg.matrix_rank(np.array(rows, dtype=float)))
        return self._dim

    # aliases
    dim = dimension

    def contains(self, x: ArrayLike, eps: float = 0) -> bool:
        """
        **Description:**
        Checks if a point is contained in the polyhedron. This requires the
        H-representation.

        **Arguments:**
        - `x`: The point.
        - `eps`: The tolerance allowed on each constraint.

        **Returns:**
        *(bool)* Whether the point is contained.
        """
        return self.hrep().contains(x, eps=eps)

    def __contains__(self, x) -> bool:
        return self.contains(x)


def polyhedron(rep, backend: str = None) -> Polyhedron:
    """
    **Description:**
    Constructs a polyhedron from an H- or V-representation, or from a single
    element.

    **Arguments:**
    - `rep`: The representation or element.
    - `backend`: The backend used for conversions.

    **Returns:**
    *(Polyhedron)* The polyhedron.

    **Example:**
    ```python {2}
    from polyrep import HalfSpace, polyhedron
    p = polyhedron(HalfSpace([1, 0], 1))
    p.hrep_is_computed(), p.vrep_is_computed()
    # (True, False)
    ```
    """
    if isinstance(rep, Polyhedron):
        return rep
    if isinstance(rep, (HRepresentation,) + HREP_ELEMENTS):
        return Polyhedron(hrep=as_hrepresentation(rep), backend=backend)
    return Polyhedron(vrep=as_vrepresentation(rep), backend=backend)
