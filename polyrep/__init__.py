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

# Make the main classes and functions accessible from the root of polyrep.
from polyrep.errors import (
    ConversionFailure,
    DimensionMismatch,
    TypeIncompatibility,
    UnsupportedMutation,
)
from polyrep.elements import HalfSpace, HyperPlane, Line, Point, Ray
from polyrep.representation import (
    HRepresentation,
    VCone,
    VRepresentation,
    hrep,
    vrep,
)
from polyrep.fulldim import fulldim, neg_fulldim, sum_fulldim, zeropad
from polyrep.polyhedron import Polyhedron, polyhedron
from polyrep.backends import backends, register_backend

# importing the algebra attaches the operators to the classes above
from polyrep.algebra import (
    cartesian_product,
    conichull,
    conify,
    convexhull,
    convexhull_inplace,
    hcartesianproduct,
    hrep_transform,
    intersect,
    intersect_inplace,
    left_divide,
    linear_map,
    minkowski_sum,
    usehrep,
    vcartesianproduct,
)
from polyrep import config

# Latest version
version = "0.1.0"
