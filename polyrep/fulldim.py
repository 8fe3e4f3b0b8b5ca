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
# Description:  This module contains helpers to manipulate ambient dimensions,
#               used to embed representations into a common, larger space.
# -----------------------------------------------------------------------------

# 3rd party imports
import numpy as np

# polyrep imports
from polyrep.coefficients import convert
from polyrep.elements import HRepElement, VRepElement
from polyrep.representation import HRepresentation, VRepresentation


def fulldim(x) -> int:
    """
    **Description:**
    Returns the ambient dimension of an element, a representation or a
    polyhedron.
    """
    return x.ambient_dim()


def sum_fulldim(d1: int, d2: int) -> int:
    return d1 + d2


def neg_fulldim(d: int) -> int:
    # a directional tag for zeropad: the padding goes before the coordinates
    return -d


def _pad(v: np.ndarray, pad: int, T: type) -> np.ndarray:
    zeros = np.empty(abs(pad), dtype=object)
    zeros.fill(convert(0, T))
    if pad > 0:
        return np.concatenate([v, zeros])
    return np.concatenate([zeros, v])


def zeropad(x, pad: int):
    """
    **Description:**
    Embeds an element or a representation into a space of dimension
    `d + |pad|`. The original coordinates stay contiguous. The `|pad|` new
    coordinates are zeros, placed after the original ones if `pad > 0` and
    before them if `pad < 0`.

    The offsets of halfspaces and hyperplanes are unchanged, so a padded
    constraint ignores the new coordinates.

    **Arguments:**
    - `x`: An element or a representation.
    - `pad`: The number of coordinates to add, with the sign indicating
        where they go.

    **Returns:**
    The padded object, of the same kind and coefficient type as `x`.

    **Example:**
    ```python {2,4}
    from polyrep.fulldim import zeropad, neg_fulldim
    zeropad(Point([1, 2]), 1)
    # Point([1, 2, 0])
    zeropad(HalfSpace([1, 2], 3), neg_fulldim(2))
    # HalfSpace([0, 0, 1, 2], 3)
    ```
    """
    if pad == 0:
        return x

    T = x.coefficient_type()
    if isinstance(x, HRepElement):
        return type(x)(_pad(x.a, pad, T), x.beta, coefficient_type=T)
    if isinstance(x, VRepElement):
        return type(x)(_pad(x.coords, pad, T), coefficient_type=T)
    if isinstance(x, (HRepresentation, VRepresentation)):
        return x._map(
            lambda el: zeropad(el, pad), ambient_dim=x.ambient_dim() + abs(pad)
        )
    raise TypeError(f"Cannot pad an object of type {type(x).__name__}.")
