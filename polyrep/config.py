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

"""
This module contains various configuration variables used throughout polyrep.
"""

# The backend used to convert between H- and V-representations when a
# Polyhedron is constructed without specifying one.
default_backend = "ppl"

# Conversions in this ambient dimension or above emit a warning, since
# double-description methods scale very poorly.
slow_conversion_dim = 12


def set_default_backend(backend: str) -> None:
    """
    **Description:**
    Sets the backend used to convert between H- and V-representations for
    polyhedra constructed without an explicit backend.

    **Arguments:**
    - `backend`: The name of a registered backend. See
        [`backends`](./backends#backends) for the available options.

    **Returns:**
    Nothing.

    **Example:**
    ```python {2}
    import polyrep
    polyrep.config.set_default_backend("ppl")
    ```
    """
    from polyrep.backends import backends

    global default_backend
    if backend not in backends():
        raise ValueError(
            f"Invalid backend, {backend}. Options are {sorted(backends())}."
        )
    default_backend = backend
