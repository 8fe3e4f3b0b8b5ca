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
# Description:  This module contains the exceptions raised by polyrep.
# -----------------------------------------------------------------------------


class DimensionMismatch(ValueError):
    """
    Raised when the ambient dimensions of two operands (or of a matrix and a
    representation) do not agree.
    """

    pass


class TypeIncompatibility(TypeError):
    """
    Raised when no common coefficient type exists for the operands, or when a
    value cannot be converted exactly to the requested coefficient type.
    """

    pass


class UnsupportedMutation(NotImplementedError):
    """
    Raised when an in-place operation is requested on an object that does not
    own mutable cached representations.
    """

    def __init__(self, operation: str, obj) -> None:
        self.operation = operation
        self.kind = type(obj).__name__
        super().__init__(
            f"{operation} is not implemented for {self.kind}. It probably "
            "does not support in-place modification, try "
            f"{operation.replace('_inplace', '')} instead."
        )


class ConversionFailure(RuntimeError):
    """
    Raised by a conversion backend when it cannot convert between the H- and
    V-representations.
    """

    pass
