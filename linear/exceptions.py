# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for linear.

Every error raised by the package is a contract violation and derives from
`LinearError`. The shape and index errors also derive from the matching
builtin (`ValueError`, `IndexError`) so callers that only know NumPy-style
errors still catch them.
"""

from typing import Optional, Tuple

Shape = Tuple[int, int]


class LinearError(Exception):
    """Base exception for all linear errors."""


class ShapeMismatchError(LinearError, ValueError):
    """
    Two matrix operands have incompatible shapes.

    Attributes:
        left: (ins, outs) of the first operand
        right: (ins, outs) of the second operand
    """

    def __init__(
        self,
        message: str,
        left: Optional[Shape] = None,
        right: Optional[Shape] = None,
    ):
        super().__init__(message)
        self.left = left
        self.right = right


class DimensionMismatchError(LinearError, ValueError):
    """
    A vector's dimension does not match the axis it is used against.

    Attributes:
        dimension: Actual vector dimension
        expected: Dimension required by the operation
    """

    def __init__(
        self,
        message: str,
        dimension: Optional[int] = None,
        expected: Optional[int] = None,
    ):
        super().__init__(message)
        self.dimension = dimension
        self.expected = expected


class OutOfBoundsError(LinearError, IndexError):
    """
    Index outside the declared extent of a vector, matrix or view.

    Attributes:
        index: The offending index
        extent: Size of the axis it was checked against
    """

    def __init__(self, message: str, index: int, extent: int):
        super().__init__(message)
        self.index = index
        self.extent = extent


class NotUpperTriangularError(LinearError, ValueError):
    """
    Matrix expected to be upper triangular has an entry below the diagonal.

    Attributes:
        in_index: Column of the first offending entry
        out_index: Row of the first offending entry
        value: The offending entry
    """

    def __init__(self, message: str, in_index: int, out_index: int, value: float):
        super().__init__(message)
        self.in_index = in_index
        self.out_index = out_index
        self.value = value


class NumericalError(LinearError, ArithmeticError):
    """Base class for failures caused by the numbers rather than the shapes."""


class SingularMatrixError(NumericalError):
    """
    A diagonal pivot is numerically indistinguishable from zero.

    Attributes:
        index: Diagonal index of the pivot
        pivot: Value of the pivot
    """

    def __init__(self, message: str, index: int, pivot: float):
        super().__init__(message)
        self.index = index
        self.pivot = pivot


class ZeroVectorError(NumericalError):
    """A zero-length vector was normalized."""
