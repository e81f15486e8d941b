# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from .exceptions import ShapeMismatchError, SingularMatrixError
from .matrix import Matrix, slice_matrix, vector_from_row
from .utils import EPS, check_dimension, check_upper_triangular
from .vector import ArrayVector, Vector, dot_product, slice_vector


def find_input_to_upper_triangular_into(
    A: Matrix, b: Vector, x: Vector, tol: float = EPS
) -> None:
    """
    Back substitution: write into x the input that A maps to b.

    Parameters
    ----------
    A : Matrix (ins, outs), outs >= ins
        Upper triangular, i.e. get(in_, out) == 0 whenever out > in_.
        Rows ins..outs-1 are therefore all zero and are not used.
    b : Vector (outs,)
    x : Vector (ins,)
    tol : float
        Pivots with magnitude below tol, or NaN, are treated as zero.

    Raises
    ------
    ShapeMismatchError : if A has fewer outs than ins.
    DimensionMismatchError : if b or x do not match A.
    NotUpperTriangularError : if A has an entry below the diagonal.
    SingularMatrixError : if a diagonal pivot is smaller than tol or NaN.
    """
    ins, outs = A.shape
    if outs < ins:
        raise ShapeMismatchError(
            f"upper triangular solve needs outs >= ins, got {outs} outs and {ins} ins",
            left=A.shape,
        )
    check_dimension(b, outs, "find_input_to_upper_triangular: b")
    check_dimension(x, ins, "find_input_to_upper_triangular: x")
    check_upper_triangular(A)
    for o in range(ins):
        pivot = A.get(o, o)
        if not abs(pivot) >= tol:
            raise SingularMatrixError(
                f"diagonal entry {o} is {pivot!r}, below tolerance {tol}",
                index=o,
                pivot=pivot,
            )

    # The last row holds a single unknown on the diagonal, so solve it by
    # division and work upwards, each row adding one new unknown.
    for o in reversed(range(ins)):
        dot = dot_product(
            slice_vector(x, o + 1, ins),
            vector_from_row(slice_matrix(A, o + 1, ins, o, o + 1)),
        )
        x.set(o, (b.get(o) - dot) / A.get(o, o))


def find_input_to_upper_triangular(A: Matrix, b: Vector, tol: float = EPS) -> ArrayVector:
    """Solve A x = b for upper-triangular A, returning a new x of dimension A.ins."""
    x = ArrayVector(A.ins)
    find_input_to_upper_triangular_into(A, b, x, tol=tol)
    return x
