# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrices as linear maps under an assumed basis.

A matrix with shape (ins, outs) maps an `ins`-dimensional input to an
`outs`-dimensional output; `get(in_, out)` is the scalar applied to input
`in_` when forming output `out`, i.e. the entry in column `in_` and row
`out`. Entries live in a NumPy array indexed [out, in], so the flat offset
of (in_, out) in a dense matrix is out * ins + in_.

Two families of objects implement `Matrix`:

- owners (`ArrayMatrix`), which allocate their own buffer. `identity`,
  `copy`, `compose`, `apply_to_matrix` and `apply_to_vector` always return
  fresh owners.
- views (`SliceMatrix`, `DualMatrix`, and the vector projections
  `ColumnVector` / `RowVector`), which hold a reference to a parent and a
  NumPy view of its buffer. Reads and writes through a view go to the
  parent, so the parent must not be replaced while the view is in use.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from .exceptions import OutOfBoundsError, ShapeMismatchError
from .utils import check_composable, check_dimension, check_same_shape, check_square
from .vector import ArrayVector, Vector


class Matrix(ABC):
    """Linear map with `ins` inputs (columns) and `outs` outputs (rows)."""

    @property
    @abstractmethod
    def array(self) -> np.ndarray:
        """Entries indexed [out, in], possibly aliasing a parent's buffer."""

    @property
    def ins(self) -> int:
        return self.array.shape[1]

    @property
    def outs(self) -> int:
        return self.array.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(ins, outs) -- note this is the reverse of `array.shape`."""
        return self.ins, self.outs

    def get(self, in_: int, out: int) -> float:
        self._check_index(in_, out)
        return float(self.array[out, in_])

    def set(self, in_: int, out: int, value: float) -> None:
        self._check_index(in_, out)
        self.array[out, in_] = value

    def _check_index(self, in_: int, out: int) -> None:
        if not 0 <= in_ < self.ins:
            raise OutOfBoundsError(
                f"input index {in_} out of range for {self.ins} ins",
                index=in_,
                extent=self.ins,
            )
        if not 0 <= out < self.outs:
            raise OutOfBoundsError(
                f"output index {out} out of range for {self.outs} outs",
                index=out,
                extent=self.outs,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ins={self.ins}, outs={self.outs}, rows={self.array.tolist()})"


class ArrayMatrix(Matrix):
    """Dense matrix owning a zero-initialised float64 buffer."""

    def __init__(self, ins: int, outs: int):
        self._array = np.zeros((outs, ins), dtype=float)

    @classmethod
    def from_array(cls, rows) -> "ArrayMatrix":
        """
        Copy a 2-D array-like into a new dense matrix.

        `rows[out][in_]` becomes `get(in_, out)`, i.e. the array is read the
        usual NumPy way, one row per output.
        """
        rows = np.asarray(rows, dtype=float)
        if rows.ndim != 2:
            raise ValueError(f"expected a 2-D array, got shape {rows.shape}")
        outs, ins = rows.shape
        A = cls(ins, outs)
        A._array[...] = rows
        return A

    @property
    def array(self) -> np.ndarray:
        return self._array


class SliceMatrix(Matrix):
    """
    Rectangle [in_lo, in_hi) x [out_lo, out_hi) of a parent matrix.

    (in_, out) on the slice is (in_ + in_lo, out + out_lo) on the parent.
    Indices are checked against the sliced shape, not the parent's.
    """

    def __init__(self, parent: Matrix, in_lo: int, in_hi: int, out_lo: int, out_hi: int):
        for lo, hi, extent, axis in (
            (in_lo, in_hi, parent.ins, "ins"),
            (out_lo, out_hi, parent.outs, "outs"),
        ):
            if not 0 <= lo <= hi <= extent:
                raise OutOfBoundsError(
                    f"slice [{lo}, {hi}) out of range for {extent} {axis}",
                    index=hi if lo <= hi else lo,
                    extent=extent,
                )
        self.parent = parent
        self.in_lo = in_lo
        self.out_lo = out_lo
        self._array = parent.array[out_lo:out_hi, in_lo:in_hi]

    @property
    def array(self) -> np.ndarray:
        return self._array


class DualMatrix(Matrix):
    """Transpose view: (in_, out) here is (out, in_) on the parent."""

    def __init__(self, parent: Matrix):
        self.parent = parent
        self._array = parent.array.T

    @property
    def array(self) -> np.ndarray:
        return self._array


class ColumnVector(Vector):
    """A single-column matrix (ins == 1) read as a vector of length outs."""

    def __init__(self, parent: Matrix):
        if parent.ins != 1:
            raise ShapeMismatchError(
                f"vector_from_column needs exactly 1 in, got {parent.ins}",
                left=parent.shape,
            )
        self.parent = parent
        self._array = parent.array[:, 0]

    @property
    def array(self) -> np.ndarray:
        return self._array


class RowVector(Vector):
    """A single-row matrix (outs == 1) read as a vector of length ins."""

    def __init__(self, parent: Matrix):
        if parent.outs != 1:
            raise ShapeMismatchError(
                f"vector_from_row needs exactly 1 out, got {parent.outs}",
                left=parent.shape,
            )
        self.parent = parent
        self._array = parent.array[0, :]

    @property
    def array(self) -> np.ndarray:
        return self._array


def new_array_matrix(ins: int, outs: int) -> ArrayMatrix:
    return ArrayMatrix(ins, outs)


def slice_matrix(A: Matrix, in_lo: int, in_hi: int, out_lo: int, out_hi: int) -> SliceMatrix:
    return SliceMatrix(A, in_lo, in_hi, out_lo, out_hi)


def dual(A: Matrix) -> DualMatrix:
    return DualMatrix(A)


def vector_from_column(A: Matrix) -> ColumnVector:
    return ColumnVector(A)


def vector_from_row(A: Matrix) -> RowVector:
    return RowVector(A)


# ---------------------------------------------------------------------
# Elementary operators
# ---------------------------------------------------------------------


def identity_into(A: Matrix) -> None:
    check_square(A, "identity_into")
    A.array[...] = np.eye(A.outs)


def identity(dim: int) -> ArrayMatrix:
    A = ArrayMatrix(dim, dim)
    identity_into(A)
    return A


def copy_into(A: Matrix, B: Matrix) -> None:
    check_same_shape(A, B, "copy_into")
    B.array[...] = A.array


def copy(A: Matrix) -> ArrayMatrix:
    B = ArrayMatrix(A.ins, A.outs)
    copy_into(A, B)
    return B


def compose_into(A: Matrix, B: Matrix, C: Matrix) -> None:
    """
    Write "A then B" (the product B @ A) into C.

    C may be A or B, or a view of either: the product is formed in full
    before C is written.
    """
    check_composable(A, B)
    if C.shape != (A.ins, B.outs):
        raise ShapeMismatchError(
            f"compose_into: output has shape {C.shape}, expected {(A.ins, B.outs)}",
            left=C.shape,
            right=(A.ins, B.outs),
        )
    C.array[...] = B.array @ A.array


def compose(A: Matrix, B: Matrix) -> ArrayMatrix:
    """
    "A then B": the map x -> B(A(x)), whose entries are
    C(i, o) = sum_k A(i, k) * B(k, o).

    Raises
    ------
    ShapeMismatchError : if A.outs != B.ins
    """
    check_composable(A, B)
    C = ArrayMatrix(A.ins, B.outs)
    compose_into(A, B, C)
    return C


def apply_to_matrix(A: Matrix, X: Matrix) -> ArrayMatrix:
    """Apply the map A to every column of X."""
    return compose(X, A)


def apply_to_vector_into(A: Matrix, x: Vector, y: Vector) -> None:
    check_dimension(x, A.ins, "apply_to_vector: input")
    check_dimension(y, A.outs, "apply_to_vector: output")
    y.array[...] = A.array @ x.array


def apply_to_vector(A: Matrix, x: Vector) -> ArrayVector:
    y = ArrayVector(A.outs)
    apply_to_vector_into(A, x, y)
    return y


def is_zero(A: Matrix, tol: float = 0.0) -> bool:
    """
    True when every entry is within tol of 0. The default is exact
    comparison with 0; an empty matrix is zero and NaN never is.
    """
    return bool(np.all(np.abs(A.array) <= tol))
