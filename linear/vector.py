# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Vectors as coefficients of a linear combination over an assumed basis.

Every variant keeps its entries in a one-dimensional NumPy array exposed
through `array`. Dense vectors own that array; views (`SliceVector`, and the
row/column projections in `linear.matrix`) hold a NumPy view of their
parent's buffer, so writing through a view writes the parent.
"""

from abc import ABC, abstractmethod

import numpy as np

from .exceptions import OutOfBoundsError, ZeroVectorError
from .utils import check_dimension


class Vector(ABC):
    """Element of a vector space, indexed 0..dimension-1."""

    @property
    @abstractmethod
    def array(self) -> np.ndarray:
        """The entries, possibly aliasing another object's storage."""

    @property
    def dimension(self) -> int:
        return self.array.shape[0]

    def get(self, d: int) -> float:
        self._check_index(d)
        return float(self.array[d])

    def set(self, d: int, value: float) -> None:
        self._check_index(d)
        self.array[d] = value

    def _check_index(self, d: int) -> None:
        if not 0 <= d < self.dimension:
            raise OutOfBoundsError(
                f"index {d} out of range for dimension {self.dimension}",
                index=d,
                extent=self.dimension,
            )

    def __len__(self) -> int:
        return self.dimension

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.array.tolist()})"


class ArrayVector(Vector):
    """Dense vector owning a zero-initialised float64 buffer."""

    def __init__(self, dimension: int):
        self._array = np.zeros(dimension, dtype=float)

    @classmethod
    def from_array(cls, values) -> "ArrayVector":
        """Copy a one-dimensional array-like into a new dense vector."""
        values = np.asarray(values, dtype=float)
        if values.ndim != 1:
            raise ValueError(f"expected a 1-D array, got shape {values.shape}")
        v = cls(values.shape[0])
        v._array[:] = values
        return v

    @property
    def array(self) -> np.ndarray:
        return self._array


class BasisVector(ArrayVector):
    """Unit vector with a 1 at `index` and 0 elsewhere."""

    def __init__(self, dimension: int, index: int):
        super().__init__(dimension)
        self.index = index
        self.set(index, 1.0)


class SliceVector(Vector):
    """Entries lo..hi-1 of a parent vector, re-indexed from 0."""

    def __init__(self, parent: Vector, lo: int, hi: int):
        if not 0 <= lo <= hi <= parent.dimension:
            raise OutOfBoundsError(
                f"slice [{lo}, {hi}) out of range for dimension {parent.dimension}",
                index=hi if lo <= hi else lo,
                extent=parent.dimension,
            )
        self.parent = parent
        self.lo = lo
        self._array = parent.array[lo:hi]

    @property
    def array(self) -> np.ndarray:
        return self._array


def new_array_vector(dimension: int) -> ArrayVector:
    return ArrayVector(dimension)


def basis_vector(dimension: int, index: int) -> BasisVector:
    return BasisVector(dimension, index)


def slice_vector(v: Vector, lo: int, hi: int) -> SliceVector:
    return SliceVector(v, lo, hi)


def dot_product(u: Vector, v: Vector) -> float:
    check_dimension(v, u.dimension, "dot_product")
    return float(u.array @ v.array)


def l2_norm(v: Vector) -> float:
    """Euclidean length sqrt(sum of squared entries)."""
    return float(np.linalg.norm(v.array))


def normalize_into(v: Vector, u: Vector) -> None:
    """
    Write v scaled to unit length into u (u may be v itself).

    Raises
    ------
    ZeroVectorError : if v has length 0, since there is no direction to keep.
    """
    check_dimension(u, v.dimension, "normalize_into")
    norm = l2_norm(v)
    if norm == 0.0:
        raise ZeroVectorError(f"cannot normalize a zero vector of dimension {v.dimension}")
    u.array[...] = v.array / norm


def normalize(v: Vector) -> ArrayVector:
    u = ArrayVector(v.dimension)
    normalize_into(v, u)
    return u
