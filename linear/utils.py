# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .exceptions import (
    DimensionMismatchError,
    NotUpperTriangularError,
    ShapeMismatchError,
)

EPS: float = 1e-9


def check_same_shape(A, B, operation: str) -> None:
    """Raise ShapeMismatchError unless A and B have the same (ins, outs)."""
    if A.shape != B.shape:
        raise ShapeMismatchError(
            f"{operation}: shapes differ, {A.shape} vs {B.shape} (ins, outs)",
            left=A.shape,
            right=B.shape,
        )


def check_composable(A, B) -> None:
    """A then B requires every output of A to be an input of B."""
    if A.outs != B.ins:
        raise ShapeMismatchError(
            f"cannot compose: first map has {A.outs} outs, "
            f"second map has {B.ins} ins",
            left=A.shape,
            right=B.shape,
        )


def check_square(A, operation: str) -> None:
    if A.ins != A.outs:
        raise ShapeMismatchError(
            f"{operation}: expected a square matrix, got {A.shape} (ins, outs)",
            left=A.shape,
        )


def check_dimension(v, expected: int, name: str) -> None:
    """Raise DimensionMismatchError unless vector v has `expected` entries."""
    if v.dimension != expected:
        raise DimensionMismatchError(
            f"{name}: dimension {v.dimension}, expected {expected}",
            dimension=v.dimension,
            expected=expected,
        )


def check_upper_triangular(A, tol: float = EPS) -> None:
    """
    Raise NotUpperTriangularError at the first entry strictly below the
    diagonal (row index > column index) that is not within tol of 0,
    NaN included.
    """
    below = np.tril(~(np.abs(A.array) <= tol), k=-1)
    if below.any():
        out, in_ = (int(k) for k in np.argwhere(below)[0])
        value = float(A.array[out, in_])
        raise NotUpperTriangularError(
            f"entry (in={in_}, out={out}) = {value!r} is below the diagonal",
            in_index=in_,
            out_index=out,
            value=value,
        )


def random_nonsingular_upper(n, low=-1.0, high=1.0, seed=None) -> np.ndarray:
    """
    Build an n-by-n upper-triangular array with random entries above the
    diagonal and a diagonal bounded away from zero, so the system stays
    well conditioned.

    Returns
    -------
    Array with float64 dtype, indexed [out, in]
    """
    rng = np.random.default_rng(seed)
    U = np.triu(rng.uniform(low, high, size=(n, n)))
    # magnitudes in [n, 2n] with random signs dominate every row
    diag = rng.uniform(n, 2 * n, size=n) * rng.choice([-1.0, 1.0], size=n)
    U[np.diag_indices(n)] = diag
    return np.asarray(U)
