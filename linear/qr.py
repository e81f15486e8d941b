# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import NamedTuple

import numpy as np

from .exceptions import ShapeMismatchError
from .matrix import (
    ArrayMatrix,
    Matrix,
    apply_to_matrix,
    apply_to_vector,
    compose,
    compose_into,
    copy,
    copy_into,
    dual,
    identity,
    is_zero,
    slice_matrix,
    vector_from_column,
)
from .triangular import find_input_to_upper_triangular
from .utils import EPS, check_dimension
from .vector import ArrayVector, Vector, basis_vector, l2_norm, normalize

logger = logging.getLogger(__name__)


class QRDecomposition(NamedTuple):
    """
    A = Q R, i.e. compose(R, Q) reproduces A.

    Attributes:
        Q: (outs, outs) orthogonal, dual(Q) then Q is the identity
        R: (ins, outs) upper triangular
    """

    Q: ArrayMatrix
    R: ArrayMatrix


def householder_into(x: Vector, e: Vector, H: Matrix) -> None:
    """
    Write into H the reflection that takes x to a vector of the same length
    in the direction of e, reflecting over the hyperplane that bisects them.

    H = I - 2 v vᵀ with v = (x + sign(x0) ‖x‖ e) / ‖x + sign(x0) ‖x‖ e‖.
    Shifting by +sign(x0) keeps the first entry of the sum away from
    cancellation, so H x = -sign(x0) ‖x‖ e.

    H may be a slice of a larger matrix; only its own entries are written.

    Raises
    ------
    DimensionMismatchError : if x and e differ in dimension.
    ShapeMismatchError : if H is not dim-by-dim.
    ZeroVectorError : if x is the zero vector.
    """
    dim = x.dimension
    check_dimension(e, dim, "householder: e")
    if H.shape != (dim, dim):
        raise ShapeMismatchError(
            f"householder_into: output has shape {H.shape}, expected {(dim, dim)}",
            left=H.shape,
            right=(dim, dim),
        )

    xmag = l2_norm(x)
    x0sign = 1.0 if x.get(0) >= 0.0 else -1.0

    u = ArrayVector(dim)
    u.array[...] = x.array + x0sign * xmag * e.array
    v = normalize(u)

    # H(i, o) = [i == o] - 2 v(o) v(i); symmetric, so the layout is moot
    H.array[...] = np.eye(dim) - 2.0 * np.outer(v.array, v.array)


def householder(x: Vector, e: Vector) -> ArrayMatrix:
    H = ArrayMatrix(x.dimension, x.dimension)
    householder_into(x, e, H)
    return H


def decompose_qr(A: Matrix) -> QRDecomposition:
    """
    Compute the QR decomposition of A, shape (ins, outs) with outs >= ins,
    using Householder reflections.

    Column i is reduced by a reflection that only touches rows and columns
    i.. of R, so each step works on aliasing views of the trailing block
    rather than on an embedded outs-by-outs reflection:

        R[i:, i:] <- H R[i:, i:]
        Q[:, i:]  <- Q[:, i:] Hᵀ

    Columns are processed left to right; column i is skipped when its
    entries below the diagonal are already zero (within EPS), and those
    entries are then set to exactly 0.

    A itself is not modified.

    Returns
    -------
    QRDecomposition(Q, R) with Q (outs, outs) and R (ins, outs).
    """
    ins, outs = A.shape
    if outs < ins:
        raise ShapeMismatchError(
            f"QR decomposition needs outs >= ins, got {outs} outs and {ins} ins",
            left=A.shape,
        )
    Q = identity(outs)
    R = copy(A)

    for i in range(ins):
        below = slice_matrix(R, i, i + 1, i + 1, outs)
        if is_zero(below, tol=EPS):
            logger.debug(f"column {i} already reduced, skipping")
            # later reflections only touch columns i+1.., so this must be exact
            below.array[...] = 0.0
            continue

        # ---- reflector for column i, sized to the trailing block --------------
        x = vector_from_column(slice_matrix(R, i, i + 1, i, outs))
        H = householder(x, basis_vector(outs - i, 0))

        # ---- apply H to R from the left ---------------------------------------
        R_trailing = slice_matrix(R, i, ins, i, outs)
        compose_into(R_trailing, H, R_trailing)
        # the reflection zeroes these exactly; drop the rounding noise
        below.array[...] = 0.0

        # ---- accumulate Q = Q Hᵀ -----------------------------------------------
        Q_trailing = slice_matrix(Q, i, outs, 0, outs)
        compose_into(dual(H), Q_trailing, Q_trailing)

        logger.debug(f"column {i}: pivot now {R.get(i, i)!r}")

    return QRDecomposition(Q, R)


def decompose_qr_reference(A: Matrix) -> QRDecomposition:
    """
    QR decomposition with a full outs-by-outs reflection per column, applied
    to whole matrices and allocating new ones at every step.

    Same contract as `decompose_qr`, which should be preferred; this form
    follows the textbook derivation directly and is kept to check it.
    """
    ins, outs = A.shape
    if outs < ins:
        raise ShapeMismatchError(
            f"QR decomposition needs outs >= ins, got {outs} outs and {ins} ins",
            left=A.shape,
        )
    Q = identity(outs)
    R = copy(A)

    for i in range(ins):
        below = slice_matrix(R, i, i + 1, i + 1, outs)
        if is_zero(below, tol=EPS):
            below.array[...] = 0.0
            continue

        x = vector_from_column(slice_matrix(R, i, i + 1, i, outs))
        H = householder(x, basis_vector(outs - i, 0))

        # Extend to the identity outside the trailing block.
        HE = identity(outs)
        copy_into(H, slice_matrix(HE, i, outs, i, outs))

        R = apply_to_matrix(HE, R)
        Q = compose(dual(HE), Q)

    return QRDecomposition(Q, R)


def ordinary_least_squares(X: Matrix, y: Vector) -> ArrayVector:
    """
    Find the parameters theta minimising ‖X theta - y‖₂.

    X has shape (p, n): p parameters (ins) and n observations (outs), n >= p.
    Substituting X = Q R into the normal equation Xᵀ X theta = Xᵀ y and
    cancelling Qᵀ Q = I and Rᵀ leaves

        R theta = Qᵀ y

    which back substitution solves without forming Xᵀ X.

    Raises
    ------
    DimensionMismatchError : if y does not have one entry per observation.
    SingularMatrixError : if X does not have full column rank.
    """
    check_dimension(y, X.outs, "ordinary_least_squares: y")
    logger.debug(f"least squares: {X.ins} parameters, {X.outs} observations")

    Q, R = decompose_qr(X)
    b = apply_to_vector(dual(Q), y)
    return find_input_to_upper_triangular(R, b)
