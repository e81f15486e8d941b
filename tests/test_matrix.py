# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from linear.exceptions import (
    DimensionMismatchError,
    OutOfBoundsError,
    ShapeMismatchError,
)
from linear.matrix import (
    ArrayMatrix,
    apply_to_matrix,
    apply_to_vector,
    apply_to_vector_into,
    compose,
    compose_into,
    copy,
    copy_into,
    dual,
    identity,
    identity_into,
    is_zero,
    new_array_matrix,
    slice_matrix,
)
from linear.vector import ArrayVector


def two_by_three():
    # 2 ins, 3 outs; rows are (1, 2), (3, 4), (5, 6)
    return ArrayMatrix.from_array([[1, 2], [3, 4], [5, 6]])


def test_new_matrix_is_zero_filled():
    A = new_array_matrix(2, 3)
    assert A.shape == (2, 3)
    assert A.ins == 2 and A.outs == 3
    for o in range(3):
        for i in range(2):
            assert A.get(i, o) == 0.0

    A.set(1, 2, 34)
    assert A.get(1, 2) == 34.0


def test_storage_layout_is_out_times_ins_plus_in():
    A = two_by_three()
    flat = A.array.ravel()
    for o in range(A.outs):
        for i in range(A.ins):
            assert flat[o * A.ins + i] == A.get(i, o)


@pytest.mark.parametrize("in_,out", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_bounds(in_, out):
    A = two_by_three()
    with pytest.raises(OutOfBoundsError):
        A.get(in_, out)
    with pytest.raises(OutOfBoundsError):
        A.set(in_, out, 1.0)


def test_slice_aliases_parent():
    A = two_by_three()
    S = slice_matrix(A, 1, 2, 1, 3)

    assert S.shape == (1, 2)
    assert S.get(0, 0) == 4
    assert S.get(0, 1) == 6

    A.set(1, 1, 7)
    assert S.get(0, 0) == 7

    S.set(0, 1, 8)
    assert A.get(1, 2) == 8


def test_slice_bounds_are_the_sliced_shape():
    A = two_by_three()
    S = slice_matrix(A, 0, 1, 1, 3)
    # (1, 0) exists on the parent but not on the slice
    with pytest.raises(OutOfBoundsError):
        S.get(1, 0)
    with pytest.raises(OutOfBoundsError):
        S.get(0, 2)


@pytest.mark.parametrize(
    "bounds", [(0, 3, 0, 3), (0, 2, 0, 4), (1, 0, 0, 3), (-1, 1, 0, 3)]
)
def test_slice_outside_parent_raises(bounds):
    with pytest.raises(OutOfBoundsError):
        slice_matrix(two_by_three(), *bounds)


def test_empty_slice_is_allowed():
    S = slice_matrix(two_by_three(), 0, 1, 3, 3)
    assert S.shape == (1, 0)
    assert is_zero(S)


def test_slice_of_slice():
    A = ArrayMatrix.from_array(np.arange(20.0).reshape(4, 5))
    S = slice_matrix(slice_matrix(A, 1, 5, 1, 4), 1, 3, 1, 3)
    assert S.shape == (2, 2)
    assert S.get(0, 0) == A.get(2, 2)
    S.set(1, 1, -1.0)
    assert A.get(3, 3) == -1.0


def test_dual():
    A = two_by_three()
    B = dual(A)

    assert B.shape == (3, 2)
    assert B.get(0, 0) == 1
    assert B.get(0, 1) == 2
    assert B.get(1, 0) == 3
    assert B.get(1, 1) == 4
    assert B.get(2, 0) == 5
    assert B.get(2, 1) == 6

    B.set(2, 1, 60)
    assert A.get(1, 2) == 60


def test_dual_round_trip():
    rng = np.random.default_rng(0)
    A = ArrayMatrix.from_array(rng.normal(size=(7, 4)))
    B = dual(dual(A))
    assert B.shape == A.shape
    np.testing.assert_array_equal(B.array, A.array)


def test_dual_of_slice():
    A = two_by_three()
    D = dual(slice_matrix(A, 0, 2, 1, 3))
    assert D.shape == (2, 2)
    assert D.get(1, 0) == A.get(0, 2)


def test_copy_is_independent():
    A = two_by_three()
    B = copy(A)
    assert B.shape == (2, 3)
    np.testing.assert_array_equal(B.array, A.array)

    B.set(0, 0, 100)
    assert A.get(0, 0) == 1


def test_copy_into():
    A = two_by_three()
    B = new_array_matrix(2, 3)
    copy_into(A, B)
    np.testing.assert_array_equal(B.array, [[1, 2], [3, 4], [5, 6]])

    with pytest.raises(ShapeMismatchError):
        copy_into(A, new_array_matrix(3, 2))


def test_copy_into_a_view():
    A = identity(4)
    copy_into(ArrayMatrix.from_array([[5, 6], [7, 8]]), slice_matrix(A, 2, 4, 2, 4))
    np.testing.assert_array_equal(
        A.array, [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 5, 6], [0, 0, 7, 8]]
    )


@pytest.mark.parametrize("n", [0, 1, 3, 6])
def test_identity(n):
    A = identity(n)
    assert A.shape == (n, n)
    for o in range(n):
        for i in range(n):
            assert A.get(i, o) == (1.0 if i == o else 0.0)


def test_identity_into():
    A = ArrayMatrix.from_array(np.full((3, 3), 9.0))
    identity_into(A)
    np.testing.assert_array_equal(A.array, np.eye(3))

    with pytest.raises(ShapeMismatchError):
        identity_into(new_array_matrix(2, 3))


def compose_example():
    # 2 ins, 3 outs; rows are (2, 0), (2, 0), (0, 3)
    return ArrayMatrix.from_array([[2, 0], [2, 0], [0, 3]])


def test_compose():
    A = compose_example()

    B = compose(A, dual(A))
    assert B.shape == (2, 2)
    np.testing.assert_array_equal(B.array, [[8, 0], [0, 9]])

    C = compose(dual(A), A)
    assert C.shape == (3, 3)
    np.testing.assert_array_equal(C.array, [[4, 4, 0], [4, 4, 0], [0, 0, 9]])


def test_compose_into():
    A = compose_example()

    B = new_array_matrix(2, 2)
    compose_into(A, dual(A), B)
    np.testing.assert_array_equal(B.array, [[8, 0], [0, 9]])

    C = new_array_matrix(3, 3)
    compose_into(dual(A), A, C)
    np.testing.assert_array_equal(C.array, [[4, 4, 0], [4, 4, 0], [0, 0, 9]])

    with pytest.raises(ShapeMismatchError):
        compose_into(A, dual(A), new_array_matrix(3, 3))


def test_compose_into_aliased_output():
    rng = np.random.default_rng(1)
    A = ArrayMatrix.from_array(rng.normal(size=(4, 4)))
    B = ArrayMatrix.from_array(rng.normal(size=(4, 4)))
    expected = B.array @ A.array
    compose_into(A, B, A)
    np.testing.assert_allclose(A.array, expected, rtol=1e-12)


def test_compose_shape_mismatch():
    A = two_by_three()
    with pytest.raises(ShapeMismatchError) as excinfo:
        compose(A, A)
    assert excinfo.value.left == (2, 3)
    assert excinfo.value.right == (2, 3)


def test_compose_entries():
    rng = np.random.default_rng(2)
    A = ArrayMatrix.from_array(rng.normal(size=(5, 3)))
    B = ArrayMatrix.from_array(rng.normal(size=(4, 5)))
    C = compose(A, B)
    assert C.shape == (3, 4)
    # C(i, o) = sum_k A(i, k) B(k, o)
    for o in range(C.outs):
        for i in range(C.ins):
            expected = sum(A.get(i, k) * B.get(k, o) for k in range(A.outs))
            assert C.get(i, o) == pytest.approx(expected, abs=1e-12)


def test_apply_to_matrix():
    A = compose_example()

    B = apply_to_matrix(dual(A), A)
    assert B.shape == (2, 2)
    np.testing.assert_array_equal(B.array, [[8, 0], [0, 9]])

    C = apply_to_matrix(A, dual(A))
    assert C.shape == (3, 3)
    np.testing.assert_array_equal(C.array, [[4, 4, 0], [4, 4, 0], [0, 0, 9]])


def test_apply_to_vector():
    A = ArrayMatrix.from_array([[1, 2], [3, 4]])
    x = ArrayVector.from_array([1, 2])

    b = apply_to_vector(A, x)

    assert b.dimension == 2
    assert b.get(0) == 5
    assert b.get(1) == 11


def test_apply_to_vector_rectangular():
    A = two_by_three()
    b = apply_to_vector(A, ArrayVector.from_array([1, -1]))
    np.testing.assert_array_equal(b.array, [-1, -1, -1])


def test_apply_to_vector_dimension_mismatch():
    A = two_by_three()
    with pytest.raises(DimensionMismatchError) as excinfo:
        apply_to_vector(A, ArrayVector(3))
    assert excinfo.value.dimension == 3
    assert excinfo.value.expected == 2

    with pytest.raises(DimensionMismatchError):
        apply_to_vector_into(A, ArrayVector(2), ArrayVector(2))


def test_is_zero():
    A = new_array_matrix(3, 2)
    assert is_zero(A)

    A.set(2, 1, 1e-300)
    assert not is_zero(A)
    assert is_zero(A, tol=1e-9)

    assert is_zero(slice_matrix(A, 0, 2, 0, 2))


def test_is_zero_nan():
    A = ArrayMatrix.from_array([[np.nan]])
    assert not is_zero(A)
    assert not is_zero(A, tol=1e-9)

    B = new_array_matrix(2, 2)
    B.set(1, 0, np.nan)
    assert not is_zero(B, tol=1.0)
