# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
linear
======

Dense linear algebra from the point of view of linear maps between vector
spaces: a matrix of shape (ins, outs) maps `ins` input coefficients to
`outs` output coefficients under an assumed basis.

Public API
~~~~~~~~~~
- Storage and views
    - `ArrayMatrix`, `ArrayVector`, `new_array_matrix`, `new_array_vector`
    - `slice_matrix`, `dual`, `vector_from_column`, `vector_from_row`,
      `slice_vector`, `basis_vector`
- Elementary operators
    - `identity`, `copy`, `compose`, `apply_to_matrix`, `apply_to_vector`,
      `is_zero`, `l2_norm`, `normalize`, `dot_product`
      (plus `*_into` forms writing to a caller-supplied output)
- Decompositions
    - `householder`, `decompose_qr`
- Linear systems
    - `find_input_to_upper_triangular`, `ordinary_least_squares`,
      `project_onto_colspace`

Views alias the storage of the matrix they were made from; everything in
"Elementary operators" and "Decompositions" returns freshly allocated
results.

Example
-------
>>> import linear as la
>>> X = la.ArrayMatrix.from_array([[1, 0], [1, 2], [-2, 1]])
>>> y = la.ArrayVector.from_array([6, 0, -15])
>>> theta = la.ordinary_least_squares(X, y)
>>> [round(theta.get(d), 9) for d in range(theta.dimension)]
[6.0, -3.0]
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

from .exceptions import (
    DimensionMismatchError,
    LinearError,
    NotUpperTriangularError,
    NumericalError,
    OutOfBoundsError,
    ShapeMismatchError,
    SingularMatrixError,
    ZeroVectorError,
)
from .matrix import (
    ArrayMatrix,
    ColumnVector,
    DualMatrix,
    Matrix,
    RowVector,
    SliceMatrix,
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
    vector_from_column,
    vector_from_row,
)
from .projections import project_onto_colspace

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .qr import (
    QRDecomposition,
    decompose_qr,
    decompose_qr_reference,
    householder,
    householder_into,
    ordinary_least_squares,
)
from .triangular import (
    find_input_to_upper_triangular,
    find_input_to_upper_triangular_into,
)
from .utils import EPS
from .vector import (
    ArrayVector,
    BasisVector,
    SliceVector,
    Vector,
    basis_vector,
    dot_product,
    l2_norm,
    new_array_vector,
    normalize,
    normalize_into,
    slice_vector,
)

__all__ = [
    "Matrix",
    "ArrayMatrix",
    "SliceMatrix",
    "DualMatrix",
    "Vector",
    "ArrayVector",
    "BasisVector",
    "SliceVector",
    "ColumnVector",
    "RowVector",
    "new_array_matrix",
    "new_array_vector",
    "slice_matrix",
    "slice_vector",
    "dual",
    "vector_from_column",
    "vector_from_row",
    "basis_vector",
    "identity",
    "identity_into",
    "copy",
    "copy_into",
    "compose",
    "compose_into",
    "apply_to_matrix",
    "apply_to_vector",
    "apply_to_vector_into",
    "is_zero",
    "dot_product",
    "l2_norm",
    "normalize",
    "normalize_into",
    "householder",
    "householder_into",
    "QRDecomposition",
    "decompose_qr",
    "decompose_qr_reference",
    "find_input_to_upper_triangular",
    "find_input_to_upper_triangular_into",
    "ordinary_least_squares",
    "project_onto_colspace",
    "EPS",
    "LinearError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "NotUpperTriangularError",
    "NumericalError",
    "SingularMatrixError",
    "ZeroVectorError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show linear”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except PackageNotFoundError:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
