#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Projection operations
"""

from .matrix import Matrix, apply_to_vector
from .qr import ordinary_least_squares
from .vector import ArrayVector, Vector


def project_onto_colspace(X: Matrix, y: Vector) -> ArrayVector:
    """
    Find p = X theta, the orthogonal projection of y onto the
    column-space of X, where theta is the least-squares fit.

    Returns
    -------
    p : ArrayVector, dimension X.outs

    Raises
    ------
    SingularMatrixError : if the columns of X are not independent.
    """
    theta = ordinary_least_squares(X, y)
    return apply_to_vector(X, theta)
