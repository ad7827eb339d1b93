"""
Householder reflections and QR factorization.

A reflection H = I - 2 v v^H (v a unit column vector) maps a chosen vector
x onto alpha * e1 with |alpha| = ||x||. householder_qr applies one such
reflection per column to zero everything below the diagonal, accumulating
the reflections into Q:

    R = H_k ... H_2 H_1 A        Q = H_1 H_2 ... H_k        A = Q R

Every step goes through the algebraic operations of the matrix types, so
the input may be an owning Matrix, any view, or any other MatrixLike.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np

from pymatrix.core.compute.precision import is_zero_floating
from pymatrix.core.exceptions import ContractViolationError, DimensionError
from pymatrix.core.protocols import MatrixLike, MutableMatrixLike, as_array
from pymatrix.core.validation import check_matrix_like, check_vector, check_writable
from pymatrix.types.operations import store, subtract
from pymatrix.types.storage import Matrix


@dataclass(frozen=True)
class HouseholderReflection:
    """
    Reflection H = I - 2 v v^H.

    Attributes:
        vector: Unit column vector v
        alpha: Value the reflected vector ends up with in its first slot
    """
    vector: Matrix
    alpha: Any

    @property
    def size(self) -> int:
        return self.vector.rows

    def _check_size(self, count: int, axis: str, name: str) -> None:
        if count != self.size:
            raise DimensionError(
                f"{name}: reflection of size {self.size} cannot act on "
                f"{count} {axis}",
                expected=self.size,
                actual=count,
            )

    def apply_left(self, target: MutableMatrixLike) -> None:
        """target <- H @ target, in place."""
        check_writable(target, 'HouseholderReflection.apply_left')
        self._check_size(target.rows, 'rows', 'HouseholderReflection.apply_left')
        v = self.vector
        store(target, subtract(target, (v * 2) @ (v.conjugated() @ target)))

    def apply_right(self, target: MutableMatrixLike) -> None:
        """target <- target @ H, in place."""
        check_writable(target, 'HouseholderReflection.apply_right')
        self._check_size(target.columns, 'columns', 'HouseholderReflection.apply_right')
        v = self.vector
        store(target, subtract(target, (target @ v) @ (v.conjugated() * 2)))

    def matrix(self) -> Matrix:
        """H as an explicit square matrix."""
        v = self.vector
        return Matrix.identity(self.size, dtype=v.dtype) - (v * 2) @ v.conjugated()


def householder_reflection(x: MatrixLike) -> HouseholderReflection:
    """
    Reflection that maps the vector x onto alpha * e1.

    alpha = -phase(x[0]) * ||x||, with phase(0) = 1. Choosing the sign
    opposite to x[0] keeps u = x - alpha * e1 away from cancellation.

    Raises:
        DimensionError: If x is not a row or column vector
        ContractViolationError: If x is (approximately) zero
    """
    check_vector(x, 'householder_reflection')
    values = np.array(as_array(x)).ravel()
    if not np.issubdtype(values.dtype, np.inexact):
        values = values.astype(np.float64)

    norm = float(np.linalg.norm(values))
    if is_zero_floating(norm):
        raise ContractViolationError(
            "householder_reflection: cannot build a reflection from a zero vector"
        )

    head = values[0]
    phase = head / abs(head) if abs(head) != 0 else 1.0
    alpha = -phase * norm

    u = values.copy()
    u[0] -= alpha
    u /= np.linalg.norm(u)
    return HouseholderReflection(Matrix._from_array(u.reshape(-1, 1)), alpha)


@dataclass(frozen=True)
class QRResult:
    """
    Result of a Householder QR factorization.

    Attributes:
        Q: Orthonormal (unitary for complex input) factor, m x m
        R: Upper-triangular factor, m x n

    Unpacks as a pair: Q, R = householder_qr(A)
    """
    Q: Matrix
    R: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.Q, self.R))


def householder_qr(matrix: MatrixLike) -> QRResult:
    """
    Full QR factorization by Householder reflections.

    No reflection is built for column k when everything below its diagonal
    entry is already approximately zero; otherwise its reflection is applied
    to the trailing block of R and to the trailing columns of Q. Either way
    the entries below the diagonal of column k are set to exact zero.

    Args:
        matrix: Any matrix-like operand, m x n

    Returns:
        QRResult with Q (m x m) and R (m x n). An empty input gives empty
        factors.
    """
    check_matrix_like(matrix, 'householder_qr')
    R = Matrix.materialize(matrix)
    m, n = R.shape
    if m == 0:
        return QRResult(Q=Matrix(dtype=R.dtype), R=R)

    Q = Matrix.identity(m, dtype=R.dtype)
    for k in range(min(m - 1, n)):
        below = R.get_submatrix((k + 1, m), (k, k + 1))
        if not is_zero_floating(below.euclidean_norm()):
            reflection = householder_reflection(R.get_submatrix((k, m), (k, k + 1)))
            reflection.apply_left(R.get_submatrix((k, m), (k, n)))
            reflection.apply_right(Q.get_submatrix((0, m), (k, m)))
            R[k, k] = reflection.alpha

        for i in range(k + 1, m):
            R[i, k] = 0

    return QRResult(Q=Q, R=R)
