"""
Algebraic operations over any matrix-like operand.

The kernels here take MatrixLike operands (owning Matrix, either view
variant, or a foreign object implementing the protocol), check the shape
contract, and return a freshly computed 2-D array. They never mutate their
inputs and never build lazy expressions: the caller wraps the array into a
new owned Matrix or writes it back in place.

MatrixArithmetic turns the kernels into Python operators once, so Matrix,
ConstMatrixView and MatrixView share a single implementation of + - * / @
and ==.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import isclose_array, zero_mask
from pymatrix.core.exceptions import DimensionError
from pymatrix.core.protocols import MatrixLike, MutableMatrixLike, as_array
from pymatrix.core.validation import (
    check_product_shape,
    check_same_shape,
    check_vector,
)


def is_scalar(value: Any) -> bool:
    """True for Python and NumPy numbers (real or complex)."""
    return isinstance(value, numbers.Number)


def add(lhs: MatrixLike, rhs: MatrixLike) -> NDArray[np.inexact[Any]]:
    """Elementwise sum; shapes must match."""
    check_same_shape(lhs, rhs, 'addition')
    return as_array(lhs) + as_array(rhs)


def subtract(lhs: MatrixLike, rhs: MatrixLike) -> NDArray[np.inexact[Any]]:
    """Elementwise difference; shapes must match."""
    check_same_shape(lhs, rhs, 'subtraction')
    return as_array(lhs) - as_array(rhs)


def multiply(lhs: MatrixLike, rhs: MatrixLike) -> NDArray[np.inexact[Any]]:
    """
    Matrix product lhs @ rhs.

    Requires lhs.columns == rhs.rows; the result is lhs.rows x rhs.columns,
    or the empty matrix if either of those is zero. Accumulation along the
    shared dimension is plain (non-compensated) summation.
    """
    check_product_shape(lhs, rhs)
    left, right = as_array(lhs), as_array(rhs)
    if lhs.rows == 0 or rhs.columns == 0:
        return np.zeros((0, 0), dtype=np.result_type(left, right))
    return left @ right


def scale(matrix: MatrixLike, scalar: Any) -> NDArray[np.inexact[Any]]:
    return as_array(matrix) * scalar


def divide(matrix: MatrixLike, scalar: Any) -> NDArray[np.inexact[Any]]:
    return as_array(matrix) / scalar


def are_equal(lhs: MatrixLike, rhs: MatrixLike) -> bool:
    """
    Tolerance-based equality.

    Shapes are compared first; then every element pair must be
    approximately equal under the active tolerance tier.
    """
    if (lhs.rows, lhs.columns) != (rhs.rows, rhs.columns):
        return False
    return bool(np.all(isclose_array(as_array(lhs), as_array(rhs))))


def round_zeroes(array: NDArray[np.inexact[Any]]) -> NDArray[np.inexact[Any]]:
    """Copy of array with approximately-zero entries replaced by exact zero."""
    return np.where(zero_mask(array), 0, array)


def euclidean_norm(matrix: MatrixLike) -> float:
    """Euclidean norm of a row or column vector."""
    check_vector(matrix, 'euclidean_norm')
    array = as_array(matrix)
    return float(np.sqrt(np.sum(np.abs(array) ** 2)))


def diagonal_of(matrix: MatrixLike, to_row: bool = False) -> NDArray[np.inexact[Any]]:
    """Main diagonal as a column (or row, if to_row) array."""
    diag = np.diagonal(as_array(matrix)).copy()
    return diag.reshape(1, -1) if to_row else diag.reshape(-1, 1)


def store(target: MutableMatrixLike, array: NDArray[np.inexact[Any]]) -> None:
    """
    Write a 2-D array of target's shape into target, in place.

    pymatrix types take the whole block through their buffer; other
    MutableMatrixLike objects are written element by element.
    """
    if array.shape != (target.rows, target.columns):
        raise DimensionError(
            f"store: cannot write a {array.shape} array into a "
            f"{(target.rows, target.columns)} matrix",
            expected=(target.rows, target.columns),
            actual=array.shape,
        )
    fast_path = getattr(target, '_store_array', None)
    if fast_path is not None:
        fast_path(array)
        return
    for i, j in np.ndindex(*array.shape):
        target[i, j] = array[i, j]


def off_diagonal_norm(matrix: MatrixLike) -> float:
    """Frobenius norm of everything off the main diagonal."""
    array = as_array(matrix)
    off = ~np.eye(*array.shape, dtype=bool)
    return float(np.sqrt(np.sum(np.abs(array[off]) ** 2)))


class MatrixArithmetic:
    """
    Operators shared by the owning matrix and both view variants.

    Subclasses provide:
        _materialize(array): wrap a computed array into a new owned Matrix
        _store_array(array): write an array back in place (or refuse to)
    """

    # NumPy scalars on the left defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def _materialize(self, array: NDArray[np.inexact[Any]]):
        raise NotImplementedError

    def _store_array(self, array: NDArray[np.inexact[Any]]) -> None:
        raise NotImplementedError

    # === Binary operators (always return a new owned Matrix) ===

    def __add__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(add(self, other))

    def __radd__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(add(other, self))

    def __sub__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(subtract(self, other))

    def __rsub__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(subtract(other, self))

    def __matmul__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(multiply(self, other))

    def __rmatmul__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return self._materialize(multiply(other, self))

    def __mul__(self, scalar):
        if not is_scalar(scalar):
            return NotImplemented
        return self._materialize(scale(self, scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not is_scalar(scalar):
            return NotImplemented
        return self._materialize(divide(self, scalar))

    def __neg__(self):
        return self._materialize(scale(self, -1))

    # === In-place operators (write through to storage) ===

    def __iadd__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        self._store_array(add(self, other))
        return self

    def __isub__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        self._store_array(subtract(self, other))
        return self

    def __imatmul__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        self._store_array(multiply(self, other))
        return self

    def __imul__(self, scalar):
        if not is_scalar(scalar):
            return NotImplemented
        self._store_array(scale(self, scalar))
        return self

    def __itruediv__(self, scalar):
        if not is_scalar(scalar):
            return NotImplemented
        self._store_array(divide(self, scalar))
        return self

    # === Comparison ===

    def __eq__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return are_equal(self, other)

    def __ne__(self, other):
        if not isinstance(other, MatrixLike):
            return NotImplemented
        return not are_equal(self, other)

    __hash__ = None
