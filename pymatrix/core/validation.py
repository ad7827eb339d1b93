"""
Contract checks for pymatrix.

These validators follow the "fail fast, fail loud" principle. Every
precondition of the matrix types and the algorithms is checked here and a
ContractViolationError subclass is raised immediately at the violating
call. Nothing is silently corrected.

Design principles:
    - Each function validates ONE thing
    - Clear, actionable error messages with actual values
    - Operand names included in all error messages
    - Shape predicates (is_hermitian, is_bidiagonal) compare under the
      active tolerance tier, never bitwise
"""

from typing import Any, Sequence

import numpy as np

from pymatrix.core.capabilities import CAPABILITY_WRITE
from pymatrix.core.compute.precision import isclose_array, zero_mask
from pymatrix.core.exceptions import (
    ContractViolationError,
    DimensionError,
    ElementTypeError,
    IndexOutOfRangeError,
    NotBidiagonalError,
    NotHermitianError,
    ReadOnlyViewError,
)
from pymatrix.core.protocols import MatrixLike, as_array


def _shape(matrix: MatrixLike) -> tuple[int, int]:
    return (matrix.rows, matrix.columns)


def check_element_dtype(dtype: Any, name: str) -> np.dtype:
    """
    Verify a dtype is floating point or complex floating point.

    Integer dtypes are promoted to float64; everything else that is not
    inexact (bool, object, strings, datetimes) is rejected.

    Args:
        dtype: dtype-like to validate
        name: Operand name for error messages

    Returns:
        The accepted numpy dtype

    Raises:
        ElementTypeError: If the dtype cannot hold matrix elements
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ElementTypeError(f"{name}: not a dtype: {dtype!r}") from e

    if np.issubdtype(resolved, np.inexact):
        return resolved
    if np.issubdtype(resolved, np.integer):
        return np.dtype(np.float64)
    raise ElementTypeError(
        f"{name}: element dtype {resolved} is neither floating point nor complex"
    )


def check_matrix_like(obj: Any, name: str) -> None:
    """
    Verify an object implements the MatrixLike protocol.

    Raises:
        ContractViolationError: If obj lacks rows/columns/element access
    """
    if not isinstance(obj, MatrixLike):
        raise ContractViolationError(
            f"{name}: expected a matrix-like operand, got {type(obj).__name__}"
        )


def check_positive_size(value: int, name: str) -> None:
    """
    Verify a matrix dimension is a positive integer.

    Raises:
        DimensionError: If value is not an integer greater than zero
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise DimensionError(f"{name}: must be a positive integer, got {value!r}")


def check_rectangular(rows: Sequence[Sequence[Any]], name: str) -> None:
    """
    Verify a nested-list literal is non-empty and rectangular.

    Raises:
        DimensionError: If there are no rows, no columns, or ragged rows
    """
    if len(rows) == 0:
        raise DimensionError(f"{name}: number of matrix rows must be greater than zero")

    columns = len(rows[0])
    if columns == 0:
        raise DimensionError(f"{name}: number of matrix columns must be greater than zero")

    for i, row in enumerate(rows):
        if len(row) != columns:
            raise DimensionError(
                f"{name}: row {i} has {len(row)} elements, expected {columns}"
            )


def check_same_shape(lhs: MatrixLike, rhs: MatrixLike, operation: str) -> None:
    """
    Verify two operands have identical shapes.

    Raises:
        DimensionError: If the shapes differ
    """
    if _shape(lhs) != _shape(rhs):
        raise DimensionError(
            f"{operation}: shapes must match, got {_shape(lhs)} and {_shape(rhs)}",
            expected=_shape(lhs),
            actual=_shape(rhs),
        )


def check_product_shape(lhs: MatrixLike, rhs: MatrixLike) -> None:
    """
    Verify lhs.columns == rhs.rows for a matrix product.

    Raises:
        DimensionError: If the inner dimensions differ
    """
    if lhs.columns != rhs.rows:
        raise DimensionError(
            f"matrix product: inner dimensions differ, "
            f"lhs is {_shape(lhs)} and rhs is {_shape(rhs)}",
            actual=_shape(rhs),
        )


def check_index(matrix: MatrixLike, row: int, column: int, name: str) -> None:
    """
    Verify (row, column) addresses an element of matrix.

    Raises:
        IndexOutOfRangeError: If either index is outside the matrix
    """
    if not (0 <= row < matrix.rows and 0 <= column < matrix.columns):
        raise IndexOutOfRangeError(
            f"{name}: index ({row}, {column}) is outside the matrix "
            f"boundaries {_shape(matrix)}",
            index=(row, column),
            shape=_shape(matrix),
        )


def check_axis_index(matrix: MatrixLike, index: int, axis: str, name: str) -> None:
    """
    Verify index selects an existing row (axis='row') or column.

    Raises:
        IndexOutOfRangeError: If index is negative or not below the axis size
    """
    count = matrix.rows if axis == 'row' else matrix.columns
    if not 0 <= index < count:
        raise IndexOutOfRangeError(
            f"{name}: {axis} index {index} must be less than the number of "
            f"{axis}s ({count})",
            index=index,
            shape=_shape(matrix),
        )


def check_shape(matrix: MatrixLike, shape: tuple[int, int], name: str) -> None:
    """
    Verify matrix has exactly the given shape.

    Raises:
        DimensionError: If the shape differs
    """
    if _shape(matrix) != shape:
        raise DimensionError(
            f"{name}: expected shape {shape}, got {_shape(matrix)}",
            expected=shape,
            actual=_shape(matrix),
        )


def check_square(matrix: MatrixLike, name: str) -> None:
    """
    Verify matrix is square and non-empty.

    Raises:
        DimensionError: If rows != columns or the matrix is empty
    """
    if matrix.rows != matrix.columns or matrix.rows == 0:
        raise DimensionError(
            f"{name}: expected a non-empty square matrix, got {_shape(matrix)}",
            actual=_shape(matrix),
        )


def is_vector(matrix: MatrixLike) -> bool:
    """True for a single row or a single column."""
    return matrix.rows == 1 or matrix.columns == 1


def check_vector(matrix: MatrixLike, name: str) -> None:
    """
    Verify matrix is a row or column vector.

    Raises:
        DimensionError: If neither dimension is 1
    """
    if not is_vector(matrix):
        raise DimensionError(
            f"{name}: operation is defined only for vectors, got {_shape(matrix)}",
            actual=_shape(matrix),
        )


def check_writable(matrix: MatrixLike, name: str) -> None:
    """
    Verify elements of matrix can be written.

    Raises:
        ReadOnlyViewError: If matrix does not support writing
    """
    if not matrix.supports(CAPABILITY_WRITE):
        raise ReadOnlyViewError(f"{name}: {type(matrix).__name__} is read-only")


def is_hermitian(matrix: MatrixLike) -> bool:
    """
    Check A == A^H elementwise under the active tolerance.

    Non-square matrices are never Hermitian.
    """
    if matrix.rows != matrix.columns:
        return False
    array = as_array(matrix)
    return bool(np.all(isclose_array(array, array.conj().T)))


def is_bidiagonal(matrix: MatrixLike) -> bool:
    """
    Check that nonzero entries lie on the main diagonal and one adjacent one.

    Both upper (main + first superdiagonal) and lower (main + first
    subdiagonal) bidiagonal matrices qualify.
    """
    array = as_array(matrix)
    zero = zero_mask(array)
    rows, columns = np.indices(array.shape)
    upper_band = (columns == rows) | (columns == rows + 1)
    lower_band = (columns == rows) | (columns == rows - 1)
    return bool(np.all(zero | upper_band) or np.all(zero | lower_band))


def check_hermitian(matrix: MatrixLike, name: str) -> None:
    """
    Verify matrix is Hermitian.

    Raises:
        NotHermitianError: If matrix differs from its adjoint
    """
    if not is_hermitian(matrix):
        raise NotHermitianError(
            f"{name}: matrix of shape {_shape(matrix)} is not Hermitian",
            matrix_name=name,
        )


def check_bidiagonal(matrix: MatrixLike, name: str) -> None:
    """
    Verify matrix is bidiagonal.

    Raises:
        NotBidiagonalError: If entries outside both bidiagonal bands are nonzero
    """
    if not is_bidiagonal(matrix):
        raise NotBidiagonalError(
            f"{name}: matrix of shape {_shape(matrix)} is not bidiagonal",
            matrix_name=name,
        )
