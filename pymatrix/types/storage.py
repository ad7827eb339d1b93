"""
Owning dense matrix.

Matrix is the single owner of element data: a one-dimensional row-major
NumPy buffer plus a column count. The row count is derived from the buffer
length, so length == rows * columns holds by construction.

Views borrow a Matrix (see pymatrix.types.views). Each Matrix carries a
generation counter that is bumped whenever its shape or layout changes;
views created before the change detect it and refuse further access.
"""

from __future__ import annotations

from typing import Any, Sequence, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.capabilities import CAPABILITY_OWNING, CAPABILITY_READ, CAPABILITY_WRITE
from pymatrix.core.compute.precision import is_zero_floating
from pymatrix.core.exceptions import ContractViolationError, DimensionError, ElementTypeError
from pymatrix.core.protocols import MatrixLike, as_array
from pymatrix.core.validation import (
    check_element_dtype,
    check_index,
    check_matrix_like,
    check_positive_size,
    check_rectangular,
    check_vector,
)
from pymatrix.types import operations
from pymatrix.types.formatting import format_matrix
from pymatrix.types.operations import MatrixArithmetic, is_scalar
from pymatrix.types.segment import Segment

if TYPE_CHECKING:
    from pymatrix.types.views import ConstMatrixView, MatrixView


def _resolve_dtype(dtype: Any, fill: Any = 0.0) -> np.dtype:
    if dtype is not None:
        return check_element_dtype(dtype, 'dtype')
    if not is_scalar(fill):
        raise ElementTypeError(f"fill: expected a number, got {type(fill).__name__}")
    return check_element_dtype(np.result_type(np.float64, fill), 'fill')


class Matrix(MatrixArithmetic):
    """
    Dense matrix owning a row-major element buffer.

    Construction:
        Matrix()                       # empty 0 x 0 matrix
        Matrix(3)                      # 3 x 3 zeros
        Matrix(2, 3, 1.0)              # 2 x 3 filled with 1.0
        Matrix.from_rows([[1, 2], [3, 4]])
        Matrix.diagonal([1, 2, 3])
        Matrix.identity(3)
        Matrix.materialize(view)       # copy of any matrix-like

    Elements are floating point or complex (any NumPy inexact dtype);
    integer input is promoted to float64.
    """

    def __init__(
        self,
        rows: int | None = None,
        columns: int | None = None,
        fill: Any = 0.0,
        *,
        dtype: Any = None,
    ):
        self._generation = 0
        if rows is None:
            if columns is not None:
                raise ContractViolationError(
                    "Matrix: columns given without rows"
                )
            self._buffer = np.zeros(0, dtype=_resolve_dtype(dtype))
            self._columns = 0
            return

        columns = rows if columns is None else columns
        check_positive_size(rows, 'rows')
        check_positive_size(columns, 'columns')
        self._buffer = np.full(rows * columns, fill, dtype=_resolve_dtype(dtype, fill))
        self._columns = int(columns)

    # === Alternative constructors ===

    @classmethod
    def _from_array(cls, array: NDArray[Any]) -> Matrix:
        """Owned copy of a 2-D array; zero-size arrays give the empty matrix."""
        array = np.asarray(array)
        dtype = check_element_dtype(array.dtype, 'array')
        matrix = cls(dtype=dtype)
        if array.size == 0:
            return matrix
        matrix._buffer = np.array(array, dtype=dtype).ravel()
        matrix._columns = array.shape[1]
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], *, dtype: Any = None) -> Matrix:
        """
        Build a matrix from a rectangular nested-list literal.

        Raises:
            DimensionError: If the literal is empty or its rows have
                            different lengths
        """
        check_rectangular(rows, 'rows')
        array = np.array([list(row) for row in rows])
        resolved = check_element_dtype(array.dtype if dtype is None else dtype, 'rows')
        return cls._from_array(array.astype(resolved))

    @classmethod
    def diagonal(cls, values: Sequence[Any] | MatrixLike, *, dtype: Any = None) -> Matrix:
        """
        Square matrix with values on the main diagonal and zeros elsewhere.

        values may be a sequence or a row/column vector.

        Raises:
            DimensionError: If values is empty or a non-vector matrix
        """
        if isinstance(values, MatrixLike):
            check_vector(values, 'diagonal')
            diag = as_array(values).ravel()
        else:
            diag = np.asarray(list(values))
        if diag.size == 0:
            raise DimensionError("diagonal: list of diagonal values must not be empty")

        resolved = check_element_dtype(diag.dtype if dtype is None else dtype, 'diagonal')
        return cls._from_array(np.diag(diag.astype(resolved)))

    @classmethod
    def identity(cls, size: int, value: Any = 1.0, *, dtype: Any = None) -> Matrix:
        """size x size matrix with value on the diagonal (1 by default)."""
        check_positive_size(size, 'size')
        return cls.diagonal([value] * size, dtype=dtype)

    @classmethod
    def materialize(cls, matrix: MatrixLike) -> Matrix:
        """Owned copy of any matrix-like object."""
        check_matrix_like(matrix, 'materialize')
        return cls._from_array(as_array(matrix))

    # === Shape and metadata ===

    @property
    def rows(self) -> int:
        return 0 if self._columns == 0 else self._buffer.size // self._columns

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def is_complex(self) -> bool:
        return np.issubdtype(self._buffer.dtype, np.complexfloating)

    @property
    def generation(self) -> int:
        """Counter bumped every time the shape or layout changes."""
        return self._generation

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_READ, CAPABILITY_WRITE, CAPABILITY_OWNING)

    # === Element access ===

    def __getitem__(self, index: tuple[int, int]) -> Any:
        row, column = index
        check_index(self, row, column, 'Matrix')
        return self._buffer[self._columns * row + column]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        row, column = index
        check_index(self, row, column, 'Matrix')
        self._promote(np.result_type(self._buffer, value))
        self._buffer[self._columns * row + column] = value

    # === Buffer plumbing ===

    def _as_array(self) -> NDArray[Any]:
        array = self._buffer.reshape(self.rows, self.columns)
        array.flags.writeable = False
        return array

    def _writable_array(self) -> NDArray[Any]:
        return self._buffer.reshape(self.rows, self.columns)

    def _promote(self, dtype: np.dtype) -> None:
        # Widening keeps the shape, so outstanding views stay valid
        if dtype != self._buffer.dtype:
            self._buffer = self._buffer.astype(dtype)

    def _materialize(self, array: NDArray[Any]) -> Matrix:
        return Matrix._from_array(array)

    def _store_array(self, array: NDArray[Any]) -> None:
        if array.shape == self.shape:
            self._promote(np.result_type(self._buffer, array))
            self._buffer[:] = array.ravel()
            return
        replacement = Matrix._from_array(array)
        self._buffer = replacement._buffer
        self._columns = replacement._columns
        self._generation += 1

    # === Copies and views ===

    def copy(self) -> Matrix:
        return Matrix._from_array(self._as_array())

    def view(self) -> MatrixView:
        """Read-write view of the whole matrix."""
        from pymatrix.types.views import MatrixView
        return MatrixView(self)

    def const_view(self) -> ConstMatrixView:
        """Read-only view of the whole matrix."""
        from pymatrix.types.views import ConstMatrixView
        return ConstMatrixView(self)

    def get_row(self, index: int) -> MatrixView:
        return self.view().get_row(index)

    def get_column(self, index: int) -> MatrixView:
        return self.view().get_column(index)

    def get_submatrix(
        self,
        rows: Segment | tuple[int, int] | None = None,
        columns: Segment | tuple[int, int] | None = None,
    ) -> MatrixView:
        """Read-write view of a rectangular block; see MatrixView.get_submatrix."""
        return self.view().get_submatrix(rows, columns)

    def assign_submatrix(self, sub: MatrixLike, row: int, column: int) -> None:
        """
        Copy sub into this matrix with its top-left corner at (row, column).

        Raises:
            DimensionError: If sub does not fit inside the matrix
        """
        check_matrix_like(sub, 'assign_submatrix')
        if (row < 0 or column < 0 or row + sub.rows > self.rows
                or column + sub.columns > self.columns):
            raise DimensionError(
                f"assign_submatrix: block of shape {(sub.rows, sub.columns)} at "
                f"({row}, {column}) does not fit into {self.shape}",
                expected=self.shape,
                actual=(sub.rows, sub.columns),
            )
        block = as_array(sub)
        self._promote(np.result_type(self._buffer, block))
        self._writable_array()[row:row + sub.rows, column:column + sub.columns] = block

    def fill(self, value: Any) -> None:
        self._promote(np.result_type(self._buffer, value))
        self._buffer[:] = value

    # === In-place transforms ===

    def transpose(self) -> None:
        """
        Transpose in place by following permutation cycles.

        Element k of a rows x columns row-major buffer of length n belongs at
        (rows * k) mod (n - 1); index n - 1 maps to itself. Each cycle is
        walked once from its first unvisited index, using that slot as the
        carry. No second buffer is allocated; a visited flag per element is
        the only bookkeeping.
        """
        buffer = self._buffer
        rows = self.rows
        size = buffer.size
        if size > 1:
            last = size - 1
            visited = np.zeros(size, dtype=bool)
            for i in range(1, last):
                if visited[i]:
                    continue
                current = i
                while True:
                    current = (rows * current) % last
                    buffer[current], buffer[i] = buffer[i], buffer[current]
                    visited[current] = True
                    if current == i:
                        break

        self._columns = rows
        self._generation += 1

    def conjugate(self) -> None:
        """Replace the matrix by its adjoint (transpose, then conjugate)."""
        self.transpose()
        if self.is_complex:
            np.conjugate(self._buffer, out=self._buffer)

    def normalize(self) -> None:
        """
        Scale a vector to unit Euclidean norm.

        A vector with (approximately) zero norm is left unchanged.

        Raises:
            DimensionError: If the matrix is not a row or column vector
        """
        norm = self.euclidean_norm()
        if not is_zero_floating(norm):
            self /= norm

    def round_zeroes(self) -> None:
        """Replace approximately-zero entries by exact zero."""
        if self._buffer.size:
            self._buffer[:] = operations.round_zeroes(self._buffer)

    # === Derived values ===

    def euclidean_norm(self) -> float:
        return operations.euclidean_norm(self)

    def get_diag(self, to_row: bool = False) -> Matrix:
        """Main diagonal as a column vector (row vector if to_row)."""
        return Matrix._from_array(operations.diagonal_of(self, to_row))

    def transposed(self) -> Matrix:
        result = self.copy()
        result.transpose()
        return result

    def conjugated(self) -> Matrix:
        """Adjoint (conjugate transpose) as a new matrix."""
        result = self.copy()
        result.conjugate()
        return result

    def normalized(self) -> Matrix:
        result = self.copy()
        result.normalize()
        return result

    # === Representation ===

    def __str__(self) -> str:
        return format_matrix(self, '[]')

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, columns={self.columns}, dtype={self.dtype})"
