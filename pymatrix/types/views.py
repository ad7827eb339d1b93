"""
Non-owning windows onto a Matrix.

A view borrows one Matrix and describes a rectangular block of it through a
row Segment, a column Segment and a MatrixState. Both segments are expressed
in the view's own orientation, so narrowing a transposed view composes the
same way as narrowing a plain one:

    view (i, j) -> storage (row.begin + i, column.begin + j)     plain
    view (i, j) -> storage (column.begin + j, row.begin + i)     transposed

transposed() and conjugated() are O(1) relabelings; no data moves until an
operation materialises a result into a new owned Matrix.

Views hold a strong reference to their Matrix, so the storage cannot be
destroyed under them. Reshaping the storage bumps its generation, after which
every access through an older view raises StaleViewError.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.capabilities import (
    CAPABILITY_LAZY_TRANSFORM,
    CAPABILITY_READ,
    CAPABILITY_WRITE,
)
from pymatrix.core.exceptions import (
    ContractViolationError,
    DimensionError,
    ReadOnlyViewError,
    StaleViewError,
)
from pymatrix.core.validation import check_axis_index, check_index
from pymatrix.types import operations
from pymatrix.types.formatting import format_matrix
from pymatrix.types.operations import MatrixArithmetic
from pymatrix.types.segment import FULL, MatrixState, Segment, as_segment
from pymatrix.types.storage import Matrix


class ConstMatrixView(MatrixArithmetic):
    """
    Read-only view of a Matrix.

    Construction:
        ConstMatrixView(matrix)                          # whole matrix
        ConstMatrixView(matrix, Segment(0, 2))           # first two rows
        ConstMatrixView(matrix, (0, 2), (1, 3))          # block
        ConstMatrixView(matrix, state=MatrixState(transposed=True))

    Segments are normalised against the storage axis they address, so
    out-of-range or default segments select the whole axis.
    """

    def __init__(
        self,
        matrix: Matrix,
        row: Segment | tuple[int, int] | None = FULL,
        column: Segment | tuple[int, int] | None = FULL,
        state: MatrixState = MatrixState(),
    ):
        if not isinstance(matrix, Matrix):
            raise ContractViolationError(
                f"{type(self).__name__}: views borrow a Matrix, got {type(matrix).__name__}"
            )
        self._matrix = matrix
        self._generation = matrix.generation
        self._state = state

        if state.transposed:
            row_max, column_max = matrix.columns, matrix.rows
        else:
            row_max, column_max = matrix.rows, matrix.columns
        self._row = as_segment(row).normalized(row_max)
        self._column = as_segment(column).normalized(column_max)

    # === Shape and metadata ===

    @property
    def rows(self) -> int:
        return len(self._row)

    @property
    def columns(self) -> int:
        return len(self._column)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def state(self) -> MatrixState:
        return self._state

    @property
    def row_segment(self) -> Segment:
        return self._row

    @property
    def column_segment(self) -> Segment:
        return self._column

    @property
    def storage(self) -> Matrix:
        """The borrowed Matrix."""
        return self._matrix

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_READ, CAPABILITY_LAZY_TRANSFORM)

    def _check_alive(self) -> None:
        if self._generation != self._matrix.generation:
            raise StaleViewError(
                f"{type(self).__name__}: storage was reshaped after the view was "
                f"created (view generation {self._generation}, storage "
                f"generation {self._matrix.generation})",
                view_generation=self._generation,
                storage_generation=self._matrix.generation,
            )

    def _conjugates(self) -> bool:
        return self._state.conjugated and self._matrix.is_complex

    def _storage_index(self, row: int, column: int) -> tuple[int, int]:
        if self._state.transposed:
            return (self._column.begin + column, self._row.begin + row)
        return (self._row.begin + row, self._column.begin + column)

    # === Element access ===

    def __getitem__(self, index: tuple[int, int]) -> Any:
        row, column = index
        self._check_alive()
        check_index(self, row, column, type(self).__name__)
        value = self._matrix[self._storage_index(row, column)]
        return np.conj(value) if self._conjugates() else value

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        raise ReadOnlyViewError(f"{type(self).__name__} is read-only")

    # === Buffer plumbing ===

    def _storage_block(self, base: NDArray[Any]) -> NDArray[Any]:
        if self._state.transposed:
            return base[self._column.begin:self._column.end, self._row.begin:self._row.end]
        return base[self._row.begin:self._row.end, self._column.begin:self._column.end]

    def _as_array(self) -> NDArray[Any]:
        self._check_alive()
        block = self._storage_block(self._matrix._as_array())
        if self._state.transposed:
            block = block.T
        if self._conjugates():
            block = block.conj()
        return block

    def _materialize(self, array: NDArray[Any]) -> Matrix:
        return Matrix._from_array(array)

    def _store_array(self, array: NDArray[Any]) -> None:
        raise ReadOnlyViewError(f"{type(self).__name__} is read-only")

    def _derive(self, row: Segment, column: Segment, state: MatrixState):
        return type(self)(self._matrix, row, column, state)

    # === Narrowing ===

    def get_row(self, index: int):
        """View of row index, keeping the current transform."""
        self._check_alive()
        check_axis_index(self, index, 'row', 'get_row')
        row = Segment(self._row.begin + index, self._row.begin + index + 1)
        return self._derive(row, self._column, self._state)

    def get_column(self, index: int):
        """View of column index, keeping the current transform."""
        self._check_alive()
        check_axis_index(self, index, 'column', 'get_column')
        column = Segment(self._column.begin + index, self._column.begin + index + 1)
        return self._derive(self._row, column, self._state)

    def get_submatrix(
        self,
        rows: Segment | tuple[int, int] | None = None,
        columns: Segment | tuple[int, int] | None = None,
    ):
        """
        View of a block, with segments relative to this view.

        Segments follow the permissive normalisation of Segment.normalized:
        a malformed or default segment selects the whole axis.
        """
        self._check_alive()
        row = as_segment(rows).normalized(self.rows).shifted(self._row.begin)
        column = as_segment(columns).normalized(self.columns).shifted(self._column.begin)
        return self._derive(row, column, self._state)

    # === Lazy transforms ===

    def transposed(self):
        """Same elements with rows and columns swapped. No data is moved."""
        self._check_alive()
        state = MatrixState(not self._state.transposed, self._state.conjugated)
        return self._derive(self._column, self._row, state)

    def conjugated(self):
        """
        Adjoint (conjugate transpose) of this view. No data is moved.

        This mirrors Matrix.conjugate(), which also transposes.
        """
        self._check_alive()
        state = MatrixState(not self._state.transposed, not self._state.conjugated)
        return self._derive(self._column, self._row, state)

    # === Materialisation and derived values ===

    def copy(self) -> Matrix:
        """Owned Matrix holding the elements this view shows."""
        return Matrix._from_array(self._as_array())

    def euclidean_norm(self) -> float:
        return operations.euclidean_norm(self)

    def get_diag(self, to_row: bool = False) -> Matrix:
        return Matrix._from_array(operations.diagonal_of(self, to_row))

    # === Representation ===

    def __str__(self) -> str:
        return format_matrix(self, '()')

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rows={self._row.begin}:{self._row.end}, "
            f"columns={self._column.begin}:{self._column.end}, "
            f"transposed={self._state.transposed}, conjugated={self._state.conjugated})"
        )


class MatrixView(ConstMatrixView):
    """
    Read-write view of a Matrix.

    Writes go straight to the borrowed storage. Through a conjugated view
    the conjugate is stored, so reading back returns the written value.
    In-place operators (+=, -=, *=, /=) write their result through the view;
    the result must keep the view's shape.
    """

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_READ, CAPABILITY_WRITE, CAPABILITY_LAZY_TRANSFORM)

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        row, column = index
        self._check_alive()
        check_index(self, row, column, type(self).__name__)
        if self._state.conjugated:
            value = np.conj(value)
        self._matrix[self._storage_index(row, column)] = value

    def _store_array(self, array: NDArray[Any]) -> None:
        self._check_alive()
        if array.shape != self.shape:
            raise DimensionError(
                f"{type(self).__name__}: cannot store a {array.shape} result "
                f"into a view of shape {self.shape}",
                expected=self.shape,
                actual=array.shape,
            )
        self._matrix._promote(np.result_type(self._matrix.dtype, array))
        if self._state.conjugated:
            array = np.conj(array)
        if self._state.transposed:
            array = array.T
        self._storage_block(self._matrix._writable_array())[...] = array

    def fill(self, value: Any) -> None:
        self._store_array(np.full(self.shape, value))

    def const_view(self) -> ConstMatrixView:
        """Read-only view of the same block with the same transform."""
        self._check_alive()
        return ConstMatrixView(self._matrix, self._row, self._column, self._state)
