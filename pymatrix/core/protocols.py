"""
Core protocols for pymatrix.

These define the structural interface every algorithm is written against.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
the owning Matrix, both view variants, and any third-party container with
the same surface are accepted interchangeably.

Design Principles:
    - Minimal contracts: shape plus element access, nothing else
    - Capability-driven: use supports() for optional features (writing)
    - One algorithm implementation serves every operand kind
"""

from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class MatrixLike(Protocol):
    """
    Minimal protocol for anything that looks like a dense matrix.

    Matrix, ConstMatrixView and MatrixView implement it. Algebraic operations,
    equality and the decompositions accept any MatrixLike operand.
    """

    @property
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    def columns(self) -> int:
        """Number of columns."""
        ...

    def __getitem__(self, index: tuple[int, int]) -> Any:
        """Read the element at (row, column)."""
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this object supports a given capability.

        Args:
            capability: One of the constants in pymatrix.core.capabilities

        Returns:
            True if the capability is supported, False otherwise

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...


@runtime_checkable
class MutableMatrixLike(MatrixLike, Protocol):
    """
    MatrixLike that can also be written element by element.

    Givens rotations and Householder reflections are applied in place to
    objects of this kind. A read-only view structurally matches this protocol
    (it defines __setitem__ to raise), so callers that need to write check
    supports(CAPABILITY_WRITE) as well.
    """

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        """Write the element at (row, column)."""
        ...


def as_array(matrix: MatrixLike) -> NDArray[np.inexact[Any]]:
    """
    Materialise any MatrixLike into a 2-D array for vectorised kernels.

    pymatrix types hand back an array built directly from their storage;
    other MatrixLike objects are read element by element. The result must be
    treated as read-only: for an owning Matrix it may share memory with the
    matrix buffer.
    """
    fast_path = getattr(matrix, '_as_array', None)
    if fast_path is not None:
        return fast_path()

    rows, columns = matrix.rows, matrix.columns
    array = np.array(
        [[matrix[i, j] for j in range(columns)] for i in range(rows)]
    ).reshape(rows, columns)
    if not np.issubdtype(array.dtype, np.inexact):
        array = array.astype(np.float64)
    return array
