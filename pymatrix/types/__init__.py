"""
Matrix types.

Matrix owns element data; ConstMatrixView and MatrixView borrow it through
a row Segment, a column Segment and a MatrixState. All three share the
operators defined in pymatrix.types.operations.
"""

from pymatrix.types.segment import FULL, MatrixState, Segment
from pymatrix.types.storage import Matrix
from pymatrix.types.views import ConstMatrixView, MatrixView
from pymatrix.types.operations import off_diagonal_norm
from pymatrix.types.formatting import format_matrix

__all__ = [
    "Matrix",
    "ConstMatrixView",
    "MatrixView",
    "Segment",
    "MatrixState",
    "FULL",
    "off_diagonal_norm",
    "format_matrix",
]
