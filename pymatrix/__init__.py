"""
pymatrix: dense matrices, borrowing views and iterative factorizations.

An owning Matrix, read-only and read-write views onto it with lazy
transpose/adjoint, Householder QR, Givens rotations, and QR iterations for
Hermitian eigenvalues and 2 x 2 bidiagonal SVD.

Submodules:
    types: Matrix, views, segments and the algebraic operations
    algorithms: Givens, Householder QR, QR iterations
    decomposition: eigh() and svd() solvers with diagnostics
"""

__version__ = "0.1.0"

from pymatrix.types import ConstMatrixView, Matrix, MatrixState, MatrixView, Segment
from pymatrix.algorithms import (
    bidiagonal_qr,
    get_schur_decomposition,
    householder_qr,
    wilkinson_shift,
)
from pymatrix.decomposition import eigh, svd
from pymatrix.core.compute import (
    DOUBLE_PRECISION,
    SINGLE_PRECISION,
    set_tolerance,
    using_tolerance,
)

__all__ = [
    "__version__",
    "Matrix",
    "ConstMatrixView",
    "MatrixView",
    "Segment",
    "MatrixState",
    "householder_qr",
    "wilkinson_shift",
    "get_schur_decomposition",
    "bidiagonal_qr",
    "eigh",
    "svd",
    "DOUBLE_PRECISION",
    "SINGLE_PRECISION",
    "set_tolerance",
    "using_tolerance",
]
