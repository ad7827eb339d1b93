"""
Decomposition solvers.

Public API:
    eigh(matrix)  - Eigenvalues of a Hermitian matrix by QR iteration
    svd(matrix)   - Singular values of a 2 x 2 bidiagonal matrix
"""

from pymatrix.decomposition.solution import (
    EigenParams,
    EigenSolution,
    SVDParams,
    SVDSolution,
)
from pymatrix.decomposition.solvers import eigh, svd

__all__ = [
    "eigh",
    "svd",
    "EigenParams",
    "EigenSolution",
    "SVDParams",
    "SVDSolution",
]
