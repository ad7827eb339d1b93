"""
Factorization algorithms built on the matrix types.

Submodules:
    givens: Plane rotations applied to rows or columns in place
    householder: Householder reflections and full QR factorization
    qr_algorithm: Wilkinson shift, Hermitian QR iteration, bidiagonal QR sweep
"""

from pymatrix.algorithms.givens import (
    GivensRotation,
    apply_left_rotation,
    apply_right_rotation,
    givens_left_rotation,
    givens_right_rotation,
    givens_rotation,
)
from pymatrix.algorithms.householder import (
    HouseholderReflection,
    QRResult,
    householder_qr,
    householder_reflection,
)
from pymatrix.algorithms.qr_algorithm import (
    DEFAULT_SCHUR_ITERATIONS,
    DEFAULT_SVD_SWEEPS,
    BidiagonalQRResult,
    bidiagonal_qr,
    get_schur_decomposition,
    wilkinson_shift,
)

__all__ = [
    # Givens
    "GivensRotation",
    "givens_rotation",
    "apply_left_rotation",
    "apply_right_rotation",
    "givens_left_rotation",
    "givens_right_rotation",
    # Householder
    "HouseholderReflection",
    "householder_reflection",
    "QRResult",
    "householder_qr",
    # QR iterations
    "DEFAULT_SCHUR_ITERATIONS",
    "DEFAULT_SVD_SWEEPS",
    "wilkinson_shift",
    "get_schur_decomposition",
    "BidiagonalQRResult",
    "bidiagonal_qr",
]
