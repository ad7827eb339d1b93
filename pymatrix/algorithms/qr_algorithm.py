"""
QR iterations for Hermitian and bidiagonal matrices.

Both iterations run a fixed, caller-chosen number of steps and never test
for convergence, so running time is bounded and the result may not be
fully converged. The solver layer (pymatrix.decomposition) adds the
convergence diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np

from pymatrix.algorithms.givens import (
    apply_left_rotation,
    apply_right_rotation,
    givens_rotation,
)
from pymatrix.algorithms.householder import householder_qr
from pymatrix.core.compute.precision import sign
from pymatrix.core.exceptions import ContractViolationError
from pymatrix.core.protocols import MatrixLike
from pymatrix.core.validation import (
    check_bidiagonal,
    check_hermitian,
    check_matrix_like,
    check_shape,
    check_square,
)
from pymatrix.types.storage import Matrix

DEFAULT_SCHUR_ITERATIONS = 50
DEFAULT_SVD_SWEEPS = 30


def _check_count(count: int, name: str) -> None:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 0:
        raise ContractViolationError(
            f"{name}: iteration count must be a non-negative integer, got {count!r}"
        )


def wilkinson_shift(block: MatrixLike) -> float:
    """
    Eigenvalue estimate of a 2 x 2 Hermitian block [[a, b], [conj(b), d]].

    shift = d - sign(delta) * |b|^2 / (|delta| + sqrt(delta^2 + |b|^2))
    with delta = (a - d) / 2 and sign(0) = 1. When delta and b are both
    zero the shift is d.

    Raises:
        DimensionError: If block is not 2 x 2
        NotHermitianError: If block is not Hermitian
    """
    check_matrix_like(block, 'wilkinson_shift')
    check_shape(block, (2, 2), 'wilkinson_shift')
    check_hermitian(block, 'wilkinson_shift')
    return _shift_from_entries(block[0, 0], block[1, 0], block[1, 1])


def _shift_from_entries(a: Any, b: Any, d: Any) -> float:
    # Unchecked: iterates are Hermitian only up to rounding. b is the lower entry.
    a = float(np.real(a))
    d = float(np.real(d))
    b_squared = float(abs(b) ** 2)
    delta = (a - d) / 2

    denominator = abs(delta) + np.sqrt(delta ** 2 + b_squared)
    if denominator == 0:
        return d
    return float(d - (sign(delta) or 1) * b_squared / denominator)


def _trailing_shift(matrix: Matrix) -> float:
    n = matrix.rows
    if n < 2:
        return 0.0
    return _shift_from_entries(matrix[n - 2, n - 2], matrix[n - 1, n - 2], matrix[n - 1, n - 1])


def get_schur_decomposition(
    matrix: MatrixLike,
    iterations: int = DEFAULT_SCHUR_ITERATIONS,
    *,
    use_wilkinson_shift: bool = False,
) -> Matrix:
    """
    Drive a Hermitian matrix toward diagonal form by QR iteration.

    Each iteration factors A - shift*I = QR, replaces A by RQ + shift*I and
    rounds approximately-zero entries to exact zero. The input is copied
    and left unchanged. The loop always runs the full iteration count.

    The iteration is unshifted (shift = 0) unless use_wilkinson_shift is
    set, in which case the shift is recomputed from the trailing 2 x 2
    block before every iteration.

    Args:
        matrix: Hermitian matrix-like operand
        iterations: Number of QR steps (default 50)
        use_wilkinson_shift: Shift each step by the Wilkinson estimate

    Returns:
        Owned Matrix whose diagonal approximates the eigenvalues

    Raises:
        DimensionError: If matrix is not square
        NotHermitianError: If matrix differs from its adjoint
    """
    check_matrix_like(matrix, 'get_schur_decomposition')
    check_square(matrix, 'get_schur_decomposition')
    check_hermitian(matrix, 'get_schur_decomposition')
    _check_count(iterations, 'get_schur_decomposition')

    schur = Matrix.materialize(matrix)
    identity = Matrix.identity(schur.rows, dtype=schur.dtype)
    for _ in range(iterations):
        shift = _trailing_shift(schur) if use_wilkinson_shift else 0.0
        Q, R = householder_qr(schur - identity * shift)
        schur = R @ Q + identity * shift
        schur.round_zeroes()
    return schur


@dataclass(frozen=True)
class BidiagonalQRResult:
    """
    Factors of the bidiagonal QR sweep, with U @ S @ VT == input.

    Unpacks as a triple: U, S, VT = bidiagonal_qr(B)
    """
    U: Matrix
    S: Matrix
    VT: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.U, self.S, self.VT))


def bidiagonal_qr(
    matrix: MatrixLike,
    sweeps: int = DEFAULT_SVD_SWEEPS,
) -> BidiagonalQRResult:
    """
    Implicit-shift QR sweeps (Golub-Kahan steps) on a 2 x 2 bidiagonal matrix.

    Each sweep takes the Wilkinson shift of the Gram block S^H S, seeds a
    right rotation from its shifted first row and applies it to S, then
    applies the left rotation that zeroes the subdiagonal bulge it created.
    The conjugate of every right rotation is accumulated into VT and the
    adjoint of every left rotation into U, which keeps U @ S @ VT equal to
    the input. Approximately-zero entries of S are rounded after each sweep.

    Both upper and lower bidiagonal input are accepted; a lower bidiagonal
    S becomes upper bidiagonal after the first sweep.

    Args:
        matrix: 2 x 2 bidiagonal matrix-like operand
        sweeps: Number of sweeps (default 30)

    Returns:
        BidiagonalQRResult(U, S, VT). With sweeps=0, U and VT are identities
        and S is a copy of the input.

    Raises:
        DimensionError: If matrix is not 2 x 2
        NotBidiagonalError: If matrix has entries outside both bands
    """
    check_matrix_like(matrix, 'bidiagonal_qr')
    check_shape(matrix, (2, 2), 'bidiagonal_qr')
    check_bidiagonal(matrix, 'bidiagonal_qr')
    _check_count(sweeps, 'bidiagonal_qr')

    S = Matrix.materialize(matrix)
    U = Matrix.identity(2, dtype=S.dtype)
    VT = Matrix.identity(2, dtype=S.dtype)

    for _ in range(sweeps):
        s00, s01, s11 = S[0, 0], S[0, 1], S[1, 1]
        # Shift from the Gram block S^H S of the upper bidiagonal form
        shift = _shift_from_entries(
            abs(s00) ** 2,
            np.conj(s01) * s00,
            abs(s01) ** 2 + abs(s11) ** 2,
        )

        right = givens_rotation(abs(s00) ** 2 - shift, np.conj(s00) * s01)
        apply_right_rotation(S, right, 0)
        apply_left_rotation(VT, right.conjugate(), 0)

        left = givens_rotation(S[0, 0], S[1, 0])
        apply_left_rotation(S, left, 0)
        apply_right_rotation(U, left.conjugate(), 0)

        S.round_zeroes()

    return BidiagonalQRResult(U=U, S=S, VT=VT)
