"""
Solver entry points for the iterative decompositions.

eigh() and svd() run the fixed-count iterations from
pymatrix.algorithms.qr_algorithm and wrap the factors in a solution object
together with timing, convergence diagnostics and warnings.
"""

from __future__ import annotations

import warnings
from typing import Literal

import numpy as np

from pymatrix.algorithms.qr_algorithm import (
    DEFAULT_SCHUR_ITERATIONS,
    DEFAULT_SVD_SWEEPS,
    bidiagonal_qr,
    get_schur_decomposition,
)
from pymatrix.core.compute.precision import zero_mask
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import get_tolerance
from pymatrix.core.exceptions import ContractViolationError, ConvergenceError, NumericalError
from pymatrix.core.protocols import MatrixLike, as_array
from pymatrix.core.result import Result
from pymatrix.decomposition.solution import (
    EigenParams,
    EigenSolution,
    SVDParams,
    SVDSolution,
)
from pymatrix.types.operations import off_diagonal_norm
from pymatrix.types.storage import Matrix


ShiftChoice = Literal['none', 'wilkinson']


def _off_diagonal_is_zero(matrix: Matrix) -> bool:
    array = as_array(matrix)
    off = ~np.eye(*array.shape, dtype=bool)
    return bool(np.all(zero_mask(array[off])))


def _check_finite(matrix: Matrix, name: str) -> None:
    if not np.all(np.isfinite(as_array(matrix))):
        raise NumericalError(
            f"{name}: iteration produced non-finite entries (overflow, or inf/nan in the input)"
        )


def _report_not_converged(
    message: str,
    iterations: int,
    residual: float,
    dtype: np.dtype,
    check_convergence: bool,
) -> str:
    if check_convergence:
        raise ConvergenceError(
            message,
            iterations=iterations,
            final_change=residual,
            reason="off-diagonal entries are not approximately zero",
            threshold=get_tolerance(dtype).atol,
        )
    warnings.warn(message, RuntimeWarning, stacklevel=3)
    return message


def eigh(
    matrix: MatrixLike,
    *,
    iterations: int = DEFAULT_SCHUR_ITERATIONS,
    shift: ShiftChoice = 'none',
    check_convergence: bool = False,
) -> EigenSolution:
    """
    Eigenvalues of a Hermitian matrix by QR iteration.

    Parameters
    ----------
    matrix : MatrixLike
        Hermitian matrix (Matrix, view, or any MatrixLike).
    iterations : int
        Number of QR steps. The loop always runs the full count.
    shift : str
        'none' (plain QR iteration, the default) or 'wilkinson'
        (shift by the Wilkinson estimate of the trailing 2 x 2 block).
    check_convergence : bool
        If True, raise ConvergenceError instead of warning when the
        off-diagonal part has not reached zero.

    Returns
    -------
    EigenSolution

    Raises
    ------
    NumericalError
        If the iteration produced inf or nan entries.
    """
    if shift not in ('none', 'wilkinson'):
        raise ContractViolationError(
            f"eigh: shift must be 'none' or 'wilkinson', got {shift!r}"
        )

    timer = Timer()
    timer.start()

    with timer.section('qr_iteration'):
        schur = get_schur_decomposition(
            matrix, iterations, use_wilkinson_shift=(shift == 'wilkinson'),
        )

    with timer.section('diagnostics'):
        _check_finite(schur, 'eigh')
        diagonal = np.diagonal(as_array(schur))
        eigenvalues = np.sort(np.real(diagonal))
        trace = np.trace(as_array(matrix))
        residual = off_diagonal_norm(schur)
        converged = _off_diagonal_is_zero(schur)

    timer.stop()

    params = EigenParams(
        schur_form=schur,
        eigenvalues=eigenvalues,
        trace=trace,
        off_diagonal_norm=residual,
        converged=converged,
    )
    result = Result(
        params=params,
        info={
            'method': 'shifted_qr' if shift == 'wilkinson' else 'unshifted_qr',
            'shift': shift,
            'iterations': iterations,
            'converged': converged,
        },
        timing=timer.result(),
        algorithm='householder_qr_iteration',
    )
    if not converged:
        result = result.with_warning(_report_not_converged(
            f"QR iteration did not converge after {iterations} iterations "
            f"(off-diagonal norm {residual:.3e}); increase iterations",
            iterations,
            residual,
            schur.dtype,
            check_convergence,
        ))
    return EigenSolution(_result=result)


def svd(
    matrix: MatrixLike,
    *,
    sweeps: int = DEFAULT_SVD_SWEEPS,
    check_convergence: bool = False,
) -> SVDSolution:
    """
    Singular value decomposition of a 2 x 2 bidiagonal matrix.

    Parameters
    ----------
    matrix : MatrixLike
        2 x 2 upper or lower bidiagonal matrix.
    sweeps : int
        Number of implicit-shift QR sweeps.
    check_convergence : bool
        If True, raise ConvergenceError instead of warning when S has not
        become diagonal.

    Returns
    -------
    SVDSolution

    Raises
    ------
    NumericalError
        If the iteration produced inf or nan entries.
    """
    timer = Timer()
    timer.start()

    with timer.section('qr_sweeps'):
        factors = bidiagonal_qr(matrix, sweeps)

    with timer.section('diagnostics'):
        _check_finite(factors.S, 'svd')
        magnitudes = np.abs(np.diagonal(as_array(factors.S)))
        singular_values = np.sort(magnitudes)[::-1]
        residual = off_diagonal_norm(factors.S)
        converged = _off_diagonal_is_zero(factors.S)

    timer.stop()

    params = SVDParams(
        U=factors.U,
        S=factors.S,
        VT=factors.VT,
        singular_values=singular_values,
        off_diagonal_norm=residual,
        converged=converged,
    )
    result = Result(
        params=params,
        info={
            'method': 'golub_kahan',
            'sweeps': sweeps,
            'converged': converged,
        },
        timing=timer.result(),
        algorithm='bidiagonal_implicit_qr',
    )
    if not converged:
        result = result.with_warning(_report_not_converged(
            f"Bidiagonal QR did not converge after {sweeps} sweeps "
            f"(off-diagonal norm {residual:.3e}); increase sweeps",
            sweeps,
            residual,
            factors.S.dtype,
            check_convergence,
        ))
    return SVDSolution(_result=result)
