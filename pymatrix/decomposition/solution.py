"""
Decomposition solution types.

Contains the parameter payloads and user-facing solution wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.result import Result
from pymatrix.types.storage import Matrix


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for the Hermitian eigen iteration.

    schur_form is the (approximately) diagonal matrix left by the QR
    iteration; eigenvalues are the real parts of its diagonal, ascending.
    """
    schur_form: Matrix
    eigenvalues: NDArray[np.floating[Any]]
    trace: complex | float
    off_diagonal_norm: float
    converged: bool


@dataclass
class EigenSolution:
    """
    User-facing eigen iteration results.

    Wraps Result[EigenParams] and provides convenient accessors.
    """
    _result: Result[EigenParams]

    @property
    def schur_form(self) -> Matrix:
        return self._result.params.schur_form

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Eigenvalue estimates in ascending order."""
        return self._result.params.eigenvalues

    @property
    def trace(self) -> complex | float:
        """Trace of the input; the eigenvalues sum to it."""
        return self._result.params.trace

    @property
    def off_diagonal_norm(self) -> float:
        """Frobenius norm of the off-diagonal part of schur_form."""
        return self._result.params.off_diagonal_norm

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def info(self) -> Mapping[str, Any]:
        return self._result.info

    @property
    def timing(self) -> Mapping[str, float] | None:
        return self._result.timing

    @property
    def algorithm(self) -> str:
        return self._result.algorithm

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        lines = [
            "Hermitian Eigen Iteration",
            "=" * 50,
            f"Size: {self.schur_form.rows} x {self.schur_form.columns}",
            f"Shift: {self.info['shift']}",
            f"Iterations: {self.iterations}",
            f"Converged: {self.converged}",
            f"Off-diagonal norm: {self.off_diagonal_norm:.3e}",
            "",
            "Eigenvalues:",
            "-" * 50,
        ]
        for i, value in enumerate(self.eigenvalues):
            lines.append(f"  lambda[{i}]: {value:16.8f}")
        lines.append("-" * 50)
        lines.append(f"Algorithm: {self.algorithm}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={self.schur_form.rows}, "
            f"iterations={self.iterations}, converged={self.converged})"
        )


@dataclass(frozen=True)
class SVDParams:
    """Parameter payload for the bidiagonal QR sweep."""
    U: Matrix
    S: Matrix
    VT: Matrix
    singular_values: NDArray[np.floating[Any]]
    off_diagonal_norm: float
    converged: bool


@dataclass
class SVDSolution:
    """
    User-facing SVD sweep results.

    U @ S @ VT reproduces the input. S is driven toward diagonal form; its
    diagonal entries may carry a sign (or phase), singular_values reports
    their magnitudes.
    """
    _result: Result[SVDParams]

    @property
    def U(self) -> Matrix:
        return self._result.params.U

    @property
    def S(self) -> Matrix:
        return self._result.params.S

    @property
    def VT(self) -> Matrix:
        return self._result.params.VT

    @property
    def singular_values(self) -> NDArray[np.floating[Any]]:
        """Non-negative singular value estimates, descending."""
        return self._result.params.singular_values

    @property
    def off_diagonal_norm(self) -> float:
        return self._result.params.off_diagonal_norm

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def sweeps(self) -> int:
        return self._result.info['sweeps']

    @property
    def info(self) -> Mapping[str, Any]:
        return self._result.info

    @property
    def timing(self) -> Mapping[str, float] | None:
        return self._result.timing

    @property
    def algorithm(self) -> str:
        return self._result.algorithm

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def reconstruct(self) -> Matrix:
        """U @ S @ VT."""
        return self.U @ self.S @ self.VT

    def summary(self) -> str:
        lines = [
            "Bidiagonal SVD Sweep",
            "=" * 50,
            f"Sweeps: {self.sweeps}",
            f"Converged: {self.converged}",
            f"Off-diagonal norm: {self.off_diagonal_norm:.3e}",
            "",
            "Singular values:",
            "-" * 50,
        ]
        for i, value in enumerate(self.singular_values):
            lines.append(f"  sigma[{i}]: {value:16.8f}")
        lines.append("-" * 50)
        lines.append(f"Algorithm: {self.algorithm}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SVDSolution(sweeps={self.sweeps}, converged={self.converged})"
