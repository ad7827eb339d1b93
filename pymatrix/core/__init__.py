"""
Core infrastructure for pymatrix.

This module provides shared abstractions and utilities used by the matrix
types, the algorithms and the solver layer.

Key components:
    protocols: MatrixLike, MutableMatrixLike protocols
    capabilities: Capability string constants
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Contract checks and shape predicates
    compute: Tolerances, floating-point predicates, timing
"""

from pymatrix.core.protocols import MatrixLike, MutableMatrixLike
from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ContractViolationError,
    DimensionError,
    IndexOutOfRangeError,
    ElementTypeError,
    ReadOnlyViewError,
    StaleViewError,
    NotHermitianError,
    NotBidiagonalError,
    NumericalError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "MatrixLike",
    "MutableMatrixLike",
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ContractViolationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "ElementTypeError",
    "ReadOnlyViewError",
    "StaleViewError",
    "NotHermitianError",
    "NotBidiagonalError",
    "NumericalError",
    "ConvergenceError",
]
