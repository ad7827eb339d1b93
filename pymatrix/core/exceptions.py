"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Precondition violations (wrong shapes, bad indices,
non-Hermitian input, ...) are ContractViolationError subclasses and are
raised unconditionally: there is no build mode in which a violated contract
silently continues.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ContractViolationError(PyMatrixError):
    """
    A caller broke the contract of an operation.

    Raised immediately at the call that violates a precondition. There is
    no distinction between user error and internal error: both are
    programming errors.
    """
    pass


class DimensionError(ContractViolationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when operand shapes don't match what an operation requires
    (addition of differently-sized matrices, product with mismatched inner
    dimension, non-vector input to a vector-only operation, ...).

    Attributes:
        expected: Expected shape, if a single shape was expected
        actual: Actual shape of the offending operand
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, int] | None = None,
        actual: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(ContractViolationError):
    """
    Requested element or row/column lies outside the matrix boundaries.

    Attributes:
        index: The offending index (tuple for element access, int otherwise)
        shape: Shape of the accessed matrix
    """

    def __init__(
        self,
        message: str,
        index: tuple[int, int] | int | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class ElementTypeError(ContractViolationError):
    """Element dtype is neither floating point nor complex floating point."""
    pass


class ReadOnlyViewError(ContractViolationError):
    """A write was attempted through a read-only view."""
    pass


class StaleViewError(ContractViolationError):
    """
    A view was used after its storage changed shape.

    Every reshaping operation on a Matrix (in-place transpose, in-place
    product with a different result shape) bumps the matrix generation.
    Views remember the generation they were created at and refuse access
    once it no longer matches.

    Attributes:
        view_generation: Generation recorded when the view was created
        storage_generation: Current generation of the storage
    """

    def __init__(
        self,
        message: str,
        view_generation: int | None = None,
        storage_generation: int | None = None,
    ):
        super().__init__(message)
        self.view_generation = view_generation
        self.storage_generation = storage_generation


class NotHermitianError(ContractViolationError):
    """
    Matrix is not Hermitian within tolerance.

    Attributes:
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(self, message: str, matrix_name: str | None = None):
        super().__init__(message)
        self.matrix_name = matrix_name


class NotBidiagonalError(ContractViolationError):
    """
    Matrix is not bidiagonal within tolerance.

    Attributes:
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(self, message: str, matrix_name: str | None = None):
        super().__init__(message)
        self.matrix_name = matrix_name


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Raised by the solvers when an iteration leaves inf or nan entries,
    from overflow or from non-finite input.
    """


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm did not converge within its fixed iteration count.

    The decomposition algorithms never check convergence themselves; this
    is raised by the solver layer when the caller explicitly asks for a
    convergence check.

    Attributes:
        iterations: Number of iterations completed
        final_change: Remaining off-diagonal norm after the last iteration
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The tolerance that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
