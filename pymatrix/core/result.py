"""
Result envelope shared by the decomposition solvers.

A solver returns its decomposition-specific payload together with run
metadata (method, iteration count, convergence flag), phase timings and any
non-fatal warnings. The envelope is immutable all the way down: info and
timing are exposed as read-only mappings, and attaching a warning returns a
new envelope.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Payload plus run metadata for one decomposition.

    Attributes:
        params: Decomposition payload (factors, eigenvalues, ...)
        info: Method, iteration count and convergence flag
        timing: Seconds per phase with 'total_seconds', or None
        algorithm: Identifier of the iteration that produced params
        warnings: Non-fatal diagnostics, oldest first
    """
    params: P
    info: Mapping[str, Any]
    timing: Mapping[str, float] | None
    algorithm: str
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Snapshot the caller's dicts so later mutation cannot leak in
        object.__setattr__(self, 'info', MappingProxyType(dict(self.info)))
        if self.timing is not None:
            object.__setattr__(self, 'timing', MappingProxyType(dict(self.timing)))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    @property
    def converged(self) -> bool | None:
        """info['converged'] if the solver recorded it."""
        return self.info.get('converged')

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)

    def with_warning(self, message: str) -> Result[P]:
        """Copy of this result with message appended to warnings."""
        return replace(self, warnings=self.warnings + (message,))
