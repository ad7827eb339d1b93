"""
Tolerance tiers for floating-point comparison.

Every "approximately equal" and "approximately zero" decision in pymatrix
(matrix equality, rounding of numerical noise, Hermitian and bidiagonal
checks) goes through the tier selected here:

- DOUBLE_PRECISION: float64, longdouble and their complex counterparts
- SINGLE_PRECISION: float32 / complex64

The tier is chosen from the operand dtype unless a process-wide override
has been installed with set_tolerance() or using_tolerance().
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


DOUBLE_PRECISION = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='fp64',
    description='Double precision and wider',
)

SINGLE_PRECISION = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision',
)

_override: ToleranceTier | None = None


def select_tolerance(dtype: np.dtype | type = np.float64) -> ToleranceTier:
    """Select the tolerance tier for a given element dtype."""
    dtype = np.dtype(dtype)
    # complex64 carries two float32 parts
    component_size = dtype.itemsize // 2 if dtype.kind == 'c' else dtype.itemsize
    if component_size <= 4:
        return SINGLE_PRECISION
    return DOUBLE_PRECISION


def get_tolerance(dtype: np.dtype | type = np.float64) -> ToleranceTier:
    """Return the active tolerance: the override if set, else the dtype tier."""
    if _override is not None:
        return _override
    return select_tolerance(dtype)


def set_tolerance(tier: ToleranceTier | None) -> None:
    """
    Install a process-wide tolerance override.

    Args:
        tier: Tier to use for every comparison, or None to go back to
              dtype-based selection
    """
    global _override
    _override = tier


@contextmanager
def using_tolerance(tier: ToleranceTier) -> Iterator[ToleranceTier]:
    """
    Temporarily override the tolerance.

    Usage:
        with using_tolerance(ToleranceTier(rtol=1e-6, atol=1e-8,
                                           name='loose', description='')):
            assert A == B
    """
    previous = _override
    set_tolerance(tier)
    try:
        yield tier
    finally:
        set_tolerance(previous)
