"""
Shared numeric infrastructure for pymatrix.

Submodules:
    tolerances: Tolerance tiers and the active-tolerance override
    precision: Approximate equality, zero test and sign
    timing: Execution timing utilities
"""

from pymatrix.core.compute.tolerances import (
    DOUBLE_PRECISION,
    SINGLE_PRECISION,
    ToleranceTier,
    get_tolerance,
    select_tolerance,
    set_tolerance,
    using_tolerance,
)
from pymatrix.core.compute.precision import (
    is_equal_floating,
    is_zero_floating,
    isclose_array,
    sign,
    zero_mask,
)
from pymatrix.core.compute.timing import Timer, timed

__all__ = [
    # Tolerances
    "ToleranceTier",
    "DOUBLE_PRECISION",
    "SINGLE_PRECISION",
    "get_tolerance",
    "select_tolerance",
    "set_tolerance",
    "using_tolerance",
    # Precision
    "is_equal_floating",
    "is_zero_floating",
    "isclose_array",
    "sign",
    "zero_mask",
    # Timing
    "Timer",
    "timed",
]
