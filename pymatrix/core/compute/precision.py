"""
Element-level floating-point predicates.

These are the comparison primitives the matrix types and the decomposition
algorithms are built on: tolerance-relative equality, tolerance-based zero
test and sign. Scalar and array variants share the same tolerance tier.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.tolerances import ToleranceTier, get_tolerance


def is_equal_floating(a: Any, b: Any, tolerance: ToleranceTier | None = None) -> bool:
    """
    Check if two scalars are approximately equal.

    Uses the formula: |a - b| <= atol + rtol * max(|a|, |b|)

    Args:
        a: First value (real or complex)
        b: Second value (real or complex)
        tolerance: Tier to use; defaults to the active tier for the
                   values' dtype

    Returns:
        True if the values are within tolerance of each other
    """
    tier = tolerance or get_tolerance(np.result_type(a, b))
    return bool(abs(a - b) <= tier.atol + tier.rtol * max(abs(a), abs(b)))


def is_zero_floating(a: Any, tolerance: ToleranceTier | None = None) -> bool:
    """Check if a scalar is approximately zero (|a| <= atol)."""
    tier = tolerance or get_tolerance(np.result_type(a))
    return bool(abs(a) <= tier.atol)


def sign(x: Any) -> int:
    """
    Sign of a scalar: -1, 0 or 1.

    Complex values take the sign of their real part.
    """
    value = np.real(x)
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def isclose_array(
    a: NDArray[np.inexact[Any]],
    b: NDArray[np.inexact[Any]],
    tolerance: ToleranceTier | None = None,
) -> NDArray[np.bool_]:
    """Elementwise is_equal_floating over two arrays of the same shape."""
    tier = tolerance or get_tolerance(np.result_type(a, b))
    magnitude = np.maximum(np.abs(a), np.abs(b))
    return np.abs(a - b) <= tier.atol + tier.rtol * magnitude


def zero_mask(
    a: NDArray[np.inexact[Any]],
    tolerance: ToleranceTier | None = None,
) -> NDArray[np.bool_]:
    """Elementwise is_zero_floating."""
    tier = tolerance or get_tolerance(a.dtype)
    return np.abs(a) <= tier.atol
