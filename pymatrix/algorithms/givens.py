"""
Givens plane rotations.

A rotation is computed from two values (a, b) so that applying it to the
pair gives (r, 0) with r = sqrt(|a|^2 + |b|^2). It acts on two rows
(left rotation) or two columns (right rotation) of any writable
matrix-like target, in place and element by element.

For complex elements the rotation matrix is

    G = [[conj(c), conj(s)],
         [-s,      c      ]]

which is unitary and for real elements reduces to [[c, s], [-s, c]].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import IndexOutOfRangeError
from pymatrix.core.protocols import MutableMatrixLike
from pymatrix.core.validation import check_writable


@dataclass(frozen=True)
class GivensRotation:
    """
    Coefficients of one plane rotation.

    Attributes:
        c: Cosine-like coefficient (a / r)
        s: Sine-like coefficient (b / r)
        r: Length of the rotated pair, the value left in the first slot
    """
    c: Any
    s: Any
    r: float

    @property
    def is_identity(self) -> bool:
        return self.c == 1 and self.s == 0

    def conjugate(self) -> GivensRotation:
        """Rotation whose matrix is the elementwise conjugate of this one."""
        return GivensRotation(np.conj(self.c), np.conj(self.s), self.r)

    def as_array(self) -> NDArray[np.inexact[Any]]:
        """The 2 x 2 rotation matrix G."""
        return np.array([
            [np.conj(self.c), np.conj(self.s)],
            [-self.s, self.c],
        ])

    def _rotate(self, x: Any, y: Any) -> tuple[Any, Any]:
        return (
            np.conj(self.c) * x + np.conj(self.s) * y,
            -self.s * x + self.c * y,
        )


IDENTITY = GivensRotation(1.0, 0.0, 0.0)


def givens_rotation(a: Any, b: Any) -> GivensRotation:
    """
    Rotation that maps the pair (a, b) to (r, 0).

    When both values are zero there is nothing to annihilate and the
    identity rotation is returned.
    """
    r = float(np.sqrt(abs(a) ** 2 + abs(b) ** 2))
    if r == 0.0:
        return IDENTITY
    return GivensRotation(a / r, b / r, r)


def _check_pair(target: MutableMatrixLike, i: int, k: int, count: int, axis: str, name: str) -> None:
    check_writable(target, name)
    for index in (i, k):
        if not 0 <= index < count:
            raise IndexOutOfRangeError(
                f"{name}: {axis} index {index} out of range for "
                f"{(target.rows, target.columns)} matrix",
                index=index,
                shape=(target.rows, target.columns),
            )


def apply_left_rotation(
    target: MutableMatrixLike,
    rotation: GivensRotation,
    i: int,
    k: int | None = None,
) -> None:
    """
    Replace rows i and k of target by G @ [row_i; row_k].

    k defaults to i + 1.

    Raises:
        ReadOnlyViewError: If target cannot be written
        IndexOutOfRangeError: If either row is outside target
    """
    k = i + 1 if k is None else k
    _check_pair(target, i, k, target.rows, 'row', 'apply_left_rotation')
    for j in range(target.columns):
        target[i, j], target[k, j] = rotation._rotate(target[i, j], target[k, j])


def apply_right_rotation(
    target: MutableMatrixLike,
    rotation: GivensRotation,
    i: int,
    k: int | None = None,
) -> None:
    """
    Replace columns i and k of target by [col_i, col_k] @ G^T.

    k defaults to i + 1. The rotation built from (target[j, i], target[j, k])
    zeroes target[j, k].

    Raises:
        ReadOnlyViewError: If target cannot be written
        IndexOutOfRangeError: If either column is outside target
    """
    k = i + 1 if k is None else k
    _check_pair(target, i, k, target.columns, 'column', 'apply_right_rotation')
    for j in range(target.rows):
        target[j, i], target[j, k] = rotation._rotate(target[j, i], target[j, k])


def givens_left_rotation(
    target: MutableMatrixLike,
    i: int,
    k: int,
    column: int,
) -> GivensRotation:
    """Zero target[k, column] against target[i, column] by rotating rows i and k."""
    rotation = givens_rotation(target[i, column], target[k, column])
    apply_left_rotation(target, rotation, i, k)
    return rotation


def givens_right_rotation(
    target: MutableMatrixLike,
    i: int,
    k: int,
    row: int,
) -> GivensRotation:
    """Zero target[row, k] against target[row, i] by rotating columns i and k."""
    rotation = givens_rotation(target[row, i], target[row, k])
    apply_right_rotation(target, rotation, i, k)
    return rotation
