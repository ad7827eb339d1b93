"""
Text representation of matrices for diagnostics.

An owning matrix prints as

    [[1 2]
    [3 4]]

and a view prints the same way with parentheses instead of brackets.
"""

from typing import Any

import numpy as np

from pymatrix.core.protocols import MatrixLike, as_array


def format_element(value: Any) -> str:
    """Shortest general form; complex values print as (re,im)."""
    if np.iscomplexobj(value):
        return f"({value.real:g},{value.imag:g})"
    return f"{value:g}"


def format_matrix(matrix: MatrixLike, brackets: str = '[]') -> str:
    """
    Render matrix row by row.

    Args:
        matrix: Any matrix-like object
        brackets: Two-character string with the opening and closing symbol
    """
    opening, closing = brackets
    array = as_array(matrix)
    rows = [
        opening + ' '.join(format_element(value) for value in row) + closing
        for row in array
    ]
    return opening + '\n'.join(rows) + closing
