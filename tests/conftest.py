"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pymatrix.core.compute.tolerances import set_tolerance
from pymatrix.types.storage import Matrix


@pytest.fixture(autouse=True)
def _default_tolerance():
    """Every test starts from dtype-based tolerance selection."""
    set_tolerance(None)
    yield
    set_tolerance(None)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_data(rng):
    """Random 4 x 4 real matrix as a plain array."""
    return rng.standard_normal((4, 4))


@pytest.fixture
def hermitian_matrix():
    """3 x 3 real symmetric matrix with well separated eigenvalues."""
    return Matrix.from_rows([
        [5.0, 1.0, 0.0],
        [1.0, 3.0, 1.0],
        [0.0, 1.0, 1.0],
    ])


@pytest.fixture
def complex_hermitian_matrix():
    """2 x 2 complex Hermitian matrix with eigenvalues 1 and 3."""
    return Matrix.from_rows([[2, 1j], [-1j, 2]])


@pytest.fixture
def upper_bidiagonal():
    """2 x 2 upper bidiagonal matrix, singular values sqrt(7 +- sqrt(13))."""
    return Matrix.from_rows([[3.0, 1.0], [0.0, 2.0]])


@pytest.fixture
def counting():
    """3 x 4 matrix holding 0..11 row by row."""
    return Matrix._from_array(np.arange(12.0).reshape(3, 4))
