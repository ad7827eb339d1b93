"""
Tests for Householder reflections and QR factorization.

Validates:
    - The reflection maps x onto alpha * e1 with |alpha| = ||x||
    - H is Hermitian and unitary; apply_left/apply_right match H products
    - householder_qr: Q @ R == A, Q unitary, R upper triangular, for
      square, tall, wide, complex and rank-deficient input
    - |diag(R)| agrees with scipy.linalg.qr
"""

import numpy as np
import pytest
import scipy.linalg

from pymatrix.algorithms.householder import householder_qr, householder_reflection
from pymatrix.core.exceptions import (
    ContractViolationError,
    DimensionError,
    ReadOnlyViewError,
)
from pymatrix.core.protocols import as_array
from pymatrix.types.storage import Matrix


def _column(values):
    return Matrix._from_array(np.asarray(values).reshape(-1, 1))


def assert_qr_factors(A, Q, R):
    """Q @ R == A, Q^H Q == I and R has nothing below its diagonal."""
    a = as_array(A)
    q = as_array(Q)
    r = as_array(R)
    m, n = a.shape
    assert q.shape == (m, m)
    assert r.shape == (m, n)
    np.testing.assert_allclose(q @ r, a, atol=1e-12)
    np.testing.assert_allclose(q.conj().T @ q, np.eye(m), atol=1e-12)
    assert np.all(np.tril(r, -1) == 0)


# ═══════════════════════════════════════════════════════════════════════
# Reflections
# ═══════════════════════════════════════════════════════════════════════


class TestHouseholderReflection:

    def test_alpha_opposes_leading_sign(self):
        reflection = householder_reflection(_column([3.0, 4.0]))
        assert reflection.alpha == pytest.approx(-5.0)
        reflection = householder_reflection(_column([-3.0, 4.0]))
        assert reflection.alpha == pytest.approx(5.0)

    @pytest.mark.parametrize("values", [
        [3.0, 4.0],
        [0.0, 3.0, 4.0],
        [1.0, -2.0, 2.0, 0.5],
        [1j, 1.0],
        [1 + 2j, -1j, 3.0],
    ])
    def test_maps_onto_first_axis(self, values):
        x = _column(values)
        reflection = householder_reflection(x)
        reflected = as_array(reflection.matrix() @ x).ravel()

        expected = np.zeros(len(values), dtype=reflected.dtype)
        expected[0] = reflection.alpha
        np.testing.assert_allclose(reflected, expected, atol=1e-12)
        assert abs(reflection.alpha) == pytest.approx(np.linalg.norm(values))

    def test_vector_is_unit(self):
        reflection = householder_reflection(_column([1.0, 2.0, 2.0]))
        assert reflection.vector.euclidean_norm() == pytest.approx(1.0)
        assert reflection.size == 3

    def test_row_vector_input(self):
        reflection = householder_reflection(Matrix.from_rows([[3.0, 4.0]]))
        assert reflection.vector.shape == (2, 1)
        assert reflection.alpha == pytest.approx(-5.0)

    def test_view_input(self, counting):
        reflection = householder_reflection(counting.get_column(1))
        assert abs(reflection.alpha) == pytest.approx(np.linalg.norm([1.0, 5.0, 9.0]))

    @pytest.mark.parametrize("values", [[3.0, 4.0], [1 + 2j, -1j, 3.0]])
    def test_hermitian_and_unitary(self, values):
        H = as_array(householder_reflection(_column(values)).matrix())
        np.testing.assert_allclose(H, H.conj().T, atol=1e-14)
        np.testing.assert_allclose(H @ H, np.eye(len(values)), atol=1e-14)

    def test_zero_vector_rejected(self):
        with pytest.raises(ContractViolationError, match="zero vector"):
            householder_reflection(_column([0.0, 0.0]))

    def test_matrix_rejected(self):
        with pytest.raises(DimensionError):
            householder_reflection(Matrix(2))


class TestApplyReflection:

    def test_apply_left_matches_product(self, rng):
        array = rng.standard_normal((3, 4))
        reflection = householder_reflection(_column(array[:, 0]))
        H = as_array(reflection.matrix())

        target = Matrix._from_array(array)
        reflection.apply_left(target)
        np.testing.assert_allclose(as_array(target), H @ array, atol=1e-12)
        np.testing.assert_allclose(as_array(target)[1:, 0], 0.0, atol=1e-12)

    def test_apply_right_matches_product(self, rng):
        array = rng.standard_normal((4, 3))
        reflection = householder_reflection(_column([1.0, 2.0, 3.0]))
        H = as_array(reflection.matrix())

        target = Matrix._from_array(array)
        reflection.apply_right(target)
        np.testing.assert_allclose(as_array(target), array @ H, atol=1e-12)

    def test_apply_left_through_view(self, counting):
        reflection = householder_reflection(_column([4.0, 8.0]))
        reflection.apply_left(counting.get_submatrix((1, 3), (0, 4)))
        assert counting[1, 0] == pytest.approx(reflection.alpha)
        assert abs(counting[2, 0]) < 1e-12
        np.testing.assert_array_equal(as_array(counting)[0], [0.0, 1.0, 2.0, 3.0])

    def test_complex_reflection_promotes_real_target(self):
        reflection = householder_reflection(_column([1j, 1.0]))
        target = Matrix.identity(2)
        reflection.apply_left(target)
        assert target.is_complex
        np.testing.assert_allclose(as_array(target), as_array(reflection.matrix()), atol=1e-14)

    def test_size_mismatch(self):
        reflection = householder_reflection(_column([3.0, 4.0]))
        with pytest.raises(DimensionError, match="apply_left"):
            reflection.apply_left(Matrix(3))
        with pytest.raises(DimensionError, match="apply_right"):
            reflection.apply_right(Matrix(3))

    def test_read_only_target(self):
        reflection = householder_reflection(_column([3.0, 4.0]))
        with pytest.raises(ReadOnlyViewError):
            reflection.apply_left(Matrix(2).const_view())


# ═══════════════════════════════════════════════════════════════════════
# QR factorization
# ═══════════════════════════════════════════════════════════════════════


class TestHouseholderQR:

    def test_square(self, square_data):
        A = Matrix._from_array(square_data)
        Q, R = householder_qr(A)
        assert_qr_factors(A, Q, R)

    def test_tall(self, rng):
        A = Matrix._from_array(rng.standard_normal((5, 3)))
        Q, R = householder_qr(A)
        assert_qr_factors(A, Q, R)

    def test_wide(self, rng):
        A = Matrix._from_array(rng.standard_normal((3, 5)))
        Q, R = householder_qr(A)
        assert_qr_factors(A, Q, R)

    def test_complex(self, rng):
        array = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4))
        A = Matrix._from_array(array)
        Q, R = householder_qr(A)
        assert Q.is_complex and R.is_complex
        assert_qr_factors(A, Q, R)

    def test_diagonal_magnitudes_match_scipy(self, square_data):
        _, R = householder_qr(Matrix._from_array(square_data))
        _, R_ref = scipy.linalg.qr(square_data)
        np.testing.assert_allclose(
            np.abs(np.diag(as_array(R))), np.abs(np.diag(R_ref)), rtol=1e-10,
        )

    def test_upper_triangular_input_is_untouched(self):
        A = Matrix.from_rows([[1.0, 2.0], [0.0, 3.0]])
        Q, R = householder_qr(A)
        assert Q == Matrix.identity(2)
        assert R == A

    def test_negligible_subdiagonal_is_zeroed(self):
        A = Matrix.from_rows([[1.0, 2.0], [1e-13, 3.0]])
        Q, R = householder_qr(A)
        assert R[1, 0] == 0.0
        assert Q == Matrix.identity(2)
        np.testing.assert_allclose(as_array(Q @ R), as_array(A), atol=1e-12)

    def test_negligible_column_in_tall_input(self):
        A = Matrix.from_rows([[1.0, 0.0], [1.0, 1e-14], [1.0, 0.0]])
        _, R = householder_qr(A)
        assert np.all(np.tril(as_array(R), -1) == 0)

    def test_rank_deficient(self):
        A = Matrix.from_rows([[1, 0, 2], [1, 0, 3], [1, 0, 4]])
        Q, R = householder_qr(A)
        assert_qr_factors(A, Q, R)
        assert abs(R[1, 1]) < 1e-12

    def test_single_row(self):
        A = Matrix.from_rows([[2.0, -1.0, 4.0]])
        Q, R = householder_qr(A)
        assert Q == Matrix.identity(1)
        assert R == A

    def test_view_input(self, counting):
        block = counting.get_submatrix((0, 3), (1, 4)).transposed()
        Q, R = householder_qr(block)
        assert_qr_factors(block, Q, R)

    def test_input_not_modified(self, square_data):
        A = Matrix._from_array(square_data)
        householder_qr(A)
        np.testing.assert_array_equal(as_array(A), square_data)

    def test_empty(self):
        result = householder_qr(Matrix())
        assert result.Q.shape == (0, 0)
        assert result.R.shape == (0, 0)

    def test_result_fields(self, square_data):
        result = householder_qr(Matrix._from_array(square_data))
        Q, R = result
        assert Q is result.Q
        assert R is result.R
