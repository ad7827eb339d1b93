"""
Tests for the owning Matrix.

Validates:
    - Construction surface (sizes, fill, literals, diagonal, identity)
    - Element access and dtype promotion
    - Algebraic identities over + - * / @ and tolerance-based ==
    - Vector operations (norm, normalize), round_zeroes, get_diag
    - assign_submatrix, fill, materialize from foreign matrix-likes
"""

import numpy as np
import pytest

from pymatrix.core.capabilities import (
    CAPABILITY_LAZY_TRANSFORM,
    CAPABILITY_OWNING,
    CAPABILITY_READ,
    CAPABILITY_WRITE,
)
from pymatrix.core.exceptions import (
    ContractViolationError,
    DimensionError,
    ElementTypeError,
    IndexOutOfRangeError,
)
from pymatrix.types.storage import Matrix


class ListMatrix:
    """Minimal foreign MatrixLike backed by nested lists."""

    def __init__(self, rows):
        self._rows = [list(row) for row in rows]

    @property
    def rows(self):
        return len(self._rows)

    @property
    def columns(self):
        return len(self._rows[0]) if self._rows else 0

    def __getitem__(self, index):
        row, column = index
        return self._rows[row][column]

    def supports(self, capability):
        return capability == CAPABILITY_READ


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_empty(self):
        m = Matrix()
        assert m.shape == (0, 0)
        assert m.rows == 0
        assert m.columns == 0

    def test_square_zeros(self):
        m = Matrix(3)
        assert m.shape == (3, 3)
        assert m == Matrix(3, 3, 0.0)
        assert m.dtype == np.float64

    def test_rectangular_fill(self):
        m = Matrix(2, 3, 1.5)
        assert m.shape == (2, 3)
        assert all(m[i, j] == 1.5 for i in range(2) for j in range(3))

    def test_complex_fill_gives_complex_matrix(self):
        m = Matrix(2, 2, 1 + 1j)
        assert m.is_complex
        assert m[1, 1] == 1 + 1j

    def test_explicit_dtype(self):
        assert Matrix(2, dtype=np.float32).dtype == np.float32

    def test_columns_without_rows(self):
        with pytest.raises(ContractViolationError):
            Matrix(columns=3)

    @pytest.mark.parametrize("size", [0, -1, 2.5])
    def test_invalid_size(self, size):
        with pytest.raises(DimensionError):
            Matrix(size)

    def test_non_numeric_fill(self):
        with pytest.raises(ElementTypeError):
            Matrix(2, 2, "x")


class TestFromRows:

    def test_literal(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m[1, 0] == 4.0
        assert m.dtype == np.float64

    def test_complex_literal(self):
        m = Matrix.from_rows([[1, 2j], [3, 4]])
        assert m.is_complex
        assert m[0, 1] == 2j

    def test_ragged_rows(self):
        with pytest.raises(DimensionError, match="row 1"):
            Matrix.from_rows([[1, 2], [3]])

    def test_empty_literal(self):
        with pytest.raises(DimensionError):
            Matrix.from_rows([])

    def test_strings_rejected(self):
        with pytest.raises(ElementTypeError):
            Matrix.from_rows([["a", "b"]])


class TestDiagonalAndIdentity:

    def test_diagonal_from_list(self):
        expected = Matrix.from_rows([[1, 0, 0], [0, 2, 0], [0, 0, 3]])
        assert Matrix.diagonal([1, 2, 3]) == expected

    def test_identity(self):
        expected = Matrix.from_rows([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
        assert Matrix.identity(3) == expected

    def test_scaled_identity(self):
        assert Matrix.identity(2, 4.0) == Matrix.diagonal([4.0, 4.0])

    def test_diagonal_from_column_vector(self):
        column = Matrix.from_rows([[1], [2]])
        assert Matrix.diagonal(column) == Matrix.from_rows([[1, 0], [0, 2]])

    def test_diagonal_from_row_view(self, counting):
        assert Matrix.diagonal(counting.get_row(0)) == Matrix.diagonal([0, 1, 2, 3])

    def test_diagonal_from_matrix_rejected(self):
        with pytest.raises(DimensionError, match="vectors"):
            Matrix.diagonal(Matrix(2))

    def test_diagonal_empty_rejected(self):
        with pytest.raises(DimensionError):
            Matrix.diagonal([])


class TestMaterialize:

    def test_from_foreign_matrix_like(self):
        m = Matrix.materialize(ListMatrix([[1, 2], [3, 4]]))
        assert m == Matrix.from_rows([[1, 2], [3, 4]])
        assert m.dtype == np.float64

    def test_from_view_is_a_copy(self, counting):
        copy = Matrix.materialize(counting.get_row(1))
        copy[0, 0] = -1.0
        assert counting[1, 0] == 4.0

    def test_rejects_non_matrix(self):
        with pytest.raises(ContractViolationError):
            Matrix.materialize([[1, 2]])


# ═══════════════════════════════════════════════════════════════════════
# Element access
# ═══════════════════════════════════════════════════════════════════════


class TestElementAccess:

    def test_read_write(self):
        m = Matrix(2, 3)
        m[1, 2] = 7.0
        assert m[1, 2] == 7.0
        assert m[0, 0] == 0.0

    @pytest.mark.parametrize("index", [(2, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, index):
        m = Matrix(2, 3)
        with pytest.raises(IndexOutOfRangeError):
            m[index]
        with pytest.raises(IndexOutOfRangeError):
            m[index] = 1.0

    def test_complex_write_promotes(self):
        m = Matrix(2)
        m[0, 1] = 1 + 2j
        assert m.is_complex
        assert m[0, 1] == 1 + 2j
        assert m.generation == 0

    def test_supports(self):
        m = Matrix(2)
        assert m.supports(CAPABILITY_READ)
        assert m.supports(CAPABILITY_WRITE)
        assert m.supports(CAPABILITY_OWNING)
        assert not m.supports(CAPABILITY_LAZY_TRANSFORM)
        assert not m.supports("gpu")


# ═══════════════════════════════════════════════════════════════════════
# Algebra
# ═══════════════════════════════════════════════════════════════════════


class TestAlgebra:

    def test_add_subtract_roundtrip(self, rng):
        A = Matrix._from_array(rng.standard_normal((3, 4)))
        B = Matrix._from_array(rng.standard_normal((3, 4)))
        assert (A + B) - B == A

    def test_scale_divide_roundtrip(self, rng):
        A = Matrix._from_array(rng.standard_normal((3, 3)))
        assert (A * 3.7) / 3.7 == A
        assert 2 * A == A + A
        assert np.float64(2.0) * A == A * 2

    def test_negation(self):
        A = Matrix.from_rows([[1, -2]])
        assert -A == Matrix.from_rows([[-1, 2]])

    def test_product(self, rng):
        a = rng.standard_normal((2, 3))
        b = rng.standard_normal((3, 4))
        product = Matrix._from_array(a) @ Matrix._from_array(b)
        assert product.shape == (2, 4)
        np.testing.assert_allclose(product._as_array(), a @ b)

    def test_product_with_foreign_operand(self):
        A = Matrix.identity(2)
        B = ListMatrix([[1, 2], [3, 4]])
        assert A @ B == Matrix.from_rows([[1, 2], [3, 4]])
        assert B @ A == Matrix.from_rows([[1, 2], [3, 4]])

    def test_product_with_empty(self):
        assert (Matrix() @ Matrix()).shape == (0, 0)

    def test_mixed_real_complex(self):
        result = Matrix.identity(2) + Matrix(2, 2, 1j)
        assert result.is_complex
        assert result[0, 0] == 1 + 1j

    def test_add_shape_mismatch(self):
        with pytest.raises(DimensionError, match="addition"):
            Matrix(2, 3) + Matrix(3, 2)

    def test_subtract_shape_mismatch(self):
        with pytest.raises(DimensionError, match="subtraction"):
            Matrix(2, 3) - Matrix(2, 2)

    def test_product_shape_mismatch(self):
        with pytest.raises(DimensionError):
            Matrix(2, 3) @ Matrix(2, 3)

    def test_star_is_scalar_only(self):
        with pytest.raises(TypeError):
            Matrix(2) * Matrix(2)

    def test_equality_uses_tolerance(self):
        assert Matrix.from_rows([[1.0]]) == Matrix.from_rows([[1.0 + 1e-13]])
        assert Matrix.from_rows([[1.0]]) != Matrix.from_rows([[1.001]])

    def test_equality_compares_shape_first(self):
        assert Matrix(2, 3) != Matrix(3, 2)

    def test_equality_with_non_matrix(self):
        assert (Matrix(1) == 0.0) is False

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix(2))


class TestInPlace:

    def test_iadd_keeps_identity(self):
        A = Matrix(2, 2, 1.0)
        alias = A
        A += Matrix.identity(2)
        assert alias is A
        assert A == Matrix.from_rows([[2, 1], [1, 2]])

    def test_imul_itruediv(self):
        A = Matrix(2, 2, 3.0)
        A *= 2
        A /= 3
        assert A == Matrix(2, 2, 2.0)

    def test_imatmul_same_shape_keeps_views(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        view = A.view()
        A @= Matrix.identity(2)
        assert A.generation == 0
        assert view[1, 1] == 4.0

    def test_imatmul_reshapes(self):
        A = Matrix(2, 3, 1.0)
        A @= Matrix(3, 1, 1.0)
        assert A.shape == (2, 1)
        assert A == Matrix(2, 1, 3.0)
        assert A.generation == 1


# ═══════════════════════════════════════════════════════════════════════
# Vector and cleanup operations
# ═══════════════════════════════════════════════════════════════════════


class TestVectorOperations:

    def test_euclidean_norm(self):
        assert Matrix.from_rows([[3], [4]]).euclidean_norm() == pytest.approx(5.0)

    def test_complex_norm(self):
        assert Matrix.from_rows([[3j, 4]]).euclidean_norm() == pytest.approx(5.0)

    def test_norm_requires_vector(self):
        with pytest.raises(DimensionError):
            Matrix(2).euclidean_norm()

    def test_normalize(self):
        v = Matrix.from_rows([[3, 4]])
        v.normalize()
        assert v == Matrix.from_rows([[0.6, 0.8]])

    def test_normalized_leaves_original(self):
        v = Matrix.from_rows([[3], [4]])
        unit = v.normalized()
        assert unit.euclidean_norm() == pytest.approx(1.0)
        assert v[0, 0] == 3.0

    def test_normalize_zero_vector_unchanged(self):
        v = Matrix(1, 3)
        v.normalize()
        assert v == Matrix(1, 3)

    def test_normalize_requires_vector(self):
        with pytest.raises(DimensionError):
            Matrix(2).normalize()


class TestCleanup:

    def test_round_zeroes(self):
        m = Matrix.from_rows([[1.0, 1e-15], [-1e-14, 2.0]])
        m.round_zeroes()
        assert m[0, 1] == 0.0
        assert m[1, 0] == 0.0
        assert m[1, 1] == 2.0

    def test_round_zeroes_complex(self):
        m = Matrix.from_rows([[1e-15j, 1 + 1e-15j]])
        m.round_zeroes()
        assert m[0, 0] == 0
        assert m[0, 1] == 1 + 1e-15j

    def test_round_zeroes_empty(self):
        m = Matrix()
        m.round_zeroes()
        assert m.shape == (0, 0)

    def test_get_diag(self, counting):
        assert counting.get_diag() == Matrix.from_rows([[0], [5], [10]])
        assert counting.get_diag(to_row=True) == Matrix.from_rows([[0, 5, 10]])


class TestAssignment:

    def test_assign_submatrix(self):
        m = Matrix(3)
        m.assign_submatrix(Matrix(2, 2, 1.0), 1, 1)
        assert m == Matrix.from_rows([[0, 0, 0], [0, 1, 1], [0, 1, 1]])

    def test_assign_submatrix_from_view(self, counting):
        m = Matrix(2, 2)
        m.assign_submatrix(counting.get_submatrix((0, 2), (2, 4)), 0, 0)
        assert m == Matrix.from_rows([[2, 3], [6, 7]])

    def test_assign_submatrix_out_of_bounds(self):
        with pytest.raises(DimensionError, match="does not fit"):
            Matrix(3).assign_submatrix(Matrix(2), 2, 0)

    def test_fill(self):
        m = Matrix(2, 3)
        m.fill(4.0)
        assert m == Matrix(2, 3, 4.0)

    def test_copy_is_independent(self):
        m = Matrix(2, 2, 1.0)
        c = m.copy()
        c[0, 0] = 9.0
        assert m[0, 0] == 1.0


class TestRepresentation:

    def test_str_uses_brackets(self):
        assert str(Matrix.from_rows([[1, 2], [3, 4]])) == "[[1 2]\n[3 4]]"

    def test_repr(self):
        assert repr(Matrix(2, 3)) == "Matrix(rows=2, columns=3, dtype=float64)"
