"""
Tests for Matrix construction.
"""

import numpy as np
import pytest

import corcovado as cc
from corcovado import Matrix, InvalidArgumentError, TypeMismatchError


class TestDimensionConstructor:
    """Test Matrix(rows, cols)."""

    def test_rows_and_cols_higher_than_zero_succeeds(self, specialization):
        """Shape properties match the requested dimensions."""
        cls, dtype, _ = specialization
        mat = cls(3, 2)
        assert mat.rows == 3
        assert mat.cols == 2
        assert mat.size == 6
        assert mat.shape == (3, 2)
        assert mat.dtype == dtype

    @pytest.mark.parametrize("rows, cols", [(1, 1), (1, 7), (7, 1), (4, 5)])
    def test_size_is_product(self, rows, cols):
        mat = Matrix(rows, cols)
        assert mat.size == rows * cols
        assert len(mat) == rows * cols

    @pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (0, 0)])
    def test_zero_dimension_rejected(self, rows, cols):
        """Zero rows or columns fail with invalid-argument."""
        with pytest.raises(InvalidArgumentError):
            Matrix(rows, cols)

    @pytest.mark.parametrize("rows, cols", [(-1, 2), (2, -3)])
    def test_negative_dimension_rejected(self, rows, cols):
        with pytest.raises(InvalidArgumentError):
            Matrix(rows, cols)

    def test_non_integer_dimension_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix(2.0, 3)

    def test_numeric_elements_default_to_zero(self, specialization):
        """Numeric element defaults follow the element type (T() == 0)."""
        cls, _, _ = specialization
        mat = cls(2, 3)
        assert all(value == 0 for value in mat)

    def test_object_elements_default_to_none(self):
        mat = Matrix(2, 2, dtype='object')
        assert mat.tolist() == [[None, None], [None, None]]

    def test_object_default_factory_called_per_element(self):
        mat = Matrix(2, 2, dtype=cc.object_, default_factory=list)
        mat.at(0, 0).append(1)
        assert mat.at(0, 0) == [1]
        assert mat.at(0, 1) == []
        assert mat.at(0, 0) is not mat.at(1, 1)

    def test_default_factory_requires_object_dtype(self):
        with pytest.raises(InvalidArgumentError):
            Matrix(2, 2, dtype='int32', default_factory=int)

    def test_default_dtype_from_config(self):
        assert Matrix(1, 1).dtype == 'float64'
        with cc.config.local(defaults=cc.DefaultsConfig(dtype='int32')):
            assert Matrix(1, 1).dtype == 'int32'
        assert Matrix(1, 1).dtype == 'float64'

    def test_too_many_arguments(self):
        with pytest.raises(TypeError):
            Matrix(1, 2, 3, 4)


class TestFillConstructor:
    """Test Matrix(rows, cols, fill)."""

    def test_all_elements_initialized_with_fill(self, specialization):
        """Every element equals the fill value."""
        cls, _, fill = specialization
        mat = cls(3, 6, fill)
        assert mat.shape == (3, 6)
        assert mat.size == 18
        for r in range(3):
            for c in range(6):
                assert mat.at(r, c) == fill, f"mismatch at row={r}, col={c}"

    def test_fill_zero_dimension_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix(0, 2, 5.0)

    def test_fill_wrong_type_for_int_dtype(self):
        with pytest.raises(InvalidArgumentError):
            cc.imat(2, 2, 1.5)

    def test_default_factory_needs_dimensions(self, square_2x2):
        """A default factory is only accepted by the (rows, cols) forms."""
        with pytest.raises(InvalidArgumentError):
            Matrix([[1, 2]], dtype='object', default_factory=list)
        with pytest.raises(InvalidArgumentError):
            Matrix(np.array([[1, 2]], dtype=object), default_factory=list)
        with pytest.raises(InvalidArgumentError):
            Matrix(square_2x2, default_factory=list)


class TestNestedConstructor:
    """Test Matrix([[...], ...])."""

    def test_shape_from_literal(self, rect_2x3):
        assert rect_2x3.rows == 2
        assert rect_2x3.cols == 3
        assert rect_2x3.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_values_copied_row_major(self):
        mat = Matrix([[1, 2], [3, 4], [5, 6]], dtype='int64')
        assert list(mat) == [1, 2, 3, 4, 5, 6]
        assert mat.at(2, 0) == 5

    def test_tuples_accepted(self):
        mat = Matrix(((1.5, 2.5),), dtype='float64')
        assert mat.shape == (1, 2)
        assert mat.at(0, 1) == 2.5

    def test_empty_outer_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix([])

    def test_empty_first_row_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix([[]])

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix([[1, 2], [3]])
        with pytest.raises(InvalidArgumentError):
            Matrix([[1], [2, 3]])

    def test_non_sequence_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Matrix(5)
        with pytest.raises(InvalidArgumentError):
            Matrix([1, 2, 3])

    def test_float_literal_into_int_rejected(self):
        with pytest.raises(InvalidArgumentError):
            cc.imat([[1.7]])
        with pytest.raises(InvalidArgumentError):
            Matrix([[1, 'a']], dtype='float64')

    def test_specialization_literal(self):
        mat = cc.fmat([[0.5, 1.5]])
        assert mat.dtype == 'float32'
        assert mat.at(0, 1) == 1.5


class TestNumpyConstructor:
    """Test construction from numpy arrays."""

    def test_from_numpy_keeps_dtype(self, dense_array_3x4):
        mat = Matrix.from_numpy(dense_array_3x4)
        assert mat.shape == (3, 4)
        assert mat.dtype == 'float64'
        assert mat.at(2, 3) == 11.0

    def test_ndarray_positional(self):
        mat = Matrix(np.array([[1, 2], [3, 4]], dtype=np.int32))
        assert mat.dtype == 'int32'
        assert mat.tolist() == [[1, 2], [3, 4]]

    def test_from_numpy_with_dtype(self, dense_array_3x4):
        mat = Matrix.from_numpy(dense_array_3x4, dtype='float32')
        assert mat.dtype == 'float32'
        np.testing.assert_allclose(mat.to_numpy(), dense_array_3x4)

    def test_from_numpy_unsupported_dtype_uses_default(self):
        mat = Matrix.from_numpy(np.array([[True, False]]))
        assert mat.dtype == 'float64'
        assert mat.tolist() == [[1.0, 0.0]]

    def test_from_numpy_rejects_non_2d(self):
        with pytest.raises(InvalidArgumentError):
            Matrix.from_numpy(np.arange(4))

    def test_from_numpy_rejects_empty(self):
        with pytest.raises(InvalidArgumentError):
            Matrix.from_numpy(np.empty((0, 3)))

    def test_specialization_from_numpy(self, dense_array_3x4):
        mat = cc.imat.from_numpy(dense_array_3x4.astype(np.int64))
        assert isinstance(mat, cc.IMat)
        assert mat.dtype == 'int32'
        assert mat.at(1, 1) == 5

    def test_float_array_into_int_rejected(self, dense_array_3x4):
        """Float sources never truncate into integer storage."""
        with pytest.raises(InvalidArgumentError):
            cc.imat(np.array([[1.7]]))
        with pytest.raises(InvalidArgumentError):
            cc.imat.from_numpy(dense_array_3x4)


class TestSpecializations:
    """Test the named element-type specializations."""

    @pytest.mark.parametrize("alias, cls, dtype", [
        (cc.imat, cc.IMat, 'int32'),
        (cc.uimat, cc.UIMat, 'uint32'),
        (cc.fmat, cc.FMat, 'float32'),
        (cc.dmat, cc.DMat, 'float64'),
    ])
    def test_alias_and_dtype(self, alias, cls, dtype):
        assert alias is cls
        assert issubclass(cls, Matrix)
        assert cls(1, 1).dtype == dtype

    def test_matching_dtype_accepted(self):
        assert cc.imat(1, 1, dtype='int32').dtype == 'int32'

    def test_conflicting_dtype_rejected(self):
        with pytest.raises(InvalidArgumentError):
            cc.imat(2, 2, dtype='float64')

    def test_copy_across_specializations_rejected(self):
        with pytest.raises(TypeMismatchError):
            cc.dmat(cc.imat(2, 2))
