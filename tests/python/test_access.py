"""
Tests for bounds-checked element access.
"""

import numpy as np
import pytest

from corcovado import Matrix, OutOfRangeError, CorcoError


class TestAt:
    """Test Matrix.at / Matrix.set."""

    def test_at_reads_row_major(self, rect_2x3):
        assert rect_2x3.at(0, 0) == 1
        assert rect_2x3.at(0, 2) == 3
        assert rect_2x3.at(1, 0) == 4
        assert rect_2x3.at(1, 2) == 6

    def test_set_mutates_in_place(self, rect_2x3):
        rect_2x3.set(1, 1, 50)
        assert rect_2x3.at(1, 1) == 50
        assert rect_2x3.tolist() == [[1, 2, 3], [4, 50, 6]]

    def test_row_out_of_range(self):
        """Matrix(2, 2, 0).at(5, 0) fails with out-of-range."""
        mat = Matrix(2, 2, 0)
        with pytest.raises(OutOfRangeError, match="Row"):
            mat.at(5, 0)

    def test_col_out_of_range(self):
        mat = Matrix(2, 2, 0)
        with pytest.raises(OutOfRangeError, match="Column"):
            mat.at(0, 2)

    def test_row_checked_first(self):
        mat = Matrix(2, 2, 0)
        with pytest.raises(OutOfRangeError, match="Row"):
            mat.at(2, 2)

    @pytest.mark.parametrize("row, col", [(3, 0), (0, 4), (3, 4), (100, 100)])
    def test_out_of_range_for_any_index_at_or_past_bound(self, row, col):
        mat = Matrix(3, 4)
        with pytest.raises(OutOfRangeError):
            mat.at(row, col)
        with pytest.raises(OutOfRangeError):
            mat.set(row, col, 1.0)

    def test_negative_index_not_wrapped(self):
        mat = Matrix(2, 2, 1.0)
        with pytest.raises(OutOfRangeError):
            mat.at(-1, 0)
        with pytest.raises(OutOfRangeError):
            mat.at(0, -1)

    def test_out_of_range_is_index_error(self):
        """Out-of-range errors are also IndexError and CorcoError."""
        mat = Matrix(1, 1)
        with pytest.raises(IndexError):
            mat.at(1, 0)
        with pytest.raises(CorcoError):
            mat.at(1, 0)

    def test_numpy_integer_index(self, rect_2x3):
        assert rect_2x3.at(np.int64(1), np.int32(2)) == 6

    def test_non_integer_index(self, rect_2x3):
        with pytest.raises(TypeError):
            rect_2x3.at(0.5, 0)

    def test_failed_set_leaves_matrix_unchanged(self, square_2x2):
        with pytest.raises(OutOfRangeError):
            square_2x2.set(0, 9, 100)
        assert square_2x2.tolist() == [[1, 2], [3, 4]]


class TestSubscript:
    """Test m[row, col] access."""

    def test_getitem(self, square_2x2):
        assert square_2x2[1, 0] == 3

    def test_setitem(self, square_2x2):
        square_2x2[0, 1] = 20
        assert square_2x2.at(0, 1) == 20

    def test_getitem_out_of_range(self, square_2x2):
        with pytest.raises(OutOfRangeError):
            square_2x2[2, 0]

    def test_key_must_be_pair(self, square_2x2):
        with pytest.raises(TypeError):
            square_2x2[0]
        with pytest.raises(TypeError):
            square_2x2[0, 0, 0] = 1
