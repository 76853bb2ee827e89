"""
Tests for dense Matrix / Vector primitives.
"""

from __future__ import annotations

import numpy as np
import pytest

from trustfeed.analysis_engine.matrix import Matrix, Vector
from trustfeed.core.exceptions import ContractViolation


def test_transpose_swaps_rows_and_columns():
    m = Matrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    t = m.transpose()
    assert t.shape == (3, 2)
    assert t.tolist() == [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]
    # original untouched
    assert m.shape == (2, 3)


def test_mul_vec():
    m = Matrix([[0.0, 0.5, 0.5], [1.0, 0.0, 0.0], [0.5, 0.5, 0.0]])
    out = m.transpose().mul_vec(Vector([1.0, 0.0, 0.0]))
    assert out.tolist() == [0.0, 0.5, 0.5]


def test_mul_vec_dimension_mismatch():
    m = Matrix.zeros(2, 3)
    with pytest.raises(ContractViolation):
        m.mul_vec(Vector([1.0, 2.0]))


def test_scale_and_add():
    v = Vector([0.0, 0.5, 0.5]).scale(0.8).add(Vector([1.0, 0.0, 0.0]).scale(0.2))
    assert v.tolist() == pytest.approx([0.2, 0.4, 0.4])
    assert v.sum() == pytest.approx(1.0)


def test_add_length_mismatch():
    with pytest.raises(ContractViolation):
        Vector([1.0]).add(Vector([1.0, 2.0]))


def test_one_hot_and_zeros():
    assert Vector.one_hot(3, 1).tolist() == [0.0, 1.0, 0.0]
    assert Vector.zeros(2).tolist() == [0.0, 0.0]
    with pytest.raises(ContractViolation):
        Vector.one_hot(3, 3)


def test_instances_are_read_only():
    m = Matrix([[1.0, 2.0], [3.0, 4.0]])
    v = Vector([1.0, 2.0])
    with pytest.raises(ValueError):
        m.data[0, 0] = 9.0
    with pytest.raises(ValueError):
        v.data[0] = 9.0


def test_rejects_wrong_rank():
    with pytest.raises(ContractViolation):
        Vector([[1.0, 2.0]])
    with pytest.raises(ContractViolation):
        Matrix([1.0, 2.0])


def test_row_helpers():
    m = Matrix(np.array([[0.0, 2.0], [3.0, 0.0]]))
    assert m.row_sums().tolist() == [2.0, 3.0]
    assert m.diagonal().tolist() == [0.0, 0.0]
    assert m.row(1).tolist() == [3.0, 0.0]
    assert m[0, 1] == 2.0
    assert m.is_square
