"""Tests for the dense matrix helpers."""

import math

import numpy as np
import pytest

from skill_ratings import DimensionMismatch, SingularMatrix
from skill_ratings.numerics import matrix


def test_determinants():
    assert matrix.determinant([[1, 2], [3, 4]]) == pytest.approx(-2.0)
    assert matrix.determinant([[1, 1], [1, 1]]) == pytest.approx(0.0, abs=1e-12)
    assert matrix.determinant([[3, 1, 4], [1, 5, 9], [2, 6, 5]]) == pytest.approx(-90.0)
    assert matrix.determinant(
        [[3, 1, 4, 1], [5, 9, 2, 6], [5, 3, 5, 8], [9, 7, 9, 3]]
    ) == pytest.approx(98.0)


def test_determinant_of_pi_digits():
    """8x8 built from the first 64 digits of pi."""
    digits = "3141592653589793238462643383279502884197169399375105820974944592"
    m = np.array([int(d) for d in digits], dtype=float).reshape(8, 8)
    assert matrix.determinant(m) == pytest.approx(1378143.0, rel=1e-9)


def test_determinant_requires_square():
    with pytest.raises(DimensionMismatch):
        matrix.determinant([[1, 2, 3], [4, 5, 6]])


def test_inverse():
    inv = matrix.inverse([[4, 3], [3, 2]])
    np.testing.assert_allclose(inv, [[-2, 3], [3, -4]], atol=1e-12)

    m = np.array([[3, 1, 4], [1, 5, 9], [2, 6, 5]], dtype=float)
    np.testing.assert_allclose(matrix.multiply(m, matrix.inverse(m)), np.eye(3), atol=1e-12)


def test_inverse_of_singular_matrix_raises():
    with pytest.raises(SingularMatrix):
        matrix.inverse([[1, 1], [1, 1]])
    with pytest.raises(SingularMatrix):
        matrix.inverse([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


def test_transpose_and_multiply():
    a = [[1, 2], [3, 4], [5, 6]]
    np.testing.assert_array_equal(matrix.transpose(a), [[1, 3, 5], [2, 4, 6]])
    np.testing.assert_array_equal(matrix.multiply(matrix.transpose(a), a), [[35, 44], [44, 56]])

    with pytest.raises(DimensionMismatch):
        matrix.multiply(a, a)


def test_builders():
    np.testing.assert_array_equal(matrix.diagonal([1, 2]), [[1, 0], [0, 2]])
    np.testing.assert_array_equal(matrix.identity(2), np.eye(2))
    assert matrix.column_vector([1, 2, 3]).shape == (3, 1)
    assert matrix.is_square(matrix.identity(3))
    assert not matrix.is_square(matrix.column_vector([1, 2]))


def test_results_do_not_alias_input():
    source = np.array([[1.0, 2.0], [3.0, 4.0]])
    t = matrix.transpose(source)
    t[0, 0] = math.pi
    assert source[0, 0] == 1.0
