from fractions import Fraction

import numpy as np
import pytest

from modulesnf.gaussian import GaussianInteger, ZZi
from modulesnf.matrix import RingMatrix
from modulesnf.ring import QQ, ZZ, PrimeField


def test_entries_are_coerced_into_the_ring():
    ring = PrimeField(5)
    matrix = RingMatrix(ring, [[-1, 9]])

    assert np.array_equal(matrix.data, np.array([[4, 4]], dtype=object))

    q = RingMatrix.from_rows(QQ, [[1, 2]])
    assert all(isinstance(x, Fraction) for x in q.row(0))


def test_non_integral_entries_are_rejected():
    with pytest.raises(ValueError):
        RingMatrix.from_rows(ZZ, [[0.5]])
    with pytest.raises(ValueError):
        RingMatrix.from_rows(PrimeField(5), [[Fraction(1, 2)]])
    with pytest.raises(ValueError):
        ZZi.coerce(Fraction(3, 2))
    with pytest.raises(ValueError):
        ZZi.coerce(1 + 0.5j)

    exact = RingMatrix.from_rows(ZZ, [[2.0, Fraction(6, 3), np.int64(-4)]])
    assert exact.to_rows() == [[2, 2, -4]]
    assert ZZi.coerce(3 - 2j) == GaussianInteger(3, -2)


def test_large_integers_are_kept_exact():
    huge = 10 ** 100
    matrix = RingMatrix.from_rows(ZZ, [[huge, 1], [2, 3]])
    assert matrix.shape == (2, 2)
    assert matrix.data[0, 0] == huge


def test_ragged_rows_are_rejected():
    with pytest.raises(ValueError):
        RingMatrix.from_rows(ZZ, [[1, 2], [3]])


def test_matmul_and_dimension_mismatch():
    A = RingMatrix.from_rows(ZZ, [[1, 2], [3, 4]])
    B = RingMatrix.from_rows(ZZ, [[0, 1], [1, 0]])
    assert (A @ B).to_rows() == [[2, 1], [4, 3]]
    assert A @ RingMatrix.identity(ZZ, 2) == A

    with pytest.raises(ValueError):
        A @ RingMatrix.zeros(ZZ, 3, 1)
    with pytest.raises(ValueError):
        A @ RingMatrix.identity(QQ, 2)


def test_empty_shapes_are_preserved():
    Z = RingMatrix.zeros(ZZ, 3, 0)
    assert Z.shape == (3, 0)
    assert (RingMatrix.zeros(ZZ, 2, 3) @ Z).shape == (2, 0)
    assert Z.transpose().shape == (0, 3)
    assert Z.select_rows([]).shape == (0, 0)


def test_transpose_submatrix_and_selection():
    A = RingMatrix.from_rows(ZZ, [[1, 2, 3], [4, 5, 6]])
    assert A.transpose().to_rows() == [[1, 4], [2, 5], [3, 6]]
    assert A.T == A.transpose()
    assert A.col(1) == [2, 5]
    assert A.submatrix(0, 2, 1, 3).to_rows() == [[2, 3], [5, 6]]
    assert A.select_rows([1]).to_rows() == [[4, 5, 6]]
    assert A.select_cols([2, 0]).to_rows() == [[3, 1], [6, 4]]


def test_selection_does_not_alias():
    A = RingMatrix.from_rows(ZZ, [[1, 2], [3, 4]])
    B = A.select_rows([0, 1])
    B.data[0, 0] = 7
    assert A.data[0, 0] == 1


def test_nonzero_components():
    A = RingMatrix.from_rows(ZZ, [[0, 2], [3, 0]])
    assert list(A.nonzero_components()) == [(0, 1, 2), (1, 0, 3)]
    assert list(A.nonzero_components(col=0)) == [(1, 0, 3)]
    assert list(A.nonzero_components(row=0)) == [(0, 1, 2)]


def test_apply_vector():
    A = RingMatrix.from_rows(ZZ, [[1, 2], [0, -1]])
    assert A.apply([3, 4]) == [11, -4]
    with pytest.raises(ValueError):
        A.apply([1])


def test_arithmetic_and_block_diag():
    A = RingMatrix.from_rows(ZZ, [[1, 2], [3, 4]])
    assert (A + A) == A.scale(2)
    assert (A - A).is_zero()
    assert (-A).to_rows() == [[-1, -2], [-3, -4]]

    D = RingMatrix.block_diag(A, RingMatrix.identity(ZZ, 1))
    assert D.to_rows() == [[1, 2, 0], [3, 4, 0], [0, 0, 1]]


def test_row_and_column_primitives():
    A = RingMatrix.from_rows(ZZ, [[1, 2], [3, 4]])
    A.add_row_multiple(1, 0, -3)
    assert A.to_rows() == [[1, 2], [0, -2]]
    A.swap_cols(0, 1)
    assert A.to_rows() == [[2, 1], [-2, 0]]
    A.apply_col_2x2(0, 1, 0, 1, 1, 0)
    assert A.to_rows() == [[1, 2], [0, -2]]
    A.scale_row(1, -1)
    assert A.to_rows() == [[1, 2], [0, 2]]


def test_gaussian_matrix_to_sympy():
    import sympy as sp

    A = RingMatrix.from_rows(ZZi, [[GaussianInteger(1, 2), 3]])
    assert A.to_sympy() == sp.Matrix([[1 + 2 * sp.I, 3]])
