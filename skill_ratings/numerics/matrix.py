"""
Dense matrix helpers used by the N-team match quality calculation.

Thin wrappers over numpy that always return fresh float64 arrays and raise
the package's own errors instead of numpy's, so callers see the same error
taxonomy everywhere. Determinant and inverse go through numpy.linalg (LU),
which is fine for the player-count sized matrices seen here.
"""

from typing import Sequence

import numpy as np

from ..base.errors import DimensionMismatch, SingularMatrix


def as_matrix(values) -> np.ndarray:
    """Copy values into a contiguous 2D float64 array."""
    m = np.array(values, dtype=np.float64)
    if m.ndim == 1:
        m = m.reshape(-1, 1)
    if m.ndim != 2:
        raise DimensionMismatch(f"expected a 2D matrix, got {m.ndim} dimensions")
    return np.ascontiguousarray(m)


def column_vector(values: Sequence[float]) -> np.ndarray:
    """n x 1 matrix from a flat sequence."""
    return as_matrix(np.asarray(values, dtype=np.float64).reshape(-1, 1))


def diagonal(values: Sequence[float]) -> np.ndarray:
    """Square matrix with values on the diagonal."""
    return np.diag(np.asarray(values, dtype=np.float64))


def identity(n: int) -> np.ndarray:
    return np.eye(n, dtype=np.float64)


def is_square(m: np.ndarray) -> bool:
    return m.ndim == 2 and m.shape[0] == m.shape[1] and m.shape[0] > 0


def transpose(m: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(as_matrix(m).T)


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix product a @ b."""
    a = as_matrix(a)
    b = as_matrix(b)
    if a.shape[1] != b.shape[0]:
        raise DimensionMismatch(
            f"cannot multiply {a.shape[0]}x{a.shape[1]} by {b.shape[0]}x{b.shape[1]}"
        )
    return a @ b


def determinant(m: np.ndarray) -> float:
    m = as_matrix(m)
    if not is_square(m):
        raise DimensionMismatch(f"Matrix must be square, got {m.shape[0]}x{m.shape[1]}")
    return float(np.linalg.det(m))


def inverse(m: np.ndarray) -> np.ndarray:
    """
    Inverse of a square matrix.

    Raises:
        DimensionMismatch: m is not square
        SingularMatrix: m has zero determinant
    """
    m = as_matrix(m)
    if not is_square(m):
        raise DimensionMismatch(f"Matrix must be square, got {m.shape[0]}x{m.shape[1]}")
    # Rank via SVD: LU round-off leaves tiny non-zero determinants on singular input
    if np.linalg.matrix_rank(m) < m.shape[0]:
        raise SingularMatrix("matrix has zero determinant and cannot be inverted")
    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError as e:
        raise SingularMatrix(str(e)) from e
