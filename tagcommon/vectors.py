"""Operations on row and column vectors held in :class:`Matrix` objects.

A vector is any matrix with a single row or a single column, including a
1x1 matrix.  A row vector and a column vector of the same length may be
combined freely: only the number of elements matters.
"""

from __future__ import annotations

import math
from typing import Optional

from tagcommon.matrix import DimensionError, Matrix

__all__ = ["magnitude", "distance", "dot", "normalize", "cross"]


def _require_vector(m: Matrix, name: str) -> None:
    if not m.is_vector():
        raise DimensionError(f"{name} must be a row or column vector, got {m.rows}x{m.cols}")


def _length(m: Matrix) -> int:
    return m.rows * m.cols


def magnitude(a: Matrix) -> float:
    """Euclidean length of vector ``a``."""
    _require_vector(a, "a")
    return math.sqrt(sum(v * v for v in a.data))


def distance(a: Matrix, b: Matrix, n: Optional[int] = None) -> float:
    """Euclidean distance between two vectors.

    With ``n`` given, only the first ``n`` elements of each are used and the
    vectors may differ in length as long as both hold at least ``n``.
    Without it, both vectors must have the same number of elements.
    """
    _require_vector(a, "a")
    _require_vector(b, "b")
    len_a, len_b = _length(a), _length(b)
    if n is None:
        if len_a != len_b:
            raise DimensionError(f"vector lengths differ: {len_a} vs {len_b}")
        n = len_a
    elif n < 0 or n > len_a or n > len_b:
        raise DimensionError(f"cannot use {n} terms of vectors of length {len_a} and {len_b}")
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a.data[:n], b.data[:n])))


def dot(a: Matrix, b: Matrix) -> float:
    """Dot product of two vectors with the same number of elements."""
    _require_vector(a, "a")
    _require_vector(b, "b")
    if _length(a) != _length(b):
        raise DimensionError(f"vector lengths differ: {_length(a)} vs {_length(b)}")
    return sum(x * y for x, y in zip(a.data, b.data))


def normalize(a: Matrix) -> Matrix:
    """Unit vector with the direction and shape of ``a``."""
    mag = magnitude(a)
    if not mag > 0:
        raise ValueError("cannot normalize a vector of zero magnitude")
    return Matrix(a.rows, a.cols, [v / mag for v in a.data])


def cross(a: Matrix, b: Matrix) -> Matrix:
    """Cross product ``a x b`` of two 3-element vectors, shaped like ``a``."""
    if not (a.is_vector_len(3) and b.is_vector_len(3)):
        raise DimensionError("cross product needs two vectors of length 3")
    a0, a1, a2 = a.data
    b0, b1, b2 = b.data
    return Matrix(
        a.rows,
        a.cols,
        [a1 * b2 - a2 * b1, a2 * b0 - a0 * b2, a0 * b1 - a1 * b0],
    )