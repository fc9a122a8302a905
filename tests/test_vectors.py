import math

import pytest

from tagcommon.matrix import DimensionError, Matrix
from tagcommon.vectors import cross, distance, dot, magnitude, normalize


def col(*values):
    return Matrix(len(values), 1, values)


def row(*values):
    return Matrix(1, len(values), values)


def test_magnitude_of_pythagorean_vector():
    assert magnitude(col(3.0, 4.0)) == pytest.approx(5.0)


def test_magnitude_squared_equals_self_dot():
    v = row(1.5, -2.0, 7.25, 0.5)
    assert magnitude(v) ** 2 == pytest.approx(dot(v, v))


def test_magnitude_of_unit_basis_vector():
    e = Matrix.identity(4).select(0, 3, 2, 2)
    assert magnitude(e) == pytest.approx(1.0)


def test_magnitude_rejects_non_vector():
    with pytest.raises(DimensionError):
        magnitude(Matrix(2, 2, [1, 2, 3, 4]))


def test_magnitude_rejects_scalar():
    with pytest.raises(DimensionError):
        magnitude(Matrix.scalar(2.0))


def test_distance_to_self_is_zero():
    v = col(1.0, -2.0, 3.0)
    assert distance(v, v) == 0.0


def test_distance_matches_magnitude_of_difference():
    a = col(1.0, 2.0, 3.0)
    b = col(-4.0, 0.5, 9.0)
    assert distance(a, b) == pytest.approx(magnitude(a - b))


def test_distance_is_symmetric_across_row_and_column():
    a = row(1.0, 2.0, 3.0)
    b = col(0.0, -1.0, 5.0)
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_distance_with_n_ignores_trailing_terms():
    a = col(1.0, 2.0, 100.0)
    b = col(1.0, 2.0, -100.0, 55.0)
    assert distance(a, b, 2) == 0.0


def test_distance_with_n_uses_prefix():
    a = col(1.0, 5.0, 7.0)
    b = col(4.0, 1.0, 0.0)
    assert distance(a, b, 2) == pytest.approx(distance(col(1.0, 5.0), col(4.0, 1.0)))


def test_distance_without_n_requires_equal_length():
    with pytest.raises(DimensionError):
        distance(col(1.0, 2.0), col(1.0, 2.0, 3.0))


def test_distance_n_too_large():
    with pytest.raises(DimensionError):
        distance(col(1.0, 2.0), col(1.0, 2.0, 3.0), 3)


def test_distance_rejects_non_vector():
    with pytest.raises(DimensionError):
        distance(Matrix(2, 2, [1, 2, 3, 4]), col(1.0, 2.0, 3.0, 4.0))


def test_dot_of_orthogonal_basis_vectors_is_zero():
    eye = Matrix.identity(3)
    assert dot(eye.select(0, 0, 0, 2), eye.select(1, 1, 0, 2)) == 0.0


def test_dot_is_symmetric():
    a = row(1.0, -3.0, 2.5)
    b = col(4.0, 0.25, -1.0)
    assert dot(a, b) == pytest.approx(dot(b, a))


def test_dot_length_mismatch():
    with pytest.raises(DimensionError):
        dot(col(1.0, 2.0), col(1.0, 2.0, 3.0))


def test_normalize_gives_unit_length():
    n = normalize(col(3.0, -4.0, 12.0))
    assert magnitude(n) == pytest.approx(1.0)


def test_normalize_keeps_shape_and_direction():
    v = row(2.0, 6.0, -3.0)
    n = normalize(v)
    assert (n.rows, n.cols) == (v.rows, v.cols)
    assert dot(n, v) == pytest.approx(magnitude(v))


def test_normalize_does_not_modify_input():
    v = col(2.0, 0.0)
    normalize(v)
    assert v == col(2.0, 0.0)


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        normalize(col(0.0, 0.0, 0.0))


def test_cross_of_x_and_y_is_z():
    eye = Matrix.identity(3)
    x = eye.select(0, 2, 0, 0)
    y = eye.select(0, 2, 1, 1)
    z = eye.select(0, 2, 2, 2)
    assert cross(x, y) == z


def test_cross_is_orthogonal_to_inputs():
    a = col(1.0, 2.0, 3.0)
    b = col(-2.0, 0.5, 4.0)
    c = cross(a, b)
    assert dot(c, a) == pytest.approx(0.0)
    assert dot(c, b) == pytest.approx(0.0)


def test_cross_is_anticommutative():
    a = row(1.0, 2.0, 3.0)
    b = row(-2.0, 0.5, 4.0)
    assert cross(a, b) == -cross(b, a)


def test_cross_result_shaped_like_first_operand():
    c = cross(row(1.0, 0.0, 0.0), col(0.0, 1.0, 0.0))
    assert (c.rows, c.cols) == (1, 3)


def test_cross_of_parallel_vectors_vanishes():
    a = col(1.0, 2.0, 3.0)
    c = cross(a, a.scale(2.0))
    assert magnitude(c) == pytest.approx(0.0)


def test_cross_requires_length_three():
    with pytest.raises(DimensionError):
        cross(col(1.0, 2.0), col(3.0, 4.0))


def test_magnitude_matches_math_hypot():
    values = (0.5, -1.25, 3.0, 2.0)
    assert magnitude(row(*values)) == pytest.approx(math.hypot(*values))