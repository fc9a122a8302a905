"""Factorizations and solvers for square matrices.

Covers partially pivoted LU decomposition (``A = P*L*U``), determinants,
inverses, linear solves and a Cholesky-style factorization for symmetric
positive definite matrices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from tagcommon.matrix import DimensionError, Matrix

__all__ = [
    "SingularMatrixError",
    "PLU",
    "plu",
    "det",
    "inverse",
    "solve",
    "Cholesky",
    "cholesky",
    "chol_inverse",
    "lower_transpose_triangle_solve",
    "lower_triangle_solve",
    "upper_triangle_solve",
]

EPS = 1e-8
"""Pivots smaller than this in magnitude mark a matrix as singular."""


class SingularMatrixError(ArithmeticError):
    """Raised when a matrix that must be inverted is singular."""


def _rows(m: Matrix) -> List[List[float]]:
    return [m.data[i * m.cols:(i + 1) * m.cols] for i in range(m.rows)]


def _from_rows(rows: Sequence[Sequence[float]]) -> Matrix:
    nrows = len(rows)
    ncols = len(rows[0]) if nrows else 0
    return Matrix(nrows, ncols, [v for row in rows for v in row])


def _require_square(a: Matrix) -> int:
    if a.rows != a.cols:
        raise DimensionError(f"matrix must be square, got {a.rows}x{a.cols}")
    if a.rows == 0:
        raise DimensionError("operation is not defined for a scalar")
    return a.rows


def _back_substitute(lu: List[List[float]], x: List[List[float]]) -> None:
    """Solve U*x = y in place, where U is the upper triangle of ``lu``."""
    n = len(lu)
    for k in range(n - 1, -1, -1):
        try:
            inv_kk = 1.0 / lu[k][k]
        except ZeroDivisionError:
            raise SingularMatrixError(f"zero on the diagonal at {k}") from None
        x[k] = [v * inv_kk for v in x[k]]
        xk = x[k]
        for i in range(k):
            neg = -lu[i][k]
            x[i] = [xi + xkt * neg for xi, xkt in zip(x[i], xk)]


@dataclass
class PLU:
    """Partially pivoted LU decomposition of a square matrix.

    ``lu`` holds L (below the diagonal, unit diagonal implied) and U (on and
    above the diagonal) for the row-permuted input; ``piv[i]`` is the input
    row that ended up in row ``i``.
    """

    lu: Matrix
    piv: List[int]
    pivsign: int
    singular: bool

    def det(self) -> float:
        """Determinant of the decomposed matrix."""
        result = float(self.pivsign)
        n = self.lu.rows
        if n == self.lu.cols:
            for i in range(n):
                result *= self.lu.data[i * n + i]
        return result

    def p(self) -> Matrix:
        """The permutation matrix P."""
        n = self.lu.rows
        m = Matrix(n, n)
        for i, row in enumerate(self.piv):
            m.data[row * n + i] = 1.0
        return m

    def l(self) -> Matrix:  # noqa: E743
        """The unit lower-triangular factor L."""
        n, cols = self.lu.rows, self.lu.cols
        m = Matrix(n, cols)
        for i in range(n):
            m.data[i * cols + i] = 1.0
            for j in range(i):
                m.data[i * cols + j] = self.lu.data[i * cols + j]
        return m

    def u(self) -> Matrix:
        """The upper-triangular factor U."""
        n = self.lu.cols
        m = Matrix(n, n)
        for i in range(n):
            for j in range(i, n):
                m.data[i * n + j] = self.lu.data[i * n + j]
        return m

    def solve(self, b: Matrix) -> Matrix:
        """Solve ``A*x = b`` for x, one column of x per column of b."""
        n = self.lu.rows
        if b.rows != n:
            raise DimensionError(f"right-hand side needs {n} rows, got {b.rows}")
        lu = _rows(self.lu)
        src = _rows(b)
        x = [list(src[p]) for p in self.piv]

        for k in range(n):
            xk = x[k]
            for i in range(k + 1, n):
                neg = -lu[i][k]
                x[i] = [xi + xkt * neg for xi, xkt in zip(x[i], xk)]

        _back_substitute(lu, x)
        return _from_rows(x)


def plu(a: Matrix) -> PLU:
    """Decompose square matrix ``a`` so that ``a = P*L*U``."""
    n = _require_square(a)
    lu = _rows(a)
    piv = list(range(n))
    pivsign = 1
    singular = False

    for j in range(n):
        for i in range(n):
            kmax = min(i, j)
            acc = sum(lu[i][k] * lu[k][j] for k in range(kmax))
            lu[i][j] -= acc

        p = j
        for i in range(j + 1, n):
            if abs(lu[i][j]) > abs(lu[p][j]):
                p = i

        if p != j:
            lu[p], lu[j] = lu[j], lu[p]
            piv[p], piv[j] = piv[j], piv[p]
            pivsign = -pivsign

        pivot = lu[j][j]
        if abs(pivot) < EPS:
            singular = True

        if pivot != 0:
            inv = 1.0 / pivot
            for i in range(j + 1, n):
                lu[i][j] *= inv

    return PLU(lu=_from_rows(lu), piv=piv, pivsign=pivsign, singular=singular)


def det(a: Matrix) -> float:
    """Determinant of square matrix ``a``; scalars are rejected."""
    n = _require_square(a)
    d = a.data
    if n == 1:
        return d[0]
    if n == 2:
        return d[0] * d[3] - d[1] * d[2]
    if n == 3:
        return (
            d[0] * d[4] * d[8]
            - d[0] * d[5] * d[7]
            + d[1] * d[5] * d[6]
            - d[1] * d[3] * d[8]
            + d[2] * d[3] * d[7]
            - d[2] * d[4] * d[6]
        )
    if n == 4:
        (m00, m01, m02, m03,
         m10, m11, m12, m13,
         m20, m21, m22, m23,
         m30, m31, m32, m33) = d
        return (
            m00 * m11 * m22 * m33 - m00 * m11 * m23 * m32
            - m00 * m21 * m12 * m33 + m00 * m21 * m13 * m32 + m00 * m31 * m12 * m23
            - m00 * m31 * m13 * m22 - m10 * m01 * m22 * m33
            + m10 * m01 * m23 * m32 + m10 * m21 * m02 * m33
            - m10 * m21 * m03 * m32 - m10 * m31 * m02 * m23
            + m10 * m31 * m03 * m22 + m20 * m01 * m12 * m33
            - m20 * m01 * m13 * m32 - m20 * m11 * m02 * m33
            + m20 * m11 * m03 * m32 + m20 * m31 * m02 * m13
            - m20 * m31 * m03 * m12 - m30 * m01 * m12 * m23
            + m30 * m01 * m13 * m22 + m30 * m11 * m02 * m23
            - m30 * m11 * m03 * m22 - m30 * m21 * m02 * m13
            + m30 * m21 * m03 * m12
        )
    return plu(a).det()


def inverse(a: Matrix) -> Matrix:
    """Inverse of square matrix ``a``.

    Scalars and 1x1 matrices give a scalar result.  Raises
    :class:`SingularMatrixError` when the matrix is singular.
    """
    if a.rows != a.cols:
        raise DimensionError(f"matrix must be square, got {a.rows}x{a.cols}")

    if a.is_scalar():
        if a.data[0] == 0:
            raise SingularMatrixError("scalar zero has no inverse")
        return Matrix.scalar(1.0 / a.data[0])

    if a.rows == 2:
        x00, x01, x10, x11 = a.data
        determinant = x00 * x11 - x01 * x10
        if determinant == 0:
            raise SingularMatrixError("matrix is singular")
        inv = 1.0 / determinant
        return Matrix(2, 2, [x11 * inv, -x01 * inv, -x10 * inv, x00 * inv])

    decomposition = plu(a)
    if decomposition.singular:
        raise SingularMatrixError("matrix is singular")
    return decomposition.solve(Matrix.identity(a.rows))


def solve(a: Matrix, b: Matrix) -> Matrix:
    """Solve ``a*x = b`` through an LU decomposition of ``a``."""
    return plu(a).solve(b)


@dataclass
class Cholesky:
    """Upper-triangular factor ``u`` with ``a = u'*u`` for SPD input.

    Only the diagonal and upper triangle of ``u`` are meaningful; the lower
    triangle keeps whatever the input held there.
    """

    u: Matrix
    is_spd: bool

    def solve(self, b: Matrix) -> Matrix:
        """Solve ``a*x = b`` using the factorization."""
        u = _rows(self.u)
        n = len(u)
        if b.rows != n:
            raise DimensionError(f"right-hand side needs {n} rows, got {b.rows}")
        x = _rows(b)

        for i in range(n):
            for j in range(i):
                uji = u[j][i]
                x[i] = [xi - uji * xj for xi, xj in zip(x[i], x[j])]
            diag = u[i][i]
            if diag == 0:
                raise SingularMatrixError(f"zero on the diagonal at {i}")
            x[i] = [v / diag for v in x[i]]

        _back_substitute(u, x)
        return _from_rows(x)


def cholesky(a: Matrix) -> Cholesky:
    """Factor a symmetric matrix; ``is_spd`` reports whether all pivots were positive."""
    n = _require_square(a)
    u = _rows(a)
    is_spd = True

    for i in range(n):
        d = u[i][i]
        is_spd = is_spd and d > 0
        if d < EPS:
            d = EPS
        d = 1.0 / math.sqrt(d)

        row_i = u[i]
        for j in range(i, n):
            row_i[j] *= d

        for j in range(i + 1, n):
            s = row_i[j]
            if s == 0:
                continue
            row_j = u[j]
            for k in range(j, n):
                row_j[k] -= row_i[k] * s

    return Cholesky(u=_from_rows(u), is_spd=is_spd)


def chol_inverse(a: Matrix) -> Matrix:
    """Inverse of a positive definite matrix via its Cholesky factor."""
    _require_square(a)
    return cholesky(a).solve(Matrix.identity(a.rows))


def _check_rhs(u: Matrix, b: Sequence[float]) -> int:
    n = u.cols
    if len(b) < n:
        raise DimensionError(f"right-hand side needs {n} values, got {len(b)}")
    return n


def lower_transpose_triangle_solve(u: Matrix, b: Sequence[float]) -> List[float]:
    """Solve ``u'*x = b`` where ``u`` is upper triangular."""
    n = _check_rhs(u, b)
    x = [float(v) for v in b[:n]]
    d = u.data
    for i in range(n):
        x[i] /= d[i * n + i]
        for j in range(i + 1, n):
            x[j] -= x[i] * d[i * n + j]
    return x


def lower_triangle_solve(lower: Matrix, b: Sequence[float]) -> List[float]:
    """Solve ``lower*x = b`` where ``lower`` is lower triangular."""
    n = _check_rhs(lower, b)
    d = lower.data
    x: List[float] = []
    for i in range(n):
        acc = float(b[i]) - sum(d[i * n + j] * x[j] for j in range(i))
        x.append(acc / d[i * n + i])
    return x


def upper_triangle_solve(u: Matrix, b: Sequence[float]) -> List[float]:
    """Solve ``u*x = b`` where ``u`` is upper triangular."""
    n = _check_rhs(u, b)
    d = u.data
    x = [0.0] * n
    for i in range(n - 1, -1, -1):
        bi = float(b[i]) - sum(d[i * n + j] * x[j] for j in range(i + 1, n))
        x[i] = bi / d[i * n + i]
    return x