"""Dense double-precision matrices stored in row-major order.

A matrix with zero rows or zero columns is a *scalar*: it holds exactly
one value and combines with matrices of any shape by scaling.  Like the
scalar form, a 1x1 matrix also counts as a scalar for the purposes of
``is_scalar``, multiplication and element access.
"""

from __future__ import annotations

import sys
from numbers import Real
from typing import Iterable, Optional

__all__ = ["DimensionError", "Matrix"]


class DimensionError(ValueError):
    """Raised when matrix shapes do not fit the requested operation."""


class Matrix:
    """A rows x cols matrix of floats, or a scalar when either is zero."""

    __slots__ = ("rows", "cols", "data")

    def __init__(self, rows: int, cols: int, data: Optional[Iterable[float]] = None):
        if rows < 0 or cols < 0:
            raise ValueError("matrix dimensions must be non-negative")
        values = [] if data is None else [float(v) for v in data]
        if rows == 0 or cols == 0:
            self.rows = 0
            self.cols = 0
            self.data = [values[0] if values else 0.0]
            return
        size = rows * cols
        if data is None:
            values = [0.0] * size
        elif len(values) < size:
            raise ValueError(f"expected at least {size} values, got {len(values)}")
        self.rows = rows
        self.cols = cols
        self.data = values[:size]

    @classmethod
    def scalar(cls, value: float) -> "Matrix":
        """Create a scalar holding ``value``."""
        return cls(0, 0, [value])

    @classmethod
    def identity(cls, dim: int) -> "Matrix":
        """Create a dim x dim identity matrix, or the scalar 1 when dim is 0."""
        if dim == 0:
            return cls.scalar(1.0)
        m = cls(dim, dim)
        for i in range(dim):
            m.data[i * dim + i] = 1.0
        return m

    # ------------------------------------------------------------------
    # shape queries

    def is_scalar(self) -> bool:
        """True for 0x0 scalars and for 1x1 matrices."""
        return self.rows <= 1 and self.cols <= 1

    def is_vector(self) -> bool:
        """True when the matrix has a single row or a single column."""
        return self.rows == 1 or self.cols == 1

    def is_vector_len(self, length: int) -> bool:
        """True for a row or column vector with ``length`` elements."""
        return (self.cols == 1 and self.rows == length) or (
            self.rows == 1 and self.cols == length
        )

    def _same_shape(self, other: "Matrix") -> None:
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionError(
                f"shape mismatch: {self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

    # ------------------------------------------------------------------
    # element access

    def _check_index(self, index) -> tuple[int, int]:
        try:
            row, col = index
        except (TypeError, ValueError):
            raise TypeError("matrix index must be a (row, col) pair") from None
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"index ({row}, {col}) out of range for {self.rows}x{self.cols}")
        return row, col

    def __getitem__(self, index) -> float:
        if self.is_scalar():
            raise DimensionError("cannot index a scalar; use float()")
        row, col = self._check_index(index)
        return self.data[row * self.cols + col]

    def __setitem__(self, index, value: float) -> None:
        if self.is_scalar():
            self.data[0] = float(value)
            return
        row, col = self._check_index(index)
        self.data[row * self.cols + col] = float(value)

    def __float__(self) -> float:
        if not self.is_scalar():
            raise DimensionError("only a scalar converts to float")
        return self.data[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.rows}, {self.cols}, {self.data!r})"

    # ------------------------------------------------------------------
    # copies and views

    def copy(self) -> "Matrix":
        """Return an independent copy."""
        return Matrix(self.rows, self.cols, self.data)

    def select(self, r0: int, r1: int, c0: int, c1: int) -> "Matrix":
        """Copy rows r0..r1 and columns c0..c1, both inclusive."""
        if not 0 <= r0 <= r1 < self.rows:
            raise IndexError(f"row range {r0}..{r1} out of bounds")
        if not 0 <= c0 <= c1 < self.cols:
            raise IndexError(f"column range {c0}..{c1} out of bounds")
        values = [
            self.data[row * self.cols + col]
            for row in range(r0, r1 + 1)
            for col in range(c0, c1 + 1)
        ]
        return Matrix(r1 - r0 + 1, c1 - c0 + 1, values)

    def _row_lines(self, fmt: str, transposed: bool) -> str:
        if self.rows == 0:
            return fmt % self.data[0] + "\n"
        if transposed:
            lines = (
                "".join(fmt % self.data[i * self.cols + j] for i in range(self.rows))
                for j in range(self.cols)
            )
        else:
            lines = (
                "".join(fmt % v for v in self.data[i * self.cols:(i + 1) * self.cols])
                for i in range(self.rows)
            )
        return "".join(line + "\n" for line in lines)

    def format(self, fmt: str) -> str:
        """Render each row on its own line, each element with printf-style ``fmt``."""
        return self._row_lines(fmt, transposed=False)

    def format_transpose(self, fmt: str) -> str:
        """Render the transpose, one line per column of this matrix."""
        return self._row_lines(fmt, transposed=True)

    # ------------------------------------------------------------------
    # arithmetic

    def _elementwise(self, other: "Matrix", op) -> "Matrix":
        self._same_shape(other)
        if self.is_scalar():
            return Matrix.scalar(op(self.data[0], other.data[0]))
        return Matrix(self.rows, self.cols, [op(a, b) for a, b in zip(self.data, other.data)])

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._elementwise(other, lambda a, b: a + b)

    def __iadd__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other)
        self.data = [a + b for a, b in zip(self.data, other.data)]
        return self

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._elementwise(other, lambda a, b: a - b)

    def __isub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other)
        self.data = [a - b for a, b in zip(self.data, other.data)]
        return self

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Real):
            return self.scale(float(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.scale(float(other))
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, Real):
            factor = float(other)
            self.data = [v * factor for v in self.data]
            return self
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __neg__(self) -> "Matrix":
        return self.scale(-1.0)

    def multiply(self, other: "Matrix") -> "Matrix":
        """Matrix product; a scalar on either side scales the other operand."""
        if self.is_scalar():
            return other.scale(self.data[0])
        if other.is_scalar():
            return self.scale(other.data[0])
        if self.cols != other.rows:
            raise DimensionError(
                f"cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        n, inner = other.cols, self.cols
        a, b = self.data, other.data
        values = [
            sum(a[i * inner + k] * b[k * n + j] for k in range(inner))
            for i in range(self.rows)
            for j in range(n)
        ]
        return Matrix(self.rows, n, values)

    def scale(self, factor: float) -> "Matrix":
        """Return every element multiplied by ``factor``."""
        if self.is_scalar():
            return Matrix.scalar(self.data[0] * factor)
        return Matrix(self.rows, self.cols, [factor * v for v in self.data])

    def transpose(self) -> "Matrix":
        """Return the transpose."""
        if self.is_scalar():
            return Matrix.scalar(self.data[0])
        values = [
            self.data[i * self.cols + j] for j in range(self.cols) for i in range(self.rows)
        ]
        return Matrix(self.cols, self.rows, values)

    def err_inf(self, other: "Matrix") -> float:
        """Largest absolute element-wise difference between two same-shaped matrices."""
        self._same_shape(other)
        if self.rows == 0:
            return 0.0
        return max((abs(a - b) for a, b in zip(self.data, other.data)), default=0.0)

    def max(self) -> float:
        """Largest element; the most negative float for a 0x0 scalar."""
        if self.rows == 0:
            return -sys.float_info.max
        return max(self.data)