# tagcommon

Pure-Python helpers for small numeric and text work:

- `tagcommon.matrix`: the `Matrix` type. It holds dense row-major floats. A matrix
  with zero rows or columns is a scalar, and a 1x1 matrix also counts as a scalar for
  `is_scalar`, products and element access. It supports `+`, `-`, `*` (matrix product,
  or scaling by a number or scalar), negation, `transpose`, `select`, `err_inf`, `max`,
  and printf-style rendering with `format` and `format_transpose`.
- `tagcommon.vectors`: `magnitude`, `distance`, `dot`, `normalize` and `cross` for row
  or column vectors.
- `tagcommon.linalg`: partially pivoted LU (`plu`, `PLU`), plus `det`, `inverse`,
  `solve`, a Cholesky-style factorization (`cholesky`, `Cholesky`, `chol_inverse`) and
  the triangular solvers `lower_transpose_triangle_solve`, `lower_triangle_solve` and
  `upper_triangle_solve`.
- `tagcommon.matexpr`: `evaluate`, which runs compact matrix expressions such as
  `"M'*M^-1 + 2*M"`. `M` and `F` take the next argument; `'` transposes, `^-1`
  inverts, and parentheses group terms.
- `tagcommon.textutil`: string helpers such as `split`, `split_spaces`, `trim`,
  `replace`, `replace_many`, `substring`, `expand_envs`, and `StringFeeder`, a cursor
  that tracks line and column.

The package has no runtime dependencies.

## Installation

```
pip install tagcommon
```

To install with the test requirements:

```
pip install "tagcommon[test]"
```

## Examples

```python
from tagcommon.matrix import Matrix
from tagcommon import linalg
from tagcommon.matexpr import evaluate

a = Matrix(2, 2, [4, 7, 2, 6])
print(linalg.det(a))            # 10.0
inv = linalg.inverse(a)
print((a * inv).format("%8.3f"))

x = linalg.solve(a, Matrix(2, 1, [1, 2]))
r = evaluate("M'*M + 2*M", a, a)
```

Vectors:

```python
from tagcommon.matrix import Matrix
from tagcommon.vectors import cross, dot

u = Matrix(3, 1, [1, 0, 0])
v = Matrix(3, 1, [0, 1, 0])
print(cross(u, v).data)   # [0.0, 0.0, 1.0]
print(dot(u, v))          # 0.0
```

Walking through text:

```python
from tagcommon.textutil import StringFeeder, split

print(split("this is a haystack", " "))   # ['this', 'is', 'a', 'haystack']
feeder = StringFeeder("ab\ncd")
feeder.require("ab\n")
print(feeder.line, feeder.column)           # 2 0
```

Errors raise exceptions: `DimensionError` for shapes that do not fit,
`SingularMatrixError` when an inverse or solve meets a singular matrix, and
`ExpressionError` for malformed expressions or a wrong number of operands.

## What the package does not do

- It does not read or write image files of any kind.
- It has no singular value decomposition; `linalg` offers LU and Cholesky only.
- It is written for small matrices in plain Python lists, not for speed on large ones.

## Running the tests

```
pytest
```