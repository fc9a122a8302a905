"""Evaluate small matrix expressions such as ``"M'*M+M^-1"``.

The expression language, from lowest to highest precedence:

* ``A+B`` and ``A-B``: element-wise sum and difference
* ``A*B`` and ``AB``: matrix product (a scalar on either side scales)
* ``-A``: negation
* ``A^-1``: inverse (no other exponent is accepted)
* ``A'``: transpose

``M`` and ``F`` are placeholders, each consuming the next positional
argument in order.  Numeric literals such as ``2.5`` become scalars.
Parentheses group sub-expressions and spaces are ignored.
"""

from __future__ import annotations

import re
from typing import Optional

from tagcommon.linalg import inverse
from tagcommon.matrix import Matrix

__all__ = ["ExpressionError", "evaluate"]

_NUMBER = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PLACEHOLDERS = "MF"


class ExpressionError(ValueError):
    """Raised for a malformed expression or a wrong number of operands."""


class _Evaluator:
    def __init__(self, expr: str, args: tuple):
        self.expr = expr
        self.args = args
        self.pos = 0
        self.argpos = 0

    def _at_end(self) -> bool:
        return self.pos >= len(self.expr)

    def _error(self, message: str) -> ExpressionError:
        return ExpressionError(f"{message} at position {self.pos} in {self.expr!r}")

    def _gobble_right(self, acc: Optional[Matrix]) -> Optional[Matrix]:
        """Apply any postfix transposes and inverses that follow."""
        expr = self.expr
        while not self._at_end():
            c = expr[self.pos]
            if c == "'":
                if acc is None:
                    raise self._error("transpose without an operand")
                acc = acc.transpose()
                self.pos += 1
            elif c == "^":
                if acc is None:
                    raise self._error("inverse without an operand")
                if expr[self.pos + 1:self.pos + 3] != "-1":
                    raise self._error("only the exponent ^-1 is supported")
                acc = inverse(acc)
                self.pos += 3
            else:
                break
        return acc

    def _operand(self, rhs: Optional[Matrix]) -> Matrix:
        if rhs is None:
            raise self._error("missing operand")
        return rhs

    def _combine(self, acc: Optional[Matrix], rhs: Optional[Matrix]) -> Matrix:
        rhs = self._operand(rhs)
        return rhs if acc is None else acc.multiply(rhs)

    def _next_arg(self) -> Matrix:
        if self.argpos >= len(self.args):
            raise self._error("not enough matrices for the expression")
        arg = self.args[self.argpos]
        self.argpos += 1
        return arg

    def recurse(self, acc: Optional[Matrix], one_term: bool) -> Optional[Matrix]:
        expr = self.expr
        while not self._at_end():
            c = expr[self.pos]

            if c == "(":
                if one_term and acc is not None:
                    return acc
                self.pos += 1
                rhs = self._gobble_right(self.recurse(None, False))
                acc = self._combine(acc, rhs)

            elif c == ")":
                if not one_term:
                    self.pos += 1
                return acc

            elif c == "*":
                self.pos += 1
                rhs = self._gobble_right(self.recurse(None, True))
                acc = self._combine(acc, rhs)

            elif c in _PLACEHOLDERS:
                self.pos += 1
                rhs = self._gobble_right(self._next_arg())
                acc = self._combine(acc, rhs)

            elif c.isdigit() or c == ".":
                match = _NUMBER.match(expr, self.pos)
                if match is None:
                    raise self._error("malformed number")
                self.pos = match.end()
                rhs = self._gobble_right(Matrix.scalar(float(match.group())))
                acc = self._combine(acc, rhs)

            elif c == "+":
                if one_term and acc is not None:
                    return acc
                if acc is None:
                    raise self._error("unary plus is not supported")
                self.pos += 1
                rhs = self._operand(self._gobble_right(self.recurse(None, True)))
                acc = acc + rhs

            elif c == "-":
                if one_term and acc is not None:
                    return acc
                self.pos += 1
                rhs = self._operand(self._gobble_right(self.recurse(None, True)))
                acc = rhs.scale(-1.0) if acc is None else acc - rhs

            elif c == " ":
                self.pos += 1

            else:
                raise self._error(f"unknown character {c!r}")
        return acc


def evaluate(expr: str, *args: Matrix) -> Matrix:
    """Evaluate ``expr`` with ``args`` bound to its ``M``/``F`` placeholders in order.

    Always returns a new matrix; the arguments are never modified.
    """
    needed = sum(1 for c in expr if c in _PLACEHOLDERS)
    if needed == 0:
        raise ExpressionError("expression must reference at least one matrix")
    if needed != len(args):
        raise ExpressionError(
            f"expression uses {needed} matrices but {len(args)} were given"
        )
    for arg in args:
        if not isinstance(arg, Matrix):
            raise TypeError(f"expected Matrix operands, got {type(arg).__name__}")

    evaluator = _Evaluator(expr, args)
    result = evaluator.recurse(None, False)
    if result is None:
        raise ExpressionError(f"expression {expr!r} produced no value")
    return result.copy()