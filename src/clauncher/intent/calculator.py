"""Safe arithmetic evaluation for calculator queries."""

from __future__ import annotations

import ast
import math
import operator
import re
from collections.abc import Callable

_OPERATOR_CHARS = frozenset("+-*/^(")
_ALLOWED_EXPRESSION = re.compile(r"^[0-9.\s+\-*/()]+$")
_LEADING_ZEROS = re.compile(r"(?<![\d.])0+(?=\d)")

_BINARY_OPS: dict[type[ast.operator], Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}
_UNARY_OPS: dict[type[ast.unaryop], Callable[[float], float]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class CalculatorError(ValueError):
    """Expression could not be parsed or evaluated."""


def looks_like_math(text: str) -> bool:
    """Heuristic used when no calculator prefix is given."""
    return any(ch.isdigit() for ch in text) and any(ch in _OPERATOR_CHARS for ch in text)


def normalize_expression(text: str) -> str:
    """Map locale and keyboard variants onto Python arithmetic syntax."""
    normalized = (
        text.replace("×", "*")
        .replace("x", "*")
        .replace("X", "*")
        .replace("÷", "/")
        .replace(",", ".")
        .replace("^", "**")
    )
    return _LEADING_ZEROS.sub("", normalized)


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.12g}"


class ArithmeticEvaluator:
    """Evaluates `+ - * / ^ ( )` over decimal literals without `eval`.

    The expression is parsed with `ast` and only numeric constants, the four
    basic binary operators, power and unary signs are accepted. Exponents are
    bounded by `max_exponent` and input by `max_length` so a pasted query cannot
    stall the search. Overflow, recursion and memory failures all surface as
    `CalculatorError`.
    """

    def __init__(self, max_exponent: int = 1000, max_length: int = 256) -> None:
        self.max_exponent = max_exponent
        self.max_length = max_length

    def evaluate(self, expression: str) -> float:
        normalized = normalize_expression(expression).strip()
        if not normalized or not _ALLOWED_EXPRESSION.match(normalized):
            raise CalculatorError(f"Unsupported expression: {expression!r}")
        if len(normalized) > self.max_length:
            raise CalculatorError(f"Expression longer than {self.max_length} characters")
        try:
            tree = ast.parse(normalized, mode="eval")
        except (SyntaxError, ValueError, RecursionError, MemoryError) as exc:
            raise CalculatorError(f"Invalid expression: {expression!r}") from exc

        try:
            value = self._eval(tree.body)
        except (RecursionError, MemoryError) as exc:
            raise CalculatorError(f"Expression nested too deeply: {expression!r}") from exc
        if not math.isfinite(value):
            raise CalculatorError(f"Result is not finite: {expression!r}")
        return value

    def _eval(self, node: ast.AST) -> float:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise CalculatorError("Only numeric literals are supported")
            try:
                return float(node.value)
            except OverflowError as exc:
                raise CalculatorError("Numeric literal out of range") from exc

        if isinstance(node, ast.UnaryOp):
            unary = _UNARY_OPS.get(type(node.op))
            if unary is None:
                raise CalculatorError("Unsupported unary operator")
            return unary(self._eval(node.operand))

        if isinstance(node, ast.BinOp):
            binary = _BINARY_OPS.get(type(node.op))
            if binary is None:
                raise CalculatorError("Unsupported operator")
            left = self._eval(node.left)
            right = self._eval(node.right)
            if isinstance(node.op, ast.Pow) and abs(right) > self.max_exponent:
                raise CalculatorError("Exponent too large")
            try:
                result = binary(left, right)
            except (ZeroDivisionError, OverflowError) as exc:
                raise CalculatorError(str(exc)) from exc
            if isinstance(result, complex):
                raise CalculatorError("Complex results are not supported")
            return result

        raise CalculatorError(f"Unsupported syntax: {type(node).__name__}")
