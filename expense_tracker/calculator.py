"""
Amount calculator using Python AST with whitelist validation.

The add-expense form lets users type sums like "120+45.5*2" into the
amount box. The text is parsed with ast.parse, every node is checked
against a whitelist, and a small evaluator walks the tree doing
Decimal arithmetic. Nothing is ever passed to eval().

Supported: digits, ".", "+", "-", "*", "/", unary minus, parentheses.
"""

import ast
import math
import re
from decimal import Decimal, DivisionByZero, InvalidOperation, getcontext
from typing import Set


ALLOWED_CHARACTERS = re.compile(r"^[0-9+\-*/.()\s]*$")

ALLOWED_NODES = {
    ast.Expression,
    ast.BinOp,
    ast.UnaryOp,
    ast.Constant,
    ast.Add,
    ast.Sub,
    ast.Mult,
    ast.Div,
    ast.USub,
    ast.UAdd,
}


class CalculatorError(Exception):
    """Expression could not be evaluated."""
    pass


class UnsafeExpressionError(CalculatorError):
    """Expression uses something other than plain arithmetic."""

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unsupported syntax in amount: {node_type}")


def validate_ast(node: ast.AST, allowed: Set[type] = ALLOWED_NODES) -> None:
    """Raise UnsafeExpressionError on the first node outside the whitelist."""
    for child in ast.walk(node):
        if type(child) not in allowed:
            raise UnsafeExpressionError(type(child).__name__)
        if isinstance(child, ast.Constant) and (
            isinstance(child.value, bool) or not isinstance(child.value, (int, float))
        ):
            raise UnsafeExpressionError(f"constant {child.value!r}")


def parse(expression: str) -> ast.Expression:
    """
    Parse and validate an arithmetic expression.

    Raises:
        CalculatorError: empty input, bad characters or a syntax error
        UnsafeExpressionError: anything beyond + - * / and numbers
    """
    text = expression.strip()
    if not text:
        raise CalculatorError("Amount is empty")
    if not ALLOWED_CHARACTERS.match(text):
        raise CalculatorError(f"Amount may only contain digits and + - * / . : {expression!r}")

    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as e:
        raise CalculatorError(f"Incomplete expression: {expression!r}") from e

    validate_ast(tree)
    return tree


class _Evaluator:
    """Walks a validated tree with Decimal arithmetic."""

    def evaluate(self, node: ast.AST) -> Decimal:
        method = getattr(self, f"_eval_{type(node).__name__}", None)
        if method is None:
            raise UnsafeExpressionError(type(node).__name__)
        return method(node)

    def _eval_Expression(self, node: ast.Expression) -> Decimal:
        return self.evaluate(node.body)

    def _eval_Constant(self, node: ast.Constant) -> Decimal:
        if isinstance(node.value, float) and not math.isfinite(node.value):
            raise CalculatorError("Number is too large")
        # repr keeps the literal as typed ("0.1", not 0.1000000000000000055...)
        return Decimal(repr(node.value))

    def _eval_UnaryOp(self, node: ast.UnaryOp) -> Decimal:
        operand = self.evaluate(node.operand)
        if isinstance(node.op, ast.USub):
            return -operand
        return operand

    def _eval_BinOp(self, node: ast.BinOp) -> Decimal:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if isinstance(node.op, ast.Add):
            return left + right
        if isinstance(node.op, ast.Sub):
            return left - right
        if isinstance(node.op, ast.Mult):
            return left * right
        if right == 0:
            raise CalculatorError("Cannot divide by zero")
        return left / right


def evaluate(expression: str) -> Decimal:
    """
    Evaluate an amount expression.

    >>> evaluate("120 + 45.5 * 2")
    Decimal('211.0')
    """
    tree = parse(expression)
    try:
        value = _Evaluator().evaluate(tree)
    except (InvalidOperation, DivisionByZero, OverflowError) as e:
        raise CalculatorError(f"Could not evaluate {expression!r}: {e}") from e

    # Beyond the context precision the result has already been rounded
    if not value.is_finite() or value.adjusted() >= getcontext().prec:
        raise CalculatorError(f"Result is too large: {expression!r}")
    return value


def format_result(value: Decimal) -> str:
    """
    Text to put back into the amount box.

    Integral results lose their trailing ".0"; others keep up to two
    decimal places.
    """
    try:
        if value == value.to_integral_value():
            return str(value.quantize(Decimal("1")))
        return f"{value.quantize(Decimal('0.01')).normalize():f}"
    except InvalidOperation as e:
        raise CalculatorError(f"Cannot show {value} as an amount") from e
