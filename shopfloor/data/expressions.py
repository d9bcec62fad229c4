"""
Arithmetic evaluation for cells such as "12/40" that sort by their value.

Only numeric literals, parentheses, unary +/- and the binary operators
+ - * / are accepted. Names, calls, attribute access and every other Python
construct are rejected before anything is evaluated.
"""

from __future__ import annotations

import ast
import operator
from typing import Callable, Dict, Tuple, Type, Union

Number = Union[int, float]

MAX_EXPRESSION_LENGTH = 100

_BINARY: Dict[Type[ast.operator], Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY: Dict[Type[ast.unaryop], Callable[[Number], Number]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class ExpressionError(ValueError):
    pass


def _eval(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant):
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return node.value
        raise ExpressionError(f"Unsupported literal: {node.value!r}")
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY:
        left = _eval(node.left)
        right = _eval(node.right)
        try:
            return _BINARY[type(node.op)](left, right)
        except ZeroDivisionError as exc:
            raise ExpressionError("Division by zero") from exc
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
        return _UNARY[type(node.op)](_eval(node.operand))
    raise ExpressionError(f"Unsupported element: {type(node).__name__}")


def evaluate(text: str) -> float:
    expr = str(text).strip()
    if not expr:
        raise ExpressionError("Empty expression")
    if len(expr) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError("Expression too long")
    try:
        tree = ast.parse(expr, mode="eval")
    except (SyntaxError, ValueError) as exc:
        raise ExpressionError(f"Invalid expression: {expr!r}") from exc
    return float(_eval(tree.body))


def expression_sort_key(value: str) -> Tuple[int, object]:
    """Sort key for expression cells: evaluated numbers first, unparseable text after."""
    try:
        return (0, evaluate(value))
    except ExpressionError:
        return (1, str(value).casefold())
