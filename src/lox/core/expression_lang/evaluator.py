"""
Expression evaluator for the Lox expression language.

Post-order tree walk from an expression AST to a runtime Value.  Operator
helpers raise ``OperandsError`` when handed values of the wrong type; the
node being evaluated turns that into a ``LoxRuntimeError`` naming itself and
the values it computed.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import assert_never

from ..errors import LoxRuntimeError, RuntimeErrorKind
from ..ir.expressions import Binary, Expr, Grouping, Infix, Literal, Prefix, Unary
from ..ir.values import (
    BooleanValue,
    NilValue,
    NumberValue,
    StringValue,
    Value,
    boolean,
    number,
    string,
)

logger = logging.getLogger(__name__)

NUMBERS_EXPECTED = "(number, number)"
# `+` also concatenates strings, so its expectation is compound.
ADDITION_EXPECTED = "(number, number) or (string, string)"
NUMBER_EXPECTED = "(number)"


class OperandsError(Exception):
    """An operator helper received operands it cannot work with."""


def evaluate(expr: Expr) -> Value:
    """Evaluate an expression tree.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value.

    Raises:
        LoxRuntimeError: If an operator gets operands of the wrong type.
    """
    value = _interpret(expr)
    logger.debug("evaluated %s => %s", expr, value.describe())
    return value


def _interpret(expr: Expr) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, Grouping):
        return _interpret(expr.expression)

    if isinstance(expr, Unary):
        return _interpret_unary(expr)

    if isinstance(expr, Binary):
        return _interpret_binary(expr)

    assert_never(expr)


def _interpret_unary(expr: Unary) -> Value:
    """Evaluate a unary expression."""
    operand = _interpret(expr.operand)
    if expr.op == Prefix.NOT:
        return boolean(not is_truthy(operand))
    if expr.op == Prefix.INVERSE:
        try:
            return negate(operand)
        except OperandsError as e:
            raise LoxRuntimeError(
                RuntimeErrorKind.UNARY_OPERANDS, expr, (operand,), NUMBER_EXPECTED
            ) from e
    assert_never(expr.op)


def _interpret_binary(expr: Binary) -> Value:
    """Evaluate a binary expression; both sides are always evaluated, left first."""
    left = _interpret(expr.left)
    right = _interpret(expr.right)
    try:
        return apply_infix(expr.op, left, right)
    except OperandsError as e:
        expected = ADDITION_EXPECTED if expr.op == Infix.ADD else NUMBERS_EXPECTED
        raise LoxRuntimeError(
            RuntimeErrorKind.BINARY_OPERANDS, expr, (left, right), expected
        ) from e


def apply_infix(op: Infix, left: Value, right: Value) -> Value:
    """Apply a binary operator to two computed values."""
    if op == Infix.EQ:
        return boolean(values_equal(left, right))
    if op == Infix.NE:
        return boolean(not values_equal(left, right))
    if op == Infix.LT:
        return _compare(left, right, lambda a, b: a < b)
    if op == Infix.LTE:
        return _compare(left, right, lambda a, b: a <= b)
    if op == Infix.GT:
        return _compare(left, right, lambda a, b: a > b)
    if op == Infix.GTE:
        return _compare(left, right, lambda a, b: a >= b)
    if op == Infix.ADD:
        return add(left, right)
    if op == Infix.SUB:
        return _math(left, right, lambda a, b: a - b)
    if op == Infix.MULT:
        return _math(left, right, lambda a, b: a * b)
    if op == Infix.DIV:
        return _math(left, right, divide)
    assert_never(op)


def is_truthy(value: Value) -> bool:
    """``nil`` and ``false`` are falsy; everything else (0 and "" included) is truthy."""
    if isinstance(value, NilValue):
        return False
    if isinstance(value, BooleanValue):
        return value.value
    return True


def values_equal(left: Value, right: Value) -> bool:
    """Structural equality; values of different variants are never equal."""
    if isinstance(left, NilValue) and isinstance(right, NilValue):
        return True
    if isinstance(left, StringValue) and isinstance(right, StringValue):
        return left.value == right.value
    if isinstance(left, NumberValue) and isinstance(right, NumberValue):
        return left.value == right.value
    if isinstance(left, BooleanValue) and isinstance(right, BooleanValue):
        return left.value == right.value
    return False


def negate(value: Value) -> NumberValue:
    if not isinstance(value, NumberValue):
        raise OperandsError(value.type_name)
    return number(-value.value)


def add(left: Value, right: Value) -> Value:
    """Concatenate two strings, or add two numbers."""
    if isinstance(left, StringValue) and isinstance(right, StringValue):
        return string(left.value + right.value)
    return _math(left, right, lambda a, b: a + b)


def divide(a: float, b: float) -> float:
    """IEEE division: x/0 is ±inf, 0/0 is nan."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _numbers(left: Value, right: Value) -> tuple[float, float]:
    if not (isinstance(left, NumberValue) and isinstance(right, NumberValue)):
        raise OperandsError(f"({left.type_name}, {right.type_name})")
    return left.value, right.value


def _math(left: Value, right: Value, compute: Callable[[float, float], float]) -> NumberValue:
    a, b = _numbers(left, right)
    return number(compute(a, b))


def _compare(
    left: Value, right: Value, compare: Callable[[float, float], bool]
) -> BooleanValue:
    a, b = _numbers(left, right)
    return boolean(compare(a, b))
