"""
Lox intermediate representation: expression tree and runtime values.
"""

from .expressions import (
    Binary,
    Expr,
    Grouping,
    Infix,
    Literal,
    Prefix,
    Unary,
)
from .values import (
    FALSE,
    NIL,
    TRUE,
    BooleanValue,
    NilValue,
    NumberValue,
    StringValue,
    Value,
)

__all__ = [
    # Expressions
    "Binary",
    "Expr",
    "Grouping",
    "Infix",
    "Literal",
    "Prefix",
    "Unary",
    # Values
    "BooleanValue",
    "FALSE",
    "NIL",
    "NilValue",
    "NumberValue",
    "StringValue",
    "TRUE",
    "Value",
]
