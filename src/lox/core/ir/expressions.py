"""
Expression tree for the Lox expression language.

Nodes are frozen pydantic models built bottom-up by the parser.  Each node
keeps the tokens that produced it (for diagnostics and re-rendering) and a
weak, non-owning link to its parent, so dropping the root frees the tree.

Supports:
- Literals: numbers, strings, true, false, nil
- Grouping: ( expr )
- Unary prefix: !, -
- Binary infix: == != < <= > >= + - * /
"""

from __future__ import annotations

import weakref
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..tokens import Token
from .values import NumberValue, StringValue, Value

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Prefix(StrEnum):
    """Unary prefix operators."""

    NOT = "not"
    INVERSE = "inverse"

    @property
    def symbol(self) -> str:
        return "!" if self is Prefix.NOT else "-"


class Infix(StrEnum):
    """Binary infix operators."""

    # Equality
    EQ = "eq"
    NE = "ne"
    # Comparison
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MULT = "mult"
    DIV = "div"

    @property
    def symbol(self) -> str:
        return _INFIX_SYMBOLS[self]


_INFIX_SYMBOLS: dict[Infix, str] = {
    Infix.EQ: "==",
    Infix.NE: "!=",
    Infix.LT: "<",
    Infix.LTE: "<=",
    Infix.GT: ">",
    Infix.GTE: ">=",
    Infix.ADD: "+",
    Infix.SUB: "-",
    Infix.MULT: "*",
    Infix.DIV: "/",
}


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class _Node(BaseModel):
    """Shared behaviour: token bookkeeping and the weak parent link."""

    tokens: tuple[Token, ...] = Field(description="Tokens that produced this node")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    _parent: weakref.ReferenceType[Any] | None = PrivateAttr(default=None)
    _height: int = PrivateAttr(default=1)

    @property
    def parent(self) -> Expr | None:
        """The enclosing node, or None for the root (or once the parent is gone)."""
        if self._parent is None:
            return None
        parent: Expr | None = self._parent()
        return parent

    @property
    def height(self) -> int:
        """Number of nodes on the longest path from this node down to a literal."""
        return self._height

    @property
    def children(self) -> tuple[Expr, ...]:
        return ()

    def _adopt(self) -> None:
        """Point every child's parent link at this node and record the height."""
        for child in self.children:
            child._parent = weakref.ref(self)
        self._height = 1 + max((child.height for child in self.children), default=0)


class Literal(_Node):
    """A literal value: number, string, true, false or nil."""

    value: Value = Field(description="The literal value")

    def __str__(self) -> str:
        if isinstance(self.value, StringValue):
            return self.value.describe()
        return str(self.value)

    def to_sexpr(self) -> str:
        if isinstance(self.value, NumberValue):
            return repr(self.value.value)
        return str(self.value)


class Grouping(_Node):
    """Parenthesized expression: ( expression )."""

    expression: Expr

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.expression,)

    def __str__(self) -> str:
        return f"({self.expression})"

    def to_sexpr(self) -> str:
        return f"(group {self.expression.to_sexpr()})"


class Unary(_Node):
    """Unary operation: op operand."""

    op: Prefix
    operand: Expr

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        return f"{self.op.symbol}{self.operand}"

    def to_sexpr(self) -> str:
        return f"({self.op.symbol} {self.operand.to_sexpr()})"


class Binary(_Node):
    """Binary operation: left op right."""

    left: Expr
    op: Infix
    right: Expr

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{self.left} {self.op.symbol} {self.right}"

    def to_sexpr(self) -> str:
        return f"({self.op.symbol} {self.left.to_sexpr()} {self.right.to_sexpr()})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Grouping | Unary | Binary

# Rebuild models for recursive forward references
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()


def make_grouping(expression: Expr, open: Token, close: Token) -> Grouping:
    node = Grouping(expression=expression, tokens=(open, close))
    node._adopt()
    return node


def make_unary(op: Prefix, operand: Expr, token: Token) -> Unary:
    node = Unary(op=op, operand=operand, tokens=(token,))
    node._adopt()
    return node


def make_binary(left: Expr, op: Infix, right: Expr, token: Token) -> Binary:
    node = Binary(left=left, op=op, right=right, tokens=(token,))
    node._adopt()
    return node
