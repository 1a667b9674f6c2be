"""
Recursive descent parser for the Lox expression language.

Grammar (precedence low to high, every binary level left-associative):
    expression     → equality
    equality       → comparison (("!=" | "==") comparison)*
    comparison     → addition ((">" | ">=" | "<" | "<=") addition)*
    addition       → multiplication (("-" | "+") multiplication)*
    multiplication → unary (("/" | "*") unary)*
    unary          → ("!" | "-") unary | primary
    primary        → NUMBER | STRING | "false" | "true" | "nil" | "(" expression ")"
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from ..errors import LexError, ParseError, ParseErrorKind
from ..ir.expressions import (
    Expr,
    Infix,
    Literal,
    Prefix,
    make_binary,
    make_grouping,
    make_unary,
)
from ..ir.values import FALSE, NIL, TRUE, number, string
from ..source import Source
from ..tokens import Token, TokenKind
from .tokenizer import scan

logger = logging.getLogger(__name__)

ParseFunc = Callable[[], Expr]

# Open groupings and prefix operators pending at once.  Each grouping level
# costs a dozen Python frames in the descent, so this keeps parsing well
# inside the interpreter's recursion limit.
MAX_NESTING = 48
# Height of the finished tree; bounds the evaluator and the tree printers,
# which recurse once or twice per level.
MAX_HEIGHT = 256

_EQUALITY_OPS: dict[TokenKind, Infix] = {
    TokenKind.BANG_EQ: Infix.NE,
    TokenKind.EQ_EQ: Infix.EQ,
}
_COMPARISON_OPS: dict[TokenKind, Infix] = {
    TokenKind.GT: Infix.GT,
    TokenKind.GT_EQ: Infix.GTE,
    TokenKind.LT: Infix.LT,
    TokenKind.LT_EQ: Infix.LTE,
}
_ADDITION_OPS: dict[TokenKind, Infix] = {
    TokenKind.MINUS: Infix.SUB,
    TokenKind.PLUS: Infix.ADD,
}
_MULTIPLICATION_OPS: dict[TokenKind, Infix] = {
    TokenKind.SLASH: Infix.DIV,
    TokenKind.STAR: Infix.MULT,
}
_UNARY_OPS: dict[TokenKind, Prefix] = {
    TokenKind.BANG: Prefix.NOT,
    TokenKind.MINUS: Prefix.INVERSE,
}

# Tokens that start a statement; synchronize() stops in front of them.
_STATEMENT_STARTS = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)


class TokenPeeker:
    """Wraps a token stream with two tokens of lookahead."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        first = next(self._tokens, None)
        second = next(self._tokens, None)
        self._lookahead: tuple[Token | None, Token | None] = (first, second)

    def peek(self) -> Token | None:
        return self._lookahead[0]

    def peek2(self) -> Token | None:
        return self._lookahead[1]

    def next(self) -> Token | None:
        current = self._lookahead[0]
        self._lookahead = (self._lookahead[1], next(self._tokens, None))
        return current


class Parser:
    """Recursive descent parser over the tokens of one Source."""

    def __init__(self, source: Source, tokens: Iterable[Token] | None = None) -> None:
        self.source = source
        self.peeker = TokenPeeker(scan(source) if tokens is None else tokens)
        self._nesting = 0

    # -- Grammar rules --

    def expression(self) -> Expr:
        return self.equality()

    def equality(self) -> Expr:
        """comparison (("!=" | "==") comparison)*"""
        return self._infix_binary(self.comparison, _EQUALITY_OPS)

    def comparison(self) -> Expr:
        """addition ((">" | ">=" | "<" | "<=") addition)*"""
        return self._infix_binary(self.addition, _COMPARISON_OPS)

    def addition(self) -> Expr:
        """multiplication (("-" | "+") multiplication)*"""
        return self._infix_binary(self.multiplication, _ADDITION_OPS)

    def multiplication(self) -> Expr:
        """unary (("/" | "*") unary)*"""
        return self._infix_binary(self.unary, _MULTIPLICATION_OPS)

    def unary(self) -> Expr:
        """("!" | "-") unary | primary"""
        return self._prefix_unary(self.unary, self.primary, _UNARY_OPS)

    def primary(self) -> Expr:
        """NUMBER | STRING | "false" | "true" | "nil" | "(" expression ")" """
        token = self.peeker.next()
        if token is None:
            raise self._error(ParseErrorKind.EXPECTED_EXPRESSION, None)
        if token.is_error:
            raise LexError(token)

        if token.kind == TokenKind.OPEN_PAREN:
            return self._grouping(token)
        if token.kind == TokenKind.STRING:
            assert isinstance(token.literal, str)
            return Literal(value=string(token.literal), tokens=(token,))
        if token.kind == TokenKind.NUMBER:
            assert isinstance(token.literal, float)
            return Literal(value=number(token.literal), tokens=(token,))
        if token.kind == TokenKind.FALSE:
            return Literal(value=FALSE, tokens=(token,))
        if token.kind == TokenKind.TRUE:
            return Literal(value=TRUE, tokens=(token,))
        if token.kind == TokenKind.NIL:
            return Literal(value=NIL, tokens=(token,))

        raise self._error(ParseErrorKind.EXPECTED_EXPRESSION, token)

    def _grouping(self, open: Token) -> Expr:
        """'(' already consumed: expression ')'"""
        with self._nested(open):
            inner = self.expression()
        close = self.peeker.next()
        if close is not None and close.is_error:
            raise LexError(close)
        if close is None or close.kind != TokenKind.CLOSE_PAREN:
            raise self._error(
                ParseErrorKind.UNCLOSED_GROUPING, close, open=open, expression=inner
            )
        return self._checked(make_grouping(inner, open, close), open)

    # -- Combinators --

    def _infix_binary(self, higher: ParseFunc, ops: dict[TokenKind, Infix]) -> Expr:
        """Fold ``higher (op higher)*`` into left-associative binary nodes."""
        left = higher()
        while (peeked := self.peeker.peek()) is not None and peeked.kind in ops:
            token = self.peeker.next()
            assert token is not None
            right = higher()
            left = self._checked(make_binary(left, ops[token.kind], right, token), token)
        return left

    def _prefix_unary(
        self, this: ParseFunc, higher: ParseFunc, ops: dict[TokenKind, Prefix]
    ) -> Expr:
        """``op this`` when the next token is a prefix operator, else ``higher``."""
        peeked = self.peeker.peek()
        if peeked is not None and peeked.kind in ops:
            token = self.peeker.next()
            assert token is not None
            with self._nested(token):
                operand = this()
            return self._checked(make_unary(ops[token.kind], operand, token), token)
        return higher()

    # -- Depth limits --

    @contextmanager
    def _nested(self, token: Token) -> Iterator[None]:
        """Descend one level below ``token``, failing past ``MAX_NESTING``."""
        if self._nesting >= MAX_NESTING:
            raise self._error(ParseErrorKind.TOO_DEEPLY_NESTED, token)
        self._nesting += 1
        try:
            yield
        finally:
            self._nesting -= 1

    def _checked(self, node: Expr, token: Token) -> Expr:
        if node.height > MAX_HEIGHT:
            raise self._error(ParseErrorKind.TOO_DEEPLY_NESTED, token)
        return node

    # -- Error recovery --

    def synchronize(self) -> None:
        """
        Discard tokens until just past a ``;`` that ends a statement.

        Stops once a ``;`` has been consumed and the next token starts a new
        statement (``class fun var for if while print return``) or the input
        is exhausted.
        """
        while (token := self.peeker.next()) is not None:
            if token.kind != TokenKind.SEMI_COLON:
                continue
            following = self.peeker.peek()
            if following is None or following.kind in _STATEMENT_STARTS:
                return

    def _error(
        self,
        kind: ParseErrorKind,
        token: Token | None,
        *,
        open: Token | None = None,
        expression: Expr | None = None,
    ) -> ParseError:
        return ParseError(kind, token, self.source, open=open, expression=expression)


def parse(source: Source) -> Expr:
    """Parse a Source holding exactly one expression.

    Args:
        source: The source to parse.

    Returns:
        Root of the expression tree.

    Raises:
        ParseError: If the tokens do not form a single expression.
        LexError: If the first lexical error is reached while parsing.
    """
    parser = Parser(source)
    expr = parser.expression()

    # Ensure all tokens consumed
    leftover = parser.peeker.peek()
    if leftover is not None:
        if leftover.is_error:
            raise LexError(leftover)
        raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, leftover, source)

    logger.debug("parsed %s: %s", source.id, expr)
    return expr


def parse_expr(text: str, source_id: str = "<string>") -> Expr:
    """Parse an expression string (e.g. ``"1 + 2 * 3"``) into an AST."""
    return parse(Source(source_id, text))
