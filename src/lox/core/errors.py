"""
Error types for Lox scanning, parsing, and evaluation.

Every error that can reach a user derives from ``LoxError``.  The three
pipeline errors (``LexError``, ``ParseError``, ``LoxRuntimeError``) keep a
reference to what went wrong (token, tree node, computed values) and can be
turned into a ``Diagnosis`` for display.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .expression_lang.diagnosis import Diagnosis
    from .ir.expressions import Expr
    from .ir.values import Value
    from .source import Source
    from .tokens import Token


class LoxError(Exception):
    """Base exception for all Lox errors."""

    def __init__(self, message: str, source: Source | None = None):
        self.message = message
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the source id if available."""
        if self.source is not None:
            return f"{self.source.id}: {self.message}"
        return self.message


class SourceError(LoxError):
    """
    Raised when source text cannot be obtained.

    Examples:
    - Missing or unreadable file
    - File content is not valid UTF-8
    """

    pass


class ConfigError(LoxError):
    """Raised when ``lox.toml`` is malformed or holds values of the wrong type."""

    pass


class DiagnosableError(LoxError):
    """A pipeline error that points into a Source and can be diagnosed."""

    source: Source

    def __init__(self, message: str, source: Source):
        super().__init__(message, source)

    def diagnosis(self) -> Diagnosis:
        from .expression_lang.diagnosis import diagnose

        return diagnose(self)


def describe_token(token: Token | None) -> str:
    """Textual kind of a token for messages; ``eof`` for end of input."""
    return token.describe() if token is not None else "eof"


class LexError(DiagnosableError):
    """
    A lexical problem, reported through an error token.

    Examples:
    - String literal without a closing quote
    - Run of characters that starts no known token
    """

    def __init__(self, token: Token):
        self.token = token
        super().__init__(self._lex_message(token), token.location.source)

    @staticmethod
    def _lex_message(token: Token) -> str:
        from .tokens import TokenKind

        if token.kind == TokenKind.UNTERMINATED_STRING:
            return "unterminated string"
        return f"unrecognized input `{token.lexeme}'"


class ParseErrorKind(StrEnum):
    """Structural failures the parser reports."""

    UNCLOSED_GROUPING = "unclosed_grouping"
    EXPECTED_EXPRESSION = "expected_expression"
    UNEXPECTED_TOKEN = "unexpected_token"
    TOO_DEEPLY_NESTED = "too_deeply_nested"


class ParseError(DiagnosableError):
    """
    Raised when tokens do not form an expression.

    Attributes:
        kind: Which structural rule failed
        token: The offending token, or None for end of input (for nesting
            errors, the ``(`` or operator that went one level too deep)
        open: For unclosed groupings, the ``(`` token
        expression: For unclosed groupings, the inner expression parsed so far
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        token: Token | None,
        source: Source,
        *,
        open: Token | None = None,
        expression: Expr | None = None,
    ):
        self.kind = kind
        self.token = token
        self.open = open
        self.expression = expression
        super().__init__(self._parse_message(kind, token), source)

    @staticmethod
    def _parse_message(kind: ParseErrorKind, token: Token | None) -> str:
        got = describe_token(token)
        if kind == ParseErrorKind.UNCLOSED_GROUPING:
            return f"expected `)' to close grouped expression, but got {got}"
        if kind == ParseErrorKind.EXPECTED_EXPRESSION:
            return f"expected an expression, but got {got}"
        if kind == ParseErrorKind.TOO_DEEPLY_NESTED:
            return f"expression nested too deeply, gave up at {got}"
        return f"expected end of input, but got {got}"


class RuntimeErrorKind(StrEnum):
    """Type mismatches the evaluator reports."""

    BINARY_OPERANDS = "binary_operands"
    UNARY_OPERANDS = "unary_operands"


class LoxRuntimeError(DiagnosableError):
    """
    Raised when an operator is applied to operands of the wrong type.

    Attributes:
        kind: Binary or unary operand mismatch
        expression: The failing node (a reference into the parsed tree)
        computed: The operand values that were actually computed
        expected: Human-readable expectation, e.g. ``(number, number)``
    """

    def __init__(
        self,
        kind: RuntimeErrorKind,
        expression: Expr,
        computed: Sequence[Value],
        expected: str,
    ):
        self.kind = kind
        self.expression = expression
        self.computed = tuple(computed)
        self.expected = expected
        operator = expression.tokens[0]
        arity = "binary" if kind == RuntimeErrorKind.BINARY_OPERANDS else "unary"
        got = "(" + ", ".join(value.type_name for value in self.computed) + ")"
        message = (
            f"invalid operands for {arity} operator `{operator.lexeme}':"
            f" expected {expected} but got {got}"
        )
        super().__init__(message, operator.location.source)

    @property
    def token(self) -> Token:
        """The operator token the error points at."""
        return self.expression.tokens[0]
