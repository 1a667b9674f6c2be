"""
Token types for the Lox expression language.
"""

from __future__ import annotations

from enum import StrEnum, auto

from .source import Location


class TokenKind(StrEnum):
    """Token kinds produced by the tokenizer."""

    # Single-character punctuation
    OPEN_PAREN = auto()  # (
    CLOSE_PAREN = auto()  # )
    OPEN_BRACE = auto()  # {
    CLOSE_BRACE = auto()  # }
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMI_COLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character operators
    BANG = auto()  # !
    BANG_EQ = auto()  # !=
    EQ = auto()  # =
    EQ_EQ = auto()  # ==
    GT = auto()
    GT_EQ = auto()
    LT = auto()
    LT_EQ = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # Errors
    UNTERMINATED_STRING = auto()
    UNKNOWN_RUN = auto()


KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "fun": TokenKind.FUN,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}

ERROR_KINDS = frozenset({TokenKind.UNTERMINATED_STRING, TokenKind.UNKNOWN_RUN})


class Token:
    """
    A single scanned token.

    Attributes:
        kind: What was scanned
        location: Span of the source the token was scanned from
        literal: Payload for identifiers (name), strings (content),
            numbers (float) and unknown runs (text); None otherwise
    """

    __slots__ = ("kind", "location", "literal")

    def __init__(
        self,
        kind: TokenKind,
        location: Location,
        literal: str | float | None = None,
    ) -> None:
        self.kind = kind
        self.location = location
        self.literal = literal

    @property
    def lexeme(self) -> str:
        """The exact source text this token was scanned from."""
        return self.location.text

    @property
    def is_error(self) -> bool:
        return self.kind in ERROR_KINDS

    def describe(self) -> str:
        """Textual kind used in diagnostics, e.g. ``close_paren`` or ``number(1)``."""
        if self.kind == TokenKind.IDENTIFIER:
            return f"identifier({self.literal})"
        if self.kind == TokenKind.STRING:
            return f'string("{self.literal}")'
        if self.kind == TokenKind.NUMBER:
            from .ir.values import format_number

            assert isinstance(self.literal, float)
            return f"number({format_number(self.literal)})"
        if self.kind == TokenKind.UNKNOWN_RUN:
            return f'unknown_run("{self.literal}")'
        return self.kind.value

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, offset={self.location.offset})"
