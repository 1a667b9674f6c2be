"""
Tokenizer for the Lox expression language.

Converts a Source into a lazy stream of typed tokens.  Lexical problems do
not stop scanning: unterminated strings and unrecognized runs come out as
error tokens so a caller can either collect them all or stop at the first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..errors import LexError
from ..source import CharCursor, Source
from ..tokens import ERROR_KINDS, KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMI_COLON,
    "*": TokenKind.STAR,
}

# One-character operator -> (kind, kind when followed by "=")
_OPERATORS: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQ),
    "=": (TokenKind.EQ, TokenKind.EQ_EQ),
    ">": (TokenKind.GT, TokenKind.GT_EQ),
    "<": (TokenKind.LT, TokenKind.LT_EQ),
}


def is_blank(c: str) -> bool:
    return c in " \t\r\n"


def is_digit(c: str | None) -> bool:
    return c is not None and "0" <= c <= "9"


def is_alpha(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"


def is_alnum(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Lexer:
    """
    Iterator over the tokens of a Source.

    Scanning is lazy: each ``next()`` skips blanks and comments, then scans
    exactly one token.  The stream simply ends at end of input; there is no
    EOF token.
    """

    def __init__(self, source: Source) -> None:
        self.source = source
        self.cursor: CharCursor = source.cursor()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.scan_token()
        if token is None:
            raise StopIteration
        return token

    def scan_token(self) -> Token | None:
        """Scan the next token, or return None at end of input."""
        while True:
            self.cursor.skip_while(is_blank)
            current = self.cursor.next()
            if current is None:
                return None
            start, c = current

            if c in _PUNCTUATION:
                return self._make(_PUNCTUATION[c], start)

            if c in _OPERATORS:
                single, double = _OPERATORS[c]
                return self._make(double if self.cursor.match("=") else single, start)

            if c == "/":
                if self.cursor.match("/"):
                    # Line comment: drop everything up to the newline, keep scanning
                    self.cursor.skip_while(lambda ch: ch != "\n")
                    continue
                return self._make(TokenKind.SLASH, start)

            if c == '"':
                return self._read_string(start)

            if is_digit(c):
                return self._read_number(start)

            if is_alpha(c):
                return self._read_identifier(start)

            return self._read_unknown(start)

    def _read_string(self, start: int) -> Token:
        """Read a string literal; no escape sequences exist."""
        content = self.cursor.skip_while(lambda ch: ch != '"')
        if self.cursor.advance():
            return self._make(TokenKind.STRING, start, content)
        return self._make(TokenKind.UNTERMINATED_STRING, start)

    def _read_number(self, start: int) -> Token:
        self.cursor.skip_while(is_digit)
        dot = self.cursor.peek()
        after = self.cursor.peek2()
        if dot is not None and dot[1] == "." and after is not None and is_digit(after[1]):
            self.cursor.advance()
            self.cursor.skip_while(is_digit)
        digits = self.source.slice(start, self.cursor.offset - start)
        return self._make(TokenKind.NUMBER, start, float(digits))

    def _read_identifier(self, start: int) -> Token:
        self.cursor.skip_while(is_alnum)
        word = self.source.slice(start, self.cursor.offset - start)
        kind = KEYWORDS.get(word)
        if kind is not None:
            return self._make(kind, start)
        return self._make(TokenKind.IDENTIFIER, start, word)

    def _read_unknown(self, start: int) -> Token:
        """Swallow the rest of the non-blank run into a single error token."""
        self.cursor.skip_while(lambda ch: not is_blank(ch))
        text = self.source.slice(start, self.cursor.offset - start)
        return self._make(TokenKind.UNKNOWN_RUN, start, text)

    def _make(self, kind: TokenKind, start: int, literal: str | float | None = None) -> Token:
        location = self.source.location(start, self.cursor.offset - start)
        assert location is not None
        token = Token(kind, location, literal)
        logger.debug("scanned %r", token)
        return token


def scan(source: Source) -> Iterator[Token]:
    """Lazily scan a Source into tokens (error conditions are error tokens)."""
    return Lexer(source)


def tokenize(source: Source | str, source_id: str = "<string>") -> list[Token]:
    """Scan a Source (or a plain string) into a list of tokens."""
    if isinstance(source, str):
        source = Source(source_id, source)
    return list(scan(source))


def lex_errors(source: Source) -> list[LexError]:
    """Collect every lexical error of a Source in one pass."""
    return [LexError(token) for token in scan(source) if token.kind in ERROR_KINDS]
