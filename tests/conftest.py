"""Shared pytest fixtures for lox tests."""

import re
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from lox.core.source import Source
from lox.core.tokens import Token, TokenKind

_EXPECT_RE = re.compile(r"// expect: ?(.*)")

# Token names as printed by the reference Java interpreter (jlox)
_JLOX_NAMES: dict[TokenKind, str] = {
    TokenKind.OPEN_PAREN: "LEFT_PAREN",
    TokenKind.CLOSE_PAREN: "RIGHT_PAREN",
    TokenKind.OPEN_BRACE: "LEFT_BRACE",
    TokenKind.CLOSE_BRACE: "RIGHT_BRACE",
    TokenKind.SEMI_COLON: "SEMICOLON",
    TokenKind.BANG_EQ: "BANG_EQUAL",
    TokenKind.EQ: "EQUAL",
    TokenKind.EQ_EQ: "EQUAL_EQUAL",
    TokenKind.GT: "GREATER",
    TokenKind.GT_EQ: "GREATER_EQUAL",
    TokenKind.LT: "LESS",
    TokenKind.LT_EQ: "LESS_EQUAL",
}


def output_expect(content: str) -> list[str]:
    """Collect the ``// expect:`` expectations of a test file, in order."""
    expectations = []
    for line in content.split("\n"):
        match = _EXPECT_RE.search(line)
        if match:
            expectations.append(match.group(1))
    return expectations


def jlox_format(tokens: Iterable[Token]) -> list[str]:
    """Render tokens the way jlox prints them, closing with its EOF token."""
    lines = []
    for token in tokens:
        name = _JLOX_NAMES.get(token.kind, token.kind.value.upper())
        if token.kind == TokenKind.STRING:
            literal = str(token.literal)
        elif token.kind == TokenKind.NUMBER:
            literal = repr(token.literal)
        else:
            literal = "null"
        lines.append(f"{name} {token.lexeme} {literal}")
    return lines + ["EOF  null"]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def lox_fixture(fixtures_dir: Path) -> Callable[[str], tuple[Source, list[str]]]:
    """Load ``fixtures/<name>.lox`` as a Source along with its expectations."""

    def load(name: str) -> tuple[Source, list[str]]:
        path = fixtures_dir / f"{name}.lox"
        content = path.read_text(encoding="utf-8")
        return Source(str(path), content), output_expect(content)

    return load


@pytest.fixture
def jlox() -> Callable[[Iterable[Token]], list[str]]:
    """Return the jlox token formatter."""
    return jlox_format


@pytest.fixture
def source_of() -> Callable[[str], Source]:
    """Build an in-memory Source for a snippet."""

    def make(content: str, source_id: str = "<test>") -> Source:
        return Source(source_id, content)

    return make
