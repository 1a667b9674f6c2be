"""
Human-facing diagnoses for Lox errors.

A diagnosis pins an error to a source line and a column so it can be shown
as the offending line with a caret underneath:

    (1 + 2
          ^
    parsing error: expected `)' to close grouped expression, but got eof
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..errors import DiagnosableError, LexError, LoxRuntimeError, ParseError
from ..source import Location, Source


class DiagnosisKind(StrEnum):
    PARSING = "parsing"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class Diagnosis:
    """
    Where and why evaluation failed.

    Attributes:
        kind: Parsing (lexical errors included) or runtime
        message: Error description
        line: Text of the offending line
        line_number: Line number (1-indexed)
        column: Caret offset within ``line`` (0-indexed)
    """

    kind: DiagnosisKind
    message: str
    line: str
    line_number: int
    column: int

    @property
    def title(self) -> str:
        return f"{self.kind} error"

    def render(self, indent: str = "") -> str:
        """
        Format as the line, a caret marker and the message.

        Args:
            indent: Printed before the line and the caret, e.g. the width of
                a REPL prompt so the caret lines up with the echoed input

        Returns:
            ``"<line>\\n<spaces>^\\n<kind> error: <message>"``
        """
        marker = indent + " " * self.column + "^"
        return f"{indent}{self.line}\n{marker}\n{self.title}: {self.message}"


def locate(location: Location) -> tuple[str, int, int]:
    """Return (line, line_number, column) owning a location's first character."""
    lines = location.source.lines
    column = location.offset
    index = 0
    # Each line is followed by the "\n" that split() removed.
    while index < len(lines) - 1 and column > len(lines[index]):
        column -= len(lines[index]) + 1
        index += 1
    return lines[index], index + 1, column


def locate_end(source: Source) -> tuple[str, int, int]:
    """Return (line, line_number, column) just past the last character of input."""
    lines = source.lines
    index = len(lines) - 1
    while index > 0 and lines[index] == "":
        index -= 1
    line = lines[index]
    return line, index + 1, len(line)


def diagnose(error: DiagnosableError) -> Diagnosis:
    """Build the diagnosis of a lexical, parse or runtime error."""
    if isinstance(error, LoxRuntimeError):
        kind = DiagnosisKind.RUNTIME
        location: Location | None = error.token.location
    elif isinstance(error, (ParseError, LexError)):
        kind = DiagnosisKind.PARSING
        location = error.token.location if error.token is not None else None
    else:
        raise TypeError(f"cannot diagnose {type(error).__name__}")

    if location is None:
        line, line_number, column = locate_end(error.source)
    else:
        line, line_number, column = locate(location)
    return Diagnosis(kind, error.message, line, line_number, column)
