"""
Source text wrapper for the Lox front-end.

A ``Source`` owns the input string and its line table; every token and
diagnostic position is an offset into one.  ``CharCursor`` is the
two-character lookahead cursor the tokenizer scans with.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .errors import SourceError

REPL_SOURCE_ID = "<repl>"


@dataclass(frozen=True)
class Source:
    """
    Immutable source text.

    Attributes:
        id: Origin name, usually a file path or ``<repl>``
        content: The full source text
        lines: ``content`` split on ``\\n`` (empty lines kept, so joining
            with ``\\n`` gives ``content`` back)
    """

    id: str
    content: str
    lines: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.content.split("\n")))

    def __len__(self) -> int:
        return len(self.content)

    def slice(self, offset: int, length: int) -> str:
        return self.content[offset : offset + length]

    def location(self, offset: int, length: int) -> Location | None:
        """Return the location of ``length`` characters at ``offset``, or None if out of bounds."""
        if offset < 0 or length < 0:
            return None
        if offset + length > len(self.content):
            return None
        return Location(self, offset, length)

    def cursor(self) -> CharCursor:
        return CharCursor(self)


@dataclass(frozen=True)
class Location:
    """
    A span of characters in a Source.

    Only valid, in-bounds spans are represented; end of input has no
    Location.  Build through ``Source.location()`` to get bounds checking.
    """

    source: Source = field(repr=False)
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def text(self) -> str:
        """The substring covered by this location."""
        return self.source.slice(self.offset, self.length)

    def __str__(self) -> str:
        return self.text


class CharCursor:
    """
    Cursor over ``(offset, character)`` pairs with two characters of lookahead.
    """

    def __init__(self, source: Source) -> None:
        self.source = source
        self._pos = 0

    def peek(self) -> tuple[int, str] | None:
        """Return the next character without consuming it."""
        return self._at(self._pos)

    def peek2(self) -> tuple[int, str] | None:
        """Return the character after the next one without consuming anything."""
        return self._at(self._pos + 1)

    def next(self) -> tuple[int, str] | None:
        """Consume and return the next character, or None at end of input."""
        current = self._at(self._pos)
        if current is not None:
            self._pos += 1
        return current

    def advance(self) -> bool:
        """Consume one character; False if there was nothing left."""
        return self.next() is not None

    def match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        peeked = self.peek()
        if peeked is not None and peeked[1] == expected:
            self._pos += 1
            return True
        return False

    def skip_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while ``predicate`` holds and return them."""
        start = self._pos
        content = self.source.content
        while self._pos < len(content) and predicate(content[self._pos]):
            self._pos += 1
        return content[start : self._pos]

    @property
    def offset(self) -> int:
        """Offset of the next character, or the source length at end of input."""
        return self._pos

    def _at(self, pos: int) -> tuple[int, str] | None:
        if pos >= len(self.source.content):
            return None
        return pos, self.source.content[pos]


def read_source(path: Path | str) -> Source:
    """
    Read a UTF-8 file into a Source.

    Raises:
        SourceError: If the file cannot be read or is not valid UTF-8
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise SourceError(f"{file_path}: read failed ({e.strerror or e})") from e
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceError(
            f"{file_path}: decoding failed (is it an UTF-8 encoded file?)"
        ) from e
    return Source(str(file_path), content)
