"""
Entry point of the Lox core: parse and evaluate one expression.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .expression_lang.evaluator import evaluate
from .expression_lang.parser import parse
from .ir.values import Value
from .source import Source, read_source

logger = logging.getLogger(__name__)


def interpret(source_id: str, content: str) -> Value:
    """
    Parse and evaluate the expression held in ``content``.

    Args:
        source_id: Origin of the text (file path, or ``<repl>``)
        content: Source text holding exactly one expression

    Returns:
        The value of the expression

    Raises:
        LexError: If the text holds an unterminated string or
            unrecognized input
        ParseError: If the text is not a single well-formed expression
        LoxRuntimeError: If an operator gets operands of the wrong type
    """
    return interpret_source(Source(source_id, content))


def interpret_source(source: Source) -> Value:
    logger.debug("interpreting %s (%d characters)", source.id, len(source))
    expression = parse(source)
    return evaluate(expression)


def interpret_file(path: Path | str) -> Value:
    """Read a UTF-8 file and interpret it (raises SourceError if unreadable)."""
    return interpret_source(read_source(path))
