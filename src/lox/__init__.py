"""
lox - scanner, parser and tree-walking evaluator for Lox expressions.

Usage:
    import lox

    value = lox.interpret("<repl>", "1 + 2 * 3")
    print(value)  # 7
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import __version__
from .core import ir
from .core.errors import (
    DiagnosableError,
    LexError,
    LoxError,
    LoxRuntimeError,
    ParseError,
    SourceError,
)
from .core.expression_lang.diagnosis import Diagnosis
from .core.interpreter import interpret
from .core.source import Source

__all__ = [
    "__version__",
    "ir",
    "interpret",
    "Diagnosis",
    "Source",
    "LoxError",
    "DiagnosableError",
    "LexError",
    "ParseError",
    "LoxRuntimeError",
    "SourceError",
]
