"""Core Lox functionality: source handling, IR, tokenizer, parser, evaluator, configuration."""

from . import ir
from .errors import (
    ConfigError,
    DiagnosableError,
    LexError,
    LoxError,
    LoxRuntimeError,
    ParseError,
    SourceError,
)
from .interpreter import interpret, interpret_file, interpret_source
from .manifest import LoxConfig, load_config, resolve_config
from .source import Location, Source, read_source

__all__ = [
    "ir",
    "LoxError",
    "DiagnosableError",
    "LexError",
    "ParseError",
    "LoxRuntimeError",
    "SourceError",
    "ConfigError",
    "interpret",
    "interpret_source",
    "interpret_file",
    "LoxConfig",
    "load_config",
    "resolve_config",
    "Location",
    "Source",
    "read_source",
]
