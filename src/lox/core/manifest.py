"""
``lox.toml`` configuration for the CLI and REPL.

Example:

    [repl]
    prompt = "lox> "
    quit = ":q"
    banner = true

    [diagnostics]
    color = true
    indent = ""

    [logging]
    level = "WARNING"
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "lox.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReplConfig:
    """Interactive prompt settings."""

    prompt: str = "lox> "
    quit: str = ":q"  # vi-friendly, `:' is not used by lox
    banner: bool = True


@dataclass
class DiagnosticsConfig:
    """How errors are displayed."""

    color: bool = True
    indent: str = ""  # printed before the offending line and the caret


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class LoxConfig:
    """Top-level configuration; every section falls back to its defaults."""

    repl: ReplConfig = field(default_factory=ReplConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _get(section: dict[str, Any], table: str, key: str, kind: type, default: Any) -> Any:
    value = section.get(key, default)
    if not isinstance(value, kind):
        raise ConfigError(f"{table}.{key} must be a {kind.__name__}, got {value!r}")
    return value


def load_config(path: Path) -> LoxConfig:
    """
    Load configuration from a TOML file.

    Args:
        path: Path to a ``lox.toml`` file

    Returns:
        The parsed configuration

    Raises:
        ConfigError: If the file is unreadable, not TOML, or has values of
            the wrong type
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"{path}: cannot read configuration ({e})") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML ({e})") from e

    repl_data = _section(data, "repl")
    diagnostics_data = _section(data, "diagnostics")
    logging_data = _section(data, "logging")

    defaults = LoxConfig()
    repl = ReplConfig(
        prompt=_get(repl_data, "repl", "prompt", str, defaults.repl.prompt),
        quit=_get(repl_data, "repl", "quit", str, defaults.repl.quit),
        banner=_get(repl_data, "repl", "banner", bool, defaults.repl.banner),
    )
    diagnostics = DiagnosticsConfig(
        color=_get(diagnostics_data, "diagnostics", "color", bool, defaults.diagnostics.color),
        indent=_get(diagnostics_data, "diagnostics", "indent", str, defaults.diagnostics.indent),
    )

    level = _get(logging_data, "logging", "level", str, defaults.logging.level).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")

    logger.debug("loaded configuration from %s", path)
    return LoxConfig(
        repl=repl,
        diagnostics=diagnostics,
        logging=LoggingConfig(level=level),
        path=path,
    )


def find_config(directory: Path | None = None) -> Path | None:
    """Return ``lox.toml`` in ``directory`` (default: cwd) if it exists."""
    candidate = (directory or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def resolve_config(path: Path | None = None) -> LoxConfig:
    """Load ``path`` if given, else ``./lox.toml`` if present, else defaults."""
    if path is not None:
        return load_config(path)
    found = find_config()
    if found is None:
        return LoxConfig()
    return load_config(found)
