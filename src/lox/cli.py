"""
lox CLI - run Lox expressions from files or an interactive prompt.

Commands:
- run:    evaluate the expression in a file
- repl:   interactive prompt (also the default with no command)
- tokens: show the tokens of a file or expression
- ast:    show the parsed tree of a file or expression
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from lox._version import get_version
from lox.core.errors import ConfigError, DiagnosableError, LoxRuntimeError, SourceError
from lox.core.expression_lang.diagnosis import Diagnosis
from lox.core.expression_lang.parser import parse
from lox.core.expression_lang.tokenizer import lex_errors, tokenize
from lox.core.interpreter import interpret_source
from lox.core.manifest import LoxConfig, resolve_config
from lox.core.source import REPL_SOURCE_ID, Source, read_source

logger = logging.getLogger(__name__)

# sysexits(3) codes, as used by the reference Lox test-suite
EXIT_DATAERR = 65  # parse (and lexical) errors
EXIT_NOINPUT = 66  # unreadable source file
EXIT_SOFTWARE = 70  # runtime errors
EXIT_CONFIG = 78

app = typer.Typer(
    help="""lox - evaluate Lox expressions

With no command, starts the interactive prompt.
""",
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"lox version {get_version()}")
        typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


def _configure_logging(verbose: bool, config: LoxConfig) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("lox").setLevel(level)


def _error_console(config: LoxConfig) -> Console:
    return Console(stderr=True, no_color=not config.diagnostics.color, highlight=False)


def print_diagnosis(
    console: Console, diagnosis: Diagnosis, indent: str = "", show_line: bool = True
) -> None:
    """Print a diagnosis: the offending line, a caret under the culprit, then the message."""
    text = Text()
    if show_line:
        text.append(f"{indent}{diagnosis.line}\n")
    text.append(indent + " " * diagnosis.column)
    text.append("^", style="bold red")
    text.append("\n")
    text.append(f"{diagnosis.title}:", style="bold red")
    text.append(f" {diagnosis.message}")
    console.print(text, soft_wrap=True)


def _exit_code(error: DiagnosableError) -> int:
    return EXIT_SOFTWARE if isinstance(error, LoxRuntimeError) else EXIT_DATAERR


def _load_input(file: Path | None, expr: str | None) -> Source:
    if expr is not None:
        return Source("<expr>", expr)
    if file is None:
        raise typer.BadParameter("give a FILE or --expr")
    return read_source(file)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to lox.toml (default: ./lox.toml if present)"
    ),
) -> None:
    """lox CLI main callback for global options."""
    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        typer.echo(f"lox: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from e

    _configure_logging(verbose, config)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=run_repl(config))


@app.command("run")
def run_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Path to a Lox source file"),
) -> None:
    """Evaluate the expression in FILE and print its value."""
    config: LoxConfig = ctx.obj
    try:
        source = read_source(file)
    except SourceError as e:
        typer.echo(f"lox: {e.message}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from e

    try:
        value = interpret_source(source)
    except DiagnosableError as e:
        print_diagnosis(_error_console(config), e.diagnosis(), config.diagnostics.indent)
        raise typer.Exit(code=_exit_code(e)) from e

    typer.echo(f"=> {value.describe()}")


@app.command("repl")
def repl_command(ctx: typer.Context) -> None:
    """Start the interactive prompt."""
    raise typer.Exit(code=run_repl(ctx.obj))


@app.command("tokens")
def tokens_command(
    ctx: typer.Context,
    file: Path | None = typer.Argument(None, help="Path to a Lox source file"),
    expr: str | None = typer.Option(None, "--expr", "-e", help="Expression text to scan"),
) -> None:
    """Print the tokens scanned from FILE or --expr, one per line."""
    config: LoxConfig = ctx.obj
    try:
        source = _load_input(file, expr)
    except SourceError as e:
        typer.echo(f"lox: {e.message}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from e

    for token in tokenize(source):
        typer.echo(f"{token.location.offset:>4}  {token.describe():<24} {token.lexeme}")

    errors = lex_errors(source)
    if errors:
        console = _error_console(config)
        for error in errors:
            print_diagnosis(console, error.diagnosis(), config.diagnostics.indent)
        raise typer.Exit(code=EXIT_DATAERR)


@app.command("ast")
def ast_command(
    ctx: typer.Context,
    file: Path | None = typer.Argument(None, help="Path to a Lox source file"),
    expr: str | None = typer.Option(None, "--expr", "-e", help="Expression text to parse"),
) -> None:
    """Print the parse tree of FILE or --expr in parenthesized prefix form."""
    config: LoxConfig = ctx.obj
    try:
        source = _load_input(file, expr)
    except SourceError as e:
        typer.echo(f"lox: {e.message}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from e

    try:
        tree = parse(source)
    except DiagnosableError as e:
        print_diagnosis(_error_console(config), e.diagnosis(), config.diagnostics.indent)
        raise typer.Exit(code=_exit_code(e)) from e

    typer.echo(tree.to_sexpr())


def run_repl(config: LoxConfig) -> int:
    """
    Read-eval-print loop.  Each line is a separate expression.

    Returns:
        Process exit status (always 0: errors are reported, not fatal)
    """
    prompt = config.repl.prompt
    console = _error_console(config)
    caret_indent = config.diagnostics.indent + " " * len(prompt)

    if config.repl.banner:
        typer.echo(f"Welcome to lox. Type {config.repl.quit} or Control-C to exit.")

    while True:
        try:
            line = input(prompt)
        except EOFError:
            typer.echo("")
            break
        except KeyboardInterrupt:
            typer.echo("")
            break

        if line == config.repl.quit:
            break
        if not line.strip():
            continue

        try:
            value = interpret_source(Source(REPL_SOURCE_ID, line))
        except DiagnosableError as e:
            logger.debug("repl error: %s", e)
            print_diagnosis(console, e.diagnosis(), caret_indent, show_line=False)
            continue
        typer.echo(f"=> {value.describe()}")

    return 0


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main(sys.argv[1:])
