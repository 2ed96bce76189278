"""
Calcamabob CLI - Entry point.

    calcamabob --expression "2+5*2^2"
    calcamabob --file expression.txt
    calcamabob                       # evaluates "0."

Exactly one source of text is evaluated. When both ``--expression`` and
``--file`` are given the expression wins and a warning is printed.
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from calcamabob._version import get_version
from calcamabob.core.environment import get_log_level, is_strict
from calcamabob.core.errors import CalcError
from calcamabob.core.expression_lang import evaluate, parse, tokenize

DEFAULT_EXPRESSION = "0."

err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"Calcamabob version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


app = typer.Typer(
    help="Calcamabob - evaluate an arithmetic expression and print the result.",
    add_completion=False,
)


@app.command()
def calculate_command(
    expression: str | None = typer.Option(
        None,
        "--expression",
        "-e",
        help="Expression text to evaluate",
    ),
    file: Path | None = typer.Option(  # noqa: B008
        None,
        "--file",
        "-f",
        help="Read the expression from a file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Print the tokens and the parsed tree to stderr",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--lenient",
        help="Reject unrecognized characters instead of dropping them "
        "(default: CALCAMABOB_STRICT)",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Evaluate an expression given inline, in a file, or the default "0."."""
    source = _read_source(expression, file)
    strict_mode = is_strict(strict)

    try:
        tokens = tokenize(source, strict=strict_mode)
        if verbose:
            typer.echo(f"tokens: {tokens}", err=True)
        expr = parse(tokens, source)
        if verbose:
            typer.echo(f"tree:   {expr}", err=True)
        result = evaluate(expr)
    except CalcError as e:
        logger.debug("Evaluation of %r failed", source, exc_info=True)
        _fail(str(e))

    typer.echo(repr(result))


def _read_source(expression: str | None, file: Path | None) -> str:
    """Pick the text to evaluate from the command-line options."""
    if expression is not None:
        if file is not None:
            err_console.print(
                "Both a file and an expression were given; using the expression.",
                style="yellow",
                markup=False,
                highlight=False,
            )
        return expression

    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            _fail(f"cannot read {file}: not valid UTF-8 ({e.reason} at byte {e.start})")
        except OSError as e:
            _fail(f"cannot read {file}: {e.strerror or e}")

    return DEFAULT_EXPRESSION


def _fail(message: str) -> NoReturn:
    err_console.print(
        f"Error: {message}",
        style="bold red",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=get_log_level(),
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
