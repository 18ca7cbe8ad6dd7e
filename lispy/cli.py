"""Typer CLI entrypoint."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from lispy.config import ClosureScope, get_prelude_paths
from lispy.interpreter import Interpreter, recursion_error
from lispy.logging_utils import configure_logging
from lispy.repl import Repl
from lispy.types.errors import LispySyntaxError
from lispy.types.value import LispError, Value

app = typer.Typer(name="lispy", help="A minimal Lisp interpreter", add_completion=False)


def _load_preludes(interp: Interpreter, paths: list[Path]) -> None:
    for path in paths:
        try:
            interp.load(path)
        except OSError as exc:
            typer.echo(f"cannot load {path}: {exc.strerror or exc}", err=True)
            raise typer.Exit(1)
        except LispySyntaxError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)


@app.command()
def main(
    expressions: Annotated[
        list[str] | None, typer.Option("--eval", "-e", help="Evaluate an expression, print it and exit")
    ] = None,
    prelude: Annotated[
        list[Path] | None, typer.Option("--prelude", "-p", help="Lisp file to evaluate before anything else")
    ] = None,
    closure_scope: Annotated[
        ClosureScope | None,
        typer.Option("--closure-scope", envvar="LISPY_CLOSURE_SCOPE", case_sensitive=False),
    ] = None,
    log_level: Annotated[str | None, typer.Option("--log-level", envvar="LISPY_LOG_LEVEL")] = None,
    history_file: Annotated[Path | None, typer.Option("--history-file", envvar="LISPY_HISTORY_FILE")] = None,
) -> None:
    """Run the interactive REPL, or evaluate expressions given with --eval."""

    configure_logging(log_level)
    interp = Interpreter(closure_scope=closure_scope)
    preludes = prelude if prelude else get_prelude_paths()
    logger.info("lispy.start preludes={} closure_scope={}", len(preludes), closure_scope or "<default>")
    _load_preludes(interp, preludes)

    if not expressions:
        Repl(interp, history_file=history_file).run()
        return

    result: Value | None = None
    for source in expressions:
        try:
            result = interp.eval(source, "<eval>")
            output = str(result)
        except LispySyntaxError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)
        except RecursionError:
            typer.echo(str(recursion_error()))
            raise typer.Exit(1)
        typer.echo(output)
    if isinstance(result, LispError):
        raise typer.Exit(1)
