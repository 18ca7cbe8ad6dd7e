"""Interactive read-eval-print loop."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Protocol

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from lispy import __version__
from lispy.config import get_history_file
from lispy.interpreter import Interpreter, recursion_error
from lispy.types.errors import LispySyntaxError

PROMPT = "lispy> "


class LineReader(Protocol):
    def prompt(self, message: str) -> str: ...


class Repl:
    def __init__(
        self,
        interpreter: Interpreter | None = None,
        *,
        history_file: Path | None = None,
        session: Optional[LineReader] = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.interpreter = interpreter or Interpreter()
        self._history_file = history_file
        self._session = session
        self._echo = echo

    def _build_prompt(self) -> PromptSession[str]:
        history_file = self._history_file or get_history_file()
        history_file.parent.mkdir(parents=True, exist_ok=True)
        completer = WordCompleter(sorted(self.interpreter.env.root().vars), sentence=True)
        return PromptSession(history=FileHistory(str(history_file)), completer=completer)

    def banner(self) -> None:
        self._echo(f"Lispy Version {__version__}")
        self._echo("Press Ctrl+c to Exit\n")

    def handle(self, line: str) -> Optional[str]:
        """Evaluate one input line and return what was printed, if anything."""
        if not line.strip():
            return None
        try:
            output = str(self.interpreter.eval(line))
        except LispySyntaxError as exc:
            logger.debug("syntax error: {}", exc.message)
            output = str(exc)
        except RecursionError:
            logger.debug("recursion limit hit on input of {} characters", len(line))
            output = str(recursion_error())
        self._echo(output)
        return output

    def run(self) -> None:
        if self._session is None:
            self._session = self._build_prompt()
        self.banner()
        while True:
            try:
                line = self._session.prompt(PROMPT)
            except (KeyboardInterrupt, EOFError):
                break
            self.handle(line)
        logger.debug("repl exited")
