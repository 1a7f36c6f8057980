"""Session loop: routes input lines through the parser and engine."""

from __future__ import annotations

import enum
import json
from typing import Callable

from . import config
from .engine import dispatch, enter_value
from .logging_config import get_logger
from .parser import EXIT_COMMANDS, HELP_COMMANDS, format_number, parse_number, tokenize_command
from .types import CalcState, FailureKind, OpResult

logger = get_logger("session")

BANNER = (
    "Memory calculator. Commands: number | + n | - n | * n | / n | % n | inv | sq | sqrt "
    "| M+ | M- | MR | C | AC | help | exit"
)
HINT = "Enter a number to set the current value, then operations. Examples: '+ 5', '* 2', 'sqrt', 'M+', 'MR'."
CLOSING_MESSAGE = "Done."

HELP_TEXT = """Commands:
  <number>        set the current value (e.g. 12,5 or 12.5)
  + n   - n       add / subtract n
  * n   / n       multiply / divide by n (aliases: x, ÷)
  % n             remainder of division by n (sign follows the current value)
  inv   (1/x)     reciprocal of the current value
  sq    (x^2)     square of the current value
  sqrt  (√)       square root of the current value
  M+              add the current value to memory
  M-              subtract the current value from memory
  MR    (memory)  recall memory into the current value
  C               reset the current value to 0
  AC              reset the current value and memory to 0
  help            show this help
  exit  (quit)    leave the calculator
Examples: '25', '+ 5', '* 2', 'sqrt', 'M+', 'MR'."""


class SessionStatus(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


def interpret(state: CalcState, line: str) -> OpResult:
    """Apply one trimmed, non-empty input line to state.

    A line that parses as a number in its entirety is a value entry; anything
    else is a keyword optionally followed by a numeric argument.
    """
    value = parse_number(line)
    if value is not None:
        return enter_value(state, value)

    tokens = tokenize_command(line)
    arg = None
    if tokens.argument_text is not None:
        arg = parse_number(tokens.argument_text)
        if arg is None:
            return OpResult.failure(
                state,
                FailureKind.PARSE_ERROR,
                f"Could not parse the argument {tokens.argument_text!r} as a number.",
            )
    return dispatch(state, tokens.keyword, arg)


def format_state(state: CalcState) -> str:
    return f"Current: {format_number(state.current)}    Memory: {format_number(state.memory)}"


class Session:
    """One interactive calculator session owning the two registers."""

    def __init__(
        self,
        state: CalcState | None = None,
        write: Callable[[str], None] = print,
        output_format: str = "human",
        show_help: Callable[[], None] | None = None,
    ) -> None:
        self.state = state if state is not None else CalcState()
        self.status = SessionStatus.RUNNING
        self.output_format = output_format
        self._write = write
        self._show_help = show_help

    def start(self) -> None:
        """Print the banner and the initial state line."""
        if self.output_format == "human":
            self._write(BANNER)
            self._write(HINT)
        self._report(OpResult.success(self.state))

    def feed(self, raw: str) -> SessionStatus:
        """Handle one raw input line and return the resulting session status."""
        if self.status is SessionStatus.TERMINATED:
            return self.status

        line = raw.strip()
        if not line:
            return self.status

        lowered = line.lower()
        if lowered in EXIT_COMMANDS:
            self.status = SessionStatus.TERMINATED
            return self.status
        if lowered in HELP_COMMANDS:
            if self._show_help is not None:
                self._show_help()
            else:
                self._write(HELP_TEXT)
            return self.status

        try:
            result = interpret(self.state, line)
        except Exception as e:
            logger.exception("Unexpected error handling %r", line)
            if self.output_format == "json":
                self._write(
                    json.dumps(
                        {
                            "ok": False,
                            "error": f"Unexpected error: {e}",
                            "code": "UNEXPECTED_ERROR",
                            "current": self.state.current,
                            "memory": self.state.memory,
                        }
                    )
                )
            else:
                self._write(f"Unexpected error: {e}")
            return self.status

        self.state = result.state
        self._report(result)
        return self.status

    def run(self, read: Callable[[str], str] = input) -> None:
        """Read-eval-print until an exit command or end of input."""
        # machine-readable output carries no prompt
        prompt = config.PROMPT if self.output_format == "human" else ""
        self.start()
        while self.status is SessionStatus.RUNNING:
            try:
                raw = read(prompt)
            except (EOFError, KeyboardInterrupt):
                if self.output_format == "human":
                    self._write("")
                self.status = SessionStatus.TERMINATED
                break
            self.feed(raw)
        self.close()

    def close(self) -> None:
        self.status = SessionStatus.TERMINATED
        if self.output_format == "human":
            self._write(CLOSING_MESSAGE)

    def _report(self, result: OpResult) -> None:
        if self.output_format == "json":
            self._write(json.dumps(result.to_dict()))
            return
        if result.ok:
            self._write(format_state(result.state))
        elif result.code is FailureKind.UNKNOWN_COMMAND:
            logger.debug("Unknown command")
            self._write(result.error or "Unknown command.")
        else:
            self._write(f"Error: {result.error}")
            self._write(format_state(result.state))
