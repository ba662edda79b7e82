"""Status and warning output for command line runs."""

from __future__ import annotations

import enum
import sys
from typing import Any, TextIO

STATUS_WIDTH = 12


class Verbosity(enum.IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2


class Shell:
    """Writes progress lines and warnings for the user.

    Output goes to `stream` when given, otherwise to whatever `sys.stderr` is
    at write time so redirected streams are honored.
    """

    def __init__(self, verbosity: Verbosity = Verbosity.NORMAL, stream: TextIO | None = None) -> None:
        self.verbosity = verbosity
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _print(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def status(self, verb: str, detail: Any) -> None:
        """Print a right-aligned status verb followed by its detail."""
        if self.verbosity == Verbosity.QUIET:
            return
        self._print(f"{verb:>{STATUS_WIDTH}} {detail}")

    def verbose(self, verb: str, detail: Any) -> None:
        if self.verbosity >= Verbosity.VERBOSE:
            self.status(verb, detail)

    def warn(self, message: str) -> None:
        self._print(f"warning: {message}")

    def error(self, message: str) -> None:
        self._print(f"error: {message}")


def _cause_chain(err: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = err
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def display_warning_with_error(message: str, err: BaseException, shell: Shell) -> None:
    """Print `message` as a warning followed by the causes of `err`."""
    lines = [message, "", "Caused by:"]
    for cause in _cause_chain(err):
        lines.append(f"  {cause}")
    shell.warn("\n".join(lines))
