"""
Routes a command name to one of the two conversion operations.

run() never raises for expected failures; it returns a CommandResult with
the text for stdout/stderr and the exit code, and leaves printing to the
caller.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Optional, Sequence

from .convert import EmptyInputError, convert_to_tsv, count_header_lines
from .models import CommandResult
from .rules import EXIT_FAILURE, EXIT_USAGE

logger = logging.getLogger(__name__)


class Operation(StrEnum):
    HEADER_LINES = "header-lines"
    CONVERT_TO_TSV = "convert-to-tsv"

    @classmethod
    def parse(cls, name: str) -> Optional[Operation]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def usage(self) -> str:
        if self is Operation.HEADER_LINES:
            return f"usage: {self.value} <input-path>"
        return f"usage: {self.value} <input-path> <output-path>"

    @property
    def arity(self) -> int:
        return 1 if self is Operation.HEADER_LINES else 2


def run(command: str, args: Sequence[str] = ()) -> CommandResult:
    op = Operation.parse(command)
    if op is None:
        logger.debug(f"Unknown command: {command!r}")
        return CommandResult(exit_code=EXIT_USAGE, stderr=f'error: unknown command "{command}"\n')

    # extra paths are ignored
    if len(args) < op.arity:
        return CommandResult(exit_code=EXIT_USAGE, stderr=op.usage + "\n")

    try:
        if op is Operation.HEADER_LINES:
            count = count_header_lines(args[0])
            return CommandResult(stdout=f"{count}\n")
        convert_to_tsv(args[0], args[1])
        return CommandResult()
    except (OSError, EmptyInputError) as e:
        logger.debug(f"{op.value} failed", exc_info=True)
        return CommandResult(exit_code=EXIT_FAILURE, stderr=f"error: {e}\n")
