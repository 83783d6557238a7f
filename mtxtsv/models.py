from __future__ import annotations

from pydantic import BaseModel

from .rules import EXIT_OK


class CommandResult(BaseModel):
    exit_code: int = EXIT_OK
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK


class HeaderLinesResponse(BaseModel):
    filename: str
    header_lines: int


class HealthResponse(BaseModel):
    ok: bool = True
