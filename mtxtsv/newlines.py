"""
Line-ending normalization for everything read from or written to disk.

In memory, lines are always separated by a single LF. On disk, output uses
the host platform's terminator (os.linesep).

Bytes that are not valid UTF-8 are not an error: they are carried through
as surrogate escapes on read and written back unchanged.
"""

from __future__ import annotations

import os
from typing import IO, Iterable, Iterator

from .rules import CANONICAL_NEWLINE, DECODE_ERRORS, TEXT_ENCODING


def normalize_newlines(text: str) -> str:
    """CRLF -> LF. Lone LF is already canonical, so this is idempotent."""
    return text.replace("\r\n", CANONICAL_NEWLINE)


def to_native_newlines(text: str) -> str:
    text = normalize_newlines(text)
    if os.linesep == CANONICAL_NEWLINE:
        return text
    return text.replace(CANONICAL_NEWLINE, os.linesep)


def lines_of(f: IO[str]) -> Iterator[str]:
    """Yield lines from an open text handle, terminators removed."""
    for line in f:
        yield normalize_newlines(line).removesuffix(CANONICAL_NEWLINE)


def open_source(path: str | os.PathLike) -> IO[str]:
    # split on LF only; CR handling is normalize_newlines' job
    return open(path, "r", encoding=TEXT_ENCODING, errors=DECODE_ERRORS, newline=CANONICAL_NEWLINE)


def iter_lines(path: str | os.PathLike) -> Iterator[str]:
    """
    Lazily yield the lines of a file without their terminators.

    The file is opened on first use and closed once the generator is
    exhausted or closed. Callers that stop early should close it.
    """
    with open_source(path) as f:
        yield from lines_of(f)


def open_sink(path: str | os.PathLike) -> IO[str]:
    # newline="" so the only terminator translation is to_native_newlines
    return open(path, "w", encoding=TEXT_ENCODING, errors=DECODE_ERRORS, newline="")


def write_lines(sink: IO[str], lines: Iterable[str]) -> int:
    """Write each line plus the host terminator. Returns the number written."""
    count = 0
    for line in lines:
        sink.write(to_native_newlines(line + CANONICAL_NEWLINE))
        count += 1
    return count
