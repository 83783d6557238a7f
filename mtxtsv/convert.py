"""
MatrixMarket -> TSV conversion.

Responsibilities:
- header length detection (comment block + dimensions line)
- comment stripping
- whitespace runs -> single tab

Both operations stream: only the current line is held in memory.
"""

from __future__ import annotations

import logging
import os
import re
from contextlib import closing
from typing import IO, Iterable, Iterator

from .newlines import iter_lines, lines_of, open_sink, open_source, write_lines
from .rules import COMMENT_MARKER, TSV_DELIMITER

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


class EmptyInputError(ValueError):
    """Raised when a header is requested from input that has no lines at all."""


def is_comment(line: str) -> bool:
    return line[:1] == COMMENT_MARKER


def to_tsv_row(line: str) -> str:
    return _WHITESPACE_RUN.sub(TSV_DELIMITER, line)


def header_line_count(lines: Iterable[str]) -> int:
    """
    Number of leading header lines: the run of comment lines plus one for
    the dimensions line that follows it.

    Stops pulling from `lines` at the first non-comment line. If every line
    is a comment the result is still count + 1, one more than the number of
    lines in the input.
    """
    count = 0
    seen_any = False
    for line in lines:
        seen_any = True
        if not is_comment(line):
            break
        count += 1

    if not seen_any:
        raise EmptyInputError("input has no lines; no dimensions line to count")

    return count + 1


def count_header_lines(path: str | os.PathLike) -> int:
    # closing() releases the file even though the count stops early
    with closing(iter_lines(path)) as lines:
        count = header_line_count(lines)
    logger.debug(f"{path}: {count} header lines")
    return count


def tsv_lines(lines: Iterable[str]) -> Iterator[str]:
    """Drop comment lines wherever they appear; tab-separate everything else."""
    for line in lines:
        if is_comment(line):
            continue
        yield to_tsv_row(line)


def write_tsv(src: IO[str], sink: IO[str]) -> int:
    """Stream converted rows from an open source to an open sink. Returns rows written."""
    return write_lines(sink, tsv_lines(lines_of(src)))


def convert_to_tsv(input_path: str | os.PathLike, output_path: str | os.PathLike) -> int:
    """
    Stream `input_path` into `output_path` as TSV. Returns rows written.

    The input is opened first, so a missing input never creates the output.
    If writing fails part way, the truncated output is left on disk.
    """
    with open_source(input_path) as src:
        with open_sink(output_path) as sink:
            rows = write_tsv(src, sink)

    logger.info(f"Wrote {rows} rows from {input_path} to {output_path}")
    return rows
