from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .dispatch import Operation, run
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mtxtsv",
        description="Count MatrixMarket header lines or convert a MatrixMarket file to TSV",
    )
    parser.add_argument("command", help=f"One of: {', '.join(op.value for op in Operation)}")
    parser.add_argument("paths", nargs="*", help="Input path, then output path for convert-to-tsv")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    result = run(args.command, args.paths)
    if result.stdout:
        sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
