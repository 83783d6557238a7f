"""
Deterministic conversion rules.

This file exists to make the fixed behavior explicit: nothing here is read
from the environment.
"""

COMMENT_MARKER = "%"
TSV_DELIMITER = "\t"
CANONICAL_NEWLINE = "\n"
TEXT_ENCODING = "utf-8"
# undecodable input bytes round-trip to the output untouched
DECODE_ERRORS = "surrogateescape"

ACCEPTED_SUFFIXES = (".mtx", ".mm", ".txt")
SNIFF_BYTES = 64 * 1024

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
