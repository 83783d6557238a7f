"""
Best-effort decoding of uploaded bytes.

Files on disk are read as UTF-8. Uploads can arrive in anything, so the
encoding is guessed with charset-normalizer from the first chunk, and the
upload is then read as a text stream in that encoding.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Optional

from charset_normalizer import from_bytes

from .rules import CANONICAL_NEWLINE, SNIFF_BYTES

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def detect_encoding(sample: bytes) -> tuple[Optional[str], str]:
    """
    Returns (detected, decode_used).

    Rules:
    - Detect encoding via charset-normalizer; fall back to UTF-8.
    - A leading UTF-8 BOM is dropped so it can't glue onto the first field.
    - Unknown codec names fall back to UTF-8.
    """
    detected: Optional[str] = None
    match = from_bytes(sample).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if sample.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        "".encode(decode_used)
    except LookupError:
        logger.warning(f"Unknown encoding {decode_used!r}, using utf-8")
        decode_used = "utf-8"

    return detected, decode_used


def open_upload(binary: IO[bytes]) -> tuple[io.TextIOWrapper, Optional[str]]:
    """
    Wrap a seekable binary upload as a text stream.

    Only the first SNIFF_BYTES are read for detection. Undecodable bytes
    become U+FFFD instead of failing the request.
    """
    sample = binary.read(SNIFF_BYTES)
    binary.seek(0)

    detected, decode_used = detect_encoding(sample)
    logger.debug(f"Upload decoded as {decode_used} (detected {detected})")

    text = io.TextIOWrapper(binary, encoding=decode_used, errors="replace", newline=CANONICAL_NEWLINE)
    return text, detected
