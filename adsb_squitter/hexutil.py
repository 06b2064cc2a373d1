"""Hex-string helpers for Mode S frames.

Frames travel as hex text: plain ("8D4840D6202CC371C32CE0576098") or in
dump1090's raw format ("*8D4840D6202CC371C32CE0576098;").
"""

from __future__ import annotations

import re

# 14 chars (56-bit short frame) or 28 chars (112-bit long frame)
_HEX_PATTERN = re.compile(r"^(?:[0-9A-Fa-f]{14}|[0-9A-Fa-f]{28})$")
_DUMP1090_PATTERN = re.compile(r"^\*([0-9A-Fa-f]{14}|[0-9A-Fa-f]{28});$")


def to_hex(data: bytes) -> str:
    """Upper-case hex rendering, two digits per byte."""
    return data.hex().upper()


def from_hex(hex_str: str) -> bytes:
    """Decode a hex string into bytes.

    Raises ValueError for odd length or non-hex characters.
    """
    hex_str = hex_str.strip()
    if len(hex_str) % 2:
        raise ValueError(f"odd number of hex digits: {len(hex_str)}")
    return bytes.fromhex(hex_str)


def clean_hex_line(line: str) -> str | None:
    """Extract a valid Mode S hex string from a line of text.

    Returns the upper-cased frame, or None for blanks, comments and
    anything that isn't a 14/28 digit frame.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    m = _DUMP1090_PATTERN.match(line)
    if m:
        return m.group(1).upper()
    if _HEX_PATTERN.match(line):
        return line.upper()
    return None
