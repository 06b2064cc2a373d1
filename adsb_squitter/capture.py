"""Decode a capture: one Mode S frame per line of text.

Lines come from a file (rtl_adsb, dump1090 --raw and the like) or any
iterable, such as command-line arguments. Blanks and `#` comments are not
frames; every other line becomes a CapturedFrame, malformed or not, so the
caller can count what the receiver got wrong.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .errors import FormatError
from .hexutil import clean_hex_line
from .reply import ModeSReply, parse_reply
from .squitter import ExtendedSquitter

logger = logging.getLogger(__name__)

# Outcome labels, in report order
SQUITTER = "squitter"
OTHER_DF = "other_df"
MALFORMED = "malformed"


@dataclass(frozen=True)
class CapturedFrame:
    """One line of a capture and what it decoded to."""

    line_no: int  # 1-based
    text: str  # the line, stripped
    reply: ModeSReply | None  # None when the line isn't a Mode S frame
    squitter: ExtendedSquitter | None  # None unless DF17/18

    @property
    def outcome(self) -> str:
        if self.reply is None:
            return MALFORMED
        if self.squitter is None:
            return OTHER_DF
        return SQUITTER


def _decode_line(line_no: int, text: str) -> CapturedFrame:
    reply = parse_reply(clean_hex_line(text) or text)
    squitter = None
    if reply is not None and reply.is_extended_squitter:
        try:
            squitter = ExtendedSquitter.from_reply(reply)
        except FormatError as e:
            logger.debug("Line %d: %s", line_no, e)
    return CapturedFrame(line_no=line_no, text=text, reply=reply, squitter=squitter)


class FrameReader:
    """Iterate CapturedFrames from a file path or an iterable of lines."""

    def __init__(self, source: str | Path | Iterable[str]):
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"Frame file not found: {path}")
            self._lines: Iterable[str] = path.read_text().splitlines()
        else:
            self._lines = source

    def __iter__(self) -> Iterator[CapturedFrame]:
        for line_no, line in enumerate(self._lines, start=1):
            text = line.strip()
            if text and not text.startswith("#"):
                yield _decode_line(line_no, text)


def tally(frames: Iterable[CapturedFrame]) -> Counter:
    """Count frames by outcome; every outcome key is present."""
    counts = Counter({SQUITTER: 0, OTHER_DF: 0, MALFORMED: 0})
    counts.update(frame.outcome for frame in frames)
    return counts
