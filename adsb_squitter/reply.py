"""Parse raw Mode S frames into downlink format + payload.

Responsibilities:
- Accept a frame as hex text or bytes (56 or 112 bits, as the DF requires)
- Classify the Downlink Format (DF) from the first 5 bits
- Expose the address and parity status without interpreting the payload

Replies are one record type tagged by DF. Per-format facts (name, expected
length, where the address lives) come from lookup tables keyed by DF, so a
new format is a table entry rather than a subclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from . import parity
from .hexutil import from_hex, to_hex

logger = logging.getLogger(__name__)


# DF: (name, expected_bits)
DF_INFO: dict[int, tuple[str, int]] = {
    0: ("Short air-air surveillance", 56),
    4: ("Surveillance altitude reply", 56),
    5: ("Surveillance identity reply", 56),
    11: ("All-call reply", 56),
    16: ("Long air-air surveillance", 112),
    17: ("ADS-B extended squitter", 112),
    18: ("TIS-B / ADS-R", 112),
    19: ("Military extended squitter", 112),
    20: ("Comm-B altitude reply", 112),
    21: ("Comm-B identity reply", 112),
    24: ("Comm-D extended length message", 112),
}

EXTENDED_SQUITTER_FORMATS = frozenset({17, 18})

# Address sent in the clear in bytes 1-3
_DF_EXPLICIT_ADDRESS = frozenset({11, 17, 18})

_VALID_LENGTHS = (7, 14)


class Reply(Protocol):
    """Anything that carries a downlink format and the frame bytes."""

    @property
    def downlink_format(self) -> int: ...

    @property
    def payload(self) -> bytes: ...


@dataclass(frozen=True)
class ModeSReply:
    """A raw Mode S reply: the DF tag plus the untouched frame bytes."""

    downlink_format: int  # 0-31
    payload: bytes  # full frame, byte 0 carries the DF bits

    @property
    def df_name(self) -> str:
        if self.downlink_format in DF_INFO:
            return DF_INFO[self.downlink_format][0]
        return f"Unknown DF{self.downlink_format}"

    @property
    def first_field(self) -> int:
        """The 3 bits after the DF (CA, FS or VS/CC depending on format)."""
        return self.payload[0] & 0x07

    @property
    def is_long(self) -> bool:
        return len(self.payload) * 8 == 112

    @property
    def is_extended_squitter(self) -> bool:
        return self.downlink_format in EXTENDED_SQUITTER_FORMATS

    @property
    def address(self) -> str:
        """ICAO 24-bit address as 6 upper-case hex digits.

        Explicit for DF11/17/18, recovered from the parity residual otherwise
        (and then only as trustworthy as the frame itself).
        """
        if self.downlink_format in _DF_EXPLICIT_ADDRESS:
            return to_hex(self.payload[1:4])
        return f"{parity.residual(self.payload):06X}"

    @property
    def crc_ok(self) -> bool | None:
        """Parity status, or None where parity is overlaid with the address."""
        if self.downlink_format in EXTENDED_SQUITTER_FORMATS:
            return parity.residual(self.payload) == 0
        if self.downlink_format == 11:
            # Low 7 bits carry the interrogator code
            return (parity.residual(self.payload) & ~0x7F) == 0
        return None

    @property
    def hex(self) -> str:
        return to_hex(self.payload)


def parse_reply(raw: str | bytes) -> ModeSReply | None:
    """Parse a hex string or byte frame into a ModeSReply.

    Args:
        raw: 14 or 28 hex digits, or 7 or 14 bytes.

    Returns:
        ModeSReply, or None if the input is malformed or its length doesn't
        match what the DF calls for.
    """
    if isinstance(raw, str):
        try:
            data = from_hex(raw)
        except ValueError:
            logger.debug("Rejected non-hex frame %r", raw)
            return None
    else:
        data = bytes(raw)

    if len(data) not in _VALID_LENGTHS:
        logger.debug("Rejected frame of %d bytes", len(data))
        return None

    df = (data[0] >> 3) & 0x1F
    if df in DF_INFO and len(data) * 8 != DF_INFO[df][1]:
        logger.debug("Rejected DF%d frame of %d bits", df, len(data) * 8)
        return None
    return ModeSReply(downlink_format=df, payload=data)
