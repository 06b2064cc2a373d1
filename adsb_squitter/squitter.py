"""Decode ADS-B extended squitters (DF17 / DF18).

Frame layout (112 bits):
- DF   (5 bits):  downlink format, 17 or 18
- CA   (3 bits):  capability (CF for DF18)
- AA   (24 bits): ICAO address
- ME   (56 bits): extended squitter message, bytes 4-10
- PI   (24 bits): parity

The first 5 bits of ME are the format type code (TC). What the remaining
51 bits mean depends on TC and is left to the consumer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import FormatError
from .hexutil import from_hex, to_hex
from .reply import EXTENDED_SQUITTER_FORMATS, Reply, parse_reply

logger = logging.getLogger(__name__)

ME_START = 4
ME_END = 11  # exclusive; ME is 7 bytes


@dataclass(frozen=True)
class ExtendedSquitter:
    """An extended squitter split into its generic subfields."""

    downlink_format: int
    capability: int  # 0-7
    format_type_code: int  # 0-31
    message: bytes  # ME field, always 7 bytes
    address: str  # 6-char hex ICAO address
    payload: bytes

    @classmethod
    def from_reply(cls, reply: Reply) -> ExtendedSquitter:
        """Build from anything exposing downlink_format and payload."""
        return decode(reply.downlink_format, reply.payload)

    def __str__(self) -> str:
        return (
            f"Extended Squitter (DF{self.downlink_format}, {self.address}):\n"
            f"\tFormat type code:\t{self.format_type_code}\n"
            f"\tCapabilities:\t\t{self.capability}\n"
            f"\tMessage field:\t\t{to_hex(self.message)}"
        )


def decode(downlink_format: int, payload: bytes) -> ExtendedSquitter:
    """Extract capability, ME field and format type code from a payload.

    Args:
        downlink_format: DF code of the reply.
        payload: Full frame bytes (byte 0 carries DF + CA).

    Raises:
        FormatError: DF is not 17/18, or the payload can't hold the ME field.
    """
    if downlink_format not in EXTENDED_SQUITTER_FORMATS:
        raise FormatError(
            f"DF{downlink_format} is not an extended squitter",
            downlink_format=downlink_format,
        )
    if len(payload) < ME_END:
        raise FormatError(
            f"payload of {len(payload)} bytes is too short for an ME field",
            downlink_format=downlink_format,
        )

    payload = bytes(payload)
    capability = payload[0] & 0b0000_0111
    message = payload[ME_START:ME_END]
    format_type_code = (message[0] >> 3) & 0b0001_1111

    return ExtendedSquitter(
        downlink_format=downlink_format,
        capability=capability,
        format_type_code=format_type_code,
        message=message,
        address=to_hex(payload[1:4]),
        payload=payload,
    )


def decode_hex(raw: str | bytes) -> ExtendedSquitter:
    """Decode a raw frame (hex string or bytes) as an extended squitter.

    Raises:
        FormatError: malformed frame, or not an extended squitter.
    """
    reply = parse_reply(raw)
    if reply is None:
        if isinstance(raw, str):
            # parse_reply only says "no"; find out why for the message
            try:
                n_bytes = len(from_hex(raw))
            except ValueError as e:
                raise FormatError(f"malformed hex frame: {e}") from e
        else:
            n_bytes = len(raw)
        raise FormatError(f"frame of {n_bytes} bytes is not a Mode S reply")
    return ExtendedSquitter.from_reply(reply)


def parse_squitter(raw: str | bytes) -> ExtendedSquitter | None:
    """Like decode_hex(), but returns None instead of raising.

    Meant for receive loops where garbage frames are routine.
    """
    try:
        return decode_hex(raw)
    except FormatError as e:
        logger.debug("Dropped frame %r: %s", raw, e)
        return None
