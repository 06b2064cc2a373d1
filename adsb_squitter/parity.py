"""Mode S CRC-24 parity.

Generator polynomial 0xFFF409 (ICAO Annex 10 Vol IV). The parity field is
the last 24 bits of every frame:

- DF11/17/18: parity is the plain CRC of the data bits, so a clean frame
  leaves a residual of 0.
- DF0/4/5/16/20/21: parity is overlaid with the aircraft address, so the
  residual *is* the address.
"""

from __future__ import annotations

GENERATOR = 0xFFF409
PARITY_BYTES = 3


def _make_table() -> tuple[int, ...]:
    rows = []
    for byte in range(256):
        reg = byte << 16
        for _ in range(8):
            reg = (reg << 1) ^ GENERATOR if reg & 0x800000 else reg << 1
        rows.append(reg & 0xFFFFFF)
    return tuple(rows)


_TABLE = _make_table()


def checksum(data: bytes) -> int:
    """CRC-24 of `data` by polynomial division, one byte per step."""
    reg = 0
    for byte in data:
        reg = ((reg << 8) ^ _TABLE[((reg >> 16) ^ byte) & 0xFF]) & 0xFFFFFF
    return reg


def residual(frame: bytes) -> int:
    """CRC of the data bits XOR the transmitted parity field."""
    if len(frame) <= PARITY_BYTES:
        return int.from_bytes(frame, "big")
    return checksum(frame[:-PARITY_BYTES]) ^ int.from_bytes(frame[-PARITY_BYTES:], "big")


def is_valid(frame: bytes) -> bool:
    """True when a frame with plain parity (DF11/17/18) checks out."""
    return residual(frame) == 0
