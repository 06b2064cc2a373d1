"""Exceptions raised by adsb-squitter.

Parsers that sit directly on the radio channel (parse_reply, parse_squitter,
clean_hex_line) return None for noisy input instead of raising. The
exceptions here are for callers that asked for a specific thing and didn't
get it.
"""


class AdsbError(Exception):
    """Base class for all adsb-squitter errors."""


class FormatError(AdsbError):
    """Frame cannot be decoded as the requested reply type.

    Raised for a downlink format other than 17/18, a payload too short to
    hold the ME field, or malformed hex.
    """

    def __init__(self, message: str, downlink_format: int | None = None):
        super().__init__(message)
        self.downlink_format = downlink_format


class MissingCoordinateError(AdsbError):
    """A Position lacks a coordinate needed for a computation."""

    def __init__(self, field: str):
        super().__init__(f"position has no {field}")
        self.field = field
