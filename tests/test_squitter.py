"""Tests for extended squitter decoding: capability, ME field, type code."""

import pytest

from adsb_squitter.errors import AdsbError, FormatError
from adsb_squitter.reply import parse_reply
from adsb_squitter.squitter import (
    ExtendedSquitter,
    decode,
    decode_hex,
    parse_squitter,
)
from tests.fixtures.known_frames import SHORT_FRAMES, SQUITTER_FRAMES


def _payload(byte0: int, byte4: int, length: int = 14) -> bytes:
    """Frame bytes with chosen first byte and ME lead byte, rest counting up."""
    data = bytearray(range(length))
    data[0] = byte0
    data[4] = byte4
    return bytes(data)


class TestDecode:
    """decode(downlink_format, payload)."""

    def test_known_frames(self):
        for hex_str, icao, ca, tc, me_hex in SQUITTER_FRAMES:
            es = decode(17, bytes.fromhex(hex_str))
            assert es.capability == ca, hex_str
            assert es.format_type_code == tc, hex_str
            assert es.message == bytes.fromhex(me_hex)
            assert es.address == icao

    def test_capability_and_type_code_from_bit_pattern(self):
        """Byte 0 low bits 0b101 and byte 4 high bits 0b01011 -> CA 5, TC 11."""
        payload = _payload(byte0=0b10001_101, byte4=0b01011_010)
        es = decode(17, payload)
        assert es.capability == 5
        assert es.format_type_code == 11

    def test_message_is_bytes_4_to_10(self):
        payload = _payload(byte0=0x8D, byte4=0xAB)
        es = decode(17, payload)
        assert es.message == payload[4:11]
        assert len(es.message) == 7

    @pytest.mark.parametrize("byte0", [0x88, 0x8F, 0x90, 0x97, 0xFF, 0x00])
    def test_capability_is_low_three_bits(self, byte0):
        es = decode(17, _payload(byte0=byte0, byte4=0))
        assert es.capability == byte0 & 0x07
        assert 0 <= es.capability <= 7

    @pytest.mark.parametrize("byte4", [0x00, 0x07, 0x08, 0xF8, 0xFF])
    def test_type_code_is_top_five_bits(self, byte4):
        es = decode(17, _payload(byte0=0x8D, byte4=byte4))
        assert es.format_type_code == byte4 >> 3
        assert 0 <= es.format_type_code <= 31

    def test_df18_accepted(self):
        es = decode(18, _payload(byte0=0x90, byte4=0xF8))
        assert es.downlink_format == 18
        assert es.capability == 0
        assert es.format_type_code == 31

    def test_minimum_payload_length(self):
        es = decode(17, _payload(byte0=0x8D, byte4=0x58, length=11))
        assert len(es.message) == 7

    def test_bytearray_payload(self):
        es = decode(17, bytearray.fromhex(SQUITTER_FRAMES[0][0]))
        assert isinstance(es.message, bytes)
        assert isinstance(es.payload, bytes)


class TestDecodeErrors:
    """Non-squitter input fails with FormatError, never an assertion."""

    @pytest.mark.parametrize("df", [0, 4, 5, 11, 16, 19, 20, 21, 24, 31])
    def test_wrong_downlink_format(self, df):
        with pytest.raises(FormatError) as exc_info:
            decode(df, _payload(byte0=0x8D, byte4=0x58))
        assert exc_info.value.downlink_format == df

    def test_short_payload(self):
        with pytest.raises(FormatError):
            decode(17, bytes(10))

    def test_format_error_is_adsb_error(self):
        assert issubclass(FormatError, AdsbError)


class TestFromReply:
    def test_from_parsed_reply(self):
        reply = parse_reply("8D40621D58C382D690C8AC2863A7")
        es = ExtendedSquitter.from_reply(reply)
        assert es.downlink_format == 17
        assert es.format_type_code == 11
        assert es.payload == reply.payload

    def test_short_reply_rejected(self):
        for hex_str, _ in SHORT_FRAMES:
            with pytest.raises(FormatError):
                ExtendedSquitter.from_reply(parse_reply(hex_str))

    def test_immutable(self):
        es = decode_hex(SQUITTER_FRAMES[0][0])
        with pytest.raises(AttributeError):
            es.capability = 0


class TestDecodeHex:
    def test_hex_string(self):
        es = decode_hex("8D485020994409940838175B284F")
        assert es.format_type_code == 19
        assert es.address == "485020"

    def test_lowercase_hex(self):
        es = decode_hex("8d485020994409940838175b284f")
        assert es.format_type_code == 19

    def test_bytes_input(self):
        es = decode_hex(bytes.fromhex("8D4840D6202CC371C32CE0576098"))
        assert es.format_type_code == 4

    def test_malformed_hex(self):
        with pytest.raises(FormatError):
            decode_hex("not_hex_at_all")

    def test_wrong_length(self):
        with pytest.raises(FormatError):
            decode_hex("8D4840D6")

    def test_short_frame(self):
        with pytest.raises(FormatError):
            decode_hex("20000F1F684A6C")

    def test_truncated_df17(self):
        with pytest.raises(FormatError):
            decode_hex("8D4840D6202CC3")


class TestParseSquitter:
    """Non-raising variant for receive loops."""

    def test_valid(self):
        es = parse_squitter("8D40621D58C386435CC412692AD6")
        assert es is not None
        assert es.format_type_code == 11

    def test_garbage_returns_none(self):
        assert parse_squitter("zz") is None
        assert parse_squitter("") is None
        assert parse_squitter(b"\x8d\x00") is None

    def test_other_df_returns_none(self):
        assert parse_squitter("5D4840D6A1B2C3") is None


class TestStr:
    def test_diagnostic_rendering(self):
        text = str(decode_hex("8D40621D58C382D690C8AC2863A7"))
        assert "Format type code:\t11" in text
        assert "Capabilities:\t\t5" in text
        assert "58C382D690C8AC" in text
