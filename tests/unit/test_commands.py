"""
Unit tests for command builders.

Tests the encoded form of SELECT, READ/UPDATE BINARY, READ RECORD,
VERIFY, GET DATA, GET RESPONSE and GlobalPlatform GET STATUS.
"""

import pytest

from cardapdu import commands
from cardapdu.exceptions import MalformedPayloadError, OutOfRangeError
from cardapdu.models import INS, ApduCase


class TestSelectCommands:
    """Test SELECT command builders."""

    def test_select_by_aid_bytes(self):
        """Test SELECT by AID with bytes."""
        aid = bytes.fromhex("A0000000031010")
        apdu = commands.select_by_aid(aid)

        binary = apdu.to_binary()
        assert binary[0:4] == bytes([0x00, INS.SELECT, 0x04, 0x00])
        assert binary[4] == len(aid)
        assert binary[5:12] == aid
        assert binary[-1] == 0x00

    def test_select_by_aid_hex_string(self):
        """Test SELECT by AID with a spaced hex string."""
        apdu = commands.select_by_aid("A0 00 00 00 03 10 10")

        assert apdu.to_hex_string() == "00a4040007a000000003101000"

    def test_select_by_aid_next_occurrence(self):
        """Test P2 = 0x02 for next occurrence."""
        apdu = commands.select_by_aid("A0000000031010", next_occurrence=True)

        assert apdu.p2 == 0x02

    def test_select_by_aid_invalid_hex(self):
        """Test invalid hex strings are rejected."""
        with pytest.raises(MalformedPayloadError, match="Invalid hex string"):
            commands.select_by_aid("not a hex string")

    def test_select_by_aid_integer_rejected(self):
        """Test an integer AID is rejected rather than expanded to zero bytes."""
        with pytest.raises(MalformedPayloadError):
            commands.select_by_aid(5)

    def test_select_by_aid_none_rejected(self):
        """Test a missing AID is rejected."""
        with pytest.raises(MalformedPayloadError):
            commands.select_by_aid(None)

    def test_select_by_aid_list(self):
        """Test a list of byte values is accepted."""
        apdu = commands.select_by_aid([0xA0, 0x00, 0x00, 0x01, 0x51])

        assert apdu.to_hex_string() == "00a4040005a00000015100"

    def test_select_by_path_from_mf(self):
        """Test P1 = 0x08 when selecting from MF."""
        apdu = commands.select_by_path("7F106F07", from_mf=True)

        assert apdu.p1 == 0x08
        assert apdu.p2 == 0x04
        assert apdu.data == (0x7F, 0x10, 0x6F, 0x07)

    def test_select_by_path_from_current(self):
        """Test P1 = 0x09 when selecting from current DF."""
        apdu = commands.select_by_path("6F07", from_mf=False)

        assert apdu.p1 == 0x09

    def test_select_by_file_id(self):
        """Test SELECT by file identifier."""
        apdu = commands.select_by_file_id(0x6F07)

        binary = apdu.to_binary()
        assert binary[2] == 0x00
        assert binary[5:7] == bytes([0x6F, 0x07])

    def test_select_by_file_id_too_large(self):
        """Test file identifiers wider than 2 bytes are rejected."""
        with pytest.raises(OutOfRangeError):
            commands.select_by_file_id(0x10000)

    def test_select_mf(self):
        """Test SELECT Master File."""
        apdu = commands.select_mf()

        assert apdu.to_hex_string() == "00a40000023f0000"


class TestFileCommands:
    """Test READ/UPDATE command builders."""

    def test_read_binary_default(self):
        """Test READ BINARY with default parameters."""
        apdu = commands.read_binary()

        assert apdu.to_hex_string() == "00b0000000"
        assert apdu.case == ApduCase.CASE_1

    def test_read_binary_with_offset(self):
        """Test offset encoding in P1/P2."""
        apdu = commands.read_binary(offset=0x1234, length=100)

        assert apdu.p1 == 0x12
        assert apdu.p2 == 0x34
        assert apdu.le == 100
        assert apdu.case == ApduCase.CASE_2

    def test_read_binary_length_256(self):
        """Test a 256-byte read is encoded as Le = 0."""
        assert commands.read_binary(length=256).le == 0

    def test_read_binary_offset_too_large(self):
        """Test offsets beyond 0x7FFF are rejected."""
        with pytest.raises(OutOfRangeError, match="Offset too large"):
            commands.read_binary(offset=0x8000)

    def test_update_binary_bytes(self):
        """Test UPDATE BINARY with bytes data."""
        apdu = commands.update_binary(bytes([0xFF] * 10), offset=0x100)

        assert apdu.ins == INS.UPDATE_BINARY
        assert apdu.p1 == 0x01
        assert apdu.p2 == 0x00
        assert apdu.lc == 10

    def test_update_binary_hex_string(self):
        """Test UPDATE BINARY with hex string data."""
        apdu = commands.update_binary("AABBCCDD")

        assert apdu.to_hex_string() == "00d6000004aabbccdd00"

    def test_update_binary_list_byte_out_of_range(self):
        """Test list data with a value above 255 names the offending element."""
        with pytest.raises(OutOfRangeError) as exc_info:
            commands.update_binary([0x01, 0x100])

        assert exc_info.value.field == "data[1]"

    def test_update_binary_offset_too_large(self):
        """Test UPDATE BINARY with offset exceeding limit."""
        with pytest.raises(OutOfRangeError, match="Offset too large"):
            commands.update_binary(bytes([0xFF]), offset=0x8000)

    def test_read_record(self):
        """Test READ RECORD record number and mode."""
        apdu = commands.read_record(record_number=3, mode=0x02)

        assert apdu.p1 == 3
        assert apdu.p2 == 0x02
        assert apdu.ins == INS.READ_RECORD

    def test_get_response(self):
        """Test GET RESPONSE carries the length in Le."""
        apdu = commands.get_response(0x10)

        assert apdu.to_hex_string() == "00c0000010"


class TestSecurityCommands:
    """Test VERIFY, GET DATA and GET STATUS builders."""

    def test_verify_pin_padding(self):
        """Test PIN is padded to 8 bytes with 0xFF."""
        apdu = commands.verify_pin("12")

        binary = apdu.to_binary()
        assert len(binary) == 4 + 1 + 8 + 1
        assert binary[5:7] == b"12"
        assert binary[7:13] == b"\xFF" * 6

    def test_verify_pin_bytes_and_reference(self):
        """Test PIN as bytes with a specific reference."""
        apdu = commands.verify_pin(b"1234", pin_ref=0x02)

        assert apdu.p2 == 0x02
        assert apdu.lc == 8

    def test_verify_pin_too_long(self):
        """Test PINs longer than 8 bytes are rejected."""
        with pytest.raises(OutOfRangeError):
            commands.verify_pin("123456789")

    def test_verify_pin_non_ascii(self):
        """Test a non-ASCII PIN string is rejected as malformed."""
        with pytest.raises(MalformedPayloadError, match="ASCII"):
            commands.verify_pin("12é4")

    def test_verify_pin_integer_rejected(self):
        """Test an integer PIN is rejected."""
        with pytest.raises(MalformedPayloadError):
            commands.verify_pin(1234)

    def test_get_data_single_byte_tag(self):
        """Test GET DATA with single-byte tag."""
        apdu = commands.get_data(0x42)

        assert apdu.p1 == 0x00
        assert apdu.p2 == 0x42

    def test_get_data_two_byte_tag(self):
        """Test GET DATA with two-byte tag."""
        apdu = commands.get_data(0x9F7F)

        assert apdu.to_hex_string() == "00ca9f7f00"

    def test_get_status_isd(self):
        """Test GET STATUS for ISD uses GlobalPlatform CLA and empty filter."""
        apdu = commands.get_status(p1=0x80)

        assert apdu.to_hex_string() == "80f28002024f0000"

    def test_get_status_with_aid_filter(self):
        """Test GET STATUS includes the AID filter TLV."""
        aid = bytes.fromhex("A0000000031010")
        apdu = commands.get_status(p1=0x40, aid_filter=aid)

        assert apdu.p1 == 0x40
        assert apdu.data == tuple(bytes([0x4F, len(aid)]) + aid)
