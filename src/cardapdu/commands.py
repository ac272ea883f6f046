"""Builders for common ISO 7816-4 and GlobalPlatform commands.

Each builder returns an EncodedApdu ready to hand to a transport.

Example:
    >>> from cardapdu.commands import select_by_aid
    >>> select_by_aid("A0 00 00 01 51 00 00").to_hex_string()
    '00a4040007a000000151000000'
"""

from typing import Optional, Sequence, Union

from cardapdu.encoder import EncodedApdu, check_payload, encode
from cardapdu.exceptions import MalformedPayloadError, OutOfRangeError
from cardapdu.models import INS, CommandDescriptor

MAX_OFFSET = 0x7FFF
PIN_LENGTH = 8
PIN_PADDING = 0xFF

BytesLike = Union[bytes, bytearray, memoryview, Sequence[int], str]


def _to_bytes(value: BytesLike) -> bytes:
    """Convert bytes, a byte sequence or a hex string (spaces allowed) to bytes."""
    if isinstance(value, str):
        try:
            return bytes.fromhex(value.replace(" ", ""))
        except ValueError as e:
            raise MalformedPayloadError(value, f"Invalid hex string: {value!r}") from e
    if value is None:
        raise MalformedPayloadError(value)
    return bytes(check_payload(value))


def _check_offset(offset: int) -> None:
    if offset < 0 or offset > MAX_OFFSET:
        raise OutOfRangeError(
            "offset", offset, f"Offset too large: {offset} (max {MAX_OFFSET})"
        )


# =============================================================================
# SELECT
# =============================================================================


def select_by_aid(aid: BytesLike, next_occurrence: bool = False) -> EncodedApdu:
    """Build SELECT by AID (DF name).

    Args:
        aid: Application Identifier as bytes or hex string.
        next_occurrence: Select next occurrence if True.
    """
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.SELECT,
            p1=0x04,  # Select by DF name
            p2=0x02 if next_occurrence else 0x00,
            data=_to_bytes(aid),
            le=0,
        )
    )


def select_by_path(path: BytesLike, from_mf: bool = True) -> EncodedApdu:
    """Build SELECT by path.

    Args:
        path: File path as bytes or hex string (e.g., "7F106F07").
        from_mf: Start from MF if True, else from current DF.
    """
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.SELECT,
            p1=0x08 if from_mf else 0x09,
            p2=0x04,  # Return FCP
            data=_to_bytes(path),
            le=0,
        )
    )


def select_by_file_id(file_id: int) -> EncodedApdu:
    """Build SELECT by 2-byte file identifier."""
    if file_id < 0 or file_id > 0xFFFF:
        raise OutOfRangeError("file_id", file_id, f"File ID must fit 2 bytes: {file_id}")
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.SELECT,
            p1=0x00,
            p2=0x04,
            data=bytes([(file_id >> 8) & 0xFF, file_id & 0xFF]),
            le=0,
        )
    )


def select_mf() -> EncodedApdu:
    """Build SELECT Master File (3F00)."""
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.SELECT,
            p1=0x00,
            p2=0x00,
            data=bytes([0x3F, 0x00]),
            le=0,
        )
    )


# =============================================================================
# Files and records
# =============================================================================


def read_binary(offset: int = 0, length: int = 0) -> EncodedApdu:
    """Build READ BINARY on the current EF.

    Args:
        offset: Offset in file (max 32767), split over P1/P2.
        length: Number of bytes to read (0 = max available).
    """
    _check_offset(offset)
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.READ_BINARY,
            p1=(offset >> 8) & 0x7F,
            p2=offset & 0xFF,
            le=length if length < 256 else 0,
        )
    )


def update_binary(data: BytesLike, offset: int = 0) -> EncodedApdu:
    """Build UPDATE BINARY on the current EF."""
    _check_offset(offset)
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.UPDATE_BINARY,
            p1=(offset >> 8) & 0x7F,
            p2=offset & 0xFF,
            data=_to_bytes(data),
        )
    )


def read_record(record_number: int, mode: int = 0x04) -> EncodedApdu:
    """Build READ RECORD.

    Args:
        record_number: Record number (1-based), sent in P1.
        mode: Record selection mode (P2), absolute/current by default.
    """
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.READ_RECORD,
            p1=record_number,
            p2=mode,
            le=0,
        )
    )


def get_response(length: int) -> EncodedApdu:
    """Build GET RESPONSE for a 61xx status."""
    return encode(
        CommandDescriptor(
            cla=0x00, ins=INS.GET_RESPONSE, p1=0x00, p2=0x00, le=length
        )
    )


# =============================================================================
# Security and data objects
# =============================================================================


def verify_pin(pin: BytesLike, pin_ref: int = 0x01) -> EncodedApdu:
    """Build VERIFY for a PIN.

    The PIN is padded to 8 bytes with 0xFF.

    Args:
        pin: PIN value (bytes or ASCII string).
        pin_ref: PIN reference (P2), usually 0x01.
    """
    if isinstance(pin, str):
        try:
            pin = pin.encode("ascii")
        except UnicodeEncodeError as e:
            raise MalformedPayloadError(pin, "PIN string must be ASCII") from e
    else:
        pin = _to_bytes(pin)
    if len(pin) > PIN_LENGTH:
        raise OutOfRangeError(
            "pin", len(pin), f"PIN must not exceed {PIN_LENGTH} bytes"
        )
    pin = pin + bytes([PIN_PADDING]) * (PIN_LENGTH - len(pin))

    return encode(
        CommandDescriptor(cla=0x00, ins=INS.VERIFY, p1=0x00, p2=pin_ref, data=pin)
    )


def get_data(tag: int) -> EncodedApdu:
    """Build GET DATA for a one or two byte tag."""
    if tag < 0 or tag > 0xFFFF:
        raise OutOfRangeError("tag", tag, f"Tag must fit 2 bytes: {tag}")
    return encode(
        CommandDescriptor(
            cla=0x00,
            ins=INS.GET_DATA,
            p1=(tag >> 8) & 0xFF,
            p2=tag & 0xFF,
            le=0,
        )
    )


def get_status(
    p1: int = 0x80,
    p2: int = 0x00,
    aid_filter: Optional[BytesLike] = None,
) -> EncodedApdu:
    """Build GlobalPlatform GET STATUS.

    Args:
        p1: Status type:
            0x80 = ISD
            0x40 = Applications and SSD
            0x20 = Executable Load Files
            0x10 = Executable Load Files and Modules
        p2: Response format, TLV format is always requested.
        aid_filter: Optional AID filter (4F tag).
    """
    if aid_filter:
        aid = _to_bytes(aid_filter)
        data = bytes([0x4F, len(aid)]) + aid
    else:
        data = bytes([0x4F, 0x00])  # Empty filter for all

    return encode(
        CommandDescriptor(
            cla=0x80,
            ins=INS.GET_STATUS,
            p1=p1,
            p2=p2 | 0x02,
            data=data,
            le=0,
        )
    )
