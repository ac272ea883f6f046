"""Command APDU encoder.

This module turns a command descriptor into the exact byte sequence sent
to a card reader, following the ISO 7816-4 short-length layout:

    CLA INS P1 P2 [Lc Data...] Le

The Lc byte and the command data are written only when data is present.
The trailing Le byte is always written and defaults to 0.

Example:
    >>> from cardapdu.encoder import encode
    >>> apdu = encode({"cla": 0x00, "ins": 0xA4, "p1": 0x04, "p2": 0x00})
    >>> apdu.to_hex_string()
    '00a4040000'
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional, Tuple, Union

from cardapdu.exceptions import MalformedPayloadError, MissingInputError, OutOfRangeError
from cardapdu.models import ApduCase, CommandDescriptor

logger = logging.getLogger(__name__)

HEADER_SIZE = 4
MAX_SHORT_LENGTH = 0xFF

DescriptorLike = Union[CommandDescriptor, Mapping]


def _is_byte(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF


def _check_byte(field: str, value: Any) -> int:
    if not _is_byte(value):
        raise OutOfRangeError(field, value)
    return int(value)


def check_payload(data: Any) -> Optional[Tuple[int, ...]]:
    """Validate command data and return an owned copy of it."""
    if data is None:
        return None
    if isinstance(data, str) or not isinstance(
        data, (bytes, bytearray, memoryview, Sequence)
    ):
        raise MalformedPayloadError(data)

    payload = tuple(data)
    for index, value in enumerate(payload):
        _check_byte(f"data[{index}]", value)

    if len(payload) > MAX_SHORT_LENGTH:
        raise OutOfRangeError(
            "data",
            len(payload),
            f"data must not exceed {MAX_SHORT_LENGTH} bytes, got {len(payload)}",
        )
    return tuple(int(value) for value in payload)


def to_hex(data: bytes) -> str:
    """Format bytes as lowercase hex, two characters per byte."""
    return data.hex()


class EncodedApdu:
    """Immutable, encoded command APDU.

    The byte sequence is assembled once at construction. Accessors hand out
    copies, so callers can never alter the encoded command.

    Attributes:
        cla: Class byte.
        ins: Instruction byte.
        p1: Parameter 1.
        p2: Parameter 2.
        data: Command data as a tuple, or None.
        le: Expected response length.
        lc: Length of the command data, or None when there is no data.
        case: ISO 7816-4 case of the command.
    """

    __slots__ = ("_cla", "_ins", "_p1", "_p2", "_data", "_le", "_bytes")

    def __init__(self, descriptor: DescriptorLike):
        if isinstance(descriptor, Mapping):
            descriptor = CommandDescriptor.from_dict(descriptor)
        elif not isinstance(descriptor, CommandDescriptor):
            raise MissingInputError(descriptor)

        self._cla = _check_byte("cla", descriptor.cla)
        self._ins = _check_byte("ins", descriptor.ins)
        self._p1 = _check_byte("p1", descriptor.p1)
        self._p2 = _check_byte("p2", descriptor.p2)
        self._data = check_payload(descriptor.data)
        self._le = 0 if descriptor.le is None else _check_byte("le", descriptor.le)

        self._bytes = self._assemble()

        logger.debug(
            "Encoded APDU header=%02X%02X%02X%02X lc=%s le=%d case=%d",
            self._cla,
            self._ins,
            self._p1,
            self._p2,
            self.lc,
            self._le,
            self.case,
        )

    def _assemble(self) -> bytes:
        size = HEADER_SIZE + 1
        if self._data is not None:
            size += 1 + len(self._data)

        buffer = bytearray(size)
        buffer[0:HEADER_SIZE] = (self._cla, self._ins, self._p1, self._p2)
        offset = HEADER_SIZE

        if self._data is not None:
            buffer[offset] = len(self._data)
            offset += 1
            buffer[offset:offset + len(self._data)] = self._data
            offset += len(self._data)

        buffer[offset] = self._le
        return bytes(buffer)

    # =========================================================================
    # Fields
    # =========================================================================

    @property
    def cla(self) -> int:
        return self._cla

    @property
    def ins(self) -> int:
        return self._ins

    @property
    def p1(self) -> int:
        return self._p1

    @property
    def p2(self) -> int:
        return self._p2

    @property
    def data(self) -> Optional[Tuple[int, ...]]:
        return self._data

    @property
    def le(self) -> int:
        return self._le

    @property
    def lc(self) -> Optional[int]:
        """Length of the command data (Lc), None without data."""
        if self._data is None:
            return None
        return len(self._data)

    @property
    def case(self) -> ApduCase:
        """ISO 7816-4 case, derived from data presence and Le."""
        return ApduCase.classify(self._data is not None, self._le)

    # =========================================================================
    # Representations
    # =========================================================================

    def to_hex_string(self) -> str:
        """Return the command as a lowercase hex string."""
        return to_hex(self._bytes)

    def to_byte_array(self) -> List[int]:
        """Return the command as a new list of byte values."""
        return list(self._bytes)

    def to_binary(self) -> bytes:
        """Return the command as bytes, ready for a transport."""
        return self._bytes

    def to_descriptor(self) -> CommandDescriptor:
        """Return a descriptor that encodes to the same command."""
        return CommandDescriptor(
            cla=self._cla,
            ins=self._ins,
            p1=self._p1,
            p2=self._p2,
            data=self._data,
            le=self._le,
        )

    def __str__(self) -> str:
        return self.to_hex_string()

    def __bytes__(self) -> bytes:
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncodedApdu):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return (
            f"EncodedApdu(cla=0x{self._cla:02X}, ins=0x{self._ins:02X}, "
            f"p1=0x{self._p1:02X}, p2=0x{self._p2:02X}, lc={self.lc}, "
            f"le={self._le}, hex={self.to_hex_string()!r})"
        )


def encode(descriptor: DescriptorLike) -> EncodedApdu:
    """Validate a command descriptor and encode it.

    Args:
        descriptor: CommandDescriptor, or a mapping with 'cla', 'ins',
            'p1', 'p2' and optional 'data' and 'le' keys.

    Returns:
        Encoded command APDU.

    Raises:
        MissingInputError: If the descriptor is absent or not structured.
        OutOfRangeError: If a header field, data byte, or Le is not a byte,
            or if the data is longer than 255 bytes.
        MalformedPayloadError: If data is not an ordered sequence.
    """
    return EncodedApdu(descriptor)
