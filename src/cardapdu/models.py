"""Data models for command APDU encoding.

This module defines the command descriptor handed to the encoder and the
enumerations used to describe command APDUs.

Example:
    >>> from cardapdu.models import CommandDescriptor
    >>> descriptor = CommandDescriptor(cla=0x00, ins=0xA4, p1=0x04, p2=0x00)
    >>> descriptor.to_dict()
    {'cla': 0, 'ins': 164, 'p1': 4, 'p2': 0, 'le': 0}
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Sequence


# =============================================================================
# Enumerations
# =============================================================================


class INS(IntEnum):
    """Common ISO 7816 and GlobalPlatform instruction bytes."""

    # ISO 7816-4
    SELECT = 0xA4
    READ_BINARY = 0xB0
    READ_RECORD = 0xB2
    GET_RESPONSE = 0xC0
    UPDATE_BINARY = 0xD6
    UPDATE_RECORD = 0xDC
    VERIFY = 0x20
    CHANGE_PIN = 0x24
    UNBLOCK_PIN = 0x2C
    GET_DATA = 0xCA
    PUT_DATA = 0xDA
    INTERNAL_AUTH = 0x88
    EXTERNAL_AUTH = 0x82
    MANAGE_CHANNEL = 0x70

    # GlobalPlatform
    INITIALIZE_UPDATE = 0x50
    GET_STATUS = 0xF2
    SET_STATUS = 0xF0
    INSTALL = 0xE6
    LOAD = 0xE8
    DELETE = 0xE4
    PUT_KEY = 0xD8
    STORE_DATA = 0xE2


class ApduCase(IntEnum):
    """ISO 7816-4 command APDU cases.

    The case is derived from whether command data is present and whether
    a non-zero response length is expected.
    """

    CASE_1 = 1  # No data, no response data expected
    CASE_2 = 2  # No data, response data expected
    CASE_3 = 3  # Data, no response data expected
    CASE_4 = 4  # Data, response data expected

    @classmethod
    def classify(cls, has_data: bool, le: int) -> "ApduCase":
        """Classify a command by payload presence and expected length."""
        if has_data:
            return cls.CASE_4 if le else cls.CASE_3
        return cls.CASE_2 if le else cls.CASE_1


# =============================================================================
# Command Descriptor
# =============================================================================


@dataclass(frozen=True)
class CommandDescriptor:
    """Structured description of a command APDU.

    Values are checked by the encoder, not here, so that a descriptor can
    be built from untrusted input and rejected with a precise error.

    Attributes:
        cla: Class byte.
        ins: Instruction byte.
        p1: Parameter 1.
        p2: Parameter 2.
        data: Command data, or None when the command carries no data.
        le: Expected response length (None is treated as 0).
    """

    cla: int
    ins: int
    p1: int
    p2: int
    data: Optional[Sequence[int]] = None
    le: Optional[int] = 0

    def __post_init__(self):
        """Freeze list and bytearray data so the descriptor stays hashable."""
        if isinstance(self.data, list):
            object.__setattr__(self, "data", tuple(self.data))
        elif isinstance(self.data, bytearray):
            object.__setattr__(self, "data", bytes(self.data))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain mapping.

        Returns:
            Dictionary with header fields, le, and data when present.
        """
        result: Dict[str, Any] = {
            "cla": self.cla,
            "ins": self.ins,
            "p1": self.p1,
            "p2": self.p2,
        }
        if self.data is not None:
            result["data"] = list(self.data)
        result["le"] = 0 if self.le is None else self.le
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommandDescriptor":
        """Build a descriptor from a mapping.

        Missing header keys become None and are reported by the encoder.

        Args:
            data: Mapping with 'cla', 'ins', 'p1', 'p2' and optional
                'data' and 'le' keys.

        Returns:
            CommandDescriptor instance.
        """
        return cls(
            cla=data.get("cla"),
            ins=data.get("ins"),
            p1=data.get("p1"),
            p2=data.get("p2"),
            data=data.get("data"),
            le=data.get("le", 0),
        )
