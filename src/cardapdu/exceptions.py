"""Exception hierarchy for APDU encoding.

This module defines all exceptions raised while validating command
descriptors and assembling command APDUs, with helpful error messages
and troubleshooting hints.
"""

from typing import Any, Optional

APDU_FORMAT_HINT = (
    "APDU format: CLA INS P1 P2 [Lc Data...] Le\n"
    "CLA, INS, P1, P2, Le and every data byte must be in 0x00-0xFF"
)


class ApduError(Exception):
    """Base exception for all APDU encoding errors.

    All library-specific exceptions inherit from this class,
    allowing code to catch every encoding error with a single handler.

    Attributes:
        message: Human-readable error description.
        hint: Optional troubleshooting hint.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class MissingInputError(ApduError, TypeError):
    """Raised when no command descriptor is given.

    This occurs when the descriptor is None or is neither a
    CommandDescriptor nor a mapping of header fields.
    """

    def __init__(self, value: Any = None):
        self.value = value
        if value is None:
            message = "Command descriptor is required"
        else:
            message = (
                "Command descriptor must be a CommandDescriptor or a mapping, "
                f"got {type(value).__name__}"
            )
        hint = "Pass CommandDescriptor(cla, ins, p1, p2) or {'cla': ..., 'ins': ..., 'p1': ..., 'p2': ...}."
        super().__init__(message, hint)


class OutOfRangeError(ApduError, ValueError):
    """Raised when a field does not hold a single byte value.

    Attributes:
        field: Name of the offending field (e.g. "p1" or "data[3]").
        value: The rejected value.
    """

    def __init__(self, field: str, value: Any, reason: Optional[str] = None):
        self.field = field
        self.value = value
        message = reason or f"{field} must be a byte value (0-255), got {value!r}"
        super().__init__(message, APDU_FORMAT_HINT)


class MalformedPayloadError(ApduError, TypeError):
    """Raised when command data is not an ordered sequence of bytes.

    Attributes:
        value: The rejected payload.
    """

    def __init__(self, value: Any, reason: Optional[str] = None):
        self.value = value
        message = reason or (
            f"data must be a sequence of bytes, got {type(value).__name__}"
        )
        hint = "Use bytes, bytearray, or a list/tuple of integers."
        super().__init__(message, hint)


class LoadError(ApduError):
    """Raised when loading command descriptors from a file fails.

    Attributes:
        file_path: Path of the file being loaded.
    """

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"Failed to load '{file_path}': {message}")
