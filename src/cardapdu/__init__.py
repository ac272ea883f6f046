"""cardapdu - ISO 7816-4 command APDU encoding.

This package turns structured command descriptors into the exact byte
sequence sent to a smart card reader.

Core Components:
    - encode / EncodedApdu: Validation and byte layout of command APDUs
    - CommandDescriptor: Structured command input
    - commands: Builders for common ISO 7816-4 and GlobalPlatform commands
    - loader: Command descriptors from YAML files

Example:
    ```python
    from cardapdu import encode

    apdu = encode({"cla": 0x00, "ins": 0xA4, "p1": 0x04, "p2": 0x00,
                   "data": [0xA0, 0x00], "le": 0x00})
    print(apdu.to_hex_string())  # 00a4040002a00000

    transport.transmit(apdu.to_binary())
    ```
"""

from cardapdu.encoder import EncodedApdu, encode
from cardapdu.exceptions import (
    ApduError,
    LoadError,
    MalformedPayloadError,
    MissingInputError,
    OutOfRangeError,
)
from cardapdu.models import INS, ApduCase, CommandDescriptor

__version__ = "1.0.0"

__all__ = [
    "ApduCase",
    "ApduError",
    "CommandDescriptor",
    "EncodedApdu",
    "INS",
    "LoadError",
    "MalformedPayloadError",
    "MissingInputError",
    "OutOfRangeError",
    "encode",
]
