"""YAML loader for command descriptors.

This module loads command APDUs described in YAML and encodes them.
Files are parsed with yaml.safe_load().

Example file:

    commands:
      - name: SELECT ISD
        cla: 0x00
        ins: 0xA4
        p1: 0x04
        p2: 0x00
        data_hex: A000000151000000
      - name: GET DATA CPLC
        cla: 0x80
        ins: 0xCA
        p1: 0x9F
        p2: 0x7F
        le: 0x00

Example:
    >>> from cardapdu.loader import load_file
    >>> commands = load_file("commands/isd.yaml")
    >>> print(commands[0].apdu.to_hex_string())
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from cardapdu.config import LoaderConfig
from cardapdu.encoder import EncodedApdu, encode
from cardapdu.exceptions import ApduError, LoadError, MalformedPayloadError
from cardapdu.models import CommandDescriptor

logger = logging.getLogger(__name__)

INLINE_SOURCE = "<string>"


@dataclass(frozen=True)
class NamedCommand:
    """Encoded command with the metadata it was declared with.

    Attributes:
        apdu: The encoded command.
        name: Human-readable name for the command.
        description: Optional description of what the command does.
    """

    apdu: EncodedApdu
    name: Optional[str] = None
    description: Optional[str] = None


def _descriptor_from_entry(entry: Dict[str, Any]) -> CommandDescriptor:
    fields = dict(entry)
    data_hex = fields.pop("data_hex", None)
    if data_hex is not None:
        if "data" in fields:
            raise MalformedPayloadError(data_hex, "Use either 'data' or 'data_hex', not both")
        if not isinstance(data_hex, str):
            raise MalformedPayloadError(data_hex, "data_hex must be a hex string")
        try:
            fields["data"] = bytes.fromhex(data_hex.replace(" ", ""))
        except ValueError as e:
            raise MalformedPayloadError(data_hex, f"Invalid hex string: {data_hex!r}") from e
    return CommandDescriptor.from_dict(fields)


def _parse_document(
    document: Any,
    source: str,
    config: LoaderConfig,
) -> List[NamedCommand]:
    if document is None:
        logger.debug("Empty YAML document: %s", source)
        return []

    if not isinstance(document, dict):
        raise LoadError(source, "YAML root must be a dictionary")

    entries = document.get("commands", [])
    if not isinstance(entries, list):
        raise LoadError(source, "'commands' must be a list")

    commands: List[NamedCommand] = []
    for index, entry in enumerate(entries):
        try:
            if not isinstance(entry, dict):
                raise MalformedPayloadError(entry, "Command entry must be a mapping")
            command = NamedCommand(
                apdu=encode(_descriptor_from_entry(entry)),
                name=entry.get("name"),
                description=entry.get("description"),
            )
        except ApduError as e:
            if config.skip_invalid:
                logger.warning(
                    "Skipping invalid command at index %d in %s: %s",
                    index,
                    source,
                    e.message,
                )
                continue
            raise LoadError(source, f"Invalid command at index {index}: {e.message}") from e

        commands.append(command)
        logger.debug("Loaded command '%s' from %s", command.name or index, source)

    logger.info("Loaded %d command(s) from %s", len(commands), source)
    return commands


def load_string(text: str, config: Optional[LoaderConfig] = None) -> List[NamedCommand]:
    """Load commands from a YAML string.

    Args:
        text: YAML document with a top-level 'commands' list.
        config: Loader configuration (defaults from environment).

    Returns:
        List of named, encoded commands in document order.

    Raises:
        LoadError: If the YAML is malformed or an entry is invalid.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoadError(INLINE_SOURCE, f"Invalid YAML: {e}") from e
    return _parse_document(document, INLINE_SOURCE, config or LoaderConfig.from_env())


def load_file(
    file_path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> List[NamedCommand]:
    """Load commands from a YAML file.

    Args:
        file_path: Path to the YAML file.
        config: Loader configuration (defaults from environment).

    Returns:
        List of named, encoded commands in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        LoadError: If the file cannot be read or parsed, or an entry is invalid.
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if not path.is_file():
        raise LoadError(str(file_path), "Path is not a file")

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoadError(str(file_path), f"Invalid YAML: {e}") from e
    except OSError as e:
        raise LoadError(str(file_path), f"IO error: {e}") from e

    return _parse_document(document, str(file_path), config or LoaderConfig.from_env())
