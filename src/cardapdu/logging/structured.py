"""Structured JSON and text log formatters."""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredFormatter(logging.Formatter):
    """JSON log formatter with structured output.

    Produces log entries in JSON format with:
    - ISO 8601 timestamps
    - Log level
    - Logger name (component)
    - Message
    - Extra fields
    - Exception info

    Example output:
        {
            "timestamp": "2024-01-15T10:30:45.123456+00:00",
            "level": "DEBUG",
            "logger": "cardapdu.encoder",
            "message": "Encoded APDU header=00A40400 lc=7 le=0 case=3"
        }
    """

    # Standard fields that are always included
    STANDARD_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }

    def __init__(
        self,
        include_source_location: bool = False,
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the structured formatter.

        Args:
            include_source_location: Include file, function, and line number.
            extra_fields: Static fields to include in every log entry.
        """
        super().__init__()
        self.include_source_location = include_source_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="microseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_source_location:
            entry["source"] = {
                "file": record.filename,
                "function": record.funcName,
                "line": record.lineno,
            }

        if record.exc_info:
            entry["exception"] = self._format_exception(record)

        entry.update(self.extra_fields)

        # Dynamic fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_FIELDS and not key.startswith("_"):
                entry[key] = value

        return json.dumps(entry, default=str)

    def _format_exception(self, record: logging.LogRecord) -> Dict[str, Any]:
        exc_type, exc_value, exc_tb = record.exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": traceback.format_exception(exc_type, exc_value, exc_tb)
            if exc_tb
            else None,
        }


class TextFormatter(logging.Formatter):
    """Human-readable text formatter.

    Produces log entries in traditional text format:
        2024-01-15T10:30:45.123Z DEBUG    [cardapdu.encoder] Encoded APDU ...
    """

    def __init__(self, include_source_location: bool = False) -> None:
        super().__init__()
        self.include_source_location = include_source_location

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        parts = [timestamp, record.levelname.ljust(8), f"[{record.name}]"]

        if self.include_source_location:
            parts.append(f"[{record.filename}:{record.lineno}]")

        parts.append(record.getMessage())

        result = " ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result
