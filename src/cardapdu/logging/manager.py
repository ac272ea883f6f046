"""Logger manager for structured logging.

This module provides a LoggerManager class that manages component loggers
under the cardapdu logger hierarchy with configurable levels and
structured output.
"""

import logging
import sys
from typing import Dict, List, Optional

from cardapdu.config import LoggingConfig
from cardapdu.logging.structured import StructuredFormatter, TextFormatter

ROOT_LOGGER_NAME = "cardapdu"


class LoggerManager:
    """Manager for component loggers with structured output.

    Example:
        >>> from cardapdu.config import LoggingConfig
        >>> manager = LoggerManager(LoggingConfig(level="DEBUG", format="json"))
        >>> manager.configure()
        >>>
        >>> logger = manager.get_logger("encoder")
        >>> logger.debug("Hello", extra={"reader": "PCSC 00"})
    """

    def __init__(self, config: Optional[LoggingConfig] = None) -> None:
        self.config = config or LoggingConfig()
        self._loggers: Dict[str, logging.Logger] = {}
        self._handler: Optional[logging.Handler] = None
        self._formatter: Optional[logging.Formatter] = None
        self._configured = False

    def configure(self) -> None:
        """Configure the cardapdu root logger and its handler.

        Calling it again on a configured manager does nothing.
        """
        if self._configured:
            return

        if self.config.format == "json":
            self._formatter = StructuredFormatter(
                include_source_location=self.config.include_source_location,
            )
        else:
            self._formatter = TextFormatter(
                include_source_location=self.config.include_source_location,
            )

        if self.config.output_file:
            self._handler = logging.FileHandler(self.config.output_file)
        else:
            self._handler = logging.StreamHandler(sys.stderr)

        self._handler.setFormatter(self._formatter)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self._parse_level(self.config.level))
        root_logger.addHandler(self._handler)

        # Prevent propagation to Python's root logger
        root_logger.propagate = False

        self._configured = True

    def shutdown(self) -> None:
        """Remove the handler and restore propagation."""
        if not self._configured:
            return

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        if self._handler:
            root_logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
        root_logger.propagate = True

        self._loggers.clear()
        self._configured = False

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a logger for a component.

        Args:
            name: Component name. Will be prefixed with 'cardapdu.' if not already.
        """
        full_name = _qualify(name)
        if full_name not in self._loggers:
            self._loggers[full_name] = logging.getLogger(full_name)
        return self._loggers[full_name]

    def set_level(self, name: str, level: str) -> None:
        """Set log level for a specific component."""
        self.get_logger(name).setLevel(self._parse_level(level))

    def get_level(self, name: str) -> str:
        """Get the effective log level name for a component."""
        return logging.getLevelName(self.get_logger(name).getEffectiveLevel())

    def add_extra_field(self, key: str, value: str) -> None:
        """Add a static field to all log entries (JSON format only)."""
        if isinstance(self._formatter, StructuredFormatter):
            self._formatter.extra_fields[key] = value

    @property
    def handler(self) -> Optional[logging.Handler]:
        return self._handler

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def registered_loggers(self) -> List[str]:
        return list(self._loggers.keys())

    def _parse_level(self, level: str) -> int:
        return getattr(logging, level.upper(), logging.INFO)


def _qualify(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get a logger in the cardapdu hierarchy.

    Example:
        >>> from cardapdu.logging import get_logger
        >>> logger = get_logger("my_module")
        >>> logger.info("Hello world")
    """
    return logging.getLogger(_qualify(name))


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggerManager:
    """Configure library logging, reading the environment when no config is given."""
    manager = LoggerManager(config or LoggingConfig.from_env())
    manager.configure()
    return manager
