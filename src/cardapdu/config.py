"""Configuration module.

This module provides configuration for logging and for the YAML command
loader. Every dataclass can be created programmatically or from
environment variables with the CARDAPDU_ prefix.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    level: str = "INFO"
    format: str = "json"  # or "text"
    output_file: Optional[str] = None
    include_source_location: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables."""
        return cls(
            level=os.getenv("CARDAPDU_LOG_LEVEL", "INFO").upper(),
            format=os.getenv("CARDAPDU_LOG_FORMAT", "json").lower(),
            output_file=os.getenv("CARDAPDU_LOG_FILE"),
            include_source_location=_env_flag("CARDAPDU_LOG_SOURCE", "false"),
        )


@dataclass
class LoaderConfig:
    """Configuration for loading command descriptors from YAML."""

    skip_invalid: bool = False

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Create configuration from environment variables."""
        return cls(
            skip_invalid=_env_flag("CARDAPDU_LOADER_SKIP_INVALID", "false"),
        )
