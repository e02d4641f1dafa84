"""Configuration for the command-line tool.

The XML output format itself is fixed; configuration only covers how the CLI
runs (log verbosity, default output target, correlation ID for log records).
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from simple_xml_builder.shared.errors import ConfigError, ConfigValidationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CLIConfig:
    """Configuration for ``simple-xml-builder`` invocations."""

    log_level: str = "WARNING"
    output: Optional[str] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate and normalize configuration values."""
        if not isinstance(self.log_level, str):
            raise ConfigValidationError("log_level must be a string")
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}"
            )
        if self.output is not None and not isinstance(self.output, str):
            raise ConfigValidationError("output must be a string path or null")
        if self.correlation_id is not None and not isinstance(self.correlation_id, str):
            raise ConfigValidationError("correlation_id must be a string or null")

    @property
    def logging_level(self) -> int:
        """Numeric ``logging`` level for ``log_level``."""
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CLIConfig":
        """Create configuration from a dictionary, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}"
            )
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load configuration from a JSON file.

        A missing file yields the default configuration.

        Raises:
            ConfigError: If the file cannot be read or is not valid JSON
            ConfigValidationError: If the file holds invalid values
        """
        if not config_path.exists():
            return cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)
