"""Shared utilities for simple XML building.

This module provides the error taxonomy, logging helpers, and configuration
objects used across the tree, serialization, and CLI layers.
"""

from .errors import (
    ConfigError,
    ConfigValidationError,
    StructuralContractError,
    TreeDescriptionError,
    XMLBuilderError,
    XMLWriteError,
)
from .config import CLIConfig
from .logging import (
    ComponentLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "StructuralContractError",
    "TreeDescriptionError",
    "XMLBuilderError",
    "XMLWriteError",
    "CLIConfig",
    "ComponentLogger",
    "get_logger",
]
