"""Exception types for simple XML building.

Two categories are kept apart: structural contract violations, which signal a
programming error in the calling code, and recoverable runtime errors raised
while writing output or loading descriptions and configuration.
"""


class StructuralContractError(RuntimeError):
    """Raised when a mutation would make an element hold both text and children.

    This is not a subclass of ``XMLBuilderError``: correct calling code never
    triggers it, so it should not be handled alongside runtime failures.
    """


class XMLBuilderError(Exception):
    """Base class for recoverable errors raised by the package."""


class XMLWriteError(XMLBuilderError, OSError):
    """Writing serialized output to the sink failed."""


class TreeDescriptionError(XMLBuilderError, ValueError):
    """A dict/JSON tree description could not be turned into elements."""

    def __init__(self, message: str, path: str = "") -> None:
        """Initialize with a message and the description path it refers to.

        Args:
            message: Human readable problem description
            path: Slash separated location inside the description, if known
        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ConfigError(XMLBuilderError):
    """Configuration could not be loaded."""


class ConfigValidationError(ConfigError):
    """Configuration was loaded but holds invalid values."""
