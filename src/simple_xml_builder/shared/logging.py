"""Component-aware logging utilities.

Loggers returned here attach the emitting component and an optional
correlation ID to every record, so output written by several documents or CLI
invocations can be told apart.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple


class ComponentLogger(logging.LoggerAdapter):
    """Logger adapter that adds component and correlation information."""

    def __init__(
        self,
        name: str,
        component: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize component logger.

        Args:
            name: Logger name (typically __name__)
            component: Component name for structured logging
            correlation_id: Optional correlation ID for request tracking
        """
        self.component = component or name.split(".")[-1]
        self.correlation_id = correlation_id
        super().__init__(
            logging.getLogger(name),
            {"component": self.component, "correlation_id": correlation_id},
        )

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Merge component information with any caller-supplied extra data."""
        combined_extra = dict(self.extra or {})
        if kwargs.get("extra"):
            combined_extra.update(kwargs["extra"])
        kwargs["extra"] = combined_extra
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> ComponentLogger:
    """Get a component-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        component: Component name for structured logging
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ComponentLogger instance
    """
    return ComponentLogger(name, component, correlation_id)
