"""Structured logging utilities for tree queries.

Loggers here attach a component name and an optional correlation ID to every
record so that queries issued on behalf of one response can be followed
through the log. The library installs no handlers of its own;
attach_query_handler() is a convenience for applications and tests.
"""

import logging
from typing import Any, Dict, Optional

QUERY_LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s [%(component)s %(correlation_id)s] %(message)s"
)

LIBRARY_LOGGER = "xml_tree_query"


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def is_enabled_for(self, level: int) -> bool:
        """Check whether records at ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra), exc_info=exc_info)


class CorrelationFilter(logging.Filter):
    """Fill in ``component`` and ``correlation_id`` on records that lack them.

    Records from plain loggers can then share a handler whose format string
    references both fields.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = "-"
        return True


def attach_query_handler(
    handler: Optional[logging.Handler] = None,
    level: int = logging.DEBUG,
    logger_name: str = LIBRARY_LOGGER
) -> logging.Handler:
    """Attach a handler formatted with QUERY_LOG_FORMAT to the library logger.

    Args:
        handler: Handler to attach, a StreamHandler by default
        level: Level set on both the handler and the logger
        logger_name: Logger to attach to

    Returns:
        The attached handler (for later removal)
    """
    handler = handler or logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(QUERY_LOG_FORMAT))
    handler.addFilter(CorrelationFilter())

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def detach_query_handler(
    handler: logging.Handler,
    logger_name: str = LIBRARY_LOGGER
) -> None:
    """Remove a handler added by attach_query_handler."""
    logging.getLogger(logger_name).removeHandler(handler)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
