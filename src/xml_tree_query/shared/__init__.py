"""Shared utilities for tree queries.

This module provides configuration objects and logging utilities used across
the tree, query, and API layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    EngineConfig,
    QueryConfig,
)
from .logging import (
    QUERY_LOG_FORMAT,
    CorrelationFilter,
    CorrelationLogger,
    attach_query_handler,
    detach_query_handler,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DocumentConfig",
    "EngineConfig",
    "QueryConfig",
    "QUERY_LOG_FORMAT",
    "CorrelationFilter",
    "CorrelationLogger",
    "attach_query_handler",
    "detach_query_handler",
    "get_logger",
]
