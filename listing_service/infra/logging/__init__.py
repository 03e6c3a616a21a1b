"""Logging infrastructure.

Structured logging with JSONL output, contextvar-based request context,
OpenTelemetry trace correlation and lazily evaluated debug messages.

Basic usage:
    import logging

    from listing_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Listing accounts")  # includes request_id
    lazy_logger.debug(lambda: f"statement: {stmt}")  # rendered only at DEBUG
"""

from listing_service.infra.logging.config import configure_logging, setup_logging, shutdown
from listing_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from listing_service.infra.logging.formatters import JSONFormatter
from listing_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
