"""Logging configuration setup.

Builds the root logger with ``logging.config.dictConfig`` and routes every
record through a ``QueueHandler`` so console and file I/O happen on the
``QueueListener`` thread instead of the event loop:

- JSONL (``JSONFormatter``) or plain text output
- ``ContextInjectingFilter`` on the queue handler for request context
- optional ``RotatingFileHandler``
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING

from listing_service.infra.logging.context import ContextInjectingFilter
from listing_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from listing_service.core.settings.logs import LoggingSettings

_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False
logger = logging.getLogger(__name__)

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(log_settings: LoggingSettings | None = None, *, force: bool = False) -> None:
    """Configure logging once across entrypoints.

    Args:
        log_settings: Logging settings. Loaded via get_logging_settings() when omitted.
        force: Reconfigure even if logging was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings = log_settings
    if settings is None:
        from listing_service.core.settings import get_logging_settings

        settings = get_logging_settings()

    configure_logging(
        log_level=settings.level,
        json_logs=settings.json_logs,
        console_enabled=settings.console_enabled,
        file_path=settings.file_path,
        file_max_bytes=settings.file_max_bytes,
        file_backup_count=settings.file_backup_count,
        service_name=settings.service_name,
        logger_levels=settings.logger_levels,
    )
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "listing-service",
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Configure the root logger with dictConfig and the queue pattern.

    Args:
        log_level: Root logger level.
        json_logs: Emit JSON Lines instead of plain text.
        console_enabled: Attach a stderr handler.
        file_path: Rotating log file, or None to disable file logging.
        file_max_bytes: Maximum file size before rotation.
        file_backup_count: Rotated files to keep.
        service_name: Static ``service`` field on JSON records.
        logger_levels: Per-logger level overrides.

    Example:
        configure_logging(log_level="DEBUG", json_logs=False)
    """
    global _listener

    shutdown()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
            },
            "loggers": {
                name: {"level": level.upper()} for name, level in (logger_levels or {}).items()
            },
        }
    )

    formatter: logging.Formatter
    if json_logs:
        formatter = JSONFormatter(static={"service": service_name})
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []
    if console_enabled:
        handlers.append(logging.StreamHandler())
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=file_max_bytes,
                backupCount=file_backup_count,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)

    queue: Queue[logging.LogRecord] = Queue(-1)
    queue_handler = QueueHandler(queue)
    # Context must be captured on the producing task, before the record is queued.
    queue_handler.addFilter(ContextInjectingFilter())

    root = logging.getLogger()
    root.addHandler(queue_handler)

    _listener = QueueListener(queue, *handlers, respect_handler_level=True)
    _listener.start()

    logger.debug(
        "Logging configured",
        extra={"log_level": log_level, "json": json_logs, "file": str(file_path) if file_path else None},
    )


def shutdown() -> None:
    """Stop the queue listener, flushing pending records."""
    global _listener

    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, QueueHandler):
            root.removeHandler(handler)


atexit.register(shutdown)
