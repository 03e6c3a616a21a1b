"""Lazy evaluation support for debug logging.

Messages and arguments may be zero-argument callables; they are only invoked
when the logger is enabled for the level, so building an expensive message
(such as rendering a SQL statement) costs nothing when DEBUG is off.

Example:
    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"pagination.keyset: {statement}")
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and arguments on demand.

    The level helpers inherited from ``logging.LoggerAdapter`` all route
    through :meth:`log`, so overriding it covers debug/info/warning/error.
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger with lazy evaluation support.

    Args:
        name: Logger name (usually __name__).
        **context: Optional fields bound to every record.

    Returns:
        LazyLoggerAdapter wrapping ``logging.getLogger(name)``.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context)
