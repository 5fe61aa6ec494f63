"""Logging setup and filters for enriching log records with session context.

This module provides a logging filter that injects the current session id
into log records using a ContextVar set by the order store, and a helper
that installs a JSON (or plain text) handler on the package logger.
Adding the filter to a handler enables per-session correlation in logs
without modifying individual log statements.
"""

import contextvars
import logging
from logging import Filter, LogRecord

from pythonjsonlogger.json import JsonFormatter

from .config import Settings

SESSION_ID_CTX = contextvars.ContextVar("session_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(session_id)s"


class SessionIdFilter(Filter):
    """Attach a ``session_id`` attribute to log records.

    The value is retrieved from ``SESSION_ID_CTX``. If no session is active
    a hyphen ("-") is used so formatters can reliably reference
    ``%(session_id)s``.
    """

    def filter(self, record: LogRecord) -> bool:
        if not getattr(record, "session_id", None):
            record.session_id = SESSION_ID_CTX.get()
        return True


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Install a single stream handler on the ``furniture_pos`` logger.

    Calling it again is harmless: an existing handler is kept.

    Args:
        settings: Source of ``log_level`` and ``log_json``; defaults to
            ``Settings.from_env()``.

    Returns:
        The configured package logger.
    """
    settings = settings or Settings.from_env()
    logger = logging.getLogger("furniture_pos")
    if not logger.handlers:
        h = logging.StreamHandler()
        if settings.log_json:
            h.setFormatter(JsonFormatter(LOG_FORMAT))
        else:
            h.setFormatter(logging.Formatter(LOG_FORMAT))
        h.addFilter(SessionIdFilter())
        logger.addHandler(h)
    logger.setLevel(settings.log_level)
    return logger
