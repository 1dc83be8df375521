# -*- coding: utf-8 -*-
"""
    common.core.logger_console
    ~~~~~~~~~~~~~~~~~~~~~~~~~~

    Console logging utilities.
"""

import logging
import sys

from common.core import middleware

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
HANDLER_NAME = "h_console"
HEALTH_PATHS = ("/health",)


class ContextFilter(logging.Filter):
    """Inject the request context (correlation id, request id, ...) into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for k, v in middleware.get_context().items():
            record.__dict__.setdefault(k, v)
        return True


class HealthCheckFilter(logging.Filter):
    """Drop access logs of the health check calls."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "log_type", None) != "response" or not isinstance(record.args, tuple):
            return True
        return not (len(record.args) >= 3 and record.args[2] in HEALTH_PATHS)


def setup(logger_name: str, log_level: str | int = logging.DEBUG, fmt: logging.Formatter | None = None):
    """
    Setup logging into console with defined name.

    Calling this again for the same logger replaces the console handler instead of adding another one.
    """

    logger_ = logging.getLogger(logger_name)

    for h in [h for h in logger_.handlers if h.name == HANDLER_NAME]:
        logger_.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.name = HANDLER_NAME
    handler.setFormatter(fmt or logging.Formatter(DEFAULT_LOG_FORMAT))
    handler.setLevel(log_level)
    logger_.addHandler(handler)

    if not any(isinstance(f, ContextFilter) for f in logger_.filters):
        logger_.addFilter(ContextFilter())
        logger_.addFilter(HealthCheckFilter())

    logger_.setLevel(log_level)
    logger_.propagate = False
    logging.getLogger("uvicorn.access").setLevel(logging.ERROR)

    logger_.info("Logger %s setup finished for console", logger_name)
    return logger_
