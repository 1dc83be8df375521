# -*- coding: utf-8 -*-
"""
    common.core.logger_fmt
    ~~~~~~~~~~~~~~~~~~~~~~

    Logging formatters.
"""

import json
import logging
import socket
import traceback
from datetime import datetime

from dateutil import tz

from common.core.middleware import X_CORRELATION_ID, X_REQUEST_ID, X_RESPONSE_TIME

# attributes every LogRecord has, anything else was passed in `extra` or by the context filter
# noinspection PyTypeChecker
LOG_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}
ATTR_NAMES = {X_CORRELATION_ID: "correlation_id", X_REQUEST_ID: "request_id", X_RESPONSE_TIME: "response_time"}


class JSONFormatter(logging.Formatter):
    """
    JSON logging formatter, one object per line.

    :param component_log: component-specific log attributes
    """

    def __init__(self, component_log: dict[str, str] | None = None):
        super().__init__()
        self.host = socket.gethostname()
        self.component_log = component_log or {}

    @staticmethod
    def extra_fields(record: logging.LogRecord) -> dict:
        rec = {ATTR_NAMES.get(k, k): v for k, v in record.__dict__.items() if k not in LOG_RECORD_ATTRS}
        rec.setdefault("log_type", "log")
        return rec

    @staticmethod
    def exc_fields(record: logging.LogRecord) -> dict:
        if not record.exc_info:
            return {}

        return {
            "exception": "".join(traceback.format_exception(*record.exc_info)),
            "lineno": record.lineno,
        }

    def prepare_log(self, record: logging.LogRecord) -> dict:
        d_log = {
            "@timestamp": datetime.fromtimestamp(record.created, tz=tz.UTC).isoformat(),
            "host": self.host,
            "message": record.getMessage(),
            "level": record.levelname,
            "logger_name": record.name,
            "func_name": record.funcName,
            "module": record.module,
        }

        d_log.update(self.component_log)
        d_log.update(self.extra_fields(record))
        d_log.update(self.exc_fields(record))
        return d_log

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.prepare_log(record), default=str)
