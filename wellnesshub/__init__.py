# -*- coding: utf-8 -*-
"""
    wellnesshub
    ~~~~~~~~~~~

    WellnessHub backend: authoring and publishing of wellness sessions.
"""

import uuid

from common.config import CONFIG
from common.core import logger_console, set_component_logger
from common.models.enums import LogFormat

COMPONENT_NAME = "wellnesshub"
COMPONENT_ID = uuid.uuid4().hex
COMPONENT_LOG = {
    "component_name": COMPONENT_NAME,
    "component_id": COMPONENT_ID,
    "component_version": CONFIG.WELLNESSHUB_VERSION,
}

# Set up logging
if CONFIG.WELLNESSHUB_LOG_FORMAT == LogFormat.json:
    from common.core import logger_fmt

    FMT = logger_fmt.JSONFormatter(component_log=COMPONENT_LOG)

else:
    FMT = None

logger = logger_console.setup(logger_name=COMPONENT_NAME, log_level=CONFIG.WELLNESSHUB_LOG_LEVEL, fmt=FMT)
set_component_logger(logger)
