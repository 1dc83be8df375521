# -*- coding: utf-8 -*-
"""
    common.core
    ~~~~~~~~~~~

    Core component utilities (logging, request context).

    Each component configures its logger once on import and registers it here,
    so that shared modules can log under the component name.
"""

import logging

_LOGGER: logging.Logger | None = None


def get_component_logger() -> logging.Logger:
    if _LOGGER is None:
        raise RuntimeError("Component logger not initialized, import the component package first")
    return _LOGGER


def set_component_logger(logger: logging.Logger):
    global _LOGGER
    _LOGGER = logger
