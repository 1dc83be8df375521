# -*- coding: utf-8 -*-
"""
    common.utils.exceptions
    ~~~~~~~~~~~~~~~~~~~~~~~

    Custom exceptions used throughout the project.
"""

from typing import Iterable


class CustomException(Exception):

    def __init__(self):
        self.detail = "Unknown exception occurred"

    def __str__(self):
        return self.detail


class DBRecordAlreadyExists(CustomException):
    def __init__(self, name: str = "Record", key: str = ""):
        self.name = name
        self.key = key
        self.detail = f"{name} already exists"


class DBRecordNotFound(CustomException):
    """
    Record is missing or owned by someone else.

    The two cases share one message so that callers cannot probe for foreign records.
    """

    def __init__(self, _id: str | Iterable[str], name: str = "Session"):
        self._id = _id
        self.name = name
        self.detail = f"{name} not found"


class InvalidInput(CustomException):
    def __init__(self, errors: list[tuple[str, str]]):
        self.errors = errors
        self.detail = "; ".join(message for _, message in errors) or "Invalid input"


class Unauthorized(CustomException):
    def __init__(self, detail: str = "Not authorized"):
        self.detail = detail
