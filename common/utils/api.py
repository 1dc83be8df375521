# -*- coding: utf-8 -*-
"""
    common.utils.api
    ~~~~~~~~~~~~~~~~

    Utility functions used in APIs.
"""

from functools import wraps
from typing import Any, Iterable

from fastapi import status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from common.core import get_component_logger
from common.utils import exceptions as exc

logger = get_component_logger()

EXC_TO_STATUS = {
    exc.DBRecordAlreadyExists: status.HTTP_409_CONFLICT,
    exc.DBRecordNotFound: status.HTTP_404_NOT_FOUND,
    exc.InvalidInput: status.HTTP_400_BAD_REQUEST,
    exc.Unauthorized: status.HTTP_401_UNAUTHORIZED,
}

HANDLED_EXCEPTIONS = tuple(EXC_TO_STATUS.keys())

SERVER_ERROR = "Server error"

# Messages replacing the pydantic ones for fields with several accepted types
FIELD_MESSAGES = {
    "tags": "Tags must be a string or array",
}


def field_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Convert pydantic error entries into one `{field, message}` entry per field.

    :param errors: entries from `ValidationError.errors()` (or FastAPI request validation)
    :return: field-level error list
    """

    out = {}

    for e in errors:
        loc = [str(x) for x in e.get("loc", ()) if x != "body"]
        field = loc[0] if loc else "body"

        if field not in out:
            out[field] = FIELD_MESSAGES.get(field, e.get("msg", "Invalid value"))

    return [{"field": k, "message": v} for k, v in out.items()]


def error_handler(func):
    @wraps(func)
    def wrapper(*args, **kwargs):

        try:
            return func(*args, **kwargs)
        except HTTPException as e:
            logger.error(e)
            raise e
        except exc.InvalidInput as e:
            logger.warning("Invalid input: %s", e)
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                [{"field": field, "message": message} for field, message in e.errors],
            )
        except HANDLED_EXCEPTIONS as e:
            logger.error(e)
            raise HTTPException(EXC_TO_STATUS[type(e)], str(e))
        except Exception as e:
            logger.exception("Unhandled exception occurred: %s", e)
            raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR) from e

    return wrapper


async def request_validation_handler(request: Request, e: RequestValidationError) -> JSONResponse:
    """Report malformed request payloads as a field-level error list (same shape as `InvalidInput`)."""

    errors = field_errors(e.errors())
    logger.warning("Invalid request %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse({"detail": errors}, status_code=status.HTTP_400_BAD_REQUEST)
