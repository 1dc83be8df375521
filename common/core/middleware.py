# -*- coding: utf-8 -*-
"""
    common.core.middleware
    ~~~~~~~~~~~~~~~~~~~~~~

    Request context and access logging middleware.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any

from fastapi import APIRouter
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match
from starlette.types import ASGIApp

X_CORRELATION_ID = "X-Correlation-Id"
X_REQUEST_ID = "X-Request-Id"
X_RESPONSE_TIME = "X-Response-Time"

# Path parameters copied into the log context
CONTEXT_PATH_PARAMS = ("session_id",)

_CONTEXT: ContextVar[dict | None] = ContextVar("request_context", default=None)


def get_context() -> dict:
    return _CONTEXT.get() or {}


def add_to_context(v: dict):
    """
    Add values that will be logged with every application log within the current request.

    The request context dict is updated in place, so values added inside the endpoint (or its
    dependencies) also show up in the access log written by the middleware.
    """

    if (ctx := _CONTEXT.get()) is None:
        _CONTEXT.set(dict(v))
    else:
        ctx.update(v)


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """
    Middleware for handling log context information.

    For each request take x-correlation-id and x-request-id from the headers (or generate them)
    and measure x-response-time. The values are returned in the response headers and logged
    in one access log line.
    """

    def __init__(self, app: ASGIApp, logger: logging.Logger | None = None, router: APIRouter | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger(__name__)
        self.router = router

    def get_path_params(self, request: Request) -> dict[str, Any]:
        if self.router:
            for route in self.router.routes:
                match, child_scope = route.matches(request.scope)
                if match == Match.FULL:
                    return child_scope.get("path_params", {})
        return {}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ctx = {
            X_CORRELATION_ID: request.headers.get(X_CORRELATION_ID) or uuid.uuid4().hex,
            X_REQUEST_ID: request.headers.get(X_REQUEST_ID) or uuid.uuid4().hex,
        }

        params = self.get_path_params(request)
        ctx.update({k: params[k] for k in CONTEXT_PATH_PARAMS if k in params})
        token = _CONTEXT.set(ctx)

        try:
            before_time = time.perf_counter()
            response = await call_next(request)
            response_time = int(1000 * (time.perf_counter() - before_time))

            response.headers[X_CORRELATION_ID] = ctx[X_CORRELATION_ID]
            response.headers[X_REQUEST_ID] = ctx[X_REQUEST_ID]
            response.headers[X_RESPONSE_TIME] = str(response_time)

            client = request.client
            self.logger.info(
                '%s - "%s %s HTTP/%s" %s',
                f"{client.host}:{client.port}" if client else "-",
                request.method,
                request.url.path,
                request.scope.get("http_version"),
                response.status_code,
                extra={
                    "log_type": "response",
                    "status_code": response.status_code,
                    X_RESPONSE_TIME: response_time,
                },
            )

        finally:
            _CONTEXT.reset(token)

        return response
