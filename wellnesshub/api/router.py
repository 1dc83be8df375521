# -*- coding: utf-8 -*-
"""
    wellnesshub.api.router
    ~~~~~~~~~~~~~~~~~~~~~~

    API router definition.
"""

from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRouter

from common.api import health
from common.config import CONFIG
from common.utils.api import request_validation_handler
from wellnesshub.api import auth, default, my_sessions, sessions

api_router = APIRouter()
api_router.include_router(default.router, tags=["default"])
api_router.include_router(health.router, tags=["default"])
api_router.include_router(auth.router, prefix=f"{CONFIG.API_PREFIX}/auth", tags=["auth"])

# "/sessions/my-sessions" has to be matched before "/sessions/{session_id}"
api_router.include_router(my_sessions.router, prefix=f"{CONFIG.API_PREFIX}/sessions/my-sessions", tags=["my sessions"])
api_router.include_router(sessions.router, prefix=f"{CONFIG.API_PREFIX}/sessions", tags=["sessions"])

exception_handlers = {
    RequestValidationError: request_validation_handler,
}
