# -*- coding: utf-8 -*-
"""
    run
    ~~~

    FastAPI server run script.
"""

from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common.config import CONFIG
from common.core import get_component_logger
from common.core.middleware import RequestContextLogMiddleware, X_CORRELATION_ID, X_REQUEST_ID, X_RESPONSE_TIME
from common.models.validation import utc_now
from wellnesshub import COMPONENT_ID, COMPONENT_NAME
from wellnesshub.api.router import api_router, exception_handlers

logger = get_component_logger()


def create_app() -> FastAPI:
    app = FastAPI(
        title=COMPONENT_NAME,
        version=CONFIG.WELLNESSHUB_VERSION,
        lifespan=lifespan,
        exception_handlers=exception_handlers,
        swagger_ui_parameters={
            "operationsSorter": "alpha",
            "tagsSorter": "alpha",
        },
    )

    app.include_router(api_router)

    app.add_middleware(RequestContextLogMiddleware, logger=logger, router=app.router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CONFIG.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Content-Length",
            "Content-Type",
            X_CORRELATION_ID,
            X_REQUEST_ID,
            X_RESPONSE_TIME,
        ],
    )

    return app


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Service %s (component_id: %s) started on %s with logging level %s",
        COMPONENT_NAME, COMPONENT_ID, utc_now(), CONFIG.WELLNESSHUB_LOG_LEVEL,
    )
    yield
    logger.info("Service %s (component_id: %s) shutting down...", COMPONENT_NAME, COMPONENT_ID)


fast_app = create_app()

if __name__ == "__main__":
    with suppress(KeyboardInterrupt):
        uvicorn.run(
            app=fast_app,
            host="0.0.0.0",
            port=CONFIG.WELLNESSHUB_PORT,
            log_level=CONFIG.WELLNESSHUB_LOG_LEVEL.lower(),
        )
