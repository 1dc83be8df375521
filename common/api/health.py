# -*- coding: utf-8 -*-
"""
    common.api.health
    ~~~~~~~~~~~~~~~~~

    Healthcheck endpoint.
"""

from fastapi import status
from fastapi.responses import Response
from fastapi.routing import APIRouter
from psutil import cpu_percent, disk_usage, virtual_memory
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from common.models.validation import utc_now
from common.services import mongo

router = APIRouter()

# Resource usage (in percent) above which the check fails
USAGE_LIMIT = 90


class HealthService(BaseModel):
    checker: str
    output: str
    passed: bool


class Health(BaseModel):
    results: list[HealthService]
    status: str
    timestamp: float


@router.get(
    "/health",
    response_model=Health,
    status_code=status.HTTP_200_OK,
    summary="Healthcheck endpoint",
)
def get_health(response: Response) -> Health:
    results = [
        cpu_checker(),
        disk_checker(),
        memory_checker(),
        mongo_checker(),
    ]

    if all(r.passed for r in results):
        r_status = "success"
    else:
        r_status = "failed"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return Health(results=results, status=r_status, timestamp=utc_now().timestamp())


def _usage(name: str, value: float) -> HealthService:
    return HealthService(checker=name, output=str(value), passed=value < USAGE_LIMIT)


def cpu_checker() -> HealthService:
    return _usage("cpu_checker", cpu_percent())


def disk_checker() -> HealthService:
    return _usage("disk_checker", disk_usage("/").percent)


def memory_checker() -> HealthService:
    return _usage("memory_checker", virtual_memory().percent)


def mongo_checker() -> HealthService:
    try:
        passed = mongo.ping()
        output = "ok" if passed else "no response"
    except PyMongoError as e:
        passed, output = False, str(e)

    return HealthService(checker="mongo_checker", output=output, passed=passed)
