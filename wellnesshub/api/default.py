# -*- coding: utf-8 -*-
"""
    wellnesshub.api.default
    ~~~~~~~~~~~~~~~~~~~~~~~

    Default/uncategorized endpoints.
"""

from fastapi import status
from fastapi.routing import APIRouter

from common.config import CONFIG

router = APIRouter()


@router.get(
    "/version",
    status_code=status.HTTP_200_OK,
    summary="Get backend version",
)
def get_version():
    return {"version": CONFIG.WELLNESSHUB_VERSION}
