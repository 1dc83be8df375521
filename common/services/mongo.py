# -*- coding: utf-8 -*-
"""
    common.services.mongo
    ~~~~~~~~~~~~~~~~~~~~~

    MongoDB service utilities.
"""

from typing import Any

import pymongo
from cachetools.func import ttl_cache
from pymongo import MongoClient

from common.config import CONFIG


@ttl_cache(ttl=600)
def get_client(conn_str: str | None = None) -> MongoClient:
    return MongoClient(
        conn_str or CONFIG.MONGO_CONN_STR.get_secret_value(),
        tz_aware=True,
        serverSelectionTimeoutMS=5000,
    )


def ping(client: MongoClient | None = None) -> bool:
    """Check that the MongoDB server answers."""

    res = (client or get_client()).admin.command("ping")
    return bool(res.get("ok"))


def prepare_projection(fields: set[str] | None) -> dict[str, int] | None:
    """Prepare MongoDB projection for a set of included fields."""
    return {field: 1 for field in fields} if fields else None


def prepare_sort(sort_by: str) -> list[tuple[str, int]]:
    """
    Prepare MongoDB sort specification with `_id` as the tie-breaker.

    :param sort_by: field name to sort by (for descending order use prefix "-")
    :return: sort specification
    """

    order = pymongo.DESCENDING if sort_by.startswith("-") else pymongo.ASCENDING
    return [(sort_by.lstrip("-"), order), ("_id", order)]


def process_filter(ftr: dict[str, Any] | None) -> dict[str, Any]:
    """Process filter dict as MongoDB query filter."""

    if not ftr:
        return {}

    return {
        k: {"$in": v} if isinstance(v, list) else v
        for k, v in ftr.items()
        if v is not None
    }
