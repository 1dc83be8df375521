# -*- coding: utf-8 -*-
"""
    wellnesshub.prestart
    ~~~~~~~~~~~~~~~~~~~~

    Operations required to run before server start (indexes, migrations).
"""

import copy
from typing import Any

import pymongo
from pydantic import BaseModel, ValidationError

from common.core import get_component_logger
from common.models.enums import Coll
from common.models.session import Session, VER_SESSIONS
from common.models.user import User, VER_USERS
from wellnesshub.services.db.mongo.connection import get_db

logger = get_component_logger()
db = get_db()

INDEXES = {
    Coll.SESSIONS: [
        (("user_id", pymongo.ASCENDING), {"background": True}),
        (("status", pymongo.ASCENDING), {"background": True}),
        (("updated_at", pymongo.DESCENDING), {"background": True}),
    ],
    Coll.USERS: [
        (("email", pymongo.ASCENDING), {"background": True, "unique": True}),
    ],
}

MODELS = {
    Coll.SESSIONS: (Session, VER_SESSIONS),
    Coll.USERS: (User, VER_USERS),
}


def prepare_db():
    """Prepare collections and indexes."""

    logger.info("Preparing the MongoDB collections...")
    coll_names = db.list_collection_names()

    for coll_name, indexes in INDEXES.items():
        coll = db[coll_name.value]

        if coll_name.value in coll_names:
            index_names = {x["key"][0][0] for x in coll.index_information().values()}
        else:
            index_names = set()

        for index, kwargs in indexes:
            if index[0] not in index_names:
                logger.info("Creating index %s for coll %s", index, coll_name.value)
                coll.create_index([index], **kwargs)


def migrate_mongo_data() -> dict[Coll, int]:
    """
    Migrate MongoDB data to the current model versions.

    Outdated documents (lower or missing `model_version`) are re-validated, which fills in new defaults.
    Documents that fail validation are left untouched.

    :return: migrated count per collection
    """

    logger.info("Migrating data to the current version...")
    migrated = {}

    for c_name, (model, ver) in MODELS.items():
        coll = db[c_name.value]
        old = list(coll.find({"$or": [{"model_version": {"$lt": ver}}, {"model_version": {"$exists": False}}]}))
        migrated[c_name] = 0

        for d in old:
            try:
                new = _migrate(copy.deepcopy(d), model=model, ver=ver)
            except ValidationError as e:
                logger.warning("Failed to migrate %s in coll %s: %s", d.get("_id"), c_name.value, e)
                continue

            coll.replace_one({"_id": d["_id"]}, new.model_dump())
            migrated[c_name] += 1

        if migrated[c_name]:
            logger.info("Migrated %d document(s) in coll %s", migrated[c_name], c_name.value)

    return migrated


def _migrate(old: dict[str, Any], model: type[BaseModel], ver: int) -> BaseModel:
    if model is Session and "updated_at" not in old and "created_at" in old:
        old["updated_at"] = old["created_at"]

    old["model_version"] = ver
    return model.model_validate(old)


if __name__ == "__main__":
    prepare_db()
    migrate_mongo_data()
