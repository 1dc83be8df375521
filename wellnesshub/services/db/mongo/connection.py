# -*- coding: utf-8 -*-
"""
    wellnesshub.services.db.mongo.connection
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    MongoDB connection helpers.
"""

from pymongo.collection import Collection
from pymongo.database import Database

from common.config import CONFIG
from common.models.enums import Coll
from common.services import mongo


def get_db() -> Database:
    return mongo.get_client()[CONFIG.MONGO_DB_NAME]


def get_coll(coll: Coll) -> Collection:
    return get_db()[coll.value]
