# -*- coding: utf-8 -*-
"""
    wellnesshub.services.db.mongo.users
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Utilities for the "users" collection.
"""

from pymongo.errors import DuplicateKeyError

from common.models.enums import Coll
from common.models.user import User
from common.services.mongo import prepare_projection
from common.utils import exceptions as exc
from wellnesshub.services.db.mongo.connection import get_coll

COLL_USERS = get_coll(Coll.USERS)


def get_user(user_id: str) -> User:
    """
    Find a user in the DB.

    :param user_id: user ID
    :return: user data
    """

    if (res := COLL_USERS.find_one({"_id": user_id})) is None:
        raise exc.DBRecordNotFound(_id=user_id, name="User") from None
    return User.model_validate(res)


def find_user_by_email(email: str) -> User | None:
    """
    Find a user by (normalized) email.

    :param email: user email
    :return: user data or None
    """

    res = COLL_USERS.find_one({"email": email})
    return User.model_validate(res) if res else None


def create_user(data: User) -> str:
    """
    Create a new user record in the DB.

    A second user with the same email is rejected by the unique index on `email`.

    :param data: user data
    :return: created user ID
    """

    try:
        res = COLL_USERS.insert_one(data.model_dump())
        return res.inserted_id
    except DuplicateKeyError:
        raise exc.DBRecordAlreadyExists(name="User", key=data.email) from None


def get_emails(user_ids: set[str]) -> dict[str, str]:
    """
    Get emails for a set of users.

    :param user_ids: user IDs
    :return: mapping of user ID to email (missing users are left out)
    """

    if not user_ids:
        return {}

    res = COLL_USERS.find({"_id": {"$in": sorted(user_ids)}}, prepare_projection({"email"}))
    return {x["_id"]: x["email"] for x in res}
