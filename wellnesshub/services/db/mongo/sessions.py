# -*- coding: utf-8 -*-
"""
    wellnesshub.services.db.mongo.sessions
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Utilities for the "sessions" collection.

    Every accessor except the public listing requires the owner (user) ID and uses it in the query filter,
    so a session of another user behaves exactly like a missing one.
"""

from typing import Iterable

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.core import get_component_logger
from common.models.enums import Coll, SessionStatus
from common.models.session import Session
from common.services.mongo import prepare_sort, process_filter
from common.utils import exceptions as exc
from wellnesshub.services.db.mongo.connection import get_coll

logger = get_component_logger()

COLL_SESSIONS = get_coll(Coll.SESSIONS)

# Fields fixed at creation, never overwritten by updates
IMMUTABLE_FIELDS = {"id", "user_id", "created_at"}

SORT_NEWEST = "-updated_at"


def get_session(session_id: str, user_id: str) -> Session:
    """
    Find a session of a user in the DB.

    :param session_id: session ID
    :param user_id: owner ID
    :return: session data
    """

    if (res := COLL_SESSIONS.find_one({"_id": session_id, "user_id": user_id})) is None:
        raise exc.DBRecordNotFound(_id=session_id) from None
    return Session.model_validate(res)


def create_session(data: Session) -> str:
    """
    Create a new session record in the DB.

    :param data: session data (owner taken from `data.user_id`)
    :return: created session ID
    """

    try:
        res = COLL_SESSIONS.insert_one(data.model_dump())
        return res.inserted_id
    except DuplicateKeyError:
        raise exc.DBRecordAlreadyExists(name="Session", key=data.id) from None


def update_session(data: Session) -> Session:
    """
    Overwrite the mutable fields of an already existing session of the same owner.

    :param data: session data
    :return: stored session data
    """

    res = COLL_SESSIONS.find_one_and_update(
        {"_id": data.id, "user_id": data.user_id},
        {"$set": data.model_dump(exclude=IMMUTABLE_FIELDS)},
        return_document=ReturnDocument.AFTER,
    )

    if res is None:
        raise exc.DBRecordNotFound(_id=data.id) from None
    return Session.model_validate(res)


def delete_session(session_id: str, user_id: str, raise_not_found: bool = False) -> int:
    """
    Delete a session of a user from the DB.

    :param session_id: session ID
    :param user_id: owner ID
    :param raise_not_found: raise exception if not found
    :return: deleted count
    """

    res = COLL_SESSIONS.delete_one({"_id": session_id, "user_id": user_id})
    if raise_not_found and res.deleted_count != 1:
        raise exc.DBRecordNotFound(_id=session_id) from None
    return res.deleted_count


def list_sessions(user_id: str, status: SessionStatus | None = None) -> list[Session]:
    """
    List sessions of a user, newest update first.

    :param user_id: owner ID
    :param status: only sessions in this status (all if None)
    :return: list of sessions data
    """

    ftr = process_filter({"user_id": user_id, "status": SessionStatus(status).value if status else None})
    res = COLL_SESSIONS.find(ftr).sort(prepare_sort(SORT_NEWEST))
    return _valid_sessions(res)


def list_published_sessions() -> list[Session]:
    """
    List published sessions of all users, newest update first.

    :return: list of sessions data
    """

    res = COLL_SESSIONS.find({"status": SessionStatus.PUBLISHED.value}).sort(prepare_sort(SORT_NEWEST))
    return _valid_sessions(res)


def _valid_sessions(docs: Iterable[dict]) -> list[Session]:
    """Parse session documents, leaving out (and logging) those that no longer pass validation."""

    sessions = []
    for doc in docs:
        try:
            sessions.append(Session.model_validate(doc))
        except ValidationError as e:
            logger.error("Skipping invalid session %s: %s", doc.get("_id"), e)
    return sessions
