# -*- coding: utf-8 -*-
"""
    wellnesshub.api.my_sessions
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Endpoints of the session editor: the caller's sessions, draft saving and publishing.
"""

from fastapi import status
from fastapi.param_functions import Depends, Query
from fastapi.routing import APIRouter

from common.api.security_jwt import get_caller_id
from common.models import api as ma
from common.models.enums import SessionStatus
from common.models.session import Session
from common.utils.api import error_handler
from wellnesshub.api.sessions import MSG_DELETED
from wellnesshub.services import sessions as svc

router = APIRouter()


@router.get(
    "",
    response_model=list[Session],
    status_code=status.HTTP_200_OK,
    summary="List the caller's sessions",
)
@error_handler
def list_my_sessions(
        status_: SessionStatus | None = Query(None, alias="status"),
        user_id: str = Depends(get_caller_id),
) -> list[Session]:
    """
    List drafts and published sessions of the caller (newest first).

    :param status_: only list sessions in this status
    :param user_id: caller ID
    :return: list of sessions
    """

    return svc.list_mine(user_id=user_id, status=status_)


@router.post(
    "/save-draft",
    response_model=ma.SessionEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Save a draft",
)
@error_handler
def save_draft(data: ma.SessionSave, user_id: str = Depends(get_caller_id)) -> ma.SessionEnvelope:
    """
    Save a new draft or turn an existing session of the caller (`sessionId`) into a draft.

    :param data: title, tags, JSON file URL and optional session ID
    :param user_id: caller ID
    :return: confirmation message and saved session
    """

    session = svc.save_draft(
        user_id=user_id,
        title=data.title,
        tags=data.tags,
        json_file_url=data.json_file_url,
        session_id=data.session_id,
    )

    return ma.SessionEnvelope(message="Draft saved successfully", session=session)


@router.post(
    "/publish",
    response_model=ma.SessionEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Publish a session",
)
@error_handler
def publish(data: ma.SessionSave, user_id: str = Depends(get_caller_id)) -> ma.SessionEnvelope:
    """
    Publish a new session or an existing session of the caller (`sessionId`).

    :param data: title, tags, JSON file URL (required) and optional session ID
    :param user_id: caller ID
    :return: confirmation message and published session
    """

    session = svc.publish(
        user_id=user_id,
        title=data.title,
        tags=data.tags,
        json_file_url=data.json_file_url,
        session_id=data.session_id,
    )

    return ma.SessionEnvelope(message="Session published successfully", session=session)


@router.get(
    "/{session_id}",
    response_model=Session,
    status_code=status.HTTP_200_OK,
    summary="Get a session of the caller",
)
@error_handler
def get_my_session(session_id: str, user_id: str = Depends(get_caller_id)) -> Session:
    """
    Get a session of the caller.

    :param session_id: session ID
    :param user_id: caller ID
    :return: session data
    """

    return svc.get_session(user_id=user_id, session_id=session_id)


@router.delete(
    "/{session_id}",
    response_model=ma.Message,
    status_code=status.HTTP_200_OK,
    summary="Delete a session of the caller",
)
@error_handler
def delete_my_session(session_id: str, user_id: str = Depends(get_caller_id)) -> ma.Message:
    """
    Delete a session of the caller.

    :param session_id: session ID
    :param user_id: caller ID
    :return: confirmation message
    """

    svc.delete_session(user_id=user_id, session_id=session_id)
    return ma.Message(message=MSG_DELETED)
