# -*- coding: utf-8 -*-
"""
    wellnesshub.api.sessions
    ~~~~~~~~~~~~~~~~~~~~~~~~

    Session endpoints: public listing and CRUD on the caller's sessions.
"""

from fastapi import status
from fastapi.param_functions import Depends
from fastapi.routing import APIRouter

from common.api.security_jwt import get_caller_id
from common.models import api as ma
from common.models.session import PublishedSession, Session
from common.utils.api import error_handler
from wellnesshub.services import sessions as svc

router = APIRouter()

MSG_DELETED = "Session deleted successfully"


@router.get(
    "",
    response_model=list[PublishedSession],
    status_code=status.HTTP_200_OK,
    summary="List published sessions",
)
@error_handler
def list_published_sessions() -> list[PublishedSession]:
    """
    List published sessions of all users (newest first), each with its author.

    :return: list of published sessions
    """

    return svc.list_published()


@router.post(
    "",
    response_model=Session,
    status_code=status.HTTP_200_OK,
    summary="Create a session",
)
@error_handler
def create_session(data: ma.SessionCreate, user_id: str = Depends(get_caller_id)) -> Session:
    """
    Create a session owned by the caller.

    :param data: session title, content and status
    :param user_id: caller ID
    :return: created session
    """

    return svc.create_session(user_id=user_id, title=data.title, content=data.content, status=data.status)


@router.get(
    "/{session_id}",
    response_model=Session,
    status_code=status.HTTP_200_OK,
    summary="Get a session",
)
@error_handler
def get_session(session_id: str, user_id: str = Depends(get_caller_id)) -> Session:
    """
    Get a session of the caller.

    :param session_id: session ID
    :param user_id: caller ID
    :return: session data
    """

    return svc.get_session(user_id=user_id, session_id=session_id)


@router.patch(
    "/{session_id}",
    response_model=Session,
    status_code=status.HTTP_200_OK,
    summary="Update a session",
)
@error_handler
def update_session(session_id: str, data: ma.SessionUpdate, user_id: str = Depends(get_caller_id)) -> Session:
    """
    Update the supplied fields of a session of the caller.

    :param session_id: session ID
    :param data: new title, content and/or status
    :param user_id: caller ID
    :return: updated session
    """

    return svc.update_session(user_id=user_id, session_id=session_id, fields=data.model_dump(exclude_unset=True))


@router.delete(
    "/{session_id}",
    response_model=ma.Message,
    status_code=status.HTTP_200_OK,
    summary="Delete a session",
)
@error_handler
def delete_session(session_id: str, user_id: str = Depends(get_caller_id)) -> ma.Message:
    """
    Delete a session of the caller.

    :param session_id: session ID
    :param user_id: caller ID
    :return: confirmation message
    """

    svc.delete_session(user_id=user_id, session_id=session_id)
    return ma.Message(message=MSG_DELETED)
