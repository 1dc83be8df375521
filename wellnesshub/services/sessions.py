# -*- coding: utf-8 -*-
"""
    wellnesshub.services.sessions
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Session service: validation rules and the draft/publish lifecycle of wellness sessions.

    All operations except the public listing act on behalf of a caller (user ID) and only ever
    touch the caller's own sessions. Invalid input raises `InvalidInput` with a list of
    `(field, message)` pairs, missing or foreign sessions raise `DBRecordNotFound`.
"""

from typing import Any

from common.core import get_component_logger
from common.models.enums import SessionStatus
from common.models.session import Author, PublishedSession, Session
from common.models.validation import is_valid_url, parse_tags, utc_now
from common.utils import exceptions as exc
from wellnesshub.services.db.mongo import sessions as db_sessions, users as db_users

logger = get_component_logger()

MSG_STATUS_INVALID = "Status must be one of: " + ", ".join(s.value for s in SessionStatus)
MSG_TAGS_INVALID = "Tags must be a string or array"
MSG_TITLE_EMPTY = "Title cannot be empty"
MSG_TITLE_REQUIRED = "Title is required"
MSG_URL_INVALID = "Must be a valid URL"
MSG_URL_REQUIRED = "JSON file URL is required and must be valid"

# Fields of a session that can be changed by a plain update
UPDATABLE_FIELDS = ("title", "content", "status")

Errors = list[tuple[str, str]]


################
## VALIDATION ##
################

def _check_title(title: Any, errors: Errors, message: str = MSG_TITLE_REQUIRED) -> str:
    if not isinstance(title, str) or not title.strip():
        errors.append(("title", message))
        return ""
    return title.strip()


def _check_status(status: Any, errors: Errors) -> SessionStatus | None:
    try:
        return SessionStatus(status)
    except ValueError:
        errors.append(("status", MSG_STATUS_INVALID))
        return None


def _check_tags(tags: Any, errors: Errors) -> list[str]:
    tags = parse_tags(tags)
    if not isinstance(tags, list) or not all(isinstance(x, str) for x in tags):
        errors.append(("tags", MSG_TAGS_INVALID))
        return []
    return tags


def _check_url(url: Any, errors: Errors, required: bool) -> str:
    url = url.strip() if isinstance(url, str) else url

    if required and not is_valid_url(url):
        errors.append(("json_file_url", MSG_URL_REQUIRED))
    elif not required and url and not is_valid_url(url):
        errors.append(("json_file_url", MSG_URL_INVALID))
    else:
        return url or ""
    return ""


def _raise_for_errors(errors: Errors):
    if errors:
        raise exc.InvalidInput(errors)


#############
## LISTING ##
#############

def list_published() -> list[PublishedSession]:
    """
    List published sessions of all users, newest update first.

    Each session is annotated with its author (None if the user no longer exists).
    """

    sessions = db_sessions.list_published_sessions()
    emails = db_users.get_emails({s.user_id for s in sessions})

    return [
        PublishedSession(
            **s.model_dump(by_alias=False),
            author=Author(id=s.user_id, email=email) if (email := emails.get(s.user_id)) else None,
        )
        for s in sessions
    ]


def list_mine(user_id: str, status: SessionStatus | None = None) -> list[Session]:
    """List drafts and published sessions of the caller, newest update first."""
    return db_sessions.list_sessions(user_id=user_id, status=status)


##########
## CRUD ##
##########

def get_session(user_id: str, session_id: str) -> Session:
    return db_sessions.get_session(session_id=session_id, user_id=user_id)


def create_session(
        user_id: str,
        title: str | None,
        content: str | None = None,
        status: SessionStatus | str | None = None,
) -> Session:
    """
    Create a session owned by the caller.

    A new session has no JSON file URL, so it cannot be created as published.

    :param user_id: caller ID
    :param title: session title (required)
    :param content: free-text content
    :param status: initial status (draft by default)
    :return: stored session
    """

    errors = []
    title = _check_title(title, errors)
    status = _check_status(status or SessionStatus.DRAFT, errors)

    if status == SessionStatus.PUBLISHED:
        errors.append(("json_file_url", MSG_URL_REQUIRED))
    _raise_for_errors(errors)

    now = utc_now()
    data = Session(
        user_id=user_id,
        title=title,
        content=content or "",
        status=status,
        created_at=now,
        updated_at=now,
    )

    session_id = db_sessions.create_session(data=data)
    logger.info("Created session %s", session_id)
    return db_sessions.get_session(session_id=session_id, user_id=user_id)


def update_session(user_id: str, session_id: str, fields: dict[str, Any]) -> Session:
    """
    Update the supplied fields (title, content, status) of a session of the caller.

    Fields that are missing or None are left unchanged.

    :param user_id: caller ID
    :param session_id: session ID
    :param fields: new field values
    :return: stored session
    """

    changes = {k: fields[k] for k in UPDATABLE_FIELDS if fields.get(k) is not None}

    errors = []
    if "title" in changes:
        changes["title"] = _check_title(changes["title"], errors, message=MSG_TITLE_EMPTY)
    if "status" in changes:
        changes["status"] = _check_status(changes["status"], errors)
    _raise_for_errors(errors)

    current = db_sessions.get_session(session_id=session_id, user_id=user_id)

    if changes.get("status", current.status) == SessionStatus.PUBLISHED and not is_valid_url(current.json_file_url):
        raise exc.InvalidInput([("json_file_url", MSG_URL_REQUIRED)])

    data = current.model_dump(by_alias=False)
    data.update(changes, updated_at=utc_now())

    res = db_sessions.update_session(data=Session.model_validate(data))
    logger.info("Updated session %s (%s)", session_id, ", ".join(changes) or "no changes")
    return res


def delete_session(user_id: str, session_id: str):
    """Delete a session of the caller; a repeated delete reports not found."""

    db_sessions.delete_session(session_id=session_id, user_id=user_id, raise_not_found=True)
    logger.info("Deleted session %s", session_id)


#####################
## DRAFT / PUBLISH ##
#####################

def save_session(
        user_id: str,
        status: SessionStatus,
        title: str | None,
        tags: str | list[str] | None = None,
        json_file_url: str | None = None,
        session_id: str | None = None,
) -> Session:
    """
    Create or overwrite a session of the caller in the given status.

    Without `session_id` a new session is created, otherwise the caller's session with that ID
    gets its title, tags and JSON file URL overwritten. Publishing requires a valid JSON file URL.

    :param user_id: caller ID
    :param status: status to store the session with
    :param title: session title (required)
    :param tags: list of tags or comma-separated string
    :param json_file_url: URL of the session JSON file
    :param session_id: ID of the session to overwrite
    :return: stored session
    """

    errors = []
    title = _check_title(title, errors)
    tags = _check_tags(tags, errors)
    json_file_url = _check_url(json_file_url, errors, required=status == SessionStatus.PUBLISHED)
    _raise_for_errors(errors)

    values = {
        "title": title,
        "tags": tags,
        "json_file_url": json_file_url,
        "status": status,
        "updated_at": utc_now(),
    }

    if session_id:
        data = db_sessions.get_session(session_id=session_id, user_id=user_id).model_dump(by_alias=False)
        data.update(values)
        res = db_sessions.update_session(data=Session.model_validate(data))
        logger.info("Saved session %s as %s", res.id, res.status)
        return res

    data = Session(user_id=user_id, created_at=values["updated_at"], **values)
    session_id = db_sessions.create_session(data=data)
    logger.info("Created session %s as %s", session_id, data.status)
    return db_sessions.get_session(session_id=session_id, user_id=user_id)


def save_draft(
        user_id: str,
        title: str | None,
        tags: str | list[str] | None = None,
        json_file_url: str | None = None,
        session_id: str | None = None,
) -> Session:
    return save_session(user_id, SessionStatus.DRAFT, title, tags, json_file_url, session_id)


def publish(
        user_id: str,
        title: str | None,
        tags: str | list[str] | None = None,
        json_file_url: str | None = None,
        session_id: str | None = None,
) -> Session:
    return save_session(user_id, SessionStatus.PUBLISHED, title, tags, json_file_url, session_id)
