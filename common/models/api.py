# -*- coding: utf-8 -*-
"""
    common.models.api
    ~~~~~~~~~~~~~~~~~

    Models used as payloads/responses in APIs.
"""

from pydantic import Field

from common.models.base import CustomBaseModel
from common.models.enums import SessionStatus
from common.models.session import Session
from common.models.user import PublicUser


##############
## PAYLOADS ##
##############

class SessionCreate(CustomBaseModel):
    title: str | None = None
    content: str | None = None
    status: SessionStatus | None = None


class SessionUpdate(CustomBaseModel):
    title: str | None = None
    content: str | None = None
    status: SessionStatus | None = None


class SessionSave(CustomBaseModel):
    """Payload of the save-draft and publish endpoints."""

    title: str | None = None
    tags: str | list[str] | None = None
    json_file_url: str | None = None
    session_id: str | None = Field(None, alias="sessionId")


class Credentials(CustomBaseModel):
    email: str = ""
    password: str = ""


###############
## RESPONSES ##
###############

class FieldError(CustomBaseModel):
    field: str
    message: str


class Message(CustomBaseModel):
    message: str


class SessionEnvelope(Message):
    session: Session


class AuthToken(CustomBaseModel):
    token: str
    user: PublicUser
