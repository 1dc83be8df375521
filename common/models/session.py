# -*- coding: utf-8 -*-
"""
    common.models.session
    ~~~~~~~~~~~~~~~~~~~~~

    Session models.
"""

from datetime import datetime
from typing import Literal, get_args

from pydantic import Field, model_validator

from common.models.base import CustomBaseModel
from common.models.enums import SessionStatus
from common.models.validation import MongoID, TagList, Title, UrlOrEmpty, object_id_str, utc_now

_T_VER_SESSIONS = Literal[1]
VER_SESSIONS: int = get_args(_T_VER_SESSIONS)[0]


class Session(CustomBaseModel):
    id: MongoID = Field(alias="_id", default_factory=object_id_str)
    user_id: str

    title: Title = Field(min_length=1)
    content: str = ""
    tags: TagList = Field(default_factory=list)
    json_file_url: UrlOrEmpty = ""
    status: SessionStatus = SessionStatus.DRAFT

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    model_version: _T_VER_SESSIONS = VER_SESSIONS

    @model_validator(mode="after")
    def check_published_url(self) -> "Session":
        if self.status == SessionStatus.PUBLISHED and not self.json_file_url:
            raise ValueError("published session requires json_file_url")
        return self


class Author(CustomBaseModel):
    id: str = Field(alias="_id")
    email: str


class PublishedSession(Session):
    """Session in the public listing, annotated with its author."""

    author: Author | None = None
