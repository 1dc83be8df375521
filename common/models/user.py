# -*- coding: utf-8 -*-
"""
    common.models.user
    ~~~~~~~~~~~~~~~~~~

    User models.
"""

from datetime import datetime
from typing import Literal, get_args

from pydantic import Field

from common.models.base import CustomBaseModel
from common.models.validation import Email, MongoID, object_id_str, utc_now

_T_VER_USERS = Literal[1]
VER_USERS: int = get_args(_T_VER_USERS)[0]


class PublicUser(CustomBaseModel):
    id: MongoID = Field(alias="_id", default_factory=object_id_str)
    email: Email
    created_at: datetime = Field(default_factory=utc_now)


class User(PublicUser):
    password_hash: str
    model_version: _T_VER_USERS = VER_USERS

    def public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(include={"id", "email", "created_at"}, by_alias=False))
