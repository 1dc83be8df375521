# -*- coding: utf-8 -*-
"""
    common.api.security_jwt
    ~~~~~~~~~~~~~~~~~~~~~~~

    API security utilities using JWT.

    Tokens are issued by the auth endpoints and signed with the shared secret from the config.
"""

from datetime import timedelta
from typing import Any

import jwt
from fastapi import status
from fastapi.exceptions import HTTPException
from fastapi.param_functions import Depends
from fastapi.security import APIKeyHeader

from common.config import CONFIG
from common.core.middleware import add_to_context
from common.models.validation import utc_now

header = APIKeyHeader(name="Authorization", scheme_name="JWT", auto_error=False)


def issue_token(user_id: str, email: str) -> str:
    """
    Issue a signed auth token for a user.

    :param user_id: user ID (stored as the `sub` claim)
    :param email: user email
    :return: encoded JWT
    """

    now = utc_now()
    payload = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=CONFIG.JWT_EXPIRATION_HOURS),
    }

    return jwt.encode(payload, CONFIG.JWT_SECRET.get_secret_value(), algorithm=CONFIG.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(
        jwt=token,
        key=CONFIG.JWT_SECRET.get_secret_value(),
        algorithms=[CONFIG.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


async def verify_jwt(token: str | None = Depends(header)) -> dict[str, Any]:
    if token is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Auth token missing")

    if not token.startswith("Bearer "):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid auth token")

    try:
        return decode_token(token.split(" ", 1)[1])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Auth token has expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid auth token")


async def get_caller_id(claims: dict[str, Any] = Depends(verify_jwt)) -> str:
    """Resolve the authenticated caller to a user ID."""

    if not isinstance(user_id := claims.get("sub"), str) or not user_id:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid auth token")

    add_to_context({"user_id": user_id})
    return user_id
