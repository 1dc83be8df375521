# -*- coding: utf-8 -*-
"""
    wellnesshub.services.auth
    ~~~~~~~~~~~~~~~~~~~~~~~~~

    User registration and login.
"""

import bcrypt

from common.api.security_jwt import issue_token
from common.config import CONFIG
from common.core import get_component_logger
from common.models.api import AuthToken
from common.models.user import PublicUser, User
from common.models.validation import normalize_email
from common.utils import exceptions as exc
from wellnesshub.services.db.mongo import users as db_users

logger = get_component_logger()

MSG_INVALID_CREDENTIALS = "Invalid credentials"

# bcrypt only uses the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def _check_credentials(email: str, password: str) -> tuple[str, str]:
    errors = []

    try:
        email = normalize_email(email)
    except ValueError:
        errors.append(("email", "Please enter a valid email"))

    if len(password) < CONFIG.PASSWORD_MIN_LENGTH:
        errors.append(("password", f"Password must be at least {CONFIG.PASSWORD_MIN_LENGTH} characters long"))
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(("password", f"Password must be at most {PASSWORD_MAX_BYTES} bytes long"))

    if errors:
        raise exc.InvalidInput(errors)
    return email, password


def register(email: str, password: str) -> AuthToken:
    """
    Register a new user and log them in.

    :param email: user email (unique, case-insensitive)
    :param password: plain text password
    :return: auth token and user
    """

    email, password = _check_credentials(email, password)

    user = User(email=email, password_hash=hash_password(password))
    db_users.create_user(data=user)
    logger.info("Registered user %s", user.id)

    return AuthToken(token=issue_token(user_id=user.id, email=user.email), user=user.public())


def login(email: str, password: str) -> AuthToken:
    """
    Log in an existing user.

    Unknown email and wrong password are reported the same way.

    :param email: user email
    :param password: plain text password
    :return: auth token and user
    """

    user = db_users.find_user_by_email(email.strip().lower())

    if user is None or not verify_password(password, user.password_hash):
        raise exc.Unauthorized(MSG_INVALID_CREDENTIALS)

    return AuthToken(token=issue_token(user_id=user.id, email=user.email), user=user.public())


def get_me(user_id: str) -> PublicUser:
    return db_users.get_user(user_id=user_id).public()
