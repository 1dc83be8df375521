# -*- coding: utf-8 -*-
"""
    wellnesshub.api.auth
    ~~~~~~~~~~~~~~~~~~~~

    Registration and login endpoints.
"""

from fastapi import status
from fastapi.param_functions import Depends
from fastapi.routing import APIRouter

from common.api.security_jwt import get_caller_id
from common.models import api as ma
from common.models.user import PublicUser
from common.utils.api import error_handler
from wellnesshub.services import auth as svc

router = APIRouter()


@router.post(
    "/register",
    response_model=ma.AuthToken,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@error_handler
def register(data: ma.Credentials) -> ma.AuthToken:
    """
    Register a new user.

    :param data: email and password
    :return: auth token and user
    """

    return svc.register(email=data.email, password=data.password)


@router.post(
    "/login",
    response_model=ma.AuthToken,
    status_code=status.HTTP_200_OK,
    summary="Log in",
)
@error_handler
def login(data: ma.Credentials) -> ma.AuthToken:
    """
    Log in with email and password.

    :param data: email and password
    :return: auth token and user
    """

    return svc.login(email=data.email, password=data.password)


@router.get(
    "/me",
    response_model=PublicUser,
    status_code=status.HTTP_200_OK,
    summary="Get the current user",
)
@error_handler
def get_me(user_id: str = Depends(get_caller_id)) -> PublicUser:
    """
    Get the user the auth token belongs to.

    :param user_id: caller ID
    :return: user data
    """

    return svc.get_me(user_id=user_id)
