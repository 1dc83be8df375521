# -*- coding: utf-8 -*-
"""
    common.config
    ~~~~~~~~~~~~~

    App configuration.

    Contains default values generally safe to use for a local (develop) deployment.
"""

from pathlib import Path

from pydantic import AnyUrl, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.models.enums import LogFormat

DIR_ROOT = Path(__file__).parent.parent


class Config(BaseSettings):
    DEPLOYMENT: str = "local"

    #############
    ## BACKEND ##
    #############

    WELLNESSHUB_URL: AnyUrl = "http://localhost:5000"
    WELLNESSHUB_LOG_FORMAT: LogFormat = LogFormat.plain
    WELLNESSHUB_LOG_LEVEL: str = "DEBUG"
    WELLNESSHUB_PORT: int = Field(5000, alias="WELLNESSHUB_CONTAINER_PORT")
    WELLNESSHUB_VERSION: str = "latest"

    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["*"]

    ##############
    ## SERVICES ##
    ##############

    MONGO_CONN_STR: SecretStr
    MONGO_DB_NAME: str = "wellnesshub-develop"

    ##########
    ## AUTH ##
    ##########

    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    PASSWORD_MIN_LENGTH: int = 6

    ##############################
    ## FEATURE FLAGS & SETTINGS ##
    ##############################

    # Inactivity (in seconds) before the client saves the edited draft
    AUTOSAVE_DELAY: float = 5.0

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=(
            "/config/config.local.env",
            DIR_ROOT / "config.env",
            DIR_ROOT / "config.local.env",
        ),
        env_parse_none_str="None",
        extra="ignore",
        validate_assignment=True,
        validate_by_alias=True,
        validate_by_name=True,
    )

    @field_validator("WELLNESSHUB_LOG_LEVEL")
    @classmethod
    def upper_str(cls, v: str) -> str:
        return v.upper()

    @field_validator("API_PREFIX")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        return f"/{v.strip('/')}" if v.strip("/") else ""


# noinspection PyArgumentList
CONFIG = Config()
