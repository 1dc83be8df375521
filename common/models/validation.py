# -*- coding: utf-8 -*-
"""
    common.models.validation
    ~~~~~~~~~~~~~~~~~~~~~~~~

    Helper functions and type definitions used for validation of pydantic models.
"""

from datetime import datetime
from typing import Annotated, Any

from bson import ObjectId
from dateutil import tz
from pydantic import AfterValidator, AnyUrl, BeforeValidator, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)


#######################
## DEFAULT FACTORIES ##
#######################

def object_id_str() -> str:
    return str(ObjectId())


def utc_now() -> datetime:
    return datetime.now(tz=tz.UTC)


######################
## FIELD VALIDATORS ##
######################

def fill_id(v: str | None) -> str:
    return v or object_id_str()


def strip_str(v: Any) -> Any:
    return v.strip() if isinstance(v, str) else v


def normalize_email(v: str) -> str:
    v = v.strip().lower()
    local, _, domain = v.partition("@")
    if not local or "." not in domain or " " in v:
        raise ValueError("email is not a valid email address")
    return v


def parse_tags(v: Any) -> Any:
    """
    Normalize tags given either as a list or as one comma-separated string.

    Entries are trimmed and empty entries dropped; order and duplicates are kept.
    """

    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, (list, tuple)):
        return [x.strip() if isinstance(x, str) else x for x in v if not isinstance(x, str) or x.strip()]
    return v


def is_valid_url(v: str | None) -> bool:
    """Check whether the value parses as an absolute URL."""

    if not isinstance(v, str) or not v.strip():
        return False

    try:
        _URL_ADAPTER.validate_python(v.strip())
    except ValidationError:
        return False
    return True


def validate_url_or_empty(v: str) -> str:
    if v and not is_valid_url(v):
        raise ValueError("json_file_url must be a valid URL")
    return v


######################
## TYPE DEFINITIONS ##
######################

Email = Annotated[str, AfterValidator(normalize_email)]
MongoID = Annotated[str, AfterValidator(fill_id)]
TagList = Annotated[list[str], BeforeValidator(parse_tags)]
Title = Annotated[str, BeforeValidator(strip_str)]
UrlOrEmpty = Annotated[str, BeforeValidator(strip_str), AfterValidator(validate_url_or_empty)]
