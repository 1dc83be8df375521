# -*- coding: utf-8 -*-
"""
    common.models.base
    ~~~~~~~~~~~~~~~~~~

    Custom Pydantic base model shared by DB documents and API payloads.

    Enum fields are stored as their plain values so that the documents can be written to MongoDB as they are.
"""

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        serialize_by_alias=True,
        use_enum_values=True,
        validate_assignment=True,
        validate_by_alias=True,
        validate_by_name=True,
    )
