# offer_api/schemas/common.py
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire schemas: camelCase on the wire, snake_case in Python.

    Strings are kept exactly as sent. Ids in bodies must compare equal to
    the same ids arriving as path parameters.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
