# core/schemas.py

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PHONE_PATTERN = re.compile(r"^\+91[0-9]{10}$")


def check_phone_number(value: str, message: str = "Invalid Indian phone number format") -> str:
    if not PHONE_PATTERN.match(value):
        raise ValueError(message)
    return value


class CamelModel(BaseModel):
    """Base for request/response models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
