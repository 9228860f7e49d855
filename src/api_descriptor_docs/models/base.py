"""Shared base for the API descriptor models.

Descriptor files spell fields in camelCase; the Python models use
snake_case and accept either spelling.
"""

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_WHITESPACE = re.compile(r"\s")


class DescriptorModel(BaseModel):
    """Immutable model populated from a descriptor file or by keyword."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def is_valid_name(name: object) -> bool:
    """True for a non-empty string without whitespace."""
    return isinstance(name, str) and bool(name) and not _WHITESPACE.search(name)


def check_name(name: object, label: str) -> str:
    if not is_valid_name(name):
        raise ValueError(f"{label} name required and may not contain whitespace: {name!r}")
    return name
