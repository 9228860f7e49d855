"""Root of an API description."""

from typing import Any

from pydantic import field_validator

from api_descriptor_docs.models.base import DescriptorModel
from api_descriptor_docs.models.definitions import Definitions, Errors
from api_descriptor_docs.models.resource import FlatPaths, VersionedPaths, classify_paths


class ApiDescription(DescriptorModel):
    """A complete API description: paths, schema definitions and errors."""

    id: str
    description: str | None = None
    paths: FlatPaths | VersionedPaths | None = None
    definitions: Definitions | None = None
    errors: Errors | None = None

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id required")
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def _resolve_paths(cls, value: Any) -> Any:
        if value is None:
            return None
        return classify_paths(value)
