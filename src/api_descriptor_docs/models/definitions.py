"""Schema and error catalogs shared across an API description."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from api_descriptor_docs.errors import ApiValidationError, NullReferenceError
from api_descriptor_docs.models.base import DescriptorModel, check_name, is_valid_name


class Schema(RootModel[dict[str, Any]]):
    """A JSON schema body, or a reference to one via ``$ref``."""

    model_config = ConfigDict(frozen=True)

    @property
    def reference(self) -> str | None:
        ref = self.root.get("$ref")
        return ref if isinstance(ref, str) else None


class ApiError(DescriptorModel):
    """An error an operation may return."""

    code: int
    description: str
    error_schema: Schema | None = Field(default=None, alias="schema")


def _check_entries(entries: dict, label: str) -> dict:
    if not entries:
        raise ValueError(f"Must have at least one {label}")
    for name in entries:
        check_name(name, label)
    return entries


class Definitions(RootModel[dict[str, Schema]]):
    """Named schema definitions, referenced from elsewhere in the descriptor."""

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def _validate_entries(cls, value: dict) -> dict:
        return _check_entries(value, "schema definition")

    def get(self, name: str) -> Schema | None:
        return self.root.get(name)

    def names(self) -> list[str]:
        """All schema names, sorted."""
        return sorted(self.root)

    @classmethod
    def builder(cls) -> "CatalogBuilder[Schema]":
        return CatalogBuilder(cls, Schema, "schema definition")


class Errors(RootModel[dict[str, ApiError]]):
    """Named errors shared by the operations of an API."""

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def _validate_entries(cls, value: dict) -> dict:
        return _check_entries(value, "error")

    def get(self, name: str) -> ApiError | None:
        return self.root.get(name)

    def names(self) -> list[str]:
        """All error names, sorted."""
        return sorted(self.root)

    @classmethod
    def builder(cls) -> "CatalogBuilder[ApiError]":
        return CatalogBuilder(cls, ApiError, "error")


V = TypeVar("V", bound=BaseModel)


class CatalogBuilder(Generic[V]):
    """Accumulates named entries and produces one immutable catalog.

    Usage::

        definitions = (
            Definitions.builder()
            .put("Pet", {"type": "object"})
            .put("Owner", Schema({"type": "object"}))
            .build()
        )
    """

    def __init__(self, catalog_type: type, value_type: type[V], label: str):
        self._catalog_type = catalog_type
        self._value_type = value_type
        self._label = label
        self._entries: dict[str, V] = {}

    def put(self, name: str, value: V | dict) -> "CatalogBuilder[V]":
        """Add one entry. Rejects empty, whitespace-containing or duplicate names."""
        if not is_valid_name(name):
            raise ApiValidationError(f"{self._label} name required and may not contain whitespace: {name!r}")
        if name in self._entries:
            raise ApiValidationError(f"{self._label} name not unique: {name!r}")
        if value is None:
            raise NullReferenceError(f"{self._label} {name!r} requires a value")
        try:
            self._entries[name] = self._value_type.model_validate(value)
        except ValidationError as e:
            raise ApiValidationError(f"invalid {self._label} {name!r}: {e}") from e
        return self

    def build(self):
        if not self._entries:
            raise ApiValidationError(f"Must have at least one {self._label}")
        return self._catalog_type(dict(self._entries))
