"""Operations a resource can expose."""

from typing import Any, Literal

from pydantic import field_validator, model_validator

from api_descriptor_docs.models.base import DescriptorModel, check_name
from api_descriptor_docs.models.definitions import ApiError, Schema

Stability = Literal["STABLE", "EVOLVING", "DEPRECATED", "REMOVED", "INTERNAL"]
CreateMode = Literal["ID_FROM_CLIENT", "ID_FROM_SERVER"]
PatchOperation = Literal["ADD", "REMOVE", "REPLACE", "INCREMENT", "COPY", "MOVE", "TRANSFORM"]
QueryType = Literal["FILTER", "ID", "EXPRESSION"]
PagingMode = Literal["COOKIE", "OFFSET"]
CountPolicy = Literal["NONE", "ESTIMATE", "EXACT"]


def _scalar_text(value: Any) -> Any:
    """Turn YAML numbers and booleans into strings; leave other values alone."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Parameter(DescriptorModel):
    """A request parameter of an operation."""

    name: str
    type: str = "string"
    source: Literal["PATH", "ADDITIONAL"] = "ADDITIONAL"
    required: bool = False
    default_value: str | None = None
    description: str | None = None
    enum_values: list[str] = []

    @field_validator("default_value", mode="before")
    @classmethod
    def _stringify_default(cls, value: Any) -> Any:
        return _scalar_text(value)

    @field_validator("enum_values", mode="before")
    @classmethod
    def _stringify_enum(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_scalar_text(v) for v in value]
        return value


class Operation(DescriptorModel):
    """Fields common to every operation."""

    description: str | None = None
    supported_locales: list[str] = []
    parameters: list[Parameter] = []
    errors: list[ApiError] = []
    stability: Stability | None = None


class Create(Operation):
    mode: CreateMode | None = None
    mvcc_supported: bool = False


class Read(Operation):
    pass


class Update(Operation):
    mvcc_supported: bool = False


class Delete(Operation):
    mvcc_supported: bool = False


class Patch(Operation):
    operations: list[PatchOperation] = []
    mvcc_supported: bool = False


class Action(Operation):
    """A named, non-CRUD operation."""

    name: str
    request: Schema | None = None
    response: Schema | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return check_name(value, "action")


class Query(Operation):
    """A query over the resource collection."""

    type: QueryType
    query_id: str | None = None
    paging_mode: PagingMode | None = None
    count_policies: list[CountPolicy] = []
    queryable_fields: list[str] = []
    sort_keys: list[str] = []

    @model_validator(mode="after")
    def _require_query_id(self) -> "Query":
        if self.type == "ID" and not self.query_id:
            raise ValueError("queryId required for ID queries")
        return self

    @property
    def key(self) -> str:
        """Identifies the query among its siblings, e.g. ``filter`` or ``id-active``."""
        if self.type == "ID":
            return f"id-{self.query_id}"
        return self.type.lower()
