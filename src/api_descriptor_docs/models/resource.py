"""Resources and the two shapes of path table.

A path table is either flat (path -> Resource) or versioned
(path -> version -> Resource). The shape is decided once, when the table
is built, and never mixed.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import ConfigDict, RootModel, field_validator, model_validator

from api_descriptor_docs.errors import ApiValidationError
from api_descriptor_docs.models.base import DescriptorModel
from api_descriptor_docs.models.definitions import Schema
from api_descriptor_docs.models.operations import Action, Create, Delete, Patch, Query, Read, Update


class Resource(DescriptorModel):
    """Operations bound to one path (and optionally one version)."""

    title: str | None = None
    description: str | None = None
    resource_schema: Schema | None = None
    create: Create | None = None
    read: Read | None = None
    update: Update | None = None
    delete: Delete | None = None
    patch: Patch | None = None
    actions: list[Action] = []
    queries: list[Query] = []

    @model_validator(mode="after")
    def _unique_actions_and_queries(self) -> "Resource":
        _check_unique([a.name for a in self.actions], "action name")
        _check_unique([q.key for q in self.queries], "query")
        return self


RESOURCE_FIELDS = frozenset(
    key for name, field in Resource.model_fields.items() for key in (name, field.alias) if key
)


def _check_unique(keys: list[str], label: str) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise ValueError(f"duplicate {label}: {key!r}")
        seen.add(key)


def _check_keys(value: dict, label: str) -> dict:
    for key in value:
        if not isinstance(key, str) or not key:
            raise ValueError(f"{label} must be a non-empty string: {key!r}")
    return value


class VersionedPath(RootModel[dict[str, Resource]]):
    """Resources of one path keyed by version."""

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def _validate_versions(cls, value: dict) -> dict:
        return _check_keys(value, "version")

    def versions(self) -> list[str]:
        """Version strings in lexicographic order."""
        return sorted(self.root)

    def get(self, version: str) -> Resource | None:
        return self.root.get(version)


class FlatPaths(RootModel[dict[str, Resource]]):
    """Path table whose paths resolve directly to resources."""

    model_config = ConfigDict(frozen=True)
    kind: ClassVar[str] = "flat"

    @field_validator("root")
    @classmethod
    def _validate_paths(cls, value: dict) -> dict:
        return _check_keys(value, "path")

    def names(self) -> list[str]:
        return sorted(self.root)

    def get(self, path: str) -> Resource | None:
        return self.root.get(path)


class VersionedPaths(RootModel[dict[str, VersionedPath]]):
    """Path table whose paths resolve to versioned resources."""

    model_config = ConfigDict(frozen=True)
    kind: ClassVar[str] = "versioned"

    @field_validator("root")
    @classmethod
    def _validate_paths(cls, value: dict) -> dict:
        return _check_keys(value, "path")

    def names(self) -> list[str]:
        return sorted(self.root)

    def get(self, path: str) -> VersionedPath | None:
        return self.root.get(path)


def _is_versioned(entry: Any) -> bool:
    if isinstance(entry, VersionedPath):
        return True
    if isinstance(entry, Resource):
        return False
    return isinstance(entry, Mapping) and bool(entry) and not (set(entry) & RESOURCE_FIELDS)


def classify_paths(raw: Any) -> FlatPaths | VersionedPaths:
    """Build the path table variant matching the shape of ``raw``.

    An entry is versioned when it is a non-empty mapping none of whose keys
    is a Resource field. Every entry of one table must have the same shape.
    """
    if isinstance(raw, (FlatPaths, VersionedPaths)):
        return raw
    if not isinstance(raw, Mapping):
        raise ApiValidationError(f"paths must be a mapping, got {type(raw).__name__}")

    versioned = {name: _is_versioned(entry) for name, entry in raw.items()}
    if versioned and all(versioned.values()):
        return VersionedPaths.model_validate(dict(raw))
    if not any(versioned.values()):
        return FlatPaths.model_validate(dict(raw))

    mixed = sorted(name for name, is_versioned in versioned.items() if is_versioned)
    raise ApiValidationError(f"paths mix versioned and unversioned entries; versioned: {mixed}")
