"""API descriptor file parser.

Reads YAML or JSON descriptor files (JSON is valid YAML) into an
ApiDescription. A key repeated within one mapping is an error. Mapping
keys are turned into strings, so an unquoted version key such as ``1.0``
still works; quote versions like ``2.10`` that YAML would read as a
different float.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from api_descriptor_docs.errors import ApiValidationError
from api_descriptor_docs.models.api import ApiDescription


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a key repeated within one mapping."""


def _construct_unique_mapping(loader: _UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    seen = set()
    for key_node, _ in node.value:
        if key_node.tag == "tag:yaml.org,2002:merge":
            continue
        key = loader.construct_object(key_node, deep=deep)
        try:
            duplicate = key in seen
        except TypeError:
            continue  # unhashable; construct_mapping reports it
        if duplicate:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping", node.start_mark,
                f"found duplicate key {key!r}", key_node.start_mark,
            )
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


_UniqueKeyLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_unique_mapping)


def parse_descriptor(file_path: Path) -> ApiDescription:
    """Parse a descriptor file into an ApiDescription."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ApiValidationError(f"Unable to parse {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise ApiValidationError(f"{file_path}: descriptor must be a mapping at top level")
    return parse_descriptor_data(doc)


def parse_descriptor_data(doc: dict) -> ApiDescription:
    """Validate an already-loaded descriptor mapping."""
    try:
        return ApiDescription.model_validate(_stringify_keys(doc))
    except ValidationError as e:
        raise ApiValidationError(str(e)) from e


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(v) for v in value]
    return value
