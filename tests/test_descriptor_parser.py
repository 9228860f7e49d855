import json
from datetime import date
from pathlib import Path

import pytest

from api_descriptor_docs.errors import ApiValidationError
from api_descriptor_docs.models.resource import FlatPaths, VersionedPaths
from api_descriptor_docs.parser.descriptor import parse_descriptor, parse_descriptor_data

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseDescriptor:
    def test_parse_petstore(self):
        api = parse_descriptor(FIXTURES / "petstore.yaml")
        assert api.id == "petstore"
        assert api.description == "Pets API"
        assert isinstance(api.paths, FlatPaths)
        assert api.paths.names() == ["/pets", "/pets/{petId}"]

    def test_resource_fields(self):
        api = parse_descriptor(FIXTURES / "petstore.yaml")
        pets = api.paths.get("/pets")
        assert pets.resource_schema.reference == "#/definitions/Pet"
        assert pets.create.mode == "ID_FROM_SERVER"
        assert pets.create.parameters[0].type == "boolean"
        assert pets.actions[0].name == "vaccinate"
        assert pets.queries[0].count_policies == ["NONE", "EXACT"]
        assert api.paths.get("/pets/{petId}").read.parameters[0].source == "PATH"

    def test_catalogs(self):
        api = parse_descriptor(FIXTURES / "petstore.yaml")
        assert api.definitions.names() == ["Pet"]
        assert api.errors.get("notFound").code == 404

    def test_parse_versioned(self):
        api = parse_descriptor(FIXTURES / "versioned.yaml")
        assert isinstance(api.paths, VersionedPaths)
        assert api.paths.get("/orders").versions() == ["1.0", "2.0"]
        assert api.paths.get("/orders").get("1.0").delete.mvcc_supported is True

    def test_parse_json(self, tmp_path):
        doc = tmp_path / "api.json"
        doc.write_text(json.dumps({"id": "api", "paths": {"/a": {"read": {}}}}), encoding="utf-8")
        api = parse_descriptor(doc)
        assert api.paths.get("/a").read is not None

    def test_unquoted_version_keys(self):
        api = parse_descriptor_data({"id": "api", "paths": {"/a": {1.0: {"read": {}}}}})
        assert api.paths.get("/a").versions() == ["1.0"]

    def test_mixed_paths_rejected(self):
        with pytest.raises(ApiValidationError, match="mix"):
            parse_descriptor(FIXTURES / "mixed.yaml")

    def test_invalid_yaml(self, tmp_path):
        doc = tmp_path / "bad.yaml"
        doc.write_text("id: [unclosed\n", encoding="utf-8")
        with pytest.raises(ApiValidationError):
            parse_descriptor(doc)

    def test_top_level_must_be_mapping(self, tmp_path):
        doc = tmp_path / "list.yaml"
        doc.write_text("- id: api\n", encoding="utf-8")
        with pytest.raises(ApiValidationError, match="mapping"):
            parse_descriptor(doc)

    def test_duplicate_definition_name_rejected(self, tmp_path):
        doc = tmp_path / "dup.yaml"
        doc.write_text(
            "id: api\ndefinitions:\n  Pet:\n    type: object\n  Pet:\n    type: string\n",
            encoding="utf-8",
        )
        with pytest.raises(ApiValidationError, match="duplicate key 'Pet'"):
            parse_descriptor(doc)

    def test_duplicate_path_rejected(self, tmp_path):
        doc = tmp_path / "dup.json"
        doc.write_text('{"id": "api", "paths": {"/a": {}, "/a": {"read": {}}}}', encoding="utf-8")
        with pytest.raises(ApiValidationError, match="duplicate key"):
            parse_descriptor(doc)

    def test_merge_keys_allowed(self, tmp_path):
        doc = tmp_path / "merge.yaml"
        doc.write_text(
            "id: api\n"
            "definitions:\n"
            "  Base: &base\n"
            "    type: object\n"
            "  Pet:\n"
            "    <<: *base\n"
            "    type: string\n",
            encoding="utf-8",
        )
        api = parse_descriptor(doc)
        assert api.definitions.get("Pet").root == {"type": "string"}

    def test_date_values_kept(self, tmp_path):
        doc = tmp_path / "dates.yaml"
        doc.write_text(
            "id: api\ndefinitions:\n  Pet:\n    properties:\n      born: {type: string, format: date, example: 2024-01-01}\n",
            encoding="utf-8",
        )
        api = parse_descriptor(doc)
        assert api.definitions.get("Pet").root["properties"]["born"]["example"] == date(2024, 1, 1)

    def test_missing_id(self):
        with pytest.raises(ApiValidationError):
            parse_descriptor_data({"description": "no id"})
