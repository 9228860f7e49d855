import pytest

from api_descriptor_docs.errors import NamingCollisionError
from api_descriptor_docs.generator.naming import NamespaceRegistry


class TestNamespaceRegistry:
    def test_child_namespaces(self):
        names = NamespaceRegistry()
        root = names.child(None, "petstore")
        paths = names.child(root, "paths")
        assert root == "petstore"
        assert paths == "petstore-paths"
        assert names.child(paths, "/pets") == "petstore-paths-pets"
        assert "petstore-paths-pets" in names
        assert len(names) == 3

    def test_sibling_collision(self):
        names = NamespaceRegistry()
        names.child("api-paths", "/pets")
        with pytest.raises(NamingCollisionError, match="api-paths-pets"):
            names.child("api-paths", "pets")

    def test_collision_across_parents(self):
        names = NamespaceRegistry()
        names.child("api-paths-a", "resource")
        with pytest.raises(NamingCollisionError):
            names.child("api-paths", "a-resource")

    def test_repeat_claim_rejected(self):
        names = NamespaceRegistry()
        names.child("api-resource-queries", "filter")
        with pytest.raises(NamingCollisionError):
            names.child("api-resource-queries", "filter")
