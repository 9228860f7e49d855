"""Namespace allocation for generated documents."""

from api_descriptor_docs.errors import NamingCollisionError
from api_descriptor_docs.markup.asciidoc import normalize_name


class NamespaceRegistry:
    """Derives document namespaces and refuses to hand one out twice.

    Two distinct identifiers can normalize to the same namespace
    (``/pets`` and ``pets``, say). Since the namespace is also the output
    filename, the second claim fails before its document is written.
    """

    def __init__(self):
        self._claims: dict[str, tuple[str | None, str]] = {}

    def child(self, parent: str | None, segment: str) -> str:
        """Return ``normalize_name(parent, segment)`` and record the claim."""
        namespace = normalize_name(parent, segment)
        if namespace in self._claims:
            other_parent, other_segment = self._claims[namespace]
            raise NamingCollisionError(
                f"{segment!r} under {parent!r} normalizes to {namespace!r}, "
                f"already used by {other_segment!r} under {other_parent!r}"
            )
        self._claims[namespace] = (parent, segment)
        return namespace

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._claims

    def __len__(self) -> int:
        return len(self._claims)
