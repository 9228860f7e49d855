"""AsciiDoc documentation generator for API descriptions.

Every structural node of the description (path, version, resource,
operation, action, query, schema definition, error) gets its own file.
Parents include their children, so a child file is always written before
the parent that includes it, and the root document written last includes
everything transitively.

Output is not transactional: if generation fails part-way, files written
so far stay on disk.
"""

import json
import logging
import os
from pathlib import Path

from api_descriptor_docs.config import DEFAULT_TITLE, DOC_EXTENSION
from api_descriptor_docs.errors import ConfigurationError, DocGenerationError, UnsupportedPathTypeError
from api_descriptor_docs.generator.naming import NamespaceRegistry
from api_descriptor_docs.markup.asciidoc import AsciiDoc, asciidoc
from api_descriptor_docs.models.api import ApiDescription
from api_descriptor_docs.models.definitions import Definitions, Errors, Schema
from api_descriptor_docs.models.operations import Action, Create, Delete, Operation, Patch, Query, Update
from api_descriptor_docs.models.resource import FlatPaths, Resource, VersionedPaths

log = logging.getLogger(__name__)

PATHS_SECTION_LEVEL = 1

# (heading, Resource attribute) in output order; the attribute doubles as namespace segment
OPERATION_SECTIONS = [
    ("Create", "create"),
    ("Read", "read"),
    ("Update", "update"),
    ("Delete", "delete"),
    ("Patch", "patch"),
]


def _mono(text: str) -> str:
    return str(asciidoc().mono(text))


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _operation_attributes(operation: Operation) -> list[tuple[str, str]]:
    """Labeled-list entries specific to the operation's kind."""
    attributes = []
    if isinstance(operation, Create) and operation.mode:
        attributes.append(("Mode", operation.mode))
    if isinstance(operation, Patch) and operation.operations:
        attributes.append(("Patch operations", ", ".join(operation.operations)))
    if isinstance(operation, Query):
        attributes.append(("Query type", operation.type))
        if operation.query_id:
            attributes.append(("Query ID", _mono(operation.query_id)))
        if operation.paging_mode:
            attributes.append(("Paging mode", operation.paging_mode))
        if operation.count_policies:
            attributes.append(("Count policies", ", ".join(operation.count_policies)))
        if operation.queryable_fields:
            attributes.append(("Queryable fields", ", ".join(operation.queryable_fields)))
        if operation.sort_keys:
            attributes.append(("Sort keys", ", ".join(operation.sort_keys)))
    if isinstance(operation, (Create, Update, Delete, Patch)):
        attributes.append(("MVCC supported", _yes_no(operation.mvcc_supported)))
    return attributes


def _prepare_output_dir(output_dir: Path) -> Path:
    if output_dir.exists() and not output_dir.is_dir():
        raise ConfigurationError(f"Output path is not a directory: {output_dir}")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Unable to create output directory {output_dir}: {e}") from e
    if not os.access(output_dir, os.W_OK):
        raise ConfigurationError(f"Output directory is not writable: {output_dir}")
    return output_dir


class ApiDocGenerator:
    """Generates static AsciiDoc documentation for an API description."""

    def __init__(self, output_dir: Path, title: str = DEFAULT_TITLE):
        """Set the output directory, creating it if it does not exist."""
        if output_dir is None:
            raise ConfigurationError("output_dir required")
        self.output_dir = _prepare_output_dir(Path(output_dir))
        self.title = title
        self._names = NamespaceRegistry()
        self._written: list[str] = []

    @property
    def written(self) -> list[str]:
        """Filenames written by the last ``execute`` call, in write order."""
        return list(self._written)

    def execute(self, api_description: ApiDescription) -> None:
        """Write the documentation for ``api_description`` into the output directory."""
        self._names = NamespaceRegistry()
        self._written = []
        paths = api_description.paths
        if paths is not None and not isinstance(paths, (FlatPaths, VersionedPaths)):
            raise UnsupportedPathTypeError(type(paths))

        log.info("Generating docs for %r into %s", api_description.id, self.output_dir)
        namespace = self._names.child(None, api_description.id)
        try:
            paths_filename = None
            if isinstance(paths, FlatPaths):
                paths_filename = self._output_paths(paths, namespace)
            elif isinstance(paths, VersionedPaths):
                paths_filename = self._output_versioned_paths(paths, namespace)

            definitions_filename = self._output_definitions(api_description.definitions, namespace)
            errors_filename = self._output_errors(api_description.errors, namespace)
            self._output_root(api_description, paths_filename, definitions_filename, errors_filename, namespace)
        except OSError as e:
            raise DocGenerationError(f"Unable to output doc file: {e}") from e
        log.info("Wrote %d files for %r", len(self._written), api_description.id)

    # -- output helpers ---------------------------------------------------------

    def _write(self, doc: AsciiDoc, namespace: str) -> str:
        """Write ``doc`` as ``<namespace>.adoc`` and return the filename for include statements."""
        filename = namespace + DOC_EXTENSION
        doc.to_file(self.output_dir, filename)
        self._written.append(filename)
        log.debug("Wrote %s", filename)
        return filename

    def _render_schema(self, doc: AsciiDoc, schema: Schema) -> None:
        if schema.reference:
            doc.raw_text("See ").mono(schema.reference).newline().newline()
        else:
            doc.source(json.dumps(schema.root, indent=2, ensure_ascii=False, default=str))

    def _render_operation(self, doc: AsciiDoc, operation: Operation) -> None:
        if operation.description:
            doc.paragraph(operation.description)

        attributes = _operation_attributes(operation)
        if operation.stability:
            attributes.insert(0, ("Stability", operation.stability))
        if operation.supported_locales:
            attributes.append(("Supported locales", ", ".join(operation.supported_locales)))
        for term, value in attributes:
            doc.labeled(term, value)
        if attributes:
            doc.newline()

        if operation.parameters:
            rows = [
                [
                    p.name,
                    p.type,
                    p.source,
                    _yes_no(p.required),
                    p.default_value or "",
                    ", ".join(p.enum_values),
                    p.description or "",
                ]
                for p in operation.parameters
            ]
            doc.block_title("Parameters")
            doc.table(["Name", "Type", "Source", "Required", "Default", "Values", "Description"], rows)

        if operation.errors:
            rows = [[str(e.code), e.description] for e in sorted(operation.errors, key=lambda e: e.code)]
            doc.block_title("Errors").table(["Code", "Description"], rows)

        if isinstance(operation, Action):
            if operation.request is not None:
                doc.block_title("Request")
                self._render_schema(doc, operation.request)
            if operation.response is not None:
                doc.block_title("Response")
                self._render_schema(doc, operation.response)

    # -- root -------------------------------------------------------------------

    def _output_root(
        self,
        api_description: ApiDescription,
        paths_filename: str | None,
        definitions_filename: str | None,
        errors_filename: str | None,
        parent_namespace: str,
    ) -> str:
        """Write the top-level file that includes the paths, definitions and errors summaries."""
        namespace = self._names.child(parent_namespace, "index")
        root_doc = (
            asciidoc()
            .document_title(self.title)
            .section_title1(str(asciidoc().raw_text("ID: ").mono(api_description.id)))
        )
        if api_description.description:
            root_doc.paragraph(api_description.description)

        for filename in (paths_filename, definitions_filename, errors_filename):
            if filename is not None:
                root_doc.include(filename)
        return self._write(root_doc, namespace)

    # -- paths ------------------------------------------------------------------

    def _output_paths(self, paths: FlatPaths, parent_namespace: str) -> str | None:
        """Write a file per path and a file including all of them. Empty tables produce nothing."""
        if not paths.root:
            log.debug("Skipping empty path table")
            return None
        namespace = self._names.child(parent_namespace, "paths")
        path_level = PATHS_SECTION_LEVEL + 1
        all_paths_doc = asciidoc().section_title("Paths", PATHS_SECTION_LEVEL)

        for path_name in paths.names():
            path_namespace = self._names.child(namespace, path_name)
            path_doc = asciidoc().section_title(_mono(path_name), path_level)
            path_doc.include(self._output_resource(paths.get(path_name), path_level, path_namespace))
            all_paths_doc.include(self._write(path_doc, path_namespace))

        return self._write(all_paths_doc, namespace)

    def _output_versioned_paths(self, paths: VersionedPaths, parent_namespace: str) -> str | None:
        """Like ``_output_paths`` with a file per version nested under each path."""
        if not paths.root:
            log.debug("Skipping empty path table")
            return None
        namespace = self._names.child(parent_namespace, "paths")
        path_level = PATHS_SECTION_LEVEL + 1
        version_level = path_level + 1
        all_paths_doc = asciidoc().section_title("Paths", PATHS_SECTION_LEVEL)

        for path_name in paths.names():
            path_namespace = self._names.child(namespace, path_name)
            path_doc = asciidoc().section_title(_mono(path_name), path_level)

            versioned_path = paths.get(path_name)
            for version in versioned_path.versions():
                version_namespace = self._names.child(path_namespace, version)
                version_doc = asciidoc().section_title(_mono(version), version_level)
                version_doc.include(
                    self._output_resource(versioned_path.get(version), version_level, version_namespace)
                )
                path_doc.include(self._write(version_doc, version_namespace))

            all_paths_doc.include(self._write(path_doc, path_namespace))

        return self._write(all_paths_doc, namespace)

    # -- resources --------------------------------------------------------------

    def _output_resource(self, resource: Resource, parent_section_level: int, parent_namespace: str) -> str:
        """Write one file per present section body and the resource file including them."""
        namespace = self._names.child(parent_namespace, "resource")
        level = parent_section_level + 1
        resource_doc = asciidoc()

        if resource.title:
            resource_doc.paragraph(f"*{resource.title}*")
        if resource.description:
            resource_doc.paragraph(resource.description)

        if resource.resource_schema is not None:
            schema_doc = asciidoc()
            self._render_schema(schema_doc, resource.resource_schema)
            resource_doc.section_title("Resource Schema", level)
            resource_doc.include(self._write(schema_doc, self._names.child(namespace, "schema")))

        for title, attribute in OPERATION_SECTIONS:
            operation = getattr(resource, attribute)
            if operation is None:
                continue
            operation_doc = asciidoc()
            self._render_operation(operation_doc, operation)
            resource_doc.section_title(title, level)
            resource_doc.include(self._write(operation_doc, self._names.child(namespace, attribute)))

        if resource.actions:
            resource_doc.section_title("Actions", level)
            resource_doc.include(
                self._output_named_operations(
                    {action.name: action for action in resource.actions}, "actions", level, namespace
                )
            )

        if resource.queries:
            resource_doc.section_title("Queries", level)
            resource_doc.include(
                self._output_named_operations(
                    {query.key: query for query in resource.queries}, "queries", level, namespace
                )
            )

        return self._write(resource_doc, namespace)

    def _output_named_operations(
        self,
        operations: dict[str, Operation],
        segment: str,
        parent_section_level: int,
        parent_namespace: str,
    ) -> str:
        """Write a file per action or query, sorted by key, and a file including them."""
        namespace = self._names.child(parent_namespace, segment)
        level = parent_section_level + 1
        all_doc = asciidoc()

        for key in sorted(operations):
            operation_doc = asciidoc().section_title(_mono(key), level)
            self._render_operation(operation_doc, operations[key])
            all_doc.include(self._write(operation_doc, self._names.child(namespace, key)))

        return self._write(all_doc, namespace)

    # -- catalogs ---------------------------------------------------------------

    def _output_definitions(self, definitions: Definitions | None, parent_namespace: str) -> str | None:
        """Write a file per schema definition and a file including all of them."""
        if definitions is None:
            return None
        namespace = self._names.child(parent_namespace, "definitions")
        all_doc = asciidoc().section_title1("Definitions")

        for name in definitions.names():
            schema_doc = asciidoc().section_title2(_mono(name))
            self._render_schema(schema_doc, definitions.get(name))
            all_doc.include(self._write(schema_doc, self._names.child(namespace, name)))

        return self._write(all_doc, namespace)

    def _output_errors(self, errors: Errors | None, parent_namespace: str) -> str | None:
        """Write a file per named error and a file including all of them."""
        if errors is None:
            return None
        namespace = self._names.child(parent_namespace, "errors")
        all_doc = asciidoc().section_title1("Errors")

        for name in errors.names():
            error = errors.get(name)
            error_doc = asciidoc().section_title2(_mono(name))
            error_doc.labeled("Code", str(error.code)).newline()
            error_doc.paragraph(error.description)
            if error.error_schema is not None:
                error_doc.block_title("Schema")
                self._render_schema(error_doc, error.error_schema)
            all_doc.include(self._write(error_doc, self._names.child(namespace, name)))

        return self._write(all_doc, namespace)
