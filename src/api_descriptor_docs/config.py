"""Defaults and logging setup shared by the CLI and the generator."""

import logging

DEFAULT_TITLE = "API Descriptor"
DOC_EXTENSION = ".adoc"

OUTPUT_DIR_ENV = "API_DOCS_OUTPUT_DIR"
TITLE_ENV = "API_DOCS_TITLE"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging: DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )
