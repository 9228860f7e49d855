"""Exceptions raised while building API descriptors and generating docs."""


class ApiDocsError(Exception):
    """Base class for all api-descriptor-docs errors."""


class ApiValidationError(ApiDocsError, ValueError):
    """Malformed API descriptor input (bad names, duplicates, missing fields)."""


class NullReferenceError(ApiValidationError):
    """A required value was None."""


class ConfigurationError(ApiDocsError):
    """The output directory is unusable."""


class UnsupportedPathTypeError(ApiDocsError):
    """The path table is neither flat nor versioned."""

    def __init__(self, actual_type: type):
        self.actual_type = actual_type
        super().__init__(f"Unsupported Paths type: {actual_type.__module__}.{actual_type.__qualname__}")


class NamingCollisionError(ApiDocsError):
    """Two distinct identifiers normalize to the same document namespace."""


class DocGenerationError(ApiDocsError):
    """Writing a generated document failed."""
