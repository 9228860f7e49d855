"""Generate hierarchical AsciiDoc documentation from API descriptors."""

__version__ = "0.1.0"
