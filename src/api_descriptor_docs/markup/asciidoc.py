"""Minimal AsciiDoc document builder.

Documents are assembled with chained append calls and serialized with
``to_file``. Only the primitives the doc generator needs are supported.
"""

import re
from pathlib import Path

MAX_SECTION_LEVEL = 5

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9._-]+")


def normalize_name(*parts: str | None) -> str:
    """Join parts into a lower-case namespace safe for filenames and includes.

    Whitespace is removed, runs of other characters outside ``[a-z0-9._-]``
    become ``_``, and parts are joined with ``-``. ``None`` parts are skipped.

    >>> normalize_name("petstore", "paths", "/pets/{id}")
    'petstore-paths-pets_id'
    """
    segments = []
    for part in parts:
        if part is None:
            continue
        segment = _WHITESPACE.sub("", part.lower())
        segment = _DISALLOWED.sub("_", segment).strip("_")
        segments.append(segment or "_")
    return "-".join(segments)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


class AsciiDoc:
    """Accumulates AsciiDoc markup."""

    def __init__(self):
        self._parts: list[str] = []

    def document_title(self, title: str) -> "AsciiDoc":
        self._parts.append(f"= {title}\n\n")
        return self

    def section_title(self, title: str, level: int) -> "AsciiDoc":
        """Append a section heading; level 1 is the highest section below the document title."""
        if not 1 <= level <= MAX_SECTION_LEVEL:
            raise ValueError(f"section level must be between 1 and {MAX_SECTION_LEVEL}: {level}")
        self._parts.append(f"{'=' * (level + 1)} {title}\n\n")
        return self

    def section_title1(self, title: str) -> "AsciiDoc":
        return self.section_title(title, 1)

    def section_title2(self, title: str) -> "AsciiDoc":
        return self.section_title(title, 2)

    def section_title3(self, title: str) -> "AsciiDoc":
        return self.section_title(title, 3)

    def raw_text(self, text: str) -> "AsciiDoc":
        self._parts.append(text)
        return self

    def mono(self, text: str) -> "AsciiDoc":
        # passthrough keeps braces in paths like /pets/{id} from becoming attribute references
        self._parts.append(f"`+{text}+`")
        return self

    def newline(self) -> "AsciiDoc":
        self._parts.append("\n")
        return self

    def paragraph(self, text: str) -> "AsciiDoc":
        self._parts.append(f"{text}\n\n")
        return self

    def labeled(self, term: str, value: str) -> "AsciiDoc":
        """Append one entry of a labeled list."""
        self._parts.append(f"{term}:: {value}\n")
        return self

    def block_title(self, title: str) -> "AsciiDoc":
        self._parts.append(f".{title}\n")
        return self

    def source(self, text: str, language: str = "json") -> "AsciiDoc":
        self._parts.append(f"[source,{language}]\n----\n{text}\n----\n\n")
        return self

    def table(self, header: list[str], rows: list[list[str]]) -> "AsciiDoc":
        lines = [
            f'[cols="{",".join("1" for _ in header)}",options="header"]',
            "|===",
            " ".join(f"|{_escape_cell(cell)}" for cell in header),
        ]
        for row in rows:
            lines.append(" ".join(f"|{_escape_cell(cell)}" for cell in row))
        lines.append("|===")
        self._parts.append("\n".join(lines) + "\n\n")
        return self

    def include(self, filename: str) -> "AsciiDoc":
        self._parts.append(f"include::{filename}[]\n\n")
        return self

    def to_file(self, output_dir: Path, filename: str) -> Path:
        """Write the document as UTF-8, replacing any existing file."""
        path = Path(output_dir) / filename
        path.write_text(str(self), encoding="utf-8", newline="\n")
        return path

    def __str__(self) -> str:
        return "".join(self._parts)


def asciidoc() -> AsciiDoc:
    """Start a new, empty document."""
    return AsciiDoc()
