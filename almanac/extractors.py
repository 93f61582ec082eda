"""Front matter extraction for Almanac.

A content file may start with a ``---`` line followed by a YAML block closed by
the next ``---`` line. The block becomes a FrontMatter mapping and the rest of
the file is the Markdown body.

Key names:
- parse_frontmatter: Split raw text into (FrontMatter, body).
- FrontMatter: Read-only mapping with typed accessors that apply defaults.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, Union

import yaml

from .errors import InvalidDateError, MetadataParseError

FRONTMATTER_FENCE = "---"
FRONTMATTER_OPEN = FRONTMATTER_FENCE + "\n"
DATE_FORMAT = "%Y-%m-%d"

MetadataValue = Union[str, int, date, list[str]]


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split raw text into the front matter block and the body.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (YAML block or None when there is no front matter, body).
    """
    if not text.startswith(FRONTMATTER_OPEN):
        return None, text
    rest = text[len(FRONTMATTER_OPEN) :]
    offset = 0
    for line in rest.splitlines(keepends=True):
        # The closing fence may directly follow the opener or end the file.
        if line.rstrip("\r\n") == FRONTMATTER_FENCE:
            return rest[:offset], rest[offset + len(line) :]
        offset += len(line)
    return rest, ""


def parse_frontmatter(
    text: str, source_path: Path | None = None
) -> tuple[FrontMatter, str]:
    """Extract YAML front matter from content.

    Args:
        text: Raw file content.
        source_path: File the text came from, used in error messages.

    Returns:
        Tuple of (front matter, remaining body).

    Raises:
        MetadataParseError: If the block is not valid YAML or not a mapping.
    """
    source = source_path or Path("<string>")
    block, body = split_frontmatter(text)
    if block is None:
        return FrontMatter({}, source), body
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise MetadataParseError(
            source, f"Invalid front matter: {exc}", exc
        ) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MetadataParseError(
            source,
            f"Front matter must be a mapping, got {type(data).__name__}",
        )
    return FrontMatter(data, source), body


def _coerce(value: Any) -> MetadataValue:
    # bool is an int subclass; YAML true/false read as text like other scalars
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (str, int, date)):
        return value
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)


class FrontMatter(Mapping[str, MetadataValue]):
    """String-keyed metadata parsed from a front matter block.

    Values are normalised to str, int, date or list of str. Use the typed
    accessors rather than indexing when a default applies.

    Attributes:
        source_path: File the metadata came from.
    """

    def __init__(self, data: Mapping[Any, Any], source_path: Path):
        self._data = {str(k): _coerce(v) for k, v in data.items() if v is not None}
        self.source_path = source_path

    def __getitem__(self, key: str) -> MetadataValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get_str(self, key: str, default: str | None = None) -> str | None:
        """Return a value as text, or default when absent.

        Lists are joined with ", "; dates use YYYY-MM-DD.
        """
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, list):
            return ", ".join(value)
        if isinstance(value, date):
            return value.strftime(DATE_FORMAT)
        return str(value)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, int):
            return value
        try:
            return int(str(value))
        except ValueError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return a list value; a single scalar becomes a one-item list."""
        value = self._data.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [self.get_str(key) or ""]

    def get_date(self, key: str, required: bool = False) -> date | None:
        """Return a calendar date from a YAML date or a YYYY-MM-DD string.

        Args:
            key: Metadata key to read.
            required: Raise when the key is missing instead of returning None.

        Raises:
            InvalidDateError: If the value cannot be parsed, or is missing and
                required.
        """
        value = self._data.get(key)
        if value is None:
            if required:
                raise InvalidDateError(self.source_path, f"Missing '{key}' in front matter")
            return None
        if isinstance(value, date):
            return value
        text = str(value).strip()
        try:
            return datetime.strptime(text, DATE_FORMAT).date()
        except ValueError as exc:
            raise InvalidDateError(
                self.source_path,
                f"Invalid {key} '{text}': expected YYYY-MM-DD",
                exc,
            ) from exc

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"FrontMatter({self._data!r})"
