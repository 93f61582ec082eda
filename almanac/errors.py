"""Exceptions raised while publishing or scaffolding a journal.

Every fatal publish error derives from BuildError, which carries the file that
caused it so the CLI can point at it. Nothing is retried and nothing is
isolated per file: the first BuildError aborts the run.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Error during publishing with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class MetadataParseError(BuildError):
    """Front matter is not valid YAML or not a key/value mapping."""


class InvalidDateError(BuildError):
    """A post has no date or a date that cannot be parsed."""


class MissingTemplateError(BuildError):
    """A template file required by a page renderer does not exist."""


class ConfigError(BuildError):
    """almanac.yaml is not valid YAML or holds an unusable value."""


class PostExistsError(Exception):
    """Raised when scaffolding a post whose file already exists."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Post already exists at {path}")
