"""Exception hierarchy for mdcompose."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdcompose.models.errors import ValidationResult


class MdComposeError(Exception):
    """Base class for errors raised by mdcompose."""


class CollectionCancelledError(MdComposeError):
    """Raised when document collection is cancelled before all reads were scheduled."""

    def __init__(self, root: str, scheduled: int) -> None:
        super().__init__(f"Collection of '{root}' cancelled after scheduling {scheduled} reads")
        self.root = root
        self.scheduled = scheduled


class DocumentWriteError(MdComposeError):
    """Raised when a compiled document cannot be written to disk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to write file: {path} ({reason})")
        self.path = path


class NoTemplatesError(MdComposeError):
    """Raised when an input directory contains no ``.mdext`` templates."""

    def __init__(self, root: str) -> None:
        super().__init__(f"No markdown template files found in: {root}")
        self.root = root


class TemplateValidationError(MdComposeError):
    """Raised when templates fail validation and the caller asked for a hard stop."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(
            f"Validation failed with {len(result.errors)} errors "
            f"in {result.invalid_files_count} files"
        )
        self.result = result
