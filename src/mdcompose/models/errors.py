"""Validation issue models with template line tracking."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class ValidationIssue(BaseModel):
    """A single validation error or warning, located in a template line."""

    model_config = ConfigDict(frozen=True)

    message: str
    directive_path: str | None = None
    source_file: str | None = None
    line_number: int | None = None
    source_context: str | None = None

    @model_validator(mode="after")
    def _line_has_context(self) -> ValidationIssue:
        # UIs render the offending line without re-reading the file
        if self.line_number is not None and self.source_context is None:
            raise ValueError("an issue with a line_number must carry its source_context")
        return self

    def is_from_file(self, file_name: str | None) -> bool:
        """True if the issue belongs to *file_name*.

        No filter (``None``/empty) and issues without a source file always match.
        """
        if not file_name or not self.source_file:
            return True
        return self.source_file.casefold() == file_name.casefold()


class ValidationResult(BaseModel):
    """Result of validating a set of templates against their sources."""

    model_config = ConfigDict(frozen=True)

    valid_files_count: int = 0
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @computed_field  # type: ignore[prop-decorator]
    @property
    def invalid_files_count(self) -> int:
        return len({issue.source_file for issue in self.errors})

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_files_count(self) -> int:
        return len({issue.source_file for issue in self.warnings})

    def errors_for_file(self, file_name: str | None) -> list[ValidationIssue]:
        """Errors reported against *file_name* (all errors when no name is given)."""
        return [issue for issue in self.errors if issue.is_from_file(file_name)]
