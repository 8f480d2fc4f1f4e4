"""Pydantic domain models for mdcompose."""

from mdcompose.models.document import Document, DocumentSet, partition
from mdcompose.models.errors import ValidationIssue, ValidationResult
from mdcompose.paths import DocumentKind

__all__ = [
    "Document",
    "DocumentKind",
    "DocumentSet",
    "ValidationIssue",
    "ValidationResult",
    "partition",
]
