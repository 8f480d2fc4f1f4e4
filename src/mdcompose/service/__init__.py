"""Service layer shared by the CLI and REST API."""

from mdcompose.service.documents import (
    CombineResult,
    CompileOutcome,
    DocumentService,
    LoadResult,
)

__all__ = [
    "CombineResult",
    "CompileOutcome",
    "DocumentService",
    "LoadResult",
]
