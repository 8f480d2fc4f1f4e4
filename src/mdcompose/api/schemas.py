"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mdcompose.models.document import Document
from mdcompose.models.errors import ValidationResult


class DocumentsRequest(BaseModel):
    """Request body for POST /validate and POST /compile."""

    documents: list[Document] = Field(
        description="Templates (.mdext), fragments (.mdsrc) and plain files (.md)"
    )


class ValidateResponse(BaseModel):
    """Response body for POST /validate."""

    result: ValidationResult


class CompileResponse(BaseModel):
    """Response body for POST /compile.

    Documents are always returned; ``validation`` tells the caller whether
    to trust them.
    """

    documents: list[Document]
    validation: ValidationResult


class HealthResponse(BaseModel):
    status: str
    version: str
