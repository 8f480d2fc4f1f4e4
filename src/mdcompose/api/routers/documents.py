"""Stateless endpoints: validate and compile a batch of documents."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from mdcompose.api.deps import get_document_service
from mdcompose.api.schemas import CompileResponse, DocumentsRequest, ValidateResponse
from mdcompose.service.documents import DocumentService

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate_documents(
    body: DocumentsRequest,
    service: DocumentService = Depends(get_document_service),  # noqa: B008
) -> ValidateResponse:
    """Validate every template in the batch against the batch's insertable files."""
    return ValidateResponse(result=service.validate(body.documents))


@router.post("/compile", response_model=CompileResponse)
async def compile_documents(
    body: DocumentsRequest,
    service: DocumentService = Depends(get_document_service),  # noqa: B008
) -> CompileResponse:
    """Compile every template in the batch; plain files pass through."""
    outcome = service.compile(body.documents)
    return CompileResponse(documents=outcome.documents, validation=outcome.validation)
