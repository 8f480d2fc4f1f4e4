"""FastAPI application: ``/health``, ``/validate`` and ``/compile``."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from mdcompose import __version__
from mdcompose.api.deps import init_document_service, reset_document_service
from mdcompose.api.middleware import RequestBodyLimitMiddleware
from mdcompose.api.routers import documents
from mdcompose.api.schemas import HealthResponse
from mdcompose.service.documents import DocumentService
from mdcompose.settings import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _service_lifespan(app: FastAPI) -> AsyncGenerator[None]:
    init_document_service(DocumentService(max_concurrency=app.state.settings.max_concurrency))
    try:
        yield
    finally:
        reset_document_service()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="mdcompose",
        description="Validates and compiles markdown templates with insert directives.",
        version=__version__,
        lifespan=_service_lifespan,
    )
    app.state.settings = settings
    app.add_middleware(RequestBodyLimitMiddleware, max_mb=settings.api_max_request_mb)
    app.include_router(documents.router, tags=["documents"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Serve the API with uvicorn, configured from ``MDCOMPOSE_*`` settings."""
    settings = Settings()
    logging.basicConfig(level=settings.log_level)
    logger.info(
        "mdcompose API v%s listening on %s:%d",
        __version__, settings.api_server_host, settings.effective_port,
    )
    uvicorn.run(
        "mdcompose.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
