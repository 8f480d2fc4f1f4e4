"""Request body size limit for the document endpoints."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

_MB = 1024 * 1024


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 when a document batch exceeds ``max_mb`` megabytes.

    A declared Content-Length is trusted only to reject early; the streamed
    body is always counted, so chunked uploads hit the same limit.
    """

    def __init__(self, app: ASGIApp, max_mb: int) -> None:
        super().__init__(app)
        self._limit = max_mb * _MB
        self._too_large = {"detail": f"Request body too large (max {max_mb} MB)"}

    def _declared_too_large(self, request: Request) -> bool:
        try:
            return int(request.headers.get("content-length", "0")) > self._limit
        except ValueError:
            return False

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._declared_too_large(request):
            return JSONResponse(status_code=413, content=self._too_large)

        if request.method == "POST":
            body = bytearray()
            async for chunk in request.stream():
                body.extend(chunk)
                if len(body) > self._limit:
                    return JSONResponse(status_code=413, content=self._too_large)
            # downstream handlers read the cached body
            request._body = bytes(body)  # noqa: SLF001

        return await call_next(request)
