"""Middleware: request timing and body size limits."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

_ANALYZE_PATHS = ("/analyze", "/analyze/looks-like-package")
_MAX_BODY_ANALYZE = 10 * 1024 * 1024  # 10 MB for source uploads
_MAX_BODY_DEFAULT = 1 * 1024 * 1024  # 1 MB for everything else


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add X-Request-Duration header with processing time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies that exceed size limits.

    Analysis endpoints accept up to 10 MB of source; everything else is
    capped at 1 MB.  The Content-Length header is checked first, then the
    streamed body is counted so an oversized upload is never fully buffered.
    The consumed bytes are cached on ``request._body`` for downstream handlers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        limit = _MAX_BODY_ANALYZE if path.endswith(_ANALYZE_PATHS) else _MAX_BODY_DEFAULT
        limit_mb = limit // (1024 * 1024)

        try:
            content_length = int(request.headers.get("content-length", "0"))
        except ValueError:
            content_length = 0
        if content_length > limit:
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body too large (max {limit_mb} MB)"},
            )

        if request.method in ("POST", "PUT", "PATCH"):
            chunks: list[bytes] = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > limit:
                    return JSONResponse(
                        status_code=413,
                        content={"detail": f"Request body too large (max {limit_mb} MB)"},
                    )
                chunks.append(chunk)
            request._body = b"".join(chunks)  # noqa: SLF001

        return await call_next(request)
