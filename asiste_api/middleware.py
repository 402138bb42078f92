"""Middleware — request IDs and access logging, security headers, JSON 500s."""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

# Set per request; read by the exception handlers when they log
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Resource-Policy": "same-site",
}
HSTS_HEADER = ("Strict-Transport-Security", "max-age=15552000; includeSubDomains")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log one access line for it.

    The ID comes from the ``X-Request-ID`` header when the client sends one,
    otherwise a UUID4 is generated. It is echoed back on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(rid)
        started = time.perf_counter()

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        logger.info(
            "%s %s %d %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            rid,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the standard security headers to every response.

    HSTS is only sent when ``hsts`` is enabled, so local HTTP development
    is not pinned to HTTPS.
    """

    def __init__(self, app: ASGIApp, hsts: bool = False) -> None:
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS)
        if hsts:
            self.headers.update([HSTS_HEADER])

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn an exception no handler claimed into a JSON 500.

    Sits inside the CORS, request-ID and security-header layers so the
    error response still carries their headers. The exception text is only
    returned when ``expose_detail`` is set (development).
    """

    def __init__(self, app: ASGIApp, expose_detail: bool = False) -> None:
        super().__init__(app)
        self.expose_detail = expose_detail

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled error on %s %s (request %s)",
                request.method,
                request.url.path,
                request_id_var.get(),
            )
            detail = str(exc) if self.expose_detail else "Internal server error"
            return JSONResponse(
                status_code=500,
                content={"error": "Something went wrong!", "message": detail},
            )
