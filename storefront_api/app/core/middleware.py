"""
HTTP middleware.

``install_middleware`` adds the optional middleware named in
``Settings.middleware`` and, unconditionally, the exception handling
middleware that turns any unexpected error into a 500 response.
"""

import logging
import time
from typing import Callable, Iterable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import describe_exception


logger = logging.getLogger(__name__)


CONTENT_SECURITY_POLICY = ";".join(
    [
        "default-src 'self'",
        "base-uri 'self'",
        "font-src 'self' https: data:",
        "form-action 'self'",
        "frame-ancestors 'self'",
        "img-src 'self' data:",
        "object-src 'none'",
        "script-src 'self'",
        "script-src-attr 'none'",
        "style-src 'self' https: 'unsafe-inline'",
        "upgrade-insecure-requests",
    ]
)

# The header set helmet sends by default.
SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "Origin-Agent-Cluster": "?1",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-Download-Options": "noopen",
    "X-XSS-Protection": "0",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add a fixed set of security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration of each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Convert any exception escaping a route into a 500 response.

    The payload carries the exception type and message unredacted.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": describe_exception(exc)})


def install_middleware(app: FastAPI, names: Iterable[str]) -> None:
    """Install the named optional middleware plus exception handling.

    Starlette wraps later additions around earlier ones, so exception
    handling is added first to sit closest to the routes and the
    optional middleware still see (and decorate) its 500 responses.
    """
    app.add_middleware(ExceptionHandlingMiddleware)
    for name in names:
        if name == "security_headers":
            app.add_middleware(SecurityHeadersMiddleware)
        elif name == "request_logging":
            app.add_middleware(RequestLoggingMiddleware)
        elif name == "cors":
            app.add_middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["*"],
                allow_headers=["*"],
            )
        else:
            raise ValueError(f"Unknown middleware {name!r}")
        logger.debug("Enabled middleware %s", name)
