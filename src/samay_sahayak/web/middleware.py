"""HTTP middleware: CORS, security headers and request logging."""

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from .. import config

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach the fixed security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path and origin of each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.info(
            "%s %s - Origin: %s",
            request.method,
            request.url.path,
            request.headers.get("origin"),
        )
        return await call_next(request)


def setup_cors(app: FastAPI, origins: list[str] | None = None) -> None:
    """Restrict cross-origin access to the allowlisted origins."""
    origins = origins if origins is not None else config.ALLOWED_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )
    logger.info("CORS configured for origins: %s", origins)


def setup_middleware(app: FastAPI, origins: list[str] | None = None) -> None:
    """Install all middleware; CORS is added last so it runs outermost."""
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    setup_cors(app, origins)
