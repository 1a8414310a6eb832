import re

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.config import Settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser hardening headers to every response."""

    def __init__(self, app, hsts: bool = False):
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'self'"
        # Only meaningful when served over HTTPS
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def cors_origin_rules(origins: list[str]) -> tuple[list[str], str | None]:
    """Split configured origins into exact entries and a wildcard-subdomain regex.

    ``*.example.com`` matches any origin ending in ``.example.com``.
    """
    exact = []
    patterns = []
    for origin in origins:
        if origin.startswith("*."):
            patterns.append(".*" + re.escape(origin[1:]))
        else:
            exact.append(origin)
    return exact, "|".join(patterns) or None


def add_middleware(app: FastAPI, settings: Settings) -> None:
    # Starlette runs the last added middleware first; CORS must see preflights
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.COOKIE_SECURE)

    exact, regex = cors_origin_rules(settings.cors_allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=exact,
        allow_origin_regex=regex,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
        expose_headers=settings.cors_expose_headers,
        max_age=settings.CORS_MAX_AGE,
    )
