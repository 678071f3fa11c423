"""Security headers middleware.

Learn: Every response gets the standard hardening headers. Responses from
the routes that hand out credentials (login returns an access and a
refresh token, refresh returns an access token) are also marked
Cache-Control: no-store so no proxy or browser cache keeps a token.
HSTS is only sent when the request itself arrived over HTTPS.
"""

from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}
HSTS_VALUE = "max-age=31536000; includeSubDomains"
TOKEN_PATHS = ("/api/login", "/api/refresh")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers, and no-store on token-issuing routes."""

    def __init__(self, app: ASGIApp, token_paths: Iterable[str] = TOKEN_PATHS):
        super().__init__(app)
        self.token_paths = frozenset(token_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if request.url.path in self.token_paths:
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = HSTS_VALUE
        return response
