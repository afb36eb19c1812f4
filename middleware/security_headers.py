"""Security Headers Middleware

Adds security headers to HTTP responses served to the storefront browser
client. Every response is JSON, so the Content-Security-Policy is the
restrictive API policy.

Toggled with SECURITY_HEADERS_ENABLED; HSTS separately with HSTS_ENABLED
(only when the site is served over HTTPS).
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses."""

    CSP_DIRECTIVES = [
        "default-src 'none'",
        "frame-ancestors 'none'",
        "base-uri 'none'",
        "form-action 'none'",
    ]

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if not config.SECURITY_HEADERS_ENABLED:
            return response

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "same-origin"
        response.headers["Content-Security-Policy"] = "; ".join(self.CSP_DIRECTIVES)

        # Responses carry session-bound cart and order data
        response.headers.setdefault("Cache-Control", "no-store")

        if config.HSTS_ENABLED:
            # 1 year
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
