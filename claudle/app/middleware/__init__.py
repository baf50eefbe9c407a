"""Middleware package for the game server."""

from claudle.app.middleware.rate_limit import RateLimitMiddleware
from claudle.app.middleware.request_id import RequestIdMiddleware, get_request_id
from claudle.app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RequestIdMiddleware",
    "SecurityHeadersMiddleware",
    "get_request_id",
]
