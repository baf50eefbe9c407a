"""Rate limiting middleware for the game server.

Each protected LLM route has its own fixed-window request ceiling per
client IP, so a single client can't run up provider costs.
"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from claudle.app.core.logging import get_log_context, get_logger
from claudle.app.exceptions import RateLimitExceededError

# Re-export models
from claudle.app.middleware.rate_limit.models import (
    RateLimitRecord,
    RateLimitResult,
    RouteLimit,
    UNLIMITED_REMAINING,
    build_route_limits,
)

# Re-export limiter components
from claudle.app.middleware.rate_limit.limiter import FixedWindowRateLimiter
from claudle.app.middleware.rate_limit.store import InMemoryRateLimitStore, RateLimitStore
from claudle.app.middleware.rate_limit.sweeper import RateLimitSweeper

logger = get_logger(__name__)

# Used when a rejection somehow has no configured route behind it
DEFAULT_RETRY_AFTER = 3600

__all__ = [
    # Models
    "RateLimitRecord",
    "RateLimitResult",
    "RouteLimit",
    "UNLIMITED_REMAINING",
    "build_route_limits",
    # Storage and limiter
    "RateLimitStore",
    "InMemoryRateLimitStore",
    "FixedWindowRateLimiter",
    "RateLimitSweeper",
    # Middleware
    "RateLimitMiddleware",
    "get_client_ip",
]


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Identify the client for rate limiting.

    Uses the socket peer. Behind a reverse proxy that overwrites them,
    ``trust_proxy_headers`` switches to the first X-Forwarded-For hop, then
    X-Real-IP, falling back to the peer.
    """
    if trust_proxy_headers:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first

        real_ip = request.headers.get("X-Real-IP")
        if real_ip and real_ip.strip():
            return real_ip.strip()

    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce per-route limits on LLM-backed requests.

    Only paths under ``path_prefix`` are counted, and CORS preflights are
    never counted. Rejected requests get a 429 with Retry-After set to the
    route's window length.
    """

    def __init__(
        self,
        app,
        limiter: FixedWindowRateLimiter,
        path_prefix: str = "/api/claude",
        trust_proxy_headers: bool = False,
    ):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix
        self.trust_proxy_headers = trust_proxy_headers

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with rate limiting."""
        path = request.url.path
        if request.method == "OPTIONS" or not path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = get_client_ip(request, self.trust_proxy_headers)
        result = self.limiter.check_limit(client_ip, path)

        if not result.allowed:
            limit = self.limiter.get_limit(path)
            error = RateLimitExceededError(path, limit.retry_after if limit else DEFAULT_RETRY_AFTER)
            logger.warning(
                "Rate limit exceeded",
                extra=get_log_context(
                    request_id=getattr(request.state, "request_id", None),
                    client_ip=client_ip,
                    route=path,
                    retry_after=error.retry_after,
                ),
            )
            return _rate_limited_response(error)

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        if result.limit is not None:
            response.headers["X-RateLimit-Limit"] = str(result.limit)
        return response


def _rate_limited_response(error: RateLimitExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": "Rate limit exceeded",
            "message": error.message,
            "retryAfter": error.retry_after,
        },
        headers={
            "Retry-After": str(error.retry_after),
            "X-RateLimit-Remaining": "0",
        },
    )
