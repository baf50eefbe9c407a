"""Rate limiting data models.

This module contains dataclasses for rate limit configuration, state and results.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

# Reported as "remaining" for routes without a configured limit. Display only.
UNLIMITED_REMAINING = 999


@dataclass(frozen=True)
class RouteLimit:
    """Request ceiling for one route within a fixed window."""
    max_requests: int
    window_minutes: int

    def __post_init__(self) -> None:
        if self.max_requests < 1 or self.window_minutes < 1:
            raise ValueError("max_requests and window_minutes must be at least 1")

    @property
    def window_seconds(self) -> int:
        return self.window_minutes * 60

    @property
    def retry_after(self) -> int:
        """Seconds a rejected client is told to wait."""
        return self.window_minutes * 60


@dataclass
class RateLimitRecord:
    """Counter for one (client, route, window) key."""
    count: int
    reset_time: float

    def is_expired(self, now: float) -> bool:
        return now > self.reset_time


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""
    allowed: bool
    remaining: int
    limit: Optional[int] = None
    reset_time: Optional[float] = None
    retry_after: Optional[int] = None


def build_route_limits(config: Mapping[str, Any]) -> dict[str, RouteLimit]:
    """Convert settings entries (anything with max_requests/window_minutes) to RouteLimits."""
    return {
        route: RouteLimit(max_requests=entry.max_requests, window_minutes=entry.window_minutes)
        for route, entry in config.items()
    }
