"""Fixed-window request counting per client and route.

Every request for a configured route lands in the window
``floor(now / window_seconds)``. All requests in the same window share one
counter, so a client can burst up to twice the limit across a window
boundary. That approximation is accepted in exchange for O(1) state per
key and no timers.
"""

import math
import random
import time
from typing import Mapping, Optional

from claudle.app.core.logging import get_logger
from claudle.app.middleware.rate_limit.models import (
    RateLimitRecord,
    RateLimitResult,
    RouteLimit,
    UNLIMITED_REMAINING,
)
from claudle.app.middleware.rate_limit.store import InMemoryRateLimitStore, RateLimitStore

logger = get_logger(__name__)


class FixedWindowRateLimiter:
    """Per-route fixed-window limiter.

    Routes missing from ``limits`` are always allowed (fail-open). The
    limiter never raises for any client or route value.

    Args:
        limits: Route name to RouteLimit
        store: Counter storage; a fresh in-memory store when omitted
        cleanup_probability: Chance per call of sweeping expired records
        rng: Random source for the cleanup draw
    """

    def __init__(
        self,
        limits: Mapping[str, RouteLimit],
        store: Optional[RateLimitStore] = None,
        cleanup_probability: float = 0.01,
        rng: Optional[random.Random] = None,
    ):
        self.limits = dict(limits)
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.cleanup_probability = cleanup_probability
        self._rng = rng or random.Random()

    def get_limit(self, route: str) -> Optional[RouteLimit]:
        return self.limits.get(route)

    @staticmethod
    def window_key(client_id: str, route: str, limit: RouteLimit, now: float) -> str:
        window_seconds = limit.window_seconds
        window_start = math.floor(now / window_seconds) * window_seconds
        return f"{client_id}-{route}-{window_start}"

    def check_limit(
        self,
        client_id: str,
        route: str,
        now: Optional[float] = None,
    ) -> RateLimitResult:
        """Count one request and decide whether it may proceed.

        Args:
            client_id: Client identity, usually the IP address
            route: Route name as configured
            now: Epoch seconds; defaults to the current time

        Returns:
            RateLimitResult with the allow decision and remaining count
        """
        if now is None:
            now = time.time()

        self._maybe_sweep(now)

        limit = self.limits.get(route)
        if limit is None:
            return RateLimitResult(allowed=True, remaining=UNLIMITED_REMAINING)

        key = self.window_key(client_id, route, limit, now)

        with self.store.transaction():
            record = self.store.get(key)

            if record is None or record.is_expired(now):
                record = RateLimitRecord(count=1, reset_time=now + limit.window_seconds)
                self.store.put(key, record)
                return RateLimitResult(
                    allowed=True,
                    remaining=limit.max_requests - 1,
                    limit=limit.max_requests,
                    reset_time=record.reset_time,
                )

            if record.count >= limit.max_requests:
                return RateLimitResult(
                    allowed=False,
                    remaining=0,
                    limit=limit.max_requests,
                    reset_time=record.reset_time,
                    retry_after=limit.retry_after,
                )

            record.count += 1
            self.store.put(key, record)
            return RateLimitResult(
                allowed=True,
                remaining=limit.max_requests - record.count,
                limit=limit.max_requests,
                reset_time=record.reset_time,
            )

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop expired records now. Returns the number removed."""
        removed = self.store.sweep(time.time() if now is None else now)
        if removed:
            logger.debug(f"Swept {removed} expired rate limit records")
        return removed

    def _maybe_sweep(self, now: float) -> None:
        if self.cleanup_probability > 0 and self._rng.random() < self.cleanup_probability:
            self.sweep(now)
