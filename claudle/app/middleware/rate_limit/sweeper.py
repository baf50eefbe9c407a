"""Periodic background sweep of expired rate limit records."""

import asyncio
from typing import Optional

from claudle.app.core.logging import get_logger
from claudle.app.middleware.rate_limit.limiter import FixedWindowRateLimiter

logger = get_logger(__name__)


class RateLimitSweeper:
    """Runs ``limiter.sweep()`` on an interval between start() and stop().

    Usage:
        sweeper = RateLimitSweeper(limiter, interval=300)
        await sweeper.start()
        ...
        await sweeper.stop()
    """

    def __init__(self, limiter: FixedWindowRateLimiter, interval: float = 300.0):
        self._limiter = limiter
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self, now: Optional[float] = None) -> int:
        return self._limiter.sweep(now)

    async def start(self) -> None:
        if self._task is not None:
            logger.debug("Rate limit sweeper already running")
            return

        self._stop_event.clear()
        self._task = asyncio.create_task(self._run())
        logger.info(f"Started rate limit sweeper (interval: {self._interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return

        self._stop_event.set()
        try:
            await asyncio.wait_for(self._task, timeout=5.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Stopped rate limit sweeper")

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                removed = self.run_once()
                if removed:
                    logger.info(f"Rate limit sweep removed {removed} records")
