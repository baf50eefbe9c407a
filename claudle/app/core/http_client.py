"""The process-wide httpx client used for LLM calls.

It lives between lifespan startup and shutdown. Providers built outside
that window (tests, scripts) open a short-lived client per request instead.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx

from claudle.app.core.config import settings
from claudle.app.core.logging import get_logger

logger = get_logger(__name__)

_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Return the lifespan-scoped client.

    Raises:
        RuntimeError: Outside the application lifespan
    """
    if _client is None:
        raise RuntimeError("HTTP client not initialized. Ensure lifespan context is active.")
    return _client


def build_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        connect=settings.httpx_connect_timeout,
        read=settings.httpx_read_timeout,
        write=settings.httpx_write_timeout,
        pool=settings.httpx_pool_timeout,
    )


def build_limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=settings.httpx_max_connections,
        max_keepalive_connections=settings.httpx_max_keepalive_connections,
        keepalive_expiry=settings.httpx_keepalive_expiry,
    )


@asynccontextmanager
async def init_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Open the shared client for the duration of the ``async with`` block."""
    global _client

    _client = httpx.AsyncClient(timeout=build_timeout(), limits=build_limits())
    logger.debug("Opened shared HTTP client")
    try:
        yield _client
    finally:
        client, _client = _client, None
        await client.aclose()
        logger.debug("Closed shared HTTP client")
