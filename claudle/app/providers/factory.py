"""Provider selection based on configuration."""

from typing import Optional

import httpx

from claudle.app.core.config import settings
from claudle.app.core.logging import get_logger
from claudle.app.providers.anthropic import AnthropicProvider
from claudle.app.providers.base import BaseProvider
from claudle.app.providers.mock import MockProvider

logger = get_logger(__name__)


def create_provider(http_client: Optional[httpx.AsyncClient] = None) -> BaseProvider:
    """Build the configured provider.

    Returns a MockProvider when ``settings.mock_provider`` is set, otherwise
    an AnthropicProvider sharing ``http_client``.
    """
    if settings.mock_provider:
        logger.info("Using mock LLM provider")
        return MockProvider()

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY not set - LLM routes will serve fallback replies")

    return AnthropicProvider(
        base_url=settings.anthropic_base_url,
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        http_client=http_client,
        timeout=settings.anthropic_timeout,
        api_version=settings.anthropic_version,
    )
