"""LLM providers package.

This package provides:
- Base provider interface (BaseProvider)
- Anthropic Messages API provider (AnthropicProvider)
- Offline provider for development and tests (MockProvider)
- Retry mechanism (RetryPolicy, with_retry)
"""

from claudle.app.providers.anthropic import AnthropicProvider
from claudle.app.providers.base import BaseProvider
from claudle.app.providers.factory import create_provider
from claudle.app.providers.mock import MockProvider
from claudle.app.providers.retry import RetryPolicy, with_retry

__all__ = [
    "AnthropicProvider",
    "BaseProvider",
    "MockProvider",
    "create_provider",
    "RetryPolicy",
    "with_retry",
]
