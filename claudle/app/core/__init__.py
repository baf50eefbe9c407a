"""Core utilities for the game server."""

from claudle.app.core.config import DEFAULT_RATE_LIMITS, RouteLimitConfig, settings
from claudle.app.core.logging import get_logger, setup_logging

__all__ = [
    "DEFAULT_RATE_LIMITS",
    "RouteLimitConfig",
    "settings",
    "get_logger",
    "setup_logging",
]
