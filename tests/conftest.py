"""Shared fixtures for the game server tests."""

import random

import pytest
from fastapi.testclient import TestClient

from claudle.app.main import create_app
from claudle.app.middleware.rate_limit import FixedWindowRateLimiter, RouteLimit
from claudle.app.providers.mock import MockProvider
from claudle.app.services.game_master import GameMaster

HINT_ROUTE = "/api/claude/get-hint"


@pytest.fixture
def route_limits():
    return {
        "/api/claude/generate-word": RouteLimit(max_requests=5, window_minutes=60 * 24),
        HINT_ROUTE: RouteLimit(max_requests=3, window_minutes=60),
        "/api/claude/coaching": RouteLimit(max_requests=100, window_minutes=60),
        "/api/claude/game-over": RouteLimit(max_requests=10, window_minutes=60),
    }


@pytest.fixture
def limiter(route_limits):
    """Limiter with probabilistic cleanup switched off."""
    return FixedWindowRateLimiter(route_limits, cleanup_probability=0.0)


@pytest.fixture
def mock_provider():
    return MockProvider(rng=random.Random(7))


@pytest.fixture
def game_master(mock_provider):
    return GameMaster(mock_provider, max_word_attempts=3)


@pytest.fixture
def app(limiter, game_master):
    return create_app(rate_limiter=limiter, game_master=game_master)


@pytest.fixture
def client(app):
    return TestClient(app)
