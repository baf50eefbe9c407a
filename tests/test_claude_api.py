"""Tests for the LLM-backed /api/claude routes."""

import random
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from claudle.app.core.config import settings
from claudle.app.exceptions import MissingApiKeyError, ProviderError
from claudle.app.main import create_app
from claudle.app.providers.mock import MockProvider, MOCK_WORDS
from claudle.app.services.fallbacks import (
    COACHING_DISABLED_MESSAGE,
    FALLBACK_COACHING,
    FALLBACK_GAME_OVER,
    FALLBACK_HINTS,
)
from claudle.app.services.game_master import GameMaster
from claudle.app.game.types import Personality, get_theme


@pytest.fixture
def failing_provider():
    provider = MockProvider()
    provider.complete = AsyncMock(side_effect=ProviderError("provider down"))
    return provider


@pytest.fixture
def failing_client(limiter, failing_provider):
    app = create_app(rate_limiter=limiter, game_master=GameMaster(failing_provider))
    return TestClient(app)


def make_client(limiter, replies):
    provider = MockProvider(replies=replies, rng=random.Random(1))
    app = create_app(rate_limiter=limiter, game_master=GameMaster(provider, max_word_attempts=3))
    return TestClient(app), provider


class TestGenerateWord:
    def test_returns_word_for_theme(self, client):
        response = client.post("/api/claude/generate-word", json={"theme": "space"})
        assert response.status_code == 200
        data = response.json()
        assert data["word"] in MOCK_WORDS
        assert data["theme"] == "Cosmic Journey"
        assert data["difficulty"] == "Medium"
        assert "fallback" not in data

    def test_defaults_to_original_theme(self, client):
        response = client.post("/api/claude/generate-word", json={})
        assert response.status_code == 200
        assert response.json()["theme"] == "Classic Words"

    def test_model_reply_is_normalized(self, limiter):
        client, _ = make_client(limiter, ["  orbit \n"])
        response = client.post("/api/claude/generate-word", json={"theme": "space"})
        assert response.json()["word"] == "ORBIT"

    def test_invalid_theme(self, client):
        response = client.post("/api/claude/generate-word", json={"theme": "klingon"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid theme specified"}

    def test_used_word_is_retried(self, limiter):
        client, provider = make_client(limiter, ["CRANE", "SLATE"])
        response = client.post(
            "/api/claude/generate-word",
            json={"theme": "original", "usedWords": ["crane"]},
        )
        assert response.json()["word"] == "SLATE"
        assert len(provider.requests) == 2
        assert "CRANE" in provider.requests[0]["messages"][0]["content"]

    def test_every_attempt_used_falls_back(self, limiter):
        client, provider = make_client(limiter, ["CRANE", "CRANE", "CRANE"])
        response = client.post(
            "/api/claude/generate-word",
            json={"theme": "space", "usedWords": ["CRANE"]},
        )
        data = response.json()
        assert data == {
            "word": "AUDIO",
            "theme": "Classic Words",
            "difficulty": "Medium",
            "fallback": True,
        }
        assert len(provider.requests) == 3

    def test_malformed_word_falls_back(self, limiter):
        client, _ = make_client(limiter, ["Sure! Here is a word: ORBIT"])
        data = client.post("/api/claude/generate-word", json={"theme": "space"}).json()
        assert data["word"] == "AUDIO"
        assert data["fallback"] is True

    def test_provider_error_falls_back(self, failing_client):
        response = failing_client.post("/api/claude/generate-word", json={"theme": "cooking"})
        assert response.status_code == 200
        assert response.json()["word"] == "AUDIO"
        assert response.json()["fallback"] is True


class TestHint:
    def test_hint(self, client, mock_provider):
        response = client.post(
            "/api/claude/get-hint",
            json={"targetWord": "AUDIO", "guesses": ["CRANE"], "personality": "kent"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["hint"] == mock_provider.default_reply
        assert data["personality"] == "kent"
        assert data["guessCount"] == 1
        assert data["theme"] == "Classic Words"
        assert mock_provider.requests[0]["max_tokens"] == 200

    def test_empty_guess_list_is_allowed(self, client):
        response = client.post("/api/claude/get-hint", json={"targetWord": "AUDIO", "guesses": []})
        assert response.status_code == 200
        assert response.json()["guessCount"] == 0

    @pytest.mark.parametrize("body", [{}, {"targetWord": "AUDIO"}, {"guesses": ["CRANE"]}])
    def test_missing_parameters(self, client, body):
        response = client.post("/api/claude/get-hint", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameters"}

    @pytest.mark.parametrize("personality", [Personality.LASSO, Personality.KENT])
    def test_fallback_matches_personality(self, failing_client, personality):
        response = failing_client.post(
            "/api/claude/get-hint",
            json={"targetWord": "AUDIO", "guesses": ["CRANE"], "personality": personality.value},
        )
        data = response.json()
        assert data["hint"] == FALLBACK_HINTS[personality]
        assert data["fallback"] is True

    def test_unknown_personality_rejected(self, client):
        response = client.post(
            "/api/claude/get-hint",
            json={"targetWord": "AUDIO", "guesses": [], "personality": "roy"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


class TestCoaching:
    BODY = {
        "targetWord": "AUDIO",
        "guesses": ["CRANE"],
        "currentGuess": "ADIEU",
        "personality": "lasso",
    }

    def test_disabled_by_default(self, client, mock_provider):
        with patch.object(settings, "enable_interactive_coaching", False):
            response = client.post("/api/claude/coaching", json=self.BODY)
        assert response.status_code == 200
        assert response.json() == {"coaching": COACHING_DISABLED_MESSAGE, "enabled": False}
        assert mock_provider.requests == []

    def test_enabled(self, client):
        with patch.object(settings, "enable_interactive_coaching", True):
            response = client.post("/api/claude/coaching", json=self.BODY)
        data = response.json()
        assert data["enabled"] is True
        assert data["guessCount"] == 2
        assert data["personality"] == "lasso"

    def test_enabled_requires_current_guess(self, client):
        body = {key: value for key, value in self.BODY.items() if key != "currentGuess"}
        with patch.object(settings, "enable_interactive_coaching", True):
            response = client.post("/api/claude/coaching", json=body)
        assert response.status_code == 400

    def test_fallback(self, failing_client):
        body = dict(self.BODY, personality="kent")
        with patch.object(settings, "enable_interactive_coaching", True):
            data = failing_client.post("/api/claude/coaching", json=body).json()
        assert data["coaching"] == FALLBACK_COACHING[Personality.KENT]
        assert data["fallback"] is True


class TestGameOver:
    def test_game_over(self, client):
        response = client.post(
            "/api/claude/game-over",
            json={"targetWord": "AUDIO", "guesses": ["CRANE", "AUDIO"], "won": True},
        )
        data = response.json()
        assert response.status_code == 200
        assert data["won"] is True
        assert data["guessCount"] == 2
        assert data["targetWord"] == "AUDIO"
        assert data["personality"] == "lasso"

    def test_won_is_required(self, client):
        response = client.post(
            "/api/claude/game-over",
            json={"targetWord": "AUDIO", "guesses": ["CRANE"]},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameters"}

    @pytest.mark.parametrize("won", [True, False])
    def test_fallback(self, failing_client, won):
        data = failing_client.post(
            "/api/claude/game-over",
            json={"targetWord": "AUDIO", "guesses": ["CRANE"], "won": won, "personality": "kent"},
        ).json()
        assert data["feedback"] == FALLBACK_GAME_OVER[Personality.KENT][won]
        assert data["fallback"] is True


class TestGameMasterFailures:
    """Failures that should turn into fallback replies instead of 5xx."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            MissingApiKeyError(),
            httpx.ConnectError("refused"),
            KeyError("content"),
        ],
    )
    async def test_hint_falls_back(self, error):
        provider = MockProvider()
        provider.complete = AsyncMock(side_effect=error)
        game_master = GameMaster(provider)

        reply = await game_master.get_hint(get_theme("original"), Personality.LASSO, "AUDIO", [])
        assert reply.fallback is True
        assert reply.text == FALLBACK_HINTS[Personality.LASSO]

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        provider = MockProvider()
        provider.complete = AsyncMock(side_effect=RuntimeError("bug"))
        game_master = GameMaster(provider)

        with pytest.raises(RuntimeError):
            await game_master.get_hint(get_theme("original"), Personality.LASSO, "AUDIO", [])
