"""LLM-backed word selection and commentary.

Every operation degrades to a canned reply when the provider is missing,
failing or returns something unusable, so the game stays playable
without the model.
"""

from dataclasses import dataclass
from typing import Sequence

import httpx

from claudle.app.core.config import settings
from claudle.app.core.logging import get_logger
from claudle.app.exceptions import ProviderError
from claudle.app.game.evaluator import is_valid_word
from claudle.app.game.types import DEFAULT_THEME, THEMES, Personality, Theme
from claudle.app.providers.base import BaseProvider
from claudle.app.services import prompts
from claudle.app.services.fallbacks import (
    FALLBACK_COACHING,
    FALLBACK_GAME_OVER,
    FALLBACK_HINTS,
)

logger = get_logger(__name__)

# Errors that mean "use the fallback" rather than "fail the request"
PROVIDER_FAILURES = (ProviderError, httpx.HTTPError, ValueError, KeyError)

WORD_MAX_TOKENS = 50
HINT_MAX_TOKENS = 200
COMMENTARY_MAX_TOKENS = 150


@dataclass
class WordSelection:
    word: str
    theme: Theme
    fallback: bool = False


@dataclass
class Commentary:
    text: str
    fallback: bool = False


class GameMaster:
    """Runs the prompts for one provider.

    Args:
        provider: LLM provider used for every call
        max_word_attempts: How many times to ask again when the model
            repeats an already used word
    """

    def __init__(self, provider: BaseProvider, max_word_attempts: int | None = None):
        self.provider = provider
        self.max_word_attempts = max_word_attempts or settings.word_generation_max_attempts

    async def generate_word(self, theme: Theme, used_words: Sequence[str] = ()) -> WordSelection:
        """Ask the model for a fresh five-letter word for ``theme``.

        Falls back to the classic theme's word when the provider fails, the
        reply is not five letters, or every attempt repeats a used word.
        """
        used = {word.upper() for word in used_words}
        prompt = prompts.word_prompt(theme, sorted(used))

        try:
            for attempt in range(1, self.max_word_attempts + 1):
                word = (await self.provider.complete(prompt, WORD_MAX_TOKENS)).upper()
                if not is_valid_word(word):
                    raise ProviderError(f"Invalid word generated: {word!r}")
                if word not in used:
                    return WordSelection(word=word, theme=theme)
                logger.info(f"Generated word already used, retrying ({attempt}/{self.max_word_attempts})")
            logger.warning("Every generated word was already used")
        except PROVIDER_FAILURES as e:
            logger.error(f"Error generating word: {type(e).__name__}: {e}")

        fallback_theme = THEMES[DEFAULT_THEME]
        return WordSelection(word=fallback_theme.fallback_word, theme=fallback_theme, fallback=True)

    async def get_hint(
        self,
        theme: Theme,
        personality: Personality,
        target_word: str,
        guesses: Sequence[str],
    ) -> Commentary:
        prompt = prompts.hint_prompt(theme, personality, target_word, guesses)
        return await self._commentary(
            prompt, HINT_MAX_TOKENS, FALLBACK_HINTS[personality], "hint"
        )

    async def get_coaching(
        self,
        theme: Theme,
        personality: Personality,
        target_word: str,
        guesses: Sequence[str],
        current_guess: str,
    ) -> Commentary:
        prompt = prompts.coaching_prompt(theme, personality, target_word, guesses, current_guess)
        return await self._commentary(
            prompt, COMMENTARY_MAX_TOKENS, FALLBACK_COACHING[personality], "coaching"
        )

    async def get_game_over_feedback(
        self,
        theme: Theme,
        personality: Personality,
        target_word: str,
        guess_count: int,
        won: bool,
    ) -> Commentary:
        prompt = prompts.game_over_prompt(theme, personality, target_word, guess_count, won)
        return await self._commentary(
            prompt, COMMENTARY_MAX_TOKENS, FALLBACK_GAME_OVER[personality][won], "game-over feedback"
        )

    async def _commentary(self, prompt: str, max_tokens: int, fallback: str, kind: str) -> Commentary:
        try:
            return Commentary(text=await self.provider.complete(prompt, max_tokens))
        except PROVIDER_FAILURES as e:
            logger.error(f"Error getting {kind}: {type(e).__name__}: {e}")
            return Commentary(text=fallback, fallback=True)
