"""Game rules: guess evaluation, sessions and statistics."""

from claudle.app.game.evaluator import (
    evaluate,
    is_valid_word,
    merge_keyboard_state,
    validate_word,
)
from claudle.app.game.session import GameSession
from claudle.app.game.stats import GameStats, share_text
from claudle.app.game.types import (
    GameState,
    GuessResult,
    GuessTile,
    KeyboardState,
    LetterState,
    MAX_GUESSES,
    THEMES,
    WORD_LENGTH,
)

__all__ = [
    "evaluate",
    "is_valid_word",
    "merge_keyboard_state",
    "validate_word",
    "GameSession",
    "GameStats",
    "share_text",
    "GameState",
    "GuessResult",
    "GuessTile",
    "KeyboardState",
    "LetterState",
    "MAX_GUESSES",
    "THEMES",
    "WORD_LENGTH",
]
