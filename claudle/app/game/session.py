"""A single game: target word, guess history and win/loss state."""

from typing import List

from claudle.app.core.logging import get_logger
from claudle.app.exceptions import GameOverError
from claudle.app.game.evaluator import evaluate, merge_keyboard_state, validate_word
from claudle.app.game.types import (
    Difficulty,
    GameState,
    GuessResult,
    KeyboardState,
    MAX_GUESSES,
)

logger = get_logger(__name__)


class GameSession:
    """Owns the guess history for one target word.

    The keyboard state is refreshed after every submission so callers can
    read it directly without re-folding the history.
    """

    def __init__(
        self,
        target_word: str,
        difficulty: Difficulty = Difficulty.MEDIUM,
        max_guesses: int = MAX_GUESSES,
    ):
        self.target_word = validate_word(target_word.upper(), "target")
        self.difficulty = difficulty
        self.max_guesses = max_guesses
        self.guesses: List[GuessResult] = []
        self.game_state = GameState.PLAYING
        self.keyboard_state: KeyboardState = {}

    @property
    def guessed_words(self) -> List[str]:
        return [result.word for result in self.guesses]

    @property
    def is_over(self) -> bool:
        return self.game_state != GameState.PLAYING

    def submit_guess(self, guess: str) -> GuessResult:
        """Evaluate ``guess``, append it to the history and update state.

        Raises:
            GameOverError: If the game has already been won or lost
            InvalidInputError: If the guess is not five letters
        """
        if self.is_over:
            raise GameOverError(self.game_state.value)

        result = evaluate(guess.strip().upper(), self.target_word)
        self.guesses.append(result)
        self.keyboard_state = merge_keyboard_state(self.guesses)

        if result.is_solved:
            self.game_state = GameState.WON
        elif len(self.guesses) >= self.max_guesses:
            self.game_state = GameState.LOST

        if self.is_over:
            logger.info(
                f"Game finished: {self.game_state.value} after {len(self.guesses)} guesses"
            )
        return result
