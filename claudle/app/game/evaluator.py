"""Guess evaluation and keyboard-state merging.

Evaluation follows the standard Wordle rule for repeated letters: exact
matches are claimed first, then each remaining guess letter, left to
right, may claim one unclaimed occurrence of the same letter in the
target. A guess can therefore never receive more ``present`` and
``correct`` marks for a letter than the target contains.
"""

import re
from typing import Iterable, List

from claudle.app.exceptions import InvalidInputError
from claudle.app.game.types import (
    GuessResult,
    GuessTile,
    KeyboardState,
    LetterState,
    WORD_LENGTH,
)

_WORD_PATTERN = re.compile(rf"^[A-Z]{{{WORD_LENGTH}}}$")


def is_valid_word(word: object) -> bool:
    """Return True when ``word`` is exactly five uppercase letters A-Z."""
    return isinstance(word, str) and _WORD_PATTERN.fullmatch(word) is not None


def validate_word(word: object, field: str = "word") -> str:
    """Return ``word`` unchanged, or raise InvalidInputError naming ``field``."""
    if not is_valid_word(word):
        raise InvalidInputError(field, word)
    return word  # type: ignore[return-value]


def evaluate(guess: str, target: str) -> GuessResult:
    """Classify every letter of ``guess`` against ``target``.

    Args:
        guess: Submitted word, five uppercase letters
        target: Secret word, five uppercase letters

    Returns:
        GuessResult with tiles aligned to ``guess``

    Raises:
        InvalidInputError: If either word is not five uppercase letters
    """
    validate_word(guess, "guess")
    validate_word(target, "target")

    states: List[LetterState] = []
    unclaimed_target: List[str] = []
    pending: List[int] = []

    for i, (guessed, expected) in enumerate(zip(guess, target)):
        if guessed == expected:
            states.append(LetterState.CORRECT)
        else:
            states.append(LetterState.ABSENT)
            unclaimed_target.append(expected)
            pending.append(i)

    for i in pending:
        letter = guess[i]
        if letter in unclaimed_target:
            states[i] = LetterState.PRESENT
            unclaimed_target.remove(letter)

    tiles = tuple(GuessTile(letter=letter, state=state) for letter, state in zip(guess, states))
    return GuessResult(word=guess, tiles=tiles)


def merge_keyboard_state(history: Iterable[GuessResult]) -> KeyboardState:
    """Fold a guess history into the best-known state per letter.

    Priority is correct > present > absent: ``correct`` is always written,
    ``present`` never overwrites ``correct``, and ``absent`` is only
    recorded for letters not seen before.
    """
    keyboard: KeyboardState = {}

    for result in history:
        for tile in result.tiles:
            current = keyboard.get(tile.letter)
            if tile.state == LetterState.CORRECT:
                keyboard[tile.letter] = LetterState.CORRECT
            elif tile.state == LetterState.PRESENT and current != LetterState.CORRECT:
                keyboard[tile.letter] = LetterState.PRESENT
            elif current is None:
                keyboard[tile.letter] = tile.state

    return keyboard
