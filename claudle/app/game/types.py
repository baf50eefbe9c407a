"""Game data types, themes and constants."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

WORD_LENGTH = 5
MAX_GUESSES = 6


class LetterState(str, Enum):
    """Classification of a single tile or keyboard key.

    EMPTY is only used for rows that have not been submitted yet; the
    evaluator never produces it.
    """
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"


class GameState(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Personality(str, Enum):
    """Coach persona used for hints and commentary."""
    LASSO = "lasso"
    KENT = "kent"


@dataclass(frozen=True)
class GuessTile:
    letter: str
    state: LetterState


@dataclass(frozen=True)
class GuessResult:
    """A submitted guess and its per-letter classification."""
    word: str
    tiles: Tuple[GuessTile, ...]

    @property
    def is_solved(self) -> bool:
        return all(tile.state == LetterState.CORRECT for tile in self.tiles)


KeyboardState = Dict[str, LetterState]


@dataclass(frozen=True)
class Theme:
    name: str
    description: str
    difficulty: str
    icon: str
    fallback_word: str


DEFAULT_THEME = "original"

THEMES: Dict[str, Theme] = {
    "original": Theme(
        name="Classic Words",
        description="Common English words suitable for Wordle",
        difficulty="Medium",
        icon="📝",
        fallback_word="AUDIO",
    ),
    "theater": Theme(
        name="Theater & Drama",
        description="Drama, stage, and performance terms",
        difficulty="Hard",
        icon="🎭",
        fallback_word="STAGE",
    ),
    "harry-potter": Theme(
        name="Wizarding World",
        description="Harry Potter spells, characters, and magical terms",
        difficulty="Hard",
        icon="⚡",
        fallback_word="MAGIC",
    ),
    "disney": Theme(
        name="Disney Magic",
        description="Disney characters, movies, and magical words",
        difficulty="Medium",
        icon="🏰",
        fallback_word="MOUSE",
    ),
    "marine-biology": Theme(
        name="Ocean Depths",
        description="Marine creatures and underwater terms",
        difficulty="Hard",
        icon="🌊",
        fallback_word="WHALE",
    ),
    "billy-joel": Theme(
        name="Piano Man",
        description="Billy Joel songs and music terms",
        difficulty="Hard",
        icon="🎹",
        fallback_word="PIANO",
    ),
    "cooking": Theme(
        name="Culinary Arts",
        description="Food, cooking, and kitchen terms",
        difficulty="Medium",
        icon="👨‍🍳",
        fallback_word="SPICE",
    ),
    "space": Theme(
        name="Cosmic Journey",
        description="Astronomy and space exploration",
        difficulty="Medium",
        icon="🚀",
        fallback_word="ORBIT",
    ),
    "sports": Theme(
        name="Athletic Arena",
        description="Sports, games, and athletic terms",
        difficulty="Easy",
        icon="⚽",
        fallback_word="FIELD",
    ),
    "nature": Theme(
        name="Wild Kingdom",
        description="Plants, animals, and natural phenomena",
        difficulty="Easy",
        icon="🌿",
        fallback_word="FLORA",
    ),
}


def get_theme(key: str | None) -> Theme:
    """Look up a theme, falling back to the classic word list."""
    return THEMES.get(key or DEFAULT_THEME, THEMES[DEFAULT_THEME])
