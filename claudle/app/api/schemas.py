"""Request and response bodies for the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from claudle.app.game.types import (
    DEFAULT_THEME,
    Difficulty,
    GameState,
    GuessResult,
    LetterState,
    MAX_GUESSES,
    Personality,
)
from claudle.app.game.stats import GameStats


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateWordRequest(CamelModel):
    theme: str = DEFAULT_THEME
    used_words: List[str] = Field(default_factory=list)


class GenerateWordResponse(CamelModel):
    word: str
    theme: str
    difficulty: str
    fallback: Optional[bool] = None


class HintRequest(CamelModel):
    target_word: Optional[str] = None
    guesses: Optional[List[str]] = None
    theme: str = DEFAULT_THEME
    personality: Personality = Personality.LASSO


class HintResponse(CamelModel):
    hint: str
    personality: Personality
    guess_count: int
    theme: str
    fallback: Optional[bool] = None


class CoachingRequest(CamelModel):
    target_word: Optional[str] = None
    guesses: Optional[List[str]] = None
    current_guess: Optional[str] = None
    theme: str = DEFAULT_THEME
    personality: Personality = Personality.LASSO


class CoachingResponse(CamelModel):
    coaching: str
    enabled: bool
    personality: Optional[Personality] = None
    guess_count: Optional[int] = None
    theme: Optional[str] = None
    fallback: Optional[bool] = None


class GameOverRequest(CamelModel):
    target_word: Optional[str] = None
    guesses: Optional[List[str]] = None
    won: Optional[bool] = None
    theme: str = DEFAULT_THEME
    personality: Personality = Personality.LASSO


class GameOverResponse(CamelModel):
    feedback: str
    won: bool
    guess_count: int
    personality: Personality
    theme: str
    target_word: str
    fallback: Optional[bool] = None


class TileModel(CamelModel):
    letter: str
    state: LetterState


class GuessResultModel(CamelModel):
    word: str
    tiles: List[TileModel]

    @classmethod
    def from_result(cls, result: GuessResult) -> "GuessResultModel":
        return cls(
            word=result.word,
            tiles=[TileModel(letter=tile.letter, state=tile.state) for tile in result.tiles],
        )


class CheckGuessRequest(CamelModel):
    guess: str
    target_word: str
    history: List[str] = Field(default_factory=list)


class CheckGuessResponse(CamelModel):
    result: GuessResultModel
    keyboard: Dict[str, LetterState]
    game_state: GameState
    guess_count: int
    guesses: List[str]


class GameStatsModel(CamelModel):
    games_played: int = Field(0, ge=0)
    games_won: int = Field(0, ge=0)
    current_streak: int = Field(0, ge=0)
    max_streak: int = Field(0, ge=0)
    guess_distribution: List[int] = Field(
        default_factory=lambda: [0] * MAX_GUESSES,
        min_length=MAX_GUESSES,
        max_length=MAX_GUESSES,
    )

    def to_stats(self) -> GameStats:
        return GameStats(
            games_played=self.games_played,
            games_won=self.games_won,
            current_streak=self.current_streak,
            max_streak=self.max_streak,
            guess_distribution=list(self.guess_distribution),
        )


class GameStatsSummary(GameStatsModel):
    win_percentage: int

    @classmethod
    def from_stats(cls, stats: GameStats) -> "GameStatsSummary":
        return cls(
            games_played=stats.games_played,
            games_won=stats.games_won,
            current_streak=stats.current_streak,
            max_streak=stats.max_streak,
            guess_distribution=stats.guess_distribution,
            win_percentage=stats.win_percentage,
        )


class ShareRequest(CamelModel):
    target_word: str
    guesses: List[str] = Field(..., min_length=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    elapsed_seconds: Optional[int] = Field(None, ge=0)
    stats: Optional[GameStatsModel] = None


class ShareResponse(CamelModel):
    text: str
    won: bool
    time: Optional[str] = None
    stats: GameStatsSummary
