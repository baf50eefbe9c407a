"""Player statistics and the shareable result grid."""

from dataclasses import dataclass, field
from typing import Iterable, List

from claudle.app.game.types import GuessResult, LetterState, MAX_GUESSES

SHARE_URL = "claudle.vercel.app"

_TILE_EMOJI = {
    LetterState.CORRECT: "🟩",
    LetterState.PRESENT: "🟨",
    LetterState.ABSENT: "⬜",
}


@dataclass
class GameStats:
    """Running totals across games for one player."""
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    guess_distribution: List[int] = field(default_factory=lambda: [0] * MAX_GUESSES)

    @property
    def win_percentage(self) -> int:
        if not self.games_played:
            return 0
        return round(self.games_won * 100 / self.games_played)

    def record_game(self, won: bool, guess_count: int) -> None:
        """Fold one finished game into the totals.

        Only wins land in the guess distribution; a loss resets the streak.
        """
        self.games_played += 1
        if won:
            self.games_won += 1
            self.current_streak += 1
            self.max_streak = max(self.max_streak, self.current_streak)
            if 1 <= guess_count <= len(self.guess_distribution):
                self.guess_distribution[guess_count - 1] += 1
        else:
            self.current_streak = 0


def share_text(guesses: Iterable[GuessResult], won: bool, difficulty: str) -> str:
    """Render the spoiler-free emoji grid players paste into chat."""
    guesses = list(guesses)
    guess_count = len(guesses) if won else "X"

    lines = [f"ClaudLE {guess_count}/{MAX_GUESSES} ({difficulty})", ""]
    for result in guesses:
        lines.append("".join(_TILE_EMOJI.get(tile.state, "") for tile in result.tiles))
    lines.append("")
    lines.append(f"Play at: {SHARE_URL}")
    return "\n".join(lines)


def format_time(seconds: int) -> str:
    """Format elapsed seconds as ``m:ss``."""
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}:{remaining:02d}"
