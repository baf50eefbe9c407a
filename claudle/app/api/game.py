"""Guess checking and result sharing endpoints."""

from fastapi import APIRouter

from claudle.app.api.schemas import (
    CheckGuessRequest,
    CheckGuessResponse,
    GameStatsSummary,
    GuessResultModel,
    ShareRequest,
    ShareResponse,
)
from claudle.app.game.session import GameSession
from claudle.app.game.stats import GameStats, format_time, share_text
from claudle.app.game.types import GameState

router = APIRouter(prefix="/api/game", tags=["game"])


def _replay(target_word: str, words: list[str]) -> GameSession:
    session = GameSession(target_word.strip().upper())
    for word in words:
        session.submit_guess(word)
    return session


@router.post("/check", response_model=CheckGuessResponse)
async def check_guess(body: CheckGuessRequest) -> CheckGuessResponse:
    """Score ``guess`` after replaying ``history`` against the target.

    The keyboard covers the whole history including this guess.
    """
    session = _replay(body.target_word, body.history)
    result = session.submit_guess(body.guess)
    return CheckGuessResponse(
        result=GuessResultModel.from_result(result),
        keyboard=session.keyboard_state,
        game_state=session.game_state,
        guess_count=len(session.guesses),
        guesses=session.guessed_words,
    )


@router.post("/share", response_model=ShareResponse)
async def share(body: ShareRequest) -> ShareResponse:
    """Render the share grid and fold a finished game into the player's stats.

    Stats come back unchanged while the game is still in progress.
    """
    session = _replay(body.target_word, body.guesses)
    won = session.game_state == GameState.WON

    stats = body.stats.to_stats() if body.stats else GameStats()
    if session.is_over:
        stats.record_game(won, len(session.guesses))

    return ShareResponse(
        text=share_text(session.guesses, won, body.difficulty.value),
        won=won,
        time=format_time(body.elapsed_seconds) if body.elapsed_seconds is not None else None,
        stats=GameStatsSummary.from_stats(stats),
    )
