"""LLM-backed game endpoints.

All four routes sit behind the per-route rate limiter and answer with a
canned reply (``fallback: true``) when the provider can't be used.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from claudle.app.api.dependencies import get_game_master
from claudle.app.api.schemas import (
    CoachingRequest,
    CoachingResponse,
    GameOverRequest,
    GameOverResponse,
    GenerateWordRequest,
    GenerateWordResponse,
    HintRequest,
    HintResponse,
)
from claudle.app.core.config import settings
from claudle.app.core.logging import get_logger
from claudle.app.game.types import THEMES, get_theme
from claudle.app.services.fallbacks import COACHING_DISABLED_MESSAGE
from claudle.app.services.game_master import GameMaster

router = APIRouter(prefix="/api/claude", tags=["claude"])
logger = get_logger(__name__)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _missing_parameters() -> JSONResponse:
    return _bad_request("Missing required parameters")


@router.post(
    "/generate-word",
    response_model=GenerateWordResponse,
    response_model_exclude_none=True,
)
async def generate_word(
    body: GenerateWordRequest,
    game_master: GameMaster = Depends(get_game_master),
):
    """Pick a new secret word for the requested theme."""
    theme = THEMES.get(body.theme)
    if theme is None:
        return _bad_request("Invalid theme specified")

    selection = await game_master.generate_word(theme, body.used_words)
    return GenerateWordResponse(
        word=selection.word,
        theme=selection.theme.name,
        difficulty=selection.theme.difficulty,
        fallback=selection.fallback or None,
    )


@router.post("/get-hint", response_model=HintResponse, response_model_exclude_none=True)
async def get_hint(
    body: HintRequest,
    game_master: GameMaster = Depends(get_game_master),
):
    if not body.target_word or body.guesses is None:
        return _missing_parameters()

    theme = get_theme(body.theme)
    hint = await game_master.get_hint(theme, body.personality, body.target_word, body.guesses)
    return HintResponse(
        hint=hint.text,
        personality=body.personality,
        guess_count=len(body.guesses),
        theme=theme.name,
        fallback=hint.fallback or None,
    )


@router.post("/coaching", response_model=CoachingResponse, response_model_exclude_none=True)
async def coaching(
    body: CoachingRequest,
    game_master: GameMaster = Depends(get_game_master),
):
    """Comment on a guess the player is considering, before submission.

    Disabled unless ENABLE_INTERACTIVE_COACHING is set.
    """
    if not settings.enable_interactive_coaching:
        return CoachingResponse(coaching=COACHING_DISABLED_MESSAGE, enabled=False)

    if not body.target_word or body.guesses is None or not body.current_guess:
        return _missing_parameters()

    theme = get_theme(body.theme)
    reply = await game_master.get_coaching(
        theme, body.personality, body.target_word, body.guesses, body.current_guess
    )
    return CoachingResponse(
        coaching=reply.text,
        enabled=True,
        personality=body.personality,
        guess_count=len(body.guesses) + 1,
        theme=theme.name,
        fallback=reply.fallback or None,
    )


@router.post("/game-over", response_model=GameOverResponse, response_model_exclude_none=True)
async def game_over(
    body: GameOverRequest,
    game_master: GameMaster = Depends(get_game_master),
):
    if not body.target_word or body.guesses is None or body.won is None:
        return _missing_parameters()

    theme = get_theme(body.theme)
    guess_count = len(body.guesses)
    feedback = await game_master.get_game_over_feedback(
        theme, body.personality, body.target_word, guess_count, body.won
    )
    return GameOverResponse(
        feedback=feedback.text,
        won=body.won,
        guess_count=guess_count,
        personality=body.personality,
        theme=theme.name,
        target_word=body.target_word,
        fallback=feedback.fallback or None,
    )
