"""HTTP API routers."""

from claudle.app.api.claude import router as claude_router
from claudle.app.api.game import router as game_router

__all__ = ["claude_router", "game_router"]
