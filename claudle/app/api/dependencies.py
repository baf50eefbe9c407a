"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from claudle.app.core.http_client import get_http_client
from claudle.app.providers.factory import create_provider
from claudle.app.services.game_master import GameMaster


def get_game_master(request: Request) -> GameMaster:
    """Return the app's GameMaster, building one on first use.

    The lifespan normally installs it; this covers apps driven without
    lifespan events (e.g. a TestClient used outside a ``with`` block).
    """
    game_master = getattr(request.app.state, "game_master", None)
    if game_master is None:
        try:
            http_client = get_http_client()
        except RuntimeError:
            http_client = None
        game_master = GameMaster(create_provider(http_client))
        request.app.state.game_master = game_master
    return game_master
