"""Services package: prompt building and LLM-backed game commentary."""

from claudle.app.services.game_master import Commentary, GameMaster, WordSelection

__all__ = ["Commentary", "GameMaster", "WordSelection"]
