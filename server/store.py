"""Process-wide restaurant engine and sheet tab state used by the HTTP routes."""

from __future__ import annotations

import logging
from pathlib import Path

from deathcap.config import settings as engine_settings
from deathcap.dice import Dice
from deathcap.engine import RestaurantEngine
from deathcap.errors import EngineError
from deathcap.sheet import DEFAULT_TAB_GROUP, INITIAL_TAB

logger = logging.getLogger(__name__)

_engine: RestaurantEngine | None = None
# Active tab per group, per restaurant, for the lifetime of the server
_tabs: dict[str, dict[str, str]] = {}


def init_engine(
    state_path: Path | None = None,
    in_memory: bool = False,
    dice: Dice | None = None,
) -> RestaurantEngine:
    """Create the engine, starting a new game if no state exists yet."""
    global _engine
    if dice is None and engine_settings.dice_seed is not None:
        dice = Dice.seeded(engine_settings.dice_seed)
    engine = RestaurantEngine(
        state_path or engine_settings.state_path, in_memory=in_memory, dice=dice
    )
    try:
        engine.get_state()
    except EngineError:
        logger.info("No saved game found, starting %r", engine_settings.default_game_name)
        engine.init_game(engine_settings.default_game_name)
    _engine = engine
    _tabs.clear()
    return engine


def get_engine() -> RestaurantEngine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine() first.")
    return _engine


def sheet_tabs(restaurant: str) -> dict[str, str]:
    """Return the shared tab mapping for a restaurant's sheet."""
    return _tabs.setdefault(restaurant, {DEFAULT_TAB_GROUP: INITIAL_TAB})


def close_engine() -> None:
    global _engine
    _engine = None
    _tabs.clear()
