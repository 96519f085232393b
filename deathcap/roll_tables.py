"""Shroomp type and dish theme roll tables."""

from __future__ import annotations

import logging

from deathcap.engine import RestaurantEngine
from deathcap.models import RollTable, RollTableResult

logger = logging.getLogger(__name__)

SHROOMP_TYPES: list[tuple[tuple[int, int], str]] = [
    ((1, 1), "Spotted Deathcap"),
    ((2, 2), "Golden Chanterelle"),
    ((3, 3), "Crimson Puffball"),
    ((4, 4), "Midnight Morel"),
    ((5, 5), "Phosphor Shroom"),
    ((6, 6), "Royal Truffle"),
]

DISH_THEMES: list[tuple[tuple[int, int], str]] = [
    ((1, 1), "Rustic Comfort"),
    ((2, 2), "Elegant Presentation"),
    ((3, 3), "Spicy Challenge"),
    ((4, 4), "Sweet Surprise"),
    ((5, 5), "Traditional Classic"),
    ((6, 6), "Experimental Fusion"),
]


def create_roll_table(
    engine: RestaurantEngine,
    name: str,
    formula: str,
    results: list[tuple[tuple[int, int], str]],
) -> RollTable:
    """Create a roll table, or return the existing one with the same name."""
    existing = engine.get_roll_table(name)
    if existing:
        logger.info("Roll table %r already exists", name)
        return existing

    table = RollTable(
        name=name,
        formula=formula,
        results=[RollTableResult(range=r, text=text) for r, text in results],
    )
    engine.add_roll_table(table)
    logger.info("Created roll table: %s", name)
    return table


def create_default_tables(engine: RestaurantEngine) -> list[RollTable]:
    tables = [
        create_roll_table(engine, "Shroomp Types", "1d6", SHROOMP_TYPES),
        create_roll_table(engine, "Dish Themes", "1d6", DISH_THEMES),
    ]
    engine.post_info("Death Cap Saute roll tables created!")
    return tables
