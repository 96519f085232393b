"""Running totals across a restaurant's completed challenges."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

END_GAME_BONUSES = ("presentation_bonus", "flavor_bonus", "originality_bonus", "wild_shroomp")
SCORE_FIELDS = ("presentation", "flavor", "originality")


class Totals(BaseModel):
    presentation: int = 0
    flavor: int = 0
    originality: int = 0
    shroomps: int = 0


def _get(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        # Plain records may use either snake_case or camelCase keys
        if name in record:
            return record[name]
        return record.get(to_camel(name), default)
    return getattr(record, name, default)


def _score(record: Any, name: str) -> int:
    value = _get(record, name, 0)
    if isinstance(value, bool):
        return 0
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def compute_totals(challenges: Mapping | None, end_game: Any = None) -> Totals:
    """Sum scores and shroomps over completed challenges plus end-game bonuses.

    Records may be ChallengeRecord models or plain mappings with snake_case
    or camelCase keys (``earned_shroomp`` or ``earnedShroomp``). Anything not
    marked ``completed`` is skipped, and missing or malformed scores count
    as zero.
    """
    totals = Totals()
    for record in (challenges or {}).values():
        if _get(record, "completed") is not True:
            continue
        for name in SCORE_FIELDS:
            setattr(totals, name, getattr(totals, name) + _score(record, name))
        if _get(record, "earned_shroomp"):
            totals.shroomps += 1

    if end_game is not None:
        for bonus in END_GAME_BONUSES:
            if _get(end_game, bonus):
                totals.shroomps += 1
    return totals
