"""Roll dice against the rules tables and describe what came up."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from deathcap.dice import Dice, DiceRoll
from deathcap.errors import EngineError
from deathcap.models import (
    HazardRow,
    Location,
    LocationKey,
    Rules,
    ShroompRow,
    WildShroompRow,
)

logger = logging.getLogger(__name__)

Row = TypeVar("Row", ShroompRow, HazardRow, WildShroompRow)


@dataclass
class ChallengeDiceResult:
    roll: DiceRoll

    @property
    def results(self) -> list[int]:
        return list(self.roll.results)

    def details(self) -> dict:
        return {"results": self.results}

    def describe(self, speaker: str) -> str:
        dice = " ".join(f"[{r}]" for r in self.results)
        return (
            f"{speaker} rolls Challenge Dice\n"
            f"{dice}\n"
            "Assign these to: Presentation, Flavor, Originality, Hazard 1, Hazard 2\n"
            "You may use one Mutation from an alive team member."
        )


@dataclass
class ShroompResult:
    roll: DiceRoll
    location: Location
    entry: ShroompRow

    def details(self) -> dict:
        return {"location": self.location.key.value, **self.entry.model_dump()}

    def describe(self) -> str:
        return (
            f"Shroomp & Dish Theme - {self.location.label}\n"
            f"Roll: {self.roll.total}\n"
            f"Shroomp Requirement: {self.entry.requirement}\n"
            f"Dish Theme: {self.entry.dish_theme}"
        )


@dataclass
class HazardResult:
    roll: DiceRoll
    location: Location
    entry: HazardRow
    bonus: int = 0

    @property
    def effective_value(self) -> int:
        return self.entry.value + self.bonus

    def details(self) -> dict:
        return {
            "location": self.location.key.value,
            **self.entry.model_dump(),
            "bonus": self.bonus,
            "effective_value": self.effective_value,
        }

    def describe(self) -> str:
        value = f"{self.entry.value}"
        if self.bonus:
            value += f" ({self.bonus:+d} bonus = {self.effective_value})"
        lines = [
            f"Hazard Roll - {self.location.label}",
            f"Roll: {self.roll.total}",
            f"Hazard: {self.entry.name}",
            f"Hazard Value: {value}",
        ]
        if self.entry.penalty:
            lines.append(f"Added Penalty (if failed): {self.entry.penalty}")
        lines.append(f"Your Hazard dice total must meet or beat {self.effective_value} to survive!")
        return "\n".join(lines)


@dataclass
class WildShroompResult:
    roll: DiceRoll
    entry: WildShroompRow

    def details(self) -> dict:
        return self.entry.model_dump()

    def describe(self) -> str:
        return (
            "Wild Shroomp Roll\n"
            f"Roll: {self.roll.total}\n"
            f"{self.entry.name}\n"
            f"Requirement: {self.entry.requirement}"
        )


def lookup(rows: Sequence[Row], value: int) -> Row:
    """Return the row whose ``roll`` matches ``value``."""
    for row in rows:
        if row.roll == value:
            return row
    raise EngineError(f"No table row for roll {value}")


class TableResolver:
    """Rolls on the rules tables with an injected dice source."""

    def __init__(self, rules: Rules, dice: Dice | None = None):
        self.rules = rules
        self.dice = dice or Dice()

    def roll_on_table(self, rows: Sequence[Row]) -> tuple[DiceRoll, Row]:
        roll = self.dice.d6()
        return roll, lookup(rows, roll.total)

    def roll_challenge_dice(self) -> ChallengeDiceResult:
        roll = self.dice.roll(f"{self.rules.dice_per_challenge}d6")
        logger.debug("Challenge dice: %s", roll.results)
        return ChallengeDiceResult(roll=roll)

    def roll_shroomp(self, location_key: LocationKey | str) -> ShroompResult:
        # Resolve the location first so a bad key never consumes a roll
        location = self.rules.location(location_key)
        roll, entry = self.roll_on_table(location.shroomp_table)
        logger.debug("Shroomp roll at %s: %d", location.key.value, roll.total)
        return ShroompResult(roll=roll, location=location, entry=entry)

    def roll_hazard(self, location_key: LocationKey | str, bonus: int = 0) -> HazardResult:
        location = self.rules.location(location_key)
        roll, entry = self.roll_on_table(location.hazard_table)
        logger.debug("Hazard roll at %s: %d (bonus %d)", location.key.value, roll.total, bonus)
        return HazardResult(roll=roll, location=location, entry=entry, bonus=bonus)

    def roll_wild_shroomp(self) -> WildShroompResult:
        roll, entry = self.roll_on_table(self.rules.wild_shroomp_table)
        return WildShroompResult(roll=roll, entry=entry)

    def roll_single_die(self) -> DiceRoll:
        return self.dice.d6()


def describe_location(location: Location) -> str:
    return (
        f"{location.label}\n"
        f"{location.flavor_text}\n"
        f"Judge: {location.judge}\n"
        f"{location.judge_description}\n"
        f"Hazard Range: {location.hazard_min} - {location.hazard_max}"
    )
