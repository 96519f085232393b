"""Dice rolling with an injectable random source."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field

from deathcap.models import DiceRollRecord

_DICE_RE = re.compile(r"^(\d+)d(\d+)$")


@dataclass
class DiceRoll:
    formula: str
    results: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.results)

    def to_record(self) -> DiceRollRecord:
        return DiceRollRecord(formula=self.formula, results=list(self.results), total=self.total)


def parse_formula(formula: str) -> tuple[int, int]:
    """Parse an 'NdM' formula into (count, sides)."""
    m = _DICE_RE.match(formula.strip().lower())
    if not m:
        raise ValueError(f"Invalid dice formula: {formula}")
    count, sides = int(m.group(1)), int(m.group(2))
    if count < 1 or sides < 1:
        raise ValueError(f"Invalid dice formula: {formula}")
    return count, sides


class Dice:
    """Rolls dice formulas against a ``random.Random`` instance."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    @classmethod
    def seeded(cls, seed: int) -> Dice:
        return cls(random.Random(seed))

    def die(self, sides: int) -> int:
        return self._rng.randint(1, sides)

    def roll(self, formula: str) -> DiceRoll:
        count, sides = parse_formula(formula)
        return DiceRoll(formula=formula, results=[self.die(sides) for _ in range(count)])

    def d6(self) -> DiceRoll:
        return self.roll("1d6")
