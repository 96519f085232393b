"""Pydantic v2 models for Death Cap Saute rules and restaurant state."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from deathcap.errors import UnknownLocationError
from deathcap.totals import Totals, compute_totals

DIE_FACES = range(1, 7)


class LocationKey(str, Enum):
    """The five cooking challenges, in the order they are played."""

    SALTY_DESERT = "saltyDesert"
    KINGS_COURT = "kingsCourt"
    ONION_SWAMP = "onionSwamp"
    MELTED_MOUNTAIN = "meltedMountain"
    SHROOMP_LAIR = "shroompLair"


class ChallengeFlag(str, Enum):
    COMPLETED = "completed"
    EARNED_SHROOMP = "earned_shroomp"


# --- Rules (immutable) ---


class _Rule(BaseModel):
    model_config = ConfigDict(frozen=True)


class Mutation(_Rule):
    key: str
    label: str
    description: str


class ShroompRow(_Rule):
    roll: int
    requirement: str
    dish_theme: str


class HazardRow(_Rule):
    roll: int
    name: str
    value: int
    penalty: str | None = None


class WildShroompRow(_Rule):
    roll: int
    name: str
    requirement: str


def _check_faces(rows: tuple, table: str) -> None:
    faces = sorted(row.roll for row in rows)
    if faces != list(DIE_FACES):
        raise ValueError(f"{table} must have exactly one row per die face 1-6, got {faces}")


class Location(_Rule):
    key: LocationKey
    label: str
    order: int
    judge: str
    judge_description: str
    flavor_text: str
    hazard_min: int
    hazard_max: int
    shroomp_table: tuple[ShroompRow, ...]
    hazard_table: tuple[HazardRow, ...]

    @model_validator(mode="after")
    def _complete_tables(self) -> Location:
        _check_faces(self.shroomp_table, f"{self.label} shroomp table")
        _check_faces(self.hazard_table, f"{self.label} hazard table")
        return self


class Rules(_Rule):
    """The rules bundle, built once and handed to whoever needs it."""

    mutations: tuple[Mutation, ...]
    locations: tuple[Location, ...]
    wild_shroomp_table: tuple[WildShroompRow, ...]
    dish_categories: tuple[str, ...] = ("presentation", "flavor", "originality")
    dice_per_challenge: int = 5
    team_members_per_player: int = 3
    total_challenges: int = 5

    @model_validator(mode="after")
    def _complete_tables(self) -> Rules:
        _check_faces(self.wild_shroomp_table, "Wild shroomp table")
        keys = sorted(loc.key.value for loc in self.locations)
        if keys != sorted(k.value for k in LocationKey):
            raise ValueError(f"Rules need exactly one of each location, got {keys}")
        return self

    def location(self, key: LocationKey | str) -> Location:
        for loc in self.locations:
            if loc.key.value == key:
                return loc
        raise UnknownLocationError(f"Unknown location: {key}")

    def has_mutation(self, key: str) -> bool:
        return any(m.key == key for m in self.mutations)

    def mutation(self, key: str) -> Mutation:
        """Look up a mutation, falling back to a placeholder for unknown keys."""
        for m in self.mutations:
            if m.key == key:
                return m
        return Mutation(key=key, label=key, description="Unknown mutation")

    def ordered_locations(self) -> list[Location]:
        return sorted(self.locations, key=lambda loc: loc.order)


# --- Restaurant state (persisted) ---


def _int_or_zero(v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return 0


class ChallengeRecord(BaseModel):
    presentation: int = 0
    flavor: int = 0
    originality: int = 0
    hazard1: int = 0
    hazard2: int = 0
    completed: bool = False
    earned_shroomp: bool = False
    notes: str = ""

    @field_validator(
        "presentation", "flavor", "originality", "hazard1", "hazard2", mode="before"
    )
    @classmethod
    def _default_malformed_to_zero(cls, v: Any) -> int:
        return _int_or_zero(v)

    @property
    def dish_total(self) -> int:
        return self.presentation + self.flavor + self.originality

    @property
    def hazard_total(self) -> int:
        return self.hazard1 + self.hazard2


class EndGame(BaseModel):
    presentation_bonus: bool = False
    flavor_bonus: bool = False
    originality_bonus: bool = False
    wild_shroomp: bool = False


class TeamMember(BaseModel):
    name: str = ""
    mutation: str = ""
    alive: bool = True


def _empty_challenges() -> dict[LocationKey, ChallengeRecord]:
    return {key: ChallengeRecord() for key in LocationKey}


class Restaurant(BaseModel):
    name: str
    img: str | None = None
    team_members: list[TeamMember] = Field(default_factory=list)
    challenges: dict[LocationKey, ChallengeRecord] = Field(
        default_factory=_empty_challenges
    )
    end_game: EndGame = Field(default_factory=EndGame)
    notes: str = ""

    # Computed fields are dumped for display; on load they are ignored as extras.
    @computed_field
    @property
    def totals(self) -> Totals:
        return compute_totals(self.challenges, self.end_game)

    @computed_field
    @property
    def alive_team_members(self) -> int:
        return sum(1 for m in self.team_members if m.alive)

    @computed_field
    @property
    def dead_team_members(self) -> int:
        return sum(1 for m in self.team_members if not m.alive)

    @computed_field
    @property
    def is_eliminated(self) -> bool:
        return self.alive_team_members == 0

    def challenge(self, key: LocationKey) -> ChallengeRecord:
        if key not in self.challenges:
            self.challenges[key] = ChallengeRecord()
        return self.challenges[key]


# --- Chat and roll tables ---


class DiceRollRecord(BaseModel):
    formula: str
    results: list[int] = Field(default_factory=list)
    total: int = 0


class ChatMessage(BaseModel):
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    speaker: str | None = None
    content: str
    category: Literal["roll", "death", "location", "system"] = "roll"
    whisper: list[str] = Field(default_factory=list)
    rolls: list[DiceRollRecord] = Field(default_factory=list)
    details: dict = Field(default_factory=dict)

    @property
    def is_public(self) -> bool:
        return not self.whisper


class RollTableResult(BaseModel):
    range: tuple[int, int]
    text: str
    weight: int = 1


class RollTable(BaseModel):
    name: str
    formula: str = "1d6"
    results: list[RollTableResult] = Field(default_factory=list)
    display_roll: bool = True

    def find(self, value: int) -> RollTableResult | None:
        for result in self.results:
            low, high = result.range
            if low <= value <= high:
                return result
        return None


class GameState(BaseModel):
    name: str = "Death Cap Saute"
    restaurants: dict[str, Restaurant] = Field(default_factory=dict)
    chat: list[ChatMessage] = Field(default_factory=list)
    roll_tables: dict[str, RollTable] = Field(default_factory=dict)
