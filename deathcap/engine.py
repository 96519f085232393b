"""Restaurant engine: state transitions, table rolls, and persistence."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from deathcap.dice import Dice, DiceRoll
from deathcap.errors import EngineError, RestaurantNotFoundError, UnknownLocationError
from deathcap.models import (
    ChallengeFlag,
    ChallengeRecord,
    ChatMessage,
    EndGame,
    GameState,
    LocationKey,
    Restaurant,
    RollTable,
    Rules,
    TeamMember,
)
from deathcap.resolver import (
    ChallengeDiceResult,
    HazardResult,
    ShroompResult,
    TableResolver,
    WildShroompResult,
    describe_location,
)
from deathcap.tables import DEFAULT_RULES, DEFAULT_TEAM

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = Path("state")
DEFAULT_STATE_FILE = DEFAULT_STATE_DIR / "game.json"

_TRUE_STRINGS = {"1", "true", "on", "yes", "checked"}

SCORE_FIELDS = ("presentation", "flavor", "originality", "hazard1", "hazard2")


def coerce_bool(value: Any) -> bool:
    """Coerce a checkbox value ("on", "true", 1, True...) to a bool."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _location_key(location: LocationKey | str) -> LocationKey:
    try:
        return LocationKey(location)
    except ValueError:
        raise UnknownLocationError(f"Unknown location: {location}") from None


class RestaurantEngine:
    """Manages restaurant state with atomic JSON persistence or in-memory."""

    def __init__(
        self,
        state_path: Path | None = DEFAULT_STATE_FILE,
        in_memory: bool = False,
        rules: Rules = DEFAULT_RULES,
        dice: Dice | None = None,
    ):
        self.in_memory = in_memory
        self.state_path = state_path
        self.rules = rules
        self.resolver = TableResolver(rules, dice)
        self._state: GameState | None = None

    def _load(self) -> GameState:
        if self.in_memory:
            if self._state is None:
                raise EngineError("No game found. Call init_game() first.")
            return self._state
        if not self.state_path.exists():
            raise EngineError("No game found. Run 'dcs init' first.")
        return GameState.model_validate_json(self.state_path.read_text())

    def _save(self, state: GameState) -> None:
        if self.in_memory:
            self._state = state
            return
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        data = state.model_dump_json(indent=2)
        # Atomic write: write to temp file then rename
        fd, tmp_path = tempfile.mkstemp(
            dir=self.state_path.parent, suffix=".tmp"
        )
        try:
            with open(fd, "w") as f:
                f.write(data)
            Path(tmp_path).replace(self.state_path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def save_state_json(self) -> str:
        """Serialize current state to JSON string."""
        return self._load().model_dump_json()

    def load_state_json(self, data: str) -> None:
        """Restore state from JSON string."""
        self._save(GameState.model_validate_json(data))

    def _chat(
        self,
        state: GameState,
        content: str,
        category: str = "roll",
        speaker: str | None = None,
        rolls: Iterable[DiceRoll] = (),
        details: dict | None = None,
        whisper: list[str] | None = None,
    ) -> ChatMessage:
        msg = ChatMessage(
            speaker=speaker,
            content=content,
            category=category,
            rolls=[r.to_record() for r in rolls],
            details=details or {},
            whisper=whisper or [],
        )
        state.chat.append(msg)
        return msg

    def _restaurant(self, state: GameState, name: str) -> Restaurant:
        restaurant = state.restaurants.get(name)
        if not restaurant:
            raise RestaurantNotFoundError(f"Restaurant '{name}' not found.")
        return restaurant

    # --- Game management ---

    def init_game(self, name: str = "Death Cap Saute") -> GameState:
        state = GameState(name=name)
        self._chat(state, f"Game '{name}' initialized.", "system")
        self._save(state)
        return state

    def get_state(self) -> GameState:
        return self._load()

    # --- Restaurants ---

    def create_restaurant(
        self,
        name: str,
        members: Iterable[tuple[str, str]] | None = None,
        img: str | None = None,
    ) -> Restaurant:
        state = self._load()
        if name in state.restaurants:
            raise EngineError(f"Restaurant '{name}' already exists.")

        team = []
        for member_name, mutation in (members if members is not None else DEFAULT_TEAM):
            if mutation and not self.rules.has_mutation(mutation):
                raise EngineError(f"Unknown mutation '{mutation}'.")
            team.append(TeamMember(name=member_name, mutation=mutation))
        if len(team) > self.rules.team_members_per_player:
            raise EngineError(
                f"A restaurant has at most {self.rules.team_members_per_player} team members."
            )

        restaurant = Restaurant(name=name, img=img, team_members=team)
        state.restaurants[name] = restaurant
        self._chat(state, f"{name} opens its kitchen.", "system")
        self._save(state)
        logger.info("Created restaurant %s with %d team members", name, len(team))
        return restaurant

    def get_restaurant(self, name: str) -> Restaurant:
        return self._restaurant(self._load(), name)

    def list_restaurants(self) -> list[Restaurant]:
        return list(self._load().restaurants.values())

    # --- Dice rolls ---

    def roll_challenge_dice(self, name: str) -> ChallengeDiceResult:
        state = self._load()
        restaurant = self._restaurant(state, name)
        result = self.resolver.roll_challenge_dice()
        self._chat(
            state, result.describe(restaurant.name),
            speaker=restaurant.name, rolls=[result.roll],
            details=result.details(),
        )
        self._save(state)
        return result

    def roll_shroomp_table(self, name: str, location: LocationKey | str) -> ShroompResult:
        state = self._load()
        restaurant = self._restaurant(state, name)
        result = self.resolver.roll_shroomp(location)
        self._chat(
            state, result.describe(),
            speaker=restaurant.name, rolls=[result.roll],
            details=result.details(),
        )
        self._save(state)
        return result

    def roll_hazard_table(
        self, name: str, location: LocationKey | str, bonus: int = 0
    ) -> HazardResult:
        state = self._load()
        restaurant = self._restaurant(state, name)
        result = self.resolver.roll_hazard(location, bonus)
        self._chat(
            state, result.describe(),
            speaker=restaurant.name, rolls=[result.roll],
            details=result.details(),
        )
        self._save(state)
        return result

    def roll_wild_shroomp(self, name: str) -> WildShroompResult:
        state = self._load()
        restaurant = self._restaurant(state, name)
        result = self.resolver.roll_wild_shroomp()
        self._chat(
            state, result.describe(),
            speaker=restaurant.name, rolls=[result.roll],
            details=result.details(),
        )
        self._save(state)
        return result

    def roll_single_die(self, name: str, purpose: str = "Mutation") -> int:
        state = self._load()
        restaurant = self._restaurant(state, name)
        roll = self.resolver.roll_single_die()
        self._chat(
            state, f"{restaurant.name} - {purpose}\nResult: [{roll.total}]",
            speaker=restaurant.name, rolls=[roll], details={"purpose": purpose},
        )
        self._save(state)
        return roll.total

    # --- Locations ---

    def introduce_location(self, location: LocationKey | str) -> ChatMessage:
        """Post a location's flavor text and judge to the public chat."""
        loc = self.rules.location(location)
        state = self._load()
        msg = self._chat(state, describe_location(loc), "location", whisper=[])
        self._save(state)
        return msg

    # --- Team management ---

    def kill_team_member(self, name: str, index: int) -> TeamMember | None:
        state = self._load()
        restaurant = self._restaurant(state, name)
        if not 0 <= index < len(restaurant.team_members):
            return None

        member = restaurant.team_members[index]
        member.alive = False
        mutation = self.rules.mutation(member.mutation)
        self._chat(
            state,
            f"{member.name} from {restaurant.name} has perished! "
            f"Their mutation ({mutation.label}) is no longer available.",
            "death",
            speaker=restaurant.name,
        )
        self._save(state)
        logger.info("%s lost team member %s", restaurant.name, member.name)
        return member

    def revive_team_member(self, name: str, index: int) -> TeamMember | None:
        state = self._load()
        restaurant = self._restaurant(state, name)
        if not 0 <= index < len(restaurant.team_members):
            return None
        member = restaurant.team_members[index]
        member.alive = True
        self._save(state)
        return member

    def update_team_member(
        self,
        name: str,
        index: int,
        member_name: str | None = None,
        mutation: str | None = None,
    ) -> TeamMember | None:
        state = self._load()
        restaurant = self._restaurant(state, name)
        if not 0 <= index < len(restaurant.team_members):
            return None
        member = restaurant.team_members[index]
        if mutation is not None:
            if mutation and not self.rules.has_mutation(mutation):
                raise EngineError(f"Unknown mutation '{mutation}'.")
            member.mutation = mutation
        if member_name is not None:
            member.name = member_name
        self._save(state)
        return member

    # --- Challenges and end game ---

    def set_challenge_flag(
        self,
        name: str,
        location: LocationKey | str,
        flag: ChallengeFlag | str,
        value: Any,
    ) -> ChallengeRecord:
        key = _location_key(location)
        flag = ChallengeFlag(flag)
        state = self._load()
        record = self._restaurant(state, name).challenge(key)
        setattr(record, flag.value, coerce_bool(value))
        self._save(state)
        return record

    def update_challenge(
        self,
        name: str,
        location: LocationKey | str,
        notes: str | None = None,
        **scores: int | None,
    ) -> ChallengeRecord:
        key = _location_key(location)
        unknown = set(scores) - set(SCORE_FIELDS)
        if unknown:
            raise EngineError(f"Unknown challenge fields: {', '.join(sorted(unknown))}.")
        state = self._load()
        restaurant = self._restaurant(state, name)
        current = restaurant.challenge(key).model_dump()
        current.update({k: v for k, v in scores.items() if v is not None})
        if notes is not None:
            current["notes"] = notes
        record = ChallengeRecord.model_validate(current)
        restaurant.challenges[key] = record
        self._save(state)
        return record

    def set_end_game(self, name: str, **flags: Any) -> Restaurant:
        state = self._load()
        restaurant = self._restaurant(state, name)
        for flag, value in flags.items():
            if value is None:
                continue
            if flag not in EndGame.model_fields:
                raise EngineError(f"Unknown end-game bonus '{flag}'.")
            setattr(restaurant.end_game, flag, coerce_bool(value))
        self._save(state)
        return restaurant

    def set_image(self, name: str, path: str) -> Restaurant:
        state = self._load()
        restaurant = self._restaurant(state, name)
        restaurant.img = path
        self._save(state)
        return restaurant

    # --- Roll tables ---

    def get_roll_table(self, table_name: str) -> RollTable | None:
        return self._load().roll_tables.get(table_name)

    def add_roll_table(self, table: RollTable) -> RollTable:
        state = self._load()
        state.roll_tables[table.name] = table
        self._save(state)
        return table

    def roll_roll_table(self, table_name: str) -> tuple[int, str]:
        state = self._load()
        table = state.roll_tables.get(table_name)
        if not table:
            raise EngineError(f"Roll table '{table_name}' not found.")
        roll = self.resolver.dice.roll(table.formula)
        result = table.find(roll.total)
        text = result.text if result else "No result"
        self._chat(state, f"{table.name}\nRoll: {roll.total}\n{text}", rolls=[roll])
        self._save(state)
        return roll.total, text

    def post_info(self, content: str) -> ChatMessage:
        state = self._load()
        msg = self._chat(state, content, "system")
        self._save(state)
        return msg

    # --- Chat ---

    def get_chat(self, count: int = 20) -> list[ChatMessage]:
        if count <= 0:
            return []
        return self._load().chat[-count:]
