"""Restaurant sheet presenter: builds the view model and handles sheet actions.

The sheet owns no game data. It reads a restaurant snapshot from the engine
each time it renders and routes every action back through the engine, so the
totals shown are always recomputed from the stored challenge records.

Collaborators that need user input (a yes/no confirmation and a file picker)
are injected as coroutines; each host supplies its own.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from deathcap.engine import RestaurantEngine
from deathcap.errors import SheetError, UnknownLocationError
from deathcap.models import ChallengeFlag, LocationKey, Restaurant

logger = logging.getLogger(__name__)

Confirm = Callable[[str, str], Awaitable[bool]]
PickFile = Callable[[str | None], Awaitable[str | None]]
Notify = Callable[[str, str], Any]

TEMPLATE = "restaurant_sheet.html"
SHEET_CLASSES = ("death-cap-saute", "sheet", "actor", "restaurant")
DEFAULT_TAB_GROUP = "primary"
INITIAL_TAB = "team"
TABS = ("team", "challenges", "endgame", "notes")


async def _decline(title: str, content: str) -> bool:
    logger.warning("No confirmation handler for %r; declining", title)
    return False


async def _no_file(current: str | None) -> str | None:
    return None


def _index(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return -1


def _log_notify(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.WARNING, message)


class RestaurantSheet:
    """View-model provider and action handler for one restaurant."""

    width = 750
    height = 900

    def __init__(
        self,
        engine: RestaurantEngine,
        restaurant: str,
        editable: bool = True,
        confirm: Confirm | None = None,
        pick_file: PickFile | None = None,
        notify: Notify | None = None,
        tabs: dict[str, str] | None = None,
    ):
        self.engine = engine
        self.restaurant = restaurant
        self.editable = editable
        self._confirm = confirm or _decline
        self._pick_file = pick_file or _no_file
        self._notify = notify or _log_notify
        # Hosts that outlive one sheet instance pass in their own tab mapping
        if tabs is None:
            tabs = {DEFAULT_TAB_GROUP: INITIAL_TAB}
        self._tabs: dict[str, str] = tabs

    @property
    def rules(self):
        return self.engine.rules

    # --- View model ---

    def prepare_view_model(self) -> dict:
        restaurant = self.engine.get_restaurant(self.restaurant)
        return {
            "restaurant": restaurant.model_dump(mode="json"),
            "totals": restaurant.totals.model_dump(),
            "config": self.rules.model_dump(mode="json"),
            "editable": self.editable,
            "mutation_options": [
                {"key": m.key, "label": m.label, "description": m.description}
                for m in self.rules.mutations
            ],
            "challenge_data": self._prepare_challenge_data(restaurant),
            "team": self._prepare_team(restaurant),
            "alive_count": restaurant.alive_team_members,
            "dead_count": restaurant.dead_team_members,
            "is_eliminated": restaurant.is_eliminated,
            "tabs": dict(self._tabs),
            "tab_names": list(TABS),
            "options": {
                "classes": list(SHEET_CLASSES),
                "template": TEMPLATE,
                "width": self.width,
                "height": self.height,
            },
        }

    def _prepare_challenge_data(self, restaurant: Restaurant) -> list[dict]:
        data = []
        for location in self.rules.ordered_locations():
            record = restaurant.challenge(location.key)
            data.append({
                "key": location.key.value,
                "label": location.label,
                "order": location.order,
                "hazard_min": location.hazard_min,
                "hazard_max": location.hazard_max,
                "judge": location.judge,
                **record.model_dump(),
                "dish_total": record.dish_total,
                "hazard_total": record.hazard_total,
            })
        return data

    def _prepare_team(self, restaurant: Restaurant) -> list[dict]:
        team = []
        for index, member in enumerate(restaurant.team_members):
            mutation = self.rules.mutation(member.mutation)
            team.append({
                "index": index,
                "number": index + 1,
                **member.model_dump(),
                "mutation_label": mutation.label,
                "mutation_description": mutation.description,
                "css_class": "" if member.alive else "dead",
            })
        return team

    # --- Tabs ---

    def change_tab(self, tab: str, group: str = DEFAULT_TAB_GROUP) -> str:
        self._tabs[group] = tab
        return tab

    def active_tab(self, group: str = DEFAULT_TAB_GROUP) -> str:
        return self._tabs.get(group, INITIAL_TAB)

    # --- Actions ---

    async def _report(self, level: str, message: str) -> None:
        result = self._notify(level, message)
        if inspect.isawaitable(result):
            await result

    async def _guarded(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except UnknownLocationError as e:
            await self._report("error", str(e))
            return None

    async def roll_challenge_dice(self):
        return self.engine.roll_challenge_dice(self.restaurant)

    async def roll_shroomp_table(self, location: LocationKey | str):
        return await self._guarded(self.engine.roll_shroomp_table, self.restaurant, location)

    async def roll_hazard_table(self, location: LocationKey | str, bonus: Any = 0):
        try:
            bonus = int(bonus or 0)
        except (TypeError, ValueError):
            await self._report("error", f"Invalid hazard bonus: {bonus!r}")
            return None
        return await self._guarded(
            self.engine.roll_hazard_table, self.restaurant, location, bonus
        )

    async def roll_wild_shroomp(self):
        return self.engine.roll_wild_shroomp(self.restaurant)

    async def roll_single_die(self, purpose: str | None = None):
        return self.engine.roll_single_die(self.restaurant, purpose or "Mutation Roll")

    async def introduce_location(self, location: LocationKey | str):
        return await self._guarded(self.engine.introduce_location, location)

    async def kill_member(self, index: int):
        """Kill a team member after the user confirms."""
        index = _index(index)
        restaurant = self.engine.get_restaurant(self.restaurant)
        if not 0 <= index < len(restaurant.team_members):
            return None
        member = restaurant.team_members[index]
        confirmed = await self._confirm(
            "Kill Team Member",
            f"Are you sure {member.name or 'this team member'} should die? "
            "Their mutation will no longer be available.",
        )
        if not confirmed:
            return None
        return self.engine.kill_team_member(self.restaurant, index)

    async def revive_member(self, index: int):
        return self.engine.revive_team_member(self.restaurant, _index(index))

    async def edit_image(self):
        restaurant = self.engine.get_restaurant(self.restaurant)
        path = await self._pick_file(restaurant.img)
        if not path:
            return None
        return self.engine.set_image(self.restaurant, path)

    async def toggle_shroomp(self, location: LocationKey | str, checked: Any):
        return await self._guarded(
            self.engine.set_challenge_flag,
            self.restaurant, location, ChallengeFlag.EARNED_SHROOMP, checked,
        )

    async def toggle_challenge_complete(self, location: LocationKey | str, checked: Any):
        return await self._guarded(
            self.engine.set_challenge_flag,
            self.restaurant, location, ChallengeFlag.COMPLETED, checked,
        )

    async def dispatch(self, action: str, **params: Any) -> Any:
        """Route a named sheet action to its handler."""
        if not self.editable:
            logger.debug("Ignoring %s on read-only sheet for %s", action, self.restaurant)
            return None

        match action:
            case "roll-challenge-dice":
                return await self.roll_challenge_dice()
            case "roll-shroomp-table":
                return await self.roll_shroomp_table(params.get("location", ""))
            case "roll-hazard-table":
                return await self.roll_hazard_table(
                    params.get("location", ""), params.get("bonus", 0)
                )
            case "roll-wild-shroomp":
                return await self.roll_wild_shroomp()
            case "roll-single-die":
                return await self.roll_single_die(params.get("purpose"))
            case "introduce-location":
                return await self.introduce_location(params.get("location", ""))
            case "kill-member":
                return await self.kill_member(params.get("index", -1))
            case "revive-member":
                return await self.revive_member(params.get("index", -1))
            case "edit-image":
                return await self.edit_image()
            case "toggle-shroomp":
                return await self.toggle_shroomp(
                    params.get("location", ""), params.get("checked", False)
                )
            case "complete-challenge":
                return await self.toggle_challenge_complete(
                    params.get("location", ""), params.get("checked", False)
                )
            case "change-tab":
                return self.change_tab(
                    params.get("tab", INITIAL_TAB), params.get("group", DEFAULT_TAB_GROUP)
                )
            case _:
                raise SheetError(f"Unknown sheet action '{action}'.")


ACTIONS = (
    "roll-challenge-dice",
    "roll-shroomp-table",
    "roll-hazard-table",
    "roll-wild-shroomp",
    "roll-single-die",
    "introduce-location",
    "kill-member",
    "revive-member",
    "edit-image",
    "toggle-shroomp",
    "complete-challenge",
    "change-tab",
)
