"""Click CLI for the Death Cap Saute restaurant sheets."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from deathcap.config import settings
from deathcap.dice import Dice
from deathcap.engine import RestaurantEngine
from deathcap.errors import EngineError
from deathcap.models import LocationKey
from deathcap.roll_tables import create_default_tables
from deathcap.sheet import RestaurantSheet
from deathcap.tables import MOON_LADLE_HAZARD_BONUS

LOCATION_CHOICE = click.Choice([k.value for k in LocationKey])


def get_engine(ctx: click.Context) -> RestaurantEngine:
    return ctx.obj["engine"]


def get_sheet(
    ctx: click.Context, name: str, assume_yes: bool = False, img: str | None = None
) -> RestaurantSheet:
    async def confirm(title: str, content: str) -> bool:
        if assume_yes:
            return True
        return click.confirm(f"{title}: {content}", default=False)

    async def pick_file(current: str | None) -> str | None:
        return img

    def notify(level: str, message: str) -> None:
        click.echo(f"{level.title()}: {message}", err=True)

    return RestaurantSheet(
        get_engine(ctx), name, confirm=confirm, pick_file=pick_file, notify=notify
    )


def run_action(ctx: click.Context, sheet: RestaurantSheet, action: str, **params):
    """Dispatch a sheet action, exiting non-zero if it was rejected."""
    try:
        result = asyncio.run(sheet.dispatch(action, **params))
    except EngineError as e:
        raise click.ClickException(str(e))
    return result


@click.group()
@click.option(
    "--state-dir",
    type=click.Path(path_type=Path),
    default=settings.state_dir,
    help="Directory for game state files.",
)
@click.option("--seed", type=int, default=settings.dice_seed, help="Seed the dice.")
@click.option("--log-level", default=settings.log_level, help="Logging level.")
@click.pass_context
def cli(ctx: click.Context, state_dir: Path, seed: int | None, log_level: str) -> None:
    """Death Cap Saute restaurant sheets and dice."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    dice = Dice.seeded(seed) if seed is not None else Dice()
    ctx.obj["engine"] = RestaurantEngine(state_dir / settings.state_file, dice=dice)


@cli.command()
@click.option("--name", default=settings.default_game_name, help="Name for the game session.")
@click.pass_context
def init(ctx: click.Context, name: str) -> None:
    """Initialize a new game session."""
    state = get_engine(ctx).init_game(name)
    click.echo(f"Game '{state.name}' initialized.")


@cli.command()
@click.pass_context
def state(ctx: click.Context) -> None:
    """Show full game state as JSON."""
    try:
        click.echo(get_engine(ctx).get_state().model_dump_json(indent=2))
    except EngineError as e:
        raise click.ClickException(str(e))


# --- Rules ---


@cli.command()
@click.pass_context
def locations(ctx: click.Context) -> None:
    """List the five challenge locations."""
    for loc in get_engine(ctx).rules.ordered_locations():
        click.echo(
            f"{loc.order}. {loc.label} ({loc.key.value}) - judge {loc.judge}, "
            f"hazard {loc.hazard_min}-{loc.hazard_max}"
        )


@cli.command()
@click.pass_context
def mutations(ctx: click.Context) -> None:
    """List the mutations."""
    for m in get_engine(ctx).rules.mutations:
        click.echo(f"{m.key}: {m.label} - {m.description}")


# --- Restaurants ---


@cli.group()
def restaurant() -> None:
    """Restaurant management commands."""


def _parse_member(value: str) -> tuple[str, str]:
    name, _, mutation = value.partition("=")
    return name.strip(), mutation.strip()


@restaurant.command("create")
@click.argument("name")
@click.option(
    "--member", "members", multiple=True,
    help="Team member as NAME=mutationKey (repeat up to three times).",
)
@click.option("--img", default=None, help="Image path for the restaurant.")
@click.pass_context
def restaurant_create(
    ctx: click.Context, name: str, members: tuple[str, ...], img: str | None
) -> None:
    """Create a restaurant with its team."""
    engine = get_engine(ctx)
    try:
        r = engine.create_restaurant(
            name, [_parse_member(m) for m in members] if members else None, img=img
        )
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created {r.name}")
    for i, member in enumerate(r.team_members, start=1):
        click.echo(f"  {i}. {member.name} ({engine.rules.mutation(member.mutation).label})")


@restaurant.command("list")
@click.pass_context
def restaurant_list(ctx: click.Context) -> None:
    """List restaurants and their shroomp counts."""
    try:
        restaurants = get_engine(ctx).list_restaurants()
    except EngineError as e:
        raise click.ClickException(str(e))
    if not restaurants:
        click.echo("No restaurants.")
        return
    for r in restaurants:
        click.echo(f"{r.name}: {r.totals.shroomps} shroomps, {r.alive_team_members} alive")


@restaurant.command("show")
@click.argument("name")
@click.pass_context
def restaurant_show(ctx: click.Context, name: str) -> None:
    """Show a restaurant sheet."""
    sheet = get_sheet(ctx, name)
    try:
        vm = sheet.prepare_view_model()
    except EngineError as e:
        raise click.ClickException(str(e))
    totals = vm["totals"]
    click.echo(f"=== {vm['restaurant']['name']} ===")
    if vm["is_eliminated"]:
        click.echo("ELIMINATED")
    click.echo(f"Alive: {vm['alive_count']}  Dead: {vm['dead_count']}")
    for member in vm["team"]:
        status = "" if member["alive"] else " [dead]"
        click.echo(f"  {member['number']}. {member['name']} - {member['mutation_label']}{status}")
    click.echo("Challenges:")
    for c in vm["challenge_data"]:
        mark = "x" if c["completed"] else " "
        shroomp = " +shroomp" if c["earned_shroomp"] else ""
        click.echo(
            f"  [{mark}] {c['order']}. {c['label']}: P{c['presentation']} "
            f"F{c['flavor']} O{c['originality']} (dish {c['dish_total']}, "
            f"hazard {c['hazard_total']}){shroomp}"
        )
    click.echo(
        f"Totals: presentation {totals['presentation']}  flavor {totals['flavor']}  "
        f"originality {totals['originality']}  shroomps {totals['shroomps']}"
    )


# --- Rolls ---


@cli.group()
def roll() -> None:
    """Dice rolls for a restaurant."""


@roll.command("challenge")
@click.argument("name")
@click.pass_context
def roll_challenge(ctx: click.Context, name: str) -> None:
    """Roll 5d6 challenge dice."""
    result = run_action(ctx, get_sheet(ctx, name), "roll-challenge-dice")
    click.echo(result.describe(name))


@roll.command("shroomp")
@click.argument("name")
@click.argument("location")
@click.pass_context
def roll_shroomp(ctx: click.Context, name: str, location: str) -> None:
    """Roll the shroomp requirement and dish theme for a location."""
    result = run_action(ctx, get_sheet(ctx, name), "roll-shroomp-table", location=location)
    if result is None:
        ctx.exit(1)
    click.echo(result.describe())


@roll.command("hazard")
@click.argument("name")
@click.argument("location")
@click.option("--bonus", type=int, default=0, help="Flat bonus to the hazard value.")
@click.option(
    "--moon-ladle", type=int, default=0,
    help="Uses of Curse of the Moon Ladle this round (each adds to the hazard value).",
)
@click.pass_context
def roll_hazard(ctx: click.Context, name: str, location: str, bonus: int, moon_ladle: int) -> None:
    """Roll the hazard for a location."""
    total_bonus = bonus + moon_ladle * MOON_LADLE_HAZARD_BONUS
    result = run_action(
        ctx, get_sheet(ctx, name), "roll-hazard-table", location=location, bonus=total_bonus
    )
    if result is None:
        ctx.exit(1)
    click.echo(result.describe())


@roll.command("wild")
@click.argument("name")
@click.pass_context
def roll_wild(ctx: click.Context, name: str) -> None:
    """Roll the end-game wild shroomp."""
    result = run_action(ctx, get_sheet(ctx, name), "roll-wild-shroomp")
    click.echo(result.describe())


@roll.command("die")
@click.argument("name")
@click.option("--purpose", default="Mutation Roll", help="Why the die is rolled.")
@click.pass_context
def roll_die(ctx: click.Context, name: str, purpose: str) -> None:
    """Roll a single d6."""
    total = run_action(ctx, get_sheet(ctx, name), "roll-single-die", purpose=purpose)
    click.echo(f"{name} - {purpose}: {total}")


@cli.command()
@click.argument("location")
@click.pass_context
def introduce(ctx: click.Context, location: str) -> None:
    """Post a location's introduction to the chat."""
    try:
        msg = get_engine(ctx).introduce_location(location)
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(msg.content)


# --- Team ---


@cli.group()
def member() -> None:
    """Team member commands."""


@member.command("kill")
@click.argument("name")
@click.argument("index", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def member_kill(ctx: click.Context, name: str, index: int, yes: bool) -> None:
    """Kill a team member (INDEX counts from 1)."""
    killed = run_action(ctx, get_sheet(ctx, name, assume_yes=yes), "kill-member", index=index - 1)
    if killed is None:
        click.echo("Nobody died.")
        return
    click.echo(f"{killed.name} has perished!")


@member.command("revive")
@click.argument("name")
@click.argument("index", type=int)
@click.pass_context
def member_revive(ctx: click.Context, name: str, index: int) -> None:
    """Bring a team member back (INDEX counts from 1)."""
    revived = run_action(ctx, get_sheet(ctx, name), "revive-member", index=index - 1)
    if revived is not None:
        click.echo(f"{revived.name} is back in the kitchen.")


@member.command("edit")
@click.argument("name")
@click.argument("index", type=int)
@click.option("--name", "member_name", default=None, help="New name for the team member.")
@click.option("--mutation", default=None, help="New mutation key.")
@click.pass_context
def member_edit(
    ctx: click.Context, name: str, index: int, member_name: str | None, mutation: str | None
) -> None:
    """Rename a team member or change their mutation."""
    try:
        updated = get_engine(ctx).update_team_member(
            name, index - 1, member_name=member_name, mutation=mutation
        )
    except EngineError as e:
        raise click.ClickException(str(e))
    if updated is not None:
        click.echo(f"{index}. {updated.name} ({updated.mutation})")


# --- Challenges ---


@cli.group()
def challenge() -> None:
    """Challenge score commands."""


@challenge.command("set")
@click.argument("name")
@click.argument("location", type=LOCATION_CHOICE)
@click.option("--presentation", type=int, default=None)
@click.option("--flavor", type=int, default=None)
@click.option("--originality", type=int, default=None)
@click.option("--hazard1", type=int, default=None)
@click.option("--hazard2", type=int, default=None)
@click.option("--notes", default=None)
@click.pass_context
def challenge_set(ctx: click.Context, name: str, location: str, notes: str | None, **scores) -> None:
    """Record dice assigned to a challenge."""
    try:
        record = get_engine(ctx).update_challenge(name, location, notes=notes, **scores)
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(f"Dish total {record.dish_total}, hazard total {record.hazard_total}")


@challenge.command("complete")
@click.argument("name")
@click.argument("location")
@click.option("--undo", is_flag=True, help="Mark the challenge as not completed.")
@click.pass_context
def challenge_complete(ctx: click.Context, name: str, location: str, undo: bool) -> None:
    """Mark a challenge completed."""
    record = run_action(
        ctx, get_sheet(ctx, name), "complete-challenge", location=location, checked=not undo
    )
    if record is None:
        ctx.exit(1)
    click.echo(f"{location} completed: {record.completed}")


@challenge.command("shroomp")
@click.argument("name")
@click.argument("location")
@click.option("--undo", is_flag=True, help="Clear the earned shroomp.")
@click.pass_context
def challenge_shroomp(ctx: click.Context, name: str, location: str, undo: bool) -> None:
    """Mark a challenge's shroomp as earned."""
    record = run_action(
        ctx, get_sheet(ctx, name), "toggle-shroomp", location=location, checked=not undo
    )
    if record is None:
        ctx.exit(1)
    click.echo(f"{location} shroomp earned: {record.earned_shroomp}")


@cli.command()
@click.argument("name")
@click.option("--presentation-bonus/--no-presentation-bonus", default=None)
@click.option("--flavor-bonus/--no-flavor-bonus", default=None)
@click.option("--originality-bonus/--no-originality-bonus", default=None)
@click.option("--wild-shroomp/--no-wild-shroomp", default=None)
@click.pass_context
def endgame(ctx: click.Context, name: str, **flags) -> None:
    """Set end-game bonus shroomps."""
    try:
        r = get_engine(ctx).set_end_game(name, **flags)
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(f"{r.name} now has {r.totals.shroomps} shroomps.")


@cli.command()
@click.argument("name")
@click.argument("path")
@click.pass_context
def image(ctx: click.Context, name: str, path: str) -> None:
    """Set a restaurant's image."""
    r = run_action(ctx, get_sheet(ctx, name, img=path), "edit-image")
    if r is None:
        click.echo("No image given; image unchanged.", err=True)
        ctx.exit(1)
    click.echo(f"{r.name} image: {r.img}")


# --- Chat ---


@cli.command()
@click.option("--count", "-n", default=20, help="Number of chat messages to show.")
@click.pass_context
def chat(ctx: click.Context, count: int) -> None:
    """Show recent chat messages."""
    try:
        messages = get_engine(ctx).get_chat(count)
    except EngineError as e:
        raise click.ClickException(str(e))
    if not messages:
        click.echo("No chat messages.")
        return
    for msg in messages:
        speaker = f"{msg.speaker}: " if msg.speaker else ""
        click.echo(f"[{msg.category}] {speaker}{msg.content}")


# --- Roll tables ---


@cli.group()
def tables() -> None:
    """Shroomp type and dish theme roll tables."""


@tables.command("create-defaults")
@click.pass_context
def tables_create_defaults(ctx: click.Context) -> None:
    """Create the default roll tables."""
    try:
        created = create_default_tables(get_engine(ctx))
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(f"Roll tables: {', '.join(t.name for t in created)}")


@tables.command("roll")
@click.argument("table_name")
@click.pass_context
def tables_roll(ctx: click.Context, table_name: str) -> None:
    """Roll on a roll table."""
    try:
        value, text = get_engine(ctx).roll_roll_table(table_name)
    except EngineError as e:
        raise click.ClickException(str(e))
    click.echo(f"Rolled {value} on '{table_name}': {text}")
