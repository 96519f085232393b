"""Tests for the click command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from deathcap.cli import cli
from deathcap.engine import RestaurantEngine


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def run(runner, tmp_path):
    def invoke(*args: str, input: str | None = None):
        return runner.invoke(cli, ["--state-dir", str(tmp_path), "--seed", "3", *args], input=input)

    return invoke


@pytest.fixture
def started(run):
    assert run("init", "--name", "CLI Game").exit_code == 0
    result = run(
        "restaurant", "create", "Fungus Grill",
        "--member", "Mo=soupGlands", "--member", "Bea=buttMouth",
    )
    assert result.exit_code == 0, result.output
    return run


def test_init(run, tmp_path):
    result = run("init", "--name", "CLI Game")
    assert result.exit_code == 0
    assert "Game 'CLI Game' initialized." in result.output
    assert RestaurantEngine(tmp_path / "game.json").get_state().name == "CLI Game"


def test_state_without_game(run):
    result = run("state")
    assert result.exit_code == 1
    assert "No game found" in result.output


def test_locations_and_mutations(run):
    result = run("locations")
    assert result.exit_code == 0
    assert "1. Salty Desert (saltyDesert)" in result.output
    assert "hazard 7-12" in result.output

    result = run("mutations")
    assert "curseOfTheMoonLadle: Curse of the Moon Ladle" in result.output


def test_restaurant_create_and_list(started):
    result = started("restaurant", "list")
    assert result.exit_code == 0
    assert "Fungus Grill: 0 shroomps, 2 alive" in result.output


def test_restaurant_create_duplicate(started):
    result = started("restaurant", "create", "Fungus Grill")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_restaurant_show(started):
    started("challenge", "set", "Fungus Grill", "saltyDesert", "--presentation", "4", "--flavor", "2")
    started("challenge", "complete", "Fungus Grill", "saltyDesert")
    result = started("restaurant", "show", "Fungus Grill")
    assert result.exit_code == 0
    assert "=== Fungus Grill ===" in result.output
    assert "1. Mo - Soup Glands" in result.output
    assert "[x] 1. Salty Desert: P4 F2 O0 (dish 6, hazard 0)" in result.output
    assert "Totals: presentation 4  flavor 2" in result.output


def test_restaurant_show_missing(started):
    result = started("restaurant", "show", "Nowhere Diner")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_roll_challenge(started):
    result = started("roll", "challenge", "Fungus Grill")
    assert result.exit_code == 0
    assert "Fungus Grill rolls Challenge Dice" in result.output


def test_roll_hazard_with_moon_ladle(started):
    result = started("roll", "hazard", "Fungus Grill", "shroompLair", "--moon-ladle", "2")
    assert result.exit_code == 0
    assert "Hazard Roll - Shroomp Lair" in result.output
    assert "(+2 bonus = " in result.output


def test_roll_unknown_location(started):
    result = started("roll", "hazard", "Fungus Grill", "nowhere")
    assert result.exit_code == 1
    assert "Unknown location: nowhere" in result.output


def test_roll_shroomp_and_wild(started):
    assert "Shroomp & Dish Theme - Onion Swamp" in started(
        "roll", "shroomp", "Fungus Grill", "onionSwamp"
    ).output
    assert "Wild Shroomp Roll" in started("roll", "wild", "Fungus Grill").output
    assert "Fungus Grill - Mutation Roll: " in started("roll", "die", "Fungus Grill").output


def test_member_kill_confirmed(started):
    result = started("member", "kill", "Fungus Grill", "1", "--yes")
    assert result.exit_code == 0
    assert "Mo has perished!" in result.output


def test_member_kill_declined(started, tmp_path):
    result = started("member", "kill", "Fungus Grill", "1", input="n\n")
    assert result.exit_code == 0
    assert "Nobody died." in result.output
    assert RestaurantEngine(tmp_path / "game.json").get_restaurant("Fungus Grill").alive_team_members == 2


def test_member_revive_and_edit(started):
    started("member", "kill", "Fungus Grill", "2", "--yes")
    assert "Bea is back in the kitchen." in started("member", "revive", "Fungus Grill", "2").output
    result = started("member", "edit", "Fungus Grill", "2", "--name", "Bee", "--mutation", "gastromancy")
    assert "2. Bee (gastromancy)" in result.output


def test_challenge_shroomp_and_endgame(started):
    started("challenge", "complete", "Fungus Grill", "kingsCourt")
    result = started("challenge", "shroomp", "Fungus Grill", "kingsCourt")
    assert "kingsCourt shroomp earned: True" in result.output

    result = started("endgame", "Fungus Grill", "--wild-shroomp")
    assert "Fungus Grill now has 2 shroomps." in result.output


def test_challenge_complete_unknown_location(started):
    result = started("challenge", "complete", "Fungus Grill", "nowhere")
    assert result.exit_code == 1
    assert "Unknown location" in result.output


def test_image(started):
    result = started("image", "Fungus Grill", "grill.png")
    assert "Fungus Grill image: grill.png" in result.output


def test_introduce_and_chat(started):
    result = started("introduce", "meltedMountain")
    assert result.exit_code == 0
    assert "Melted Mountain" in result.output

    result = started("chat", "-n", "1")
    assert "[location]" in result.output


def test_tables(started):
    result = started("tables", "create-defaults")
    assert "Roll tables: Shroomp Types, Dish Themes" in result.output
    result = started("tables", "roll", "Dish Themes")
    assert result.exit_code == 0
    assert "on 'Dish Themes'" in result.output
    result = started("tables", "roll", "Spices")
    assert result.exit_code == 1


def test_image_without_path(started):
    result = started("image", "Fungus Grill", "")
    assert result.exit_code == 1
    assert "image unchanged" in result.output
