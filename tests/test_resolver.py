"""Tests for table lookups and roll descriptions."""

import pytest

from deathcap.errors import EngineError, UnknownLocationError
from deathcap.models import LocationKey
from deathcap.resolver import TableResolver, describe_location, lookup
from deathcap.tables import DEFAULT_RULES, SALTY_DESERT, SHROOMP_LAIR
from tests.conftest import ScriptedDice


def resolver(*faces: int) -> TableResolver:
    return TableResolver(DEFAULT_RULES, ScriptedDice(*faces))


def test_lookup_every_face():
    for location in DEFAULT_RULES.locations:
        for face in range(1, 7):
            assert lookup(location.shroomp_table, face).roll == face
            assert lookup(location.hazard_table, face).roll == face


def test_lookup_missing_row():
    with pytest.raises(EngineError, match="No table row for roll 7"):
        lookup(SALTY_DESERT.hazard_table, 7)


def test_challenge_dice():
    result = resolver(6, 2, 4, 1, 3).roll_challenge_dice()
    assert result.results == [6, 2, 4, 1, 3]
    text = result.describe("Fungus Grill")
    assert "Fungus Grill rolls Challenge Dice" in text
    assert "[6] [2] [4] [1] [3]" in text
    assert "Presentation, Flavor, Originality, Hazard 1, Hazard 2" in text


def test_shroomp_roll():
    result = resolver(3).roll_shroomp(LocationKey.KINGS_COURT)
    assert result.entry.requirement == "Pair in Dish dice"
    assert result.entry.dish_theme == "Royal Feast"
    assert result.details()["location"] == "kingsCourt"
    assert "Dish Theme: Royal Feast" in result.describe()


def test_shroomp_lair_hazard_one():
    result = resolver(1).roll_hazard("shroompLair")
    assert result.entry.name == "The Gelatinous Oubliette"
    assert result.entry.value == 7
    assert result.effective_value == 7
    text = result.describe()
    assert "Added Penalty (if failed): Your Team dies & don't present Dish" in text
    assert "must meet or beat 7" in text
    assert "bonus" not in text


@pytest.mark.parametrize("bonus,expected", [(0, 7), (1, 8), (-2, 5)])
def test_hazard_bonus(bonus, expected):
    result = resolver(1).roll_hazard(LocationKey.SHROOMP_LAIR, bonus)
    assert result.effective_value == expected
    assert result.details()["effective_value"] == expected
    assert result.details()["value"] == 7


def test_hazard_bonus_description():
    text = resolver(1).roll_hazard(LocationKey.SHROOMP_LAIR, 1).describe()
    assert "Hazard Value: 7 (+1 bonus = 8)" in text
    assert "must meet or beat 8" in text


def test_hazard_without_penalty():
    text = resolver(2).roll_hazard(LocationKey.SALTY_DESERT).describe()
    assert "Cactus Gnomes" in text
    assert "Added Penalty" not in text


def test_unknown_location_rolls_nothing():
    r = resolver(4)
    with pytest.raises(UnknownLocationError):
        r.roll_hazard("nowhere")
    with pytest.raises(UnknownLocationError):
        r.roll_shroomp("nowhere")
    assert r.dice.faces == [4]


def test_wild_shroomp():
    result = resolver(6).roll_wild_shroomp()
    assert result.entry.name == "Survivor Shroomp"
    assert "Requirement: All team members alive" in result.describe()


def test_single_die():
    assert resolver(5).roll_single_die().total == 5


def test_describe_location():
    text = describe_location(SHROOMP_LAIR)
    assert text.startswith(SHROOMP_LAIR.label)
    assert f"Judge: {SHROOMP_LAIR.judge}" in text
    assert "Hazard Range: 7 - 12" in text
