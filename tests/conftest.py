"""Shared test fixtures for the restaurant sheet engine and server."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from deathcap.dice import Dice
from deathcap.engine import RestaurantEngine


class ScriptedDice(Dice):
    """Dice that return a fixed sequence of faces."""

    def __init__(self, *faces: int):
        super().__init__()
        self.faces = list(faces)

    def die(self, sides: int) -> int:
        return self.faces.pop(0)


def script(engine: RestaurantEngine, *faces: int) -> ScriptedDice:
    """Swap the engine's dice for a scripted sequence."""
    dice = ScriptedDice(*faces)
    engine.resolver.dice = dice
    return dice


@pytest.fixture
def engine(tmp_path):
    return RestaurantEngine(tmp_path / "game.json", dice=Dice.seeded(7))


@pytest.fixture
def game(engine):
    engine.init_game("Test Game")
    return engine


@pytest.fixture
def kitchen(game):
    """A game with one restaurant using the default team."""
    game.create_restaurant("Fungus Grill")
    return game


@pytest_asyncio.fixture
async def client():
    """Create a test client backed by a fresh in-memory engine."""
    from server.app import app
    from server.store import close_engine, init_engine

    init_engine(in_memory=True, dice=Dice.seeded(7))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    close_engine()


@pytest_asyncio.fixture
async def restaurant(client: AsyncClient) -> dict:
    resp = await client.post("/restaurants", json={"name": "Grill"})
    assert resp.status_code == 200
    return resp.json()
