"""Tests for the HTTP sheet routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from server.store import get_engine
from tests.conftest import script


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_create_restaurant(client: AsyncClient):
    resp = await client.post(
        "/restaurants",
        json={"name": "Grill", "members": [{"name": "Mo", "mutation": "soupGlands"}], "img": "g.png"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Grill"
    assert data["team_members"] == [{"name": "Mo", "mutation": "soupGlands", "alive": True}]
    assert data["totals"]["shroomps"] == 0

    resp = await client.get("/restaurants")
    assert [r["name"] for r in resp.json()] == ["Grill"]


@pytest.mark.asyncio
async def test_create_restaurant_duplicate(client: AsyncClient, restaurant: dict):
    resp = await client.post("/restaurants", json={"name": "Grill"})
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_restaurant_validation(client: AsyncClient):
    resp = await client.post("/restaurants", json={"name": ""})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_sheet_view_model(client: AsyncClient, restaurant: dict):
    resp = await client.get("/restaurants/Grill/sheet")
    assert resp.status_code == 200
    vm = resp.json()
    assert vm["alive_count"] == 3
    assert len(vm["challenge_data"]) == 5
    assert vm["challenge_data"][0]["key"] == "saltyDesert"


@pytest.mark.asyncio
async def test_sheet_not_found(client: AsyncClient):
    resp = await client.get("/restaurants/Nowhere/sheet")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_sheet_html(client: AsyncClient, restaurant: dict):
    get_engine().kill_team_member("Grill", 0)
    resp = await client.get("/restaurants/Grill/sheet.html")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "<h1>Grill</h1>" in resp.text
    assert "team-member dead" in resp.text
    assert 'data-action="roll-challenge-dice"' in resp.text


@pytest.mark.asyncio
async def test_action_roll_hazard(client: AsyncClient, restaurant: dict):
    script(get_engine(), 1)
    resp = await client.post(
        "/restaurants/Grill/actions",
        json={"action": "roll-hazard-table", "params": {"location": "shroompLair", "bonus": 1}},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"]
    assert data["result"]["name"] == "The Gelatinous Oubliette"
    assert data["result"]["effective_value"] == 8
    assert data["result"]["roll"] == 1
    assert data["result"]["dice"] == {"formula": "1d6", "results": [1], "total": 1}


@pytest.mark.asyncio
async def test_action_unknown_location(client: AsyncClient, restaurant: dict):
    resp = await client.post(
        "/restaurants/Grill/actions",
        json={"action": "roll-shroomp-table", "params": {"location": "nowhere"}},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert not data["ok"]
    assert data["result"] is None
    assert data["notifications"] == [{"level": "error", "message": "Unknown location: nowhere"}]


@pytest.mark.asyncio
async def test_action_kill_requires_confirmation(client: AsyncClient, restaurant: dict):
    resp = await client.post(
        "/restaurants/Grill/actions", json={"action": "kill-member", "params": {"index": 0}}
    )
    assert resp.json()["result"] is None
    assert resp.json()["sheet"]["alive_count"] == 3

    resp = await client.post(
        "/restaurants/Grill/actions",
        json={"action": "kill-member", "params": {"index": 0}, "confirmed": True},
    )
    data = resp.json()
    assert data["result"] == {"name": "Chef 1", "mutation": "knifeFingers", "alive": False}
    assert data["sheet"]["alive_count"] == 2


@pytest.mark.asyncio
async def test_action_edit_image(client: AsyncClient, restaurant: dict):
    resp = await client.post(
        "/restaurants/Grill/actions", json={"action": "edit-image", "img": "grill.png"}
    )
    assert resp.json()["sheet"]["restaurant"]["img"] == "grill.png"


@pytest.mark.asyncio
async def test_action_unknown(client: AsyncClient, restaurant: dict):
    resp = await client.post("/restaurants/Grill/actions", json={"action": "bake"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_action_missing_restaurant(client: AsyncClient):
    resp = await client.post("/restaurants/Nowhere/actions", json={"action": "roll-challenge-dice"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_challenge(client: AsyncClient, restaurant: dict):
    resp = await client.patch(
        "/restaurants/Grill/challenges/onionSwamp",
        json={"presentation": 5, "flavor": 4, "originality": 3, "completed": True, "earned_shroomp": True},
    )
    assert resp.status_code == 200
    assert resp.json()["completed"]

    totals = (await client.get("/restaurants/Grill/sheet")).json()["totals"]
    assert totals == {"presentation": 5, "flavor": 4, "originality": 3, "shroomps": 1}


@pytest.mark.asyncio
async def test_update_challenge_unknown_location(client: AsyncClient, restaurant: dict):
    resp = await client.patch("/restaurants/Grill/challenges/nowhere", json={"presentation": 5})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_end_game(client: AsyncClient, restaurant: dict):
    resp = await client.patch(
        "/restaurants/Grill/end-game", json={"presentation_bonus": True, "wild_shroomp": True}
    )
    assert resp.status_code == 200
    assert resp.json()["totals"]["shroomps"] == 2


@pytest.mark.asyncio
async def test_update_member(client: AsyncClient, restaurant: dict):
    resp = await client.patch("/restaurants/Grill/members/1", json={"name": "Gus"})
    assert resp.json()["name"] == "Gus"

    resp = await client.patch("/restaurants/Grill/members/9", json={"name": "Nobody"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_introduce_location_and_chat(client: AsyncClient):
    resp = await client.post("/locations/shroompLair/introduce")
    assert resp.status_code == 200
    assert resp.json()["category"] == "location"

    resp = await client.get("/chat", params={"limit": 1})
    assert resp.json()[0]["content"].startswith("Shroomp Lair")

    resp = await client.post("/locations/nowhere/introduce")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_roll_tables(client: AsyncClient):
    resp = await client.post("/roll-tables/defaults")
    assert [t["name"] for t in resp.json()] == ["Shroomp Types", "Dish Themes"]

    script(get_engine(), 6)
    resp = await client.post("/roll-tables/Shroomp Types/roll")
    assert resp.json() == {"table": "Shroomp Types", "roll": 6, "text": "Royal Truffle"}

    resp = await client.post("/roll-tables/Spices/roll")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_introduce_action_missing_restaurant(client: AsyncClient):
    chat_before = len(get_engine().get_state().chat)
    resp = await client.post(
        "/restaurants/Nowhere/actions",
        json={"action": "introduce-location", "params": {"location": "saltyDesert"}},
    )
    assert resp.status_code == 404
    assert len(get_engine().get_state().chat) == chat_before


@pytest.mark.asyncio
async def test_change_tab_missing_restaurant(client: AsyncClient):
    resp = await client.post(
        "/restaurants/Nowhere/actions",
        json={"action": "change-tab", "params": {"tab": "challenges"}},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_change_tab_is_remembered(client: AsyncClient, restaurant: dict):
    resp = await client.post(
        "/restaurants/Grill/actions",
        json={"action": "change-tab", "params": {"tab": "challenges"}},
    )
    assert resp.json()["sheet"]["tabs"] == {"primary": "challenges"}

    resp = await client.get("/restaurants/Grill/sheet")
    assert resp.json()["tabs"] == {"primary": "challenges"}

    resp = await client.get("/restaurants/Grill/sheet.html")
    assert 'class="tab active" data-tab="challenges"' in resp.text


@pytest.mark.asyncio
async def test_action_invalid_hazard_bonus(client: AsyncClient, restaurant: dict):
    resp = await client.post(
        "/restaurants/Grill/actions",
        json={"action": "roll-hazard-table", "params": {"location": "shroompLair", "bonus": "x"}},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert not data["ok"]
    assert data["result"] is None
    assert data["notifications"] == [{"level": "error", "message": "Invalid hazard bonus: 'x'"}]


@pytest.mark.asyncio
async def test_chat_zero_limit(client: AsyncClient):
    resp = await client.get("/chat", params={"limit": 0})
    assert resp.status_code == 200
    assert resp.json() == []
