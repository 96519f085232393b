"""Restaurant sheet routes: view models, sheet actions, and field updates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from deathcap.engine import RestaurantEngine
from deathcap.errors import EngineError, RestaurantNotFoundError, SheetError
from deathcap.models import ChallengeFlag, ChatMessage
from deathcap.roll_tables import create_default_tables
from deathcap.sheet import RestaurantSheet
from server.config import settings
from server.models import (
    ChallengeUpdateRequest,
    CreateRestaurantRequest,
    EndGameUpdateRequest,
    Notification,
    RollTableResponse,
    SheetActionRequest,
    SheetActionResponse,
    UpdateTeamMemberRequest,
)
from server.store import get_engine, sheet_tabs

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATES_DIR = Path(settings.templates_dir) if settings.templates_dir else (
    Path(__file__).resolve().parent.parent / "templates"
)
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["dead_class"] = lambda alive: "" if alive else "dead"


def _engine_errors(e: EngineError) -> HTTPException:
    if isinstance(e, RestaurantNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


def _serialize(result: Any) -> Any:
    if result is None or isinstance(result, (bool, int, str)):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    # Resolver results: table entry details plus the dice that picked them
    return {**result.details(), "dice": result.roll.to_record().model_dump()}


def _open_sheet(engine: RestaurantEngine, name: str, **kwargs: Any) -> RestaurantSheet:
    """Build a sheet sharing the server-wide tab state; raises for unknown restaurants."""
    engine.get_restaurant(name)
    return RestaurantSheet(engine, name, tabs=sheet_tabs(name), **kwargs)


def _view_model(engine: RestaurantEngine, name: str) -> dict:
    try:
        return _open_sheet(engine, name).prepare_view_model()
    except EngineError as e:
        raise _engine_errors(e)


# --- Restaurants ---


@router.post("/restaurants")
async def create_restaurant(
    req: CreateRestaurantRequest, engine: RestaurantEngine = Depends(get_engine)
):
    members = [(m.name, m.mutation) for m in req.members] if req.members is not None else None
    try:
        restaurant = engine.create_restaurant(req.name, members, img=req.img)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return restaurant.model_dump(mode="json")


@router.get("/restaurants")
async def list_restaurants(engine: RestaurantEngine = Depends(get_engine)):
    return [r.model_dump(mode="json") for r in engine.list_restaurants()]


@router.get("/restaurants/{name}/sheet")
async def get_sheet(name: str, engine: RestaurantEngine = Depends(get_engine)):
    return _view_model(engine, name)


@router.get("/restaurants/{name}/sheet.html", response_class=HTMLResponse)
async def render_sheet(
    name: str, request: Request, engine: RestaurantEngine = Depends(get_engine)
):
    context = _view_model(engine, name)
    return templates.TemplateResponse(request, context["options"]["template"], context)


@router.post("/restaurants/{name}/actions", response_model=SheetActionResponse)
async def sheet_action(
    name: str, req: SheetActionRequest, engine: RestaurantEngine = Depends(get_engine)
):
    notifications: list[Notification] = []

    async def confirm(title: str, content: str) -> bool:
        return req.confirmed

    async def pick_file(current: str | None) -> str | None:
        return req.img

    def notify(level: str, message: str) -> None:
        notifications.append(Notification(level=level, message=message))

    try:
        sheet = _open_sheet(engine, name, confirm=confirm, pick_file=pick_file, notify=notify)
        result = await sheet.dispatch(req.action, **req.params)
        view = sheet.prepare_view_model()
    except SheetError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EngineError as e:
        raise _engine_errors(e)

    if notifications:
        logger.info("Sheet action %s for %s: %s", req.action, name, notifications[0].message)
    return SheetActionResponse(
        action=req.action,
        ok=not notifications,
        result=_serialize(result),
        notifications=notifications,
        sheet=view,
    )


@router.patch("/restaurants/{name}/challenges/{location}")
async def update_challenge(
    name: str,
    location: str,
    req: ChallengeUpdateRequest,
    engine: RestaurantEngine = Depends(get_engine),
):
    scores = req.model_dump(exclude={"notes", "completed", "earned_shroomp"})
    try:
        record = engine.update_challenge(name, location, notes=req.notes, **scores)
        if req.completed is not None:
            record = engine.set_challenge_flag(name, location, ChallengeFlag.COMPLETED, req.completed)
        if req.earned_shroomp is not None:
            record = engine.set_challenge_flag(
                name, location, ChallengeFlag.EARNED_SHROOMP, req.earned_shroomp
            )
    except EngineError as e:
        raise _engine_errors(e)
    return record.model_dump()


@router.patch("/restaurants/{name}/end-game")
async def update_end_game(
    name: str, req: EndGameUpdateRequest, engine: RestaurantEngine = Depends(get_engine)
):
    try:
        restaurant = engine.set_end_game(name, **req.model_dump())
    except EngineError as e:
        raise _engine_errors(e)
    return {"end_game": restaurant.end_game.model_dump(), "totals": restaurant.totals.model_dump()}


@router.patch("/restaurants/{name}/members/{index}")
async def update_member(
    name: str,
    index: int,
    req: UpdateTeamMemberRequest,
    engine: RestaurantEngine = Depends(get_engine),
):
    try:
        member = engine.update_team_member(name, index, member_name=req.name, mutation=req.mutation)
    except EngineError as e:
        raise _engine_errors(e)
    if member is None:
        raise HTTPException(status_code=404, detail="Team member not found")
    return member.model_dump()


# --- Locations, chat, roll tables ---


@router.post("/locations/{location}/introduce", response_model=ChatMessage)
async def introduce_location(location: str, engine: RestaurantEngine = Depends(get_engine)):
    try:
        return engine.introduce_location(location)
    except EngineError as e:
        raise _engine_errors(e)


@router.get("/chat", response_model=list[ChatMessage])
async def get_chat(limit: int = 20, engine: RestaurantEngine = Depends(get_engine)):
    return engine.get_chat(limit)


@router.post("/roll-tables/defaults")
async def create_roll_tables(engine: RestaurantEngine = Depends(get_engine)):
    return [t.model_dump() for t in create_default_tables(engine)]


@router.post("/roll-tables/{table_name}/roll", response_model=RollTableResponse)
async def roll_table(table_name: str, engine: RestaurantEngine = Depends(get_engine)):
    try:
        value, text = engine.roll_roll_table(table_name)
    except EngineError as e:
        raise _engine_errors(e)
    return RollTableResponse(table=table_name, roll=value, text=text)
