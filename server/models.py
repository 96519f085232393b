"""Pydantic request/response models for the API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _strip_null_bytes(v: str) -> str:
    """Remove null bytes from user-supplied strings."""
    return v.replace("\x00", "")


# --- Restaurants ---


class TeamMemberRequest(BaseModel):
    name: str = Field(default="", max_length=64)
    mutation: str = ""

    @field_validator("name")
    @classmethod
    def _sanitize_name(cls, v: str) -> str:
        return _strip_null_bytes(v)


class CreateRestaurantRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    members: list[TeamMemberRequest] | None = None
    img: str | None = None

    @field_validator("name")
    @classmethod
    def _sanitize_name(cls, v: str) -> str:
        return _strip_null_bytes(v)


class UpdateTeamMemberRequest(BaseModel):
    name: str | None = Field(default=None, max_length=64)
    mutation: str | None = None


# --- Sheet actions ---


class SheetActionRequest(BaseModel):
    action: str
    params: dict[str, Any] = Field(default_factory=dict)
    confirmed: bool = False  # answer to the kill confirmation prompt
    img: str | None = None  # file chosen in the image picker


class Notification(BaseModel):
    level: str
    message: str


class SheetActionResponse(BaseModel):
    action: str
    ok: bool
    result: Any = None
    notifications: list[Notification] = Field(default_factory=list)
    sheet: dict


# --- Challenges ---


class ChallengeUpdateRequest(BaseModel):
    presentation: int | None = None
    flavor: int | None = None
    originality: int | None = None
    hazard1: int | None = None
    hazard2: int | None = None
    notes: str | None = Field(default=None, max_length=4000)
    completed: bool | None = None
    earned_shroomp: bool | None = None


class EndGameUpdateRequest(BaseModel):
    presentation_bonus: bool | None = None
    flavor_bonus: bool | None = None
    originality_bonus: bool | None = None
    wild_shroomp: bool | None = None


# --- Roll tables ---


class RollTableResponse(BaseModel):
    table: str
    roll: int
    text: str
