"""Request/response schemas for character and snapshot endpoints."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from xptrack.metrics.schemas import DailyGain


class CharacterCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=64)
    world: str = Field(..., min_length=2, max_length=64)
    vocation: str = Field(..., min_length=2, max_length=32)
    category: str | None = Field(None, max_length=32)

    @field_validator("name", "world", "vocation")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class CharacterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    world: str
    vocation: str
    category: str | None = None


class SnapshotCreateRequest(BaseModel):
    """Record a level/XP observation. ``date`` defaults to today (UTC)."""

    date: dt.date | None = None
    level: int = Field(..., ge=0)
    xp: int = Field(..., ge=0)


class SnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    level: int
    xp: int


class LogsResponse(BaseModel):
    """Snapshots newest first, with the chronological gain series for charts."""

    logs: list[SnapshotResponse]
    gains: list[DailyGain] = []
