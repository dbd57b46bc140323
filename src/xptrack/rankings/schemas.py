"""Leaderboard response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RankingEntry(BaseModel):
    character_id: str
    name: str
    world: str
    vocation: str
    streak_count: int = 0
    current_level: int = 0
    daily_average_recent: float = 0.0


class RankingsResponse(BaseModel):
    """Global list plus per-world and per-vocation groupings, each sorted by streak."""

    model_config = ConfigDict(populate_by_name=True)

    global_: list[RankingEntry] = Field(default_factory=list, alias="global")
    by_world: dict[str, list[RankingEntry]] = Field(default_factory=dict)
    by_vocation: dict[str, list[RankingEntry]] = Field(default_factory=dict)
    distinct_vocations: list[str] = Field(default_factory=list)
