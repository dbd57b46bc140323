"""Input records and derived-metric responses for the metrics engine."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TrendDirection = Literal["up", "down", "stable", "neutral"]
Tone = Literal["success", "danger", "neutral"]


# --- Inputs ---


class Snapshot(BaseModel):
    """One dated observation of a character's level and cumulative XP."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: dt.date
    level: int = Field(..., ge=0)
    xp: int = Field(..., ge=0)


class CharacterMeta(BaseModel):
    """Character identity fields the ranking engine groups on."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    world: str
    vocation: str


# --- Outputs ---


class DerivedMetrics(BaseModel):
    """Per-character analytics for one point in time. Never persisted."""

    current_level: int = 0
    current_xp: int = 0
    daily_average_recent: float = 0.0
    daily_average_overall: float = 0.0
    eta_to_target: str = "N/A"
    eta_days: int | None = None
    xp_remaining: int = 0
    daily_goal_xp: float = 0.0
    streak_count: int = 0
    goal_streak_count: int = 0
    trend_direction: TrendDirection = "neutral"
    trend_tone: Tone = "neutral"
    trend_delta_percent: float | None = None
    trend_text: str = "No data"
    best_day_gain: int = 0
    best_day_date: dt.date | None = None
    today_gain: int = 0
    today_vs_goal: float = 0.0


class DailyGain(BaseModel):
    """XP gained on one snapshot date relative to the preceding snapshot."""

    date: dt.date
    gain: int
