"""Statistics response models."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel

from xptrack.metrics.schemas import DailyGain, Snapshot


class ProgressStats(BaseModel):
    total_logs: int
    current_level: int
    current_xp: int
    avg_daily_xp: int
    xp_needed: int
    eta_days: int | None = None
    first_date: dt.date
    last_date: dt.date


class CharacterStatsResponse(BaseModel):
    logs: list[Snapshot]
    gains: list[DailyGain] = []
    stats: ProgressStats | None = None


class CharacterSummaryRow(BaseModel):
    """One character's line in the statistics overview."""

    character_id: str
    name: str
    level: int = 0
    total_xp: int = 0
    daily_average: float = 0.0
    days_tracked: int = 0


class StatisticsSummary(BaseModel):
    total_characters: int = 0
    max_level: int = 0
    total_xp: int = 0
    average_daily_xp: float = 0.0
    characters: list[CharacterSummaryRow] = []
