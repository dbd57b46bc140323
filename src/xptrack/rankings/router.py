"""Leaderboard endpoint."""

from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xptrack.characters import service as store
from xptrack.config import Settings
from xptrack.dependencies import get_app_settings, get_db, get_now
from xptrack.metrics.series import as_date
from xptrack.rankings.engine import compute_rankings
from xptrack.rankings.schemas import RankingsResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/rankings", tags=["Rankings"])


@router.get("", response_model=RankingsResponse)
async def get_rankings(
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    settings: Settings = Depends(get_app_settings),
) -> RankingsResponse:
    """Streak leaderboards over the trailing ranking window (global, by world, by vocation)."""
    window = settings.ranking_window_days
    since = as_date(now) - timedelta(days=window)

    characters = await store.get_all_character_meta(db)
    logs = await store.get_recent_snapshots_by_character(db, [c.id for c in characters], since)
    rankings = compute_rankings(characters, logs, now, window)

    logger.debug("rankings_computed", characters=len(characters), worlds=len(rankings.by_world))
    return rankings
