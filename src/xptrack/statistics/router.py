"""Statistics overview across the caller's characters."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xptrack.auth.dependencies import Identity, get_current_identity
from xptrack.characters import service as store
from xptrack.config import Settings
from xptrack.dependencies import get_app_settings, get_db, get_now
from xptrack.metrics.series import as_date, endpoint_rate, within_window
from xptrack.statistics.schemas import CharacterSummaryRow, StatisticsSummary
from xptrack.statistics.service import summarize_characters

router = APIRouter(prefix="/api/v1/statistics", tags=["Statistics"])


@router.get("", response_model=StatisticsSummary)
async def statistics_overview(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    settings: Settings = Depends(get_app_settings),
) -> StatisticsSummary:
    """Totals plus one row per character, using the recent-window daily average."""
    today = as_date(now)
    rows = []
    for character in await store.list_characters(db, identity.user_id):
        snapshots = await store.get_snapshots(db, character.id)
        last = snapshots[-1] if snapshots else None
        rows.append(CharacterSummaryRow(
            character_id=character.id,
            name=character.name,
            level=last.level if last else 0,
            total_xp=last.xp if last else 0,
            daily_average=endpoint_rate(within_window(snapshots, today, settings.recent_window_days)),
            days_tracked=len(snapshots),
        ))
    return summarize_characters(rows)
