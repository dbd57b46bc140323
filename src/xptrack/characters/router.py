"""Character endpoints: registration, snapshots, metrics, stats."""

from __future__ import annotations

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from xptrack.auth.dependencies import Identity, get_current_identity
from xptrack.characters import service
from xptrack.characters.schemas import (
    CharacterCreateRequest,
    CharacterResponse,
    LogsResponse,
    SnapshotCreateRequest,
    SnapshotResponse,
)
from xptrack.config import Settings
from xptrack.db.models import Character
from xptrack.dependencies import get_app_settings, get_db, get_level_table, get_now
from xptrack.metrics.engine import MetricsOptions, compute_metrics
from xptrack.metrics.level_table import LevelTable
from xptrack.metrics.schemas import DerivedMetrics
from xptrack.metrics.series import daily_gains
from xptrack.statistics.schemas import CharacterStatsResponse
from xptrack.statistics.service import compute_progress_stats

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/characters", tags=["Characters"])


async def _owned_or_404(db: AsyncSession, character_id: str, identity: Identity) -> Character:
    character = await service.get_owned_character(db, character_id, identity.user_id)
    if character is None:
        raise HTTPException(status_code=404, detail="Character not found")
    return character


@router.get("", response_model=list[CharacterResponse])
async def list_characters(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> list[Character]:
    """The caller's characters, ordered by name."""
    return await service.list_characters(db, identity.user_id)


@router.post("", response_model=CharacterResponse, status_code=201)
async def create_character(
    body: CharacterCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> Character:
    return await service.create_character(
        db, identity.user_id, body.name, body.world, body.vocation, body.category
    )


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@router.get("/{character_id}/logs", response_model=LogsResponse)
async def get_logs(
    character_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> LogsResponse:
    """All snapshots, newest first."""
    await _owned_or_404(db, character_id, identity)
    snapshots = await service.get_snapshots(db, character_id)
    return LogsResponse(
        logs=[SnapshotResponse.model_validate(s) for s in reversed(snapshots)],
        gains=daily_gains(snapshots),
    )


@router.post("/{character_id}/logs", response_model=SnapshotResponse, status_code=201)
async def record_snapshot(
    character_id: str,
    body: SnapshotCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> SnapshotResponse:
    """Record one snapshot. Re-posting the same date overwrites it."""
    await _owned_or_404(db, character_id, identity)
    snapshot = await service.record_snapshot(db, character_id, body.date or now.date(), body.level, body.xp)
    logger.info("snapshot_recorded", character_id=character_id, date=snapshot.date.isoformat(), level=snapshot.level)
    return SnapshotResponse.model_validate(snapshot)


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@router.get("/{character_id}/metrics", response_model=DerivedMetrics)
async def get_metrics(
    character_id: str,
    window_days: int | None = Query(None, ge=1, le=365),
    target_xp: int | None = Query(None, ge=0),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    settings: Settings = Depends(get_app_settings),
) -> DerivedMetrics:
    """Dashboard metrics computed from the full snapshot history."""
    await _owned_or_404(db, character_id, identity)
    snapshots = await service.get_snapshots(db, character_id)
    options = MetricsOptions.from_settings(settings, recent_window_days=window_days, target_xp=target_xp)
    return compute_metrics(snapshots, now, options)


@router.get("/{character_id}/stats", response_model=CharacterStatsResponse)
async def get_stats(
    character_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    level_table: LevelTable = Depends(get_level_table),
) -> CharacterStatsResponse:
    await _owned_or_404(db, character_id, identity)
    snapshots = await service.get_snapshots(db, character_id)
    return CharacterStatsResponse(
        logs=snapshots,
        gains=daily_gains(snapshots),
        stats=compute_progress_stats(snapshots, level_table),
    )
