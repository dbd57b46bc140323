"""Log store: characters and their daily snapshots.

Every function takes the request-scoped session explicitly. Snapshots come
back as validated ``Snapshot`` records, ascending by date.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from xptrack.db.models import Character, XPLog
from xptrack.metrics.schemas import CharacterMeta, Snapshot

logger = structlog.get_logger()

XP_LOG_UNIQUE = "xp_logs_character_id_date_key"


async def list_characters(db: AsyncSession, user_id: str) -> list[Character]:
    """The user's characters ordered by name."""
    result = await db.execute(
        select(Character).where(Character.user_id == user_id).order_by(Character.name)
    )
    return list(result.scalars())


async def get_owned_character(db: AsyncSession, character_id: str, user_id: str) -> Character | None:
    """Load a character only if it belongs to ``user_id``."""
    result = await db.execute(
        select(Character).where(Character.id == character_id, Character.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_character(
    db: AsyncSession,
    user_id: str,
    name: str,
    world: str,
    vocation: str,
    category: str | None = None,
) -> Character:
    character = Character(user_id=user_id, name=name, world=world, vocation=vocation, category=category)
    db.add(character)
    await db.commit()
    await db.refresh(character)
    logger.info("character_created", character_id=character.id, user_id=user_id, world=world)
    return character


def _upsert_statement(dialect_name: str, values: dict):
    """INSERT ... ON CONFLICT DO UPDATE for the (character_id, date) key."""
    if dialect_name == "sqlite":
        stmt = sqlite_insert(XPLog).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=["character_id", "date"],
            set_={"level": stmt.excluded.level, "xp": stmt.excluded.xp},
        )
    stmt = pg_insert(XPLog).values(**values)
    return stmt.on_conflict_do_update(
        constraint=XP_LOG_UNIQUE,
        set_={"level": stmt.excluded.level, "xp": stmt.excluded.xp},
    )


async def record_snapshot(
    db: AsyncSession,
    character_id: str,
    snapshot_date: date,
    level: int,
    xp: int,
) -> Snapshot:
    """Write a snapshot. A second write for the same date replaces the first.

    Single-statement upsert on ``(character_id, date)``.
    """
    stmt = _upsert_statement(
        db.get_bind().dialect.name,
        {"character_id": character_id, "date": snapshot_date, "level": level, "xp": xp},
    ).returning(XPLog.date, XPLog.level, XPLog.xp)
    result = await db.execute(stmt)
    row = result.one()
    await db.commit()
    return Snapshot.model_validate(row)


async def get_snapshots(
    db: AsyncSession,
    character_id: str,
    since: date | None = None,
) -> list[Snapshot]:
    """A character's snapshots ascending by date, optionally from ``since`` on."""
    query = select(XPLog).where(XPLog.character_id == character_id)
    if since is not None:
        query = query.where(XPLog.date >= since)
    result = await db.execute(query.order_by(XPLog.date))
    return [Snapshot.model_validate(log) for log in result.scalars()]


async def get_all_character_meta(db: AsyncSession) -> list[CharacterMeta]:
    """Every tracked character, in registration order."""
    result = await db.execute(select(Character).order_by(Character.created_at, Character.id))
    return [CharacterMeta.model_validate(c) for c in result.scalars()]


async def get_recent_snapshots_by_character(
    db: AsyncSession,
    character_ids: list[str],
    since: date,
) -> dict[str, list[Snapshot]]:
    """Snapshots dated ``since`` or later for many characters, grouped by character."""
    if not character_ids:
        return {}

    result = await db.execute(
        select(XPLog)
        .where(XPLog.character_id.in_(character_ids), XPLog.date >= since)
        .order_by(XPLog.character_id, XPLog.date)
    )
    grouped: dict[str, list[Snapshot]] = defaultdict(list)
    for log in result.scalars():
        grouped[log.character_id].append(Snapshot.model_validate(log))
    return dict(grouped)
