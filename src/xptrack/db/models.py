"""ORM models for tracked characters and their daily XP snapshots."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xptrack.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Characters
# ---------------------------------------------------------------------------


class Character(Base):
    """A game character registered by a user."""

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    world: Mapped[str] = mapped_column(String(64), nullable=False)
    vocation: Mapped[str] = mapped_column(String(32), nullable=False)
    category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    logs: Mapped[list[XPLog]] = relationship("XPLog", back_populates="character", cascade="all, delete-orphan")


# ---------------------------------------------------------------------------
# XP snapshots
# ---------------------------------------------------------------------------


class XPLog(Base):
    """One daily level/XP snapshot. At most one row per character per date."""

    __tablename__ = "xp_logs"
    __table_args__ = (
        UniqueConstraint("character_id", "date", name="xp_logs_character_id_date_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("characters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[Any] = mapped_column(Date, nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    xp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    character: Mapped[Character] = relationship("Character", back_populates="logs")
