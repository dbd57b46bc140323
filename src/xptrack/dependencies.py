"""Shared FastAPI dependencies."""

from datetime import datetime, timezone

from xptrack.config import Settings, get_settings
from xptrack.database import get_session as _get_session
from xptrack.metrics.level_table import LevelTable

get_db = _get_session


def get_now() -> datetime:
    """Request clock. Tests override this to pin "today"."""
    return datetime.now(timezone.utc)


def get_level_table() -> LevelTable:
    return LevelTable.from_settings(get_settings())


def get_app_settings() -> Settings:
    return get_settings()
