"""Snapshot upsert statements compile to ON CONFLICT for both backends."""

from datetime import date

from sqlalchemy.dialects import postgresql, sqlite

from xptrack.characters.service import _upsert_statement

VALUES = {"character_id": "c-1", "date": date(2024, 3, 10), "level": 50, "xp": 1000}


def test_postgres_upsert_targets_named_constraint():
    sql = str(_upsert_statement("postgresql", VALUES).compile(dialect=postgresql.dialect()))
    assert "ON CONFLICT ON CONSTRAINT xp_logs_character_id_date_key DO UPDATE" in sql
    assert "level = excluded.level" in sql
    assert "xp = excluded.xp" in sql


def test_sqlite_upsert_targets_key_columns():
    sql = str(_upsert_statement("sqlite", VALUES).compile(dialect=sqlite.dialect()))
    assert "ON CONFLICT (character_id, " in sql
    assert "DO UPDATE SET" in sql
    assert "xp = excluded.xp" in sql
