"""Ranking engine: streak leaderboards across all tracked characters.

Each character is scored from its own trailing-window snapshots with the same
primitives the metrics engine uses, then grouped and sorted by streak. Sorting
is stable, so characters with equal streaks keep their input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from xptrack.metrics.schemas import CharacterMeta, Snapshot
from xptrack.metrics.series import as_date, endpoint_rate, normalize_snapshots, within_window
from xptrack.metrics.streaks import RANKING_STREAK_DAYS, window_presence_streak
from xptrack.rankings.schemas import RankingEntry, RankingsResponse


def normalize_vocation(vocation: str) -> str:
    """``"DRUID"``, ``"druid"`` and ``"Druid"`` all become ``"Druid"``."""
    return vocation[:1].upper() + vocation[1:].lower()


def build_entry(
    character: CharacterMeta,
    snapshots: Iterable[Snapshot],
    today: date,
    window_days: int = RANKING_STREAK_DAYS,
) -> RankingEntry:
    """Score one character. No snapshots in the window means all-zero metrics."""
    recent = within_window(normalize_snapshots(snapshots), today, window_days)
    return RankingEntry(
        character_id=character.id,
        name=character.name,
        world=character.world,
        vocation=character.vocation,
        streak_count=window_presence_streak(recent, today, window_days),
        current_level=recent[-1].level if recent else 0,
        daily_average_recent=endpoint_rate(recent),
    )


def sort_by_streak(entries: Iterable[RankingEntry]) -> list[RankingEntry]:
    return sorted(entries, key=lambda e: e.streak_count, reverse=True)


def group_by(entries: Iterable[RankingEntry], key) -> dict[str, list[RankingEntry]]:
    """Partition entries by ``key(entry)`` in first-seen order, each group sorted by streak."""
    groups: dict[str, list[RankingEntry]] = {}
    for entry in entries:
        groups.setdefault(key(entry), []).append(entry)
    return {name: sort_by_streak(members) for name, members in groups.items()}


def compute_rankings(
    characters: Sequence[CharacterMeta],
    recent_logs_by_character: Mapping[str, Sequence[Snapshot]],
    now: datetime | date,
    window_days: int = RANKING_STREAK_DAYS,
) -> RankingsResponse:
    """Build the global, per-world and per-vocation leaderboards."""
    today = as_date(now)
    entries = [
        build_entry(char, recent_logs_by_character.get(char.id, ()), today, window_days)
        for char in characters
    ]

    distinct_vocations = list(dict.fromkeys(char.vocation for char in characters))

    return RankingsResponse(
        global_=sort_by_streak(entries),
        by_world=group_by(entries, lambda e: e.world),
        by_vocation=group_by(entries, lambda e: normalize_vocation(e.vocation)),
        distinct_vocations=distinct_vocations,
    )
