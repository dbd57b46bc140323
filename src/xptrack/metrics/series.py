"""Snapshot series helpers shared by the metrics and ranking engines."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from xptrack.metrics.schemas import DailyGain, Snapshot


def as_date(now: datetime | date) -> date:
    """Calendar day of ``now``. Time-of-day is dropped, timezone is kept as given."""
    return now.date() if isinstance(now, datetime) else now


def normalize_snapshots(snapshots: Iterable[Snapshot]) -> list[Snapshot]:
    """Sort ascending by date and keep the last entry seen for each date.

    Returns a new list; the input is never mutated.
    """
    by_date: dict[date, Snapshot] = {}
    for snap in snapshots:
        by_date[snap.date] = snap
    return [by_date[d] for d in sorted(by_date)]


def within_window(snapshots: Sequence[Snapshot], today: date, window_days: int) -> list[Snapshot]:
    """Snapshots dated on or after ``today - window_days``."""
    cutoff = today - timedelta(days=window_days)
    return [s for s in snapshots if s.date >= cutoff]


def endpoint_rate(snapshots: Sequence[Snapshot]) -> float:
    """Mean XP per entry across the span: (last - first) / (count - 1).

    Not a mean of per-day deltas. Fewer than two
    snapshots give 0.
    """
    if len(snapshots) < 2:
        return 0.0
    return (snapshots[-1].xp - snapshots[0].xp) / (len(snapshots) - 1)


def daily_gains(snapshots: Sequence[Snapshot]) -> list[DailyGain]:
    """Gain of each snapshot over the one before it, clamped at 0.

    The first snapshot always contributes 0. XP regressions (resets) also
    count as 0 rather than a negative gain.
    """
    gains: list[DailyGain] = []
    prev_xp: int | None = None
    for snap in snapshots:
        gain = 0 if prev_xp is None else max(0, snap.xp - prev_xp)
        gains.append(DailyGain(date=snap.date, gain=gain))
        prev_xp = snap.xp
    return gains
