"""Progress statistics for a single character and a per-user overview."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from xptrack.metrics.level_table import LevelTable
from xptrack.metrics.schemas import Snapshot
from xptrack.metrics.series import endpoint_rate, normalize_snapshots
from xptrack.statistics.schemas import CharacterSummaryRow, ProgressStats, StatisticsSummary

STATS_AVERAGE_ENTRIES = 7


def compute_progress_stats(
    snapshots: Iterable[Snapshot],
    level_table: LevelTable,
    average_entries: int = STATS_AVERAGE_ENTRIES,
) -> ProgressStats | None:
    """Summary card for one character, or ``None`` without any snapshots.

    The average uses the last ``average_entries`` snapshots regardless of
    their dates.
    """
    history = normalize_snapshots(snapshots)
    if not history:
        return None

    first, last = history[0], history[-1]
    level = level_table.resolve_level(last.level, last.xp)
    # Halves round up.
    avg_daily = math.floor(endpoint_rate(history[-average_entries:]) + 0.5)
    xp_needed = level_table.xp_to_next(level)

    return ProgressStats(
        total_logs=len(history),
        current_level=level,
        current_xp=last.xp,
        avg_daily_xp=avg_daily,
        xp_needed=xp_needed,
        eta_days=math.ceil(xp_needed / avg_daily) if avg_daily > 0 else None,
        first_date=first.date,
        last_date=last.date,
    )


def summarize_characters(rows: Sequence[CharacterSummaryRow]) -> StatisticsSummary:
    """Totals across a user's characters. An empty list gives zeros."""
    if not rows:
        return StatisticsSummary()

    return StatisticsSummary(
        total_characters=len(rows),
        max_level=max(r.level for r in rows),
        total_xp=sum(r.total_xp for r in rows),
        average_daily_xp=sum(r.daily_average for r in rows) / len(rows),
        characters=list(rows),
    )
