"""Streak algorithms.

Every streak walks backward one calendar day at a time starting at "today"
and stops at the first day that does not qualify. The variants differ only in
the per-day predicate and in how far back the walk may go.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, timedelta

from xptrack.metrics.schemas import Snapshot
from xptrack.metrics.series import daily_gains

RANKING_STREAK_DAYS = 7


def walk_streak(
    today: date,
    qualifies: Callable[[date], bool],
    max_days: int | None = None,
    earliest: date | None = None,
) -> int:
    """Count consecutive qualifying days ending at ``today``.

    The walk stops at the first non-qualifying day, after ``max_days`` days,
    or before stepping past ``earliest``.
    """
    count = 0
    day = today
    while max_days is None or count < max_days:
        if earliest is not None and day < earliest:
            break
        if not qualifies(day):
            break
        count += 1
        day -= timedelta(days=1)
    return count


def presence_streak(snapshots: Sequence[Snapshot], today: date) -> int:
    """Consecutive days, back from today, with a snapshot on exactly that date."""
    if not snapshots:
        return 0
    dates = {s.date for s in snapshots}
    return walk_streak(today, dates.__contains__, earliest=min(dates))


def window_presence_streak(
    snapshots: Sequence[Snapshot],
    today: date,
    window_days: int = RANKING_STREAK_DAYS,
) -> int:
    """Presence streak capped at ``window_days``. Used for leaderboards."""
    if not snapshots:
        return 0
    dates = {s.date for s in snapshots}
    return walk_streak(today, dates.__contains__, max_days=window_days)


def goal_streak(snapshots: Sequence[Snapshot], today: date, daily_goal: float) -> int:
    """Consecutive days, back from today, whose single-day gain met ``daily_goal``.

    A day without a snapshot breaks the streak. A non-positive goal yields 0.
    """
    if not snapshots or daily_goal <= 0:
        return 0
    gain_by_date = {g.date: g.gain for g in daily_gains(snapshots)}
    return walk_streak(
        today,
        lambda day: day in gain_by_date and gain_by_date[day] >= daily_goal,
        earliest=snapshots[0].date,
    )
