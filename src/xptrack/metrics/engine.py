"""Metrics engine: derive dashboard analytics from a character's snapshot history.

All functions here are pure. "Now" is always injected by the caller, and
insufficient data yields neutral values instead of errors.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from xptrack.config import Settings
from xptrack.metrics.forecast import estimate_eta
from xptrack.metrics.level_table import LevelTable
from xptrack.metrics.schemas import DailyGain, DerivedMetrics, Snapshot
from xptrack.metrics.series import (
    as_date,
    daily_gains,
    endpoint_rate,
    normalize_snapshots,
    within_window,
)
from xptrack.metrics.streaks import goal_streak, presence_streak
from xptrack.metrics.trend import TREND_MIN_POINTS, TREND_WINDOW_DAYS, compute_trend

DEFAULT_RECENT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class MetricsOptions:
    """Tunable inputs for :func:`compute_metrics`.

    ``target_xp`` defaults to the current XP plus one level's requirement from
    ``level_table``.
    """

    recent_window_days: int = DEFAULT_RECENT_WINDOW_DAYS
    target_xp: int | None = None
    level_table: LevelTable = field(default_factory=LevelTable.flat)
    trend_window_days: int = TREND_WINDOW_DAYS
    trend_min_points: int = TREND_MIN_POINTS

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> MetricsOptions:
        params: dict[str, object] = {
            "recent_window_days": settings.recent_window_days,
            "level_table": LevelTable.from_settings(settings),
            "trend_window_days": settings.trend_window_days,
            "trend_min_points": settings.trend_min_points,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)  # type: ignore[arg-type]


def best_day(gains: Iterable[DailyGain]) -> tuple[int, date | None]:
    """Largest single-day gain and its date. Ties keep the earliest day."""
    best_gain, best_date = 0, None
    for g in gains:
        if g.gain > best_gain:
            best_gain, best_date = g.gain, g.date
    return best_gain, best_date


def compute_metrics(
    snapshots: Iterable[Snapshot],
    now: datetime | date,
    options: MetricsOptions | None = None,
) -> DerivedMetrics:
    """Derive the full metrics record for one character."""
    opts = options or MetricsOptions()
    history = normalize_snapshots(snapshots)
    if not history:
        return DerivedMetrics()

    today = as_date(now)
    last = history[-1]
    level = opts.level_table.resolve_level(last.level, last.xp)

    recent = within_window(history, today, opts.recent_window_days)
    avg_recent = endpoint_rate(recent)
    avg_overall = endpoint_rate(history)

    target_xp = opts.target_xp
    if target_xp is None:
        target_xp = last.xp + opts.level_table.xp_to_next(level)
    eta = estimate_eta(last.xp, target_xp, avg_recent)

    gains = daily_gains(history)
    best_gain, best_date = best_day(gains)
    today_gain = gains[-1].gain if gains[-1].date == today else 0

    trend = compute_trend(history, today, opts.trend_window_days, opts.trend_min_points)

    return DerivedMetrics(
        current_level=level,
        current_xp=last.xp,
        daily_average_recent=avg_recent,
        daily_average_overall=avg_overall,
        eta_to_target=eta.label,
        eta_days=eta.days,
        xp_remaining=eta.xp_remaining,
        daily_goal_xp=eta.daily_goal_xp,
        streak_count=presence_streak(history, today),
        goal_streak_count=goal_streak(history, today, eta.daily_goal_xp),
        trend_direction=trend.direction,
        trend_tone=trend.tone,
        trend_delta_percent=trend.delta_percent,
        trend_text=trend.text,
        best_day_gain=best_gain,
        best_day_date=best_date,
        today_gain=today_gain,
        today_vs_goal=today_gain - eta.daily_goal_xp,
    )
