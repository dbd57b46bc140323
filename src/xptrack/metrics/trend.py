"""Trend classification: is the recent gain rate accelerating or slowing?"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from xptrack.metrics.schemas import Snapshot, Tone, TrendDirection
from xptrack.metrics.series import within_window

TREND_WINDOW_DAYS = 60
TREND_MIN_POINTS = 16
TREND_THRESHOLD_PERCENT = 10.0


@dataclass(frozen=True)
class Trend:
    direction: TrendDirection = "neutral"
    tone: Tone = "neutral"
    delta_percent: float | None = None
    text: str = "No data"


NO_TREND = Trend()


def classify_trend(rate_first: float, rate_second: float) -> Trend:
    """Compare two half-window rates. A non-positive first rate has no signal."""
    if rate_first <= 0:
        return NO_TREND

    delta = (rate_second - rate_first) / rate_first * 100
    if delta > TREND_THRESHOLD_PERCENT:
        return Trend("up", "success", delta, f"↑ +{delta:.1f}%")
    if delta < -TREND_THRESHOLD_PERCENT:
        return Trend("down", "danger", delta, f"↓ {delta:.1f}%")
    return Trend("stable", "neutral", delta, "→ Stable")


def half_rates(snapshots: Sequence[Snapshot]) -> tuple[float, float]:
    """Endpoint rates of the two halves split at index ``len // 2``.

    The midpoint snapshot closes the first half and opens the second.
    """
    n = len(snapshots)
    mid = n // 2
    first = (snapshots[mid].xp - snapshots[0].xp) / mid
    second = (snapshots[-1].xp - snapshots[mid].xp) / (n - mid)
    return first, second


def compute_trend(
    snapshots: Sequence[Snapshot],
    today: date,
    window_days: int = TREND_WINDOW_DAYS,
    min_points: int = TREND_MIN_POINTS,
) -> Trend:
    recent = within_window(snapshots, today, window_days)
    if len(recent) < max(min_points, 2):
        return NO_TREND
    return classify_trend(*half_rates(recent))
