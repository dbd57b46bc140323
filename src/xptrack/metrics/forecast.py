"""Time-to-target estimation and formatting."""

from __future__ import annotations

import math
from dataclasses import dataclass

NOT_AVAILABLE = "N/A"
DAYS_PER_MONTH = 30  # fixed 30-day units, not calendar months
MONTHS_THRESHOLD_DAYS = 365


@dataclass(frozen=True)
class EtaEstimate:
    """Days until ``target_xp`` at the given daily rate, plus derived goal rate."""

    label: str = NOT_AVAILABLE
    days: int | None = None
    xp_remaining: int = 0
    daily_goal_xp: float = 0.0


def format_eta(days: int | None) -> str:
    """``"{n}d"`` below a year, else ``"{ceil(n/30)}m"``. ``None`` is ``"N/A"``."""
    if days is None:
        return NOT_AVAILABLE
    if days < MONTHS_THRESHOLD_DAYS:
        return f"{days}d"
    return f"{math.ceil(days / DAYS_PER_MONTH)}m"


def estimate_eta(current_xp: int, target_xp: int, daily_rate: float) -> EtaEstimate:
    """Estimate days to reach ``target_xp`` from ``current_xp``.

    A non-positive rate gives no estimate. Any remaining XP takes at least one
    day; an already reached target takes zero.
    """
    remaining = max(0, target_xp - current_xp)
    if daily_rate <= 0:
        return EtaEstimate(xp_remaining=remaining)

    if remaining == 0:
        days = 0
    else:
        days = max(1, math.ceil(remaining / daily_rate))

    return EtaEstimate(
        label=format_eta(days),
        days=days,
        xp_remaining=remaining,
        daily_goal_xp=remaining / days if days > 0 else 0.0,
    )
