"""Level table: cumulative XP required per level.

The game's real leveling curve is not bundled. By default every level costs a
flat placeholder amount; deployments inject an explicit table through
``XPT_LEVEL_TABLE`` (JSON mapping of level to cumulative XP).
"""

from __future__ import annotations

import bisect
from collections.abc import Mapping

from xptrack.config import Settings

PLACEHOLDER_XP_PER_LEVEL = 10_000_000


class LevelTable:
    """Cumulative XP lookup with a flat-step fallback past the explicit table."""

    def __init__(
        self,
        cumulative: Mapping[int, int] | None = None,
        xp_per_level: int = PLACEHOLDER_XP_PER_LEVEL,
    ) -> None:
        if xp_per_level <= 0:
            msg = "xp_per_level must be positive"
            raise ValueError(msg)
        self.xp_per_level = xp_per_level
        items = sorted((int(lvl), int(xp)) for lvl, xp in (cumulative or {}).items())
        self._levels = [lvl for lvl, _ in items]
        self._xp = [xp for _, xp in items]

    @classmethod
    def flat(cls, xp_per_level: int = PLACEHOLDER_XP_PER_LEVEL) -> LevelTable:
        return cls(None, xp_per_level)

    @classmethod
    def from_settings(cls, settings: Settings) -> LevelTable:
        return cls(settings.level_table, settings.xp_per_level)

    def xp_for_level(self, level: int) -> int:
        """Cumulative XP required to reach ``level``. Levels below 1 need 0."""
        if level < 1:
            return 0
        if not self._levels:
            return (level - 1) * self.xp_per_level

        idx = bisect.bisect_right(self._levels, level) - 1
        if idx < 0:
            # Below the first explicit entry: scale down linearly to level 1.
            first_level, first_xp = self._levels[0], self._xp[0]
            if first_level <= 1:
                return first_xp
            return first_xp * (level - 1) // (first_level - 1)
        if self._levels[idx] == level:
            return self._xp[idx]
        if idx + 1 < len(self._levels):
            # Gap in the table: interpolate between the surrounding entries.
            lo_level, lo_xp = self._levels[idx], self._xp[idx]
            hi_level, hi_xp = self._levels[idx + 1], self._xp[idx + 1]
            return lo_xp + (hi_xp - lo_xp) * (level - lo_level) // (hi_level - lo_level)
        return self._xp[-1] + (level - self._levels[-1]) * self.xp_per_level

    def xp_to_next(self, level: int) -> int:
        """XP needed to go from the start of ``level`` to the start of ``level + 1``."""
        return max(0, self.xp_for_level(level + 1) - self.xp_for_level(level))

    def level_for_xp(self, total_xp: int) -> int:
        """Highest level whose cumulative requirement is covered by ``total_xp``."""
        if total_xp <= 0:
            return 1
        if not self._levels:
            return total_xp // self.xp_per_level + 1

        if total_xp >= self._xp[-1]:
            return self._levels[-1] + (total_xp - self._xp[-1]) // self.xp_per_level

        level = 1
        # Jump to the last explicit entry we have reached, then walk forward.
        idx = bisect.bisect_right(self._xp, total_xp) - 1
        if idx >= 0:
            level = self._levels[idx]
        while level < self._levels[-1] and self.xp_for_level(level + 1) <= total_xp:
            level += 1
        return level

    def resolve_level(self, level: int, total_xp: int) -> int:
        """The recorded level, or the level implied by ``total_xp`` when none was recorded (0)."""
        return level if level > 0 else self.level_for_xp(total_xp)
