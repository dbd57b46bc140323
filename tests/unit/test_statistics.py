"""Progress stats and the per-user statistics overview."""

from datetime import date, timedelta

from xptrack.metrics.level_table import LevelTable
from xptrack.metrics.schemas import Snapshot
from xptrack.statistics.schemas import CharacterSummaryRow
from xptrack.statistics.service import compute_progress_stats, summarize_characters

START = date(2024, 2, 1)


def _snaps(xps: list[int], level: int = 150) -> list[Snapshot]:
    return [Snapshot(date=START + timedelta(days=i), level=level, xp=xp) for i, xp in enumerate(xps)]


class TestProgressStats:

    def test_empty_is_none(self):
        assert compute_progress_stats([], LevelTable.flat()) is None

    def test_average_over_last_seven_entries(self):
        # 10 entries; last seven go from 3000 to 9000 in steps of 1000.
        snaps = _snaps([i * 1000 for i in range(10)])
        stats = compute_progress_stats(snaps, LevelTable.flat(10_000))
        assert stats.total_logs == 10
        assert stats.avg_daily_xp == 1000
        assert stats.xp_needed == 10_000
        assert stats.eta_days == 10
        assert stats.first_date == START
        assert stats.last_date == START + timedelta(days=9)
        assert stats.current_xp == 9000
        assert stats.current_level == 150

    def test_average_is_rounded(self):
        snaps = _snaps([0, 1, 3])
        stats = compute_progress_stats(snaps, LevelTable.flat())
        assert stats.avg_daily_xp == 2

    def test_half_rounds_up(self):
        # (5 - 0) / 2 = 2.5
        stats = compute_progress_stats(_snaps([0, 2, 5]), LevelTable.flat(30))
        assert stats.avg_daily_xp == 3
        assert stats.eta_days == 10

    def test_no_gain_has_no_eta(self):
        stats = compute_progress_stats(_snaps([100, 100]), LevelTable.flat())
        assert stats.avg_daily_xp == 0
        assert stats.eta_days is None

    def test_single_entry(self):
        stats = compute_progress_stats(_snaps([500]), LevelTable.flat())
        assert stats.total_logs == 1
        assert stats.avg_daily_xp == 0


class TestSummarizeCharacters:

    def test_empty(self):
        summary = summarize_characters([])
        assert summary.total_characters == 0
        assert summary.average_daily_xp == 0

    def test_totals(self):
        rows = [
            CharacterSummaryRow(character_id="a", name="A", level=200, total_xp=5_000_000, daily_average=300),
            CharacterSummaryRow(character_id="b", name="B", level=350, total_xp=9_000_000, daily_average=100),
        ]
        summary = summarize_characters(rows)
        assert summary.total_characters == 2
        assert summary.max_level == 350
        assert summary.total_xp == 14_000_000
        assert summary.average_daily_xp == 200
        assert [r.character_id for r in summary.characters] == ["a", "b"]
