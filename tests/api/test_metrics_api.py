"""Integration tests for the per-character metrics and stats endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import AsyncClient

from conftest import TODAY, post_series, register_character


@pytest.mark.asyncio
class TestMetricsEndpoint:
    """GET /api/v1/characters/{id}/metrics"""

    async def test_empty_history_is_neutral(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        response = await authed_client.get(f"/api/v1/characters/{character['id']}/metrics")
        assert response.status_code == 200
        data = response.json()
        assert data["streak_count"] == 0
        assert data["daily_average_recent"] == 0
        assert data["eta_to_target"] == "N/A"
        assert data["trend_text"] == "No data"

    async def test_series_through_today(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        await post_series(authed_client, character["id"], TODAY - timedelta(days=4), [0, 100, 250, 400, 600])

        response = await authed_client.get(
            f"/api/v1/characters/{character['id']}/metrics",
            params={"target_xp": 1600},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["current_xp"] == 600
        assert data["daily_average_recent"] == 150
        assert data["streak_count"] == 5
        assert data["xp_remaining"] == 1000
        assert data["eta_days"] == 7
        assert data["eta_to_target"] == "7d"
        assert data["today_gain"] == 200
        assert data["best_day_gain"] == 200

    async def test_window_days_narrows_average(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        xps = [0, 5000] + [5000 + 10 * i for i in range(1, 9)]
        await post_series(authed_client, character["id"], TODAY - timedelta(days=9), xps)

        url = f"/api/v1/characters/{character['id']}/metrics"
        wide = (await authed_client.get(url)).json()
        narrow = (await authed_client.get(url, params={"window_days": 3})).json()
        assert wide["daily_average_recent"] == pytest.approx(5080 / 9)
        assert narrow["daily_average_recent"] == 10

    async def test_gap_breaks_streak(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        await post_series(authed_client, character["id"], TODAY - timedelta(days=6), [0, 10])
        await post_series(authed_client, character["id"], TODAY - timedelta(days=2), [20, 30, 40])

        data = (await authed_client.get(f"/api/v1/characters/{character['id']}/metrics")).json()
        assert data["streak_count"] == 3

    async def test_invalid_window_rejected(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        response = await authed_client.get(
            f"/api/v1/characters/{character['id']}/metrics",
            params={"window_days": 0},
        )
        assert response.status_code == 422


@pytest.mark.asyncio
class TestStatsEndpoint:
    """GET /api/v1/characters/{id}/stats"""

    async def test_no_logs(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        response = await authed_client.get(f"/api/v1/characters/{character['id']}/stats")
        assert response.status_code == 200
        assert response.json() == {"logs": [], "gains": [], "stats": None}

    async def test_progress_stats(self, authed_client: AsyncClient):
        character = await register_character(authed_client)
        start = TODAY - timedelta(days=3)
        await post_series(authed_client, character["id"], start, [0, 2_000_000, 4_000_000, 6_000_000])

        data = (await authed_client.get(f"/api/v1/characters/{character['id']}/stats")).json()
        assert len(data["logs"]) == 4
        assert data["logs"][0]["date"] == start.isoformat()
        stats = data["stats"]
        assert stats["total_logs"] == 4
        assert stats["avg_daily_xp"] == 2_000_000
        assert stats["xp_needed"] == 10_000_000
        assert stats["eta_days"] == 5
        assert stats["last_date"] == TODAY.isoformat()
