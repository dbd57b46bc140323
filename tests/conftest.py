"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime, timedelta, timezone

os.environ["XPT_JWT_SECRET"] = "test-secret-for-xptrack-tests-only-0123456789"
os.environ["XPT_LOG_FORMAT"] = "console"
os.environ["XPT_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import jwt  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from xptrack.config import get_settings  # noqa: E402
from xptrack.database import close_db, create_tables, init_db  # noqa: E402
from xptrack.dependencies import get_now  # noqa: E402
from xptrack.main import create_app  # noqa: E402
from xptrack.metrics.schemas import Snapshot  # noqa: E402

get_settings.cache_clear()

FIXED_NOW = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)
TODAY = FIXED_NOW.date()


def make_token(user_id: str, email: str | None = None, expires_in: int = 3600) -> str:
    """Sign a token the way the identity provider does."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def series(start: date, xps: list[int], level: int = 100) -> list[Snapshot]:
    """Consecutive daily snapshots starting at ``start``."""
    return [
        Snapshot(date=start + timedelta(days=i), level=level, xp=xp)
        for i, xp in enumerate(xps)
    ]


@pytest.fixture
def make_series() -> Callable[..., list[Snapshot]]:
    return series


@pytest_asyncio.fixture
async def client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh SQLite database with "now" pinned."""
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'xptrack-test.db'}")
    await create_tables()

    app = create_app()
    app.dependency_overrides[get_now] = lambda: FIXED_NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await close_db()


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient) -> AsyncClient:
    """Client authenticated as user-1."""
    client.headers["Authorization"] = f"Bearer {make_token('user-1', 'one@example.com')}"
    return client


async def register_character(
    client: AsyncClient,
    name: str = "Eternal Oblivion",
    world: str = "Antica",
    vocation: str = "knight",
) -> dict:
    response = await client.post("/api/v1/characters", json={
        "name": name,
        "world": world,
        "vocation": vocation,
    })
    assert response.status_code == 201, response.text
    return response.json()


async def post_series(client: AsyncClient, character_id: str, start: date, xps: list[int], level: int = 100) -> None:
    for i, xp in enumerate(xps):
        response = await client.post(f"/api/v1/characters/{character_id}/logs", json={
            "date": (start + timedelta(days=i)).isoformat(),
            "level": level,
            "xp": xp,
        })
        assert response.status_code == 201, response.text
