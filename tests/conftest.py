"""Shared fixtures: a pinned clock and an in-memory Redis behind the app."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from leaderboard_api.create_redis_client import get_redis
from leaderboard_api.main import app
from leaderboard_api.routers.leaderboard import get_now
from tests.fake_redis import FakeSortedSetRedis


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now


@pytest.fixture()
def clock() -> Clock:
    return Clock(datetime(2025, 5, 17, 12, 30, 0))


@pytest.fixture()
def fake_redis() -> FakeSortedSetRedis:
    return FakeSortedSetRedis()


@pytest.fixture()
def client(fake_redis: FakeSortedSetRedis, clock: Clock) -> Iterator[TestClient]:
    async def override_redis():
        yield fake_redis

    app.dependency_overrides[get_redis] = override_redis
    app.dependency_overrides[get_now] = lambda: clock.now
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
