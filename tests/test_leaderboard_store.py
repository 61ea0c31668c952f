"""Tests for LeaderboardStore against the in-memory sorted set."""

from __future__ import annotations

from datetime import datetime

import pytest

from leaderboard_api.models.dc_models import DeviceTypeModel
from leaderboard_api.services.leaderboard_store import LeaderboardStore
from tests.fake_redis import FakeSortedSetRedis

NOW = datetime(2025, 5, 17, 12, 30, 0)


async def _fill(store: LeaderboardStore, scores, device_type=DeviceTypeModel.desktop):
    for index, score in enumerate(scores):
        await store.add_score(f"p{index}", score, device_type, NOW.replace(microsecond=index * 1000))


@pytest.mark.asyncio
async def test_add_score_writes_timestamped_member_to_monthly_key():
    redis = FakeSortedSetRedis()
    store = LeaderboardStore(redis)

    member = await store.add_score("Alice", 42.0, DeviceTypeModel.mobile, NOW)

    assert member == f"Alice:{int(NOW.timestamp() * 1000)}"
    assert redis.sets == {"leaderboard:2025-5:mobile": {member: 42.0}}


@pytest.mark.asyncio
async def test_read_top_returns_twenty_highest_descending():
    store = LeaderboardStore(FakeSortedSetRedis())
    await _fill(store, range(1, 31))

    pairs = await store.read_top(DeviceTypeModel.desktop, NOW)

    scores = [score for _, score in pairs]
    assert len(pairs) == 20
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 30.0 and scores[-1] == 11.0


@pytest.mark.asyncio
async def test_check_qualification_counts_only_when_board_not_full():
    redis = FakeSortedSetRedis()
    store = LeaderboardStore(redis)
    await _fill(store, [5, 3])
    redis.calls.clear()

    assert await store.check_qualification(1, DeviceTypeModel.desktop, NOW) is True
    assert redis.calls == ["zrange", "zcount"]


@pytest.mark.asyncio
async def test_check_qualification_against_twentieth_score():
    redis = FakeSortedSetRedis()
    store = LeaderboardStore(redis)
    await _fill(store, range(81, 101))
    redis.calls.clear()

    assert await store.check_qualification(81, DeviceTypeModel.desktop, NOW) is False
    assert await store.check_qualification(82, DeviceTypeModel.desktop, NOW) is True
    assert "zcount" not in redis.calls
    assert "zadd" not in redis.calls


@pytest.mark.asyncio
async def test_check_qualification_full_count_without_twentieth_entry():
    class InconsistentRedis(FakeSortedSetRedis):
        async def zrange(self, *args, **kwargs):
            self._record("zrange")
            return []

        async def zcount(self, name, min, max):
            self._record("zcount")
            return 20

    store = LeaderboardStore(InconsistentRedis())

    assert await store.check_qualification(10**6, DeviceTypeModel.desktop, NOW) is False


@pytest.mark.asyncio
async def test_store_errors_propagate():
    redis = FakeSortedSetRedis()
    redis.error = ConnectionError("store unreachable")
    store = LeaderboardStore(redis)

    with pytest.raises(ConnectionError):
        await store.read_top(DeviceTypeModel.mobile, NOW)
