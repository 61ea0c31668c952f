import logging
from datetime import datetime
from typing import List

from redis.asyncio import Redis

from leaderboard_api.converter import DataConverter, ScoredMember
from leaderboard_api.domain.leaderboard_rules import (
    LEADERBOARD_SIZE,
    encode_member,
    leaderboard_key,
    qualifies,
)
from leaderboard_api.models.dc_models import DeviceTypeModel

data_converter = DataConverter()


class LeaderboardStore:
    """Monthly leaderboard partitions kept in Redis sorted sets."""

    def __init__(self, redis: Redis):
        self.redis = redis

    async def add_score(
        self, name: str, score: float, device_type: DeviceTypeModel, now: datetime
    ) -> str:
        """Add a score to the partition of the current month

        Args:
            name (str): Sanitized player name
            score (float): Submitted score
            device_type (DeviceTypeModel): Partition device type
            now (datetime): Submission time, used for the key and the member

        Returns:
            str: The member written to the sorted set
        """
        key = leaderboard_key(now, device_type.value)
        member = encode_member(name, now)
        await self.redis.zadd(key, {member: score})
        logging.info(f"Added {member} with score {score} to {key}")
        return member

    async def read_top(
        self, device_type: DeviceTypeModel, now: datetime
    ) -> List[ScoredMember]:
        """Read the top LEADERBOARD_SIZE members, highest score first"""
        key = leaderboard_key(now, device_type.value)
        reply = await self.redis.zrange(
            key, 0, LEADERBOARD_SIZE - 1, desc=True, withscores=True
        )
        logging.debug(f"ZRANGE {key}: {reply}")
        return data_converter.convert_zrange_to_pairs(reply)

    async def check_qualification(
        self, score: float, device_type: DeviceTypeModel, now: datetime
    ) -> bool:
        """Check whether score would enter the top LEADERBOARD_SIZE. Nothing is written.

        The last ranked entry is read first. Only when it is missing is the
        partition counted, to tell an unfilled board from an inconsistent one.
        """
        key = leaderboard_key(now, device_type.value)
        last_rank = LEADERBOARD_SIZE - 1
        reply = await self.redis.zrange(
            key, last_rank, last_rank, desc=True, withscores=True
        )
        pairs = data_converter.convert_zrange_to_pairs(reply)
        if pairs:
            return qualifies(score, pairs[0][1], None)

        entry_count = await self.redis.zcount(key, "-inf", "+inf")
        if entry_count >= LEADERBOARD_SIZE:
            logging.warning(
                f"{key} holds {entry_count} members but rank {last_rank} is empty"
            )
        return qualifies(score, None, entry_count)
