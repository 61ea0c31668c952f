import logging
from typing import AsyncGenerator

from redis.asyncio import Redis

from leaderboard_api.load_secrets import redis_token, redis_url


def create_redis_client() -> Redis:
    """Build a client for the leaderboard store from the environment.

    Raises:
        RuntimeError: REDIS_URL is not configured
    """
    if not redis_url:
        raise RuntimeError("REDIS_URL is not configured")
    kwargs = {"decode_responses": True}
    if redis_token:
        kwargs["password"] = redis_token
    return Redis.from_url(redis_url, **kwargs)


async def get_redis() -> AsyncGenerator[Redis, None]:
    """FastAPI dependency that opens one client per request and closes it afterwards."""
    redis = create_redis_client()
    try:
        yield redis
    finally:
        logging.debug("Closing redis client")
        await redis.aclose()
