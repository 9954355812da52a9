"""Redis async connection pool, shared by the SOS request locks."""

import redis.asyncio as aioredis

from src.config import settings

_pool = aioredis.ConnectionPool.from_url(
    settings.redis_url, decode_responses=True
)


async def get_redis() -> aioredis.Redis:
    """FastAPI dependency: a client backed by the shared connection pool."""
    return aioredis.Redis(connection_pool=_pool)
