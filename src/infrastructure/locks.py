"""
Redis-based distributed lock.

The SOS endpoints hold one lock per requester (``lock:sos:<user_id>``) for
the duration of a dispatch, so a double-tap or a shake-detection retrigger
cannot create two requests for the same emergency across API processes.

This does not serialise dispatches of *different* users; two people near
the same hospital can still be assigned to it concurrently.

Implementation uses SET NX EX for acquire and a Lua script for
atomic check-and-delete on release.
"""

from __future__ import annotations

import uuid

import redis.asyncio as aioredis

_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class LockNotAcquired(Exception):
    """Raised when entering a lock that another holder already owns."""


class DistributedLock:
    def __init__(
        self, client: aioredis.Redis, key: str, ttl_seconds: int = 30
    ):
        self.redis = client
        self.key = f"lock:{key}"
        self.ttl = ttl_seconds
        self.token = str(uuid.uuid4())

    async def acquire(self) -> bool:
        """Try to acquire. Returns True on success."""
        return bool(
            await self.redis.set(self.key, self.token, nx=True, ex=self.ttl)
        )

    async def release(self) -> None:
        """Release only if we still own the lock."""
        await self.redis.eval(_RELEASE_SCRIPT, 1, self.key, self.token)

    async def __aenter__(self):
        if not await self.acquire():
            raise LockNotAcquired(f"Could not acquire lock: {self.key}")
        return self

    async def __aexit__(self, *args):
        await self.release()


def sos_lock(
    client: aioredis.Redis, user_id: str, ttl_seconds: int = 30
) -> DistributedLock:
    """Lock guarding a single requester's in-flight SOS."""
    return DistributedLock(client, f"sos:{user_id}", ttl_seconds=ttl_seconds)
