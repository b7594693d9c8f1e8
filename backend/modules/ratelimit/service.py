"""
Redis-backed sliding window rate limiter.

Each bucket keeps one sorted set per key, scored by request time in
milliseconds. When no Redis URL is configured, every check is allowed.
"""

import logging
import math
import time
import uuid
from dataclasses import dataclass
from typing import Optional

from redis.asyncio import Redis

from shared.config import Settings, get_settings
from shared.exceptions import RateLimitError

from .interfaces import IRateLimiter
from .models import RateLimitBucket, RateLimitResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowPolicy:
    limit: int
    window_seconds: int

    @property
    def window_ms(self) -> int:
        return self.window_seconds * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimitService(IRateLimiter):
    """Sliding window limiter over Redis sorted sets."""

    def __init__(self, redis: Optional[Redis], settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._redis = redis
        self._policies = {
            RateLimitBucket.PHONE_CHECK: WindowPolicy(
                settings.phone_check_limit, settings.phone_check_window_seconds
            ),
            RateLimitBucket.AUTH_ATTEMPT: WindowPolicy(
                settings.auth_attempt_limit, settings.auth_attempt_window_seconds
            ),
            RateLimitBucket.API: WindowPolicy(settings.api_limit, settings.api_window_seconds),
        }
        if redis is None:
            logger.warning("Redis not configured - rate limiting disabled")

    async def check_phone_check(self, phone: str) -> RateLimitResult:
        return await self.limit(RateLimitBucket.PHONE_CHECK, f"phone:{phone}")

    async def check_auth_attempt(self, phone: str) -> RateLimitResult:
        return await self.limit(RateLimitBucket.AUTH_ATTEMPT, f"auth:{phone}")

    async def check_api(self, user_id: str) -> RateLimitResult:
        return await self.limit(RateLimitBucket.API, f"api:{user_id}")

    async def limit(self, bucket: RateLimitBucket, identifier: str) -> RateLimitResult:
        """
        Record one request against a bucket and report whether it is allowed.

        Rejected requests are removed from the window again so that a caller
        hammering a closed window does not keep extending it.
        """
        policy = self._policies[bucket]
        now = _now_ms()

        if self._redis is None:
            return RateLimitResult(allowed=True, remaining=policy.limit, reset_at_ms=now)

        key = f"{bucket.value}:{identifier}"
        member = f"{now}-{uuid.uuid4().hex}"

        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(key, 0, now - policy.window_ms)
            pipe.zadd(key, {member: now})
            pipe.zcard(key)
            pipe.zrange(key, 0, 0, withscores=True)
            pipe.pexpire(key, policy.window_ms)
            _, _, count, oldest, _ = await pipe.execute()

        oldest_ms = int(oldest[0][1]) if oldest else now
        reset_at_ms = oldest_ms + policy.window_ms

        if count > policy.limit:
            await self._redis.zrem(key, member)
            logger.warning("Rate limit exceeded for %s", bucket.value)
            return RateLimitResult(allowed=False, remaining=0, reset_at_ms=reset_at_ms)

        return RateLimitResult(
            allowed=True,
            remaining=policy.limit - count,
            reset_at_ms=reset_at_ms,
        )

    async def enforce(self, result: RateLimitResult) -> None:
        if result.allowed:
            return
        retry_after = math.ceil((result.reset_at_ms - _now_ms()) / 1000)
        raise RateLimitError(retry_after_seconds=retry_after)


def create_redis_client(url: str) -> Optional[Redis]:
    """Build an asyncio Redis client, or None when no URL is configured."""
    if not url:
        return None
    return Redis.from_url(url, decode_responses=True)
