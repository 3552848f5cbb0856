"""Access-token revocation using a Redis blacklist.

Supabase tokens stay valid until they expire even after sign-out, so a
signed-out token is blacklisted here until its natural expiry.
"""

import logging
import time
from typing import Optional

import redis.asyncio as redis

from bursa_signup.config import settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get or create the Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


async def close_redis():
    """Close the Redis connection (call on app shutdown)."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


class TokenRevocation:
    """Manage access-token revocation with Redis."""

    @staticmethod
    async def revoke_token(token: str, expires_at: float) -> bool:
        """Add token to revocation list.

        Args:
            token: access token to revoke
            expires_at: Unix timestamp when the token naturally expires

        Returns:
            True if successfully revoked
        """
        ttl = int(expires_at - time.time())
        if ttl <= 0:
            # Already expired, nothing to blacklist
            return True

        redis_client = await get_redis()
        try:
            await redis_client.setex(f"revoked:{token}", ttl, str(int(time.time())))
            return True
        except redis.RedisError as e:
            logger.error(f"Failed to revoke token: {e}")
            return False

    @staticmethod
    async def is_revoked(token: str) -> bool:
        """Check if token is revoked.

        Fails closed: a Redis outage treats the token as revoked.
        """
        redis_client = await get_redis()
        try:
            exists = await redis_client.exists(f"revoked:{token}")
            return exists > 0
        except redis.RedisError as e:
            logger.error(f"Failed to check token revocation: {e}")
            return True
