"""
Storage clients

Provides the singleton async Upstash Redis client used as the durable
per-identity cart store, plus the key layout shared with the browser client.
"""

from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront.config import UPSTASH_REDIS_REST_URL, UPSTASH_REDIS_REST_TOKEN

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class StorageKeys:
    """Key prefixes for persisted data."""

    CART = "cart-"  # cart-{display name | guest}
    GUEST = "guest"

    @staticmethod
    def cart_key(user_name: Optional[str]) -> str:
        return f"{StorageKeys.CART}{user_name or StorageKeys.GUEST}"
