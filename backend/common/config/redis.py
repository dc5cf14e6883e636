"""Redis configuration and helpers."""
from __future__ import annotations

import os

from redis import Redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_ZONE_CACHE_PREFIX = os.getenv("REDIS_ZONE_CACHE_PREFIX", "zone-cache")


def zone_cache_key(bucket: str) -> str:
    """Build the Redis key for one zone-cache bucket."""
    return f"{REDIS_ZONE_CACHE_PREFIX}:{bucket}"


def create_redis_client() -> Redis:
    """Create a sync Redis client for the zone cache."""
    return Redis.from_url(REDIS_URL, decode_responses=True)
