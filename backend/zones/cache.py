"""
Short-lived zone cache keyed by a coarse location bucket.

Two backends: an in-process map with TTL for single-process hosts, and
Redis for hosts running several workers.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Protocol

from pydantic import ValidationError
from redis import Redis
from redis.exceptions import RedisError

from common.config import zone_cache_key
from common.types import Coordinate
from zones.geo_utils import coordinate_bucket
from zones.types import ZoneAssignment

logger = logging.getLogger(__name__)


class ZoneCache(Protocol):
    def get(self, key: str) -> ZoneAssignment | None:
        ...

    def set(self, key: str, assignment: ZoneAssignment) -> None:
        ...


def bucket_key(coordinate: Coordinate, precision: int = 2) -> str:
    return coordinate_bucket(coordinate.latitude, coordinate.longitude, precision)


class InMemoryZoneCache:
    """Thread-safe TTL map. A ttl of 0 or less disables expiry."""

    def __init__(
        self,
        ttl_seconds: float = 900.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, ZoneAssignment]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> ZoneAssignment | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, assignment = entry
            if self._ttl_seconds > 0 and (self._clock() - stored_at) > self._ttl_seconds:
                self._entries.pop(key, None)
                return None
            return assignment

    def set(self, key: str, assignment: ZoneAssignment) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), assignment)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisZoneCache:
    """Zone cache shared through Redis; entries expire server-side."""

    def __init__(self, client: Redis, ttl_seconds: float = 900.0):
        self._client = client
        self._ttl_seconds = ttl_seconds

    def get(self, key: str) -> ZoneAssignment | None:
        try:
            raw = self._client.get(zone_cache_key(key))
        except RedisError as exc:
            logger.warning("Zone cache read failed for '%s': %s", key, exc)
            return None
        if not raw:
            return None
        try:
            return ZoneAssignment.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding malformed zone cache entry '%s'", key)
            return None

    def set(self, key: str, assignment: ZoneAssignment) -> None:
        expires = int(self._ttl_seconds) if self._ttl_seconds > 0 else None
        try:
            self._client.set(zone_cache_key(key), assignment.model_dump_json(), ex=expires)
        except RedisError as exc:
            logger.warning("Zone cache write failed for '%s': %s", key, exc)
