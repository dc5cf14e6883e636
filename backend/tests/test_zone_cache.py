"""Tests for the in-memory and Redis zone caches."""
from __future__ import annotations

from unittest.mock import MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from common.types import Coordinate
from tests.fakes import FakeClock
from zones import InMemoryZoneCache, RedisZoneCache, ZoneAssignment, ZoneSource, bucket_key


def _assignment(label: str = "ZoneX-ECX8(9.000000-104.500000)") -> ZoneAssignment:
    return ZoneAssignment(
        zone_label=label,
        source=ZoneSource.EXTERNAL_LOOKUP,
        coordinate=Coordinate(latitude=9.0, longitude=104.5),
    )


class TestBucketKey:
    def test_rounds_to_two_decimals(self):
        assert bucket_key(Coordinate(latitude=10.8231, longitude=106.6297)) == "10.82:106.63"

    def test_nearby_points_share_a_bucket(self):
        a = Coordinate(latitude=10.8231, longitude=106.6297)
        b = Coordinate(latitude=10.8249, longitude=106.6301)
        assert bucket_key(a) == bucket_key(b)

    def test_precision_is_configurable(self):
        assert bucket_key(Coordinate(latitude=10.8231, longitude=106.6297), precision=1) == "10.8:106.6"


class TestInMemoryZoneCache:
    def test_miss_then_hit(self):
        cache = InMemoryZoneCache()
        assert cache.get("k") is None

        cache.set("k", _assignment())
        assert cache.get("k") == _assignment()
        assert len(cache) == 1

    def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryZoneCache(ttl_seconds=900, clock=clock)
        cache.set("k", _assignment())

        clock.advance(899)
        assert cache.get("k") is not None

        clock.advance(2)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_zero_ttl_never_expires(self):
        clock = FakeClock()
        cache = InMemoryZoneCache(ttl_seconds=0, clock=clock)
        cache.set("k", _assignment())
        clock.advance(10**6)
        assert cache.get("k") is not None

    def test_clear(self):
        cache = InMemoryZoneCache()
        cache.set("a", _assignment())
        cache.set("b", _assignment())
        cache.clear()
        assert len(cache) == 0


class TestRedisZoneCache:
    def test_set_writes_json_with_expiry(self):
        client = MagicMock()
        cache = RedisZoneCache(client, ttl_seconds=900)

        cache.set("10.82:106.63", _assignment())

        client.set.assert_called_once()
        args, kwargs = client.set.call_args
        assert args[0] == "zone-cache:10.82:106.63"
        assert ZoneAssignment.model_validate_json(args[1]) == _assignment()
        assert kwargs["ex"] == 900

    def test_get_decodes_stored_entry(self):
        client = MagicMock()
        client.get.return_value = _assignment().model_dump_json()
        cache = RedisZoneCache(client)

        assert cache.get("10.82:106.63") == _assignment()
        client.get.assert_called_once_with("zone-cache:10.82:106.63")

    def test_missing_entry(self):
        client = MagicMock()
        client.get.return_value = None
        assert RedisZoneCache(client).get("k") is None

    def test_malformed_entry_is_a_miss(self):
        client = MagicMock()
        client.get.return_value = '{"zone_label": 5}'
        assert RedisZoneCache(client).get("k") is None

    def test_redis_errors_are_absorbed(self):
        client = MagicMock()
        client.get.side_effect = RedisConnectionError("down")
        client.set.side_effect = RedisConnectionError("down")
        cache = RedisZoneCache(client)

        assert cache.get("k") is None
        cache.set("k", _assignment())  # does not raise
