"""Zone resolution fallback chain: cache -> nearest-seaport lookup -> grid."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from common.types import Coordinate
from zones.cache import ZoneCache, bucket_key
from zones.grid import classify_grid
from zones.lookup import NearestZoneLookup
from zones.types import SeaportZone, ZoneAssignment, ZoneSource

logger = logging.getLogger(__name__)


class ZoneResolver:
    def __init__(
        self,
        lookup: NearestZoneLookup | None = None,
        cache: ZoneCache | None = None,
        timeout_seconds: float = 8.0,
        cooldown_seconds: float = 30.0,
        bucket_precision: int = 2,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lookup = lookup
        self._cache = cache
        self._timeout_seconds = timeout_seconds
        self._cooldown_seconds = cooldown_seconds
        self._bucket_precision = bucket_precision
        self._clock = clock
        self._lookup_blocked_until = 0.0

    def _lookup_allowed(self) -> bool:
        return self._lookup is not None and self._clock() >= self._lookup_blocked_until

    async def _external_lookup(self, coordinate: Coordinate) -> SeaportZone | None:
        if not self._lookup_allowed():
            return None
        try:
            answer = await asyncio.wait_for(
                self._lookup.nearest_zone(coordinate),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Zone lookup timed out after %.1fs", self._timeout_seconds)
        except Exception as exc:
            logger.warning("Zone lookup failed: %s: %s", type(exc).__name__, exc)
        else:
            if isinstance(answer, str):
                answer = SeaportZone(zone_name=answer)
            if answer is not None and answer.zone_name:
                return answer
            logger.warning("Zone lookup returned an empty label")

        # Cooldown before the next external attempt.
        self._lookup_blocked_until = self._clock() + self._cooldown_seconds
        return None

    async def resolve_zone(self, coordinate: Coordinate, *, refresh: bool = False) -> ZoneAssignment:
        key = bucket_key(coordinate, self._bucket_precision)

        if self._cache is not None and not refresh:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Zone cache hit for bucket %s", key)
                return cached.model_copy(update={"source": ZoneSource.CACHE})

        answer = await self._external_lookup(coordinate)
        if answer is not None:
            assignment = ZoneAssignment(
                zone_label=answer.zone_name,
                source=ZoneSource.EXTERNAL_LOOKUP,
                coordinate=coordinate,
                zone_code=answer.zone_code,
                seaport_id=answer.seaport_id,
                seaport_distance_m=answer.distance_m,
            )
            if self._cache is not None:
                self._cache.set(key, assignment)
            return assignment

        grid = classify_grid(coordinate)
        logger.info("Using grid fallback zone %s for bucket %s", grid.cell_code, key)
        return ZoneAssignment(
            zone_label=grid.cell_code,
            source=ZoneSource.GRID_FALLBACK,
            coordinate=coordinate,
        )
