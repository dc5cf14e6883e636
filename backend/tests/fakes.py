"""Shared test doubles for zone resolution tests.

Provides FakeClock (manually advanced monotonic clock) and
FakeZoneLookup (scripted NearestZoneLookup) so tests run without
the remote seaport service.
"""
from __future__ import annotations

import asyncio

from common.types import Coordinate
from zones.types import SeaportZone


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeZoneLookup:
    """Returns ``label`` (a string or SeaportZone) or raises ``error``; optionally sleeps first."""

    def __init__(self, label: str | SeaportZone = "ZoneA-ECA42(9.000000-104.500000)", error: Exception | None = None, delay: float = 0.0):
        self.label = label
        self.error = error
        self.delay = delay
        self.calls: list[Coordinate] = []

    async def nearest_zone(self, coordinate: Coordinate) -> str | SeaportZone:
        self.calls.append(coordinate)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.label

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def recover(self, label: str | SeaportZone | None = None) -> None:
        self.error = None
        if label is not None:
            self.label = label
