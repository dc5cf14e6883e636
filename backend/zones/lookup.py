"""
Nearest-seaport zone lookup against the remote seaport table.

The remote service exposes a PostgREST-style ``seaports`` table. The zone
code is the nearest port's classification; the zone name is derived from
the caller's position and the seaport-map areas (C, B, A, else X).
"""
from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

import aiohttp

from common.types import Coordinate
from zones.exceptions import ZoneLookupUnavailable
from zones.geo_utils import ec_number, haversine_distance, point_in_circle, point_in_polygon
from zones.types import SeaportZone

logger = logging.getLogger(__name__)

SEAPORT_FIELDS = "id,name,latitude,longitude,classification"

# Seaport-map areas as (lat, lon) vertices; these differ from the A-D coastal boxes.
ZONE_C_POLYGON = (
    (19.2697, 105.8217),
    (19.1802, 106.1732),
    (15.398582, 108.741024),
    (15.797157, 109.023201),
)
ZONE_C_CIRCLES = (
    ((16.307907, 111.887631), 50_000),
    ((15.776189, 114.335378), 25_000),
)
ZONE_B_POLYGON = (
    (15.398582, 108.741024),
    (15.797157, 109.023201),
    (11.290790, 108.805857),
    (10.751607, 109.426080),
)
ZONE_A_POLYGONS = (
    (
        (11.290790, 108.805857),
        (10.751607, 109.426080),
        (9.243116, 105.827099),
        (8.341218, 106.056200),
    ),
    (
        (11.699559, 114.105746),
        (10.816024, 116.323181),
        (8.563622, 111.273575),
        (5.795252, 113.315372),
    ),
)


class NearestZoneLookup(Protocol):
    async def nearest_zone(self, coordinate: Coordinate) -> str | SeaportZone:
        """Return a zone label (or a SeaportZone) for ``coordinate`` or raise on failure."""
        ...


@dataclass(frozen=True)
class Seaport:
    id: str
    name: str | None
    latitude: float
    longitude: float
    classification: str | None = None


def _to_float(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_seaports(rows: Iterable[dict]) -> list[Seaport]:
    """Keep only rows with usable coordinates."""
    ports: list[Seaport] = []
    for row in rows:
        lat = _to_float(row.get("latitude"))
        lon = _to_float(row.get("longitude"))
        if lat is None or lon is None:
            continue
        classification = row.get("classification")
        ports.append(
            Seaport(
                id=str(row.get("id")),
                name=row.get("name"),
                latitude=lat,
                longitude=lon,
                classification=str(classification) if classification is not None else None,
            )
        )
    return ports


def nearest_seaport(coordinate: Coordinate, ports: Iterable[Seaport]) -> tuple[Seaport, float] | None:
    best: tuple[Seaport, float] | None = None
    for port in ports:
        dist = haversine_distance(coordinate.latitude, coordinate.longitude, port.latitude, port.longitude)
        if best is None or dist < best[1]:
            best = (port, dist)
    return best


def zone_key_by_areas(coordinate: Coordinate) -> str:
    """Seaport-map area letter: C, then B, then A, otherwise X."""
    lat, lon = coordinate.latitude, coordinate.longitude
    if point_in_polygon(lat, lon, ZONE_C_POLYGON) or any(
        point_in_circle(lat, lon, center[0], center[1], radius) for center, radius in ZONE_C_CIRCLES
    ):
        return "C"
    if point_in_polygon(lat, lon, ZONE_B_POLYGON):
        return "B"
    if any(point_in_polygon(lat, lon, polygon) for polygon in ZONE_A_POLYGONS):
        return "A"
    return "X"


def format_zone_name(coordinate: Coordinate) -> str:
    """Label like ``ZoneA-ECA42(9.000000-104.500000)``."""
    key = zone_key_by_areas(coordinate)
    number = ec_number(coordinate.latitude, coordinate.longitude)
    return f"Zone{key}-EC{key}{number}({coordinate.latitude:.6f}-{coordinate.longitude:.6f})"


class SeaportZoneLookup:
    """NearestZoneLookup backed by the remote seaport table over HTTP."""

    def __init__(self, base_url: str, api_key: str = "", timeout_sec: float = 8.0):
        if not base_url:
            raise ValueError("base_url is required for the seaport lookup")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_sec = timeout_sec
        self._seaports: list[Seaport] | None = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _fetch_rows(self) -> list[dict]:
        url = f"{self._base_url}/rest/v1/seaports"
        timeout = aiohttp.ClientTimeout(total=self._timeout_sec)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params={"select": SEAPORT_FIELDS}, headers=self._headers()) as response:
                    if response.status != 200:
                        detail = await response.text()
                        raise ZoneLookupUnavailable(f"Seaport request failed ({response.status}): {detail}")
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ZoneLookupUnavailable(f"Seaport request error: {type(exc).__name__}: {exc}") from exc

        if not isinstance(data, list):
            raise ZoneLookupUnavailable("Seaport response is not a list")
        return data

    async def fetch_seaports(self) -> list[Seaport]:
        if self._seaports is not None:
            return self._seaports

        ports = parse_seaports(await self._fetch_rows())
        if not ports:
            raise ZoneLookupUnavailable("No seaports with usable coordinates")
        logger.info("Loaded %d seaports for zone lookup", len(ports))
        self._seaports = ports
        return ports

    async def nearest_zone(self, coordinate: Coordinate) -> SeaportZone:
        ports = await self.fetch_seaports()
        match = nearest_seaport(coordinate, ports)
        if match is None:
            raise ZoneLookupUnavailable("No seaport found near position")
        port, dist_m = match
        logger.debug("Nearest seaport %s (%s) at %.0f m", port.id, port.name, dist_m)
        return SeaportZone(
            zone_name=format_zone_name(coordinate),
            zone_code=port.classification,
            seaport_id=port.id,
            distance_m=dist_m,
        )
