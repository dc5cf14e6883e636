"""
Fishing-ground (Ngư Trường) grid classification, a.k.a. EC30 zones.

Each ground is a bounding box divided into a uniform row-major grid.
The grid side is floor(sqrt(cell_count)), so a ground configured with a
non-square cell count only reaches gridSize**2 of its nominal cells; see
``unreachable_cells``.
"""
from __future__ import annotations

import math

from common.types import BoundingBox, Coordinate
from zones.types import FishingGround, GridZoneResult

FISHING_GROUNDS: tuple[FishingGround, ...] = (
    FishingGround(
        name="Ngư Trường Vinh Bắc Bộ (Tonkin Gulf)",
        bounds=BoundingBox(min_lat=20.0, max_lat=22.0, min_lng=106.0, max_lng=108.0),
        cell_count=20,
        code_prefix="V",
        area_km2=18000,
    ),
    FishingGround(
        name="Ngư Trường Trung Bộ (Central Coast)",
        bounds=BoundingBox(min_lat=15.0, max_lat=17.5, min_lng=107.5, max_lng=109.5),
        cell_count=15,
        code_prefix="T",
        area_km2=13500,
    ),
    FishingGround(
        name="Ngư Trường Đông Nam Bộ (South-East Sea)",
        bounds=BoundingBox(min_lat=9.0, max_lat=11.5, min_lng=105.5, max_lng=107.5),
        cell_count=25,
        code_prefix="D",
        area_km2=22500,
    ),
    FishingGround(
        name="Ngư Trường Trường Sa (Spratly Islands)",
        bounds=BoundingBox(min_lat=7.0, max_lat=12.0, min_lng=110.0, max_lng=115.0),
        cell_count=60,
        code_prefix="S",
        area_km2=54000,
    ),
)

OUTSIDE_ZONE = "Outside Vietnam Waters"
OUTSIDE_CODE = "XX00"
OUTSIDE_GROUND = "Outside Ngư Trường"
OUTSIDE_REGION_NAME = "International Waters"


def grid_size(cell_count: int) -> int:
    return math.isqrt(cell_count)


def unreachable_cells(ground: FishingGround) -> int:
    """Number of nominal cells the floor-sqrt grid can never produce."""
    size = grid_size(ground.cell_count)
    return max(0, ground.cell_count - size * size)


def _ratio(value: float, low: float, high: float) -> float:
    span = high - low
    if span <= 0:
        return 0.0
    return (value - low) / span


def cell_number(ground: FishingGround, coordinate: Coordinate) -> int:
    """1-based row-major cell index of a coordinate already inside ``ground``."""
    bounds = ground.bounds
    lat_ratio = _ratio(coordinate.latitude, bounds.min_lat, bounds.max_lat)
    lng_ratio = _ratio(coordinate.longitude, bounds.min_lng, bounds.max_lng)

    size = grid_size(ground.cell_count)
    lat_grid = math.floor(lat_ratio * size)
    lng_grid = math.floor(lng_ratio * size)
    zone_number = lat_grid * size + lng_grid + 1

    # ratio == 1.0 on the upper edges would index one past the grid
    return min(max(zone_number, 1), ground.cell_count)


def find_ground(coordinate: Coordinate) -> FishingGround | None:
    for ground in FISHING_GROUNDS:
        if ground.bounds.contains(coordinate):
            return ground
    return None


def classify_grid(coordinate: Coordinate) -> GridZoneResult:
    ground = find_ground(coordinate)
    if ground is None:
        return GridZoneResult(
            ground_name=OUTSIDE_GROUND,
            zone=OUTSIDE_ZONE,
            cell_code=OUTSIDE_CODE,
            cell_number=0,
            region_short_name=OUTSIDE_REGION_NAME,
            coordinate=coordinate,
            area_km2=0,
        )

    number = cell_number(ground, coordinate)
    code = f"{ground.code_prefix}{number:02d}"
    return GridZoneResult(
        ground_name=ground.name,
        zone=f"{ground.name} - EC30 {code}",
        cell_code=code,
        cell_number=number,
        region_short_name=ground.short_name,
        coordinate=coordinate,
        area_km2=ground.area_km2,
    )
