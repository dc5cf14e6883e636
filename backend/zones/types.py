"""Types for coastal-region and fishing-ground classification."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from common.types import BoundingBox, Coordinate


@dataclass(frozen=True)
class CoastalRegion:
    """Administrative nearshore region. The outside sentinel has no bounds."""

    code: str
    name: str
    description: str
    bounds: BoundingBox | None = None


@dataclass(frozen=True)
class FishingGround:
    """A named offshore fishing ground (Ngư Trường) split into grid cells."""

    name: str
    bounds: BoundingBox
    cell_count: int
    code_prefix: str
    area_km2: float

    @property
    def short_name(self) -> str:
        # "Ngư Trường Vinh Bắc Bộ (Tonkin Gulf)" -> "Vinh Bắc Bộ"
        base = self.name.split(" (")[0]
        return base.replace("Ngư Trường ", "", 1)


@dataclass(frozen=True)
class GridZoneResult:
    ground_name: str
    zone: str
    cell_code: str
    cell_number: int
    region_short_name: str
    coordinate: Coordinate
    area_km2: float


class ZoneSource(str, Enum):
    EXTERNAL_LOOKUP = "external_lookup"
    CACHE = "cache"
    GRID_FALLBACK = "grid_fallback"


class ZoneAssignment(BaseModel):
    """Zone stamped on a catch record. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    zone_label: str
    source: ZoneSource
    coordinate: Coordinate
    # Set only when the label came from the nearest-seaport lookup
    zone_code: str | None = None
    seaport_id: str | None = None
    seaport_distance_m: float | None = None


class SeaportZone(BaseModel):
    """Nearest-seaport lookup answer: label plus the port it was derived from."""

    model_config = ConfigDict(frozen=True)

    zone_name: str
    zone_code: str | None = None  # the port's classification
    seaport_id: str | None = None
    distance_m: float | None = None
