"""Traditional coastal regions (A-D) of Vietnam's nearshore waters."""
from __future__ import annotations

from common.types import BoundingBox, Coordinate
from zones.types import CoastalRegion

# Priority order matters: the first region whose box contains the point wins.
# D sits entirely inside C, so with this order D is never returned.
COASTAL_REGIONS: tuple[CoastalRegion, ...] = (
    CoastalRegion(
        code="A",
        name="Cà Mau – Kiên Giang",
        description="Southwest coast of Vietnam, near Gulf of Thailand. A major nearshore fishing area.",
        bounds=BoundingBox(min_lat=8.5, max_lat=10.5, min_lng=104.0, max_lng=105.5),
    ),
    CoastalRegion(
        code="B",
        name="Đà Nẵng – Thanh Hóa",
        description="Central-north coast, covering mid to upper central Vietnam.",
        bounds=BoundingBox(min_lat=15.5, max_lat=17.5, min_lng=107.5, max_lng=109.0),
    ),
    CoastalRegion(
        code="C",
        name="Hải Phòng – Vũng Tàu",
        description="A long stretch from the north (Hải Phòng) to south (Vũng Tàu), includes diverse ecosystems.",
        bounds=BoundingBox(min_lat=20.0, max_lat=22.0, min_lng=106.0, max_lng=107.5),
    ),
    CoastalRegion(
        code="D",
        name="Hải Dương – Thái Bình",
        description="Smaller northern coast zone near Red River delta.",
        bounds=BoundingBox(min_lat=20.5, max_lat=21.5, min_lng=106.5, max_lng=107.0),
    ),
)

OUTSIDE_REGION = CoastalRegion(
    code="X",
    name="Outside Traditional Coastal Regions",
    description="Coordinates outside Vietnam's traditional coastal regions A-D.",
)


def classify_region(coordinate: Coordinate) -> CoastalRegion:
    for region in COASTAL_REGIONS:
        if region.bounds is not None and region.bounds.contains(coordinate):
            return region
    return OUTSIDE_REGION
