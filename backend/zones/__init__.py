"""Zone classification and resolution package."""

from .cache import InMemoryZoneCache, RedisZoneCache, ZoneCache, bucket_key
from .coastal import COASTAL_REGIONS, OUTSIDE_REGION, classify_region
from .exceptions import ZoneError, ZoneLookupUnavailable
from .grid import FISHING_GROUNDS, classify_grid, unreachable_cells
from .lookup import NearestZoneLookup, SeaportZoneLookup
from .resolver import ZoneResolver
from .types import CoastalRegion, FishingGround, GridZoneResult, SeaportZone, ZoneAssignment, ZoneSource

__all__ = [
    "COASTAL_REGIONS",
    "FISHING_GROUNDS",
    "OUTSIDE_REGION",
    "CoastalRegion",
    "FishingGround",
    "GridZoneResult",
    "InMemoryZoneCache",
    "NearestZoneLookup",
    "RedisZoneCache",
    "SeaportZone",
    "SeaportZoneLookup",
    "ZoneAssignment",
    "ZoneCache",
    "ZoneError",
    "ZoneLookupUnavailable",
    "ZoneResolver",
    "ZoneSource",
    "bucket_key",
    "classify_grid",
    "classify_region",
    "unreachable_cells",
]
