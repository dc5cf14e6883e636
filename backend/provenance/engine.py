"""
Catch stamping: position -> zone -> measurement -> traceability code.

The traceability code is allocated last, after zone and measurement.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from common.types import Coordinate, Detection
from measurement.estimator import MeasurementEstimator
from measurement.types import CalibrationProfile, MeasurementResult
from traceability.allocator import TraceabilityCodeAllocator
from traceability.types import HaulContext
from zones.coastal import classify_region
from zones.grid import FISHING_GROUNDS, classify_grid, unreachable_cells
from zones.resolver import ZoneResolver
from zones.types import CoastalRegion, GridZoneResult, ZoneAssignment

logger = logging.getLogger(__name__)

DEFAULT_POSITION = Coordinate(latitude=10.8231, longitude=106.6297)


@dataclass(frozen=True)
class CatchProvenance:
    traceability_code: str
    zone: ZoneAssignment
    region: CoastalRegion
    grid: GridZoneResult
    measurement: MeasurementResult
    position: Coordinate
    position_defaulted: bool


def position_or_default(
    device_position: Coordinate | None,
    default: Coordinate = DEFAULT_POSITION,
) -> tuple[Coordinate, bool]:
    """Returns the position to stamp and whether the default was used."""
    if device_position is None:
        return default, True
    return device_position, False


_warned_grounds: set[str] = set()


def warn_unreachable_cells() -> None:
    """Log once per process for each ground whose cell count is not a perfect square."""
    for ground in FISHING_GROUNDS:
        missing = unreachable_cells(ground)
        if missing and ground.code_prefix not in _warned_grounds:
            _warned_grounds.add(ground.code_prefix)
            logger.warning(
                "Fishing ground %s has %d cells but only %d are reachable on its grid",
                ground.code_prefix,
                ground.cell_count,
                ground.cell_count - missing,
            )


class CatchProvenanceEngine:
    def __init__(
        self,
        resolver: ZoneResolver,
        allocator: TraceabilityCodeAllocator,
        estimator: MeasurementEstimator | None = None,
        default_position: Coordinate = DEFAULT_POSITION,
    ):
        self._resolver = resolver
        self._allocator = allocator
        self._estimator = estimator or MeasurementEstimator()
        self._default_position = default_position
        warn_unreachable_cells()

    async def stamp(
        self,
        haul: HaulContext,
        device_position: Coordinate | None,
        detection: Detection | None = None,
        calibration: CalibrationProfile | None = None,
        existing_codes: Iterable[str] | None = None,
        refresh_zone: bool = False,
    ) -> CatchProvenance:
        position, defaulted = position_or_default(device_position, self._default_position)
        if defaulted:
            logger.info("No device position for haul '%s', using default position", haul.haul_id)

        zone = await self._resolver.resolve_zone(position, refresh=refresh_zone)

        if detection is None:
            measurement = MeasurementResult.unavailable("No detection supplied")
        else:
            measurement = self._estimator.estimate(detection, calibration)

        code = self._allocator.allocate(haul, existing_codes)

        return CatchProvenance(
            traceability_code=code,
            zone=zone,
            region=classify_region(position),
            grid=classify_grid(position),
            measurement=measurement,
            position=position,
            position_defaulted=defaulted,
        )
