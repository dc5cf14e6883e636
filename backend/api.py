"""FastAPI backend for catch provenance stamping."""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from common.config import create_redis_client
from common.settings import settings
from common.types import Coordinate, Detection
from db.database import get_db
from db.init_db import init_db
from db.models import CatchRecord
from fish_scan import ScanAnalysis, parse_scan_text
from measurement import CalibrationProfile, CameraConfig, MeasurementEstimator, MeasurementResult
from provenance import CatchProvenance, CatchProvenanceEngine
from traceability import AllocationExhausted, HaulContext, SqlCodeRegistry, TraceabilityCodeAllocator, parse_code
from zones import (
    InMemoryZoneCache,
    RedisZoneCache,
    SeaportZoneLookup,
    ZoneAssignment,
    ZoneResolver,
    classify_grid,
    classify_region,
)
from zones.types import CoastalRegion, GridZoneResult

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

app = FastAPI(
    title="Catch Provenance API",
    description="Zone classification, traceability codes and size estimates for catch records",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def build_zone_resolver() -> tuple[ZoneResolver, object | None]:
    """Resolver wired from settings. Also returns the Redis client to close, if any."""
    redis_client = None
    if settings.zone_cache_backend == "redis":
        redis_client = create_redis_client()
        cache = RedisZoneCache(redis_client, ttl_seconds=settings.zone_cache_ttl_sec)
    else:
        cache = InMemoryZoneCache(ttl_seconds=settings.zone_cache_ttl_sec)

    lookup = None
    if settings.seaport_api_url:
        lookup = SeaportZoneLookup(
            settings.seaport_api_url,
            api_key=settings.seaport_api_key,
            timeout_sec=settings.zone_lookup_timeout_sec,
        )

    resolver = ZoneResolver(
        lookup=lookup,
        cache=cache,
        timeout_seconds=settings.zone_lookup_timeout_sec,
        cooldown_seconds=settings.zone_lookup_cooldown_sec,
        bucket_precision=settings.zone_cache_precision,
    )
    return resolver, redis_client


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    resolver, redis_client = build_zone_resolver()
    app.state.resolver = resolver
    logger.info(
        "Zone resolver ready (lookup=%s, cache=%s)",
        "seaport" if settings.seaport_api_url else "grid-only",
        settings.zone_cache_backend,
    )

    yield

    if redis_client is not None:
        redis_client.close()


app.router.lifespan_context = lifespan


def get_resolver(request: Request) -> ZoneResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise HTTPException(status_code=503, detail="Zone resolver not initialized")
    return resolver


def get_estimator() -> MeasurementEstimator:
    return MeasurementEstimator()


# ---------- Request / response models ----------

class ResolveZoneRequest(BaseModel):
    position: Coordinate
    refresh: bool = False


class MeasurementRequest(BaseModel):
    detection: Detection
    calibration: CalibrationProfile | None = None
    camera: CameraConfig | None = None

    def calibration_profile(self) -> CalibrationProfile | None:
        if self.calibration is not None:
            return self.calibration
        if self.camera is not None:
            return self.camera.calibrate()
        return None


class CatchCreateRequest(MeasurementRequest):
    haul: HaulContext
    position: Coordinate | None = None
    detection: Detection | None = None
    species_name: str | None = None
    existing_codes: list[str] | None = None
    refresh_zone: bool = False


class ScanParseRequest(BaseModel):
    text: str


def _region_payload(region: CoastalRegion) -> dict:
    return {"code": region.code, "name": region.name, "description": region.description}


def _grid_payload(grid: GridZoneResult) -> dict:
    return {
        "ground_name": grid.ground_name,
        "zone": grid.zone,
        "cell_code": grid.cell_code,
        "cell_number": grid.cell_number,
        "region_short_name": grid.region_short_name,
        "area_km2": grid.area_km2,
    }


def _provenance_payload(record: CatchRecord, provenance: CatchProvenance) -> dict:
    return {
        "id": record.id,
        "haul_id": record.haul_id,
        "traceability_code": provenance.traceability_code,
        "zone": provenance.zone.model_dump(mode="json"),
        "region": _region_payload(provenance.region),
        "grid": _grid_payload(provenance.grid),
        "measurement": provenance.measurement.model_dump(mode="json"),
        "position": provenance.position.model_dump(),
        "position_defaulted": provenance.position_defaulted,
    }


# ---------- Routes ----------

@app.get("/")
def read_root():
    return {
        "status": "ok",
        "message": "Catch Provenance API is running",
        "endpoints": {
            "classify": "/api/zones/classify",
            "resolve": "/api/zones/resolve",
            "measurements": "/api/measurements/estimate",
            "catches": "/api/catches",
            "traceability": "/api/traceability/{code}",
            "scans": "/api/scans/parse",
            "health": "/health",
        },
    }


@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "zone_lookup": "seaport" if settings.seaport_api_url else "grid-only",
        "zone_cache": settings.zone_cache_backend,
    }


@app.get("/api/zones/classify")
def classify_zone(
    latitude: Annotated[float, Query()],
    longitude: Annotated[float, Query()],
):
    try:
        coordinate = Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid coordinate: {exc.errors()[0]['msg']}")
    return {
        "coordinate": coordinate.model_dump(),
        "region": _region_payload(classify_region(coordinate)),
        "grid": _grid_payload(classify_grid(coordinate)),
    }


@app.post("/api/zones/resolve")
async def resolve_zone(
    payload: ResolveZoneRequest,
    resolver: Annotated[ZoneResolver, Depends(get_resolver)],
):
    assignment: ZoneAssignment = await resolver.resolve_zone(payload.position, refresh=payload.refresh)
    return {
        "zone": assignment.model_dump(mode="json"),
        "region": _region_payload(classify_region(payload.position)),
        "grid": _grid_payload(classify_grid(payload.position)),
    }


@app.post("/api/measurements/estimate", response_model=MeasurementResult)
def estimate_measurement(
    payload: MeasurementRequest,
    estimator: Annotated[MeasurementEstimator, Depends(get_estimator)],
):
    return estimator.estimate(payload.detection, payload.calibration_profile())


@app.post("/api/catches", status_code=201)
@limiter.limit("30/minute")
async def create_catch(
    request: Request,
    payload: CatchCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    resolver: Annotated[ZoneResolver, Depends(get_resolver)],
    estimator: Annotated[MeasurementEstimator, Depends(get_estimator)],
):
    allocator = TraceabilityCodeAllocator(
        SqlCodeRegistry(db),
        max_attempts=settings.traceability_max_attempts,
    )
    engine = CatchProvenanceEngine(
        resolver,
        allocator,
        estimator=estimator,
        default_position=Coordinate(latitude=settings.default_latitude, longitude=settings.default_longitude),
    )

    try:
        provenance = await engine.stamp(
            payload.haul,
            payload.position,
            detection=payload.detection,
            calibration=payload.calibration_profile(),
            existing_codes=payload.existing_codes,
            refresh_zone=payload.refresh_zone,
        )
    except AllocationExhausted as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    estimate = provenance.measurement.estimate
    record = CatchRecord(
        haul_id=payload.haul.haul_id,
        qr_code=provenance.traceability_code,
        species_code=payload.haul.species_code,
        species_name=payload.species_name or (payload.detection.common_name if payload.detection else None),
        latitude=provenance.position.latitude,
        longitude=provenance.position.longitude,
        zone_label=provenance.zone.zone_label,
        zone_source=provenance.zone.source.value,
        zone_code=provenance.zone.zone_code,
        seaport_id=provenance.zone.seaport_id,
        region_code=provenance.region.code,
        grid_cell_code=provenance.grid.cell_code,
        distance_cm=estimate.distance_cm if estimate else None,
        length_cm=estimate.real_length_cm if estimate else None,
        girth_cm=estimate.real_girth_cm if estimate else None,
        weight_kg=estimate.estimated_weight_kg if estimate else None,
        measurement_confidence=estimate.confidence if estimate else None,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Traceability code %s was taken concurrently", provenance.traceability_code)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Traceability code {provenance.traceability_code} already exists",
        )
    db.refresh(record)

    logger.info("Stamped catch %s for haul '%s'", record.qr_code, record.haul_id)
    return _provenance_payload(record, provenance)


@app.get("/api/traceability/{code}")
def describe_code(code: str, db: Annotated[Session, Depends(get_db)]):
    try:
        parts = parse_code(code)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    record = db.query(CatchRecord).filter(CatchRecord.qr_code == str(parts)).one_or_none()
    return {
        "code": str(parts),
        "parts": asdict(parts),
        "registered": record is not None,
        "haul_id": record.haul_id if record else None,
        "zone_label": record.zone_label if record else None,
        "zone_code": record.zone_code if record else None,
    }


@app.post("/api/scans/parse", response_model=ScanAnalysis)
def parse_scan(payload: ScanParseRequest):
    return parse_scan_text(payload.text)
