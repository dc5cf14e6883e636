"""
Runtime settings for the catch provenance backend.

Values come from the environment (``backend/.env`` is loaded by
``common.config.paths``) and are frozen at import time.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from common.config.paths import DEFAULT_SQLITE_PATH

logger = logging.getLogger(__name__)

_DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]

# Ho Chi Minh City, used when the device position is unavailable.
_DEFAULT_LATITUDE = "10.8231"
_DEFAULT_LONGITUDE = "106.6297"


def _parse_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if raw.strip():
        return [o.strip() for o in raw.split(",") if o.strip()]
    return list(_DEFAULT_CORS_ORIGINS)


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_SQLITE_PATH}")
    seaport_api_url: str = os.getenv("SEAPORT_API_URL", "").strip()
    seaport_api_key: str = os.getenv("SEAPORT_API_KEY", "").strip()
    zone_lookup_timeout_sec: float = float(os.getenv("ZONE_LOOKUP_TIMEOUT_SEC", "8"))
    zone_lookup_cooldown_sec: float = float(os.getenv("ZONE_LOOKUP_COOLDOWN_SEC", "30"))
    zone_cache_backend: str = os.getenv("ZONE_CACHE_BACKEND", "memory").strip().lower()
    zone_cache_ttl_sec: float = float(os.getenv("ZONE_CACHE_TTL_SEC", "900"))
    zone_cache_precision: int = int(os.getenv("ZONE_CACHE_PRECISION", "2"))
    default_latitude: float = float(os.getenv("DEFAULT_LATITUDE", _DEFAULT_LATITUDE))
    default_longitude: float = float(os.getenv("DEFAULT_LONGITUDE", _DEFAULT_LONGITUDE))
    traceability_max_attempts: int = int(os.getenv("TRACEABILITY_MAX_ATTEMPTS", "5"))
    cors_origins: tuple[str, ...] = tuple(_parse_cors_origins())


settings = Settings()

if settings.zone_cache_backend not in ("memory", "redis"):
    logger.warning(
        "Unknown ZONE_CACHE_BACKEND '%s', falling back to in-memory cache",
        settings.zone_cache_backend,
    )
if not settings.seaport_api_url:
    logger.info("SEAPORT_API_URL not set; zones resolve from the fishing-ground grid only")
