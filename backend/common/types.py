"""
Shared value types for catch provenance.

Coordinates and detections cross the API boundary, so they are pydantic
models; everything here is frozen once built.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    """A WGS84-like position in degrees. No range normalization is applied."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., allow_inf_nan=False)
    longitude: float = Field(..., allow_inf_nan=False)


class BoundingBox(BaseModel):
    """Axis-aligned lat/lng box with inclusive edges."""

    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @model_validator(mode="after")
    def _check_order(self) -> "BoundingBox":
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lng > self.max_lng:
            raise ValueError("min_lng must not exceed max_lng")
        return self

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.min_lat <= coordinate.latitude <= self.max_lat
            and self.min_lng <= coordinate.longitude <= self.max_lng
        )


class Detection(BaseModel):
    """
    One fish detection from the external inference service.
    Bounding box is [x1, y1, x2, y2] in frame pixels.
    """

    model_config = ConfigDict(frozen=True)

    bounding_box: tuple[float, float, float, float]
    confidence: float = Field(..., ge=0.0, le=1.0)
    size_category: str = "MEDIUM"  # SMALL / MEDIUM / LARGE, anything else reads as MEDIUM
    species: str | None = None
    common_name: str | None = None
    track_id: int | None = None
