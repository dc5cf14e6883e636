"""Types for traceability code allocation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, Field, field_validator


class HaulContext(BaseModel):
    """Everything the allocator needs to know about the haul being stamped."""

    haul_id: str = Field(..., min_length=1)
    haul_number: int = Field(..., ge=0, le=99)
    trip_code: str
    species_code: str
    capture_date: date

    @field_validator("trip_code")
    @classmethod
    def _check_trip_code(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 4:
            raise ValueError("trip_code needs at least 4 characters")
        return value

    @field_validator("species_code")
    @classmethod
    def _check_species_code(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("species_code needs at least 3 characters")
        return value


@dataclass(frozen=True)
class TraceabilityCodeParts:
    species_prefix: str  # 3 chars
    trip_suffix: str  # 4 chars
    haul_number: str  # 2 digits
    date_code: str  # MMDD
    sequence: str  # 2 digits

    def __str__(self) -> str:
        return f"{self.species_prefix}{self.trip_suffix}{self.haul_number}{self.date_code}{self.sequence}"
