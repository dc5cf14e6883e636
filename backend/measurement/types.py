"""
Value types for fish measurement.
"""
from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from measurement import config


class SizeCategory(str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"

    @classmethod
    def coerce(cls, value: str | None) -> "SizeCategory":
        """Unknown or missing labels read as MEDIUM."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.MEDIUM


class CalibrationProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    focal_length_px: float = Field(..., gt=0, allow_inf_nan=False)
    reference_distance_cm: float = Field(config.REFERENCE_DISTANCE_CM, gt=0)
    reference_pixel_width: float = Field(..., gt=0)

    @classmethod
    def from_sensor_width(
        cls,
        width_px: float,
        focal_length_factor: float = config.DEFAULT_FOCAL_LENGTH_FACTOR,
        fov_deg: float = config.DEFAULT_H_FOV_DEG,
    ) -> "CalibrationProfile":
        """
        Rough pinhole approximation from the frame width alone.

        The reference pixel width assumes a reference object spans half
        the frame at the reference distance; no real reference object
        is measured.
        """
        if width_px <= 0:
            raise ValueError("width_px must be positive")
        half_fov = math.radians(fov_deg) / 2.0
        return cls(
            focal_length_px=width_px * focal_length_factor / math.tan(half_fov),
            reference_distance_cm=config.REFERENCE_DISTANCE_CM,
            reference_pixel_width=width_px / 2.0,
        )


class MeasurementEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance_cm: float
    real_length_cm: float
    real_girth_cm: float
    estimated_weight_kg: float
    method: str = config.ESTIMATION_METHOD
    confidence: float


class MeasurementResult(BaseModel):
    """Either an estimate or the reason there is none."""

    model_config = ConfigDict(frozen=True)

    estimate: MeasurementEstimate | None = None
    reason: str | None = None

    @property
    def available(self) -> bool:
        return self.estimate is not None

    @classmethod
    def unavailable(cls, reason: str) -> "MeasurementResult":
        return cls(estimate=None, reason=reason)
