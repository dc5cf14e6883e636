"""
Similar-triangles size and weight estimation from one bounding box.

distance = reference_width * focal / width_px, clamped to the working
range; length and girth scale pixel extents back by distance / focal.
"""
from __future__ import annotations

import logging

import numpy as np

from common.types import Detection
from measurement import config
from measurement.exceptions import CalibrationMissing, InvalidBoundingBox, MeasurementError
from measurement.types import CalibrationProfile, MeasurementEstimate, MeasurementResult, SizeCategory

logger = logging.getLogger(__name__)


def reference_width_cm(size_category: str | None) -> float:
    return config.REFERENCE_WIDTH_CM[SizeCategory.coerce(size_category).value]


def box_extent(bounding_box) -> tuple[float, float]:
    """Pixel width and height of an [x1, y1, x2, y2] box, or raise InvalidBoundingBox."""
    box = np.asarray(bounding_box, dtype=float)
    if box.shape != (4,):
        raise InvalidBoundingBox(bounding_box)
    width, height = np.abs(box[2:] - box[:2])
    if not (np.isfinite(width) and np.isfinite(height)) or width == 0 or height == 0:
        raise InvalidBoundingBox(bounding_box)
    return float(width), float(height)


class MeasurementEstimator:
    def __init__(
        self,
        min_distance_cm: float = config.MIN_DISTANCE_CM,
        max_distance_cm: float = config.MAX_DISTANCE_CM,
    ):
        if min_distance_cm <= 0 or max_distance_cm < min_distance_cm:
            raise ValueError("Invalid distance range")
        self._min_distance_cm = min_distance_cm
        self._max_distance_cm = max_distance_cm

    def estimate_or_raise(
        self,
        detection: Detection,
        calibration: CalibrationProfile | None,
    ) -> MeasurementEstimate:
        if calibration is None:
            raise CalibrationMissing()

        width_px, height_px = box_extent(detection.bounding_box)
        focal = calibration.focal_length_px

        raw_distance = reference_width_cm(detection.size_category) * focal / width_px
        distance = float(np.clip(raw_distance, self._min_distance_cm, self._max_distance_cm))

        length = height_px * distance / focal
        girth = 2.0 * width_px * distance / focal
        weight_kg = length * girth**2 / config.WEIGHT_DIVISOR

        if distance != raw_distance:
            logger.debug("Distance %.1f cm clamped to %.1f cm", raw_distance, distance)

        return MeasurementEstimate(
            distance_cm=distance,
            real_length_cm=length,
            real_girth_cm=girth,
            estimated_weight_kg=weight_kg,
            method=config.ESTIMATION_METHOD,
            confidence=detection.confidence,
        )

    def estimate(
        self,
        detection: Detection,
        calibration: CalibrationProfile | None,
    ) -> MeasurementResult:
        try:
            estimate = self.estimate_or_raise(detection, calibration)
        except MeasurementError as exc:
            logger.info("No measurement for detection: %s", exc)
            return MeasurementResult.unavailable(str(exc))
        logger.debug(
            "Estimated %.1f cm / %.3f kg at %.1f cm",
            estimate.real_length_cm,
            estimate.estimated_weight_kg,
            estimate.distance_cm,
        )
        return MeasurementResult(estimate=estimate)
