"""Fish size and weight estimation package."""

from .camera_config import CameraConfig
from .estimator import MeasurementEstimator, box_extent, reference_width_cm
from .exceptions import CalibrationMissing, InvalidBoundingBox, MeasurementError
from .stability import DetectionStabilizer, iou
from .types import CalibrationProfile, MeasurementEstimate, MeasurementResult, SizeCategory

__all__ = [
    "CalibrationMissing",
    "CalibrationProfile",
    "CameraConfig",
    "DetectionStabilizer",
    "InvalidBoundingBox",
    "MeasurementError",
    "MeasurementEstimate",
    "MeasurementEstimator",
    "MeasurementResult",
    "SizeCategory",
    "box_extent",
    "iou",
    "reference_width_cm",
]
