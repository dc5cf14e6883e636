"""Measurement and detection-gating configuration."""

# Reference widths by size class (cm)
REFERENCE_WIDTH_CM = {
    "SMALL": 15.0,
    "MEDIUM": 25.0,
    "LARGE": 35.0,
}

# Distance clamp (cm)
MIN_DISTANCE_CM = 10.0
MAX_DISTANCE_CM = 300.0

# weight_kg = length * girth^2 / WEIGHT_DIVISOR
WEIGHT_DIVISOR = 800.0
ESTIMATION_METHOD = "size_based_estimation"

# Camera calibration approximation
DEFAULT_FOCAL_LENGTH_FACTOR = 1.2
DEFAULT_H_FOV_DEG = 120.0
REFERENCE_DISTANCE_CM = 100.0

# Detection stabilizer
MIN_CONFIDENCE_THRESHOLD = 0.65
MIN_DETECTIONS_REQUIRED = 3
STABILIZER_MATCH_IOU = 0.5
STABILIZER_TRACK_MAX_AGE_SEC = 2.0
