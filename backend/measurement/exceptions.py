"""Custom exceptions for measurement estimation."""
from common.exceptions import ProvenanceError


class MeasurementError(ProvenanceError):
    """Base measurement exception."""


class CalibrationMissing(MeasurementError):
    """Raised when no calibration profile is available for the frame."""

    def __init__(self, msg: str = "No calibration profile available") -> None:
        super().__init__(msg)


class InvalidBoundingBox(MeasurementError):
    """Raised when a bounding box has zero or non-finite extent."""

    def __init__(self, bounding_box=None) -> None:
        super().__init__(f"Bounding box has no usable extent: {bounding_box}")
        self.bounding_box = bounding_box
