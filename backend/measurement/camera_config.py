from pydantic import BaseModel, Field

from measurement import config
from measurement.types import CalibrationProfile


class CameraConfig(BaseModel):
    image_width: int = Field(1920, gt=0)
    image_height: int = Field(1080, gt=0)
    h_fov_deg: float = Field(config.DEFAULT_H_FOV_DEG, gt=0, lt=180)
    focal_length_factor: float = Field(config.DEFAULT_FOCAL_LENGTH_FACTOR, gt=0)

    def calibrate(self) -> CalibrationProfile:
        return CalibrationProfile.from_sensor_width(
            self.image_width,
            focal_length_factor=self.focal_length_factor,
            fov_deg=self.h_fov_deg,
        )
