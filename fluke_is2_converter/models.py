"""
Data models for .is2 conversion.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .utilities import raw_to_celsius
from .variants import FormatVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationParams:
    """Caller-supplied calibration; scale_min == scale_max == 0 selects automatic scaling."""

    background_temp: float = 20.0
    emissivity: float = 0.95
    scale_min: float = 0.0
    scale_max: float = 0.0

    def __post_init__(self):
        if not 0 < self.emissivity <= 1:
            raise ValueError(f"Emissivity must be in (0, 1], got {self.emissivity}")

    @property
    def auto_scale(self) -> bool:
        return self.scale_min == 0.0 and self.scale_max == 0.0

    def resolve_scale(self, field: "TemperatureField") -> Tuple[float, float]:
        """Return the (min, max) range of the color table."""
        if self.auto_scale:
            logger.info("Automatic scale of the color table.")
            return field.min_temp, field.max_temp
        logger.info("Manual scale of the color table: min=%.2f °C, max=%.2f °C", self.scale_min, self.scale_max)
        return float(self.scale_min), float(self.scale_max)


@dataclass
class RawFrame:
    """One IR frame of raw 16-bit sensor counts, shape (height, width)."""

    counts: np.ndarray
    variant: FormatVariant

    def __post_init__(self):
        expected = (self.variant.height, self.variant.width)
        if self.counts.shape != expected:
            raise ValueError(f"Raw frame has shape {self.counts.shape}, expected {expected}")

    def _position(self, flat_index: int) -> Tuple[int, int]:
        y, x = np.unravel_index(flat_index, self.counts.shape)
        return int(x), int(y)

    def min_position(self) -> Tuple[int, int]:
        """(x, y) of the first smallest count in row-major order."""
        return self._position(int(np.argmin(self.counts)))

    def max_position(self) -> Tuple[int, int]:
        """(x, y) of the first largest count in row-major order."""
        return self._position(int(np.argmax(self.counts)))

    def to_celsius(self, counts, calibration: CalibrationParams):
        return raw_to_celsius(
            counts,
            self.variant.ir_scale,
            self.variant.ir_bias,
            background_temp=calibration.background_temp,
            emissivity=calibration.emissivity,
        )


@dataclass
class TemperatureField:
    """Temperatures (°C) of one frame with its extreme values and their pixel positions (x, y)."""

    data: np.ndarray
    min_temp: float
    max_temp: float
    min_pos: Tuple[int, int]
    max_pos: Tuple[int, int]

    @classmethod
    def from_raw(cls, frame: RawFrame, calibration: Optional[CalibrationParams] = None) -> "TemperatureField":
        """Convert every sample; extremes come from the raw counts (conversion is monotonic)."""
        calibration = calibration or CalibrationParams()
        min_pos = frame.min_position()
        max_pos = frame.max_position()
        field = cls(
            data=frame.to_celsius(frame.counts, calibration),
            min_temp=frame.to_celsius(int(frame.counts[min_pos[1], min_pos[0]]), calibration),
            max_temp=frame.to_celsius(int(frame.counts[max_pos[1], max_pos[0]]), calibration),
            min_pos=min_pos,
            max_pos=max_pos,
        )
        logger.info("Temperature min=%.2f °C, max=%.2f °C", field.min_temp, field.max_temp)
        logger.info("Background temperature=%.2f °C, emissivity=%.2f", calibration.background_temp, calibration.emissivity)
        return field

    def get_temperature_range(self) -> tuple:
        """Return the temperature range (min, max)."""
        return self.min_temp, self.max_temp

    def get_average_temperature(self) -> float:
        """Return the average temperature."""
        return float(np.mean(self.data))

    def get_temperature_at_pixel(self, x: int, y: int) -> float:
        """Return the temperature at the given pixel."""
        height, width = self.data.shape
        if 0 <= x < width and 0 <= y < height:
            return float(self.data[y, x])
        raise IndexError(f"Pixel coordinates ({x}, {y}) out of image bounds")


@dataclass
class ConversionResult:
    """Artifacts produced by one conversion; paths are None when the artifact was skipped."""

    file_path: str
    variant: FormatVariant
    field: TemperatureField
    scale: Tuple[float, float]
    ir_path: Optional[str] = None
    visual_path: Optional[str] = None
    audio_path: Optional[str] = None
