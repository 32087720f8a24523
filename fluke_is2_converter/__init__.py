"""
fluke-is2-converter - convert Fluke .is2 thermal files to images

Decodes both .is2 variants (raw binary legacy files and ZIP based files),
converts the sensor counts to temperatures and renders a false-color
infrared image with scale and min/max markers. The visual photo and, for
legacy files, the voice annotation (.wav) are extracted as well.

Main usage:
    import fluke_is2_converter

    # Convert a file
    result = fluke_is2_converter.convert_is2("IR000123.IS2", ir_path="ir.jpg", visual_path="vis.jpg")
    print(f"Max temperature: {result.field.max_temp:.1f}°C")

    # Only read the temperatures
    data = fluke_is2_converter.read_is2("IR000123.IS2")
    print(f"Average temperature: {data['data'].mean():.2f}°C")
"""

__version__ = "0.2.0"

from .exceptions import (
    EncodeError,
    FormatUnrecognizedError,
    IS2Error,
    IS2IOError,
    OffsetNotFoundError,
    UnsafeArchiveEntryError,
)
from .models import CalibrationParams, ConversionResult, TemperatureField
from .reader import IS2Converter, convert_is2, open_is2, read_is2

__all__ = [
    "convert_is2",  # Funzione principale
    "read_is2",
    "open_is2",
    "IS2Converter",
    "CalibrationParams",
    "ConversionResult",
    "TemperatureField",
    "IS2Error",
    "FormatUnrecognizedError",
    "OffsetNotFoundError",
    "UnsafeArchiveEntryError",
    "IS2IOError",
    "EncodeError",
]
