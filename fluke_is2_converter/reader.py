"""Detect the .is2 variant, decode it and produce the IR image, visual image and audio sidecar."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .exceptions import FormatNotDetectedError, FormatUnrecognizedError, IS2Error
from .models import CalibrationParams, ConversionResult, TemperatureField
from .parsers import ContainerParser, LegacyParser, strip_is2_extension
from .render import ThermalImageComposer

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = [".is2"]


def _check_exists(file_path: Union[str, Path]) -> Path:
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    return file_path


@contextmanager
def open_is2(file_path: Union[str, Path]) -> Iterator[Union[ContainerParser, LegacyParser]]:
    """
    Open an .is2 file as whichever variant it is (Container tried first).

    Only structural non-detection of the Container variant falls back to Legacy; any
    error after a variant was detected propagates. The parser is closed (temp dir removed,
    file closed) when the block exits.
    """
    file_path = _check_exists(file_path)
    try:
        source = ContainerParser(file_path).open()
    except FormatNotDetectedError as container_error:
        logger.debug("Not a container file (%s), trying legacy format", container_error)
        try:
            source = LegacyParser(file_path).open()
        except FormatNotDetectedError as legacy_error:
            raise FormatUnrecognizedError(
                f"Unknown is2 format ({container_error}; {legacy_error}).", path=str(file_path)
            ) from legacy_error
    logger.info("%s: %s variant detected", file_path.name, source.variant.name)
    try:
        yield source
    finally:
        source.close()


def convert_is2(
    file_path: Union[str, Path],
    ir_path: Union[str, Path] = "",
    visual_path: Union[str, Path] = "",
    calibration: Optional[CalibrationParams] = None,
    audio: bool = True,
    composer: Optional[ThermalImageComposer] = None,
) -> ConversionResult:
    """
    Convert a Fluke .is2 file.

    Args:
        file_path: Path to the .is2 file
        ir_path: Destination of the 390x240 IR image; empty skips it
        visual_path: Destination of the visual photo; empty skips it
        calibration: Background temperature, emissivity and optional manual scale
        audio: Write the '<file>.wav' sidecar when the file carries audio (legacy only)

    Returns:
        ConversionResult with the temperature field and the written paths
    """
    calibration = calibration or CalibrationParams()
    with open_is2(file_path) as source:
        field = TemperatureField.from_raw(source.read_frame(), calibration)
        scale = calibration.resolve_scale(field)
        result = ConversionResult(file_path=str(file_path), variant=source.variant, field=field, scale=scale)
        if ir_path:
            result.ir_path = (composer or ThermalImageComposer()).render(field, ir_path, scale)
        if visual_path:
            result.visual_path = source.extract_visual(visual_path)
        if audio:
            result.audio_path = source.extract_audio()
    return result


def read_is2(file_path: Union[str, Path], calibration: Optional[CalibrationParams] = None) -> Dict[str, Any]:
    """Read .is2 file; return dict with 'data' (temperature array °C), 'size', extremes and calibration."""
    calibration = calibration or CalibrationParams()
    with open_is2(file_path) as source:
        frame = source.read_frame()
    field = TemperatureField.from_raw(frame, calibration)
    return {
        "FileName": os.path.basename(str(file_path)),
        "Variant": frame.variant.name,
        "data": field.data,
        "raw": frame.counts,
        "size": [frame.variant.width, frame.variant.height],
        "MinTemp": field.min_temp,
        "MaxTemp": field.max_temp,
        "MinTempPos": field.min_pos,
        "MaxTempPos": field.max_pos,
        "BackgroundTemp": calibration.background_temp,
        "Emissivity": calibration.emissivity,
    }


def resolve_output_path(dest: Union[str, Path], source: Union[str, Path], suffix: str = ".jpg") -> str:
    """
    Resolve an output destination: an existing directory gets '<source name>.jpg' inside it,
    an existing file is overwritten, anything else is created.
    """
    dest = str(dest)
    if not dest:
        return ""
    if os.path.isdir(dest):
        logger.info("%s is a directory.", dest)
        return os.path.join(dest, strip_is2_extension(str(source)) + suffix)
    if os.path.isfile(dest):
        logger.info("Overwrite: %s", dest)
    else:
        logger.info("Create: %s", dest)
    return dest


class IS2Converter:
    """Convert .is2 files with one calibration."""

    def __init__(self, calibration: Optional[CalibrationParams] = None, audio: bool = True):
        self.calibration = calibration or CalibrationParams()
        self.audio = audio
        self._composer = None

    @property
    def composer(self) -> ThermalImageComposer:
        if self._composer is None:
            self._composer = ThermalImageComposer()
        return self._composer

    def convert_file(
        self,
        file_path: Union[str, Path],
        ir_path: Union[str, Path] = "",
        visual_path: Union[str, Path] = "",
    ) -> ConversionResult:
        """Convert one file; output paths go through resolve_output_path."""
        file_path = _check_exists(file_path)
        if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported file format: {file_path.suffix}. Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        return convert_is2(
            file_path,
            ir_path=resolve_output_path(ir_path, file_path),
            visual_path=resolve_output_path(visual_path, file_path),
            calibration=self.calibration,
            audio=self.audio,
            composer=self.composer,
        )

    def convert_directory(
        self,
        directory_path: Union[str, Path],
        ir_dir: Union[str, Path],
        visual_dir: Union[str, Path] = "",
        recursive: bool = False,
    ) -> List[ConversionResult]:
        """Convert every .is2 in directory_path; files that fail are logged and skipped."""
        directory_path = Path(directory_path)
        if not directory_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory_path}")
        # Batch outputs are always directories.
        for dest in (ir_dir, visual_dir):
            if not dest:
                continue
            if os.path.exists(dest) and not os.path.isdir(dest):
                raise NotADirectoryError(f"Output is not a directory: {dest}")
            os.makedirs(dest, exist_ok=True)
        out = []
        pattern = "**/*" if recursive else "*"
        for file_path in sorted(directory_path.glob(pattern)):
            if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
                continue
            try:
                out.append(self.convert_file(file_path, ir_dir, visual_dir))
            except IS2Error as e:
                logger.error("Error converting %s: %s", file_path, e)
        return out

    def get_supported_formats(self) -> List[str]:
        return list(SUPPORTED_EXTENSIONS)

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """Return True if file is a recognised .is2 with a readable IR frame."""
        try:
            with open_is2(file_path) as source:
                source.read_frame()
            return True
        except (IS2Error, OSError):
            return False
