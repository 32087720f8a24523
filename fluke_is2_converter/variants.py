"""
Format-variant registry for Fluke .is2 files.

Each variant defines: calibration constants (raw count -> radiation proxy),
byte offsets of the IR, visual and audio blocks and the frame dimensions,
so decoding and rendering run through one pipeline parameterized by the variant.

Key order of FORMAT_VARIANTS = detection order (the Container check is
structural and cheap, the Legacy sentinel scan is a heuristic, so it goes last).
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

LEGACY = "legacy"
CONTAINER = "container"


@dataclass(frozen=True)
class FormatVariant:
    """Offsets and calibration of one on-disk .is2 variant."""

    name: str
    description: str
    ir_scale: float
    ir_bias: float
    # Offset of the IR block; Legacy: relative to the sentinel, Container: inside the IR entry.
    ir_offset: int
    width: int = 320
    height: int = 240

    # Legacy (raw binary) layout
    sentinel_run: Optional[int] = None
    sentinel_limit: Optional[int] = None
    visual_offset: Optional[int] = None
    visual_size: Optional[Tuple[int, int]] = None
    audio_offset: Optional[int] = None
    audio_sample_rate: int = 8000

    # Container (ZIP) layout
    ir_entry: Optional[str] = None
    visual_entry: Optional[str] = None

    @property
    def n_pixels(self) -> int:
        return self.width * self.height

    @property
    def ir_block_size(self) -> int:
        """IR block length in bytes (uint16 per pixel)."""
        return self.n_pixels * 2


FORMAT_VARIANTS: Dict[str, FormatVariant] = {
    CONTAINER: FormatVariant(
        name=CONTAINER,
        description="ZIP based .is2 (Images/Main/IR.data + JPEG photo)",
        ir_scale=0.201,
        ir_bias=154.035,
        ir_offset=640,
        ir_entry="Images/Main/IR.data",
        visual_entry="Images/Main/028001E0.jpg",
    ),
    LEGACY: FormatVariant(
        name=LEGACY,
        description="raw, uncompressed binary .is2",
        ir_scale=0.662,
        ir_bias=228.0,
        ir_offset=15828,
        sentinel_run=20,
        sentinel_limit=1000,
        visual_offset=169484,
        visual_size=(640, 480),
        audio_offset=784080,
    ),
}

SUPPORTED_VARIANTS = tuple(FORMAT_VARIANTS.keys())


def get_format_variant(name: str) -> FormatVariant:
    """Return the registered variant by name (case-insensitive)."""
    key = (name or "").strip().lower()
    try:
        return FORMAT_VARIANTS[key]
    except KeyError:
        supported = ", ".join(SUPPORTED_VARIANTS)
        raise ValueError(f"Unknown format variant: {name!r}. Supported: {supported}.") from None
