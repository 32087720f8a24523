"""Compose the annotated false-color IR image (thermal pixels, legend, scale, min/max markers) and encode images."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Tuple, Union

from matplotlib import font_manager
from PIL import Image, ImageDraw, ImageFont

from .exceptions import EncodeError, IS2IOError
from .palette import IRON_PALETTE_RGB, colorize, legend_index

logger = logging.getLogger(__name__)

CANVAS_SIZE = (390, 240)

# Legend strip and scale layout (pixels)
LEGEND_LEFT = 320
LEGEND_RIGHT = 335
LEGEND_LINES = 221
LEGEND_BOTTOM = 220
TICK_MAX_Y = 8
TICK_MIN_Y = 213
AXIS_X = 344
AXIS_TICK_RIGHT = 350
LABEL_X = 353
INTERIOR_TICKS = range(24, 224, 25)
SCALE_STEPS = 9
UNIT_LABEL = "°C"
UNIT_LABEL_POS = (346, 234)

BLACK = (0, 0, 0)
MIN_MARKER_COLOR = (200, 200, 255, 230)
MAX_MARKER_COLOR = (255, 200, 200, 230)

JPEG_QUALITY = 100


@lru_cache(maxsize=None)
def load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """DejaVu Sans (bundled with matplotlib) at the given pixel size."""
    prop = font_manager.FontProperties(family="DejaVu Sans", weight="bold" if bold else "normal")
    return ImageFont.truetype(font_manager.findfont(prop), size)


def save_image(image: Image.Image, dest: Union[str, Path], stage: str = "encode") -> str:
    """
    Encode image to dest. Format follows the extension (JPEG if unknown);
    JPEG is written at quality 100 without chroma subsampling.
    """
    dest = str(dest)
    fmt = Image.registered_extensions().get(os.path.splitext(dest)[1].lower(), "JPEG")
    try:
        out = open(dest, "wb")
    except OSError as e:
        raise IS2IOError(f"Cannot create output file: {e}", path=dest, stage=stage) from e
    with out:
        try:
            if fmt == "JPEG":
                image.save(out, format=fmt, quality=JPEG_QUALITY, subsampling=0)
            else:
                image.save(out, format=fmt)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Can't encode {fmt} image: {e}", path=dest, stage=stage) from e
    return dest


class ThermalImageComposer:
    """Render a TemperatureField to the 390x240 annotated IR image."""

    def __init__(self, font_size: int = 14, marker_font_size: int = 13, overlay_font_size: int = 12):
        self.font = load_font(font_size)
        self.marker_font = load_font(marker_font_size, bold=True)
        self.overlay_font = load_font(overlay_font_size)

    def compose(self, field, scale_min: float, scale_max: float) -> Image.Image:
        canvas = Image.new("RGB", CANVAS_SIZE, "white")
        thermal = Image.fromarray(colorize(field.data, scale_min, scale_max), "RGB")
        canvas.paste(thermal, (0, 0))
        # RGBA drawing blends the translucent marker overlays onto the RGB canvas.
        draw = ImageDraw.Draw(canvas, "RGBA")
        self._draw_legend(draw)
        self._draw_scale(draw, scale_min, scale_max)
        self._draw_markers(draw, field)
        return canvas

    def render(self, field, dest: Union[str, Path], scale: Tuple[float, float]) -> str:
        """Compose and encode to dest; returns the written path."""
        image = self.compose(field, *scale)
        path = save_image(image, dest, stage="ir")
        logger.info("IR image written: %s", path)
        return path

    def _draw_legend(self, draw: ImageDraw.ImageDraw):
        for y in range(LEGEND_LINES):
            color = tuple(int(c) for c in IRON_PALETTE_RGB[legend_index(y, LEGEND_LINES)])
            draw.line([(LEGEND_LEFT, y), (LEGEND_RIGHT, y)], fill=color, width=1)
        draw.rectangle([(LEGEND_LEFT, 0), (LEGEND_RIGHT, LEGEND_BOTTOM)], outline=BLACK)

    def _draw_scale(self, draw: ImageDraw.ImageDraw, scale_min: float, scale_max: float):
        draw.line([(LEGEND_LEFT, TICK_MAX_Y), (LEGEND_RIGHT, TICK_MAX_Y)], fill=BLACK)
        draw.text((LABEL_X, TICK_MAX_Y + 5), f"{scale_max:.1f}", fill=BLACK, font=self.font, anchor="ls")
        draw.line([(LEGEND_LEFT, TICK_MIN_Y), (LEGEND_RIGHT, TICK_MIN_Y)], fill=BLACK)
        draw.text((LABEL_X, TICK_MIN_Y + 6), f"{scale_min:.1f}", fill=BLACK, font=self.font, anchor="ls")

        draw.line([(AXIS_X, TICK_MAX_Y), (AXIS_X, TICK_MIN_Y)], fill=BLACK)
        draw.line([(AXIS_X, TICK_MAX_Y), (AXIS_TICK_RIGHT, TICK_MAX_Y)], fill=BLACK)
        step = (scale_max - scale_min) / SCALE_STEPS
        for y in INTERIOR_TICKS:
            value = step * ((((224 - y) - 24) / 25) + 1) + scale_min
            draw.line([(AXIS_X, y), (AXIS_TICK_RIGHT, y)], fill=BLACK)
            draw.text((LABEL_X, y + 4), f"{value:.0f}", fill=BLACK, font=self.font, anchor="ls")
        draw.line([(AXIS_X, TICK_MIN_Y), (AXIS_TICK_RIGHT, TICK_MIN_Y)], fill=BLACK)
        draw.text(UNIT_LABEL_POS, UNIT_LABEL, fill=BLACK, font=self.font, anchor="ls")

    def _draw_markers(self, draw: ImageDraw.ImageDraw, field):
        min_label = f"{field.min_temp:.1f}"
        max_label = f"{field.max_temp:.1f}"
        # Bold black crosshairs first, thin colored ones on top.
        self._crosshair(draw, field.min_pos, 4, 4, BLACK, min_label, self.marker_font)
        self._crosshair(draw, field.max_pos, 4, 4, BLACK, max_label, self.marker_font)
        self._crosshair(draw, field.min_pos, 3, 1, MIN_MARKER_COLOR, min_label, self.overlay_font)
        self._crosshair(draw, field.max_pos, 2, 1, MAX_MARKER_COLOR, max_label, self.overlay_font)

    @staticmethod
    def _crosshair(draw, pos, arm, width, color, label, font):
        x, y = pos
        draw.line([(x - arm, y), (x + arm, y)], fill=color, width=width)
        draw.line([(x, y - arm), (x, y + arm)], fill=color, width=width)
        draw.text((x - 12, y - 6), label, fill=color, font=font, anchor="ls")
