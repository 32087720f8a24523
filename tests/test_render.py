"""
Tests for the IR image composer and image encoding.
"""
import numpy as np
import pytest
from PIL import Image, ImageFont

from fluke_is2_converter.exceptions import EncodeError, IS2IOError
from fluke_is2_converter.models import TemperatureField
from fluke_is2_converter.palette import IRON_PALETTE_RGB, legend_index
from fluke_is2_converter.render import ThermalImageComposer, load_font, save_image


def _field(cold=(50, 60), hot=(160, 120)):
    data = np.full((240, 320), 25.0)
    data[cold[1], cold[0]] = 10.0
    data[hot[1], hot[0]] = 40.0
    return TemperatureField(data=data, min_temp=10.0, max_temp=40.0, min_pos=cold, max_pos=hot)


@pytest.fixture(scope="module")
def composer():
    return ThermalImageComposer()


def test_load_font():
    assert isinstance(load_font(14), ImageFont.FreeTypeFont)
    assert isinstance(load_font(13, bold=True), ImageFont.FreeTypeFont)


def test_canvas_and_thermal_region(composer):
    image = composer.compose(_field(), 10.0, 40.0)
    assert image.size == (390, 240)
    assert image.mode == "RGB"
    # 25 °C in [10, 40]: floor(15 * 433 / 30) = 216
    assert image.getpixel((300, 200)) == tuple(int(c) for c in IRON_PALETTE_RGB[216])


def test_legend_strip(composer):
    image = composer.compose(_field(), 10.0, 40.0)
    for y in (1, 50, 100, 150, 219):
        assert image.getpixel((327, y)) == tuple(int(c) for c in IRON_PALETTE_RGB[legend_index(y)])
    # bordering rectangle, axis and background
    assert image.getpixel((320, 100)) == (0, 0, 0)
    assert image.getpixel((335, 100)) == (0, 0, 0)
    assert image.getpixel((327, 220)) == (0, 0, 0)
    assert image.getpixel((344, 100)) == (0, 0, 0)
    assert image.getpixel((330, 230)) == (255, 255, 255)


def test_markers(composer):
    image = composer.compose(_field(), 10.0, 40.0)
    # outer arm of the bold black crosshair, outside the colored overlay
    assert image.getpixel((163, 120)) == (0, 0, 0)
    assert image.getpixel((54, 60)) == (0, 0, 0)
    # light-blue overlay on the cold marker, light-red on the hot one
    r, g, b = image.getpixel((52, 60))
    assert b > r and r > 100
    r, g, b = image.getpixel((161, 120))
    assert r > b and r > 150


def test_render_writes_jpeg(composer, tmp_path):
    path = composer.render(_field(), tmp_path / "ir.jpg", (10.0, 40.0))
    with Image.open(path) as im:
        assert im.format == "JPEG"
        assert im.size == (390, 240)


def test_save_image_format_from_extension(tmp_path):
    image = Image.new("RGB", (8, 8), "red")
    with Image.open(save_image(image, tmp_path / "a.png")) as im:
        assert im.format == "PNG"
    with Image.open(save_image(image, tmp_path / "b.unknown")) as im:
        assert im.format == "JPEG"


def test_save_image_errors(tmp_path):
    image = Image.new("RGB", (8, 8))
    with pytest.raises(IS2IOError):
        save_image(image, tmp_path / "no-such-dir" / "a.jpg")
    with pytest.raises(EncodeError):
        save_image(Image.new("RGBA", (8, 8)), tmp_path / "a.jpg")
