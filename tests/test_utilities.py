"""
Tests for radiometric conversion and RGB565 expansion.
"""
import numpy as np
import pytest

from fluke_is2_converter.utilities import (
    TEMPERATURE_FLOOR_C,
    UnitConversion,
    raw_to_celsius,
    rgb565_to_rgb888,
)
from fluke_is2_converter.variants import FORMAT_VARIANTS


@pytest.mark.parametrize("variant", list(FORMAT_VARIANTS.values()), ids=list(FORMAT_VARIANTS))
def test_temperature_monotonic_in_count(variant):
    """Temperature never decreases with the raw count."""
    counts = np.arange(0, 65536)
    temps = raw_to_celsius(counts, variant.ir_scale, variant.ir_bias)
    assert np.all(np.diff(temps) >= 0)
    assert temps.min() >= TEMPERATURE_FLOOR_C


def test_temperature_floor():
    """Very low radiation is clamped to exactly -30 °C."""
    assert raw_to_celsius(0, 0.662, 228) == -30.0
    assert raw_to_celsius(0, 0.201, 154.035, background_temp=-100.0) == -30.0


def test_temperature_formula():
    """Adjusted count 891 (legacy raw 1003) through Stefan-Boltzmann and emissivity correction."""
    t_c = (891 / (5.67e-8 * 2.4)) ** 0.25 - 273.15
    expected = ((t_c - 20.0) / 0.95) + 20.0
    assert raw_to_celsius(1003, 0.662, 228, 20.0, 0.95) == pytest.approx(expected)


def test_emissivity_one_is_identity_correction():
    t_c = (891 / (5.67e-8 * 2.4)) ** 0.25 - 273.15
    assert raw_to_celsius(1003, 0.662, 228, 35.0, 1.0) == pytest.approx(t_c)


def test_adjusted_value_is_truncated():
    """raw * scale + bias is truncated to an integer before the inversion."""
    # 10000 * 0.201 + 154.035 = 2164.035, 10001 -> 2164.236: same integer
    assert raw_to_celsius(10000, 0.201, 154.035) == raw_to_celsius(10001, 0.201, 154.035)
    assert raw_to_celsius(10000, 0.201, 154.035) < raw_to_celsius(10005, 0.201, 154.035)


def test_scalar_and_array_inputs():
    assert isinstance(raw_to_celsius(30000, 0.662, 228), float)
    arr = raw_to_celsius(np.full((2, 3), 30000), 0.662, 228)
    assert arr.shape == (2, 3)
    assert arr[1, 2] == raw_to_celsius(30000, 0.662, 228)


@pytest.mark.parametrize(
    "raw, rgb",
    [
        (0xF800, (248, 0, 0)),
        (0x07E0, (0, 252, 0)),
        (0x001F, (0, 0, 248)),
        (0xFFFF, (248, 252, 248)),
        (0x0000, (0, 0, 0)),
        (0x0821, (8, 4, 8)),
    ],
)
def test_rgb565_expansion(raw, rgb):
    assert tuple(rgb565_to_rgb888(raw)) == rgb


def test_rgb565_array_shape():
    out = rgb565_to_rgb888(np.zeros((480, 640), dtype=np.uint16))
    assert out.shape == (480, 640, 3)
    assert out.dtype == np.uint8


def test_unit_conversion():
    assert UnitConversion.k2c(273.15) == 0
    assert UnitConversion.c2f(100) == pytest.approx(212)
    assert UnitConversion.c2f(10, diff=True) == pytest.approx(18)
