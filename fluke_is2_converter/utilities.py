"""Radiometric conversion, pixel-format expansion and unit conversions for .is2 data."""

import numpy as np

STEFAN_BOLTZMANN = 5.67e-8
# Empirical sensor-noise floor; colder values are reported as -30 °C.
TEMPERATURE_FLOOR_C = -30.0


def raw_to_celsius(raw, scale: float, bias: float, background_temp: float = 20.0, emissivity: float = 0.95):
    """
    Convert raw sensor counts to °C (Stefan-Boltzmann law, inverted).

    adjusted = trunc(raw * scale + bias), held as an unsigned 16-bit value
    t = (adjusted / (sigma * 2.4)) ** (1/4) - 273.15
    t = ((t - background_temp) / emissivity) + background_temp, floored at -30 °C

    Accepts a scalar (returns float) or an array (returns float64 array of the same shape).
    """
    counts = np.asarray(raw, dtype=np.float64)
    adjusted = np.clip(np.trunc(counts * scale + bias), 0, 65535)
    t = UnitConversion.k2c((adjusted / (STEFAN_BOLTZMANN * 2.4)) ** 0.25)
    t = ((t - background_temp) / emissivity) + background_temp
    t = np.maximum(t, TEMPERATURE_FLOOR_C)
    if t.ndim == 0:
        return float(t)
    return t


def rgb565_to_rgb888(raw) -> np.ndarray:
    """
    Expand packed RGB565 samples to RGB888 by shift and multiply:
    R = ((raw >> 11) & 0x1F) * 8, G = ((raw >> 5) & 0x3F) * 4, B = (raw & 0x1F) * 8.

    Not the usual rescale to 0..255 (white is (248, 252, 248)), kept for
    compatibility with the camera software output.
    """
    raw = np.asarray(raw, dtype=np.uint16)
    r = ((raw >> 11) & 0x1F) * 8
    g = ((raw >> 5) & 0x3F) * 4
    b = (raw & 0x1F) * 8
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


class UnitConversion:
    """Temperature conversions (K→°C, °C→°F)."""

    @staticmethod
    def k2c(k):
        return k - 273.15

    @staticmethod
    def c2f(c, diff=False):
        """Celsius to Fahrenheit; diff=True for delta conversion."""
        return c * (9.0 / 5.0) + (0 if diff else 32)
