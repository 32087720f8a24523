#!/usr/bin/env python3
"""
Example script for fluke_is2_converter

This script converts one .is2 file and shows the thermal data next to the
rendered infrared image.

Usage:
    python example.py

Make sure to replace "IR000123.IS2" with your actual IS2 file path.
"""

import logging

import matplotlib.pyplot as plt
from PIL import Image

from fluke_is2_converter import CalibrationParams, convert_is2


def main():
    """Basic example showing conversion and visualization."""
    logging.basicConfig(level=logging.INFO)

    print("Fluke IS2 Converter - Basic Example")
    print("=" * 50)

    # Replace with your actual IS2 file path
    is2_file = "IR000123.IS2"

    try:
        result = convert_is2(
            is2_file,
            ir_path="ir.jpg",
            visual_path="vis.jpg",
            calibration=CalibrationParams(background_temp=20.0, emissivity=0.95),
        )
        field = result.field

        print(f"\nFile: {result.file_path} ({result.variant.description})")
        print(f"  Range: {field.min_temp:.1f}°C at {field.min_pos} - {field.max_temp:.1f}°C at {field.max_pos}")
        print(f"  Average: {field.get_average_temperature():.1f}°C")
        if result.audio_path:
            print(f"  Audio: {result.audio_path}")

        plt.figure(figsize=(12, 5))

        # Temperatures
        plt.subplot(1, 2, 1)
        plt.imshow(field.data, cmap='inferno', vmin=result.scale[0], vmax=result.scale[1])
        plt.colorbar(label='Temperature (°C)')
        plt.title(f'Temperatures - {result.variant.name}')

        # Rendered IR image
        plt.subplot(1, 2, 2)
        with Image.open(result.ir_path) as im:
            plt.imshow(im)
        plt.title('ir.jpg')
        plt.axis('off')

        plt.tight_layout()
        plt.show()

    except FileNotFoundError:
        print(f"Error: File '{is2_file}' not found!")
        print("Please replace 'IR000123.IS2' with your actual IS2 file path.")
    except Exception as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
