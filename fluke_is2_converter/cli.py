"""
Command-line interface for fluke-is2-converter.
"""

import argparse
import csv
import logging
import sys

from .models import CalibrationParams
from .reader import IS2Converter
from .utilities import UnitConversion


def build_parser():
    parser = argparse.ArgumentParser(
        description="Convert Fluke .is2 files to an infrared image and a visual image"
    )

    parser.add_argument(
        "file_path",
        help="Path to the .is2 file"
    )

    parser.add_argument(
        "--ir",
        default="ir.jpg",
        help="Image file (or directory) for the infrared output; empty to skip (default: ir.jpg)"
    )

    parser.add_argument(
        "--visual",
        default="vis.jpg",
        help="Image file (or directory) for the visual output; empty to skip (default: vis.jpg)"
    )

    parser.add_argument(
        "-b", "--background-temp",
        type=float,
        default=20.0,
        help="Background temperature in °C (default: 20.0)"
    )

    parser.add_argument(
        "-e", "--emissivity",
        type=float,
        default=0.95,
        help="Emission factor, 0 < e <= 1 (default: 0.95)"
    )

    parser.add_argument(
        "--min",
        type=float,
        default=0.0,
        dest="scale_min",
        help="Min. temperature of the color scale (--min 0 --max 0: automatic)"
    )

    parser.add_argument(
        "--max",
        type=float,
        default=0.0,
        dest="scale_max",
        help="Max. temperature of the color scale"
    )

    parser.add_argument(
        "--no-audio",
        action="store_true",
        help="Do not write the .wav sidecar of legacy files"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show temperature statistics"
    )

    parser.add_argument(
        "--unit",
        choices=["C", "F"],
        default="C",
        help="Unit for --stats and --export-csv (default: C)"
    )

    parser.add_argument(
        "--export-csv",
        type=str,
        help="Export temperature data to CSV file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )
    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        calibration = CalibrationParams(
            background_temp=args.background_temp,
            emissivity=args.emissivity,
            scale_min=args.scale_min,
            scale_max=args.scale_max,
        )
        converter = IS2Converter(calibration, audio=not args.no_audio)
        result = converter.convert_file(args.file_path, args.ir, args.visual)

        if args.stats:
            print_stats(result.field, args.unit)

        if args.export_csv:
            export_to_csv(result.field, args.export_csv, args.unit)
            print(f"Data exported to: {args.export_csv}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _convert(value, unit):
    return UnitConversion.c2f(value) if unit == "F" else value


def print_stats(field, unit="C"):
    """Print temperature statistics."""
    temp_min, temp_max = field.get_temperature_range()
    temp_avg = field.get_average_temperature()
    span = temp_max - temp_min
    if unit == "F":
        span = UnitConversion.c2f(span, diff=True)
    symbol = f"°{unit}"

    print("\n=== TEMPERATURE STATISTICS ===")
    print(f"Minimum temperature: {_convert(temp_min, unit):.2f}{symbol} at {field.min_pos}")
    print(f"Maximum temperature: {_convert(temp_max, unit):.2f}{symbol} at {field.max_pos}")
    print(f"Average temperature: {_convert(temp_avg, unit):.2f}{symbol}")
    print(f"Temperature range: {span:.2f}{symbol}")


def export_to_csv(field, output_path, unit="C"):
    """Export temperature data to CSV format."""
    data = _convert(field.data, unit)

    with open(output_path, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)

        # Header
        writer.writerow(['X', 'Y', f'Temperature_{unit}'])

        # Data
        for y in range(data.shape[0]):
            for x in range(data.shape[1]):
                writer.writerow([x, y, data[y, x]])


if __name__ == "__main__":
    main()
