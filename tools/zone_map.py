#!/usr/bin/env python3
"""
Zone Map - print the key/velocity/selection map of a sample folder

Shows how mspack would map a folder of pitch-named samples, without writing
an archive. Useful for checking names and fade settings before packaging.
Needs mspack importable (pip install -e . from the repository root).

Usage:
  ./zone_map.py /path/to/samples
  ./zone_map.py /path/to/samples --mode selection --key-fade 2 --secondary-fade 4
  ./zone_map.py /path/to/samples --redistribute-fade 0 --duplicates
"""

import argparse
import sys

from mspack import (
    ConversionError,
    PackageOptions,
    ValueMode,
    conversion_stats,
    find_duplicate_clusters,
    format_zone_table,
    midi_to_note_name,
    preview_zones,
)


def print_separator(char: str = "=", length: int = 60):
    print(char * length)


def print_duplicates(zones) -> None:
    """Print the keys shared by several samples."""
    duplicates = find_duplicate_clusters(zones)
    print()
    print_separator("-")
    if not duplicates:
        print("No key has several samples")
        return
    print(f"Keys with several samples: {len(duplicates)}")
    for key, count in duplicates.items():
        names = [zone.source_name for zone in zones if zone.key == key]
        print(f"  {midi_to_note_name(key):>4} ({key:>3}): {count} - {', '.join(names)}")


def main():
    parser = argparse.ArgumentParser(
        description="Print the zone map mspack would build for a sample folder.",
    )
    parser.add_argument("input_dir", metavar="INPUT_DIR", help="Sample folder")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ValueMode],
        default=ValueMode.VELOCITY.value,
        help="Dimension driven by the number after the octave (default: velocity)",
    )
    parser.add_argument("--key-fade", type=int, default=0, metavar="N")
    parser.add_argument("--secondary-fade", type=int, default=0, metavar="N")
    parser.add_argument("--redistribute-fade", type=int, default=None, metavar="N")
    parser.add_argument(
        "--duplicates",
        action="store_true",
        help="Also list keys shared by several samples",
    )

    args = parser.parse_args()

    options = PackageOptions(
        name="zone-map",
        key_fade=args.key_fade,
        mode=ValueMode(args.mode),
        secondary_fade=args.secondary_fade,
        redistribute_fade=args.redistribute_fade,
    )

    conversion_stats.reset()
    try:
        options.validate()
        zones = preview_zones(args.input_dir, options)
    except (ConversionError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print()
    print_separator("=")
    print("ZONE MAP")
    print_separator("=")
    print(format_zone_table(zones, options.mode))
    if args.duplicates:
        print_duplicates(zones)


if __name__ == "__main__":
    main()
