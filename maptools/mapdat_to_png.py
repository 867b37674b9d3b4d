#!/usr/bin/env python3
"""Minecraft map_<n>.dat to PNG converter.

Decodes the color grid stored in each map item save file and writes it as an
RGBA PNG next to the input (map_3.dat -> map_3.png).

Paths that don't end in .dat are skipped. A file that fails to convert is
reported on stderr and the remaining files are still processed; the exit
status is 1 if any file failed.

Usage:
  mapdat-to-png world/data/map_0.dat world/data/map_1.dat
  mapdat-to-png -v world/data/*
  python -m maptools.mapdat_to_png world/data/map_*.dat
"""

import argparse
import os
import sys

from maptools.common.map_colors import colors_to_rgba
from maptools.common.mapdat import load_map_dat
from maptools.common.png_writer import write_png

MAP_EXTENSION = '.dat'


def convert_map(path):
    """Convert one map file to PNG.

    Returns (png_path, map_dict) where map_dict is what load_map_dat returned.
    """
    mapdat = load_map_dat(path)
    side = mapdat['side']
    rgba = colors_to_rgba(mapdat['colors'], side)

    png_path = os.path.splitext(path)[0] + '.png'
    write_png(png_path, rgba)
    return png_path, mapdat


def _format_metadata(meta):
    return '  '.join(f"{k}={v}" for k, v in meta.items())


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert Minecraft map_<n>.dat files to PNG images.'
    )
    parser.add_argument('paths', nargs='+', metavar='PATH',
                        help='map .dat files (other paths are ignored)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show skipped paths and map metadata')

    args = parser.parse_args(argv)

    converted = 0
    failed = 0

    for path in args.paths:
        name = os.path.basename(path)
        if os.path.splitext(path)[1] != MAP_EXTENSION:
            if args.verbose:
                print(f"  {name:25s}  skipped (not a {MAP_EXTENSION} file)")
            continue

        try:
            png_path, mapdat = convert_map(path)
        except (OSError, ValueError) as e:
            print(f"  {name:25s}  ERROR: {e}", file=sys.stderr)
            failed += 1
            continue

        side = mapdat['side']
        line = f"  {name:25s}  {side}x{side}  -> {os.path.basename(png_path)}"
        if args.verbose and mapdat['metadata']:
            line += f"  [{_format_metadata(mapdat['metadata'])}]"
        print(line)
        converted += 1

    print(f"Done. {converted} converted, {failed} failed.")
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
