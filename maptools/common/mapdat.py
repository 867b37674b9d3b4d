"""Loader for Minecraft map_<n>.dat files.

A map file is a gzip-compressed NBT document:

  root compound
    DataVersion  TAG_Int         (optional)
    data         TAG_Compound
      colors             TAG_Byte_Array  side*side color indices, row-major
      scale              TAG_Byte        (optional)
      dimension          TAG_String      (optional, TAG_Byte/TAG_Int in old saves)
      xCenter, zCenter   TAG_Int         (optional)
      locked, trackingPosition, unlimitedTracking  TAG_Byte  (optional)

Failures are reported per stage (open, decompress, decode, shape) so the CLI can
say exactly what went wrong with each file.
"""

import gzip
import io
import math
import zlib

from nbt.nbt import NBTFile, MalformedFileError, TAG_Byte_Array

MAP_FIELDS = (
    'scale',
    'dimension',
    'xCenter',
    'zCenter',
    'locked',
    'trackingPosition',
    'unlimitedTracking',
)


def square_side(count):
    """Return the side length of a square grid holding ``count`` cells."""
    side = math.isqrt(count)
    if count == 0 or side * side != count:
        raise ValueError(f"Not a square map?: {count} colors")
    return side


def read_map_metadata(root):
    """Collect the optional map fields from a parsed map document."""
    meta = {}
    if 'DataVersion' in root:
        meta['DataVersion'] = root['DataVersion'].value
    data = root['data']
    for key in MAP_FIELDS:
        if key in data:
            meta[key] = data[key].value
    return meta


def _decompress(path):
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise OSError(f"Failed to open: {path} ({e.strerror})") from e

    with f:
        try:
            with gzip.GzipFile(fileobj=f) as gz:
                return gz.read()
        except (OSError, EOFError, zlib.error) as e:
            raise ValueError(f"Failed to decompress: {path} ({e})") from e


def _parse(raw, path):
    try:
        root = NBTFile(buffer=io.BytesIO(raw))
        colors = root['data']['colors']
    except (MalformedFileError, KeyError, TypeError, ValueError, RecursionError) as e:
        raise ValueError(f"Failed to decode as map data: {path} ({e})") from e

    if not isinstance(colors, TAG_Byte_Array):
        raise ValueError(
            f"Failed to decode as map data: {path} "
            f"(colors is {type(colors).__name__}, expected TAG_Byte_Array)"
        )
    return root, bytes(colors.value)


def load_map_dat(path):
    """Load a map_<n>.dat file.

    Returns a dict with ``colors`` (bytes of color indices), ``side`` (grid
    width and height) and ``metadata`` (optional map fields present in the
    file). Raises OSError if the file can't be opened and ValueError if it
    can't be decompressed, decoded or isn't a square grid.
    """
    raw = _decompress(path)
    root, colors = _parse(raw, path)

    try:
        side = square_side(len(colors))
    except ValueError as e:
        raise ValueError(f"Not a square map?: {path} ({len(colors)} colors)") from e

    return {
        'colors': colors,
        'side': side,
        'metadata': read_map_metadata(root),
    }
