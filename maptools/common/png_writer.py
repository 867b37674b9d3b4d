"""RGBA PNG output via Pillow.

Every image carries gAMA (1/2.2) and cHRM (sRGB primaries, D65 white point)
so viewers render the map colors the way the game does.
"""

import io
import os
import struct

from PIL import Image
from PIL.PngImagePlugin import PngInfo

# gAMA and cHRM store values scaled by 100000
PNG_GAMMA = 45455
PNG_CHROMATICITIES = (
    (31270, 32900),  # white point
    (64000, 33000),  # red
    (30000, 60000),  # green
    (15000, 6000),   # blue
)


def _color_chunks():
    info = PngInfo()
    info.add(b'gAMA', struct.pack('>I', PNG_GAMMA))
    chrm = [v for xy in PNG_CHROMATICITIES for v in xy]
    info.add(b'cHRM', struct.pack('>8I', *chrm))
    return info


def write_png(path, rgba):
    """Write a (height, width, 4) uint8 array as an 8-bit RGBA PNG.

    The PNG is encoded in memory first; a partially written file is removed
    if writing it out fails.
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an RGBA array, got shape {rgba.shape}")

    buf = io.BytesIO()
    Image.fromarray(rgba).save(buf, format='PNG', pnginfo=_color_chunks())

    try:
        f = open(path, 'wb')
    except OSError as e:
        raise OSError(f"Failed to create file: {path} ({e.strerror})") from e

    try:
        with f:
            f.write(buf.getvalue())
    except OSError as e:
        os.remove(path)
        raise OSError(f"Failed to write image data: {path} ({e})") from e
