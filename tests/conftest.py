import gzip
import sys
from pathlib import Path

import pytest

# Project root on path so "from maptools. ..." works without installing
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nbt.nbt import NBTFile, TAG_Byte, TAG_Byte_Array, TAG_Compound, TAG_Int, TAG_String


def build_map_nbt(colors, data_version=3953, scale=0, dimension='minecraft:overworld',
                  x_center=64, z_center=-64, locked=False):
    """Build a map document laid out like the game's map_<n>.dat."""
    root = NBTFile()
    root.name = ''
    root.tags.append(TAG_Int(value=data_version, name='DataVersion'))

    data = TAG_Compound(name='data')
    data.tags.append(TAG_Byte(value=scale, name='scale'))
    data.tags.append(TAG_String(value=dimension, name='dimension'))
    data.tags.append(TAG_Int(value=x_center, name='xCenter'))
    data.tags.append(TAG_Int(value=z_center, name='zCenter'))
    data.tags.append(TAG_Byte(value=int(locked), name='locked'))

    tag = TAG_Byte_Array(name='colors')
    tag.value = bytearray(colors)
    data.tags.append(tag)

    root.tags.append(data)
    return root


@pytest.fixture
def write_map_dat(tmp_path):
    """Write a gzip-compressed map file and return its path as a string."""
    def _write(colors, name='map_0.dat', **fields):
        path = tmp_path / name
        build_map_nbt(colors, **fields).write_file(filename=str(path))
        return str(path)
    return _write


@pytest.fixture
def write_gzip(tmp_path):
    """Write arbitrary bytes gzip-compressed and return the path as a string."""
    def _write(payload, name='map_0.dat'):
        path = tmp_path / name
        with gzip.open(path, 'wb') as f:
            f.write(payload)
        return str(path)
    return _write
