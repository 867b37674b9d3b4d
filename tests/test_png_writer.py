"""
Unit tests for PNG output.
"""

import numpy as np
import pytest
from PIL import Image

from maptools.common.map_colors import colors_to_rgba
from maptools.common import png_writer
from maptools.common.png_writer import write_png


class TestWritePng:
    def test_roundtrip_pixels(self, tmp_path):
        rgba = colors_to_rgba(bytes(i % 256 for i in range(16 * 16)), 16)
        path = str(tmp_path / 'map_0.png')

        write_png(path, rgba)

        with Image.open(path) as img:
            assert img.mode == 'RGBA'
            assert img.size == (16, 16)
            assert (np.asarray(img) == rgba).all()

    def test_gamma_and_chromaticity(self, tmp_path):
        path = str(tmp_path / 'map_0.png')
        write_png(path, colors_to_rgba(bytes(4), 2))

        with Image.open(path) as img:
            assert img.info['gamma'] == pytest.approx(0.45455)
            assert img.info['chromaticity'] == pytest.approx(
                (0.3127, 0.329, 0.64, 0.33, 0.3, 0.6, 0.15, 0.06)
            )

    def test_rejects_non_rgba(self, tmp_path):
        with pytest.raises(ValueError, match="RGBA"):
            write_png(str(tmp_path / 'x.png'), np.zeros((4, 4, 3), dtype=np.uint8))

    def test_unwritable_destination(self, tmp_path):
        target = tmp_path / 'map_0.png'
        target.mkdir()

        with pytest.raises(OSError, match="Failed to create file"):
            write_png(str(target), colors_to_rgba(bytes(4), 2))

        assert target.is_dir()

    def test_partial_file_removed_on_write_failure(self, tmp_path, monkeypatch):
        target = tmp_path / 'map_0.png'
        opened = []

        class FailingFile:
            def __init__(self, f):
                self._f = f

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self._f.close()

            def write(self, data):
                self._f.write(data[:16])
                self._f.flush()
                raise OSError(28, 'No space left on device')

        def failing_open(path, mode):
            opened.append(path)
            return FailingFile(open(path, mode))

        monkeypatch.setattr(png_writer, 'open', failing_open, raising=False)

        with pytest.raises(OSError, match="Failed to write image data"):
            write_png(str(target), colors_to_rgba(bytes(4), 2))

        assert opened == [str(target)]
        assert not target.exists()
