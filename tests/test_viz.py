import io
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from PIL import Image

from raster_overlay.compositor import composite
from raster_overlay.stats import compute_stats, temperature_valid
from raster_overlay.viz import encode_png, histogram_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestEncodePng:
    def test_round_trips_pixels(self, spec_grid):
        img = composite(spec_grid, compute_stats(spec_grid, temperature_valid), temperature_valid)
        data = encode_png(img)
        assert data.startswith(PNG_MAGIC)

        decoded = Image.open(io.BytesIO(data))
        assert decoded.mode == "RGBA"
        assert decoded.size == (2, 2)
        assert decoded.getpixel((1, 0)) == (255, 0, 0, 255)
        assert decoded.getpixel((0, 1))[3] == 0


class TestHistogramPng:
    def test_renders(self):
        data = histogram_png(np.arange(30))
        assert data.startswith(PNG_MAGIC)
        assert Image.open(io.BytesIO(data)).size == (300, 80)

    def test_all_zero_counts(self):
        assert histogram_png(np.zeros(30, dtype=int)).startswith(PNG_MAGIC)

    def test_concurrent_renders(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            images = list(pool.map(lambda k: histogram_png(np.arange(30) * k), range(1, 17)))
        assert all(img.startswith(PNG_MAGIC) for img in images)
