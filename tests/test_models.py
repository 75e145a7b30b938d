import numpy as np
import pytest

from raster_overlay.models import Grid, ProjectedBounds, Statistics


class TestGrid:
    def test_from_record_maps_null_to_nan(self):
        grid = Grid.from_record({"width": 2, "height": 1, "data": [None, 4.5]})
        assert np.isnan(grid.values[0])
        assert grid.values[1] == 4.5
        assert grid.values.dtype == np.float64

    def test_length_must_match(self):
        with pytest.raises(ValueError, match="expected 2x2"):
            Grid(2, 2, [1.0, 2.0, 3.0])

    def test_empty_dimensions_rejected(self):
        with pytest.raises(ValueError):
            Grid(0, 3, [])

    def test_values_are_read_only(self, grid_4x3):
        with pytest.raises(ValueError):
            grid_4x3.values[0] = 99.0

    def test_input_array_not_aliased(self):
        src = np.array([1.0, 2.0])
        grid = Grid(2, 1, src)
        src[0] = -1.0
        assert grid.values[0] == 1.0

    def test_as_2d(self, grid_4x3):
        assert grid_4x3.as_2d().shape == (3, 4)
        assert grid_4x3.as_2d()[2, 0] == 8.0


class TestProjectedBounds:
    def test_from_corners(self):
        b = ProjectedBounds.from_corners([[1, 2], [3, 5]])
        assert (b.min_x, b.min_y, b.max_x, b.max_y) == (1.0, 2.0, 3.0, 5.0)
        assert (b.span_x, b.span_y) == (2.0, 3.0)

    def test_degenerate(self):
        with pytest.raises(ValueError):
            ProjectedBounds(0.0, 0.0, 0.0, 1.0)


class TestStatistics:
    def test_range_falls_back_to_one(self):
        assert Statistics(2.0, 2.0, 2.0, 1).range == 1.0
        assert Statistics(2.0, 6.0, 3.0, 4).range == 4.0
