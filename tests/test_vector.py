import pytest

from raster_overlay.config import UTM_30N
from raster_overlay.projection import to_projected
from raster_overlay.vector import feature_bounds, row_to_feature, rows_to_feature_collection

ROWS = [
    {"id": 1, "nombre": "Valencia", "geom": {"type": "Point", "coordinates": [725000.0, 4372000.0]}},
    {"id": 2, "nombre": "Alicante", "geom": {"type": "Point", "coordinates": [720000.0, 4248000.0]}},
]


class TestRowToFeature:
    def test_projects_to_wgs84(self):
        feature = row_to_feature(ROWS[0])
        lon, lat = feature["geometry"]["coordinates"]
        x, y = to_projected(lon, lat, UTM_30N)
        assert x == pytest.approx(725000.0, abs=1e-3)
        assert y == pytest.approx(4372000.0, abs=1e-3)

    def test_geometry_moved_out_of_properties(self):
        feature = row_to_feature(ROWS[0])
        assert feature["type"] == "Feature"
        assert feature["properties"] == {"id": 1, "nombre": "Valencia"}

    def test_rejects_non_points(self):
        row = {"geom": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}}
        with pytest.raises(ValueError):
            row_to_feature(row)


class TestFeatureCollection:
    def test_collection(self):
        fc = rows_to_feature_collection(ROWS)
        assert fc["type"] == "FeatureCollection"
        assert len(fc["features"]) == 2

    def test_bounds(self):
        fc = rows_to_feature_collection(ROWS)
        (s, w), (n, e) = feature_bounds(fc)
        assert s < n and w < e

    def test_bounds_of_nothing(self):
        assert feature_bounds(rows_to_feature_collection([])) is None
