"""Layer configuration and predicate resolution."""

import json

import pytest

from raster_overlay.config import UTM_30N, WEB_MERCATOR
from raster_overlay.errors import UnknownLayerError
from raster_overlay.layers import LayerRegistry, parse_layer, predicate_for
from raster_overlay.models import LayerType
from raster_overlay.stats import precipitation_valid, temperature_valid

from conftest import PRECIPITATION_LAYER, TEMPERATURE_LAYER

CORNERS = [[0.0, 0.0], [100.0, 50.0]]


class TestLayerType:
    def test_has_exactly_2_values(self):
        assert len(LayerType) == 2

    def test_is_str_enum(self):
        assert LayerType("temperature") is LayerType.TEMPERATURE
        assert LayerType.PRECIPITATION == "precipitation"

    def test_predicates_resolved_per_type(self):
        assert predicate_for(LayerType.TEMPERATURE) is temperature_valid
        assert predicate_for("precipitation") is precipitation_valid


class TestParseLayer:
    def test_fields(self):
        layer = parse_layer("t", {"title": "Temp", "unit": "°C", "type": "temperature"}, CORNERS)
        assert layer.name == "t"
        assert layer.title == "Temp"
        assert layer.type is LayerType.TEMPERATURE
        assert layer.predicate is temperature_valid
        assert layer.bounds.max_x == 100.0
        assert layer.bounds.crs == WEB_MERCATOR

    def test_crs_override(self):
        layer = parse_layer("p", {"type": "precipitation", "crs": UTM_30N}, CORNERS)
        assert layer.bounds.crs == UTM_30N
        assert layer.title == "p"

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="unsupported type"):
            parse_layer("x", {"type": "wind"}, CORNERS)


class TestLayerRegistry:
    def test_defaults(self, registry):
        assert len(registry) == 2
        assert registry.get(TEMPERATURE_LAYER).type is LayerType.TEMPERATURE
        assert registry.get(PRECIPITATION_LAYER).unit == "l/m²"
        assert TEMPERATURE_LAYER in registry

    def test_unknown_layer(self, registry):
        with pytest.raises(UnknownLayerError):
            registry.get("nope")
        with pytest.raises(KeyError):
            registry.get("nope")

    def test_missing_bounds(self):
        with pytest.raises(ValueError, match="no bounds"):
            LayerRegistry({"a": {"type": "temperature"}}, {})

    def test_from_json(self, tmp_path):
        path = tmp_path / "layers.json"
        path.write_text(json.dumps({
            "layers": {"rain": {"title": "Rain", "unit": "mm", "type": "precipitation"}},
            "bounds": {"rain": CORNERS},
        }), encoding="utf-8")
        registry = LayerRegistry.from_json(path)
        assert [l.name for l in registry] == ["rain"]
        assert registry.get("rain").predicate is precipitation_valid

    def test_default_reads_file_when_given(self, tmp_path):
        path = tmp_path / "layers.json"
        path.write_text(json.dumps({
            "layers": {"t": {"type": "temperature"}},
            "bounds": {"t": CORNERS},
        }), encoding="utf-8")
        assert len(LayerRegistry.default(str(path))) == 1
        assert len(LayerRegistry.default(None)) == 2
