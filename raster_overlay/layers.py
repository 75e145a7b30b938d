# layers.py — layer configuration, resolved once at load time
from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Mapping, Optional

from .config import DEFAULT_BOUNDS, DEFAULT_LAYERS, RASTER_LAYERS_FILE, WEB_MERCATOR
from .errors import UnknownLayerError
from .models import LayerConfig, LayerType, Predicate, ProjectedBounds
from .stats import precipitation_valid, temperature_valid

PREDICATES: Dict[LayerType, Predicate] = {
    LayerType.TEMPERATURE: temperature_valid,
    LayerType.PRECIPITATION: precipitation_valid,
}


def predicate_for(layer_type: LayerType) -> Predicate:
    return PREDICATES[LayerType(layer_type)]


def parse_layer(name: str, entry: Mapping, corners, crs: str = WEB_MERCATOR) -> LayerConfig:
    try:
        layer_type = LayerType(entry["type"])
    except ValueError as e:
        raise ValueError(f"layer {name!r}: unsupported type {entry['type']!r}") from e
    return LayerConfig(
        name=name,
        title=entry.get("title", name),
        unit=entry.get("unit", ""),
        type=layer_type,
        bounds=ProjectedBounds.from_corners(corners, crs=entry.get("crs", crs)),
        predicate=predicate_for(layer_type),
    )


class LayerRegistry:
    """Configured raster layers by table name."""

    def __init__(self, layers: Mapping[str, Mapping], bounds: Mapping[str, list]):
        missing = sorted(set(layers) - set(bounds))
        if missing:
            raise ValueError(f"no bounds configured for layers: {', '.join(missing)}")
        self._layers = {name: parse_layer(name, entry, bounds[name]) for name, entry in layers.items()}

    @classmethod
    def from_json(cls, path) -> "LayerRegistry":
        """File layout: {"layers": {name: {title, unit, type}}, "bounds": {name: [[x,y],[x,y]]}}"""
        doc = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(doc["layers"], doc["bounds"])

    @classmethod
    def default(cls, path: Optional[str] = RASTER_LAYERS_FILE) -> "LayerRegistry":
        if path:
            return cls.from_json(path)
        return cls(DEFAULT_LAYERS, DEFAULT_BOUNDS)

    def get(self, name: str) -> LayerConfig:
        try:
            return self._layers[name]
        except KeyError:
            raise UnknownLayerError(name) from None

    def __contains__(self, name) -> bool:
        return name in self._layers

    def __iter__(self):
        return iter(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)
