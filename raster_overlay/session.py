# region Imports
from __future__ import annotations
import threading
from typing import List, Optional, Tuple

from .bounds import to_geo_bounds
from .compositor import composite
from .geometry import distance_m, format_distance
from .models import Grid, LayerConfig, QueryResult, RasterProduct
from .query import query_value
from .stats import compute_histogram, compute_stats, valid_mask
# endregion

# region Render Pipeline
def render_layer(layer: LayerConfig, grid: Grid) -> RasterProduct:
    """grid + layer config -> stats, histogram, RGBA image and placement bounds."""
    stats = compute_stats(grid, layer.predicate)
    valid = grid.values[valid_mask(grid, layer.predicate)]
    histogram = compute_histogram(valid, stats.min, stats.max)
    image = composite(grid, stats, layer.predicate)
    geo_bounds = to_geo_bounds(layer.bounds)
    return RasterProduct(
        layer=layer,
        grid=grid,
        geo_bounds=geo_bounds,
        stats=stats,
        histogram=histogram,
        image=image,
    )
# endregion

# region Raster Session
class RasterSession:
    """Holds the one active raster layer. Loads swap in a complete product."""

    def __init__(self):
        self._lock = threading.Lock()
        self._product: Optional[RasterProduct] = None

    @property
    def product(self) -> Optional[RasterProduct]:
        with self._lock:
            return self._product

    def load(self, layer: LayerConfig, grid: Grid) -> RasterProduct:
        # build outside the lock; the previous product stays readable meanwhile
        product = render_layer(layer, grid)
        with self._lock:
            self._product = product
        return product

    def clear(self) -> None:
        with self._lock:
            self._product = None

    def query(self, lon: float, lat: float) -> Optional[Tuple[RasterProduct, QueryResult]]:
        """Resolve a click against the active layer.

        Returns the product the click was resolved against together with the
        result, or None when no layer is active (nothing to display).
        """
        product = self.product
        if product is None:
            return None
        return product, query_value(product.grid, product.bounds, lon, lat)
# endregion

# region Measure Session
# indexed by the number of points placed so far
_INSTRUCTIONS = (
    "Haz clic en el primer punto",
    "Haz clic en el segundo punto",
    "Distancia calculada",
)


class MeasureSession:
    """Two-click distance tool."""

    def __init__(self):
        self._lock = threading.Lock()
        self.active = False
        self.points: List[Tuple[float, float]] = []

    def start(self) -> None:
        with self._lock:
            self.active = True
            self.points = []

    def stop(self) -> None:
        with self._lock:
            self.active = False
            self.points = []

    def clear(self) -> None:
        with self._lock:
            self.points = []

    def add_point(self, lon: float, lat: float) -> bool:
        """False when the tool is off or already has both points."""
        with self._lock:
            if not self.active or len(self.points) >= 2:
                return False
            self.points = self.points + [(lon, lat)]
            return True

    @property
    def distance_m(self) -> Optional[float]:
        if len(self.points) < 2:
            return None
        return distance_m(self.points[0], self.points[1])

    @property
    def result_text(self) -> str:
        d = self.distance_m
        return "-" if d is None else format_distance(d)

    @property
    def instruction(self) -> str:
        return _INSTRUCTIONS[len(self.points)]

    def state(self) -> dict:
        with self._lock:
            points = list(self.points)
            active = self.active
        d = distance_m(points[0], points[1]) if len(points) == 2 else None
        return {
            "active": active,
            "points": [list(p) for p in points],
            "distance_m": d,
            "text": "-" if d is None else format_distance(d),
            "instruction": _INSTRUCTIONS[len(points)],
        }
# endregion
