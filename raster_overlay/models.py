# models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple
import numpy as np

from .config import WEB_MERCATOR

Predicate = Callable[[np.ndarray], np.ndarray]


# region Grid
@dataclass(frozen=True, eq=False)
class Grid:
    """Row-major scalar grid, row 0 = north. Missing samples are NaN."""
    width: int
    height: int
    values: np.ndarray

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        values = np.array(self.values, dtype=np.float64).ravel()
        if values.size != self.width * self.height:
            raise ValueError(
                f"grid has {values.size} values, expected {self.width}x{self.height}="
                f"{self.width * self.height}"
            )
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @classmethod
    def from_record(cls, record: dict) -> "Grid":
        """Build from the backend record ``{width, height, data}`` (nulls -> NaN)."""
        data = [np.nan if v is None else v for v in record["data"]]
        return cls(int(record["width"]), int(record["height"]), np.asarray(data, dtype=np.float64))

    def as_2d(self) -> np.ndarray:
        return self.values.reshape(self.height, self.width)
# endregion

# region Bounds
@dataclass(frozen=True)
class ProjectedBounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    crs: str = WEB_MERCATOR

    def __post_init__(self):
        if not (self.min_x < self.max_x and self.min_y < self.max_y):
            raise ValueError(
                f"bounds must satisfy min < max, got "
                f"({self.min_x}, {self.min_y}) / ({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_corners(cls, corners: Sequence[Sequence[float]], crs: str = WEB_MERCATOR) -> "ProjectedBounds":
        (x0, y0), (x1, y1) = corners
        return cls(float(x0), float(y0), float(x1), float(y1), crs)

    @property
    def span_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def span_y(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class GeoBounds:
    south_west: Tuple[float, float]  # (lon, lat)
    north_east: Tuple[float, float]

    def __post_init__(self):
        (w, s), (e, n) = self.south_west, self.north_east
        if not (w < e and s < n):
            raise ValueError(f"south_west {self.south_west} must lie below/left of north_east {self.north_east}")

    def as_latlng(self):
        """[[lat, lon], [lat, lon]] as expected by Leaflet's imageOverlay."""
        return [[self.south_west[1], self.south_west[0]], [self.north_east[1], self.north_east[0]]]
# endregion

# region Derived products
@dataclass(frozen=True)
class Statistics:
    min: float
    max: float
    mean: float
    valid_count: int

    @property
    def range(self) -> float:
        return (self.max - self.min) or 1.0


@dataclass(frozen=True, eq=False)
class RasterImage:
    width: int
    height: int
    rgba: np.ndarray  # (H, W, 4) uint8


class QueryStatus(str, Enum):
    VALUE = "value"
    NO_DATA = "no_data"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class QueryResult:
    status: QueryStatus
    value: Optional[float] = None

    @property
    def has_value(self) -> bool:
        return self.status is QueryStatus.VALUE


OUT_OF_BOUNDS = QueryResult(QueryStatus.OUT_OF_BOUNDS)
NO_DATA = QueryResult(QueryStatus.NO_DATA)
# endregion

# region Layer configuration
class LayerType(str, Enum):
    TEMPERATURE = "temperature"
    PRECIPITATION = "precipitation"


@dataclass(frozen=True)
class LayerConfig:
    name: str
    title: str
    unit: str
    type: LayerType
    bounds: ProjectedBounds
    predicate: Predicate = field(repr=False, compare=False, default=None)


@dataclass(frozen=True, eq=False)
class RasterProduct:
    """Everything one layer load produces. Replaced as a whole, never edited."""
    layer: LayerConfig
    grid: Grid
    geo_bounds: GeoBounds
    stats: Statistics
    histogram: np.ndarray
    image: RasterImage

    @property
    def bounds(self) -> ProjectedBounds:
        return self.layer.bounds
# endregion
