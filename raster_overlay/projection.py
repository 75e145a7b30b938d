# region Imports
from functools import lru_cache
import math
from typing import Tuple
from pyproj import Transformer

from .config import WGS84, WEB_MERCATOR
from .errors import InvalidCoordinate
# endregion

# region Transformer Cache
@lru_cache(maxsize=None)
def _transformer(src: str, dst: str) -> Transformer:
    return Transformer.from_crs(src, dst, always_xy=True)


def _checked(a: float, b: float, what: str) -> Tuple[float, float]:
    if not (math.isfinite(a) and math.isfinite(b)):
        raise InvalidCoordinate(f"{what} produced a non-finite result ({a}, {b})")
    return float(a), float(b)
# endregion

# region Geographic <-> Projected
def to_geographic(x: float, y: float, src_crs: str = WEB_MERCATOR) -> Tuple[float, float]:
    """Projected (x, y) in ``src_crs`` -> (lon, lat) degrees."""
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidCoordinate(f"non-finite projected coordinate ({x}, {y})")
    lon, lat = _transformer(src_crs, WGS84).transform(x, y)
    lon, lat = _checked(lon, lat, f"{src_crs} -> {WGS84}")
    if abs(lat) >= 90.0:
        raise InvalidCoordinate(f"latitude {lat} out of domain")
    return lon, lat


def to_projected(lon: float, lat: float, dst_crs: str = WEB_MERCATOR) -> Tuple[float, float]:
    """(lon, lat) degrees -> projected (x, y) in ``dst_crs``."""
    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise InvalidCoordinate(f"non-finite coordinate ({lon}, {lat})")
    if abs(lat) >= 90.0:
        raise InvalidCoordinate(f"latitude {lat} out of domain")
    x, y = _transformer(WGS84, dst_crs).transform(lon, lat)
    return _checked(x, y, f"{WGS84} -> {dst_crs}")
# endregion

# region Cursor Readout
def cursor_readout(lon: float, lat: float, projection: str = "4326") -> Tuple[str, str]:
    """Mouse-position labels: metres in web mercator, else lat/lon degrees."""
    if projection == "3857":
        x, y = to_projected(lon, lat, WEB_MERCATOR)
        return f"{x:.2f}", f"{y:.2f}"
    return f"{lat:.4f}", f"{lon:.4f}"
# endregion
