# region Imports
import math
from typing import Optional, Tuple
import numpy as np

from .config import EDGE_TOL
from .models import Grid, ProjectedBounds, QueryResult, QueryStatus, OUT_OF_BOUNDS, NO_DATA
from .projection import to_projected
# endregion

# region Index Helpers
def projected_to_rc(x: float, y: float, bounds: ProjectedBounds, W: int, H: int) -> Optional[Tuple[int, int]]:
    """(row, col) of the cell containing projected (x, y), or None if outside."""
    if not (bounds.min_x <= x <= bounds.max_x and bounds.min_y <= y <= bounds.max_y):
        return None

    rel_x = (x - bounds.min_x) / bounds.span_x
    rel_y = (y - bounds.min_y) / bounds.span_y

    # rows run north -> south, projected y runs south -> north
    c = math.floor(rel_x * W)
    r = math.floor((1.0 - rel_y) * H)

    # points on the max edge belong to the last cell
    c = max(0, min(W - 1, c))
    r = max(0, min(H - 1, r))
    return r, c


def rc_to_idx(r: int, c: int, W: int) -> int:
    return r * W + c


def _snap(v: float, lo: float, hi: float, tol: float) -> float:
    if lo - tol <= v < lo:
        return lo
    if hi < v <= hi + tol:
        return hi
    return v
# endregion

# region Queries
def query_projected(grid: Grid, bounds: ProjectedBounds, x: float, y: float) -> QueryResult:
    """Exact lookup: anything outside the closed bounds is out of bounds."""
    rc = projected_to_rc(x, y, bounds, grid.width, grid.height)
    if rc is None:
        return OUT_OF_BOUNDS
    value = grid.values[rc_to_idx(rc[0], rc[1], grid.width)]
    if not np.isfinite(value):
        return NO_DATA
    return QueryResult(QueryStatus.VALUE, float(value))


def query_value(grid: Grid, bounds: ProjectedBounds, lon: float, lat: float) -> QueryResult:
    """Raw grid value under a (lon, lat) click; not normalised, not coloured."""
    x, y = to_projected(lon, lat, bounds.crs)
    # a corner clicked in lon/lat can land a hair outside after the round trip
    x = _snap(x, bounds.min_x, bounds.max_x, bounds.span_x * EDGE_TOL)
    y = _snap(y, bounds.min_y, bounds.max_y, bounds.span_y * EDGE_TOL)
    return query_projected(grid, bounds, x, y)
# endregion
