# region Imports
from typing import Callable
import numpy as np

from .colors import colorize
from .models import Grid, Predicate, RasterImage, Statistics
from .stats import valid_mask
# endregion

Ramp = Callable[[np.ndarray], np.ndarray]


# region Composite
def composite(
    grid: Grid,
    stats: Statistics,
    predicate: Predicate,
    ramp: Ramp = colorize,
) -> RasterImage:
    """
    Colour every valid cell by its position in [stats.min, stats.max] and
    leave the rest fully transparent. Row order follows the grid (row 0 on
    top); no flip here.
    """
    mask = valid_mask(grid, predicate)
    rgba = np.zeros((grid.width * grid.height, 4), dtype=np.uint8)

    if mask.any():
        norm = np.clip((grid.values[mask] - stats.min) / stats.range, 0.0, 1.0)
        rgba[mask, :3] = ramp(norm)
        rgba[mask, 3] = 255

    return RasterImage(grid.width, grid.height, rgba.reshape(grid.height, grid.width, 4))
# endregion
