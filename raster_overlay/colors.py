"""Blue -> cyan -> green -> yellow -> red ramp and legend helpers.

The ramp is four linear segments of a quarter each. ``color_for`` works on a
single scalar, ``colorize`` on whole arrays; both give the same triples.
Inputs must already be clamped to [0, 1].
"""

# region Imports
from typing import List, Tuple
import numpy as np

from .config import LEGEND_STEP
# endregion

RGB = Tuple[int, int, int]


def _round(x):
    # round half up, same on scalars and arrays
    return np.floor(np.asarray(x, dtype=np.float64) * 255.0 + 0.5)


# region Ramp
def color_for(value: float) -> RGB:
    if value < 0.25:
        t = value * 4
        return 0, int(_round(t)), 255
    elif value < 0.5:
        t = value * 4 - 1
        return 0, 255, int(_round(1 - t))
    elif value < 0.75:
        t = value * 4 - 2
        return int(_round(t)), 255, 0
    else:
        t = value * 4 - 3
        return 255, int(_round(1 - t)), 0


def colorize(norm: np.ndarray) -> np.ndarray:
    """Vectorised ``color_for``: (...,) floats in [0,1] -> (..., 3) uint8."""
    v = np.asarray(norm, dtype=np.float64)
    seg = np.clip(np.floor(v * 4), 0, 3).astype(np.int8)
    t = v * 4 - seg
    up = _round(t)
    down = _round(1 - t)
    full = np.full_like(v, 255.0)
    zero = np.zeros_like(v)

    r = np.choose(seg, [zero, zero, up, full])
    g = np.choose(seg, [up, full, full, down])
    b = np.choose(seg, [full, down, zero, zero])
    return np.stack([r, g, b], axis=-1).astype(np.uint8)
# endregion

# region Legend
def legend_stops(step: float = LEGEND_STEP) -> List[Tuple[int, RGB]]:
    """(percent, rgb) samples of the ramp from 0 % to 100 %."""
    n = int(round(1.0 / step))
    stops = []
    for i in range(n + 1):
        norm = min(1.0, max(0.0, i / n))
        stops.append((int(round(norm * 100)), color_for(norm)))
    return stops


def legend_gradient_css(stops=None) -> str:
    stops = legend_stops() if stops is None else stops
    parts = [f"rgb({r},{g},{b}) {pct}%" for pct, (r, g, b) in stops]
    return f"linear-gradient(to right, {', '.join(parts)})"


def legend_scale(vmin: float, vmax: float) -> List[str]:
    return [f"{vmin:.1f}", f"{(vmin + vmax) / 2:.1f}", f"{vmax:.1f}"]
# endregion
