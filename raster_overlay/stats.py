# region Imports
import numpy as np

from .config import HISTOGRAM_BINS
from .errors import EmptyDataError
from .models import Grid, Predicate, Statistics
# endregion

# region Validity Predicates
def temperature_valid(values: np.ndarray) -> np.ndarray:
    """Finite and not the 0.0 no-data sentinel."""
    values = np.asarray(values, dtype=np.float64)
    return np.isfinite(values) & (values != 0)


def precipitation_valid(values: np.ndarray) -> np.ndarray:
    """Finite and above 1 (drops the near-zero noise floor)."""
    values = np.asarray(values, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return np.isfinite(values) & (values > 1)


def valid_mask(grid: Grid, predicate: Predicate) -> np.ndarray:
    return np.asarray(predicate(grid.values), dtype=bool)
# endregion

# region Statistics
def compute_stats(grid: Grid, predicate: Predicate) -> Statistics:
    valid = grid.values[valid_mask(grid, predicate)]
    if valid.size == 0:
        raise EmptyDataError(f"no valid samples in {grid.width}x{grid.height} grid")

    vmin = float(valid.min())
    vmax = float(valid.max())
    # float summation can land a hair outside [min, max] on near-constant data
    mean = min(max(float(valid.mean()), vmin), vmax)
    return Statistics(min=vmin, max=vmax, mean=mean, valid_count=int(valid.size))
# endregion

# region Histogram
def compute_histogram(valid_values, vmin: float, vmax: float, bins: int = HISTOGRAM_BINS) -> np.ndarray:
    """Fixed-width counts over [vmin, vmax]; the top edge lands in the last bin.

    Non-finite samples are not counted. The range itself must be finite.
    """
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        raise ValueError(f"histogram range must be finite, got [{vmin}, {vmax}]")
    v = np.asarray(valid_values, dtype=np.float64)
    v = v[np.isfinite(v)]
    span = (vmax - vmin) or 1.0
    idx = np.floor((v - vmin) / span * bins)
    idx = np.clip(idx, 0, bins - 1).astype(np.intp)
    return np.bincount(idx, minlength=bins)[:bins]
# endregion
