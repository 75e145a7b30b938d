"""
Shared fixtures: small grids, bounds and a configured layer registry.

Nothing here touches the network; fetch functions are monkeypatched in the
HTTP tests.
"""

import os
import sys

import numpy as np
import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from raster_overlay.config import DEFAULT_BOUNDS, DEFAULT_LAYERS
from raster_overlay.layers import LayerRegistry
from raster_overlay.models import Grid, ProjectedBounds

TEMPERATURE_LAYER = "20230514_meantemperature_comvalenciana"
PRECIPITATION_LAYER = "20230514_precipitation_comvalenciana"


@pytest.fixture
def registry():
    return LayerRegistry(DEFAULT_LAYERS, DEFAULT_BOUNDS)


@pytest.fixture
def temperature_layer(registry):
    return registry.get(TEMPERATURE_LAYER)


@pytest.fixture
def precipitation_layer(registry):
    return registry.get(PRECIPITATION_LAYER)


@pytest.fixture
def cv_bounds():
    """Comunidad Valenciana extent in web mercator."""
    return ProjectedBounds.from_corners(DEFAULT_BOUNDS[TEMPERATURE_LAYER])


@pytest.fixture
def grid_4x3():
    """4 wide, 3 tall, cell value == flat index."""
    return Grid(4, 3, np.arange(12, dtype=np.float64))


@pytest.fixture
def spec_grid():
    """2x2 temperature grid with two zero (no-data) cells."""
    return Grid(2, 2, np.array([0.0, 5.0, 0.0, 3.0]))
