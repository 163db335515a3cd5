from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from fish_router.data.bathy import Bathymetry
from fish_router.data.depth import DepthSeries
from fish_router.routing.feasibility import FeasibilityModel


@pytest.fixture
def make_model() -> Callable[..., FeasibilityModel]:
    """Build a feasibility model from a depth matrix and an observed depth list."""

    def _make(seabed, observed) -> FeasibilityModel:
        bathy = Bathymetry.from_array(np.asarray(seabed, dtype=float))
        return FeasibilityModel(bathy, DepthSeries(observed))

    return _make


@pytest.fixture
def wall_grid() -> np.ndarray:
    """5x5 flat seabed at 10 m split by a 1 m ridge in column 2."""
    depth = np.full((5, 5), 10.0)
    depth[:, 2] = 1.0
    return depth
