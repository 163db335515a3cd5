"""Three-dimensional (row, col, time) feasibility model."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numba

from fish_router.data.bathy import Bathymetry
from fish_router.data.depth import DepthSeries


@numba.jit
def _traversable_jit(seabed: float, observed: float, seabed_tol: float, benthic_tol: float) -> bool:
    """JIT-compiled depth checks for one cell at one time step."""
    # NaN seabed (no-data) or land fails here
    if not seabed > 0.0:
        return False
    # animal cannot be deeper than the seabed plus uncertainty
    if not seabed + seabed_tol > observed:
        return False
    # nor further above the seabed than the benthic clearance
    return seabed - observed < benthic_tol


@dataclass(frozen=True)
class ToleranceSetting:
    """Depth tolerances applied uniformly during one search attempt."""

    seabed: float = 0.0
    benthic: float = math.inf

    def __post_init__(self) -> None:
        if not self.seabed >= 0 or not self.benthic >= 0:
            raise ValueError(f"tolerances must be non-negative, got seabed={self.seabed}, benthic={self.benthic}")


class FeasibilityModel:
    """Answers whether the animal can occupy a cell at a given time step."""

    def __init__(self, bathymetry: Bathymetry, depths: DepthSeries):
        self.bathymetry = bathymetry
        self.depths = depths
        self._seabed = bathymetry.depth
        self._observed = depths.values
        self.n_rows, self.n_cols = bathymetry.dimensions()
        self.n_steps = len(depths)

    def in_bounds(self, row: int, col: int, time: int) -> bool:
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols and 0 <= time < self.n_steps

    def is_traversable(self, row: int, col: int, time: int, tolerance: ToleranceSetting) -> bool:
        """True iff the cell is in bounds, holds a seabed and satisfies both depth constraints.

        Both depth inequalities are strict: an observed depth exactly equal to
        seabed + seabed tolerance is infeasible.
        """
        if not self.in_bounds(row, col, time):
            return False
        return bool(_traversable_jit(
            float(self._seabed[row, col]),
            float(self._observed[time]),
            float(tolerance.seabed),
            float(tolerance.benthic),
        ))
