"""HTTP endpoints for trajectory reconstruction."""
from __future__ import annotations

import math
from typing import List, Optional

import numpy as np
from fastapi import APIRouter, HTTPException

from fish_router.api.schemas import TrajectoryRequest, TrajectoryResponse
from fish_router.core.config import TrackerConfig
from fish_router.core.grid import GridSpec
from fish_router.data.bathy import Bathymetry
from fish_router.routing.tracker import find_shortest_trajectory

router = APIRouter()


def _finite(values: List[Optional[float]]) -> List[Optional[float]]:
    return [v if v is not None and math.isfinite(v) else None for v in values]


@router.post("/trajectory", response_model=TrajectoryResponse)
def compute_trajectory(request: TrajectoryRequest) -> TrajectoryResponse:
    try:
        raw = np.array(
            [[np.nan if v is None else v for v in row] for row in request.bathymetry],
            dtype=np.float64,
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="bathymetry must be a rectangular matrix")
    if raw.ndim != 2 or raw.size == 0:
        raise HTTPException(status_code=400, detail="bathymetry must be a non-empty rectangular matrix")
    rows, cols = raw.shape
    grid = GridSpec(
        crs=request.grid.crs,
        dx=request.grid.dx,
        dy=request.grid.dy,
        xmin=request.grid.xmin,
        ymax=request.grid.ymax if request.grid.ymax is not None else rows * request.grid.dy,
        width=cols,
        height=rows,
    )
    opts = request.options
    try:
        config = TrackerConfig().with_overrides(
            goal_tolerance=opts.goal_tolerance,
            seabed_tolerance=opts.seabed_tolerance,
            seabed_adapt_rate=opts.seabed_adapt_rate,
            benthic_tolerance=opts.benthic_tolerance if opts.benthic_tolerance is not None else math.inf,
            benthic_adapt_rate=opts.benthic_adapt_rate,
            adaptation_steps=opts.adaptation_steps,
        )
        trajectory = find_shortest_trajectory(
            Bathymetry(raw, grid),
            np.array(request.signals, dtype=np.int64),
            np.array(request.positions, dtype=np.float64).reshape(-1, 2),
            request.depths,
            config,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TrajectoryResponse(
        path=trajectory.path,
        resolved=trajectory.resolved_mask().tolist(),
        path_length=trajectory.path_length,
        costs=trajectory.costs,
        seabed_tolerances=_finite(trajectory.seabed_tolerances),
        benthic_tolerances=_finite(trajectory.benthic_tolerances),
        gaps=trajectory.gaps(),
        warnings=trajectory.warnings,
    )
