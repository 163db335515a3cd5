"""Reconstruct the most plausible trajectory through a bathymetry grid.

Control flow: detections -> anchors -> feasibility model -> one search per
consecutive anchor pair, in time order -> assembled trajectory.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from fish_router.core.config import TrackerConfig
from fish_router.data.bathy import Bathymetry
from fish_router.data.depth import DepthSeries
from fish_router.routing.anchors import Anchor, anchors_from_detections, validate_anchors
from fish_router.routing.assemble import Trajectory, assemble_trajectory
from fish_router.routing.feasibility import FeasibilityModel, ToleranceSetting
from fish_router.routing.segments import SegmentOutcome, SegmentStatus, solve_segment

logger = logging.getLogger(__name__)


def _failure_message(outcome: SegmentOutcome) -> str:
    span = f"time = {outcome.start.time}:{outcome.goal.time}"
    start = (outcome.start.row, outcome.start.col)
    goal = (outcome.goal.row, outcome.goal.col)
    if outcome.status is SegmentStatus.INVALID_ANCHOR:
        return f"No valid seabed at anchor {start} or {goal}, {span}; segment left unresolved."
    return f"No path found from {start} to {goal}, {span} after {outcome.attempts} attempt(s)!"


def track_anchors(
    bathymetry: Bathymetry,
    anchors: Sequence[Anchor],
    depths: DepthSeries,
    config: Optional[TrackerConfig] = None,
) -> Trajectory:
    """Solve every consecutive anchor pair and assemble the result.

    Raises:
        ValueError: fewer than two anchors, or anchors outside the depth series
            or not strictly increasing in time.
    """
    config = config or TrackerConfig()
    anchors = list(anchors)
    validate_anchors(anchors, len(depths))

    model = FeasibilityModel(bathymetry, depths)
    base = ToleranceSetting(seabed=config.tolerance.seabed, benthic=config.tolerance.benthic)

    outcomes: List[SegmentOutcome] = []
    warnings: List[str] = []
    n_segments = len(anchors) - 1
    for i, (start, goal) in enumerate(zip(anchors, anchors[1:]), start=1):
        outcome = solve_segment(
            model,
            start,
            goal,
            base,
            config.adaptation,
            goal_tolerance=config.search.goal_tolerance,
            max_expansions=config.search.max_expansions,
        )
        if not outcome.success:
            message = _failure_message(outcome)
            logger.warning(message)
            warnings.append(message)
        logger.info("Find paths... %d/%d (explored %d states)", i, n_segments, outcome.explored)
        outcomes.append(outcome)

    return assemble_trajectory(outcomes, len(depths), bathymetry, warnings)


def find_shortest_trajectory(
    bathymetry: Bathymetry,
    signals: np.ndarray,
    positions: Sequence[Tuple[float, float]] | np.ndarray,
    depths: DepthSeries | Sequence[float] | np.ndarray,
    config: Optional[TrackerConfig] = None,
) -> Trajectory:
    """Shortest path visiting all acoustic observations in order under the depth constraints.

    Args:
        bathymetry: Seabed depth raster (positive down).
        signals: Receiver x time matrix; 1 marks a detection.
        positions: World x/y of each receiver.
        depths: Observed animal depth per time step.
        config: Tolerances, adaptation and goal settings.

    Returns:
        A Trajectory with one slot per depth measurement; unsolved segments
        are left as explicit gaps.
    """
    if not isinstance(depths, DepthSeries):
        depths = DepthSeries(depths)
    signals = np.asarray(signals)
    if signals.ndim == 2 and signals.shape[1] > len(depths):
        raise ValueError(
            f"signal matrix covers {signals.shape[1]} time steps but the depth series has {len(depths)}"
        )
    anchors = anchors_from_detections(signals, positions, bathymetry)
    return track_anchors(bathymetry, anchors, depths, config)
