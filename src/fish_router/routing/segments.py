"""Per-segment search between consecutive anchors with adaptive tolerances."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from fish_router.core.config import AdaptationConfig
from fish_router.routing.anchors import Anchor
from fish_router.routing.astar import astar
from fish_router.routing.costs import make_goal_test, make_heuristic, step_cost
from fish_router.routing.feasibility import FeasibilityModel, ToleranceSetting
from fish_router.routing.neighbors import SearchState, make_neighbor_function

logger = logging.getLogger(__name__)


class SegmentStatus(str, Enum):
    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    INVALID_ANCHOR = "invalid_anchor"


@dataclass(frozen=True)
class SegmentResult:
    """A solved segment: states from start to goal time, their cost and the tolerances used."""

    path: List[SearchState]
    cost: float
    tolerance: ToleranceSetting

    @property
    def first_time(self) -> int:
        return self.path[0].time

    @property
    def last_time(self) -> int:
        return self.path[-1].time

    @property
    def duration(self) -> int:
        return self.last_time - self.first_time

    @property
    def spatial_length(self) -> float:
        return self.cost - self.duration


@dataclass(frozen=True)
class SegmentOutcome:
    start: Anchor
    goal: Anchor
    status: SegmentStatus
    attempts: int
    result: Optional[SegmentResult] = None
    explored: int = 0

    @property
    def success(self) -> bool:
        return self.status is SegmentStatus.SUCCESS


def tolerance_schedule(base: ToleranceSetting, adaptation: AdaptationConfig) -> Iterator[ToleranceSetting]:
    """Tolerances for attempts k = 0..steps, widened geometrically per axis."""
    for k in range(adaptation.steps + 1):
        yield ToleranceSetting(
            seabed=base.seabed * (1 + adaptation.seabed_rate) ** k,
            benthic=base.benthic * (1 + adaptation.benthic_rate) ** k,
        )


def solve_segment(
    model: FeasibilityModel,
    start: Anchor,
    goal: Anchor,
    base: ToleranceSetting,
    adaptation: AdaptationConfig,
    goal_tolerance: int = 0,
    max_expansions: Optional[int] = None,
) -> SegmentOutcome:
    """Search for the cheapest path from ``start`` to ``goal``, widening tolerances on failure."""
    bathy = model.bathymetry
    if not bathy.is_valid_cell(start.row, start.col) or not bathy.is_valid_cell(goal.row, goal.col):
        return SegmentOutcome(start, goal, SegmentStatus.INVALID_ANCHOR, attempts=0)

    start_state = SearchState(*start)
    goal_state = SearchState(*goal)
    # every step costs at most 2
    max_cost = 2 * (goal.time - start.time)
    heuristic = make_heuristic(goal_tolerance)
    goal_test = make_goal_test(goal_tolerance)

    attempts = 0
    explored = 0
    for tolerance in tolerance_schedule(base, adaptation):
        attempts += 1
        result = astar(
            make_neighbor_function(model, tolerance, horizon=goal.time),
            start_state,
            goal_state,
            cost=step_cost,
            heuristic=heuristic,
            is_goal=goal_test,
            max_cost=max_cost,
            max_expansions=max_expansions,
        )
        explored += result.explored
        if result.success:
            if attempts > 1:
                logger.info(
                    "Segment t=%d:%d solved on attempt %d (seabed_tol=%.3g, benthic_tol=%.3g)",
                    start.time, goal.time, attempts, tolerance.seabed, tolerance.benthic,
                )
            return SegmentOutcome(
                start,
                goal,
                SegmentStatus.SUCCESS,
                attempts=attempts,
                result=SegmentResult(path=result.path, cost=result.cost, tolerance=tolerance),
                explored=explored,
            )
    return SegmentOutcome(start, goal, SegmentStatus.EXHAUSTED, attempts=attempts, explored=explored)
