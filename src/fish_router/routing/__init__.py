"""Time-extended grid search for trajectory reconstruction."""

from fish_router.routing.anchors import Anchor, anchors_from_detections, validate_anchors
from fish_router.routing.assemble import Trajectory, assemble_trajectory
from fish_router.routing.feasibility import FeasibilityModel, ToleranceSetting
from fish_router.routing.segments import SegmentOutcome, SegmentResult, SegmentStatus, solve_segment
from fish_router.routing.tracker import find_shortest_trajectory, track_anchors

__all__ = [
    "Anchor",
    "FeasibilityModel",
    "SegmentOutcome",
    "SegmentResult",
    "SegmentStatus",
    "ToleranceSetting",
    "Trajectory",
    "anchors_from_detections",
    "assemble_trajectory",
    "find_shortest_trajectory",
    "solve_segment",
    "track_anchors",
    "validate_anchors",
]
