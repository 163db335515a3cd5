from __future__ import annotations

import math

import numpy as np

from fish_router.core.config import TrackerConfig
from fish_router.data.bathy import Bathymetry
from fish_router.data.depth import DepthSeries
from fish_router.routing.anchors import Anchor
from fish_router.routing.assemble import assemble_trajectory
from fish_router.routing.feasibility import ToleranceSetting
from fish_router.routing.neighbors import SearchState
from fish_router.routing.segments import SegmentOutcome, SegmentResult, SegmentStatus
from fish_router.routing.tracker import track_anchors


def _benthic_failure_run():
    bathy = Bathymetry.from_array(np.full((3, 7), 10.0))
    # animal sits just below the seabed reading, then rises far above it
    depths = DepthSeries([10.5, 10.5, 10.5, 10.5, 2.0, 2.0, 2.0, 10.5])
    config = TrackerConfig().with_overrides(seabed_tolerance=1.0, benthic_tolerance=0.0)
    anchors = [Anchor(1, 0, 0), Anchor(1, 3, 3), Anchor(1, 6, 6)]
    return bathy, track_anchors(bathy, anchors, depths, config)


def test_failed_segment_leaves_unresolved_slots() -> None:
    bathy, trajectory = _benthic_failure_run()
    assert len(trajectory) == 8
    assert trajectory.path[:4] == [bathy.world_coordinate_of(1, c) for c in range(4)]
    assert trajectory.path[4:] == [None] * 4
    assert trajectory.seabed_tolerances == [1.0] * 4 + [None] * 4
    assert trajectory.benthic_tolerances == [0.0] * 4 + [None] * 4
    assert trajectory.gaps() == [(4, 7)]
    assert not trajectory.is_complete


def test_totals_only_count_resolved_segments() -> None:
    _, trajectory = _benthic_failure_run()
    assert trajectory.costs == 6
    assert trajectory.path_length == 3
    assert [s.status for s in trajectory.segments] == [SegmentStatus.SUCCESS, SegmentStatus.EXHAUSTED]
    assert len(trajectory.warnings) == 1
    assert "No path found" in trajectory.warnings[0]


def test_coordinates_array_and_geojson() -> None:
    _, trajectory = _benthic_failure_run()
    arr = trajectory.coordinates_array()
    assert arr.shape == (8, 2)
    assert np.isnan(arr[4:]).all()
    assert arr[0].tolist() == [0.5, 1.5]

    collection = trajectory.to_feature_collection()
    assert collection["type"] == "FeatureCollection"
    assert collection["properties"]["gaps"] == [[4, 7]]
    (feature,) = collection["features"]
    assert feature["geometry"]["type"] == "LineString"
    assert len(feature["geometry"]["coordinates"]) == 4
    assert feature["properties"]["time_start"] == 0
    assert feature["properties"]["time_end"] == 3


def test_assembler_writes_exact_time_range() -> None:
    bathy = Bathymetry.from_array(np.full((4, 4), 10.0))
    path = [SearchState(0, 0, 2), SearchState(1, 1, 3), SearchState(1, 1, 4)]
    tol = ToleranceSetting(seabed=2.0)
    outcomes = [
        SegmentOutcome(Anchor(0, 0, 0), Anchor(0, 0, 2), SegmentStatus.EXHAUSTED, attempts=3),
        SegmentOutcome(
            Anchor(0, 0, 2),
            Anchor(1, 1, 4),
            SegmentStatus.SUCCESS,
            attempts=1,
            result=SegmentResult(path=path, cost=3.0, tolerance=tol),
        ),
    ]
    trajectory = assemble_trajectory(outcomes, 6, bathy)
    assert trajectory.path[:2] == [None, None]
    assert trajectory.path[2] == (0.5, 3.5)
    assert trajectory.path[3] == trajectory.path[4] == (1.5, 2.5)
    assert trajectory.path[5] is None
    assert trajectory.seabed_tolerances == [None, None, 2.0, 2.0, 2.0, None]
    assert all(math.isinf(b) for b in trajectory.benthic_tolerances[2:5])
    assert trajectory.costs == 3.0
    assert trajectory.path_length == 1.0
    assert trajectory.resolved_runs() == [(2, 4)]


def test_no_successful_segments() -> None:
    bathy = Bathymetry.from_array(np.full((2, 2), 10.0))
    trajectory = assemble_trajectory([], 3, bathy)
    assert trajectory.path == [None, None, None]
    assert trajectory.costs == 0
    assert trajectory.path_length == 0
    assert trajectory.to_feature_collection()["features"] == []
