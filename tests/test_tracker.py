from __future__ import annotations

import numpy as np
import pytest

from fish_router.core.config import TrackerConfig
from fish_router.data.bathy import Bathymetry
from fish_router.routing.segments import SegmentStatus
from fish_router.routing.tracker import find_shortest_trajectory


def _scenario():
    depth = np.full((5, 5), 10.0)
    depth[:, 2] = 1.0
    depth[1, 2] = -1.0  # islet in the ridge
    depth[4, 2] = 10.0  # gap in the ridge at the bottom row
    bathy = Bathymetry.from_array(depth)
    positions = [bathy.world_coordinate_of(0, 0), bathy.world_coordinate_of(0, 4)]
    signals = np.zeros((2, 12), dtype=int)
    signals[0, 0] = 1
    signals[1, 10] = 1
    depths = [5.0] * 12
    return bathy, signals, positions, depths


def test_path_detours_through_gap() -> None:
    bathy, signals, positions, depths = _scenario()
    trajectory = find_shortest_trajectory(bathy, signals, positions, depths)
    assert trajectory.path[0] == bathy.world_coordinate_of(0, 0)
    assert trajectory.path[10] == bathy.world_coordinate_of(0, 4)
    assert trajectory.path[11] is None
    assert bathy.world_coordinate_of(4, 2) in trajectory.path
    # down 4 rows and back up 4: 8 spatial moves in 10 steps
    assert trajectory.path_length == 8
    assert trajectory.costs == 18
    assert trajectory.warnings == []


def test_identical_inputs_give_identical_trajectories() -> None:
    bathy, signals, positions, depths = _scenario()
    config = TrackerConfig().with_overrides(goal_tolerance=1)
    first = find_shortest_trajectory(bathy, signals, positions, depths, config)
    for _ in range(3):
        again = find_shortest_trajectory(bathy, signals, positions, depths, config)
        assert again.path == first.path
        assert again.costs == first.costs
        assert again.seabed_tolerances == first.seabed_tolerances


def test_anchor_on_land_is_reported() -> None:
    bathy, signals, positions, depths = _scenario()
    positions = [positions[0], bathy.world_coordinate_of(1, 2)]
    trajectory = find_shortest_trajectory(bathy, signals, positions, depths)
    assert trajectory.segments[0].status is SegmentStatus.INVALID_ANCHOR
    assert trajectory.path == [None] * 12
    assert "No valid seabed" in trajectory.warnings[0]


def test_single_detection_is_rejected() -> None:
    bathy, signals, positions, depths = _scenario()
    signals[1, 10] = 0
    with pytest.raises(ValueError, match="at least two"):
        find_shortest_trajectory(bathy, signals, positions, depths)


def test_signals_longer_than_depth_series_are_rejected() -> None:
    bathy, signals, positions, depths = _scenario()
    with pytest.raises(ValueError, match="time steps"):
        find_shortest_trajectory(bathy, signals, positions, depths[:8])
