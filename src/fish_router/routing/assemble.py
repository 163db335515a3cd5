"""Stitch per-segment results into one time-indexed trajectory."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from fish_router.data.bathy import Bathymetry
from fish_router.routing.segments import SegmentOutcome

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class Trajectory:
    """Reconstructed path with one slot per depth measurement.

    Slots not covered by a solved segment hold ``None`` in ``path`` and in
    both tolerance lists.
    """

    path: List[Optional[Coordinate]]
    path_length: float
    costs: float
    seabed_tolerances: List[Optional[float]]
    benthic_tolerances: List[Optional[float]]
    segments: List[SegmentOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.path)

    def resolved_mask(self) -> np.ndarray:
        return np.array([p is not None for p in self.path], dtype=bool)

    @property
    def is_complete(self) -> bool:
        return bool(self.resolved_mask().all())

    def gaps(self) -> List[Tuple[int, int]]:
        """Inclusive (first, last) time ranges with no resolved position."""
        return _runs(~self.resolved_mask())

    def resolved_runs(self) -> List[Tuple[int, int]]:
        return _runs(self.resolved_mask())

    def coordinates_array(self) -> np.ndarray:
        """(T, 2) array of x/y with NaN for unresolved steps."""
        arr = np.full((len(self.path), 2), np.nan)
        for t, p in enumerate(self.path):
            if p is not None:
                arr[t] = p
        return arr

    def to_feature_collection(self) -> Dict[str, Any]:
        """GeoJSON FeatureCollection with one LineString per resolved run."""
        features = []
        for first, last in self.resolved_runs():
            coords = [list(self.path[t]) for t in range(first, last + 1)]
            if len(coords) == 1:
                geometry = {"type": "Point", "coordinates": coords[0]}
            else:
                geometry = {"type": "LineString", "coordinates": coords}
            features.append({
                "type": "Feature",
                "properties": {
                    "time_start": first,
                    "time_end": last,
                    "seabed_tolerance": self.seabed_tolerances[first],
                    "benthic_tolerance": _finite_or_none(self.benthic_tolerances[first]),
                },
                "geometry": geometry,
            })
        return {
            "type": "FeatureCollection",
            "properties": {
                "path_length": self.path_length,
                "costs": self.costs,
                "n_steps": len(self.path),
                "gaps": [list(g) for g in self.gaps()],
                "warnings": list(self.warnings),
            },
            "features": features,
        }


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not np.isfinite(value):
        return None
    return value


def _runs(mask: np.ndarray) -> List[Tuple[int, int]]:
    runs: List[Tuple[int, int]] = []
    start = None
    for t, flag in enumerate(mask):
        if flag and start is None:
            start = t
        elif not flag and start is not None:
            runs.append((start, t - 1))
            start = None
    if start is not None:
        runs.append((start, len(mask) - 1))
    return runs


def assemble_trajectory(
    outcomes: Sequence[SegmentOutcome],
    n_steps: int,
    bathymetry: Bathymetry,
    warnings: Optional[Sequence[str]] = None,
) -> Trajectory:
    """Write each solved segment over its exact time range; everything else stays unresolved."""
    path: List[Optional[Coordinate]] = [None] * n_steps
    seabed_tols: List[Optional[float]] = [None] * n_steps
    benthic_tols: List[Optional[float]] = [None] * n_steps
    total_costs = 0.0
    total_length = 0.0

    for outcome in outcomes:
        if not outcome.success:
            continue
        result = outcome.result
        total_costs += result.cost
        total_length += result.spatial_length
        for state in result.path:
            path[state.time] = bathymetry.world_coordinate_of(state.row, state.col)
            seabed_tols[state.time] = result.tolerance.seabed
            benthic_tols[state.time] = result.tolerance.benthic

    return Trajectory(
        path=path,
        path_length=total_length,
        costs=total_costs,
        seabed_tolerances=seabed_tols,
        benthic_tolerances=benthic_tols,
        segments=list(outcomes),
        warnings=list(warnings or []),
    )
