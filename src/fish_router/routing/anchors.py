"""Derive time-ordered path anchors from acoustic detections."""
from __future__ import annotations

import logging
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from fish_router.data.bathy import Bathymetry

logger = logging.getLogger(__name__)


class Anchor(NamedTuple):
    row: int
    col: int
    time: int


def detection_events(signals: np.ndarray) -> List[Tuple[int, int]]:
    """Fold the detection matrix into ``(receiver, time)`` events, at most one per time.

    Receivers are scanned in input order, so when several receivers fire at
    the same time step the first one wins.
    """
    signals = np.asarray(signals)
    if signals.ndim != 2:
        raise ValueError(f"signal matrix must be 2-D (receivers x time), got shape {signals.shape}")
    seen_times = set()
    events: List[Tuple[int, int]] = []
    for receiver in range(signals.shape[0]):
        for time in np.flatnonzero(signals[receiver] == 1):
            time = int(time)
            if time in seen_times:
                continue
            seen_times.add(time)
            events.append((receiver, time))
    events.sort(key=lambda event: event[1])
    return events


def anchors_from_detections(
    signals: np.ndarray,
    positions: Sequence[Tuple[float, float]] | np.ndarray,
    bathymetry: Bathymetry,
) -> List[Anchor]:
    """Turn detections and receiver world positions into grid anchors sorted by time."""
    positions = np.asarray(positions, dtype=np.float64)
    signals = np.asarray(signals)
    if positions.ndim != 2 or positions.shape[1] != 2:
        raise ValueError(f"receiver positions must have shape (n, 2), got {positions.shape}")
    if not np.isfinite(positions).all():
        raise ValueError("receiver positions must be finite")
    if signals.ndim != 2 or signals.shape[0] != positions.shape[0]:
        raise ValueError(
            f"signal matrix has {signals.shape[0] if signals.ndim else 0} receivers "
            f"but {positions.shape[0]} positions were given"
        )

    anchors = []
    for receiver, time in detection_events(signals):
        row, col = bathymetry.grid_index_of(*positions[receiver])
        anchors.append(Anchor(row, col, time))

    if anchors:
        logger.info(
            "Found %d acoustic observations (%d locations) within times (%d, %d).",
            len(anchors),
            len({(a.row, a.col) for a in anchors}),
            anchors[0].time,
            anchors[-1].time,
        )
    return anchors


def validate_anchors(anchors: Sequence[Anchor], n_steps: int) -> None:
    """Check search preconditions; raises ValueError before any search starts."""
    if len(anchors) < 2:
        raise ValueError(f"at least two acoustic observations are required, got {len(anchors)}")
    for anchor in anchors:
        if not 0 <= anchor.time < n_steps:
            raise ValueError(f"observation time {anchor.time} outside depth series of length {n_steps}")
    for prev, nxt in zip(anchors, anchors[1:]):
        if nxt.time <= prev.time:
            raise ValueError(f"observations must be strictly increasing in time, got {prev.time} then {nxt.time}")
