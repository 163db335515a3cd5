"""Depth sensor time series."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import numpy as np


class DepthSeries:
    """Immutable sequence of observed animal depths, one per time step."""

    def __init__(self, values: Iterable[float]):
        arr = np.array(values, dtype=np.float64).reshape(-1)
        arr.setflags(write=False)
        self._values = arr

    def __len__(self) -> int:
        return self._values.shape[0]

    def __getitem__(self, time: int) -> float:
        return float(self._values[time])

    @property
    def values(self) -> np.ndarray:
        return self._values

    def __repr__(self) -> str:
        return f"DepthSeries(n={len(self)})"


def load_depth_series(path: str | Path) -> DepthSeries:
    """Read one depth per line; a non-numeric header line is skipped."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"depth series not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        first = f.readline().strip()
    skip = 0
    try:
        float(first.split(",")[0])
    except ValueError:
        skip = 1
    values = np.loadtxt(path, delimiter=",", skiprows=skip, ndmin=1, usecols=0)
    return DepthSeries(values)
