"""Readers for acoustic receiver inputs."""
from __future__ import annotations

from pathlib import Path

import numpy as np


def load_signals(path: str | Path) -> np.ndarray:
    """Read the receiver x time detection matrix (1 detection, 0 none, -1 inactive)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"signal matrix not found: {path}")
    signals = np.loadtxt(path, delimiter=",", dtype=np.int64, ndmin=2)
    if not np.isin(signals, (-1, 0, 1)).all():
        raise ValueError(f"{path}: signal values must be -1, 0 or 1")
    return signals


def load_positions(path: str | Path) -> np.ndarray:
    """Read receiver positions as rows of ``x,y`` in raster world units."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"receiver positions not found: {path}")
    positions = np.loadtxt(path, delimiter=",", dtype=np.float64, ndmin=2)
    if positions.shape[1] != 2:
        raise ValueError(f"{path}: expected 2 columns (x, y), got {positions.shape[1]}")
    return positions
