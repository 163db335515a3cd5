"""Memmapped raster caches with a JSON sidecar for shape and dtype."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional
import numpy as np


def meta_path(path: str | Path) -> Path:
    """Sidecar path, e.g. ``depth.npy`` -> ``depth.meta.json``."""
    return Path(path).with_suffix(".meta.json")


def read_meta(path: str | Path) -> Optional[dict]:
    sidecar = meta_path(path)
    if not sidecar.exists():
        return None
    with open(sidecar, "r", encoding="utf-8") as f:
        return json.load(f)


class MemMapLoader:
    """Lazy read-only view of a cached grid.

    Shape and dtype come from the sidecar written by :func:`save_memmap`
    unless given explicitly.
    """

    def __init__(self, path: str | Path, dtype: Any | None = None, shape: tuple[int, ...] | None = None):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"memmap not found: {self.path}")
        meta = read_meta(self.path) or {}
        self.shape = shape if shape is not None else tuple(meta.get("shape", ())) or None
        self.dtype = np.dtype(dtype if dtype is not None else meta.get("dtype", "float32"))
        self._arr: np.memmap | None = None

    @property
    def array(self) -> np.memmap:
        if self._arr is None:
            self._arr = np.memmap(self.path, mode="r", dtype=self.dtype, shape=self.shape)
        return self._arr


def save_memmap(path: str | Path, array: np.ndarray, dtype: Any | None = None) -> None:
    """Write ``array`` as a raw memmap plus its sidecar."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if dtype:
        array = array.astype(dtype)

    arr = np.memmap(path, mode="w+", dtype=array.dtype, shape=array.shape)
    arr[:] = array
    arr.flush()
    del arr

    with open(meta_path(path), "w", encoding="utf-8") as f:
        json.dump({"shape": list(array.shape), "dtype": str(array.dtype)}, f)
