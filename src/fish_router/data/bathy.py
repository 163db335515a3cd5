"""Bathymetry raster lookups."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import rasterio

from fish_router.core.grid import GridSpec
from fish_router.core.memmaps import MemMapLoader, read_meta


def _to_seabed_depth(raw: np.ndarray, nodata: Optional[float], positive_down: bool) -> np.ndarray:
    """Normalise raw raster values to positive-down seabed depth.

    Nodata cells become NaN. Land keeps a non-positive depth so that it is
    rejected by the seabed > 0 check.
    """
    depth = np.asarray(raw, dtype=np.float64).copy()
    if nodata is not None:
        invalid = np.isclose(depth, nodata) if np.isfinite(nodata) else ~np.isfinite(depth)
        depth[invalid] = np.nan
    if not positive_down:
        depth = -depth
    return depth


@dataclass(eq=False)
class Bathymetry:
    """Read-only seabed depth grid (positive down, NaN for no-data)."""

    depth: np.ndarray
    grid: GridSpec
    nodata: Optional[float] = None

    def __post_init__(self) -> None:
        arr = np.array(self.depth, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"bathymetry must be 2-D, got shape {arr.shape}")
        if arr.shape != self.grid.dimensions:
            raise ValueError(f"bathymetry shape {arr.shape} does not match grid {self.grid.dimensions}")
        arr.setflags(write=False)
        self.depth = arr

    @classmethod
    def from_array(
        cls,
        depth: np.ndarray,
        grid: Optional[GridSpec] = None,
        nodata: Optional[float] = None,
        positive_down: bool = True,
    ) -> "Bathymetry":
        """Wrap an in-memory array; without a grid, cells are unit squares from the origin."""
        raw = np.asarray(depth)
        if grid is None:
            rows, cols = raw.shape
            grid = GridSpec(crs="", dx=1.0, dy=1.0, xmin=0.0, ymax=float(rows), width=cols, height=rows)
        return cls(_to_seabed_depth(raw, nodata, positive_down), grid, nodata)

    def dimensions(self) -> Tuple[int, int]:
        return self.depth.shape

    def depth_at(self, row: int, col: int) -> float:
        if not self.grid.valid_index(row, col):
            return float("nan")
        return float(self.depth[row, col])

    def is_valid_cell(self, row: int, col: int) -> bool:
        """In bounds and holding a real seabed (not land or no-data)."""
        return self.depth_at(row, col) > 0

    def world_coordinate_of(self, row: int, col: int) -> Tuple[float, float]:
        return self.grid.world_coordinate_of(row, col)

    def grid_index_of(self, x: float, y: float) -> Tuple[int, int]:
        return self.grid.grid_index_of(x, y)


def load_bathymetry(
    path: str | Path,
    grid_path: Optional[str | Path] = None,
    nodata: Optional[float] = None,
    positive_down: bool = True,
) -> Bathymetry:
    """Load a bathymetry raster.

    GeoTIFFs are read with rasterio and carry their own transform. ``.npy``
    memmaps need a grid JSON, by default ``<stem>.grid.json`` beside the file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"bathymetry not found: {path}")

    if path.suffix.lower() in (".tif", ".tiff"):
        with rasterio.open(path) as src:
            raw = src.read(1)
            if nodata is None:
                nodata = src.nodata
            grid = GridSpec.from_transform(src.transform, src.width, src.height, src.crs.to_string() if src.crs else "")
        return Bathymetry(_to_seabed_depth(raw, nodata, positive_down), grid, nodata)

    if grid_path is None:
        grid_path = path.with_suffix(".grid.json")
    grid_path = Path(grid_path)
    if not grid_path.exists():
        raise FileNotFoundError(f"grid definition not found: {grid_path}")
    grid = GridSpec.from_file(grid_path)
    # without a sidecar the cache is assumed to be float32 in grid order
    loader = MemMapLoader(path, shape=None if read_meta(path) else grid.dimensions)
    return Bathymetry(_to_seabed_depth(loader.array, nodata, positive_down), grid, nodata)
