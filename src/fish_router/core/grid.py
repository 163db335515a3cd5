"""Grid geometry for converting between world coordinates and raster indices."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Tuple
import json

import numpy as np
from affine import Affine


@dataclass(slots=True)
class GridSpec:
    """Definition of a north-up bathymetry raster.

    Attributes:
        crs: Coordinate reference system string.
        dx: Cell width in world units.
        dy: Cell height in world units (positive).
        xmin: Western edge of the raster.
        ymax: Northern edge of the raster (row 0).
        width: Number of columns.
        height: Number of rows.
    """

    crs: str
    dx: float
    dy: float
    xmin: float
    ymax: float
    width: int
    height: int

    @classmethod
    def from_file(cls, path: str | Path) -> "GridSpec":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(**data)

    def to_file(self, path: str | Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def from_transform(cls, transform: Affine, width: int, height: int, crs: str = "") -> "GridSpec":
        """Build a grid from a north-up rasterio transform."""
        if transform.b != 0 or transform.d != 0:
            raise ValueError("rotated rasters are not supported")
        if transform.e >= 0:
            raise ValueError("raster must be north-up (negative y pixel size)")
        return cls(
            crs=str(crs) if crs else "",
            dx=float(transform.a),
            dy=float(-transform.e),
            xmin=float(transform.c),
            ymax=float(transform.f),
            width=int(width),
            height=int(height),
        )

    @property
    def transform(self) -> Affine:
        return Affine(self.dx, 0.0, self.xmin, 0.0, -self.dy, self.ymax)

    @property
    def xmax(self) -> float:
        return self.xmin + self.dx * self.width

    @property
    def ymin(self) -> float:
        return self.ymax - self.dy * self.height

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.height, self.width

    def grid_index_of(self, x: float, y: float) -> Tuple[int, int]:
        """Convert world x/y to (row, col).

        The result is not clipped; use ``valid_index`` to check it.
        """
        col = int(np.floor((x - self.xmin) / self.dx))
        row = int(np.floor((self.ymax - y) / self.dy))
        return row, col

    def world_coordinate_of(self, row: int, col: int) -> Tuple[float, float]:
        """World x/y of the centre of cell (row, col)."""
        x = self.xmin + (col + 0.5) * self.dx
        y = self.ymax - (row + 0.5) * self.dy
        return x, y

    def valid_index(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width
