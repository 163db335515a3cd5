"""API request and response models."""
from __future__ import annotations

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field


class GridModel(BaseModel):
    xmin: float = Field(0.0, description="Western edge of the raster")
    ymax: Optional[float] = Field(None, description="Northern edge; defaults to the row count")
    dx: float = Field(1.0, gt=0, description="Cell width")
    dy: float = Field(1.0, gt=0, description="Cell height")
    crs: str = ""


class TrackOptions(BaseModel):
    goal_tolerance: int = Field(0, ge=0, description="Receiver range in pixels")
    seabed_tolerance: float = Field(0.0, ge=0)
    seabed_adapt_rate: float = Field(0.0, ge=0)
    benthic_tolerance: Optional[float] = Field(None, ge=0, description="Omit to disable the benthic check")
    benthic_adapt_rate: float = Field(0.0, ge=0)
    adaptation_steps: int = Field(0, ge=0)


class TrajectoryRequest(BaseModel):
    bathymetry: List[List[Optional[float]]] = Field(..., description="Seabed depth rows (positive down, null for no-data)")
    grid: GridModel = Field(default_factory=GridModel)
    signals: List[List[int]] = Field(..., description="Receiver x time detection matrix")
    positions: List[Tuple[float, float]] = Field(..., description="(x, y) of each receiver")
    depths: List[float] = Field(..., description="Observed depth per time step")
    options: TrackOptions = Field(default_factory=TrackOptions)


class TrajectoryResponse(BaseModel):
    path: List[Optional[Tuple[float, float]]]
    resolved: List[bool]
    path_length: float
    costs: float
    seabed_tolerances: List[Optional[float]]
    benthic_tolerances: List[Optional[float]] = Field(
        ..., description="null where unresolved or where the benthic check is disabled"
    )
    gaps: List[Tuple[int, int]]
    warnings: List[str] = []
