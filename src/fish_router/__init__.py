"""Trajectory reconstruction for acoustically tagged animals over bathymetry grids."""

__all__ = [
    "core",
    "data",
    "routing",
    "api",
    "cli",
]
