"""Preprocessing commands that cache rasters for repeated runs."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import typer

from fish_router.core.memmaps import save_memmap
from fish_router.data.bathy import load_bathymetry

app = typer.Typer(help="Preprocessing utilities for bathymetry rasters")


@app.command()
def bathy(
    src: Path = typer.Argument(..., help="Source bathymetry GeoTIFF"),
    out: Path = typer.Option(..., "--out", help="Output .npy memmap"),
    nodata: Optional[float] = typer.Option(None, help="Override the raster nodata value"),
    elevation: bool = typer.Option(False, "--elevation", help="Raster stores elevation (water negative)"),
) -> None:
    """Convert a GeoTIFF to a positive-down float32 memmap plus grid JSON."""
    try:
        bathymetry = load_bathymetry(src, nodata=nodata, positive_down=not elevation)
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    save_memmap(out, bathymetry.depth, dtype=np.float32)
    grid_path = out.with_suffix(".grid.json")
    bathymetry.grid.to_file(grid_path)
    rows, cols = bathymetry.dimensions()
    valid = int(np.sum(bathymetry.depth > 0))
    typer.echo(f"Saved bathymetry grid to {out} ({rows}x{cols}, {valid} water cells)")
    typer.echo(f"Saved grid definition to {grid_path}")
