"""Track command: reconstruct a trajectory from files on disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from fish_router.core.config import get_config
from fish_router.data.bathy import load_bathymetry
from fish_router.data.depth import load_depth_series
from fish_router.data.detections import load_positions, load_signals
from fish_router.routing.tracker import find_shortest_trajectory

app = typer.Typer(help="Reconstruct animal trajectories from detections and depth records")


@app.command()
def run(
    bathy: Path = typer.Option(..., "--bathy", help="Bathymetry GeoTIFF or .npy memmap"),
    signals: Path = typer.Option(..., "--signals", help="CSV receiver x time detection matrix"),
    positions: Path = typer.Option(..., "--positions", help="CSV of receiver x,y positions"),
    depths: Path = typer.Option(..., "--depths", help="CSV of observed depth per time step"),
    grid: Optional[Path] = typer.Option(None, "--grid", help="Grid JSON for .npy bathymetry"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    goal_tol: Optional[int] = typer.Option(None, "--goal-tol", help="Receiver range in pixels"),
    seabed_tol: Optional[float] = typer.Option(None, "--seabed-tol", help="Initial seabed tolerance"),
    seabed_rate: Optional[float] = typer.Option(None, "--seabed-rate", help="Seabed tolerance growth per attempt"),
    benthic_tol: Optional[float] = typer.Option(None, "--benthic-tol", help="Initial benthic tolerance"),
    benthic_rate: Optional[float] = typer.Option(None, "--benthic-rate", help="Benthic tolerance growth per attempt"),
    adapt_steps: Optional[int] = typer.Option(None, "--adapt-steps", help="Extra attempts with widened tolerances"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
) -> None:
    """Find the shortest trajectory through all detections."""
    try:
        cfg = get_config(config).with_overrides(
            goal_tolerance=goal_tol,
            seabed_tolerance=seabed_tol,
            seabed_adapt_rate=seabed_rate,
            benthic_tolerance=benthic_tol,
            benthic_adapt_rate=benthic_rate,
            adaptation_steps=adapt_steps,
        )
        bathymetry = load_bathymetry(bathy, grid, nodata=cfg.raster.nodata, positive_down=cfg.raster.positive_down)
        trajectory = find_shortest_trajectory(
            bathymetry,
            load_signals(signals),
            load_positions(positions),
            load_depth_series(depths),
            cfg,
        )
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for warning in trajectory.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    resolved = int(trajectory.resolved_mask().sum())
    typer.echo(f"Resolved {resolved}/{len(trajectory)} time steps", err=True)
    typer.echo(f"Path length: {trajectory.path_length:.1f} cells, costs: {trajectory.costs:.1f}", err=True)
    if trajectory.gaps():
        typer.echo("Gaps: " + ", ".join(f"{a}-{b}" for a, b in trajectory.gaps()), err=True)

    collection = trajectory.to_feature_collection()
    if output:
        output.write_text(json.dumps(collection, indent=2))
        typer.echo(f"Saved trajectory to {output}")
    else:
        typer.echo(json.dumps(collection, indent=2))
