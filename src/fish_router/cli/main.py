"""Typer CLI for trajectory reconstruction and preprocessing."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from fish_router.cli import preprocess_cmd, track_cmd

app = typer.Typer(help="Shortest-path trajectory reconstruction over bathymetry")
app.add_typer(track_cmd.app, name="track")
app.add_typer(preprocess_cmd.app, name="preprocess")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search progress")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def config(
    path: Optional[Path] = typer.Argument(None, help="YAML settings file. Omit to show the defaults."),
) -> None:
    """Show the effective tracker configuration."""
    from fish_router.core.config import default_config_path, get_config

    try:
        cfg = get_config(path)
    except (ValueError, TypeError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Source: {path or default_config_path()}")
    typer.echo(json.dumps(cfg.to_dict(), indent=2, default=str))


if __name__ == "__main__":
    app()
