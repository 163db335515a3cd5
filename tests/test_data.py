from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin

from fish_router.core.grid import GridSpec
from fish_router.core.memmaps import MemMapLoader, save_memmap
from fish_router.data.bathy import Bathymetry, load_bathymetry
from fish_router.data.depth import DepthSeries, load_depth_series
from fish_router.data.detections import load_positions, load_signals


def _write_geotiff(path: Path, data: np.ndarray, nodata: float = -9999.0) -> None:
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=data.shape[0],
        width=data.shape[1],
        count=1,
        dtype="float32",
        crs="EPSG:32633",
        transform=from_origin(100.0, 50.0, 10.0, 10.0),
        nodata=nodata,
    ) as dst:
        dst.write(data.astype(np.float32), 1)


def test_grid_index_round_trip() -> None:
    grid = GridSpec(crs="", dx=10.0, dy=5.0, xmin=100.0, ymax=50.0, width=4, height=3)
    for row in range(3):
        for col in range(4):
            assert grid.grid_index_of(*grid.world_coordinate_of(row, col)) == (row, col)
    assert grid.world_coordinate_of(0, 0) == (105.0, 47.5)
    assert not grid.valid_index(*grid.grid_index_of(99.0, 47.0))


def test_grid_from_transform_and_file(tmp_path: Path) -> None:
    grid = GridSpec.from_transform(from_origin(100.0, 50.0, 10.0, 10.0), 3, 2, "EPSG:32633")
    assert (grid.xmin, grid.ymax, grid.dx, grid.dy) == (100.0, 50.0, 10.0, 10.0)
    assert grid.transform == from_origin(100.0, 50.0, 10.0, 10.0)
    grid.to_file(tmp_path / "grid.json")
    assert GridSpec.from_file(tmp_path / "grid.json") == grid


def test_geotiff_load(tmp_path: Path) -> None:
    data = np.array([[10.0, -9999.0, 5.0], [0.0, 20.0, 30.0]])
    path = tmp_path / "bathy.tif"
    _write_geotiff(path, data)
    bathy = load_bathymetry(path)
    assert bathy.dimensions() == (2, 3)
    assert bathy.depth_at(0, 0) == 10.0
    assert np.isnan(bathy.depth_at(0, 1))
    assert not bathy.is_valid_cell(0, 1)
    assert not bathy.is_valid_cell(1, 0)
    assert bathy.is_valid_cell(1, 2)
    assert bathy.world_coordinate_of(0, 0) == (105.0, 45.0)
    assert bathy.grid_index_of(125.0, 35.0) == (1, 2)


def test_elevation_raster_is_flipped(tmp_path: Path) -> None:
    path = tmp_path / "gebco.tif"
    _write_geotiff(path, np.array([[-40.0, 12.0]]))
    bathy = load_bathymetry(path, positive_down=False)
    assert bathy.depth_at(0, 0) == 40.0
    assert not bathy.is_valid_cell(0, 1)


def test_memmap_round_trip(tmp_path: Path) -> None:
    data = np.arange(6, dtype=np.float32).reshape(2, 3)
    path = tmp_path / "depth.npy"
    save_memmap(path, data)
    loader = MemMapLoader(path)
    assert loader.shape == (2, 3)
    assert np.array_equal(loader.array, data)

    GridSpec(crs="", dx=1.0, dy=1.0, xmin=0.0, ymax=2.0, width=3, height=2).to_file(tmp_path / "depth.grid.json")
    bathy = load_bathymetry(path)
    assert bathy.depth_at(1, 2) == 5.0


def test_missing_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_bathymetry(tmp_path / "nope.tif")
    save_memmap(tmp_path / "d.npy", np.ones((2, 2)))
    with pytest.raises(FileNotFoundError):
        load_bathymetry(tmp_path / "d.npy")


def test_bathymetry_is_read_only() -> None:
    bathy = Bathymetry.from_array(np.full((2, 2), 10.0))
    with pytest.raises(ValueError):
        bathy.depth[0, 0] = 1.0
    with pytest.raises(ValueError):
        Bathymetry.from_array(np.ones(3))


def test_array_nodata_value() -> None:
    bathy = Bathymetry.from_array(np.array([[10.0, -32768.0]]), nodata=-32768)
    assert np.isnan(bathy.depth_at(0, 1))
    assert np.isnan(bathy.depth_at(5, 5))


def test_depth_series(tmp_path: Path) -> None:
    path = tmp_path / "depth.csv"
    path.write_text("depth\n1.5\n2.5\n3.0\n")
    series = load_depth_series(path)
    assert len(series) == 3
    assert series[1] == 2.5
    with pytest.raises(ValueError):
        series.values[0] = 9.0

    plain = tmp_path / "plain.csv"
    plain.write_text("4.0\n5.0\n")
    assert load_depth_series(plain).values.tolist() == [4.0, 5.0]
    assert DepthSeries([1, 2]).values.dtype == np.float64


def test_signal_and_position_files(tmp_path: Path) -> None:
    signals = tmp_path / "signals.csv"
    signals.write_text("1,0,-1\n0,0,1\n")
    assert load_signals(signals).tolist() == [[1, 0, -1], [0, 0, 1]]

    bad = tmp_path / "bad.csv"
    bad.write_text("1,2,0\n")
    with pytest.raises(ValueError):
        load_signals(bad)

    positions = tmp_path / "positions.csv"
    positions.write_text("0.5,1.5\n2.5,0.5\n")
    assert load_positions(positions).tolist() == [[0.5, 1.5], [2.5, 0.5]]
