import numpy as np
import pytest
import rasterio
from rasterio.io import MemoryFile
from rasterio.transform import Affine, from_origin

from bathyprof.bathy.fetch import (
    BBox,
    RasterBathymetry,
    profile_area,
    read_raster_from_bytes,
    read_raster_from_file,
)
from bathyprof.grid.classify import is_grid


def _profile(data, transform, crs="EPSG:4326", nodata=None):
    return dict(
        driver="GTiff",
        height=data.shape[0],
        width=data.shape[1],
        count=1,
        dtype="float32",
        crs=crs,
        transform=transform,
        nodata=nodata,
    )


def _write(path, data, transform, **kw):
    with rasterio.open(path, "w", **_profile(data, transform, **kw)) as dst:
        dst.write(data.astype("float32"), 1)
    return str(path)


def _lonlat_surface(west=-1.0, north=1.0, res=0.01, n=200):
    lon = west + res * (np.arange(n) + 0.5)
    lat = north - res * (np.arange(n) + 0.5)
    return 100.0 * lon[None, :] + lat[:, None]


def test_profile_area():
    area = profile_area(0.0, 0.0, 1e4)
    assert area.as_bounds() == pytest.approx([-0.1, 0.1, -0.1, 0.1])
    assert isinstance(area, BBox)


def test_fetch_orientation_and_values(tmp_path):
    data = _lonlat_surface()
    path = _write(tmp_path / "bathy.tif", data, from_origin(-1.0, 1.0, 0.01, 0.01))
    with read_raster_from_file(path) as src:
        x, y, Z = RasterBathymetry(src).fetch([-0.5, 0.5, -0.25, 0.25])

    assert x[0] <= -0.5 and x[-1] >= 0.5
    assert y[0] >= 0.25 and y[-1] <= -0.25
    assert np.all(np.diff(x) > 0) and np.all(np.diff(y) < 0)
    assert Z.shape == (y.size, x.size)
    np.testing.assert_allclose(Z, 100.0 * x[None, :] + y[:, None], atol=1e-3)
    X, Y = np.meshgrid(x, y)
    assert is_grid(X, Y, 10)[0]


def test_fetch_flips_south_up_raster(tmp_path):
    data = np.flipud(_lonlat_surface())
    transform = Affine(0.01, 0.0, -1.0, 0.0, 0.01, -1.0)
    path = _write(tmp_path / "south_up.tif", data, transform)
    with read_raster_from_file(path) as src:
        x, y, Z = RasterBathymetry(src).fetch([-0.2, 0.2, -0.2, 0.2])

    assert np.all(np.diff(y) < 0)
    np.testing.assert_allclose(Z, 100.0 * x[None, :] + y[:, None], atol=1e-3)


def test_fetch_nodata_from_bytes():
    data = _lonlat_surface(n=50)
    data[25, 25] = -9999.0
    transform = from_origin(-1.0, 1.0, 0.01, 0.01)
    with MemoryFile() as memfile:
        with memfile.open(**_profile(data, transform, nodata=-9999.0)) as dst:
            dst.write(data.astype("float32"), 1)
        tif_bytes = memfile.read()

    with read_raster_from_bytes(tif_bytes) as src:
        x, y, Z = RasterBathymetry(src).fetch([-0.9, -0.6, 0.6, 0.9])
    assert np.isnan(Z).sum() == 1


def test_fetch_across_antimeridian(tmp_path):
    lon = -180.0 + np.arange(360) + 0.5
    data = np.tile(lon, (180, 1))
    path = _write(tmp_path / "globe.tif", data, from_origin(-180.0, 90.0, 1.0, 1.0))
    with read_raster_from_file(path) as src:
        x, y, Z = RasterBathymetry(src).fetch([170.0, -170.0, -5.0, 5.0])

    jump = int(np.flatnonzero(np.diff(x) < 0)[0])
    assert x[jump] == pytest.approx(179.5) and x[jump + 1] == pytest.approx(-179.5)
    np.testing.assert_allclose(Z[0], x)
    X, Y = np.meshgrid(x, y)
    assert is_grid(X, Y, 12)[0]


def test_rejects_projected_raster(tmp_path):
    data = np.zeros((4, 4))
    path = _write(tmp_path / "utm.tif", data, from_origin(500000.0, 6000000.0, 10.0, 10.0), crs="EPSG:32633")
    with read_raster_from_file(path) as src:
        with pytest.raises(ValueError):
            RasterBathymetry(src)
