from __future__ import annotations

import io
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import rasterio
from rasterio.windows import Window

from ..config import MAX_PIXELS
from ..grid.coords import canonicalize
from ..logging_config import get_logger

logger = get_logger(__name__)

METERS_PER_DEGREE = 111200.0  # metres per degree of latitude


@dataclass
class BBox:
    south: float
    west: float
    north: float
    east: float

    def as_bounds(self) -> List[float]:
        """Return ``[xmin, xmax, ymin, ymax]``."""
        return [self.west, self.east, self.south, self.north]


def profile_area(source_lat: float, source_lon: float, range_max: float) -> BBox:
    """Area around a source large enough to hold transects of ``range_max`` metres.

    Half-widths are rounded up to the next 1/50 degree.
    """
    dlat = np.ceil(range_max / METERS_PER_DEGREE * 50) / 50
    dlon = np.ceil(range_max / (np.cos(np.radians(source_lat)) * METERS_PER_DEGREE) * 50) / 50
    return BBox(
        south=float(source_lat - dlat),
        west=float(canonicalize(source_lon - dlon, "neg")),
        north=float(source_lat + dlat),
        east=float(canonicalize(source_lon + dlon, "neg")),
    )


def read_raster_from_bytes(tif_bytes: bytes):
    return rasterio.open(io.BytesIO(tif_bytes))


def read_raster_from_file(path: str):
    return rasterio.open(path)


def _check_source(src) -> None:
    # Require geographic coordinates
    if src.crs and "4326" not in str(src.crs):
        raise ValueError(
            f"Unsupported CRS for bathy raster: {src.crs}. Expected EPSG:4326 (lat/lon)."
        )
    if src.transform.b != 0 or src.transform.d != 0:
        raise ValueError("Rotated rasters are not supported")


def _span(lo: float, hi: float, origin: float, size: float, n: int) -> Tuple[int, int]:
    """Pixel index range [start, stop) whose centres cover ``[lo, hi]`` plus one pixel each side."""
    a = (lo - origin) / size - 0.5
    b = (hi - origin) / size - 0.5
    i0, i1 = sorted((a, b))
    start = max(0, int(np.floor(i0)) - 1)
    stop = min(n, int(np.ceil(i1)) + 2)
    return start, stop


class RasterBathymetry:
    """Bathymetry provider backed by a single-band EPSG:4326 raster.

    ``fetch`` returns pixel-centre axes (longitudes ascending, latitudes
    descending) and the matching depth matrix, nodata replaced with NaN.
    Areas crossing the antimeridian (``west > east``) are read in two parts
    and joined, so the longitude axis wraps from +180 to -180.
    """

    def __init__(self, src) -> None:
        _check_source(src)
        self.src = src

    def _read(self, west: float, east: float, south: float, north: float):
        t = self.src.transform
        c0, c1 = _span(west, east, t.c, t.a, self.src.width)
        r0, r1 = _span(south, north, t.f, t.e, self.src.height)
        if c1 <= c0 or r1 <= r0:
            raise ValueError(f"Area [{west}, {east}, {south}, {north}] is outside the raster bounds {self.src.bounds}")

        window = Window(c0, r0, c1 - c0, r1 - r0)
        a = self.src.read(1, window=window).astype("float64")
        nodata = self.src.nodata
        if nodata is not None:
            a = np.where(a == nodata, np.nan, a)

        x = t.c + t.a * (np.arange(c0, c1) + 0.5)
        y = t.f + t.e * (np.arange(r0, r1) + 0.5)

        # Re-orient using affine signs to ensure north-up, west-left
        if t.e > 0:
            a = np.flipud(a)
            y = y[::-1]
        if t.a < 0:
            a = np.fliplr(a)
            x = x[::-1]
        return x, y, a

    def fetch(self, bounds: Sequence[float]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Read the area ``[xmin, xmax, ymin, ymax]`` (degrees)."""
        west, east, south, north = (float(v) for v in bounds)
        if south > north:
            raise ValueError("Wrong boundary definition (bottom latitude cannot be higher than top latitude)")

        if west > east:
            xw, y, aw = self._read(west, 180.0, south, north)
            xe, _, ae = self._read(-180.0, east, south, north)
            x = canonicalize(np.concatenate([xw, xe]), "neg")
            a = np.hstack([aw, ae])
        else:
            x, y, a = self._read(west, east, south, north)

        # Size guard
        if a.size > MAX_PIXELS:
            raise ValueError(f"Requested area too large (shape={a.shape}). Shrink the bounds.")

        logger.info("Read bathymetry %dx%d for bounds %s", a.shape[0], a.shape[1], [west, east, south, north])
        return x, y, a


__all__ = [
    "BBox",
    "METERS_PER_DEGREE",
    "profile_area",
    "read_raster_from_bytes",
    "read_raster_from_file",
    "RasterBathymetry",
]
