"""Bathymetry raster access."""

from .fetch import BBox, RasterBathymetry, profile_area, read_raster_from_bytes, read_raster_from_file

__all__ = [
    "BBox",
    "RasterBathymetry",
    "profile_area",
    "read_raster_from_bytes",
    "read_raster_from_file",
]
