"""Geodesic forward/inverse problems on the WGS84 ellipsoid.

Thin wrapper over :class:`pyproj.Geod` that speaks ``(lat, lon)`` order,
broadcasts its inputs and returns azimuths in ``[0, 360)`` degrees.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from pyproj import Geod


class Geodesy:
    """Vectorised geodesic solver.

    Parameters
    ----------
    ellps : str
        Ellipsoid name understood by :class:`pyproj.Geod` (default ``"WGS84"``).
    """

    def __init__(self, ellps: str = "WGS84") -> None:
        self.ellps = ellps
        self._geod = Geod(ellps=ellps)

    def __repr__(self) -> str:
        return f"Geodesy(ellps={self.ellps!r})"

    def inverse(self, lat1, lon1, lat2, lon2) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Distance [m] and forward/back azimuths [deg] between two sets of points."""
        lat1, lon1, lat2, lon2 = np.broadcast_arrays(
            *(np.asarray(v, dtype=float) for v in (lat1, lon1, lat2, lon2))
        )
        shape = lat1.shape
        az12, az21, dist = self._geod.inv(lon1.ravel(), lat1.ravel(), lon2.ravel(), lat2.ravel())
        return (
            np.asarray(dist, dtype=float).reshape(shape),
            np.mod(np.asarray(az12, dtype=float), 360.0).reshape(shape),
            np.mod(np.asarray(az21, dtype=float), 360.0).reshape(shape),
        )

    def forward(self, lat1, lon1, azimuth, distance) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """End points ``(lat2, lon2)`` [deg] and back azimuth [deg] of geodesics.

        Longitudes come back in ``[-180, 180]`` as returned by PROJ.
        """
        lat1, lon1, azimuth, distance = np.broadcast_arrays(
            *(np.asarray(v, dtype=float) for v in (lat1, lon1, azimuth, distance))
        )
        shape = lat1.shape
        lon2, lat2, az21 = self._geod.fwd(lon1.ravel(), lat1.ravel(), azimuth.ravel(), distance.ravel())
        return (
            np.asarray(lat2, dtype=float).reshape(shape),
            np.asarray(lon2, dtype=float).reshape(shape),
            np.mod(np.asarray(az21, dtype=float), 360.0).reshape(shape),
        )


__all__ = ["Geodesy"]
