from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..errors import InvalidInputShapeError, InvalidRangeCountError, InvalidSourceCountError
from ..geodesy import Geodesy
from ..grid.coords import canonicalize


def build_transects(
    source_lat: float,
    source_lon: float,
    azimuths,
    range_max: float,
    geodesy: Optional[Geodesy] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Start and end points of radial transects around a single source.

    Parameters
    ----------
    source_lat, source_lon : float
        Source position [deg].
    azimuths : array_like
        Bearings of the transects, clockwise from north [deg].
    range_max : float
        Length of every transect [m].
    geodesy : Geodesy, optional
        Solver for the forward geodesic problem (WGS84 by default).

    Returns
    -------
    tuple of ndarray
        ``(P1, P2)``, both ``K x 2`` arrays of ``(lat, lon)`` rows with
        longitudes in signed degrees.
    """
    geodesy = geodesy or Geodesy()

    if np.size(source_lat) > 1 or np.size(source_lon) > 1:
        raise InvalidSourceCountError(int(max(np.size(source_lat), np.size(source_lon))))
    if np.size(range_max) > 1:
        raise InvalidRangeCountError(int(np.size(range_max)))

    az = np.asarray(azimuths)
    if az.dtype.kind not in "iuf" or az.size == 0 or sum(d > 1 for d in az.shape) > 1:
        raise InvalidInputShapeError("azimuths must be a vector of numeric values", shape=az.shape)
    az = az.astype(float).ravel()

    K = az.size
    lat0 = np.full(K, float(np.ravel(source_lat)[0]))
    lon0 = np.full(K, float(np.ravel(source_lon)[0]))
    P1 = np.column_stack([lat0, canonicalize(lon0, "neg")])

    lat2, lon2, _ = geodesy.forward(lat0, lon0, az, float(np.ravel(range_max)[0]))
    P2 = np.column_stack([lat2, canonicalize(lon2, "neg")])
    return P1, P2


__all__ = ["build_transects"]
