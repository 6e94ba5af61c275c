"""Bathymetry profiles along geodesic transects.

Each transect is sampled every ``range_step`` metres by solving the direct
geodesic problem from its start point. Before sampling, the grid is low-pass
filtered with an anti-aliasing mask whenever the spacing between profile
samples is coarser than the grid resolution. The cutoff is derived from the
largest step of the call, measured at the two extreme latitudes of the grid
and averaged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np
from scipy.signal import convolve2d

from ..errors import (
    InvalidInputShapeError,
    InvalidRangeStepError,
    NotAGridError,
    TransectOutOfBoundsError,
)
from ..filtering.mask import AntiAliasMask, build_mask
from ..geodesy import Geodesy
from ..grid.classify import is_grid, resolution_step
from ..grid.coords import boundaries_xy, canonicalize, make_monotonic, shift_above_reference
from ..grid.interp import bilinear
from ..logging_config import get_logger
from ..options import ProfileOptions
from ..types import Diagnostic, Direction, TransectMode

logger = get_logger(__name__)


@dataclass(frozen=True)
class Profile:
    """Samples of one transect.

    ``lon`` is in signed degrees, ``distance`` in metres from the start
    point and ``depth`` in the units of the input data grid (NaN where the
    grid has no value).
    """

    azimuth: float
    range_m: float
    lon: np.ndarray
    lat: np.ndarray
    distance: np.ndarray
    depth: np.ndarray

    @property
    def n_points(self) -> int:
        return int(self.distance.size)

    def records(self) -> Iterator[Tuple[float, float, float, float]]:
        """Yield ``(lon, lat, distance, depth)`` per sample."""
        for row in zip(self.lon, self.lat, self.distance, self.depth):
            yield tuple(float(v) for v in row)


@dataclass(frozen=True)
class ProfileResult:
    profiles: List[Profile]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    filtered: bool = False
    mask: Optional[AntiAliasMask] = None


def _sample_counts(ranges: np.ndarray, range_step: float, mode: TransectMode) -> Tuple[np.ndarray, np.ndarray]:
    if mode is TransectMode.NORMAL:
        n = np.floor(ranges / range_step).astype(int) + 1
        steps = np.full(ranges.shape, float(range_step))
    else:
        n = np.floor(ranges / range_step + 0.5).astype(int) + 1
        steps = np.full(ranges.shape, float(range_step))
        multi = n > 1
        steps[multi] = ranges[multi] / (n[multi] - 1)
    return n, steps


def _sampling_step_deg(geodesy: Geodesy, minlat: float, maxlat: float, step_m: float) -> Tuple[float, float]:
    """Angular size of ``step_m`` eastward and northward, averaged over the two extreme latitudes."""
    lats = np.array([minlat, maxlat])
    _, lon_e, _ = geodesy.forward(lats, 0.0, 90.0, step_m)
    lat_n, _, _ = geodesy.forward(lats, 0.0, 0.0, step_m)
    gresx = float(np.mean(lon_e))
    gresy = float(np.mean(lat_n - lats))
    return gresx, gresy


def extract_profiles(
    X,
    Y,
    Z,
    P1,
    P2,
    range_step: float,
    options: Optional[ProfileOptions] = None,
    geodesy: Optional[Geodesy] = None,
) -> ProfileResult:
    """Extract one bathymetry profile per ``(P1[k], P2[k])`` transect.

    Parameters
    ----------
    X, Y, Z : ndarray
        Grid of longitudes, latitudes and depths (see ``is_grid``).
    P1, P2 : array_like
        ``K x 2`` arrays of ``(lat, lon)`` start and end points.
    range_step : float
        Distance between samples [m]. In ``adjust`` mode it is recomputed
        per transect so that the last sample falls on the end point.
    options : ProfileOptions, optional
        Transect mode, precision, mask design and point limit.
    geodesy : Geodesy, optional
        Geodesic solver (WGS84 by default).

    Returns
    -------
    ProfileResult
        Profiles in transect order, advisory diagnostics and the mask used
        (``None`` when the grid was sampled without filtering).
    """
    options = options or ProfileOptions()
    geodesy = geodesy or Geodesy()
    R = options.precision

    X = np.asarray(X, dtype=float)
    Y = np.asarray(Y, dtype=float)
    Z = np.asarray(Z)
    if not (X.shape == Y.shape == Z.shape):
        raise InvalidInputShapeError(
            "X, Y, Z have to be matrices the same size",
            x_shape=X.shape,
            y_shape=Y.shape,
            z_shape=Z.shape,
        )
    truegrid, props = is_grid(X, Y, R)
    if not truegrid:
        raise NotAGridError(properties=props)

    P1 = np.asarray(P1, dtype=float)
    P2 = np.asarray(P2, dtype=float)
    if P1.shape != P2.shape or P1.ndim != 2 or P1.shape[1] != 2:
        raise InvalidInputShapeError(
            "P1 and P2 must be two column arrays of the same size",
            p1_shape=P1.shape,
            p2_shape=P2.shape,
        )
    if P1.shape[0] == 0:
        raise InvalidInputShapeError("At least one transect is required", p1_shape=P1.shape, p2_shape=P2.shape)
    if not np.isfinite(range_step) or range_step <= 0:
        raise InvalidRangeStepError(range_step)

    if Z.dtype.kind in "biu":
        Z = Z.astype(float)

    src_lat, src_lon = P1[:, 0], P1[:, 1]
    rec_lat, rec_lon = P2[:, 0], P2[:, 1]
    K = src_lat.size

    Xm = make_monotonic(canonicalize(X, "neg"))
    minlon, maxlon, minlat, maxlat = boundaries_xy(Xm, Y, R)

    src_lon = shift_above_reference(src_lon, minlon, R)
    rec_lon = shift_above_reference(rec_lon, minlon, R)
    required = boundaries_xy(
        np.concatenate([src_lon, rec_lon]),
        np.concatenate([src_lat, rec_lat]),
        R,
    )
    minlon0, maxlon0, minlat0, maxlat0 = required
    if minlon0 < minlon or maxlon0 > maxlon or minlat0 < minlat or maxlat0 > maxlat:
        raise TransectOutOfBoundsError(required, (minlon, maxlon, minlat, maxlat))

    ranges, bearings, _ = geodesy.inverse(src_lat, src_lon, rec_lat, rec_lon)
    n_points, steps = _sample_counts(ranges, range_step, options.mode)

    diagnostics: List[Diagnostic] = []
    if int(n_points.max()) > options.max_points:
        over = [int(k) for k in np.flatnonzero(n_points > options.max_points)]
        min_step = float(ranges.max()) / options.max_points
        message = (
            f"The number of points in transects {over} exceeds the maximum of {options.max_points}. "
            f"Use a range step > {min_step:.3f} m"
        )
        logger.warning(message)
        diagnostics.append(
            Diagnostic(
                kind="PointCountExceeded",
                message=message,
                details={"transects": over, "max_points": options.max_points, "min_step": min_step},
            )
        )

    distances = []
    positions = []
    for k in range(K):
        d = np.arange(n_points[k]) * steps[k]
        if options.mode is TransectMode.ADJUST and n_points[k] > 1:
            d[-1] = ranges[k]
        lat, lon, _ = geodesy.forward(src_lat[k], src_lon[k], bearings[k], d)
        distances.append(d)
        positions.append((lat, shift_above_reference(lon, minlon, R)))

    gres0 = (
        resolution_step(Xm[0, :], Direction.HORIZONTAL, R) + resolution_step(Y[:, 0], Direction.VERTICAL, R)
    ) / 2.0
    fs0 = 1.0 / gres0

    mask = None
    x_axis, y_axis, Zc = Xm[0, :], Y[:, 0], Z
    gresx, gresy = _sampling_step_deg(geodesy, minlat, maxlat, float(steps.max()))
    fsx, fsy = 1.0 / gresx, 1.0 / gresy
    if fsx < fs0 or fsy < fs0:
        mask = build_mask(fs0, [min(fsx, fs0), min(fsy, fs0)], options.attenuation, options.window)
        Ly, Lx = mask.shape
        M, N = X.shape
        Zc = convolve2d(Z.astype(float), mask.weights, mode="full")
        x_axis = Xm[0, 0] + gres0 * np.arange(N + Lx - 1) - gres0 * (Lx - 1) / 2.0
        y_axis = Y[0, 0] - gres0 * np.arange(M + Ly - 1) + gres0 * (Ly - 1) / 2.0
    logger.debug("fs0=%.6f fsx=%.6f fsy=%.6f filtered=%s", fs0, fsx, fsy, mask is not None)

    profiles = []
    for k in range(K):
        lat, lon = positions[k]
        depth = bilinear(x_axis, y_axis, Zc, lon, lat)
        profiles.append(
            Profile(
                azimuth=float(bearings[k]),
                range_m=float(ranges[k]),
                lon=canonicalize(lon, "neg"),
                lat=lat,
                distance=distances[k],
                depth=depth,
            )
        )

    return ProfileResult(profiles=profiles, diagnostics=diagnostics, filtered=mask is not None, mask=mask)


__all__ = ["Profile", "ProfileResult", "extract_profiles"]
