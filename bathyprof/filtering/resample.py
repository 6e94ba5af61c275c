"""Grid resampling with anti-aliasing."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy.signal import convolve2d

from ..errors import InvalidInputShapeError, InvalidResampleFactorError, NotAGridError
from ..grid.classify import is_grid, resolution_step
from ..grid.coords import canonicalize, make_monotonic
from ..grid.interp import sample_by_index
from ..logging_config import get_logger
from ..options import ResampleOptions
from ..types import Direction
from .mask import build_mask

logger = get_logger(__name__)


def _query_positions(n_conv: int, n_out: int, factor: float) -> np.ndarray:
    """0-based positions of ``n_out`` samples centred inside ``n_conv`` samples, ``1/factor`` apart."""
    start = (n_conv - 1) / 2.0 - (n_out - 1) / (2.0 * factor)
    q = start + np.arange(n_out) / factor
    return np.clip(q, 0.0, n_conv - 1)


def resample(
    X,
    Y,
    Z,
    interp_factor: float,
    options: Optional[ResampleOptions] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Resample a grid by ``interp_factor``.

    Parameters
    ----------
    X, Y, Z : ndarray
        Grid matrices (see :func:`bathyprof.grid.classify.is_grid`) and the
        co-sized data grid.
    interp_factor : float
        Ratio between the output and input sampling frequencies. Values
        below 1 downsample, above 1 upsample, 1 returns the input unchanged.
    options : ResampleOptions, optional
        Precision, attenuation class and window family.

    Returns
    -------
    tuple of ndarray
        ``(Xr, Yr, Zr)`` of shape ``(floor((M-1)f+1), floor((N-1)f+1))``.
        ``Xr`` is expressed in signed degrees.

    Notes
    -----
    When downsampling, ``Z`` is convolved (full mode) with a square mask
    designed for the new sampling frequency before interpolation, so the
    borders of the output are attenuated by the zero padding.
    """
    options = options or ResampleOptions()
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
    truegrid, props = is_grid(X, Y, options.precision)
    if not truegrid:
        raise NotAGridError(properties=props)
    if not np.isfinite(interp_factor) or interp_factor <= 0:
        raise InvalidResampleFactorError(interp_factor)

    if interp_factor == 1:
        return X, Y, Z

    Z = Z.astype(float)
    gres0x = resolution_step(X[0, :], Direction.HORIZONTAL, options.precision)
    gres0y = resolution_step(Y[:, 0], Direction.VERTICAL, options.precision)
    gres0 = (gres0x + gres0y) / 2.0
    fs0 = 1.0 / gres0
    fs = fs0 * interp_factor

    if fs < fs0:
        mask = build_mask(fs0, fs, options.attenuation, options.window)
        Zc = convolve2d(Z, mask.weights, mode="full")
        L = mask.rows
    else:
        Zc = Z
        L = 1

    M, N = X.shape
    Mc, Nc = M + L - 1, N + L - 1
    Mr = int(np.floor((M - 1) * interp_factor + 1))
    Nr = int(np.floor((N - 1) * interp_factor + 1))
    logger.debug("Resampling %dx%d -> %dx%d (factor=%s, mask=%d)", M, N, Mr, Nr, interp_factor, L)

    rows = _query_positions(Mc, Mr, interp_factor)
    cols = _query_positions(Nc, Nr, interp_factor)
    Zr = sample_by_index(Zc, rows, cols)

    grid_rows = np.clip(rows - (L - 1) / 2.0, 0.0, M - 1)
    grid_cols = np.clip(cols - (L - 1) / 2.0, 0.0, N - 1)
    Xr = canonicalize(sample_by_index(make_monotonic(X), grid_rows, grid_cols), "neg")
    Yr = sample_by_index(Y, grid_rows, grid_cols)
    return Xr, Yr, Zr


__all__ = ["resample"]
