from __future__ import annotations

import numpy as np
from scipy.interpolate import RegularGridInterpolator


def bilinear(x_axis, y_axis, Z, xq, yq) -> np.ndarray:
    """Bilinear sampling of ``Z`` (rows along ``y_axis``, columns along ``x_axis``).

    Axes may be ascending or descending. Queries outside the axes return NaN.
    The result has the broadcast shape of ``xq`` and ``yq``.
    """
    x = np.asarray(x_axis, dtype=float)
    y = np.asarray(y_axis, dtype=float)
    Z = np.asarray(Z, dtype=float)

    if x.size > 1 and x[0] > x[-1]:
        x = x[::-1]
        Z = Z[:, ::-1]
    if y.size > 1 and y[0] > y[-1]:
        y = y[::-1]
        Z = Z[::-1, :]

    xq, yq = np.broadcast_arrays(np.asarray(xq, dtype=float), np.asarray(yq, dtype=float))
    interp = RegularGridInterpolator(
        (y, x),
        Z,
        method="linear",
        bounds_error=False,
        fill_value=np.nan,
    )
    points = np.column_stack([yq.ravel(), xq.ravel()])
    return interp(points).reshape(xq.shape)


def sample_by_index(Z, rows, cols) -> np.ndarray:
    """Bilinear sampling of ``Z`` at fractional (row, col) positions given as 1-D vectors.

    Returns a ``len(rows) x len(cols)`` matrix.
    """
    Z = np.asarray(Z, dtype=float)
    C, R = np.meshgrid(np.asarray(cols, dtype=float), np.asarray(rows, dtype=float))
    return bilinear(np.arange(Z.shape[1]), np.arange(Z.shape[0]), Z, C, R)


__all__ = ["bilinear", "sample_by_index"]
