"""Circular longitude utilities.

Longitudes are circular (mod 360) while latitudes are linear. The helpers in
this module reduce longitudes to a canonical range, remove the wraparound
jump from an axis and find the extent of a cluster of points.

Notes
-----
``boundaries`` uses the largest-gap rule: the widest empty arc between two
consecutive (sorted, circular) longitudes is taken as the outside of the
cluster. The rule is only correct when the true span of the data is below
360 degrees; full-globe datasets can yield arbitrary west/east limits.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..errors import InvalidInputShapeError, InvalidReferenceLongitudeError
from ..types import Direction


def canonicalize(lon, mode: str = "neg"):
    """Reduce longitudes to ``[-180, 180)`` (``mode="neg"``) or ``[0, 360)`` (``mode="pos"``).

    Scalars are returned as ``float``; array-likes as ``numpy.ndarray``.
    """
    a = np.asarray(lon, dtype=float)
    if mode == "neg":
        out = np.mod(a + 180.0, 360.0) - 180.0
        out = np.where(out >= 180.0, out - 360.0, out)
    elif mode == "pos":
        out = np.mod(a, 360.0)
        out = np.where(out >= 360.0, out - 360.0, out)
    else:
        raise ValueError(f"Invalid longitude mode {mode!r}; expected 'neg' or 'pos'")
    if out.ndim == 0:
        return float(out)
    return out


def round_to(values, precision: int):
    """Round to ``precision`` decimal positions."""
    return np.round(np.asarray(values, dtype=float), int(precision))


def shift_above_reference(lons, ref_min: float, precision: int) -> np.ndarray:
    """Add 360 degrees to every longitude lower than the west limit ``ref_min``.

    ``lons`` is first expressed in the convention of ``ref_min`` (signed when
    ``-180 <= ref_min < 0``, positive when ``0 <= ref_min < 360``). The
    comparison is made on values rounded to ``precision`` decimals so that a
    sample sitting on the limit is not pushed a full turn east.
    """
    if -180.0 <= ref_min < 0.0:
        a = np.atleast_1d(canonicalize(lons, "neg"))
    elif 0.0 <= ref_min < 360.0:
        a = np.atleast_1d(canonicalize(lons, "pos"))
    else:
        raise InvalidReferenceLongitudeError(ref_min)

    a = np.array(a, dtype=float)
    below = round_to(a, precision) < round_to(ref_min, precision)
    a[below] += 360.0
    return a


def _is_row_mesh(a: np.ndarray) -> bool:
    return a.ndim == 2 and min(a.shape) > 1 and bool(np.array_equal(np.broadcast_to(a[0, :], a.shape), a))


def _is_col_mesh(a: np.ndarray) -> bool:
    return a.ndim == 2 and min(a.shape) > 1 and bool(np.array_equal(np.broadcast_to(a[:, :1], a.shape), a))


def make_monotonic(axis) -> np.ndarray:
    """Remove the circular jump from a longitude axis.

    Every value after the first negative step gets +360, e.g.
    ``[100, 160, 180, -160, -100, 20] -> [100, 160, 180, 200, 260, 380]``.
    A horizontal mesh matrix is handled through its first row and returned
    as a mesh of the same shape.
    """
    a = np.asarray(axis, dtype=float)
    is_mesh = _is_row_mesh(a)
    if a.ndim == 2 and not is_mesh and min(a.shape) > 1:
        raise InvalidInputShapeError("X has to be a horizontal mesh matrix or its former vector", shape=a.shape)

    x = np.array(a[0, :] if is_mesh else a.ravel(), dtype=float)
    negative = np.flatnonzero(np.diff(x) < 0)
    if negative.size:
        x[negative[0] + 1:] += 360.0

    if is_mesh:
        return np.tile(x, (a.shape[0], 1))
    return x.reshape(a.shape)


def _former_vector(a: np.ndarray, direction: Direction) -> np.ndarray:
    if a.ndim == 2 and min(a.shape) > 1:
        if direction is Direction.HORIZONTAL and _is_row_mesh(a):
            return a[0, :]
        if direction is Direction.VERTICAL and _is_col_mesh(a):
            return a[:, 0]
    return a.ravel()


def _horizontal_limits(a: np.ndarray, precision: int) -> Tuple[float, float]:
    a = np.sort(a.ravel())
    gap = canonicalize(np.diff(np.concatenate(([a[-1]], a))), "pos")
    gap = round_to(gap, precision)
    ind = int(np.argmax(gap))
    if ind == 0:
        # widest gap between the last and first sample
        return float(a[0]), float(a[-1])
    return float(a[ind]), float(a[ind - 1])


def boundaries(values, direction, precision: int) -> Tuple[float, float]:
    """West/east (horizontal) or south/north (vertical) limits of a set of positions."""
    direction = Direction(direction)
    a = np.asarray(values, dtype=float)
    if a.size == 0:
        raise InvalidInputShapeError("Cannot compute boundaries of an empty set", shape=a.shape)
    a = _former_vector(a, direction)
    if direction is Direction.HORIZONTAL:
        return _horizontal_limits(a, precision)
    return float(np.min(a)), float(np.max(a))


def boundaries_xy(x, y, precision: int) -> Tuple[float, float, float, float]:
    """Return ``(west, east, south, north)`` for a joint set of positions."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    both_vectors = x.ndim <= 1 and y.ndim <= 1
    if not both_vectors and x.shape != y.shape:
        raise InvalidInputShapeError(
            "1st and 2nd input arguments have to be matrices the same size or vectors",
            x_shape=x.shape,
            y_shape=y.shape,
        )
    if both_vectors:
        a, b = x.ravel(), y.ravel()
    elif _is_row_mesh(x) and _is_col_mesh(y):
        a, b = x[0, :], y[:, 0]
    else:
        a, b = x.ravel(), y.ravel()
    if a.size == 0 or b.size == 0:
        raise InvalidInputShapeError("Cannot compute boundaries of an empty set", x_shape=x.shape, y_shape=y.shape)
    west, east = _horizontal_limits(a, precision)
    return west, east, float(np.min(b)), float(np.max(b))


__all__ = [
    "canonicalize",
    "round_to",
    "shift_above_reference",
    "make_monotonic",
    "boundaries",
    "boundaries_xy",
]
