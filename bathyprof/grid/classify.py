"""Grid classification for geodetic positions.

A *grid* is a pair of ``meshgrid``-style matrices ``(X, Y)`` whose former
vectors are strictly monotonic (east-increasing longitude once the circular
jump is removed, south-decreasing latitude) and whose resolution step is the
same in both directions within ``precision`` decimals. Anything else is
scattered data.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from ..errors import InvalidInputShapeError, NotAGridError
from ..types import Direction, GridProperties
from .coords import boundaries, canonicalize, make_monotonic, round_to, shift_above_reference

Step = Union[float, Tuple[float, float]]


def _is_matrix(a: np.ndarray) -> bool:
    return a.ndim == 2 and min(a.shape) > 1


def _is_vector(a: np.ndarray) -> bool:
    return a.ndim == 1 or (a.ndim == 2 and min(a.shape) == 1)


def is_replicated_mesh(A, direction) -> bool:
    """True if every row (``X``) or every column (``Y``) of ``A`` equals the first one."""
    direction = Direction(direction)
    a = np.asarray(A)
    if not _is_matrix(a):
        return False
    if direction is Direction.HORIZONTAL:
        return bool(np.array_equal(np.broadcast_to(a[0, :], a.shape), a))
    return bool(np.array_equal(np.broadcast_to(a[:, :1], a.shape), a))


def is_mesh(X, Y) -> bool:
    X = np.asarray(X)
    Y = np.asarray(Y)
    if X.shape != Y.shape:
        return False
    return is_replicated_mesh(X, Direction.HORIZONTAL) and is_replicated_mesh(Y, Direction.VERTICAL)


def unmeshgrid(X, Y) -> Tuple[np.ndarray, np.ndarray]:
    """Return the former vectors ``(x, y)`` of a ``meshgrid`` pair."""
    X = np.asarray(X, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if not is_mesh(X, Y):
        raise NotAGridError("Invalid meshgrid type matrices (X, Y)")
    return X[0, :].copy(), Y[:, 0].copy()


def _former_vector(axis, direction: Direction) -> Optional[np.ndarray]:
    """Vector behind ``axis``; ``None`` for matrices that are not a mesh in ``direction``."""
    a = np.asarray(axis, dtype=float)
    if a.ndim <= 1 or _is_vector(a):
        return a.ravel()
    if not is_replicated_mesh(a, direction):
        return None
    return a[0, :] if direction is Direction.HORIZONTAL else a[:, 0]


def is_strictly_monotonic(axis, direction) -> bool:
    """Horizontal axes must increase eastward across the antimeridian, vertical ones decrease southward."""
    direction = Direction(direction)
    a = _former_vector(axis, direction)
    if a is None:
        return False
    if direction is Direction.HORIZONTAL:
        a = make_monotonic(canonicalize(a, "pos"))
        return bool(np.all(np.diff(a) > 0))
    return bool(np.all(np.diff(a) < 0))


def is_strictly_monotonic_xy(x, y) -> bool:
    return is_strictly_monotonic(x, Direction.HORIZONTAL) and is_strictly_monotonic(y, Direction.VERTICAL)


def resolution_step(axis, direction, precision: int) -> Step:
    """Resolution step of a horizontal or vertical axis.

    Parameters
    ----------
    axis : array_like
        Former vector of a mesh (or the mesh matrix itself).
    direction : Direction or {"X", "Y"}
        Horizontal axes are first shifted above their west boundary so that
        the antimeridian jump does not show up as a step.
    precision : int
        Decimal positions used to compare the individual steps.

    Returns
    -------
    float or tuple of float
        The high-precision step ``(a[-1] - a[0]) / (L - 1)`` when every
        rounded step is the same, otherwise the ``(min, max)`` pair of
        rounded steps.
    """
    direction = Direction(direction)
    a = _former_vector(axis, direction)
    if a is None:
        a = np.asarray(axis, dtype=float).ravel()
    if a.size < 2:
        raise InvalidInputShapeError("At least two positions are needed to compute a resolution step", shape=a.shape)

    if direction is Direction.HORIZONTAL:
        west, _ = boundaries(a, Direction.HORIZONTAL, precision)
        a = shift_above_reference(a, canonicalize(west, "neg"), precision)
    a = np.sort(a)

    steps = round_to(np.abs(np.diff(a)), precision)
    smin, smax = float(np.min(steps)), float(np.max(steps))
    if smin == smax:
        return float((a[-1] - a[0]) / (a.size - 1))
    return smin, smax


def has_constant_step(axis, direction, precision: int) -> bool:
    return not isinstance(resolution_step(axis, direction, precision), tuple)


def has_constant_step_xy(x, y, precision: int) -> bool:
    """True when both axes have a constant step and the two steps agree within ``precision`` decimals."""
    gx = resolution_step(x, Direction.HORIZONTAL, precision)
    gy = resolution_step(y, Direction.VERTICAL, precision)
    if isinstance(gx, tuple) or isinstance(gy, tuple):
        return False
    return bool(round_to(gx, precision) == round_to(gy, precision))


def is_grid(X, Y, precision: int) -> Tuple[bool, GridProperties]:
    """Classify ``(X, Y)`` as a grid.

    Returns the overall verdict together with the individual
    ``GridProperties`` flags. Non-mesh input reports ``False`` for all three.
    """
    X = np.asarray(X, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if X.shape != Y.shape:
        raise InvalidInputShapeError("X and Y have to be matrices the same size", x_shape=X.shape, y_shape=Y.shape)

    if is_mesh(X, Y):
        x, y = X[0, :], Y[:, 0]
        props = GridProperties(
            mesh=True,
            monotonic=is_strictly_monotonic_xy(x, y),
            constant_step=has_constant_step_xy(x, y, precision),
        )
    else:
        props = GridProperties(mesh=False, monotonic=False, constant_step=False)
    return all(props), props


def _period(x: np.ndarray) -> int:
    """Smallest N such that ``x`` repeats every N samples and N divides its length."""
    L = x.size
    for n in np.flatnonzero(x[1:] == x[0]) + 1:
        n = int(n)
        if L % n == 0 and np.array_equal(x[n:], x[:-n]):
            return n
    return L


def is_vectorized_grid(x, y, precision: int):
    """Detect a grid flattened row by row into two vectors.

    Returns ``(truegrid, (M, N), properties)``. The size and properties are
    ``None`` when ``x`` shows no repetition at all.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape or not _is_vector(x) or not _is_vector(y):
        return False, None, None

    x = x.ravel()
    y = y.ravel()
    N = _period(x)
    if N >= x.size:
        return False, None, None

    M = x.size // N
    truegrid, props = is_grid(x.reshape(M, N), y.reshape(M, N), precision)
    return truegrid, (M, N), props


def reshape_grid_or_scatter(x, y, z, precision: int):
    """Bring ``(x, y, z)`` to the layout the rest of the package expects.

    Vectorized grids are reshaped into matrices; matrices holding scattered
    data are flattened row by row into vectors. Other input is returned as is.
    """
    x = np.asarray(x)
    y = np.asarray(y)
    z = np.asarray(z)
    if not (x.shape == y.shape == z.shape):
        raise InvalidInputShapeError(
            "x, y and z must be matrices or vectors the same size",
            x_shape=x.shape,
            y_shape=y.shape,
            z_shape=z.shape,
        )

    if _is_vector(x):
        truegrid, size, _ = is_vectorized_grid(x, y, precision)
        if truegrid:
            return x.reshape(size), y.reshape(size), z.reshape(size)
        return x, y, z

    truegrid, _ = is_grid(x, y, precision)
    if not truegrid:
        return x.ravel(), y.ravel(), z.ravel()
    return x, y, z


__all__ = [
    "is_replicated_mesh",
    "is_mesh",
    "unmeshgrid",
    "is_strictly_monotonic",
    "is_strictly_monotonic_xy",
    "resolution_step",
    "has_constant_step",
    "has_constant_step_xy",
    "is_grid",
    "is_vectorized_grid",
    "reshape_grid_or_scatter",
]
