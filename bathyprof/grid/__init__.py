"""Coordinate normalization and grid classification for lon/lat data."""

from .coords import boundaries, boundaries_xy, canonicalize, make_monotonic, shift_above_reference
from .classify import (
    has_constant_step,
    has_constant_step_xy,
    is_grid,
    is_mesh,
    is_replicated_mesh,
    is_strictly_monotonic,
    is_strictly_monotonic_xy,
    is_vectorized_grid,
    reshape_grid_or_scatter,
    resolution_step,
    unmeshgrid,
)
from .interp import bilinear

__all__ = [
    "boundaries",
    "boundaries_xy",
    "canonicalize",
    "make_monotonic",
    "shift_above_reference",
    "has_constant_step",
    "has_constant_step_xy",
    "is_grid",
    "is_mesh",
    "is_replicated_mesh",
    "is_strictly_monotonic",
    "is_strictly_monotonic_xy",
    "is_vectorized_grid",
    "reshape_grid_or_scatter",
    "resolution_step",
    "unmeshgrid",
    "bilinear",
]
