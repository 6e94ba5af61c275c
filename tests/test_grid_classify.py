import numpy as np
import pytest

from bathyprof.errors import InvalidInputShapeError, NotAGridError
from bathyprof.grid.classify import (
    is_grid,
    is_replicated_mesh,
    is_strictly_monotonic,
    is_vectorized_grid,
    reshape_grid_or_scatter,
    resolution_step,
    unmeshgrid,
)
from bathyprof.types import GridProperties


def _grid(nx=21, ny=21, step=0.5):
    x = np.arange(nx) * step
    y = 10.0 - np.arange(ny) * step
    return np.meshgrid(x, y)


def test_regular_grid_is_grid():
    X, Y = _grid()
    truegrid, props = is_grid(X, Y, 12)
    assert truegrid
    assert props == GridProperties(True, True, True)


def test_perturbed_element_breaks_mesh():
    X, Y = _grid()
    X[3, 4] += 0.1
    truegrid, props = is_grid(X, Y, 12)
    assert not truegrid
    assert props == GridProperties(False, False, False)


def test_ascending_latitudes_are_not_monotonic():
    X, Y = _grid()
    truegrid, props = is_grid(X, np.flipud(Y), 12)
    assert not truegrid
    assert props.mesh and not props.monotonic


def test_different_steps_are_not_constant():
    x = np.linspace(0.0, 10.0, 21)
    y = np.linspace(10.0, 0.0, 41)
    X, Y = np.meshgrid(x, y)
    truegrid, props = is_grid(X, Y, 12)
    assert not truegrid
    assert props == GridProperties(True, True, False)


def test_grid_across_antimeridian():
    X, Y = np.meshgrid([179.0, 179.5, -180.0, -179.5, -179.0], [1.0, 0.5, 0.0, -0.5, -1.0])
    truegrid, _ = is_grid(X, Y, 12)
    assert truegrid
    assert resolution_step(X[0], "X", 12) == pytest.approx(0.5)


def test_is_grid_shape_mismatch():
    with pytest.raises(InvalidInputShapeError):
        is_grid(np.zeros((2, 3)), np.zeros((3, 3)), 12)


def test_resolution_step_single_and_pair():
    assert resolution_step(np.linspace(0.0, 1.0, 11), "X", 12) == pytest.approx(0.1)
    assert resolution_step([0.0, 1.0, 3.0], "Y", 12) == (1.0, 2.0)


def test_resolution_step_needs_two_samples():
    with pytest.raises(InvalidInputShapeError):
        resolution_step([1.0], "Y", 12)


def test_mesh_and_monotonic_helpers():
    assert not is_replicated_mesh(np.arange(4.0), "X")
    assert is_strictly_monotonic([170.0, 175.0, -175.0], "X")
    assert not is_strictly_monotonic([0.0, 0.0, 1.0], "X")
    assert is_strictly_monotonic([3.0, 2.0, 1.0], "Y")


def test_unmeshgrid():
    X, Y = _grid(nx=5, ny=3)
    x, y = unmeshgrid(X, Y)
    np.testing.assert_array_equal(x, X[0])
    np.testing.assert_array_equal(y, Y[:, 0])
    with pytest.raises(NotAGridError):
        unmeshgrid(Y, X)


def test_vectorized_grid_recovers_size():
    X, Y = _grid(nx=5, ny=3)
    truegrid, size, props = is_vectorized_grid(X.ravel(), Y.ravel(), 12)
    assert truegrid
    assert size == (3, 5)
    assert all(props)


def test_scattered_vectors_are_not_vectorized_grid():
    assert is_vectorized_grid([0.0, 1.0, 2.5], [0.0, 1.0, 2.0], 12) == (False, None, None)


def test_reshape_grid_or_scatter():
    X, Y = _grid(nx=5, ny=3)
    Z = X + Y
    xr, yr, zr = reshape_grid_or_scatter(X.ravel(), Y.ravel(), Z.ravel(), 12)
    assert xr.shape == (3, 5)
    np.testing.assert_array_equal(zr, Z)

    X[0, 0] = 42.0
    xs, ys, zs = reshape_grid_or_scatter(X, Y, Z, 12)
    assert xs.shape == ys.shape == zs.shape == (15,)
