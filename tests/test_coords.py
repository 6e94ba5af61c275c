import os
import sys

import numpy as np
import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bathyprof.errors import InvalidInputShapeError, InvalidReferenceLongitudeError
from bathyprof.grid.coords import (
    boundaries,
    boundaries_xy,
    canonicalize,
    make_monotonic,
    shift_above_reference,
)


def test_canonicalize_edges():
    assert canonicalize(180.0, "neg") == -180.0
    assert canonicalize(-180.0, "neg") == -180.0
    assert canonicalize(360.0, "pos") == 0.0
    assert canonicalize(-10.0, "pos") == 350.0
    assert canonicalize(190.0, "neg") == -170.0


def test_canonicalize_ranges_and_consistency():
    lon = np.linspace(-720.0, 720.0, 97)
    neg = canonicalize(lon, "neg")
    pos = canonicalize(lon, "pos")
    assert np.all((neg >= -180.0) & (neg < 180.0))
    assert np.all((pos >= 0.0) & (pos < 360.0))
    np.testing.assert_allclose(canonicalize(pos, "neg"), neg, atol=1e-9)


def test_canonicalize_rejects_unknown_mode():
    with pytest.raises(ValueError):
        canonicalize(10.0, "east")


def test_make_monotonic_vector():
    x = np.array([100.0, 160.0, 180.0, -160.0, -100.0, 20.0])
    np.testing.assert_array_equal(make_monotonic(x), [100.0, 160.0, 180.0, 200.0, 260.0, 380.0])


def test_make_monotonic_keeps_increasing_axis():
    x = np.array([-3.0, -2.0, -1.0])
    np.testing.assert_array_equal(make_monotonic(x), x)


def test_make_monotonic_mesh():
    X, _ = np.meshgrid([179.0, 179.5, -180.0, -179.5], [1.0, 0.5, 0.0])
    Xm = make_monotonic(X)
    assert Xm.shape == X.shape
    np.testing.assert_array_equal(Xm[2], [179.0, 179.5, 180.0, 180.5])


def test_boundaries_across_antimeridian():
    assert boundaries([170.0, 175.0, -175.0, -170.0], "X", 12) == (170.0, -170.0)


def test_boundaries_plain_cluster():
    assert boundaries([10.0, 30.0, 20.0], "X", 12) == (10.0, 30.0)
    assert boundaries([5.0, -3.0, 2.0], "Y", 12) == (-3.0, 5.0)


def test_boundaries_xy_mesh():
    X, Y = np.meshgrid([-1.0, 0.0, 1.0], [2.0, 1.0])
    assert boundaries_xy(X, Y, 12) == (-1.0, 1.0, 1.0, 2.0)


def test_boundaries_xy_shape_mismatch():
    with pytest.raises(InvalidInputShapeError):
        boundaries_xy(np.zeros((2, 3)), np.zeros((3, 2)), 12)


def test_shift_above_reference():
    np.testing.assert_array_equal(shift_above_reference([-175.0, 170.0], 170.0, 12), [185.0, 170.0])
    np.testing.assert_array_equal(shift_above_reference([-20.0, 5.0], -10.0, 12), [340.0, 5.0])


def test_shift_above_reference_rounds_to_precision():
    # within 10^-12 of the west limit: treated as on the limit
    on_limit = shift_above_reference([10.0 - 1e-13], 10.0, 12)
    np.testing.assert_array_equal(on_limit, [10.0 - 1e-13])
    # beyond the rounding tolerance: a full turn east
    below = shift_above_reference([10.0 - 1e-9], 10.0, 12)
    np.testing.assert_allclose(below, [370.0 - 1e-9], rtol=0, atol=1e-10)
    # a coarser precision absorbs the same offset
    np.testing.assert_array_equal(shift_above_reference([10.0 - 1e-9], 10.0, 6), [10.0 - 1e-9])


def test_shift_above_reference_invalid_reference():
    with pytest.raises(InvalidReferenceLongitudeError):
        shift_above_reference([0.0], 400.0, 12)
