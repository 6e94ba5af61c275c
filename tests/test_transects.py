import numpy as np
import pytest

from bathyprof.errors import InvalidInputShapeError, InvalidRangeCountError, InvalidSourceCountError
from bathyprof.geodesy import Geodesy
from bathyprof.profiles.transects import build_transects


def test_transect_end_points_lie_at_range():
    geodesy = Geodesy()
    P1, P2 = build_transects(0.0, 0.0, [0, 90, 180, 270], 1000.0, geodesy)
    assert P1.shape == P2.shape == (4, 2)
    np.testing.assert_array_equal(P1, np.zeros((4, 2)))

    dist, az12, _ = geodesy.inverse(P1[:, 0], P1[:, 1], P2[:, 0], P2[:, 1])
    np.testing.assert_allclose(dist, 1000.0, atol=1e-6)
    wrapped = np.mod(az12 - [0.0, 90.0, 180.0, 270.0] + 180.0, 360.0) - 180.0
    np.testing.assert_allclose(wrapped, 0.0, atol=1e-6)

    # 1 km east on the equator is about 0.00898 deg
    assert P2[1, 0] == pytest.approx(0.0, abs=1e-9)
    assert P2[1, 1] == pytest.approx(0.008983, abs=1e-5)


def test_longitudes_are_signed():
    P1, P2 = build_transects(0.0, 190.0, [90.0], 1000.0)
    assert P1[0, 1] == pytest.approx(-170.0)

    _, P2 = build_transects(0.0, 179.999, [90.0], 1000.0)
    assert -180.0 <= P2[0, 1] < 0.0


def test_transect_errors():
    with pytest.raises(InvalidSourceCountError):
        build_transects([0.0, 1.0], 0.0, [0.0], 1000.0)
    with pytest.raises(InvalidRangeCountError):
        build_transects(0.0, 0.0, [0.0], [1000.0, 2000.0])
    with pytest.raises(InvalidInputShapeError):
        build_transects(0.0, 0.0, np.zeros((2, 2)), 1000.0)
    with pytest.raises(InvalidInputShapeError):
        build_transects(0.0, 0.0, ["north"], 1000.0)
