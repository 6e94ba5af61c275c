import numpy as np
import pytest

from bathyprof.errors import (
    InvalidAttenuationClassError,
    InvalidFrequencyError,
    InvalidWindowFamilyError,
    TargetExceedsSourceError,
    TooManyAxesError,
)
from bathyprof.filtering.mask import (
    build_mask,
    mask_size,
    response,
    response_hann,
    response_rect,
    solve_half_length,
    window_vector,
)


@pytest.mark.parametrize("window", ["rectwin", "hanning"])
@pytest.mark.parametrize("attenuation", [0, 1, 2])
@pytest.mark.parametrize("fs", [50.0, 27.0, [40.0, 12.5]])
def test_mask_is_normalised(window, attenuation, fs):
    mask = build_mask(100.0, fs, attenuation, window)
    assert np.isclose(mask.weights.sum(), 1.0)
    assert np.all(mask.weights >= 0)
    assert mask.rows >= 1 and mask.cols >= 1


def test_solved_length_zeroes_response():
    h = solve_half_length(2.0, 1.0, 1, "rectwin")
    assert abs(response(h, 2.0, 1.0, 1, "rectwin")) < 0.01
    assert 2.0 < h < 3.0


def test_first_null_rectangular_mask():
    mask = build_mask(1.0, 0.5, 0, "rectwin")
    assert mask.shape == (4, 4)
    np.testing.assert_allclose(mask.weights, 1.0 / 16)


def test_two_axis_mask_size():
    rows, cols = mask_size(1.0, [0.5, 0.25], 0, "rectwin")
    assert round(cols) == 4
    assert round(rows) == 8
    assert build_mask(1.0, [0.5, 0.25], 0, "rectwin").shape == (8, 4)


def test_response_wrappers_and_zero_length():
    assert response_rect(0.0, 2.0, 1.0, 1) == np.inf
    assert response_hann(4.0, 2.0, 1.0, 0) == pytest.approx(response(4.0, 2.0, 1.0, 0, "hanning"))


def test_hann_window_has_no_zero_end_points():
    np.testing.assert_allclose(window_vector("hanning", 3), [0.5, 1.0, 0.5])
    np.testing.assert_array_equal(window_vector("rectwin", 3), [1.0, 1.0, 1.0])


def test_mask_errors():
    with pytest.raises(TargetExceedsSourceError):
        response(1.0, 1.0, 2.0)
    with pytest.raises(InvalidAttenuationClassError):
        build_mask(2.0, 1.0, 3)
    with pytest.raises(InvalidWindowFamilyError):
        build_mask(2.0, 1.0, 1, "blackman")
    with pytest.raises(TooManyAxesError):
        mask_size(2.0, [1.0, 1.0, 1.0])


@pytest.mark.parametrize("fs", [0.0, -1.0, np.nan, np.inf])
def test_rejects_invalid_target_frequency(fs):
    with pytest.raises(InvalidFrequencyError) as exc:
        build_mask(2.0, fs)
    assert set(exc.value.details) == {"fs0", "fs"}
    with pytest.raises(InvalidFrequencyError):
        solve_half_length(1.0, fs, 0, "rectwin")
    with pytest.raises(InvalidFrequencyError):
        mask_size(2.0, [1.0, fs])


@pytest.mark.parametrize("fs0", [0.0, -2.0, np.nan])
def test_rejects_invalid_source_frequency(fs0):
    with pytest.raises(InvalidFrequencyError):
        solve_half_length(fs0, 1.0)
