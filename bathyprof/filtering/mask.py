"""Anti-aliasing mask design.

The mask is a separable 2-D window whose length is chosen so that its
response at the Nyquist frequency of the target grid (``fs/2``) hits a
given attenuation class. The window response is modelled empirically as
``k(h)/h`` where ``h`` is the window length in samples; the length is found
by bisection on ``k(h)/h - fs/(2*fs0)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np
from scipy.signal import windows

from ..config import DEFAULT_ATTENUATION, DEFAULT_WINDOW
from ..errors import (
    InvalidFrequencyError,
    InvalidInputShapeError,
    RootBracketInvalidError,
    TargetExceedsSourceError,
    TooManyAxesError,
)
from ..logging_config import get_logger
from ..types import AttenuationClass, WindowFamily

logger = get_logger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-3


def _k_rect(h, attenuation: AttenuationClass):
    if attenuation is AttenuationClass.FIRST_NULL:
        return np.ones_like(h)
    if attenuation is AttenuationClass.MINUS_6DB:
        return 1.0 / (2.0 * (h + 0.5) ** 2.3) + 0.6
    return 1.0 / (2.0 * (h + 1.0) ** 2.1) + 0.44


def _k_hann(h, attenuation: AttenuationClass):
    if attenuation is AttenuationClass.FIRST_NULL:
        return 1.956 - 0.5634 * np.exp(-0.1065 * h)
    if attenuation is AttenuationClass.MINUS_6DB:
        return 0.991 - 0.23 * np.exp(-0.074 * h)
    return 0.711 - 0.1656 * np.exp(-0.08 * h)


_K_MODELS: Dict[WindowFamily, Callable] = {
    WindowFamily.RECTANGULAR: _k_rect,
    WindowFamily.HANN: _k_hann,
}


def response(half_len, fs0: float, fs: float, attenuation=DEFAULT_ATTENUATION, window=DEFAULT_WINDOW):
    """Modelled window response minus the target cutoff, ``k(h)/h - fs/(2*fs0)``.

    ``h = 0`` evaluates to ``+inf``.
    """
    attenuation = AttenuationClass.parse(attenuation)
    window = WindowFamily.parse(window)
    if fs > fs0:
        raise TargetExceedsSourceError(fs0, fs)

    h = np.asarray(half_len, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        y = _K_MODELS[window](h, attenuation) / h - fs / (2.0 * fs0)
    if y.ndim == 0:
        return float(y)
    return y


def response_rect(half_len, fs0: float, fs: float, attenuation=DEFAULT_ATTENUATION):
    return response(half_len, fs0, fs, attenuation, WindowFamily.RECTANGULAR)


def response_hann(half_len, fs0: float, fs: float, attenuation=DEFAULT_ATTENUATION):
    return response(half_len, fs0, fs, attenuation, WindowFamily.HANN)


def solve_half_length(fs0: float, fs: float, attenuation=DEFAULT_ATTENUATION, window=DEFAULT_WINDOW) -> float:
    """Window length (in samples, not rounded) whose response matches ``fs/(2*fs0)``."""
    attenuation = AttenuationClass.parse(attenuation)
    window = WindowFamily.parse(window)
    if not (np.isfinite(fs0) and np.isfinite(fs)) or fs0 <= 0 or fs <= 0:
        raise InvalidFrequencyError(fs0, fs)

    a = 0.0
    b = 4.0 * fs0 / fs
    fa = response(a, fs0, fs, attenuation, window)
    fb = response(b, fs0, fs, attenuation, window)
    if fa * fb > 0:
        raise RootBracketInvalidError(a, b, fa, fb)

    x = (a + b) / 2.0
    err = abs(a - b) / 2.0
    cnt = 0
    while err > TOLERANCE and cnt < MAX_ITERATIONS:
        fx = response(x, fs0, fs, attenuation, window)
        if fx * fa < 0:
            b = x
        else:
            a = x
        x = (a + b) / 2.0
        err = abs(a - b) / 2.0
        cnt += 1
    return x


def mask_size(fs0: float, fs, attenuation=DEFAULT_ATTENUATION, window=DEFAULT_WINDOW) -> Tuple[float, float]:
    """Unrounded mask size ``(rows, cols)``.

    ``fs`` is a single target frequency (square mask) or ``[fsx, fsy]``:
    ``fsx`` sets the number of columns and ``fsy`` the number of rows.
    """
    attenuation = AttenuationClass.parse(attenuation)
    window = WindowFamily.parse(window)

    targets = np.atleast_1d(np.asarray(fs, dtype=float)).ravel()
    if targets.size == 0:
        raise InvalidInputShapeError("At least one target sampling frequency is required", shape=targets.shape)
    if targets.size > 2:
        raise TooManyAxesError(int(targets.size))

    lengths = [solve_half_length(fs0, float(f), attenuation, window) for f in targets]
    if len(lengths) == 1:
        return lengths[0], lengths[0]
    cols, rows = lengths
    return rows, cols


def window_vector(window, length: int) -> np.ndarray:
    """1-D window of ``length`` samples. The Hann window excludes its zero end points."""
    window = WindowFamily.parse(window)
    length = int(length)
    if window is WindowFamily.RECTANGULAR:
        return windows.boxcar(length)
    return windows.hann(length + 2, sym=True)[1:-1]


@dataclass(frozen=True)
class AntiAliasMask:
    """Normalised 2-D anti-aliasing mask."""

    weights: np.ndarray
    attenuation: AttenuationClass
    window: WindowFamily

    @property
    def shape(self) -> Tuple[int, int]:
        return self.weights.shape

    @property
    def rows(self) -> int:
        return self.weights.shape[0]

    @property
    def cols(self) -> int:
        return self.weights.shape[1]


def _round_half_up(x: float) -> int:
    return max(1, int(np.floor(x + 0.5)))


def build_mask(
    fs0: float,
    fs: Union[float, Sequence[float]],
    attenuation=DEFAULT_ATTENUATION,
    window=DEFAULT_WINDOW,
) -> AntiAliasMask:
    """Design the anti-aliasing mask for resampling from ``fs0`` down to ``fs``.

    Parameters
    ----------
    fs0 : float
        Sampling frequency of the source grid [1/deg].
    fs : float or sequence of float
        Target sampling frequency, or ``[fsx, fsy]`` for a rectangular mask.
    attenuation : AttenuationClass or int
        0 (first null), 1 (-6 dB) or 2 (-3 dB) at ``fs/2``.
    window : WindowFamily or str
        ``"rectwin"`` or ``"hanning"``.

    Returns
    -------
    AntiAliasMask
        Outer product of the vertical and horizontal windows, normalised so
        the weights sum to 1.
    """
    attenuation = AttenuationClass.parse(attenuation)
    window = WindowFamily.parse(window)

    rows, cols = mask_size(fs0, fs, attenuation, window)
    M = _round_half_up(rows)
    N = _round_half_up(cols)
    w2d = np.outer(window_vector(window, M), window_vector(window, N))
    weights = w2d / w2d.sum()
    logger.debug("Mask %s/%s: %dx%d (fs0=%s, fs=%s)", window.value, attenuation.name, M, N, fs0, fs)
    return AntiAliasMask(weights=weights, attenuation=attenuation, window=window)


__all__ = [
    "response",
    "response_rect",
    "response_hann",
    "solve_half_length",
    "mask_size",
    "window_vector",
    "AntiAliasMask",
    "build_mask",
]
