"""Anti-aliasing masks and grid resampling."""

from .mask import AntiAliasMask, build_mask, mask_size, response, response_hann, response_rect, solve_half_length, window_vector
from .resample import resample

__all__ = [
    "AntiAliasMask",
    "build_mask",
    "mask_size",
    "response",
    "response_hann",
    "response_rect",
    "solve_half_length",
    "window_vector",
    "resample",
]
