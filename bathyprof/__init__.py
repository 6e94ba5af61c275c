"""Geodetic grid classification, resampling and bathymetry profile extraction."""

from .errors import *  # noqa: F401,F403
from .errors import __all__ as _errors_all
from .filtering import AntiAliasMask, build_mask, resample
from .geodesy import Geodesy
from .grid import boundaries, boundaries_xy, canonicalize, is_grid, make_monotonic
from .options import ProfileOptions, ResampleOptions, load_options_from_yaml
from .profiles import Profile, ProfileResult, build_transects, extract_profiles
from .types import AttenuationClass, Diagnostic, Direction, GridProperties, TransectMode, WindowFamily

__version__ = "0.1.0"

__all__ = [
    "AntiAliasMask",
    "build_mask",
    "resample",
    "Geodesy",
    "boundaries",
    "boundaries_xy",
    "canonicalize",
    "is_grid",
    "make_monotonic",
    "ProfileOptions",
    "ResampleOptions",
    "load_options_from_yaml",
    "Profile",
    "ProfileResult",
    "build_transects",
    "extract_profiles",
    "AttenuationClass",
    "Diagnostic",
    "Direction",
    "GridProperties",
    "TransectMode",
    "WindowFamily",
] + list(_errors_all)
