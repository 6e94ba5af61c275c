"""Option objects for the resampling and profile-extraction entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

import yaml

from .config import (
    DEFAULT_ATTENUATION,
    DEFAULT_PRECISION,
    DEFAULT_TRANSECT_MODE,
    DEFAULT_WINDOW,
    MAX_PROFILE_POINTS,
)
from .types import AttenuationClass, TransectMode, WindowFamily


@dataclass
class ResampleOptions:
    """Settings for :func:`bathyprof.filtering.resample.resample`."""

    precision: int = DEFAULT_PRECISION
    attenuation: AttenuationClass = DEFAULT_ATTENUATION
    window: WindowFamily = DEFAULT_WINDOW

    def __post_init__(self) -> None:
        self.precision = int(self.precision)
        self.attenuation = AttenuationClass.parse(self.attenuation)
        self.window = WindowFamily.parse(self.window)


@dataclass
class ProfileOptions:
    """Settings for :func:`bathyprof.profiles.extract.extract_profiles`."""

    mode: TransectMode = DEFAULT_TRANSECT_MODE
    precision: int = DEFAULT_PRECISION
    attenuation: AttenuationClass = DEFAULT_ATTENUATION
    window: WindowFamily = DEFAULT_WINDOW
    max_points: int = MAX_PROFILE_POINTS

    def __post_init__(self) -> None:
        self.mode = TransectMode.parse(self.mode)
        self.precision = int(self.precision)
        self.attenuation = AttenuationClass.parse(self.attenuation)
        self.window = WindowFamily.parse(self.window)
        self.max_points = int(self.max_points)


def _known(cls, section: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(section) - names
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return dict(section)


def load_options_from_yaml(path: str) -> Tuple[ResampleOptions, ProfileOptions]:
    """Load ``resample:`` and ``profiles:`` sections from a YAML file.

    Missing sections fall back to the environment defaults.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Options file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    resample = ResampleOptions(**_known(ResampleOptions, data.get("resample") or {}))
    profiles = ProfileOptions(**_known(ProfileOptions, data.get("profiles") or {}))
    return resample, profiles


__all__ = ["ResampleOptions", "ProfileOptions", "load_options_from_yaml"]
