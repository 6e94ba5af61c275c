"""Transect construction and profile extraction."""

from .extract import Profile, ProfileResult, extract_profiles
from .transects import build_transects

__all__ = ["Profile", "ProfileResult", "extract_profiles", "build_transects"]
