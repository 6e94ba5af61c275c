"""Pipelines for radial bathymetry profiles."""

from .radial_profiles import radial_profiles

__all__ = ["radial_profiles"]
