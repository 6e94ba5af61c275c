from __future__ import annotations

from typing import Optional

import numpy as np

from bathyprof.bathy.fetch import profile_area
from bathyprof.geodesy import Geodesy
from bathyprof.logging_config import get_logger
from bathyprof.options import ProfileOptions
from bathyprof.profiles.extract import ProfileResult, extract_profiles
from bathyprof.profiles.transects import build_transects

logger = get_logger(__name__)

DEFAULT_AZIMUTHS = np.arange(0.0, 360.0, 20.0)
DEFAULT_RANGE_MAX = 1e4
DEFAULT_RANGE_STEP = 200.0


def radial_profiles(
    provider,
    source_lat: float,
    source_lon: float,
    azimuths=DEFAULT_AZIMUTHS,
    range_max: float = DEFAULT_RANGE_MAX,
    range_step: float = DEFAULT_RANGE_STEP,
    options: Optional[ProfileOptions] = None,
    geodesy: Optional[Geodesy] = None,
) -> ProfileResult:
    """Bathymetry profiles along transects radiating from a source.

    ``provider`` is any object with ``fetch(bounds) -> (x, y, Z)`` where
    ``x`` ascends eastward and ``y`` descends southward.
    """
    geodesy = geodesy or Geodesy()

    area = profile_area(source_lat, source_lon, range_max)
    x, y, Z = provider.fetch(area.as_bounds())
    X, Y = np.meshgrid(x, y)
    logger.info(
        "Profiles around (%.5f, %.5f): %d transects of %.0f m on a %dx%d grid",
        source_lat,
        source_lon,
        np.size(azimuths),
        range_max,
        X.shape[0],
        X.shape[1],
    )

    P1, P2 = build_transects(source_lat, source_lon, azimuths, range_max, geodesy)
    return extract_profiles(X, Y, Z, P1, P2, range_step, options, geodesy)


__all__ = ["radial_profiles", "DEFAULT_AZIMUTHS", "DEFAULT_RANGE_MAX", "DEFAULT_RANGE_STEP"]
