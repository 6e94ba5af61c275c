import os

DEFAULT_PRECISION = int(os.getenv("BATHYPROF_PRECISION", "12"))  # decimals used to compare steps
MAX_PROFILE_POINTS = int(os.getenv("BATHYPROF_MAX_POINTS", "99"))  # AcTUP .bty limit
DEFAULT_ATTENUATION = int(os.getenv("BATHYPROF_ATTENUATION", "1"))
DEFAULT_WINDOW = os.getenv("BATHYPROF_WINDOW", "rectwin")
DEFAULT_TRANSECT_MODE = os.getenv("BATHYPROF_TRANSECT_MODE", "normal")
MAX_PIXELS = int(os.getenv("BATHYPROF_MAX_PIXELS", "8000000"))
LOG_LEVEL = os.getenv("BATHYPROF_LOG_LEVEL", "INFO")
