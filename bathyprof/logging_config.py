import logging
import sys
from typing import Optional

from .config import LOG_LEVEL


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger configured for bathyprof.

    Parameters
    ----------
    name : str
        Logger name (typically ``__name__``).
    level : int, optional
        Logging level. Defaults to ``BATHYPROF_LOG_LEVEL``.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level if level is not None else logging.getLevelName(LOG_LEVEL.upper()))
    return logger
