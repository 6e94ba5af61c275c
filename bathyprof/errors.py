"""Exception taxonomy for grid classification, filtering and profile extraction."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class BathyProfError(Exception):
    """Base exception for all bathyprof errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputShapeError(BathyProfError, ValueError):
    """Raised when array sizes or dimensions disagree where equality is required."""

    def __init__(self, message: str, **shapes: Any):
        super().__init__(message, details=dict(shapes))


class NotAGridError(BathyProfError, ValueError):
    """Raised when (X, Y) fails the mesh/monotonic/constant-step invariants."""

    def __init__(self, message: str = "X, Y, Z have to be matrices of gridded data", properties=None):
        details = {}
        if properties is not None:
            details = {
                "mesh": bool(properties.mesh),
                "monotonic": bool(properties.monotonic),
                "constant_step": bool(properties.constant_step),
            }
        super().__init__(message, details=details)


class TransectOutOfBoundsError(BathyProfError, ValueError):
    """Raised when transects exceed the area covered by the bathymetry grid."""

    def __init__(self, required: Sequence[float], available: Sequence[float]):
        xmin, xmax, ymin, ymax = (float(v) for v in required)
        super().__init__(
            message=(
                "Some of the bathymetry profiles exceed the limits of the bathymetry grid. "
                f"The grid must cover at least xmin={xmin:.10f}, xmax={xmax:.10f}, "
                f"ymin={ymin:.10f}, ymax={ymax:.10f}"
            ),
            details={
                "required": (xmin, xmax, ymin, ymax),
                "available": tuple(float(v) for v in available),
            },
        )


class InvalidAttenuationClassError(BathyProfError, ValueError):
    """Raised for attenuation classes other than 0, 1 or 2."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid attenuation class {value!r}; expected 0 (first null), 1 (-6 dB) or 2 (-3 dB)",
            details={"value": value},
        )


class InvalidWindowFamilyError(BathyProfError, ValueError):
    """Raised for unknown window names."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid window family {value!r}; expected 'rectwin' or 'hanning'",
            details={"value": value},
        )


class InvalidTransectModeError(BathyProfError, ValueError):
    """Raised for unknown transect sampling modes."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid transect mode {value!r}; expected 'normal' or 'adjust'",
            details={"value": value},
        )


class RootBracketInvalidError(BathyProfError, RuntimeError):
    """Raised when the bisection bracket does not enclose a sign change."""

    def __init__(self, a: float, b: float, fa: float, fb: float):
        super().__init__(
            message=f"Bisection bracket [{a}, {b}] has responses of equal sign ({fa}, {fb})",
            details={"a": a, "b": b, "fa": fa, "fb": fb},
        )


class TargetExceedsSourceError(BathyProfError, ValueError):
    """Raised when the target sampling frequency is higher than the source one."""

    def __init__(self, fs0: float, fs: float):
        super().__init__(
            message=f"Target sampling frequency fs={fs} cannot be higher than fs0={fs0}",
            details={"fs0": fs0, "fs": fs},
        )


class InvalidFrequencyError(BathyProfError, ValueError):
    """Raised when a sampling frequency is zero, negative or not finite."""

    def __init__(self, fs0: float, fs: float):
        super().__init__(
            message=f"Sampling frequencies must be finite and positive (fs0={fs0}, fs={fs})",
            details={"fs0": fs0, "fs": fs},
        )


class TooManyAxesError(BathyProfError, ValueError):
    """Raised when more than two target sampling frequencies are given."""

    def __init__(self, count: int):
        super().__init__(
            message=(
                "A maximum of two resampling frequencies can be selected, "
                f"one for each orthogonal direction x and y (got {count})"
            ),
            details={"count": count},
        )


class InvalidSourceCountError(BathyProfError, ValueError):
    """Raised when more than one source position is given."""

    def __init__(self, count: int):
        super().__init__(message="Introduce just one source position", details={"count": count})


class InvalidRangeCountError(BathyProfError, ValueError):
    """Raised when more than one maximum range is given."""

    def __init__(self, count: int):
        super().__init__(message="More than one distance defined", details={"count": count})


class InvalidReferenceLongitudeError(BathyProfError, ValueError):
    """Raised when a reference longitude lies outside [-180, 360)."""

    def __init__(self, value: float):
        super().__init__(
            message=f"The start angle {value} has to be within -180 <= xmin < 360",
            details={"value": value},
        )


class InvalidResampleFactorError(BathyProfError, ValueError):
    """Raised for non-positive interpolation factors."""

    def __init__(self, value: float):
        super().__init__(
            message=f"The interpolation factor has to be a positive number (got {value})",
            details={"value": value},
        )


class InvalidRangeStepError(BathyProfError, ValueError):
    """Raised for non-positive sampling distances along a transect."""

    def __init__(self, value: float):
        super().__init__(
            message=f"The range step has to be a positive distance in metres (got {value})",
            details={"value": value},
        )


__all__ = [
    "BathyProfError",
    "InvalidInputShapeError",
    "NotAGridError",
    "TransectOutOfBoundsError",
    "InvalidAttenuationClassError",
    "InvalidWindowFamilyError",
    "InvalidTransectModeError",
    "RootBracketInvalidError",
    "TargetExceedsSourceError",
    "InvalidFrequencyError",
    "TooManyAxesError",
    "InvalidSourceCountError",
    "InvalidRangeCountError",
    "InvalidReferenceLongitudeError",
    "InvalidResampleFactorError",
    "InvalidRangeStepError",
]
