"""Enumerations and small value types shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, NamedTuple

from .errors import (
    InvalidAttenuationClassError,
    InvalidTransectModeError,
    InvalidWindowFamilyError,
)


class Direction(str, Enum):
    """Axis tag: horizontal axes are circular (mod 360), vertical ones linear."""

    HORIZONTAL = "X"
    VERTICAL = "Y"


class AttenuationClass(IntEnum):
    """Filter response at the Nyquist frequency of the target grid."""

    FIRST_NULL = 0
    MINUS_6DB = 1
    MINUS_3DB = 2

    @classmethod
    def parse(cls, value: Any) -> "AttenuationClass":
        if isinstance(value, cls):
            return value
        try:
            number = float(value)
            if isinstance(value, bool) or not number.is_integer():
                raise ValueError(value)
            return cls(int(number))
        except (TypeError, ValueError):
            raise InvalidAttenuationClassError(value) from None


class WindowFamily(str, Enum):
    RECTANGULAR = "rectwin"
    HANN = "hanning"

    @classmethod
    def parse(cls, value: Any) -> "WindowFamily":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidWindowFamilyError(value) from None


class TransectMode(str, Enum):
    """``NORMAL`` keeps the step fixed; ``ADJUST`` lands the last sample on the receiver."""

    NORMAL = "normal"
    ADJUST = "adjust"

    @classmethod
    def parse(cls, value: Any) -> "TransectMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidTransectModeError(value) from None


class GridProperties(NamedTuple):
    mesh: bool
    monotonic: bool
    constant_step: bool


@dataclass(frozen=True)
class Diagnostic:
    """Advisory record returned with a result; never aborts the computation."""

    kind: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "Direction",
    "AttenuationClass",
    "WindowFamily",
    "TransectMode",
    "GridProperties",
    "Diagnostic",
]
