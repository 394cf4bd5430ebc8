"""Validated configuration for logo normalization."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

from .errors import InvalidConfigurationError

DEFAULT_GAP = 28.0
DEFAULT_BASE_SIZE = 48.0
DEFAULT_DENSITY_FACTOR = 0.5
DEFAULT_SCALE_FACTOR = 0.5
DEFAULT_LUMINANCE_THRESHOLD = 24
DEFAULT_ALPHA_THRESHOLD = 10
DEFAULT_MIN_MULTIPLIER = 0.5
DEFAULT_MAX_MULTIPLIER = 1.5


class AlignMode(str, Enum):
    """How a logo is positioned inside its allotted box."""

    BOUNDS = "bounds"
    VISUAL_CENTER = "visual-center"
    VISUAL_CENTER_X = "visual-center-x"
    VISUAL_CENTER_Y = "visual-center-y"

    @classmethod
    def parse(cls, value: "AlignMode | str") -> "AlignMode":
        """Return the mode named by *value*, accepting ``_`` for ``-``."""
        if isinstance(value, AlignMode):
            return value
        if not isinstance(value, str):
            raise InvalidConfigurationError(f"align_by must be a string, got {value!r}")
        key = value.strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise InvalidConfigurationError(
                f"Unknown align_by {value!r}; expected one of {choices}"
            ) from None


# camelCase names accepted by ``NormalizeConfig.from_mapping``.
_CAMEL_ALIASES = {
    "baseSize": "base_size",
    "densityAware": "density_aware",
    "densityFactor": "density_factor",
    "scaleFactor": "scale_factor",
    "alignBy": "align_by",
    "cropToContent": "crop_to_content",
    "luminanceThreshold": "luminance_threshold",
    "alphaThreshold": "alpha_threshold",
    "minDensityMultiplier": "min_density_multiplier",
    "maxDensityMultiplier": "max_density_multiplier",
}


@dataclass(frozen=True, slots=True)
class NormalizeConfig:
    """Options recognised by the normalization pipeline.

    ``gap`` is not used by the measurement core; it is carried through to the
    output builders. Every field is validated on construction so a bad value
    fails before any image is decoded.
    """

    gap: float = DEFAULT_GAP
    base_size: float = DEFAULT_BASE_SIZE
    density_aware: bool = True
    density_factor: float = DEFAULT_DENSITY_FACTOR
    scale_factor: float = DEFAULT_SCALE_FACTOR
    align_by: AlignMode = AlignMode.BOUNDS
    crop_to_content: bool = False
    luminance_threshold: int = DEFAULT_LUMINANCE_THRESHOLD
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD
    min_density_multiplier: float = DEFAULT_MIN_MULTIPLIER
    max_density_multiplier: float = DEFAULT_MAX_MULTIPLIER

    def __post_init__(self) -> None:
        object.__setattr__(self, "align_by", AlignMode.parse(self.align_by))
        for name in ("gap", "base_size", "density_factor", "scale_factor",
                     "min_density_multiplier", "max_density_multiplier"):
            object.__setattr__(self, name, _as_float(name, getattr(self, name)))
        for name in ("luminance_threshold", "alpha_threshold"):
            object.__setattr__(self, name, _as_int(name, getattr(self, name)))
        for name in ("density_aware", "crop_to_content"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigurationError(f"{name} must be a boolean")

        if self.base_size <= 0:
            raise InvalidConfigurationError(
                f"base_size must be positive, got {self.base_size}"
            )
        if self.gap < 0:
            raise InvalidConfigurationError(f"gap must not be negative, got {self.gap}")
        _check_unit_interval("scale_factor", self.scale_factor)
        _check_unit_interval("density_factor", self.density_factor)
        for name in ("luminance_threshold", "alpha_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidConfigurationError(f"{name} must be in [0, 255], got {value}")
        if self.min_density_multiplier <= 0:
            raise InvalidConfigurationError(
                "min_density_multiplier must be positive, "
                f"got {self.min_density_multiplier}"
            )
        if self.max_density_multiplier < self.min_density_multiplier:
            raise InvalidConfigurationError(
                "max_density_multiplier must not be below min_density_multiplier"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "NormalizeConfig":
        """Build a config from snake_case or camelCase keys."""
        if not options:
            return cls()
        known = {field.name for field in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise InvalidConfigurationError(f"Unknown configuration option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    result = float(value)
    if result != result:
        raise InvalidConfigurationError(f"{name} must not be NaN")
    return result


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationError(f"{name} must be within [0, 1], got {value}")
