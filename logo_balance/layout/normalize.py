"""Set-wide sizing of logos from their content shape and ink density."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from ..config import DEFAULT_MAX_MULTIPLIER, DEFAULT_MIN_MULTIPLIER, NormalizeConfig
from ..io.models import ContentBox

logger = logging.getLogger(__name__)

BoxAndDensity = Tuple[ContentBox, float]


@dataclass(frozen=True, slots=True)
class NormalizedSize:
    """Final display size of one logo."""

    width: float
    height: float
    density_multiplier: float = 1.0


def shape_size(aspect_ratio: float, base_size: float, scale_factor: float) -> tuple[float, float]:
    """Return ``(width, height)`` for a logo of *aspect_ratio*.

    ``width = base_size * r ** scale_factor`` interpolates between equal widths
    (``scale_factor = 0``) and equal heights (``scale_factor = 1``).
    """
    if aspect_ratio <= 0 or not math.isfinite(aspect_ratio):
        raise ValueError(f"aspect_ratio must be a positive finite number, got {aspect_ratio}")
    if scale_factor == 0.0:
        width = float(base_size)
        return width, width / aspect_ratio
    if scale_factor == 1.0:
        # height is exactly base_size
        height = float(base_size)
        return height * aspect_ratio, height
    width = base_size * aspect_ratio**scale_factor
    return width, width / aspect_ratio


def mean_density(densities: Iterable[float]) -> float:
    values = list(densities)
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def density_multiplier(
    density: float,
    batch_mean: float,
    density_factor: float,
    lower: float = DEFAULT_MIN_MULTIPLIER,
    upper: float = DEFAULT_MAX_MULTIPLIER,
) -> float:
    """Return the isotropic size multiplier for a logo of *density*.

    Logos denser than *batch_mean* shrink and lighter ones grow; the result is
    clamped to ``[lower, upper]``. A zero *density_factor* always yields 1.
    """
    if density_factor == 0.0:
        return 1.0
    raw = 1.0 + density_factor * (batch_mean - density)
    clamped = max(lower, min(upper, raw))
    if clamped != raw:
        logger.debug("Density multiplier %.4f clamped to %.4f", raw, clamped)
    return clamped


def normalize_sizes(
    entries: Sequence[BoxAndDensity], config: NormalizeConfig
) -> list[NormalizedSize]:
    """Return the normalized size of every ``(content_box, density)`` entry.

    Sizes come back in the order of *entries*. The density pass needs the
    whole batch, so this must run after every logo has been measured.
    """
    shapes = [
        shape_size(box.aspect_ratio, config.base_size, config.scale_factor)
        for box, _ in entries
    ]
    if not config.density_aware or config.density_factor == 0.0:
        return [NormalizedSize(width, height) for width, height in shapes]

    batch_mean = mean_density(density for _, density in entries)
    sizes: list[NormalizedSize] = []
    for (width, height), (_, density) in zip(shapes, entries):
        multiplier = density_multiplier(
            density,
            batch_mean,
            config.density_factor,
            config.min_density_multiplier,
            config.max_density_multiplier,
        )
        sizes.append(NormalizedSize(width * multiplier, height * multiplier, multiplier))
    return sizes
