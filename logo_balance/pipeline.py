"""Measure a set of logos concurrently and turn them into a layout plan."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Mapping, Sequence

from tqdm import tqdm

from .config import NormalizeConfig
from .errors import DecodeError, EmptyContentError
from .extract.crop import crop_to_content, encode_png_data_uri
from .extract.raster import decode_source
from .features.content_box import find_content_box
from .features.density import measure_density
from .features.foreground import foreground_weights
from .features.visual_center import compute_visual_center
from .io.models import (
    ContentBox,
    LayoutPlan,
    LogoMeasurement,
    LogoSource,
    NormalizedLogo,
    RasterImage,
)
from .layout.alignment import alignment_offset
from .layout.normalize import mean_density, normalize_sizes

logger = logging.getLogger(__name__)

Decoder = Callable[[Any], RasterImage]
Encoder = Callable[[RasterImage], Any]
ConfigLike = NormalizeConfig | Mapping[str, Any] | None

_MAX_WORKERS = 8


def resolve_config(config: ConfigLike) -> NormalizeConfig:
    """Return a validated config from an instance, a mapping or ``None``."""
    if config is None:
        return NormalizeConfig()
    if isinstance(config, NormalizeConfig):
        return config
    return NormalizeConfig.from_mapping(config)


def measure_logo(
    logo: Any,
    config: NormalizeConfig,
    decoder: Decoder | None = None,
) -> LogoMeasurement:
    """Decode one logo and measure its content box, density and visual centre.

    The decoded raster does not outlive this call; only the cropped content
    is kept, and only when ``config.crop_to_content`` is set.
    """
    logo = LogoSource.coerce(logo)
    image = _decode(decoder or decode_source, logo)
    foreground = foreground_weights(image, config.luminance_threshold, config.alpha_threshold)

    low_confidence = False
    try:
        box = find_content_box(foreground)
    except EmptyContentError:
        logger.warning("%s: no foreground pixels found, using full image bounds", logo.label)
        box = ContentBox.full(image.width, image.height)
        low_confidence = True

    density = measure_density(foreground, box)
    center = compute_visual_center(foreground, box)
    cropped = crop_to_content(image, box) if config.crop_to_content else None
    logger.debug(
        "%s: box=%s density=%.4f offset=(%.4f, %.4f)",
        logo.label,
        box.as_tuple(),
        density,
        center.offset_x,
        center.offset_y,
    )
    return LogoMeasurement(
        source=logo.source,
        alt=logo.alt,
        original_width=image.width,
        original_height=image.height,
        content_box=box,
        pixel_density=density,
        visual_center=center,
        low_confidence=low_confidence,
        cropped=cropped,
    )


def measure_all(
    logos: Sequence[LogoSource],
    config: NormalizeConfig,
    decoder: Decoder | None = None,
    max_workers: int | None = None,
    progress: bool = False,
) -> list[LogoMeasurement]:
    """Measure *logos* on a thread pool and return results in input order.

    The first failure in input order aborts the batch: pending work is
    cancelled and the exception propagates.
    """
    if not logos:
        return []
    workers = max_workers or min(_MAX_WORKERS, len(logos))
    results: list[LogoMeasurement] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="logo") as executor:
        futures: list[Future[LogoMeasurement]] = [
            executor.submit(measure_logo, logo, config, decoder) for logo in logos
        ]
        try:
            for future in tqdm(
                futures,
                desc="Measuring logos",
                unit="logo",
                leave=False,
                disable=not progress,
            ):
                results.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise
    return results


def build_plan(
    measurements: Sequence[LogoMeasurement],
    config: NormalizeConfig,
    encoder: Encoder | None = None,
) -> LayoutPlan:
    """Run the set-wide sizing pass over completed *measurements*."""
    encode = encoder or encode_png_data_uri
    sizes = normalize_sizes(
        [(item.content_box, item.pixel_density) for item in measurements], config
    )
    batch_mean = mean_density(item.pixel_density for item in measurements)

    logos: list[NormalizedLogo] = []
    for item, size in zip(measurements, sizes):
        offset = alignment_offset(item.visual_center, size.width, size.height, config.align_by)
        offset_x, offset_y = offset if offset is not None else (0.0, 0.0)
        cropped_data = encode(item.cropped) if item.cropped is not None else None
        logos.append(
            NormalizedLogo(
                source=item.source,
                alt=item.alt,
                original_width=item.original_width,
                original_height=item.original_height,
                content_box=item.content_box,
                aspect_ratio=item.aspect_ratio,
                pixel_density=item.pixel_density,
                visual_center=item.visual_center,
                normalized_width=size.width,
                normalized_height=size.height,
                density_multiplier=size.density_multiplier,
                offset_x=offset_x,
                offset_y=offset_y,
                low_confidence=item.low_confidence,
                cropped_data=cropped_data,
            )
        )
    return LayoutPlan(
        logos=tuple(logos),
        gap=config.gap,
        align_by=config.align_by.value,
        mean_density=batch_mean,
    )


def normalize_logos(
    logos: Iterable[Any],
    config: ConfigLike = None,
    *,
    decoder: Decoder | None = None,
    encoder: Encoder | None = None,
    max_workers: int | None = None,
    progress: bool = False,
) -> LayoutPlan:
    """Measure and normalize *logos*, returning records in input order.

    Configuration is validated before any source is touched. A source that
    fails to decode raises ``DecodeError`` and no plan is returned.
    """
    resolved = resolve_config(config)
    sources = [LogoSource.coerce(item) for item in logos]
    measurements = measure_all(sources, resolved, decoder, max_workers, progress)
    return build_plan(measurements, resolved, encoder)


def _decode(decoder: Decoder, logo: LogoSource) -> RasterImage:
    try:
        image = decoder(logo.source)
    except DecodeError as exc:
        if exc.source is logo.source:
            raise
        raise DecodeError(logo.source, exc.reason) from exc
    except (OSError, ValueError) as exc:
        raise DecodeError(logo.source, str(exc)) from exc
    if not isinstance(image, RasterImage):
        raise DecodeError(
            logo.source, f"decoder returned {type(image).__name__}, expected RasterImage"
        )
    return image
