"""Data models shared across the logo normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Tuple

import numpy as np
from PIL import Image

SourceRef = str | Path | bytes


@dataclass(frozen=True, slots=True)
class LogoSource:
    """Caller-supplied logo descriptor."""

    source: SourceRef
    alt: str = ""

    @classmethod
    def coerce(cls, value: Any) -> "LogoSource":
        """Return *value* as a ``LogoSource``.

        Accepts an existing instance, a bare path/URL/bytes, a ``(source, alt)``
        pair or a mapping with ``src``/``source`` and ``alt`` keys.
        """
        if isinstance(value, LogoSource):
            return value
        if isinstance(value, (str, Path, bytes, bytearray)):
            return cls(bytes(value) if isinstance(value, bytearray) else value)
        if isinstance(value, Mapping):
            source = value.get("src", value.get("source"))
            if source is None:
                raise ValueError("Logo mapping requires a 'src' or 'source' key")
            return cls(source, str(value.get("alt") or ""))
        if isinstance(value, tuple) and len(value) == 2:
            return cls(value[0], str(value[1] or ""))
        raise TypeError(f"Cannot interpret {type(value).__name__} as a logo source")

    @property
    def label(self) -> str:
        if isinstance(self.source, bytes):
            return self.alt or f"<{len(self.source)} bytes>"
        return str(self.source)


class RasterImage:
    """Decoded RGBA pixel buffer of shape ``(height, width, 4)``."""

    __slots__ = ("pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {array.shape}")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError("Raster images must have non-zero width and height")
        self.pixels = np.array(array, dtype=np.uint8, order="C")

    @classmethod
    def from_pil(cls, img: Image.Image) -> "RasterImage":
        rgba = img if img.mode == "RGBA" else img.convert("RGBA")
        return cls(np.asarray(rgba))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    @property
    def has_alpha(self) -> bool:
        """True when at least one pixel is not fully opaque."""
        return bool((self.alpha < 255).any())

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"


@dataclass(frozen=True, slots=True)
class ContentBox:
    """Integer content bounds; ``right`` and ``bottom`` are exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if not (0 <= self.left < self.right and 0 <= self.top < self.bottom):
            raise ValueError(
                f"Invalid content box ({self.left}, {self.top}, {self.right}, {self.bottom})"
            )

    @classmethod
    def full(cls, width: int, height: int) -> "ContentBox":
        return cls(0, 0, width, height)

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True, slots=True)
class VisualCenter:
    """Weighted centroid and its normalized offset from the box center."""

    centroid_x: float
    centroid_y: float
    offset_x: float = 0.0
    offset_y: float = 0.0


@dataclass(frozen=True, slots=True)
class LogoMeasurement:
    """First-pass measurements for a single logo."""

    source: SourceRef
    alt: str
    original_width: int
    original_height: int
    content_box: ContentBox
    pixel_density: float
    visual_center: VisualCenter
    low_confidence: bool = False
    cropped: RasterImage | None = None

    @property
    def aspect_ratio(self) -> float:
        return self.content_box.aspect_ratio


@dataclass(frozen=True, slots=True)
class NormalizedLogo:
    """Final per-logo record handed to output builders."""

    source: SourceRef
    alt: str
    original_width: int
    original_height: int
    content_box: ContentBox
    aspect_ratio: float
    pixel_density: float
    visual_center: VisualCenter
    normalized_width: float
    normalized_height: float
    density_multiplier: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    low_confidence: bool = False
    cropped_data: Any = None

    @property
    def label(self) -> str:
        return LogoSource(self.source, self.alt).label

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the record."""
        source = self.source
        if isinstance(source, bytes):
            source = None
        elif isinstance(source, Path):
            source = str(source)
        cropped = self.cropped_data
        if cropped is not None and not isinstance(cropped, str):
            cropped = None
        return {
            "source": source,
            "alt": self.alt,
            "original_width": self.original_width,
            "original_height": self.original_height,
            "content_box": {
                "left": self.content_box.left,
                "top": self.content_box.top,
                "right": self.content_box.right,
                "bottom": self.content_box.bottom,
            },
            "aspect_ratio": self.aspect_ratio,
            "pixel_density": self.pixel_density,
            "visual_center": {
                "centroid_x": self.visual_center.centroid_x,
                "centroid_y": self.visual_center.centroid_y,
                "offset_x": self.visual_center.offset_x,
                "offset_y": self.visual_center.offset_y,
            },
            "normalized_width": self.normalized_width,
            "normalized_height": self.normalized_height,
            "density_multiplier": self.density_multiplier,
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
            "low_confidence": self.low_confidence,
            "cropped_data": cropped,
        }


@dataclass(frozen=True, slots=True)
class LayoutPlan:
    """Ordered batch result of the normalization pipeline."""

    logos: Tuple[NormalizedLogo, ...]
    gap: float
    align_by: str
    mean_density: float

    def __iter__(self) -> Iterator[NormalizedLogo]:
        return iter(self.logos)

    def __len__(self) -> int:
        return len(self.logos)

    def __getitem__(self, index: int) -> NormalizedLogo:
        return self.logos[index]

    @property
    def total_width(self) -> float:
        if not self.logos:
            return 0.0
        widths = sum(logo.normalized_width for logo in self.logos)
        return widths + self.gap * (len(self.logos) - 1)

    @property
    def row_height(self) -> float:
        return max((logo.normalized_height for logo in self.logos), default=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "gap": self.gap,
            "align_by": self.align_by,
            "mean_density": self.mean_density,
            "total_width": self.total_width,
            "row_height": self.row_height,
            "logos": [logo.to_dict() for logo in self.logos],
        }
