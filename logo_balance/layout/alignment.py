"""Translation offsets for aligning logos by their visual weight."""

from __future__ import annotations

from typing import Tuple

from ..config import AlignMode
from ..io.models import NormalizedLogo, VisualCenter

Offset = Tuple[float, float]


def alignment_offset(
    visual_center: VisualCenter,
    width: float,
    height: float,
    mode: AlignMode | str,
) -> Offset | None:
    """Return the ``(dx, dy)`` translation for a logo drawn at *width* x *height*.

    ``bounds`` alignment is the renderer's default geometric centring and
    returns ``None``. The visual-centre modes move the weighted centroid onto
    the shared axis; the single-axis modes leave the other axis at 0.
    """
    mode = AlignMode.parse(mode)
    if mode is AlignMode.BOUNDS:
        return None
    dx = -visual_center.offset_x * width
    dy = -visual_center.offset_y * height
    if mode is AlignMode.VISUAL_CENTER_X:
        return (dx, 0.0)
    if mode is AlignMode.VISUAL_CENTER_Y:
        return (0.0, dy)
    return (dx, dy)


def logo_offset(logo: NormalizedLogo, mode: AlignMode | str) -> Offset | None:
    """Return the alignment offset for an already normalized *logo*."""
    return alignment_offset(
        logo.visual_center, logo.normalized_width, logo.normalized_height, mode
    )
