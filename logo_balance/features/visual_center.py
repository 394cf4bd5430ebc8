"""Visual centre of mass of a logo."""

from __future__ import annotations

import numpy as np

from ..io.models import ContentBox, VisualCenter
from .foreground import ForegroundMap


def compute_visual_center(foreground: ForegroundMap, box: ContentBox) -> VisualCenter:
    """Return the weighted centroid of the pixels inside *box*.

    Pixel ``x`` spans ``[x, x + 1)``, so its centre is ``x + 0.5``. Offsets
    are the centroid's displacement from the box centre divided by the box
    size; they are zero when the box carries no weight.
    """
    region = foreground.weights[box.top : box.bottom, box.left : box.right]
    total = float(region.sum())
    if total <= 0.0:
        return VisualCenter(box.center_x, box.center_y, 0.0, 0.0)

    xs = np.arange(box.left, box.right, dtype=np.float64) + 0.5
    ys = np.arange(box.top, box.bottom, dtype=np.float64) + 0.5
    centroid_x = float(np.dot(region.sum(axis=0), xs)) / total
    centroid_y = float(np.dot(region.sum(axis=1), ys)) / total
    return VisualCenter(
        centroid_x=centroid_x,
        centroid_y=centroid_y,
        offset_x=(centroid_x - box.center_x) / box.width,
        offset_y=(centroid_y - box.center_y) / box.height,
    )
