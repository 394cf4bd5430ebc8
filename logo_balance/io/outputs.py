"""Output helpers for persisting and rendering layout plans."""

from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Any

import pandas as pd

from .models import LayoutPlan, NormalizedLogo


def write_plan_json(path: Path, plan: LayoutPlan) -> Path:
    """Write *plan* to *path* as JSON and return the path."""
    path.write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
    return path


def plan_dataframe(plan: LayoutPlan) -> pd.DataFrame:
    """Return one flat row of measurements per logo in *plan*."""
    rows: list[dict[str, Any]] = []
    for index, logo in enumerate(plan):
        box = logo.content_box
        rows.append(
            {
                "position": index,
                "source": logo.to_dict()["source"],
                "alt": logo.alt,
                "original_width": logo.original_width,
                "original_height": logo.original_height,
                "box_left": box.left,
                "box_top": box.top,
                "box_right": box.right,
                "box_bottom": box.bottom,
                "aspect_ratio": logo.aspect_ratio,
                "pixel_density": logo.pixel_density,
                "visual_offset_x": logo.visual_center.offset_x,
                "visual_offset_y": logo.visual_center.offset_y,
                "density_multiplier": logo.density_multiplier,
                "normalized_width": logo.normalized_width,
                "normalized_height": logo.normalized_height,
                "offset_x": logo.offset_x,
                "offset_y": logo.offset_y,
                "low_confidence": logo.low_confidence,
            }
        )
    return pd.DataFrame(rows)


def write_feature_table(path: Path, plan: LayoutPlan) -> Path:
    """Write the per-logo measurement table of *plan* as parquet."""
    df = plan_dataframe(plan)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False, engine="pyarrow")
    return path


def render_html_strip(plan: LayoutPlan, title: str = "Logo strip") -> str:
    """Return a standalone HTML page laying the logos of *plan* in one row."""
    items = "\n".join(f"    {_render_logo(logo)}" for logo in plan)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "</head>\n<body>\n"
        f'  <div class="logo-strip" style="display:flex;align-items:center;'
        f'flex-wrap:wrap;gap:{_px(plan.gap)}">\n'
        f"{items}\n"
        "  </div>\n"
        "</body>\n</html>\n"
    )


def write_html_strip(path: Path, plan: LayoutPlan, title: str = "Logo strip") -> Path:
    """Write the HTML rendering of *plan* to *path* and return the path."""
    path.write_text(render_html_strip(plan, title), encoding="utf-8")
    return path


def _render_logo(logo: NormalizedLogo) -> str:
    src = logo.cropped_data if isinstance(logo.cropped_data, str) else logo.to_dict()["source"]
    width = round(logo.normalized_width)
    height = round(logo.normalized_height)
    styles = [
        "display:block",
        "object-fit:contain",
        f"width:{width}px",
        f"height:{height}px",
    ]
    if logo.offset_x or logo.offset_y:
        styles.append(f"transform:translate({_px(logo.offset_x)},{_px(logo.offset_y)})")
    return (
        f'<img src="{html.escape(src or "", quote=True)}" '
        f'alt="{html.escape(logo.alt, quote=True)}" '
        f'width="{width}" height="{height}" '
        f'style="{";".join(styles)}">'
    )


def _px(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".") + "px"
