"""Command-line interface for the logo_balance project."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Iterable

from .config import AlignMode, NormalizeConfig
from .errors import DecodeError, InvalidConfigurationError
from .io.models import LayoutPlan, LogoSource
from .io.outputs import write_feature_table, write_html_strip, write_plan_json
from .pipeline import normalize_logos


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the logo normalization pipeline."""
    parser = argparse.ArgumentParser(
        description="Measure a set of logos and size them to look balanced in a row."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Text file with one logo source per line; a tab may separate alt text.",
    )
    parser.add_argument(
        "--out",
        required=True,
        help="Directory path where the plan, feature table and preview are written.",
    )
    parser.add_argument("--base-size", type=float, default=48.0, help="Reference size in px.")
    parser.add_argument("--gap", type=float, default=28.0, help="Spacing between logos in px.")
    parser.add_argument(
        "--scale-factor",
        type=float,
        default=0.5,
        help="0 gives equal widths, 1 gives equal heights (default 0.5).",
    )
    parser.add_argument(
        "--density-factor",
        type=float,
        default=0.5,
        help="Strength of the ink density compensation in [0, 1] (default 0.5).",
    )
    parser.add_argument(
        "--no-density",
        action="store_true",
        help="Disable density compensation.",
    )
    parser.add_argument(
        "--align-by",
        default=AlignMode.BOUNDS.value,
        choices=[mode.value for mode in AlignMode],
        help="Alignment mode for the preview offsets.",
    )
    parser.add_argument(
        "--crop",
        action="store_true",
        help="Embed content-cropped PNG data in the outputs.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        metavar="N",
        help="Number of concurrent decode workers.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-logo measurements.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def read_input(path: Path) -> list[LogoSource]:
    """Read logo sources from *path*, skipping blank lines and ``#`` comments."""
    if not path.exists():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    sources: list[LogoSource] = []
    for line in path.read_text(encoding="utf-8-sig").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        source, _, alt = line.partition("\t")
        sources.append(LogoSource(source.strip(), alt.strip()))
    return sources


def build_config(args: argparse.Namespace) -> NormalizeConfig:
    options: dict[str, Any] = {
        "gap": args.gap,
        "base_size": args.base_size,
        "scale_factor": args.scale_factor,
        "density_factor": args.density_factor,
        "density_aware": not args.no_density,
        "align_by": args.align_by,
        "crop_to_content": args.crop,
    }
    return NormalizeConfig(**options)


def _print_summary(plan: LayoutPlan) -> None:
    for index, logo in enumerate(plan, start=1):
        flag = " (low confidence)" if logo.low_confidence else ""
        print(
            f"  {index}. {logo.label} -> {logo.normalized_width:.1f}x{logo.normalized_height:.1f}"
            f" density={logo.pixel_density:.3f} x{logo.density_multiplier:.3f}{flag}"
        )
    print(f"Logos: {len(plan)}")
    print(f"Mean density: {plan.mean_density:.3f}")
    print(f"Row: {plan.total_width:.1f}x{plan.row_height:.1f}")


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(args)
    except InvalidConfigurationError as exc:
        print(f"[error] invalid configuration: {exc}")
        return 2

    entries = read_input(Path(args.input))
    print(f"[input] {len(entries)} logo sources")
    try:
        plan = normalize_logos(entries, config, max_workers=args.workers, progress=True)
    except DecodeError as exc:
        print(f"[error] {exc}")
        return 1

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    plan_path = write_plan_json(out_dir / "plan.json", plan)
    print(f"[plan] wrote {plan_path}")
    features_path = write_feature_table(out_dir / "features.parquet", plan)
    print(f"[features] wrote {len(plan)} rows to {features_path}")
    preview_path = write_html_strip(out_dir / "preview.html", plan)
    print(f"[preview] wrote {preview_path}")
    _print_summary(plan)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
