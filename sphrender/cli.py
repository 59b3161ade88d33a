"""Command-line entry point for rendering every harmonic image."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sphrender import config
from sphrender.driver import render_all
from sphrender.errors import SphRenderError
from sphrender.legendre import load_legendre_table
from sphrender.logging_utils import progress_logging, setup_logging

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the renderer."""
    parser = argparse.ArgumentParser(
        prog="python -m sphrender",
        description=(
            "Render equirectangular images of real spherical harmonics Y_l,m "
            "from precomputed associated Legendre samples."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--width", type=_positive_int, default=config.WIDTH, help="Image width (phi samples)"
    )
    parser.add_argument(
        "--height",
        type=_positive_int,
        default=config.HEIGHT,
        help="Image height; must match the theta sampling of the Legendre data",
    )
    parser.add_argument(
        "--max-l",
        type=_positive_int,
        default=config.MAX_L,
        help="Highest degree rendered (inclusive)",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        default=config.DATA_DIR,
        help="Directory with legendres-<l>.csv files",
    )
    parser.add_argument(
        "--cache",
        type=Path,
        default=None,
        help="Binary table cache (default: <source-dir>/legendres.npz)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help="Directory for rendered PNG files",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=config.MAX_RENDER_WORKERS,
        help="Number of images rendered concurrently",
    )
    parser.add_argument(
        "--rebuild-cache",
        action="store_true",
        help="Re-read the CSV files if the cache is unreadable or stale",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        table = load_legendre_table(
            args.max_l,
            args.source_dir,
            height=args.height,
            cache_path=args.cache,
            rebuild_on_corrupt=args.rebuild_cache,
        )
        with progress_logging(enabled=not args.no_progress):
            outcomes = render_all(
                args.max_l,
                args.width,
                args.height,
                table,
                output_dir=args.output_dir,
                max_workers=args.workers,
                show_progress=not args.no_progress,
            )
    except SphRenderError as exc:
        logger.error("%s", exc)
        return 1

    return 0 if all(outcome.ok for outcome in outcomes) else 1


if __name__ == "__main__":
    raise SystemExit(main())
