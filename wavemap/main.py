"""wavemap - terrain maps from Wave Function Collapse."""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError
from tqdm import tqdm

from wavemap import __version__
from wavemap.config import GenerationSettings, load_settings
from wavemap.core.errors import WaveMapError
from wavemap.core.terrain import TERRAIN_SYMBOLS, UNRESOLVED_SYMBOL
from wavemap.generation import generate_terrain_grid
from wavemap.logging_config import get_logger, setup_logging
from wavemap.render import composition, format_rows

logger = get_logger(__name__)


def run_generation(settings: GenerationSettings, show_progress: bool = True) -> int:
    """Generate one map, print it with a composition summary.

    Args:
        settings: Map size, seed, rules, distribution and generator
        show_progress: Show a progress bar while WFC runs

    Returns:
        Exit code
    """
    total = settings.width * settings.height
    pbar = None
    progress_callback = None

    if show_progress and settings.generator == "wfc":
        pbar = tqdm(total=total, desc="  Collapsing", unit="tiles", file=sys.stderr)
        last_progress = [0]

        # Backtracking can move the count down; the bar only moves forward
        def update_progress(current: int, total_tiles: int) -> None:
            delta = current - last_progress[0]
            if delta > 0:
                pbar.update(delta)
                last_progress[0] = current

        progress_callback = update_progress

    started = time.perf_counter()
    try:
        rows = generate_terrain_grid(settings, progress_callback=progress_callback)
    except WaveMapError as exc:
        logger.error(f"Generation failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if pbar is not None:
            pbar.close()
    elapsed_ms = (time.perf_counter() - started) * 1000

    print(format_rows(rows))
    print()
    print(f"Size: {settings.width}x{settings.height}  Seed: {settings.seed}  "
          f"Generator: {settings.generator}  Rules: {settings.rules}  "
          f"Distribution: {settings.distribution}")
    print(f"Generation time: {elapsed_ms:.2f}ms")
    print()

    counts = composition(rows)
    print("Legend:")
    for terrain, count in counts.items():
        share = count / total * 100
        print(f"  {TERRAIN_SYMBOLS[terrain]} {terrain.value:<9} {count:>6} ({share:5.1f}%)")
    print(f"  {UNRESOLVED_SYMBOL} unresolved")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for wavemap."""
    # Load environment variables first
    load_dotenv(find_dotenv(usecwd=True))

    parser = argparse.ArgumentParser(
        description="wavemap - terrain maps from Wave Function Collapse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wavemap                          # 16x16 WFC map, seed 12345
  wavemap --width 32 --height 32   # Bigger map
  wavemap --rules permissive       # No adjacency constraints
  wavemap --generator simplex      # Noise-based map instead of WFC

Settings can also come from WAVEMAP_WIDTH, WAVEMAP_HEIGHT, WAVEMAP_SEED,
WAVEMAP_RULES, WAVEMAP_DISTRIBUTION and WAVEMAP_GENERATOR (or a .env file).
        """,
    )
    parser.add_argument("--width", type=int, help="Map width in tiles (default: 16)")
    parser.add_argument("--height", type=int, help="Map height in tiles (default: 16)")
    parser.add_argument("--seed", type=int, help="Random seed (default: 12345)")
    parser.add_argument(
        "--rules",
        choices=["hardcoded", "permissive"],
        help="Adjacency rules for WFC (default: hardcoded)",
    )
    parser.add_argument(
        "--distribution",
        choices=["default", "uniform"],
        help="Terrain frequency distribution (default: default)",
    )
    parser.add_argument(
        "--generator",
        choices=["wfc", "perlin", "simplex"],
        help="Map generator (default: wfc)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("logs"),
        help="Directory for debug.log (default: logs/)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )

    args = parser.parse_args(argv)

    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(args.log_dir, console_level=console_level)

    try:
        settings = load_settings(
            width=args.width,
            height=args.height,
            seed=args.seed,
            rules=args.rules,
            distribution=args.distribution,
            generator=args.generator,
        )
    except ValidationError as exc:
        print(f"Invalid settings:\n{exc}", file=sys.stderr)
        return 1

    print(f"wavemap v{__version__}")
    print(f"Log file: {log_path}")
    print()

    return run_generation(settings, show_progress=not args.no_progress)


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
