"""
Terrain map generation entry points.

Wraps the WFC engine and the noise generators behind two functions so
callers (the CLI, tests) don't have to wire grids and waves by hand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from wavemap.core.distribution import TileDistribution
from wavemap.core.errors import GenerationFailedError
from wavemap.core.terrain import Terrain
from wavemap.logging_config import get_logger
from .noise import NOISE_GENERATORS, NoiseMapGenerator
from .wfc import TileGrid, Wave, RuleProvider

if TYPE_CHECKING:
    from wavemap.config import GenerationSettings

logger = get_logger(__name__)


def generate_wfc_grid(
    width: int,
    height: int,
    seed: int,
    rule_provider: RuleProvider | None = None,
    distribution: TileDistribution | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> TileGrid:
    """
    Generate a fully collapsed grid with Wave Function Collapse.

    Args:
        width: Grid width in tiles
        height: Grid height in tiles
        seed: Seed for the wave's RNG
        rule_provider: Adjacency rules (hardcoded terrain rules if None)
        distribution: Baseline terrain weights (default-biased if None)
        progress_callback: Optional callback(collapsed, total_tiles)

    Returns:
        The collapsed TileGrid

    Raises:
        InvalidArgumentError: If width or height is not positive
        GenerationFailedError: If the wave exhausted its backtrack stack
    """
    grid = TileGrid(width, height, distribution)
    wave = Wave(grid, rule_provider, seed=seed, progress_callback=progress_callback)

    if not wave.generate():
        raise GenerationFailedError(
            f"Wave function collapse failed for {width}x{height} grid with seed {seed} "
            f"after {wave.backtrack_count} backtracks",
            seed=seed,
        )

    return grid


def generate_terrain_grid(
    settings: GenerationSettings,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[list[Terrain | None]]:
    """
    Generate terrain as a 2D list indexed [y][x], using settings.generator.

    Noise generators ignore the rule provider and distribution; they
    make no adjacency guarantees.
    """
    if settings.generator == "wfc":
        grid = generate_wfc_grid(
            settings.width,
            settings.height,
            settings.seed,
            rule_provider=settings.build_rule_provider(),
            distribution=settings.build_distribution(),
            progress_callback=progress_callback,
        )
        return grid.terrain_rows()

    noise_generator = NOISE_GENERATORS[settings.generator]()
    logger.debug(f"Generating {settings.width}x{settings.height} map with {settings.generator} noise")
    return NoiseMapGenerator(noise_generator).generate_map(
        settings.width, settings.height, settings.seed
    )
