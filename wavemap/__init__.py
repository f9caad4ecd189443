"""wavemap - terrain tile maps from Wave Function Collapse.

Usage:
    from wavemap import TileGrid, Wave, HardcodedRuleProvider

    grid = TileGrid(16, 16)
    if Wave(grid, HardcodedRuleProvider(), seed=12345).generate():
        ...
"""

__version__ = "0.1.0"

from .core import (
    Terrain,
    TERRAIN_ORDER,
    TileDistribution,
    WaveMapError,
    InvalidArgumentError,
    OutOfRangeError,
    UnknownTerrainError,
    GenerationFailedError,
)
from .generation.wfc import (
    Tile,
    TileGrid,
    RuleProvider,
    HardcodedRuleProvider,
    PermissiveRuleProvider,
    Wave,
    WaveState,
)

__all__ = [
    "__version__",
    "Terrain",
    "TERRAIN_ORDER",
    "TileDistribution",
    "WaveMapError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "UnknownTerrainError",
    "GenerationFailedError",
    "Tile",
    "TileGrid",
    "RuleProvider",
    "HardcodedRuleProvider",
    "PermissiveRuleProvider",
    "Wave",
    "WaveState",
]
