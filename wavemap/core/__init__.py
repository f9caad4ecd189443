"""Core domain types for wavemap.

Usage:
    from wavemap.core import Terrain, TileDistribution, InvalidArgumentError
"""

from .errors import (
    WaveMapError,
    InvalidArgumentError,
    OutOfRangeError,
    ContradictionError,
    UnknownTerrainError,
    GenerationFailedError,
)
from .terrain import (
    Terrain,
    TERRAIN_ORDER,
    ALL_TERRAIN,
    TERRAIN_COLORS,
    TERRAIN_SYMBOLS,
    UNRESOLVED_SYMBOL,
    ordered,
    validate_color,
    get_color,
    get_symbol,
)
from .distribution import TileDistribution, SUM_TOLERANCE

__all__ = [
    # Errors
    "WaveMapError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ContradictionError",
    "UnknownTerrainError",
    "GenerationFailedError",
    # Terrain
    "Terrain",
    "TERRAIN_ORDER",
    "ALL_TERRAIN",
    "TERRAIN_COLORS",
    "TERRAIN_SYMBOLS",
    "UNRESOLVED_SYMBOL",
    "ordered",
    "validate_color",
    "get_color",
    "get_symbol",
    # Distribution
    "TileDistribution",
    "SUM_TOLERANCE",
]
