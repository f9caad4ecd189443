"""Terrain types for wavemap.

The four terrain types form a closed set with a fixed order. That order
decides tie-breaking and cumulative-weight sampling, so anything that walks
a set of terrains goes through TERRAIN_ORDER instead of iterating the set
directly (enum hashes derive from member names, and string hashing is
randomized per process).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from .errors import InvalidArgumentError, UnknownTerrainError


class Terrain(Enum):
    """Types of terrain a tile can resolve to."""

    WATER = "water"
    BEACH = "beach"
    GRASS = "grass"
    MOUNTAIN = "mountain"


TERRAIN_ORDER: tuple[Terrain, ...] = (
    Terrain.WATER,
    Terrain.BEACH,
    Terrain.GRASS,
    Terrain.MOUNTAIN,
)

ALL_TERRAIN: frozenset[Terrain] = frozenset(TERRAIN_ORDER)


def ordered(types: Iterable[Terrain]) -> list[Terrain]:
    """Return the given terrains in TERRAIN_ORDER."""
    present = set(types)
    return [t for t in TERRAIN_ORDER if t in present]


# -----------------------------------------------------------------------------
# Colors
# -----------------------------------------------------------------------------

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def validate_color(color: str) -> str:
    """Check that color is a '#RRGGBB' string and return it upper-cased."""
    if not isinstance(color, str) or not _HEX_COLOR.match(color):
        raise InvalidArgumentError(
            f"Color must be '#' followed by 6 hex digits, got {color!r}"
        )
    return color.upper()


# Read by external renderers; wavemap itself only prints text symbols
TERRAIN_COLORS: dict[Terrain, str] = {
    Terrain.WATER: validate_color("#0000FF"),
    Terrain.BEACH: validate_color("#FFFF00"),
    Terrain.GRASS: validate_color("#00AA00"),
    Terrain.MOUNTAIN: validate_color("#808080"),
}


def get_color(terrain: Terrain) -> str:
    """Get the RGB hex color for a terrain."""
    try:
        return TERRAIN_COLORS[terrain]
    except (KeyError, TypeError):
        raise UnknownTerrainError(f"Unknown terrain type: {terrain!r}") from None


# -----------------------------------------------------------------------------
# Text symbols
# -----------------------------------------------------------------------------

TERRAIN_SYMBOLS: dict[Terrain, str] = {
    Terrain.WATER: "~",
    Terrain.BEACH: ":",
    Terrain.GRASS: ".",
    Terrain.MOUNTAIN: "^",
}

# Shown for cells that never resolved (partial or failed generations)
UNRESOLVED_SYMBOL = "?"


def get_symbol(terrain: Terrain | None) -> str:
    """Get the display symbol for terrain, or the fallback for None."""
    if terrain is None:
        return UNRESOLVED_SYMBOL
    return TERRAIN_SYMBOLS.get(terrain, UNRESOLVED_SYMBOL)
