"""Plain-text export of generated maps.

One symbol per cell, one line per row. Cells that never resolved (from a
failed or partial generation) get the fallback symbol instead of raising.
"""

from __future__ import annotations

from typing import Sequence

from wavemap.core.terrain import Terrain, TERRAIN_ORDER, get_symbol
from wavemap.generation.wfc import TileGrid


def format_rows(rows: Sequence[Sequence[Terrain | None]]) -> str:
    """Format terrain rows (indexed [y][x]) as text."""
    return "\n".join("".join(get_symbol(terrain) for terrain in row) for row in rows)


def format_grid(grid: TileGrid) -> str:
    """Format a TileGrid as text."""
    return format_rows(grid.terrain_rows())


def composition(rows: Sequence[Sequence[Terrain | None]]) -> dict[Terrain, int]:
    """Count cells per terrain, in TERRAIN_ORDER. Unresolved cells are not counted."""
    counts = {terrain: 0 for terrain in TERRAIN_ORDER}
    for row in rows:
        for terrain in row:
            if terrain is not None:
                counts[terrain] += 1
    return counts
