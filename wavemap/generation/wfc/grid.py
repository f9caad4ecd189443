"""
Grid representation for Wave Function Collapse.

The TileGrid is the "wave function": a fixed-size 2D arena of tiles, each
in superposition until it collapses to a single terrain. Snapshots used for
backtracking are full copies of this arena.
"""

from __future__ import annotations

from typing import Iterator

from wavemap.core.distribution import TileDistribution
from wavemap.core.errors import InvalidArgumentError, OutOfRangeError
from wavemap.core.terrain import Terrain

from .tile import Tile

# Neighbor order: left, right, up, down
_NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class TileGrid:
    """
    The 2D grid of tiles.

    Tiles are stored row-major and addressed by (x, y) with
    0 <= x < width and 0 <= y < height. Dimensions never change.
    """

    def __init__(
        self,
        width: int,
        height: int,
        distribution: TileDistribution | None = None,
    ):
        """
        Create a grid with every tile in full superposition.

        Args:
            width: Number of tiles horizontally (> 0)
            height: Number of tiles vertically (> 0)
            distribution: Baseline terrain weights (default-biased if None)

        Raises:
            InvalidArgumentError: If either dimension is not a positive integer
        """
        if not isinstance(width, int) or isinstance(width, bool) or width <= 0:
            raise InvalidArgumentError(f"Width must be a positive integer, got {width!r}")
        if not isinstance(height, int) or isinstance(height, bool) or height <= 0:
            raise InvalidArgumentError(f"Height must be a positive integer, got {height!r}")

        self._width = width
        self._height = height
        self.distribution = distribution if distribution is not None else TileDistribution.default()

        self._tiles: list[list[Tile]] = [
            [Tile(x, y, self.distribution) for x in range(width)]
            for y in range(height)
        ]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(
                f"Coordinates ({x}, {y}) out of bounds for {self._width}x{self._height} grid",
                x=x,
                y=y,
            )

    def get_tile(self, x: int, y: int) -> Tile:
        """Get the tile at (x, y)."""
        self._check_bounds(x, y)
        return self._tiles[y][x]

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        """Replace the tile at (x, y). The tile's own coordinates must match."""
        self._check_bounds(x, y)
        if (tile.x, tile.y) != (x, y):
            raise InvalidArgumentError(
                f"Tile at ({tile.x}, {tile.y}) cannot be placed at ({x}, {y})"
            )
        self._tiles[y][x] = tile

    def all_tiles(self) -> Iterator[Tile]:
        """Iterate over all tiles in row-major order."""
        for row in self._tiles:
            yield from row

    def uncollapsed_tiles(self) -> Iterator[Tile]:
        """Iterate over tiles without a resolved terrain, in row-major order."""
        return (tile for tile in self.all_tiles() if not tile.is_collapsed)

    @property
    def is_fully_collapsed(self) -> bool:
        """Full scan: True if no tile is left unresolved."""
        return next(self.uncollapsed_tiles(), None) is None

    def neighbors(self, tile: Tile) -> Iterator[Tile]:
        """Yield the in-bounds orthogonal neighbors of a tile."""
        for dx, dy in _NEIGHBOR_OFFSETS:
            nx = tile.x + dx
            ny = tile.y + dy
            if self.in_bounds(nx, ny):
                yield self._tiles[ny][nx]

    def reset(self) -> None:
        """Reset every tile using the grid's distribution."""
        for tile in self.all_tiles():
            tile.reset(self.distribution)

    def copy(self) -> TileGrid:
        """Deep snapshot of the grid. No tile state is shared with the original."""
        clone = TileGrid.__new__(TileGrid)
        clone._width = self._width
        clone._height = self._height
        clone.distribution = self.distribution
        clone._tiles = [[tile.copy() for tile in row] for row in self._tiles]
        return clone

    def restore_from(self, snapshot: TileGrid) -> None:
        """
        Overwrite live tile state with a snapshot, tile by tile.

        The live Tile objects are kept; only their state is replaced.
        """
        if snapshot.width != self._width or snapshot.height != self._height:
            raise InvalidArgumentError(
                f"Snapshot is {snapshot.width}x{snapshot.height}, "
                f"grid is {self._width}x{self._height}"
            )

        for live, saved in zip(self.all_tiles(), snapshot.all_tiles()):
            live.terrain = saved.terrain
            live.domain = set(saved.domain)
            live.weights = dict(saved.weights)

    def terrain_rows(self) -> list[list[Terrain | None]]:
        """Resolved terrain per tile, indexed [y][x] (None where unresolved)."""
        return [[tile.terrain for tile in row] for row in self._tiles]

    def __repr__(self) -> str:
        return f"TileGrid(width={self._width}, height={self._height})"
