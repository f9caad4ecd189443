"""
Tile state for Wave Function Collapse.

A Tile is one cell of the map. Before collapse it holds a domain of
terrains that are still possible; after collapse it holds exactly one.
Each tile also carries its own weight table, copied from a
TileDistribution, that biases which terrain it collapses to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from wavemap.core.distribution import TileDistribution
from wavemap.core.terrain import Terrain, TERRAIN_ORDER, ordered

if TYPE_CHECKING:
    from .rules import RuleProvider


class Tile:
    """
    A single cell in the WFC grid.

    Invariants:
        - while unresolved, the domain is non-empty (an empty domain is a
          contradiction the Wave must recover from)
        - once resolved, the domain is exactly {terrain}
    """

    __slots__ = ("_x", "_y", "terrain", "domain", "weights")

    def __init__(self, x: int, y: int, distribution: TileDistribution | None = None):
        self._x = x
        self._y = y
        self.terrain: Terrain | None = None
        self.domain: set[Terrain] = set(TERRAIN_ORDER)
        self.weights: dict[Terrain, float] = _weights_from(distribution)

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def is_collapsed(self) -> bool:
        """A tile is collapsed once it has a resolved terrain."""
        return self.terrain is not None

    @property
    def entropy(self) -> int:
        """
        How uncertain this tile is.

        Simple count of the domain. Weights are not folded in.
        """
        return len(self.domain)

    def ordered_domain(self) -> list[Terrain]:
        """The domain in TERRAIN_ORDER."""
        return ordered(self.domain)

    def collapse(self, terrain: Terrain) -> None:
        """Fix this tile to a terrain.

        Calling it again overwrites the previous choice.
        """
        self.terrain = terrain
        self.domain = {terrain}

    def remove_possible_type(self, terrain: Terrain) -> None:
        """Drop a terrain from the domain (no-op if absent)."""
        self.domain.discard(terrain)

    def constrain_to(self, allowed: Iterable[Terrain]) -> bool:
        """
        Intersect the domain with the allowed terrains.

        Returns True if the tile lost possibilities.
        """
        old_count = len(self.domain)
        self.domain &= set(allowed)
        return len(self.domain) < old_count

    def reset(self, distribution: TileDistribution | None = None) -> None:
        """Return to full superposition with weights from the distribution."""
        self.terrain = None
        self.domain = set(TERRAIN_ORDER)
        self.weights = _weights_from(distribution)

    def neighbor_affinity_weight(
        self,
        candidate: Terrain,
        collapsed_neighbors: list[Tile],
        rule_provider: RuleProvider,
    ) -> float:
        """
        Mean adjacency weight of candidate against the collapsed neighbors.

        With no collapsed neighbors the result is neutral (1.0).
        """
        if not collapsed_neighbors:
            return 1.0

        total = sum(
            rule_provider.adjacency_weight(candidate, neighbor.terrain)
            for neighbor in collapsed_neighbors
        )
        return total / len(collapsed_neighbors)

    def copy(self) -> Tile:
        """Deep copy: domain and weights are duplicated, never shared."""
        clone = Tile.__new__(Tile)
        clone._x = self._x
        clone._y = self._y
        clone.terrain = self.terrain
        clone.domain = set(self.domain)
        clone.weights = dict(self.weights)
        return clone

    def __repr__(self) -> str:
        if self.terrain is not None:
            return f"Tile(x={self._x}, y={self._y}, terrain={self.terrain.value})"
        names = ",".join(t.value for t in self.ordered_domain())
        return f"Tile(x={self._x}, y={self._y}, domain={{{names}}})"


def _weights_from(distribution: TileDistribution | None) -> dict[Terrain, float]:
    if distribution is None:
        distribution = TileDistribution.default()
    return {t: distribution.get_probability(t) for t in TERRAIN_ORDER}
