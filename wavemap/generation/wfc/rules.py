"""
Adjacency rules for Wave Function Collapse.

A rule provider answers two questions for the solver:
which terrains may sit next to each other (hard constraints used by
propagation), and how much a terrain "likes" a given neighbor (soft
weights used when sampling a collapse). Both tables are built once when
the provider is constructed.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from wavemap.core.errors import InvalidArgumentError, UnknownTerrainError
from wavemap.core.terrain import Terrain, ALL_TERRAIN

NEUTRAL_WEIGHT = 1.0


@runtime_checkable
class RuleProvider(Protocol):
    """Capability interface for terrain adjacency rules."""

    def can_be_adjacent(self, tile1: Terrain, tile2: Terrain) -> bool:
        """Whether tile2 may be an orthogonal neighbor of tile1."""
        ...

    def valid_neighbors(self, terrain: Terrain) -> frozenset[Terrain]:
        """All terrains permitted next to the given terrain."""
        ...

    def adjacency_weight(self, terrain: Terrain, neighbor: Terrain) -> float:
        """Preference multiplier for terrain when next to neighbor.

        > 1.0 favors the pairing, 1.0 is neutral.
        """
        ...

    def can_be_adjacent_with_context(
        self,
        tile1: Terrain,
        tile2: Terrain,
        types_adjacent_to_tile2: Iterable[Terrain],
    ) -> bool:
        """Adjacency check that may also look at tile2's existing neighbors."""
        ...


class HardcodedRuleProvider:
    """
    The realistic terrain ruleset.

    Adjacency graph:

        water <-> beach <-> grass <-> mountain

    Every terrain may also neighbor itself. Same-type pairs carry strong
    weights so that terrain clusters into regions instead of speckling.
    """

    _ADJACENCY: dict[Terrain, frozenset[Terrain]] = {
        Terrain.GRASS: frozenset({Terrain.GRASS, Terrain.BEACH, Terrain.MOUNTAIN}),
        Terrain.MOUNTAIN: frozenset({Terrain.GRASS, Terrain.MOUNTAIN}),
        Terrain.BEACH: frozenset({Terrain.BEACH, Terrain.GRASS, Terrain.WATER}),
        Terrain.WATER: frozenset({Terrain.WATER, Terrain.BEACH}),
    }

    _WEIGHTS: dict[tuple[Terrain, Terrain], float] = {
        # Clustering
        (Terrain.GRASS, Terrain.GRASS): 3.0,
        (Terrain.WATER, Terrain.WATER): 3.0,
        (Terrain.MOUNTAIN, Terrain.MOUNTAIN): 3.0,
        (Terrain.BEACH, Terrain.BEACH): 2.0,
        # Natural transitions
        (Terrain.GRASS, Terrain.MOUNTAIN): 1.3,
        (Terrain.GRASS, Terrain.BEACH): 1.2,
        (Terrain.MOUNTAIN, Terrain.GRASS): 1.2,
        (Terrain.BEACH, Terrain.WATER): 1.5,
        (Terrain.BEACH, Terrain.GRASS): 1.3,
        (Terrain.WATER, Terrain.BEACH): 1.5,
    }

    def __init__(self):
        self._adjacency = dict(self._ADJACENCY)
        self._weights = dict(self._WEIGHTS)

    def _lookup(self, terrain: Terrain) -> frozenset[Terrain]:
        try:
            return self._adjacency[terrain]
        except (KeyError, TypeError):
            raise UnknownTerrainError(f"No adjacency rules for {terrain!r}") from None

    def can_be_adjacent(self, tile1: Terrain, tile2: Terrain) -> bool:
        if not isinstance(tile2, Terrain):
            raise UnknownTerrainError(f"No adjacency rules for {tile2!r}")
        return tile2 in self._lookup(tile1)

    def valid_neighbors(self, terrain: Terrain) -> frozenset[Terrain]:
        return frozenset(self._lookup(terrain))

    def adjacency_weight(self, terrain: Terrain, neighbor: Terrain) -> float:
        self._lookup(terrain)
        self._lookup(neighbor)
        return self._weights.get((terrain, neighbor), NEUTRAL_WEIGHT)

    def can_be_adjacent_with_context(
        self,
        tile1: Terrain,
        tile2: Terrain,
        types_adjacent_to_tile2: Iterable[Terrain],
    ) -> bool:
        """
        Context-aware adjacency.

        Beach may touch water only where that water already borders grass,
        which keeps beaches from appearing as fragments in open water.
        """
        if not self.can_be_adjacent(tile1, tile2):
            return False

        if tile1 == Terrain.BEACH and tile2 == Terrain.WATER:
            return Terrain.GRASS in set(types_adjacent_to_tile2)

        return True


class PermissiveRuleProvider:
    """Accepts every pairing with neutral weights.

    Useful in tests and as a baseline with no clustering.
    """

    def can_be_adjacent(self, tile1: Terrain, tile2: Terrain) -> bool:
        return True

    def valid_neighbors(self, terrain: Terrain) -> frozenset[Terrain]:
        return ALL_TERRAIN

    def adjacency_weight(self, terrain: Terrain, neighbor: Terrain) -> float:
        return NEUTRAL_WEIGHT

    def can_be_adjacent_with_context(
        self,
        tile1: Terrain,
        tile2: Terrain,
        types_adjacent_to_tile2: Iterable[Terrain],
    ) -> bool:
        return True


RULE_PROVIDERS: dict[str, type] = {
    "hardcoded": HardcodedRuleProvider,
    "permissive": PermissiveRuleProvider,
}


def get_rule_provider(name: str) -> RuleProvider:
    """Create a rule provider by name ("hardcoded" or "permissive")."""
    try:
        provider_cls = RULE_PROVIDERS[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown rule provider {name!r}; expected one of {sorted(RULE_PROVIDERS)}"
        ) from None
    return provider_cls()
