"""Tests for WFC tile state."""

import pytest

from wavemap.core import Terrain, TileDistribution, TERRAIN_ORDER
from wavemap.generation.wfc import Tile


class TestTileBasics:
    """Test a fresh tile."""

    def test_starts_uncollapsed_with_full_domain(self):
        """A new tile can be anything."""
        tile = Tile(3, 4)
        assert tile.x == 3
        assert tile.y == 4
        assert tile.terrain is None
        assert not tile.is_collapsed
        assert tile.domain == set(TERRAIN_ORDER)
        assert tile.entropy == 4

    def test_coordinates_are_read_only(self):
        """Position cannot change after construction."""
        tile = Tile(0, 0)
        with pytest.raises(AttributeError):
            tile.x = 5

    def test_weights_from_default_distribution(self):
        """Without a distribution the default-biased weights are used."""
        tile = Tile(0, 0)
        assert tile.weights[Terrain.GRASS] == 0.50
        assert tile.weights[Terrain.BEACH] == 0.10

    def test_weights_from_given_distribution(self):
        """A given distribution seeds the weight table."""
        tile = Tile(0, 0, TileDistribution.uniform())
        assert all(tile.weights[t] == 0.25 for t in TERRAIN_ORDER)


class TestCollapse:
    """Test collapse and domain changes."""

    def test_collapse_sets_type_and_domain(self):
        """Collapse fixes the terrain and shrinks the domain to it."""
        tile = Tile(0, 0)
        tile.collapse(Terrain.GRASS)
        assert tile.terrain == Terrain.GRASS
        assert tile.is_collapsed
        assert tile.domain == {Terrain.GRASS}
        assert tile.entropy == 1

    def test_collapse_again_overwrites(self):
        """A second collapse replaces the first."""
        tile = Tile(0, 0)
        tile.collapse(Terrain.GRASS)
        tile.collapse(Terrain.WATER)
        assert tile.terrain == Terrain.WATER
        assert tile.domain == {Terrain.WATER}

    def test_remove_possible_type_reduces_entropy(self):
        """Removing a type drops entropy by one."""
        tile = Tile(0, 0)
        tile.remove_possible_type(Terrain.GRASS)
        assert tile.entropy == 3
        assert Terrain.GRASS not in tile.domain

    def test_remove_absent_type_is_noop(self):
        """Removing a type that is already gone changes nothing."""
        tile = Tile(0, 0)
        tile.remove_possible_type(Terrain.GRASS)
        tile.remove_possible_type(Terrain.GRASS)
        assert tile.entropy == 3

    def test_constrain_to_reports_change(self):
        """constrain_to() returns True only when the domain shrank."""
        tile = Tile(0, 0)
        assert tile.constrain_to({Terrain.WATER, Terrain.BEACH})
        assert tile.domain == {Terrain.WATER, Terrain.BEACH}
        assert not tile.constrain_to(set(TERRAIN_ORDER))

    def test_ordered_domain(self):
        """ordered_domain() follows TERRAIN_ORDER."""
        tile = Tile(0, 0)
        tile.remove_possible_type(Terrain.BEACH)
        assert tile.ordered_domain() == [Terrain.WATER, Terrain.GRASS, Terrain.MOUNTAIN]


class TestReset:
    """Test tile reset."""

    def test_reset_restores_superposition(self):
        """Reset clears the terrain and restores all four types."""
        tile = Tile(0, 0)
        tile.collapse(Terrain.MOUNTAIN)
        tile.reset()
        assert not tile.is_collapsed
        assert tile.entropy == 4

    def test_reset_recomputes_weights(self):
        """Reset takes weights from the given distribution."""
        tile = Tile(0, 0)
        tile.reset(TileDistribution.uniform())
        assert tile.weights[Terrain.GRASS] == 0.25


class TestCopy:
    """Test deep copies used for snapshots."""

    def test_copy_does_not_share_state(self):
        """Mutating a copy leaves the original untouched."""
        tile = Tile(1, 2)
        clone = tile.copy()
        clone.collapse(Terrain.WATER)
        clone.weights[Terrain.GRASS] = 9.0

        assert tile.terrain is None
        assert tile.entropy == 4
        assert tile.weights[Terrain.GRASS] == 0.50
        assert (clone.x, clone.y) == (1, 2)


class TestNeighborAffinity:
    """Test neighbor affinity weighting."""

    def _collapsed(self, terrain: Terrain) -> Tile:
        tile = Tile(0, 0)
        tile.collapse(terrain)
        return tile

    def test_no_neighbors_is_neutral(self, hardcoded_rules):
        """With no collapsed neighbors the weight is exactly 1.0."""
        tile = Tile(1, 1)
        assert tile.neighbor_affinity_weight(Terrain.GRASS, [], hardcoded_rules) == 1.0

    def test_single_grass_neighbor(self, hardcoded_rules):
        """Grass next to grass weighs 3.0."""
        tile = Tile(1, 1)
        neighbors = [self._collapsed(Terrain.GRASS)]
        assert tile.neighbor_affinity_weight(Terrain.GRASS, neighbors, hardcoded_rules) == 3.0

    def test_mean_over_neighbors(self, hardcoded_rules):
        """Grass next to grass and water averages (3.0 + 1.0) / 2."""
        tile = Tile(1, 1)
        neighbors = [self._collapsed(Terrain.GRASS), self._collapsed(Terrain.WATER)]
        assert tile.neighbor_affinity_weight(Terrain.GRASS, neighbors, hardcoded_rules) == 2.0

    def test_permissive_is_always_neutral(self, permissive_rules):
        """Permissive rules never change the weight."""
        tile = Tile(1, 1)
        neighbors = [self._collapsed(Terrain.GRASS), self._collapsed(Terrain.MOUNTAIN)]
        assert tile.neighbor_affinity_weight(Terrain.GRASS, neighbors, permissive_rules) == 1.0
