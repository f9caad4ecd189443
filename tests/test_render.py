"""Tests for plain-text map export."""

from wavemap.core import Terrain, TERRAIN_ORDER
from wavemap.generation.wfc import TileGrid
from wavemap.render import composition, format_grid, format_rows

W, B, G, M = Terrain.WATER, Terrain.BEACH, Terrain.GRASS, Terrain.MOUNTAIN


class TestFormatRows:
    """Test symbol output."""

    def test_one_symbol_per_cell(self):
        """Rows become lines of terrain symbols."""
        assert format_rows([[W, B], [G, M]]) == "~:\n.^"

    def test_unresolved_cells_use_fallback(self):
        """None cells print as '?'."""
        assert format_rows([[W, None, M]]) == "~?^"

    def test_empty(self):
        """No rows, no output."""
        assert format_rows([]) == ""


class TestFormatGrid:
    """Test formatting a whole TileGrid."""

    def test_fresh_grid_is_all_unresolved(self):
        """A grid that never ran shows only fallback symbols."""
        assert format_grid(TileGrid(3, 2)) == "???\n???"

    def test_collapsed_tiles_show_terrain(self):
        """Collapsed tiles use their terrain symbol at (x, y)."""
        grid = TileGrid(3, 2)
        grid.get_tile(2, 0).collapse(W)
        grid.get_tile(0, 1).collapse(M)
        assert format_grid(grid) == "??~\n^??"


class TestComposition:
    """Test terrain counts."""

    def test_counts_in_terrain_order(self):
        """Every terrain is listed in order, including zero counts."""
        counts = composition([[G, G, W], [B, None, G]])
        assert list(counts) == list(TERRAIN_ORDER)
        assert counts == {W: 1, B: 1, G: 3, M: 0}

    def test_unresolved_not_counted(self):
        """None cells are left out of the totals."""
        assert sum(composition([[None, None]]).values()) == 0
