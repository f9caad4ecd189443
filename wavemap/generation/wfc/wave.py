"""
Wave Function Collapse orchestrator.

This is the heart of WFC: the loop that observes (collapses) tiles and
propagates constraints until the entire grid is determined.

The algorithm:
1. Find the uncollapsed tile with lowest entropy (random among ties)
2. Snapshot the grid, then collapse the tile to one terrain
   (frequency weight x neighbor affinity, weighted random)
3. Propagate: narrow the domains of collapsed tiles' neighbors
4. On contradiction, restore the latest snapshot and rule out the
   choice that led there; fail once no snapshot is left
5. Repeat until every tile is collapsed
"""

from __future__ import annotations

import random
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from wavemap.core.errors import ContradictionError
from wavemap.core.terrain import Terrain, TERRAIN_ORDER
from wavemap.logging_config import get_logger, log_backtrack, log_collapse, log_generation

from .grid import TileGrid
from .rules import HardcodedRuleProvider, RuleProvider
from .tile import Tile

logger = get_logger(__name__)


class WaveState(Enum):
    """The current state of a Wave."""
    RUNNING = auto()    # Still solving (or not started)
    COLLAPSED = auto()  # Every tile resolved
    FAILED = auto()     # Contradiction with no snapshot left to restore


@dataclass
class _Decision:
    """A backtrack stack entry: the grid before a collapse, and the collapse made."""
    snapshot: TileGrid
    x: int
    y: int
    terrain: Terrain


class Wave:
    """
    Runs generate-collapse-propagate-backtrack over a TileGrid.

    Usage:
        grid = TileGrid(16, 16)
        wave = Wave(grid, HardcodedRuleProvider(), seed=12345)
        if wave.generate():
            ...  # grid is fully collapsed

    The result depends only on the grid's dimensions and distribution, the
    rule provider and the seed. The wave owns its RNG and draws from it in a
    fixed order: one tie-break draw, then one terrain draw, per collapse.

    Scaling limitation: the backtrack stack keeps a full grid copy for every
    collapse on the current path, so memory grows as O(cells^2) in the worst
    case. Nothing bounds it, and there is no timeout; callers that need a
    deadline must enforce one outside generate().
    """

    def __init__(
        self,
        grid: TileGrid,
        rule_provider: RuleProvider | None = None,
        seed: int = 0,
        progress_callback: Callable[[int, int], None] | None = None,
    ):
        """
        Bind a wave to a grid.

        Args:
            grid: The grid to fill (mutated in place by generate())
            rule_provider: Adjacency rules (HardcodedRuleProvider if None)
            seed: Seed for the wave's private RNG
            progress_callback: Optional callback(collapsed, total_tiles),
                               called after every successful propagation
        """
        self.grid = grid
        self.rule_provider = rule_provider if rule_provider is not None else HardcodedRuleProvider()
        self.seed = seed
        self.progress_callback = progress_callback
        self.state = WaveState.RUNNING

        self._random = random.Random(seed)
        self._stack: list[_Decision] = []

        # Provider tables are fixed after construction, so the permitted
        # neighbor set of each terrain can be computed once.
        self._allowed: dict[Terrain, frozenset[Terrain]] = {
            terrain: frozenset(
                other for other in TERRAIN_ORDER
                if self.rule_provider.can_be_adjacent(terrain, other)
            )
            for terrain in TERRAIN_ORDER
        }

        self.collapse_count = 0
        self.backtrack_count = 0
        self.max_stack_depth = 0

    @property
    def stack_depth(self) -> int:
        """Number of snapshots currently on the backtrack stack."""
        return len(self._stack)

    def generate(self) -> bool:
        """
        Run the wave to completion.

        Returns True when the grid is fully collapsed, False when a
        contradiction occurred with the backtrack stack exhausted.
        Contradictions never escape as exceptions.
        """
        self._random.seed(self.seed)
        self._stack.clear()
        self.state = WaveState.RUNNING
        self.collapse_count = 0
        self.backtrack_count = 0
        self.max_stack_depth = 0

        total_tiles = self.grid.width * self.grid.height
        started = time.perf_counter()

        # Tiles collapsed before generate() constrain their neighbors too
        try:
            self._check_collapsed_pairs()
            self._propagate()
        except ContradictionError as exc:
            return self._fail(started, f"pre-collapsed tiles conflict at ({exc.x}, {exc.y})")

        while not self.grid.is_fully_collapsed:
            try:
                collapsed = self._observe_and_collapse(total_tiles)
                self._propagate()
            except ContradictionError as exc:
                if not self._backtrack(exc):
                    return self._fail(started, str(exc))
                continue

            if self.progress_callback is not None:
                self.progress_callback(collapsed, total_tiles)

        self.state = WaveState.COLLAPSED
        log_generation(
            logger,
            "COLLAPSED",
            self.grid.width,
            self.grid.height,
            seed=self.seed,
            duration_ms=int((time.perf_counter() - started) * 1000),
            details=f"collapses={self.collapse_count} backtracks={self.backtrack_count} "
                    f"max_stack={self.max_stack_depth}",
        )
        return True

    def _fail(self, started: float, reason: str) -> bool:
        self.state = WaveState.FAILED
        log_generation(
            logger,
            "FAILED",
            self.grid.width,
            self.grid.height,
            seed=self.seed,
            duration_ms=int((time.perf_counter() - started) * 1000),
            details=f"{reason} | backtracks={self.backtrack_count}",
        )
        return False

    def _observe_and_collapse(self, total_tiles: int) -> int:
        """
        Collapse one minimum-entropy tile.

        Returns the number of collapsed tiles afterwards.

        Raises:
            ContradictionError: If some uncollapsed tile has an empty domain
        """
        uncollapsed = list(self.grid.uncollapsed_tiles())
        min_entropy = min(tile.entropy for tile in uncollapsed)

        if min_entropy == 0:
            empty = next(tile for tile in uncollapsed if tile.entropy == 0)
            raise ContradictionError(
                f"Tile ({empty.x}, {empty.y}) has no terrain left",
                x=empty.x,
                y=empty.y,
            )

        # Ties stay in row-major order so the draw is reproducible
        candidates = [tile for tile in uncollapsed if tile.entropy == min_entropy]
        tile = candidates[self._random.randrange(len(candidates))]

        snapshot = self.grid.copy()
        terrain = self._select_terrain(tile)
        self._stack.append(_Decision(snapshot, tile.x, tile.y, terrain))
        self.max_stack_depth = max(self.max_stack_depth, len(self._stack))

        tile.collapse(terrain)
        self.collapse_count += 1
        log_collapse(
            logger,
            self.collapse_count,
            tile.x,
            tile.y,
            terrain.value,
            details=f"entropy={min_entropy} ties={len(candidates)}",
        )

        return total_tiles - len(uncollapsed) + 1

    def _select_terrain(self, tile: Tile) -> Terrain:
        """
        Weighted random choice from the tile's domain.

        weight(t) = frequency weight x mean adjacency weight against the
        tile's collapsed neighbors. Candidates are walked in TERRAIN_ORDER.
        """
        candidates = tile.ordered_domain()
        collapsed_neighbors = [n for n in self.grid.neighbors(tile) if n.is_collapsed]

        weights = [
            tile.weights.get(terrain, 0.0)
            * tile.neighbor_affinity_weight(terrain, collapsed_neighbors, self.rule_provider)
            for terrain in candidates
        ]
        total = sum(weights)
        draw = self._random.random()

        if total <= 0:
            # Every candidate has zero frequency; fall back to a uniform pick
            return candidates[min(int(draw * len(candidates)), len(candidates) - 1)]

        target = draw * total
        cumulative = 0.0
        for terrain, weight in zip(candidates, weights):
            cumulative += weight
            if target < cumulative:
                return terrain

        # Rounding left target at the very top; take the last weighted candidate
        return next(t for t, w in zip(reversed(candidates), reversed(weights)) if w > 0)

    def _check_collapsed_pairs(self) -> None:
        """
        Verify that tiles collapsed before generate() respect the rules pairwise.

        Propagation only narrows uncollapsed tiles, so two resolved
        neighbors are never compared there.

        Raises:
            ContradictionError: If two adjacent collapsed tiles conflict
        """
        for tile in self.grid.all_tiles():
            if not tile.is_collapsed:
                continue
            for neighbor in self.grid.neighbors(tile):
                if neighbor.is_collapsed and neighbor.terrain not in self._allowed[tile.terrain]:
                    raise ContradictionError(
                        f"Tile ({neighbor.x}, {neighbor.y}) is {neighbor.terrain.value}, "
                        f"which cannot neighbor {tile.terrain.value} at ({tile.x}, {tile.y})",
                        x=neighbor.x,
                        y=neighbor.y,
                    )

    def _propagate(self) -> None:
        """
        Narrow the domains of uncollapsed neighbors of every collapsed tile.

        Breadth-first over a worklist seeded with all collapsed tiles.

        Raises:
            ContradictionError: If a neighbor's domain becomes empty
        """
        queue: deque[Tile] = deque(tile for tile in self.grid.all_tiles() if tile.is_collapsed)

        while queue:
            tile = queue.popleft()
            if not tile.is_collapsed:
                continue

            allowed = self._allowed[tile.terrain]
            for neighbor in self.grid.neighbors(tile):
                if neighbor.is_collapsed:
                    continue

                changed = neighbor.constrain_to(allowed)

                if neighbor.entropy == 0:
                    raise ContradictionError(
                        f"Tile ({neighbor.x}, {neighbor.y}) cannot neighbor "
                        f"{tile.terrain.value} at ({tile.x}, {tile.y})",
                        x=neighbor.x,
                        y=neighbor.y,
                    )

                if changed:
                    queue.append(neighbor)

    def _backtrack(self, exc: ContradictionError) -> bool:
        """
        Restore the most recent snapshot and rule out the choice made there.

        Returns False if there is no snapshot to restore.
        """
        if not self._stack:
            return False

        decision = self._stack.pop()
        self.grid.restore_from(decision.snapshot)
        self.grid.get_tile(decision.x, decision.y).remove_possible_type(decision.terrain)
        self.backtrack_count += 1

        log_backtrack(
            logger,
            self.collapse_count,
            len(self._stack),
            str(exc),
            details=f"ruled out {decision.terrain.value} at ({decision.x}, {decision.y})",
        )
        return True
