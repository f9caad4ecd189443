"""Baseline terrain frequencies for generated maps.

A TileDistribution says how common each terrain should be overall. Tiles
copy these values into their own weight tables when they are created or
reset, and the Wave multiplies them by neighbor affinity when it samples.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidArgumentError
from .terrain import Terrain, TERRAIN_ORDER

SUM_TOLERANCE = 1e-4


@dataclass(frozen=True)
class TileDistribution:
    """Validated, immutable mapping from terrain to probability.

    Invariants:
        - exactly one entry per terrain (4 entries)
        - every entry in [0, 1]
        - entries sum to 1.0 within SUM_TOLERANCE
    """

    probabilities: Mapping[Terrain, float]

    def __post_init__(self):
        probabilities = self.probabilities
        if probabilities is None or len(probabilities) != len(TERRAIN_ORDER):
            raise InvalidArgumentError(
                f"TileDistribution must contain exactly {len(TERRAIN_ORDER)} terrain types"
            )

        for terrain, value in probabilities.items():
            if not isinstance(terrain, Terrain):
                raise InvalidArgumentError(f"Unknown terrain type in distribution: {terrain!r}")
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidArgumentError(
                    f"Probability for {terrain.value} must be a number, got {value!r}"
                )
            if math.isnan(value) or value < 0 or value > 1:
                raise InvalidArgumentError(
                    f"Probability for {terrain.value} must be between 0 and 1, got {value}"
                )

        total = math.fsum(probabilities[t] for t in TERRAIN_ORDER)
        if abs(total - 1.0) > SUM_TOLERANCE:
            raise InvalidArgumentError(f"Probabilities must sum to 1.0, but sum to {total}")

        frozen = MappingProxyType({t: float(probabilities[t]) for t in TERRAIN_ORDER})
        object.__setattr__(self, "probabilities", frozen)

    def get_probability(self, terrain: Terrain) -> float:
        """Get the probability for a terrain (0.0 if absent)."""
        return self.probabilities.get(terrain, 0.0)

    def as_dict(self) -> dict[Terrain, float]:
        """Return a mutable copy in TERRAIN_ORDER."""
        return {t: self.probabilities[t] for t in TERRAIN_ORDER}

    def __hash__(self) -> int:
        return hash(tuple(self.probabilities[t] for t in TERRAIN_ORDER))

    @classmethod
    def default(cls) -> TileDistribution:
        """Grass 50%, Water 25%, Mountain 15%, Beach 10%."""
        return cls({
            Terrain.GRASS: 0.50,
            Terrain.WATER: 0.25,
            Terrain.MOUNTAIN: 0.15,
            Terrain.BEACH: 0.10,
        })

    @classmethod
    def uniform(cls) -> TileDistribution:
        """All terrains equally likely. Used for testing and baselines."""
        return cls({t: 0.25 for t in TERRAIN_ORDER})
