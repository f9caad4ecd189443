"""Map generation for wavemap."""

from .terrain import generate_wfc_grid, generate_terrain_grid
from .noise import (
    NoiseGenerator,
    PerlinNoiseGenerator,
    SimplexNoiseGenerator,
    NoiseMapGenerator,
    NOISE_GENERATORS,
    map_noise_to_terrain,
)

__all__ = [
    "generate_wfc_grid",
    "generate_terrain_grid",
    "NoiseGenerator",
    "PerlinNoiseGenerator",
    "SimplexNoiseGenerator",
    "NoiseMapGenerator",
    "NOISE_GENERATORS",
    "map_noise_to_terrain",
]
