"""
Noise-based terrain generation.

An alternative to WFC that makes no adjacency guarantees: a seeded 2D noise
field is sampled per cell and each value is mapped to a terrain by fixed
thresholds. Fields are indexed [y][x] and hold values in [0, 1].
"""

from __future__ import annotations

import math
import random
from typing import Callable, Protocol

from wavemap.core.errors import InvalidArgumentError
from wavemap.core.terrain import Terrain

PERMUTATION_SIZE = 256


class NoiseGenerator(Protocol):
    """Produces a 2D noise field in [0, 1] from a seed."""

    def generate_noise(self, width: int, height: int, seed: int) -> list[list[float]]:
        ...


def _shuffled_permutation(seed: int) -> list[int]:
    """Seeded Fisher-Yates shuffle of 0..255, duplicated to avoid index wrapping."""
    rng = random.Random(seed)
    base = list(range(PERMUTATION_SIZE))
    for i in range(PERMUTATION_SIZE - 1, 0, -1):
        j = rng.randrange(i + 1)
        base[i], base[j] = base[j], base[i]
    return base + base


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0:
        raise InvalidArgumentError(f"Width must be positive, got {width}")
    if height <= 0:
        raise InvalidArgumentError(f"Height must be positive, got {height}")


# -----------------------------------------------------------------------------
# Perlin
# -----------------------------------------------------------------------------


class PerlinNoiseGenerator:
    """Classic 2D gradient noise sampled at a fixed frequency."""

    def __init__(self, frequency: float = 0.1):
        self.frequency = frequency
        self._perm: list[int] = []

    def generate_noise(self, width: int, height: int, seed: int) -> list[list[float]]:
        _check_dimensions(width, height)
        self._perm = _shuffled_permutation(seed)
        return [
            [self._sample(x * self.frequency, y * self.frequency) for x in range(width)]
            for y in range(height)
        ]

    def _sample(self, x: float, y: float) -> float:
        mask = PERMUTATION_SIZE - 1
        xi = math.floor(x) & mask
        yi = math.floor(y) & mask
        xf = x - math.floor(x)
        yf = y - math.floor(y)

        u = _fade(xf)
        v = _fade(yf)

        perm = self._perm
        h00 = self._hash(perm[xi], yi)
        h10 = self._hash(perm[xi + 1], yi)
        h01 = self._hash(perm[xi], yi + 1)
        h11 = self._hash(perm[xi + 1], yi + 1)

        g00 = _gradient(h00, xf, yf)
        g10 = _gradient(h10, xf - 1, yf)
        g01 = _gradient(h01, xf, yf - 1)
        g11 = _gradient(h11, xf - 1, yf - 1)

        result = _lerp(_lerp(g00, g10, u), _lerp(g01, g11, u), v)

        # [-1, 1] -> [0, 1]
        return _clamp01((result + 1) / 2)

    def _hash(self, x: int, y: int) -> int:
        return self._perm[(self._perm[x] + y) & (PERMUTATION_SIZE - 1)]


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _gradient(hash_value: int, x: float, y: float) -> float:
    if hash_value & 1 == 0:
        return x + y if hash_value & 2 == 0 else -x + y
    return x - y if hash_value & 2 == 0 else -x - y


# -----------------------------------------------------------------------------
# Simplex
# -----------------------------------------------------------------------------

_GRADIENTS_3D: tuple[tuple[int, int, int], ...] = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)

_SQRT3 = math.sqrt(3.0)
_F2 = 0.5 * (_SQRT3 - 1.0)
_G2 = (3.0 - _SQRT3) / 6.0

# Raw 2D simplex output lies roughly within [-0.42, 0.42]
_SIMPLEX_RANGE = 0.42


class SimplexNoiseGenerator:
    """2D simplex noise layered as fractional Brownian motion."""

    def __init__(self, scale: float = 0.05, octaves: int = 4, persistence: float = 0.5):
        self.scale = scale
        self.octaves = octaves
        self.persistence = persistence
        self._perm: list[int] = []
        self._perm_mod12: list[int] = []

    def generate_noise(self, width: int, height: int, seed: int) -> list[list[float]]:
        _check_dimensions(width, height)
        self._perm = _shuffled_permutation(seed)
        self._perm_mod12 = [p % 12 for p in self._perm]
        return [[self._sample_fbm(x, y) for x in range(width)] for y in range(height)]

    def _sample_fbm(self, x: float, y: float) -> float:
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(self.octaves):
            value += self._sample(x * frequency * self.scale, y * frequency * self.scale) * amplitude
            max_value += amplitude
            amplitude *= self.persistence
            frequency *= 2.0

        return _clamp01(value / max_value)

    def _sample(self, x: float, y: float) -> float:
        # Skew into simplex cell space
        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)

        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        i1, j1 = (1, 0) if x0 > y0 else (0, 1)

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1 + 2 * _G2
        y2 = y0 - 1 + 2 * _G2

        ii = i & 255
        jj = j & 255
        perm = self._perm
        gi0 = self._perm_mod12[perm[ii] + jj]
        gi1 = self._perm_mod12[perm[(ii + i1) & 255] + ((jj + j1) & 255)]
        gi2 = self._perm_mod12[perm[(ii + 1) & 255] + ((jj + 1) & 255)]

        result = _corner(gi0, x0, y0) + _corner(gi1, x1, y1) + _corner(gi2, x2, y2)

        return (result + _SIMPLEX_RANGE) / (2 * _SIMPLEX_RANGE)


def _corner(gi: int, x: float, y: float) -> float:
    t = 0.5 - x * x - y * y
    if t < 0:
        return 0.0
    t *= t
    gx, gy, _ = _GRADIENTS_3D[gi]
    return t * t * (gx * x + gy * y)


# -----------------------------------------------------------------------------
# Mapping
# -----------------------------------------------------------------------------


def map_noise_to_terrain(value: float) -> Terrain:
    """
    Map a noise value in [0, 1] to a terrain.

    [0, .25) water, [.25, .5) beach, [.5, .75) grass, [.75, 1] mountain.

    Raises:
        InvalidArgumentError: If value is outside [0, 1] or NaN
    """
    if math.isnan(value) or value < 0.0 or value > 1.0:
        raise InvalidArgumentError(f"Noise value must be between 0.0 and 1.0, but was {value}")

    if value < 0.25:
        return Terrain.WATER
    if value < 0.50:
        return Terrain.BEACH
    if value < 0.75:
        return Terrain.GRASS
    return Terrain.MOUNTAIN


class NoiseMapGenerator:
    """Builds a terrain map from a noise generator and a threshold mapper."""

    def __init__(
        self,
        noise_generator: NoiseGenerator,
        mapper: Callable[[float], Terrain] = map_noise_to_terrain,
    ):
        if noise_generator is None:
            raise InvalidArgumentError("noise_generator is required")
        self.noise_generator = noise_generator
        self.mapper = mapper

    def generate_map(self, width: int, height: int, seed: int) -> list[list[Terrain]]:
        """Generate a terrain map indexed [y][x]."""
        _check_dimensions(width, height)
        field = self.noise_generator.generate_noise(width, height, seed)
        return [[self.mapper(value) for value in row] for row in field]


NOISE_GENERATORS: dict[str, type] = {
    "perlin": PerlinNoiseGenerator,
    "simplex": SimplexNoiseGenerator,
}
