import math
from collections import OrderedDict
from typing import NamedTuple, Optional, Tuple

import numpy as np

from . import config
from .config import TerrainParameters
from .noise_utils import NoiseGenerator


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int
    capacity: int


class TerrainLayer:
    """Heightmap sampled from the field on a regular grid"""
    def __init__(self, heightmap: np.ndarray, extent: Tuple[float, float, float, float],
                 water_level: float):
        self.heightmap = heightmap
        self.extent = extent  # (min_x, max_x, min_y, max_y)
        self.water_level = water_level
        self.size = heightmap.shape[0]

    @property
    def water_mask(self) -> np.ndarray:
        return self.heightmap < self.water_level

    @property
    def slope_map(self) -> np.ndarray:
        min_x, max_x, _, _ = self.extent
        spacing = (max_x - min_x) / max(1, self.size - 1)
        gy, gx = np.gradient(self.heightmap, spacing)
        return np.sqrt(gx ** 2 + gy ** 2)


class TerrainField:
    """Continuous height function over the plane.

    Heights are evaluated once per 10-unit cell, at the cell center, and kept
    in a bounded LRU cache. Each instance owns its cache, so separate
    generators never share state.
    """

    def __init__(self, params: TerrainParameters, noise_gen: NoiseGenerator,
                 cache_capacity: int = config.HEIGHT_CACHE_CAPACITY):
        if cache_capacity < 0:
            raise ValueError(f"cache_capacity must be >= 0, got {cache_capacity}")
        self.params = params
        self.noise_gen = noise_gen
        self.cache_capacity = cache_capacity
        self._cache: "OrderedDict[Tuple[int, int], float]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def height(self, x: float, y: float) -> float:
        key = (math.floor(x / config.HEIGHT_CELL_SIZE), math.floor(y / config.HEIGHT_CELL_SIZE))
        cached = self._cache.get(key)
        if cached is not None:
            self._hits += 1
            self._cache.move_to_end(key)
            return cached

        self._misses += 1
        cx = (key[0] + 0.5) * config.HEIGHT_CELL_SIZE
        cy = (key[1] + 0.5) * config.HEIGHT_CELL_SIZE
        h = self._raw_height(cx, cy)

        self._cache[key] = h
        while len(self._cache) > self.cache_capacity:
            self._cache.popitem(last=False)
        return h

    def _raw_height(self, x: float, y: float) -> float:
        base = self.noise_gen.perlin(x, y, config.BASE_NOISE_SCALE)
        ridge = self.noise_gen.ridged(x, y, config.RIDGE_NOISE_SCALE) * config.RIDGE_WEIGHT
        detail = self.noise_gen.perlin(x, y, config.BASE_NOISE_SCALE * 4) * config.DETAIL_WEIGHT
        combined = base + ridge + detail
        return combined * self.params.mountain_height + self.params.water_level

    def is_water(self, x: float, y: float) -> bool:
        return self.height(x, y) < self.params.water_level

    def slope(self, x: float, y: float, delta: float = config.SLOPE_DELTA) -> float:
        """Central-difference gradient magnitude"""
        slope_x = abs(self.height(x + delta, y) - self.height(x - delta, y)) / (2 * delta)
        slope_y = abs(self.height(x, y + delta) - self.height(x, y - delta)) / (2 * delta)
        return math.sqrt(slope_x * slope_x + slope_y * slope_y)

    def distance_to_water(self, x: float, y: float) -> float:
        """Ring search for the nearest sampled water.

        Heuristic lower bound, not an exact distance: rings are 100 units
        apart and sparsely sampled, the center itself is never tested (so the
        minimum is 100 even on water), and when no ring up to 5000 hits water
        the profile's coastal_distance is returned instead.
        """
        step = config.WATER_SEARCH_STEP
        for radius in range(step, config.WATER_SEARCH_MAX_RADIUS + 1, step):
            samples = max(8, radius // 100)
            for i in range(samples):
                angle = (i / samples) * 2 * math.pi
                if self.is_water(x + math.cos(angle) * radius, y + math.sin(angle) * radius):
                    return float(radius)
        return float(self.params.coastal_distance)

    def sample_grid(self, extent: Optional[Tuple[float, float, float, float]] = None,
                    resolution: int = 100) -> TerrainLayer:
        """Heightmap over extent (min_x, max_x, min_y, max_y); rows follow y"""
        if extent is None:
            half = config.WORLD_HALF_EXTENT
            extent = (-half, half, -half, half)
        min_x, max_x, min_y, max_y = extent
        xs = np.linspace(min_x, max_x, resolution)
        ys = np.linspace(min_y, max_y, resolution)
        h = np.zeros((resolution, resolution))
        for j, y in enumerate(ys):
            for i, x in enumerate(xs):
                h[j, i] = self.height(x, y)
        return TerrainLayer(h, extent, self.params.water_level)

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, len(self._cache), self.cache_capacity)

    def clear_cache(self):
        self._cache.clear()
        self._hits = self._misses = 0
