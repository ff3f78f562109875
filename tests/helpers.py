"""Stub terrains and scripted RNGs shared by the test modules."""
from typing import Callable, Iterable

from geocity.config import TerrainParameters
from geocity.models import ZoneType
from geocity.noise_utils import NoiseGenerator
from geocity.terrain_generator import TerrainField
from geocity.zones import ZoneRequest

SMALL_PLAN = (
    ZoneRequest(ZoneType.DOWNTOWN, 1, 1500, 1000),
    ZoneRequest(ZoneType.RESIDENTIAL, 2, 1200, 800),
    ZoneRequest(ZoneType.PARK, 1, 600, 600),
)


def fixed_clock() -> str:
    return "2026-01-01T00:00:00+00:00"


class FunctionTerrain(TerrainField):
    """Terrain whose raw height is an explicit function of (x, y)"""

    def __init__(self, fn: Callable[[float, float], float],
                 params: TerrainParameters = None, cache_capacity: int = 250_000):
        super().__init__(params or TerrainParameters(), NoiseGenerator(0), cache_capacity)
        self.fn = fn

    def _raw_height(self, x: float, y: float) -> float:
        return self.fn(x, y)


def flat_terrain(height: float = 0.0, water_level: float = 0.0,
                 coastal_distance: float = 1500.0) -> FunctionTerrain:
    params = TerrainParameters(mountain_height=0.0, water_level=water_level,
                               coastal_distance=coastal_distance)
    return FunctionTerrain(lambda x, y: height, params)


class ScriptedRng:
    """Stands in for RandomState.random(); cycles through the given values"""

    def __init__(self, values: Iterable[float]):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
