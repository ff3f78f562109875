from enum import Enum
from typing import NamedTuple, Union

from .terrain_generator import TerrainField

# Uses that may sit on water
WATER_COMPATIBLE_USES = {"water", "port"}

Use = Union[Enum, str]


class SuitabilityFactors(NamedTuple):
    flatness: float
    water_access: float
    elevation: float
    drainage: float


def use_key(use: Use) -> str:
    """ZoneType.PARK, POIType.PARK and "park" all score the same way"""
    if isinstance(use, Enum):
        return use.name.lower()
    return str(use).lower()


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class SuitabilityScorer:
    """Turns terrain samples into [0, 1] land-use scores"""

    def __init__(self, terrain: TerrainField):
        self.terrain = terrain

    def suitability_factors(self, x: float, y: float) -> SuitabilityFactors:
        height = self.terrain.height(x, y)
        slope = self.terrain.slope(x, y)
        water_distance = self.terrain.distance_to_water(x, y)

        return SuitabilityFactors(
            flatness=clamp01(1 - slope * 10),
            water_access=clamp01(1 - water_distance / 3000),
            elevation=clamp01((height + 50) / 200),
            drainage=clamp01(1 - max(0.0, -height / 20)),
        )

    def zone_suitability(self, x: float, y: float, use: Use) -> float:
        key = use_key(use)
        if self.terrain.is_water(x, y) and key not in WATER_COMPATIBLE_USES:
            return 0.0

        f = self.suitability_factors(x, y)
        suitability = 1.0

        if key == "downtown":
            suitability *= f.flatness * 0.8 + 0.2
            suitability *= f.water_access * 0.6 + 0.4
            suitability *= f.drainage * 0.8 + 0.2
        elif key == "residential":
            suitability *= f.flatness * 0.4 + 0.6
            suitability *= f.drainage * 0.9 + 0.1
            if f.elevation > 0.3:
                suitability *= 1.2
        elif key == "commercial":
            suitability *= f.flatness * 0.6 + 0.4
            suitability *= f.water_access * 0.5 + 0.5
            suitability *= f.drainage * 0.8 + 0.2
        elif key == "industrial":
            suitability *= f.flatness * 0.9 + 0.1
            suitability *= f.water_access * 0.7 + 0.3
            # low ground near the waterline
            if abs(self.terrain.height(x, y)) < 10:
                suitability *= 1.3
        elif key == "park":
            if f.elevation > 0.5:
                suitability *= 1.5
            if f.flatness < 0.3:
                suitability *= 1.3

        return clamp01(suitability)
