import logging
import math
from typing import Dict, List, Sequence

from . import config
from .models import Building, BuildingType, POI, POIType, rectangle
from .terrain_generator import TerrainField

logger = logging.getLogger(__name__)

POI_BUILDING_TYPES: Dict[POIType, BuildingType] = {
    POIType.HOME: BuildingType.APARTMENT,
    POIType.OFFICE: BuildingType.OFFICE,
    POIType.SHOP: BuildingType.STORE,
    POIType.RESTAURANT: BuildingType.STORE,
    POIType.SCHOOL: BuildingType.OFFICE,
    POIType.HOSPITAL: BuildingType.OFFICE,
    POIType.PARK: BuildingType.APARTMENT,
    POIType.FACTORY: BuildingType.WAREHOUSE,
}


def footprint_side(capacity: int) -> float:
    return math.sqrt(capacity) * 8


def building_height(capacity: int, terrain_height: float = 0.0) -> float:
    """Base height grows with sqrt(capacity); high ground adds a small bonus"""
    base_height = 30 + math.sqrt(capacity) * 2
    terrain_bonus = max(0.0, terrain_height * 0.05)
    return base_height + terrain_bonus


def foundation_depth(slope: float) -> float:
    """Deeper foundations for steeper terrain"""
    return max(2.0, slope * 50)


class BuildingSynthesizer:
    """One building per POI above the capacity threshold"""

    def __init__(self, terrain: TerrainField,
                 min_capacity: int = config.BUILDING_MIN_CAPACITY):
        self.terrain = terrain
        self.min_capacity = min_capacity

    def synthesize(self, pois: Sequence[POI]) -> List[Building]:
        logger.info("Generating terrain-adapted buildings...")
        candidates = [poi for poi in pois if poi.capacity > self.min_capacity]
        buildings = [self.building_for(poi, index) for index, poi in enumerate(candidates)]
        logger.info(f"Generated {len(buildings)} terrain-adapted buildings")
        return buildings

    def building_for(self, poi: POI, index: int) -> Building:
        x, y = poi.position
        terrain_height = poi.properties.terrain_height or 0.0
        side = footprint_side(poi.capacity)
        return Building(
            id=f"building_{index}",
            type=POI_BUILDING_TYPES.get(poi.type, BuildingType.APARTMENT),
            footprint=rectangle(poi.position, side, side),
            height=building_height(poi.capacity, terrain_height),
            poi_id=poi.id,
            zone_id=poi.zone_id,
            foundation_depth=foundation_depth(self.terrain.slope(x, y)),
            address=f"{poi.properties.name or 'Building'} {index + 1}",
        )
