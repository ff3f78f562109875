import logging
import math
from itertools import combinations
from typing import List, Sequence

import numpy as np

from . import config
from .models import Point, Road, RoadType, Zone, ZoneType
from .terrain_generator import TerrainField

logger = logging.getLogger(__name__)

# (type, width, speed limit) by connection priority
HIGH_PRIORITY_ROAD = (RoadType.ARTERIAL, 12, 60)
NORMAL_PRIORITY_ROAD = (RoadType.COLLECTOR, 8, 40)


class RoadNetworkBuilder:
    """Connects every pair of zones with a terrain-following road"""

    def __init__(self, terrain: TerrainField, rng: np.random.RandomState):
        self.terrain = terrain
        self.rng = rng
        self.roads: List[Road] = []

    def build(self, zones: Sequence[Zone]) -> List[Road]:
        logger.info("Generating terrain-aware road network...")
        for index, (zone, other) in enumerate(combinations(zones, 2)):
            high = ZoneType.DOWNTOWN in (zone.type, other.type)
            road_type, width, speed = HIGH_PRIORITY_ROAD if high else NORMAL_PRIORITY_ROAD
            path = self.terrain_path(zone.center, other.center)

            self.roads.append(Road(
                id=f"road_{index}",
                type=road_type,
                path=path,
                width=width,
                speed_limit=speed,
                terrain_difficulty=self.path_difficulty(path),
                from_zone=zone.id,
                to_zone=other.id,
            ))
        logger.info(f"Generated {len(self.roads)} terrain-following roads")
        return self.roads

    def terrain_path(self, start: Point, end: Point) -> List[Point]:
        """Straight line whose interior points detour to flatter, dry ground"""
        distance = start.distance_to(end)
        segments = max(config.ROAD_MIN_SEGMENTS, int(distance // config.ROAD_SEGMENT_LENGTH))
        path = [start]

        for i in range(1, segments):
            t = i / segments
            direct_x = start.x + (end.x - start.x) * t
            direct_y = start.y + (end.y - start.y) * t

            best = Point(direct_x, direct_y)
            best_slope = self.terrain.slope(direct_x, direct_y)

            for _ in range(config.ROAD_DETOUR_ATTEMPTS):
                offset_x = direct_x + (self.rng.random() - 0.5) * config.ROAD_DETOUR_SPAN
                offset_y = direct_y + (self.rng.random() - 0.5) * config.ROAD_DETOUR_SPAN
                slope = self.terrain.slope(offset_x, offset_y)

                if slope < best_slope and not self.terrain.is_water(offset_x, offset_y):
                    best_slope = slope
                    best = Point(offset_x, offset_y)

            path.append(best)

        path.append(end)
        return path

    def path_difficulty(self, path: Sequence[Point]) -> float:
        """Mean slope over every point of the path"""
        if not path:
            return 0.0
        return math.fsum(self.terrain.slope(p.x, p.y) for p in path) / len(path)
