import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import config
from .config import TerrainParameters
from .models import POI, POIProperties, POIType, Point, Zone, ZoneType
from .suitability import SuitabilityScorer
from .terrain_generator import TerrainField

logger = logging.getLogger(__name__)

# Cumulative (threshold, type) pairs drawn against one uniform sample
ZONE_POI_MIX = {
    ZoneType.RESIDENTIAL: ((0.8, POIType.HOME), (1.0, POIType.SHOP)),
    ZoneType.COMMERCIAL: ((0.6, POIType.SHOP), (1.0, POIType.RESTAURANT)),
    ZoneType.INDUSTRIAL: ((1.0, POIType.FACTORY),),
    ZoneType.DOWNTOWN: ((0.5, POIType.OFFICE), (1.0, POIType.SHOP)),
    ZoneType.PARK: ((1.0, POIType.PARK),),
}
DEFAULT_POI_MIX = ((1.0, POIType.SHOP),)

# base + floor(r * spread)
CAPACITY_RANGES = {
    POIType.HOME: (2, 4),
    POIType.SHOP: (20, 80),
    POIType.RESTAURANT: (30, 120),
    POIType.FACTORY: (100, 400),
    POIType.OFFICE: (50, 200),
    POIType.PARK: (100, 500),
}
DEFAULT_CAPACITY = 50

POI_NAMES = {
    POIType.HOME: "Residence",
    POIType.SHOP: "Store",
    POIType.RESTAURANT: "Restaurant",
    POIType.FACTORY: "Factory",
    POIType.OFFICE: "Office Building",
    POIType.PARK: "Park",
}


@dataclass(frozen=True)
class Landmark:
    id: str
    use: str  # scoring key passed to the suitability scorer
    poi_type: POIType
    capacity: int
    name: str
    feature: str
    anchor: Tuple[float, float]
    search_radius: float


LIGHTHOUSE = Landmark("lighthouse_main", "lighthouse", POIType.PARK, 50,
                      "Harbor Lighthouse", "coastal", (-4000.0, 0.0), 3000.0)
SCENIC_OVERLOOK = Landmark("scenic_overlook", "observatory", POIType.PARK, 100,
                           "Scenic Overlook", "elevated", (0.0, 0.0), 4000.0)
RIVER_CROSSING = Landmark("river_crossing", "bridge", POIType.SHOP, 1,
                          "Main Bridge", "river_crossing", (0.0, 0.0), 0.0)


class POIPlacer:
    """Fills zones with points of interest and adds terrain landmarks"""

    def __init__(self, terrain: TerrainField, scorer: SuitabilityScorer,
                 rng: np.random.RandomState):
        self.terrain = terrain
        self.scorer = scorer
        self.rng = rng
        self.pois: List[POI] = []
        self._named = 0

    def place_all(self, zones: Sequence[Zone], params: TerrainParameters) -> List[POI]:
        logger.info("Generating terrain-aware POIs and landmarks...")
        for zone in zones:
            self.fill_zone(zone)
        self.add_landmarks(params)
        logger.info(f"Generated {len(self.pois)} terrain-optimized POIs")
        return self.pois

    def fill_zone(self, zone: Zone) -> List[POI]:
        min_x, min_y, max_x, max_y = zone.bounds
        target = int(math.floor(zone.density * config.POIS_PER_DENSITY))
        placed = []

        for i in range(target):
            best_location = None
            best_type = None
            best_suitability = 0.0

            for _ in range(config.POI_ATTEMPTS):
                x = min_x + self.rng.random() * (max_x - min_x)
                y = min_y + self.rng.random() * (max_y - min_y)
                poi_type = self.choose_poi_type(zone.type)
                suitability = self.scorer.zone_suitability(x, y, poi_type)

                if suitability > best_suitability:
                    best_suitability = suitability
                    best_location = Point(x, y)
                    best_type = poi_type

            if best_location is None or best_suitability <= config.POI_MIN_SUITABILITY:
                continue

            poi = POI(
                id=f"poi_{zone.id}_{i}",
                type=best_type,
                position=best_location,
                capacity=self.poi_capacity(best_type),
                properties=POIProperties(
                    name=self._next_name(best_type),
                    terrain_suitability=best_suitability,
                    terrain_height=self.terrain.height(*best_location),
                ),
                zone_id=zone.id,
            )
            self.pois.append(poi)
            placed.append(poi)
        return placed

    def choose_poi_type(self, zone_type: ZoneType) -> POIType:
        r = self.rng.random()
        for threshold, poi_type in ZONE_POI_MIX.get(zone_type, DEFAULT_POI_MIX):
            if r < threshold:
                return poi_type
        return poi_type

    def poi_capacity(self, poi_type: POIType) -> int:
        if poi_type not in CAPACITY_RANGES:
            return DEFAULT_CAPACITY
        base, spread = CAPACITY_RANGES[poi_type]
        return base + int(self.rng.random() * spread)

    def _next_name(self, poi_type: POIType) -> str:
        self._named += 1
        return f"{POI_NAMES.get(poi_type, 'POI')} {self._named}"

    # --- Landmarks ---

    def add_landmarks(self, params: TerrainParameters) -> List[POI]:
        """Profile-conditioned landmarks.

        Separation is checked against the POIs that existed before the first
        landmark, so landmarks are not separated from each other.
        """
        existing = [poi.position for poi in self.pois]
        added = []

        if params.coastal_distance < 5000:
            location = self.find_landmark_site(LIGHTHOUSE, existing)
            if location:
                added.append(self._landmark_poi(LIGHTHOUSE, *location))
                logger.info("Lighthouse added at coastal location")

        if params.mountain_height > 100:
            location = self.find_landmark_site(SCENIC_OVERLOOK, existing)
            if location:
                added.append(self._landmark_poi(SCENIC_OVERLOOK, *location))
                logger.info("Scenic overlook added at elevated location")

        if params.river_probability > 0.5:
            origin = Point(*RIVER_CROSSING.anchor)
            added.append(self._landmark_poi(RIVER_CROSSING, origin, None))
            logger.info("River crossing bridge added")

        self.pois.extend(added)
        return added

    def find_landmark_site(self, landmark: Landmark,
                           existing: Sequence[Point]) -> Optional[Tuple[Point, float]]:
        """Radial search around the landmark anchor; (location, score) or None"""
        cx, cy = landmark.anchor
        best_location = None
        best_score = 0.0

        for attempt in range(config.LANDMARK_ATTEMPTS):
            angle = (attempt / config.LANDMARK_ATTEMPTS) * 2 * math.pi
            distance = self.rng.random() * landmark.search_radius
            candidate = Point(cx + math.cos(angle) * distance, cy + math.sin(angle) * distance)

            if any(candidate.distance_to(p) < config.LANDMARK_MIN_SEPARATION for p in existing):
                continue

            score = self.landmark_score(landmark, candidate)
            if score > best_score:
                best_score = score
                best_location = candidate

        if best_location is None or best_score <= config.LANDMARK_MIN_SCORE:
            return None
        return best_location, best_score

    def landmark_score(self, landmark: Landmark, p: Point) -> float:
        score = self.scorer.zone_suitability(p.x, p.y, landmark.use)
        if score == 0.0:
            return score
        elevation = self.scorer.suitability_factors(p.x, p.y).elevation
        if landmark is LIGHTHOUSE:
            score *= max(0.0, 1 - self.terrain.distance_to_water(p.x, p.y) / 500)
            score *= elevation
        elif landmark is SCENIC_OVERLOOK:
            score *= elevation ** 2
        return score

    def _landmark_poi(self, landmark: Landmark, position: Point,
                      score: Optional[float]) -> POI:
        return POI(
            id=landmark.id,
            type=landmark.poi_type,
            position=position,
            capacity=landmark.capacity,
            properties=POIProperties(
                name=landmark.name,
                landmark=True,
                terrain_suitability=score,
                terrain_height=self.terrain.height(*position),
                terrain_feature=landmark.feature,
            ),
            zone_id=None,
        )
