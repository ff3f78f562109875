import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from . import config
from .errors import InvalidZonePlan
from .models import Point, Zone, ZoneType, rectangle
from .suitability import SuitabilityScorer
from .terrain_generator import TerrainField

logger = logging.getLogger(__name__)

ZONE_DENSITY = {
    ZoneType.DOWNTOWN: 0.95,
    ZoneType.COMMERCIAL: 0.8,
    ZoneType.INDUSTRIAL: 0.7,
}
DEFAULT_DENSITY = 0.6


@dataclass(frozen=True)
class ZoneRequest:
    zone_type: ZoneType
    count: int
    width: float
    height: float


DEFAULT_ZONE_PLAN = (
    ZoneRequest(ZoneType.DOWNTOWN, 1, 1500, 1000),
    ZoneRequest(ZoneType.RESIDENTIAL, 6, 1200, 800),
    ZoneRequest(ZoneType.COMMERCIAL, 3, 800, 600),
    ZoneRequest(ZoneType.INDUSTRIAL, 2, 1000, 800),
    ZoneRequest(ZoneType.PARK, 3, 600, 600),
)


def validate_zone_plan(plan: Sequence[ZoneRequest]) -> List[ZoneRequest]:
    """Reject plans that cannot be run at all"""
    checked = []
    for request in plan:
        if not isinstance(request, ZoneRequest):
            raise InvalidZonePlan(f"Expected ZoneRequest, got {request!r}")
        if request.count < 0:
            raise InvalidZonePlan(f"Negative count for {request.zone_type.name}: {request.count}")
        if request.width <= 0 or request.height <= 0:
            raise InvalidZonePlan(
                f"Zone size must be positive, got {request.width}x{request.height}")
        checked.append(request)
    return checked


class ZonePlacer:
    """Biased random search for well-suited, mutually separated zone centers"""

    def __init__(self, terrain: TerrainField, scorer: SuitabilityScorer,
                 rng: np.random.RandomState):
        self.terrain = terrain
        self.scorer = scorer
        self.rng = rng
        self.zones: List[Zone] = []

    def place_all(self, plan: Sequence[ZoneRequest] = DEFAULT_ZONE_PLAN) -> List[Zone]:
        logger.info("Generating terrain-aware zones...")
        for request in plan:
            for _ in range(request.count):
                self.place(request.zone_type, request.width, request.height)
        logger.info(f"Generated {len(self.zones)} terrain-optimized zones")
        return self.zones

    def place(self, zone_type: ZoneType, width: float, height: float) -> Optional[Zone]:
        """Place one zone, or return None when nothing clears the threshold"""
        best_location = None
        best_suitability = 0.0
        span = config.PLACEMENT_HALF_EXTENT * 2

        for _ in range(config.ZONE_ATTEMPTS):
            x = (self.rng.random() - 0.5) * span
            y = (self.rng.random() - 0.5) * span
            candidate = Point(x, y)

            if self._too_close(candidate):
                continue

            suitability = self.scorer.zone_suitability(x, y, zone_type)
            if suitability > best_suitability:
                best_suitability = suitability
                best_location = candidate

        if best_location is None or best_suitability <= config.ZONE_MIN_SUITABILITY:
            logger.debug(f"No site for {zone_type.name.lower()} zone "
                         f"(best suitability {best_suitability:.2f})")
            return None

        zone = Zone(
            id=f"{zone_type.name.lower()}_{len(self.zones)}",
            type=zone_type,
            boundary=tuple(rectangle(best_location, width, height)),
            density=ZONE_DENSITY.get(zone_type, DEFAULT_DENSITY),
            suitability=best_suitability,
            terrain_height=self.terrain.height(*best_location),
            terrain_slope=self.terrain.slope(*best_location),
        )
        self.zones.append(zone)
        logger.debug(f"{zone_type.name.lower()} zone placed at "
                     f"({best_location.x:.0f}, {best_location.y:.0f}) - "
                     f"suitability: {best_suitability:.2f}")
        return zone

    def _too_close(self, candidate: Point) -> bool:
        return any(candidate.distance_to(zone.center) < config.ZONE_MIN_SEPARATION
                   for zone in self.zones)
