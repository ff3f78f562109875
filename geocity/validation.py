"""After-the-fact geometry audit.

Zone separation only spaces zone centers 1000 units apart, so zone rectangles
and building footprints can still overlap. These checks report overlaps; they
never move or drop anything.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist
from shapely.geometry import Polygon

from .models import CityModel, Point

logger = logging.getLogger(__name__)


@dataclass
class Overlap:
    first: str
    second: str
    area: float


@dataclass
class OverlapReport:
    zone_overlaps: List[Overlap] = field(default_factory=list)
    building_overlaps: List[Overlap] = field(default_factory=list)
    min_zone_separation: float = float("inf")

    @property
    def clean(self) -> bool:
        return not self.zone_overlaps and not self.building_overlaps


def _pairwise_overlaps(items: Sequence[Tuple[str, Sequence[Point]]]) -> List[Overlap]:
    polygons = [(item_id, Polygon([(p.x, p.y) for p in points]))
                for item_id, points in items if len(points) >= 3]
    overlaps = []
    for i, (id_a, poly_a) in enumerate(polygons):
        for id_b, poly_b in polygons[i + 1:]:
            # touching edges are not an overlap
            if poly_a.intersects(poly_b):
                area = poly_a.intersection(poly_b).area
                if area > 0:
                    overlaps.append(Overlap(id_a, id_b, area))
    return overlaps


def find_zone_overlaps(model: CityModel) -> List[Overlap]:
    return _pairwise_overlaps([(z.id, list(z.boundary)) for z in model.zones])


def find_building_overlaps(model: CityModel) -> List[Overlap]:
    return _pairwise_overlaps([(b.id, b.footprint) for b in model.buildings])


def min_zone_separation(model: CityModel) -> float:
    """Smallest distance between two zone centers (inf with fewer than two zones)"""
    if len(model.zones) < 2:
        return float("inf")
    centers = np.array([tuple(z.center) for z in model.zones])
    return float(pdist(centers).min())


def audit_city(model: CityModel) -> OverlapReport:
    report = OverlapReport(
        zone_overlaps=find_zone_overlaps(model),
        building_overlaps=find_building_overlaps(model),
        min_zone_separation=min_zone_separation(model),
    )
    logger.info(f"Overlap audit: {len(report.zone_overlaps)} zone pairs, "
                f"{len(report.building_overlaps)} building pairs, "
                f"min zone separation {report.min_zone_separation:.0f}")
    return report
