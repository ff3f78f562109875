from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .config import TerrainParameters


class ZoneType(IntEnum):
    RESIDENTIAL = 0
    COMMERCIAL = 1
    INDUSTRIAL = 2
    DOWNTOWN = 3
    PARK = 4
    WATER = 5


class RoadType(IntEnum):
    HIGHWAY = 0
    ARTERIAL = 1
    COLLECTOR = 2
    LOCAL = 3


class POIType(IntEnum):
    HOME = 0
    OFFICE = 1
    SHOP = 2
    RESTAURANT = 3
    SCHOOL = 4
    HOSPITAL = 5
    PARK = 6
    FACTORY = 7


class BuildingType(IntEnum):
    HOUSE = 0
    APARTMENT = 1
    OFFICE = 2
    STORE = 3
    WAREHOUSE = 4


class Point(NamedTuple):
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y)}


def rectangle(center: Point, width: float, height: float) -> List[Point]:
    """Axis-aligned rectangle, counter-clockwise from the min corner"""
    hw, hh = width / 2, height / 2
    return [
        Point(center.x - hw, center.y - hh),
        Point(center.x + hw, center.y - hh),
        Point(center.x + hw, center.y + hh),
        Point(center.x - hw, center.y + hh),
    ]


def polygon_bounds(points: List[Point]) -> Tuple[float, float, float, float]:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


@dataclass(frozen=True)
class Zone:
    id: str
    type: ZoneType
    boundary: Tuple[Point, ...]
    density: float
    suitability: float
    terrain_height: float
    terrain_slope: float

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return polygon_bounds(list(self.boundary))

    @property
    def center(self) -> Point:
        min_x, min_y, max_x, max_y = self.bounds
        return Point((min_x + max_x) / 2, (min_y + max_y) / 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": int(self.type),
            "boundary": [p.to_dict() for p in self.boundary],
            "density": self.density,
            "properties": {
                "terrain_suitability": self.suitability,
                "terrain_height": self.terrain_height,
                "terrain_slope": self.terrain_slope,
            },
        }


@dataclass
class Road:
    id: str
    type: RoadType
    path: List[Point]
    width: float
    speed_limit: float
    terrain_difficulty: float
    from_zone: str
    to_zone: str
    follows_contours: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": int(self.type),
            "path": [p.to_dict() for p in self.path],
            "width": self.width,
            "speed_limit": self.speed_limit,
            "properties": {
                "terrain_difficulty": self.terrain_difficulty,
                "follows_contours": self.follows_contours,
                "from_zone": self.from_zone,
                "to_zone": self.to_zone,
            },
        }


@dataclass
class POIProperties:
    name: str
    landmark: bool = False
    terrain_suitability: Optional[float] = None
    terrain_height: Optional[float] = None
    terrain_feature: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name}
        if self.landmark:
            data["landmark"] = True
        if self.terrain_suitability is not None:
            data["terrain_suitability"] = self.terrain_suitability
        if self.terrain_height is not None:
            data["terrain_height"] = self.terrain_height
        if self.terrain_feature is not None:
            data["terrain_feature"] = self.terrain_feature
        return data


@dataclass
class POI:
    id: str
    type: POIType
    position: Point
    capacity: int
    properties: POIProperties
    zone_id: Optional[str] = None

    @property
    def is_landmark(self) -> bool:
        return self.properties.landmark

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": int(self.type),
            "position": self.position.to_dict(),
            "zone_id": self.zone_id,
            "capacity": self.capacity,
            "properties": self.properties.to_dict(),
        }


@dataclass
class Building:
    id: str
    type: BuildingType
    footprint: List[Point]
    height: float
    poi_id: str
    zone_id: Optional[str]
    foundation_depth: float
    address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": int(self.type),
            "footprint": [p.to_dict() for p in self.footprint],
            "height": self.height,
            "zone_id": self.zone_id,
            "properties": {
                "poi_id": self.poi_id,
                "address": self.address,
                "terrain_adapted": True,
                "foundation_depth": self.foundation_depth,
            },
        }


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def to_dict(self) -> Dict[str, float]:
        return {"min_x": self.min_x, "min_y": self.min_y,
                "max_x": self.max_x, "max_y": self.max_y}


@dataclass
class CityMetadata:
    seed: str
    terrain_profile: str
    terrain_parameters: TerrainParameters
    generation_timestamp: str
    population_estimate: float
    average_terrain_suitability: float
    geographic_feature_count: int
    city_area: float
    version: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation_timestamp": self.generation_timestamp,
            "seed": self.seed,
            "terrain_profile": self.terrain_profile,
            "terrain_parameters": self.terrain_parameters.to_dict(),
            "geographic_features": self.geographic_feature_count,
            "average_terrain_suitability": self.average_terrain_suitability,
            "population_estimate": self.population_estimate,
            "city_area": self.city_area,
            "version": self.version,
        }


@dataclass
class CityModel:
    bounds: Bounds
    metadata: CityMetadata
    zones: List[Zone] = field(default_factory=list)
    roads: List[Road] = field(default_factory=list)
    pois: List[POI] = field(default_factory=list)
    buildings: List[Building] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bounds": self.bounds.to_dict(),
            "metadata": self.metadata.to_dict(),
            "zones": [z.to_dict() for z in self.zones],
            "roads": [r.to_dict() for r in self.roads],
            "pois": [p.to_dict() for p in self.pois],
            "buildings": [b.to_dict() for b in self.buildings],
        }
