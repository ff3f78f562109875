from .city_generator import CityGenerator, CityModelAssembler, generate_city
from .config import TERRAIN_PROFILES, TerrainParameters, TerrainProfile, resolve_terrain
from .models import (Building, BuildingType, CityModel, POI, POIType, Point, Road,
                     RoadType, Zone, ZoneType)
from .zones import DEFAULT_ZONE_PLAN, ZoneRequest

__version__ = "0.1.0"
