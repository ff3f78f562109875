import json
import logging
import math
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Mapping, Tuple, Union

from .errors import InvalidCustomParameters, UnknownProfile

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "manhattan"
DEFAULT_SEED = "geo-city-v1"

# World extent (units are meters)
WORLD_HALF_EXTENT = 5000.0
PLACEMENT_HALF_EXTENT = 4000.0
CITY_AREA_KM2 = 100
MODEL_VERSION = "2.0-geographic"

# Terrain field
HEIGHT_CELL_SIZE = 10.0
HEIGHT_CACHE_CAPACITY = 250_000
BASE_NOISE_SCALE = 0.001
RIDGE_NOISE_SCALE = 0.003
RIDGE_WEIGHT = 0.7
DETAIL_WEIGHT = 0.3
SLOPE_DELTA = 50.0
WATER_SEARCH_STEP = 100
WATER_SEARCH_MAX_RADIUS = 5000

# Placement budgets and acceptance thresholds
ZONE_ATTEMPTS = 50
ZONE_MIN_SEPARATION = 1000.0
ZONE_MIN_SUITABILITY = 0.2
POI_ATTEMPTS = 10
POIS_PER_DENSITY = 40
POI_MIN_SUITABILITY = 0.1
LANDMARK_ATTEMPTS = 30
LANDMARK_MIN_SEPARATION = 300.0
LANDMARK_MIN_SCORE = 0.3

# Roads
ROAD_SEGMENT_LENGTH = 300.0
ROAD_MIN_SEGMENTS = 8
ROAD_DETOUR_ATTEMPTS = 8
ROAD_DETOUR_SPAN = 300.0

BUILDING_MIN_CAPACITY = 50


@dataclass(frozen=True)
class TerrainParameters:
    mountain_height: float = 100.0
    water_level: float = 0.0
    hilliness: float = 0.5
    river_probability: float = 0.3
    coastal_distance: float = 5000.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class TerrainProfile:
    key: str
    name: str
    parameters: TerrainParameters
    recommended_scale: float = 1.0


TERRAIN_PROFILES: Dict[str, TerrainProfile] = {
    "manhattan": TerrainProfile(
        "manhattan", "Manhattan",
        TerrainParameters(mountain_height=25, water_level=0, hilliness=0.1,
                          river_probability=0.9, coastal_distance=800)),
    "san_francisco": TerrainProfile(
        "san_francisco", "San Francisco",
        TerrainParameters(mountain_height=180, water_level=0, hilliness=0.8,
                          river_probability=0.2, coastal_distance=1500)),
    "denver": TerrainProfile(
        "denver", "Denver",
        TerrainParameters(mountain_height=200, water_level=-1600, hilliness=0.3,
                          river_probability=0.4, coastal_distance=1_600_000),
        recommended_scale=10),
    "miami": TerrainProfile(
        "miami", "Miami",
        TerrainParameters(mountain_height=8, water_level=2, hilliness=0.02,
                          river_probability=0.6, coastal_distance=400)),
    "seattle": TerrainProfile(
        "seattle", "Seattle",
        TerrainParameters(mountain_height=160, water_level=0, hilliness=0.6,
                          river_probability=0.5, coastal_distance=1200)),
    "chicago": TerrainProfile(
        "chicago", "Chicago",
        TerrainParameters(mountain_height=12, water_level=0, hilliness=0.03,
                          river_probability=0.3, coastal_distance=600),
        recommended_scale=5),
    "las_vegas": TerrainProfile(
        "las_vegas", "Las Vegas",
        TerrainParameters(mountain_height=300, water_level=-600, hilliness=0.4,
                          river_probability=0.1, coastal_distance=400_000),
        recommended_scale=10),
    "new_orleans": TerrainProfile(
        "new_orleans", "New Orleans",
        TerrainParameters(mountain_height=6, water_level=3, hilliness=0.05,
                          river_probability=0.8, coastal_distance=160_000)),
    "custom": TerrainProfile(
        "custom", "Custom",
        TerrainParameters(mountain_height=100, water_level=0, hilliness=0.5,
                          river_probability=0.3, coastal_distance=5000)),
}

# camelCase spellings accepted from JSON overrides
_PARAMETER_ALIASES = {
    "mountainHeight": "mountain_height",
    "waterLevel": "water_level",
    "riverProbability": "river_probability",
    "coastalDistance": "coastal_distance",
}

CustomParameters = Union[Mapping[str, Any], str, None]


def get_profile(name: str) -> TerrainProfile:
    """Look up a profile by key, raising UnknownProfile if missing"""
    try:
        return TERRAIN_PROFILES[name]
    except (KeyError, TypeError):
        raise UnknownProfile(f"Unknown terrain profile: {name!r}") from None


def parse_custom_parameters(custom: CustomParameters) -> Dict[str, float]:
    """Normalise a partial override into snake_case float values.

    Accepts a mapping or a JSON object string. Raises InvalidCustomParameters
    on anything that cannot be applied as a whole.
    """
    if isinstance(custom, str):
        try:
            custom = json.loads(custom)
        except ValueError as e:
            raise InvalidCustomParameters(f"Unparsable JSON: {e}") from e

    if not isinstance(custom, Mapping):
        raise InvalidCustomParameters(
            f"Expected a mapping of overrides, got {type(custom).__name__}")

    fields = TerrainParameters.__dataclass_fields__
    overrides = {}
    for raw_key, raw_value in custom.items():
        key = _PARAMETER_ALIASES.get(raw_key, raw_key)
        if key not in fields:
            raise InvalidCustomParameters(f"Unknown terrain parameter: {raw_key!r}")
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            raise InvalidCustomParameters(f"{raw_key} must be a number, got {raw_value!r}")
        try:
            value = float(raw_value)
        except OverflowError:
            raise InvalidCustomParameters(f"{raw_key} is out of range") from None
        if not math.isfinite(value):
            raise InvalidCustomParameters(f"{raw_key} must be finite")
        overrides[key] = value
    return overrides


def resolve_terrain(profile_name: str = DEFAULT_PROFILE,
                    custom: CustomParameters = None) -> Tuple[TerrainProfile, TerrainParameters]:
    """Effective profile and parameters; never raises.

    Unknown profiles fall back to manhattan, malformed overrides are dropped
    entirely in favour of the profile defaults.
    """
    try:
        profile = get_profile(profile_name)
    except UnknownProfile as e:
        logger.warning(f"{e}; falling back to '{DEFAULT_PROFILE}'")
        profile = TERRAIN_PROFILES[DEFAULT_PROFILE]

    params = profile.parameters
    if custom is not None:
        try:
            params = replace(params, **parse_custom_parameters(custom))
        except InvalidCustomParameters as e:
            logger.warning(f"Invalid custom parameters ({e}), using profile defaults")
    return profile, params
