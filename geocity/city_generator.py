import hashlib
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from . import config
from .building_registry import BuildingSynthesizer
from .config import CustomParameters, TerrainParameters
from .models import Bounds, Building, CityMetadata, CityModel, POI, POIType, Road, Zone
from .noise_utils import NoiseGenerator
from .poi import POIPlacer
from .streets import RoadNetworkBuilder
from .suitability import SuitabilityScorer
from .terrain_generator import TerrainField
from .zones import DEFAULT_ZONE_PLAN, ZonePlacer, ZoneRequest, validate_zone_plan

logger = logging.getLogger(__name__)


def derive_seeds(seed: str) -> Tuple[int, int]:
    """Two independent 32-bit seeds (placement RNG, noise) from a seed string"""
    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big"), int.from_bytes(digest[4:8], "big")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class CityModelAssembler:
    """Aggregates the generated entities and summary metadata"""

    def __init__(self, clock: Callable[[], str] = utc_timestamp):
        self.clock = clock

    def assemble(self, seed: str, profile_key: str, params: TerrainParameters,
                 zones: List[Zone], roads: List[Road], pois: List[POI],
                 buildings: List[Building]) -> CityModel:
        half = config.WORLD_HALF_EXTENT
        metadata = CityMetadata(
            seed=seed,
            terrain_profile=profile_key,
            terrain_parameters=params,
            generation_timestamp=self.clock(),
            population_estimate=self.population_estimate(pois),
            average_terrain_suitability=self.average_suitability(zones),
            geographic_feature_count=sum(1 for poi in pois if poi.is_landmark),
            city_area=config.CITY_AREA_KM2,
            version=config.MODEL_VERSION,
        )
        return CityModel(
            bounds=Bounds(-half, -half, half, half),
            metadata=metadata,
            zones=zones,
            roads=roads,
            pois=pois,
            buildings=buildings,
        )

    @staticmethod
    def population_estimate(pois: Sequence[POI]) -> float:
        return sum(1 for poi in pois if poi.type == POIType.HOME) * 2.5

    @staticmethod
    def average_suitability(zones: Sequence[Zone]) -> float:
        scored = [zone.suitability for zone in zones if zone.suitability]
        if not scored:
            return 0.0
        return sum(scored) / len(scored)


class CityGenerator:
    """Generation context: owns the RNG seed, the noise source and the terrain cache.

    Never share an instance between concurrent generations; build one per city.
    """

    def __init__(self, terrain_profile: str = config.DEFAULT_PROFILE,
                 seed: str = config.DEFAULT_SEED,
                 custom_parameters: CustomParameters = None,
                 zone_plan: Optional[Sequence[ZoneRequest]] = None,
                 clock: Callable[[], str] = utc_timestamp):
        self.seed = str(seed)
        self.zone_plan = validate_zone_plan(DEFAULT_ZONE_PLAN if zone_plan is None else zone_plan)
        self.profile, self.params = config.resolve_terrain(terrain_profile, custom_parameters)
        # the output records the profile actually used, after any fallback
        self.terrain_profile = self.profile.key

        self.rng_seed, noise_seed = derive_seeds(self.seed)
        self.noise_gen = NoiseGenerator(noise_seed)
        self.terrain = TerrainField(self.params, self.noise_gen)
        self.scorer = SuitabilityScorer(self.terrain)
        self.assembler = CityModelAssembler(clock)

    def generate(self) -> CityModel:
        logger.info(f"Generating {self.terrain_profile} city with geographic awareness...")
        logger.info(f"Terrain parameters: {self.params}")

        # every run restarts the placement stream, so repeated runs match
        rng = np.random.RandomState(self.rng_seed)
        zones = ZonePlacer(self.terrain, self.scorer, rng).place_all(self.zone_plan)
        roads = RoadNetworkBuilder(self.terrain, rng).build(zones)
        pois = POIPlacer(self.terrain, self.scorer, rng).place_all(zones, self.params)
        buildings = BuildingSynthesizer(self.terrain).synthesize(pois)

        return self.assembler.assemble(self.seed, self.terrain_profile, self.params,
                                       zones, roads, pois, buildings)


def generate_city(terrain_profile: str = config.DEFAULT_PROFILE,
                  seed: str = config.DEFAULT_SEED,
                  custom_parameters: CustomParameters = None,
                  zone_plan: Optional[Sequence[ZoneRequest]] = None) -> CityModel:
    return CityGenerator(terrain_profile, seed, custom_parameters, zone_plan).generate()
