import argparse
import logging
import time

from .city_generator import CityGenerator
from .config import DEFAULT_PROFILE, TERRAIN_PROFILES
from .exporter import export_to_json


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Terrain-aware procedural city generator")
    parser.add_argument("profile", nargs="?", default=DEFAULT_PROFILE,
                        help=f"Terrain profile ({', '.join(TERRAIN_PROFILES)})")
    parser.add_argument("seed", nargs="?", default=None,
                        help="Seed string (default: geo-<profile>-<timestamp>)")
    parser.add_argument("custom", nargs="?", default=None,
                        help='JSON terrain overrides, e.g. \'{"mountainHeight": 50}\'')
    parser.add_argument("-o", "--output", default="city_model.json", help="Output JSON path")
    parser.add_argument("--plot", default=None, help="Also save a plan-view PNG here")
    parser.add_argument("--validate", action="store_true", help="Run the overlap audit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    seed = args.seed or f"geo-{args.profile}-{int(time.time() * 1000)}"
    print(f"=== Geographic City Generator: {args.profile} ===\n")

    generator = CityGenerator(args.profile, seed, args.custom)
    city = generator.generate()
    export_to_json(city, args.output)

    meta = city.metadata
    profile = generator.profile
    print(f"\nGeographic city generated: {args.output}")
    print(f"Profile: {profile.key} ({profile.name})")
    print(f"Zones: {len(city.zones)}")
    print(f"Roads: {len(city.roads)} (terrain-following)")
    print(f"POIs: {len(city.pois)}")
    print(f"Buildings: {len(city.buildings)}")
    print(f"Geographic features: {meta.geographic_feature_count}")
    print(f"Avg terrain suitability: {meta.average_terrain_suitability * 100:.1f}%")

    params = generator.params
    print("Terrain characteristics:")
    print(f"  - Mountain height: {params.mountain_height}m")
    print(f"  - Water level: {params.water_level}m")
    print(f"  - Hilliness: {params.hilliness * 100:.0f}%")
    print(f"  - Coastal distance: {params.coastal_distance / 1000:.1f}km")

    if args.validate:
        from .validation import audit_city
        report = audit_city(city)
        print(f"\nOverlapping zone pairs: {len(report.zone_overlaps)}")
        print(f"Overlapping building pairs: {len(report.building_overlaps)}")
        print(f"Min zone separation: {report.min_zone_separation:.0f}")

    if args.plot:
        from .visualizer import render_city_map
        render_city_map(city, args.plot, terrain=generator.terrain)

    return city


if __name__ == "__main__":
    main()
