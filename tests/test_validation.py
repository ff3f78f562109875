import math
import unittest

from geocity.city_generator import CityModelAssembler
from geocity.config import TERRAIN_PROFILES
from geocity.models import Building, BuildingType, Point, Zone, ZoneType, rectangle
from geocity.validation import (audit_city, find_building_overlaps, find_zone_overlaps,
                                min_zone_separation)

from helpers import fixed_clock


def zone(zone_id, x, y, w=1200, h=800):
    return Zone(zone_id, ZoneType.RESIDENTIAL, tuple(rectangle(Point(x, y), w, h)),
                0.6, 1.0, 0.0, 0.0)


def building(building_id, x, y, side=80):
    return Building(building_id, BuildingType.STORE, rectangle(Point(x, y), side, side),
                    50.0, "poi", "z", 2.0)


def city_of(zones=(), buildings=()):
    return CityModelAssembler(fixed_clock).assemble(
        "s", "manhattan", TERRAIN_PROFILES["manhattan"].parameters,
        list(zones), [], [], list(buildings))


class TestOverlapAudit(unittest.TestCase):

    def test_separated_centers_can_still_overlap(self):
        # 1000 apart, but 1200 wide rectangles share a 200 x 800 strip
        model = city_of([zone("residential_0", 0, 0), zone("residential_1", 1000, 0)])
        overlaps = find_zone_overlaps(model)
        self.assertEqual(len(overlaps), 1)
        self.assertEqual((overlaps[0].first, overlaps[0].second), ("residential_0", "residential_1"))
        self.assertAlmostEqual(overlaps[0].area, 200 * 800)
        self.assertAlmostEqual(min_zone_separation(model), 1000.0)

    def test_touching_edges_do_not_count(self):
        model = city_of([zone("a", 0, 0), zone("b", 1200, 0), zone("c", 0, 5000)])
        self.assertEqual(find_zone_overlaps(model), [])

    def test_building_overlaps(self):
        model = city_of(buildings=[building("building_0", 0, 0), building("building_1", 40, 40),
                                   building("building_2", 1000, 1000)])
        overlaps = find_building_overlaps(model)
        self.assertEqual([(o.first, o.second) for o in overlaps], [("building_0", "building_1")])
        self.assertAlmostEqual(overlaps[0].area, 40 * 40)

    def test_audit_report(self):
        report = audit_city(city_of([zone("a", 0, 0), zone("b", 3000, 4000)]))
        self.assertTrue(report.clean)
        self.assertAlmostEqual(report.min_zone_separation, 5000.0)

        report = audit_city(city_of([zone("a", 0, 0), zone("b", 500, 0)]))
        self.assertFalse(report.clean)

    def test_separation_needs_two_zones(self):
        self.assertTrue(math.isinf(min_zone_separation(city_of())))
        self.assertTrue(math.isinf(min_zone_separation(city_of([zone("a", 0, 0)]))))


if __name__ == "__main__":
    unittest.main()
