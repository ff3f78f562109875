import unittest

import numpy as np

from geocity.errors import InvalidZonePlan
from geocity.models import Point, ZoneType
from geocity.suitability import SuitabilityScorer
from geocity.zones import DEFAULT_ZONE_PLAN, ZonePlacer, ZoneRequest, validate_zone_plan

from helpers import ScriptedRng, flat_terrain


def placer_on(terrain, rng=None) -> ZonePlacer:
    return ZonePlacer(terrain, SuitabilityScorer(terrain), rng or np.random.RandomState(1))


class TestZonePlacer(unittest.TestCase):

    def test_places_separated_rectangles_on_flat_ground(self):
        placer = placer_on(flat_terrain())
        for _ in range(3):
            self.assertIsNotNone(placer.place(ZoneType.RESIDENTIAL, 1200, 800))

        zones = placer.zones
        self.assertEqual([z.id for z in zones], ["residential_0", "residential_1", "residential_2"])
        for zone in zones:
            min_x, min_y, max_x, max_y = zone.bounds
            self.assertAlmostEqual(max_x - min_x, 1200)
            self.assertAlmostEqual(max_y - min_y, 800)
            self.assertEqual(len(zone.boundary), 4)
            self.assertEqual(zone.density, 0.6)
            self.assertEqual(zone.suitability, 1.0)
            self.assertEqual(zone.terrain_slope, 0.0)
            self.assertLessEqual(abs(zone.center.x), 4000)
            self.assertLessEqual(abs(zone.center.y), 4000)
        for i, zone in enumerate(zones):
            for other in zones[i + 1:]:
                self.assertGreaterEqual(zone.center.distance_to(other.center), 1000)

    def test_density_by_type(self):
        placer = placer_on(flat_terrain())
        expected = {ZoneType.DOWNTOWN: 0.95, ZoneType.COMMERCIAL: 0.8,
                    ZoneType.INDUSTRIAL: 0.7, ZoneType.PARK: 0.6}
        for zone_type, density in expected.items():
            zone = placer.place(zone_type, 600, 600)
            self.assertEqual(zone.density, density)

    def test_scripted_draw_sets_center(self):
        # (r - 0.5) * 8000 with r = 0.75 and 0.5
        placer = placer_on(flat_terrain(), ScriptedRng([0.75, 0.5]))
        zone = placer.place(ZoneType.PARK, 600, 600)
        self.assertEqual(zone.center, Point(2000.0, 0.0))
        self.assertEqual(zone.boundary[0], Point(1700.0, -300.0))

    def test_crowded_candidates_are_skipped(self):
        placer = placer_on(flat_terrain(), ScriptedRng([0.75, 0.5]))
        self.assertIsNotNone(placer.place(ZoneType.PARK, 600, 600))
        # every later candidate lands on the first center
        self.assertIsNone(placer.place(ZoneType.PARK, 600, 600))
        self.assertEqual(len(placer.zones), 1)

    def test_all_water_places_nothing(self):
        placer = placer_on(flat_terrain(height=-5.0, water_level=0.0))
        self.assertIsNone(placer.place(ZoneType.RESIDENTIAL, 1200, 800))
        self.assertEqual(placer.zones, [])

    def test_threshold_rejects_poor_sites(self):
        # downtown scores 1.0 * 0.4 * 0.2 = 0.08 everywhere
        placer = placer_on(flat_terrain(height=-30.0, water_level=-100.0, coastal_distance=5000.0))
        self.assertIsNone(placer.place(ZoneType.DOWNTOWN, 1500, 1000))

    def test_place_all_skips_failed_slots(self):
        placer = placer_on(flat_terrain(), ScriptedRng([0.75, 0.5]))
        plan = (ZoneRequest(ZoneType.RESIDENTIAL, 3, 1200, 800),)
        zones = placer.place_all(plan)
        self.assertEqual(len(zones), 1)

    def test_zone_count_never_exceeds_plan(self):
        placer = placer_on(flat_terrain())
        zones = placer.place_all(DEFAULT_ZONE_PLAN)
        self.assertLessEqual(len(zones), sum(r.count for r in DEFAULT_ZONE_PLAN))
        for zone_type in ZoneType:
            requested = sum(r.count for r in DEFAULT_ZONE_PLAN if r.zone_type == zone_type)
            self.assertLessEqual(sum(1 for z in zones if z.type == zone_type), requested)


class TestValidateZonePlan(unittest.TestCase):

    def test_default_plan_is_valid(self):
        self.assertEqual(validate_zone_plan(DEFAULT_ZONE_PLAN), list(DEFAULT_ZONE_PLAN))

    def test_zero_count_is_allowed(self):
        plan = [ZoneRequest(ZoneType.PARK, 0, 600, 600)]
        self.assertEqual(validate_zone_plan(plan), plan)

    def test_rejects_negative_count(self):
        with self.assertRaises(InvalidZonePlan):
            validate_zone_plan([ZoneRequest(ZoneType.PARK, -1, 600, 600)])

    def test_rejects_non_positive_size(self):
        with self.assertRaises(InvalidZonePlan):
            validate_zone_plan([ZoneRequest(ZoneType.PARK, 1, 0, 600)])
        with self.assertRaises(ValueError):
            validate_zone_plan([ZoneRequest(ZoneType.PARK, 1, 600, -5)])

    def test_rejects_foreign_entries(self):
        with self.assertRaises(InvalidZonePlan):
            validate_zone_plan([(ZoneType.PARK, 1, 600, 600)])


if __name__ == "__main__":
    unittest.main()
