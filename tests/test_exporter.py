import os
import tempfile
import unittest

from geocity.city_generator import CityGenerator
from geocity.exporter import export_to_json, load_json

from helpers import SMALL_PLAN, fixed_clock


class TestExporter(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.city = CityGenerator("miami", "export-me", zone_plan=SMALL_PLAN,
                                 clock=fixed_clock).generate()

    def test_writes_the_model_as_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "city.json")
            self.assertEqual(export_to_json(self.city, path), path)
            data = load_json(path)

        self.assertEqual(data, self.city.to_dict())
        self.assertEqual(data["metadata"]["seed"], "export-me")
        self.assertEqual(data["metadata"]["terrain_profile"], "miami")
        self.assertEqual(data["metadata"]["generation_timestamp"], fixed_clock())
        self.assertEqual(len(data["zones"]), len(self.city.zones))

    def test_landmark_properties_survive(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = export_to_json(self.city, os.path.join(tmp, "city.json"))
            data = load_json(path)
        # miami's river_probability 0.6 always adds the bridge
        bridge = next(p for p in data["pois"] if p["id"] == "river_crossing")
        self.assertTrue(bridge["properties"]["landmark"])
        self.assertEqual(bridge["properties"]["terrain_feature"], "river_crossing")
        self.assertNotIn("terrain_suitability", bridge["properties"])
        self.assertIsNone(bridge["zone_id"])
        self.assertEqual(bridge["position"], {"x": 0.0, "y": 0.0})


if __name__ == "__main__":
    unittest.main()
