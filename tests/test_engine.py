import json
import os
import tempfile
import unittest

from garden_sim.simulation.engine import GardenEngine
from garden_sim.viz.logger import GardenLogger
from garden_sim.world.plants import PlantCatalog, PotSize
from garden_sim.world.pots import PotStatus
from garden_sim.world.registry import SpawnPoint

CATALOG_DATA = {
    "daisy": {"required_pot_size": "SMALL", "growth_days": 0.5, "drain_rate": 0.1, "item_type": "FLOWER"},
    "pumpkin": {"required_pot_size": "LARGE", "growth_days": 3.0, "drain_rate": 0.2, "item_type": "VEGETABLE"},
}

SPAWN_POINTS = [
    SpawnPoint(position=(0.0, 0.0, 0.0), size=PotSize.SMALL),
    SpawnPoint(position=(1.0, 0.0, 0.0), size=PotSize.MEDIUM),
    SpawnPoint(position=(2.0, 0.0, 0.0), size=PotSize.LARGE, unlock_level=2),
]


class EngineTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.save_path = os.path.join(self._tmp.name, "gamesave.json")
        self.engine = self.make_engine()
        self.engine.initialize({"daisy": 3, "pumpkin": 1})
        self.small, self.medium = self.engine.registry.pots

    def tearDown(self):
        self._tmp.cleanup()

    def make_engine(self, seed=3):
        return GardenEngine(
            seed=seed,
            catalog=PlantCatalog.from_dict(CATALOG_DATA),
            spawn_points=SPAWN_POINTS,
            speed_factor=3,
            save_path=self.save_path,
            logger=GardenLogger(stdout=False),
        )


class TestEngineCommands(EngineTestCase):
    def test_initialize(self):
        self.assertEqual(len(self.engine.registry), 2)
        self.assertEqual(self.engine.inventory.count("daisy"), 3)
        self.assertEqual(self.engine.clock.day, 1)
        self.assertEqual(self.engine.clock.hour, 6)

    def test_plant_consumes_one_seed(self):
        result = self.engine.plant(self.small.pot_id, "daisy")
        self.assertTrue(result)
        self.assertEqual(self.engine.inventory.count("daisy"), 2)
        self.assertEqual(self.small.birth, self.engine.clock.now)

    def test_failed_plant_keeps_seed(self):
        result = self.engine.plant(self.small.pot_id, "pumpkin")
        self.assertFalse(result)
        self.assertEqual(self.engine.inventory.count("pumpkin"), 1)
        self.assertTrue(self.small.is_empty)

    def test_plant_without_seed_fails(self):
        self.engine.inventory.remove_item("daisy", 3)
        self.assertFalse(self.engine.plant(self.small.pot_id, "daisy"))

    def test_unknown_pot_or_plant(self):
        self.assertFalse(self.engine.plant("Pot_missing", "daisy"))
        self.assertFalse(self.engine.plant(self.small.pot_id, "orchid"))
        self.assertFalse(self.engine.water("Pot_missing"))
        self.assertFalse(self.engine.harvest("Pot_missing"))
        self.assertFalse(self.engine.unplant("Pot_missing"))

    def test_grow_and_harvest(self):
        self.engine.plant(self.small.pot_id, "daisy")
        self.engine.advance_hours(6)
        self.assertEqual(self.small.status, PotStatus.PLANTED)
        self.assertFalse(self.engine.harvest(self.small.pot_id))

        self.engine.advance_hours(6.5)
        self.assertEqual(self.small.status, PotStatus.READY_TO_HARVEST)
        result = self.engine.harvest(self.small.pot_id)
        self.assertTrue(result)
        self.assertEqual(self.engine.inventory.count("daisy"), 3)
        self.assertEqual(self.engine.metrics.total_harvested, {"daisy": 1})

    def test_unplant_returns_seed(self):
        self.engine.plant(self.medium.pot_id, "daisy")
        self.assertTrue(self.engine.unplant(self.medium.pot_id))
        self.assertEqual(self.engine.inventory.count("daisy"), 3)
        self.assertTrue(self.medium.is_empty)

    def test_tend_plants_waters_and_harvests(self):
        counts = self.engine.tend()
        self.assertEqual(counts["planted"], 2)
        self.assertFalse(self.small.is_empty)
        self.assertFalse(self.medium.is_empty)

        self.engine.advance_hours(13)
        counts = self.engine.tend()
        self.assertEqual(counts["harvested"], 2)


class TestEngineTicking(EngineTestCase):
    def test_pots_see_the_advanced_clock(self):
        seen = []
        self.engine.plant(self.small.pot_id, "daisy")
        self.engine.set_hour_callback(lambda day, hour, metrics: seen.append((hour, self.small.last_drain_hour)))
        self.engine.advance_hours(3)
        self.assertEqual(seen, [(7, 7), (8, 8), (9, 9)])

    def test_metrics_sampled_every_hour(self):
        self.engine.advance_hours(5)
        self.assertEqual(len(self.engine.metrics.snapshots), 5)
        self.assertEqual(self.engine.metrics.snapshots[-1].hour, 11)

    def test_day_rollover_flushes_log(self):
        self.engine.advance_hours(24)
        self.assertEqual(self.engine.clock.day, 2)
        self.assertEqual(self.engine.clock.hour, 6)

    def test_run_rejects_bad_step(self):
        with self.assertRaises(ValueError):
            self.engine.run(10, step=0)


class TestEnginePersistence(EngineTestCase):
    def test_save_and_load(self):
        self.engine.plant(self.small.pot_id, "daisy")
        self.engine.advance_hours(14)
        self.engine.plant(self.medium.pot_id, "daisy")
        self.engine.progression.level_up(2)
        self.assertTrue(self.engine.save())

        other = self.make_engine(seed=77)
        self.assertTrue(other.load())
        self.assertEqual(other.clock.now, self.engine.clock.now)
        self.assertEqual(other.registry.pots, self.engine.registry.pots)
        self.assertEqual(other.inventory.totals(), self.engine.inventory.totals())
        self.assertEqual(other.progression.level, 2)

    def test_load_malformed_save_spawns_default_pots(self):
        for raw in ({"pot_data": [{"pot_id": "x"}]}, {"inventory_data": [1, 2]}, {"inventory_data": {"slots": ["daisy"]}}):
            with open(self.save_path, "w", encoding="utf-8") as f:
                json.dump(raw, f)
            other = self.make_engine()
            self.assertFalse(other.load(), msg=str(raw))
            self.assertEqual(len(other.registry), 2)
            self.assertEqual(other.inventory.totals(), {})

    def test_load_without_save_spawns_default_pots(self):
        other = self.make_engine()
        self.assertFalse(other.load())
        self.assertEqual(len(other.registry), 2)
        self.assertTrue(all(p.is_empty for p in other.registry))


if __name__ == "__main__":
    unittest.main()
