import unittest

import numpy as np

from garden_sim.core.clock import SimTime
from garden_sim.core.config import DEFAULT_SPAWN_POINTS
from garden_sim.core.progression import Progression
from garden_sim.viz.logger import GardenLogger
from garden_sim.world.plants import PlantCatalog, PotSize
from garden_sim.world.pots import GrowthStage, PotStatus
from garden_sim.world.registry import PotRegistry, SpawnPoint, default_spawn_points

CATALOG_DATA = {
    "fern": {"required_pot_size": "SMALL", "growth_days": 1.0, "drain_rate": 0.2},
    "rose": {"required_pot_size": "MEDIUM", "growth_days": 2.0, "drain_rate": 0.1},
}

SPAWN_POINTS = [
    SpawnPoint(position=(0.0, 0.0, 0.0), size=PotSize.SMALL, unlock_level=0),
    SpawnPoint(position=(1.0, 0.0, 0.0), size=PotSize.MEDIUM, unlock_level=0, rotation_y=90.0),
    SpawnPoint(position=(2.0, 0.0, 0.0), size=PotSize.LARGE, unlock_level=1),
    SpawnPoint(position=(3.0, 0.0, 0.0), size=PotSize.LARGE, unlock_level=2),
]


def make_registry(level=0, seed=1, logger=None):
    return PotRegistry(
        PlantCatalog.from_dict(CATALOG_DATA),
        Progression(level=level),
        np.random.default_rng(seed),
        logger,
    )


class TestSpawning(unittest.TestCase):
    def test_locked_spawn_points_are_skipped(self):
        registry = make_registry(level=1)
        self.assertEqual(registry.initialise(SPAWN_POINTS), 3)
        self.assertEqual(sum(1 for p in registry.pots if p.size == PotSize.LARGE), 1)

    def test_create_at_locked_returns_none(self):
        registry = make_registry(level=0)
        self.assertIsNone(registry.create_at(SPAWN_POINTS[3]))
        self.assertEqual(len(registry), 0)

    def test_new_pots_are_empty_with_unique_ids(self):
        registry = make_registry(level=5)
        registry.initialise(SPAWN_POINTS)
        ids = [p.pot_id for p in registry]
        self.assertEqual(len(set(ids)), len(SPAWN_POINTS))
        for pot in registry:
            self.assertTrue(pot.pot_id.startswith("Pot_"))
            self.assertEqual(len(pot.pot_id), len("Pot_") + 8)
            self.assertEqual(pot.status, PotStatus.EMPTY)
            self.assertIs(registry.get(pot.pot_id), pot)

    def test_spawn_point_fields_copied(self):
        registry = make_registry()
        pot = registry.create_at(SPAWN_POINTS[1])
        self.assertEqual(pot.size, PotSize.MEDIUM)
        self.assertEqual(pot.position, (1.0, 0.0, 0.0))
        self.assertEqual(pot.rotation_y, 90.0)
        self.assertEqual(pot.scale, 0.2)

    def test_ids_reproducible_with_seed(self):
        a = make_registry(level=5, seed=9)
        b = make_registry(level=5, seed=9)
        a.initialise(SPAWN_POINTS)
        b.initialise(SPAWN_POINTS)
        self.assertEqual([p.pot_id for p in a], [p.pot_id for p in b])

    def test_default_spawn_points_from_config(self):
        points = default_spawn_points()
        self.assertEqual(len(points), len(DEFAULT_SPAWN_POINTS))
        registry = make_registry(level=0)
        registry.initialise()
        unlocked = sum(1 for e in DEFAULT_SPAWN_POINTS if e["unlock_level"] <= 0)
        self.assertEqual(len(registry), unlocked)


class TestRegistryTick(unittest.TestCase):
    def test_tick_recomputes_every_pot(self):
        registry = make_registry(level=0)
        registry.initialise(SPAWN_POINTS)
        small, medium = registry.pots
        fern = registry.catalog.resolve("fern")
        small.plant_item(fern, SimTime(1, 0))
        medium.plant_item(fern, SimTime(1, 0))
        medium.water_level = 3.0

        registry.tick(SimTime(2, 0))
        self.assertEqual(len(registry.ready_pots()), 2)
        self.assertEqual(registry.empty_pots(), [])

        small.water_level = 0.0
        self.assertEqual(registry.pots_needing_water(), [small])


class TestSnapshotRestore(unittest.TestCase):
    def setUp(self):
        self.registry = make_registry(level=5)
        self.registry.initialise(SPAWN_POINTS)
        pots = self.registry.pots
        fern = self.registry.catalog.resolve("fern")
        rose = self.registry.catalog.resolve("rose")
        pots[0].plant_item(fern, SimTime(1, 6 * 3600))
        pots[1].plant_item(rose, SimTime(1, 7 * 3600))
        pots[2].plant_item(fern, SimTime(1, 8 * 3600))
        self.registry.tick(SimTime(2, 9 * 3600))
        pots[0].harvest(SimTime(2, 9 * 3600))

    def test_round_trip(self):
        states = self.registry.snapshot()
        other = make_registry(level=0, seed=99)
        other.restore(states)
        self.assertEqual([p.pot_id for p in other], [p.pot_id for p in self.registry])
        self.assertEqual(other.pots, self.registry.pots)

    def test_unresolved_plant_forces_empty(self):
        states = self.registry.snapshot()
        states[1].plant_name = "no_such_plant"
        logger = GardenLogger(stdout=False)
        other = PotRegistry(PlantCatalog.from_dict(CATALOG_DATA), logger=logger)
        other.restore(states)

        broken = other.get(states[1].pot_id)
        self.assertEqual(broken.status, PotStatus.EMPTY)
        self.assertEqual(broken.growth_stage, GrowthStage.NONE)
        self.assertIsNone(broken.plant)
        self.assertEqual(other.get(states[0].pot_id), self.registry.get(states[0].pot_id))
        self.assertTrue(any("no_such_plant" in e.message for e in logger.entries))

    def test_empty_snapshot_falls_back_to_spawn(self):
        other = make_registry(level=0)
        other.restore([], SPAWN_POINTS)
        self.assertEqual(len(other), 2)
        self.assertTrue(all(p.is_empty for p in other))

    def test_duplicate_ids_are_renamed(self):
        states = self.registry.snapshot()
        states[1].pot_id = states[0].pot_id
        other = make_registry()
        other.restore(states)
        self.assertEqual(len(other), len(states))
        self.assertEqual(len({p.pot_id for p in other}), len(states))


if __name__ == "__main__":
    unittest.main()
