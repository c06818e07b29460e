"""Main simulation loop: advance the clock, then let every pot catch up."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
from numpy.random import Generator

from garden_sim.core.clock import GameClock
from garden_sim.core.config import (
    DEFAULT_SPEED_FACTOR,
    METRICS_SAMPLE_HOURS,
    MINUTES_PER_HOUR,
    STARTING_SEEDS,
    WATER_PER_POUR,
)
from garden_sim.core.progression import Progression
from garden_sim.economy.inventory import Inventory
from garden_sim.simulation.metrics import MetricsCollector
from garden_sim.simulation.save import GameData, SaveManager
from garden_sim.viz.logger import GardenLogger, quiet_logger
from garden_sim.world.plants import PlantCatalog
from garden_sim.world.pots import ActionResult
from garden_sim.world.registry import PotRegistry, SpawnPoint


class GardenEngine:
    """Owns the clock, the pots, the inventory and persistence for one garden."""

    def __init__(
        self,
        seed: int = 42,
        catalog: Optional[PlantCatalog] = None,
        spawn_points: Optional[list[SpawnPoint]] = None,
        unlock_level: int = 0,
        speed_factor: int = DEFAULT_SPEED_FACTOR,
        save_path: Optional[str] = None,
        logger: Optional[GardenLogger] = None,
    ) -> None:
        self.rng: Generator = np.random.default_rng(seed)
        self.logger = logger or quiet_logger()
        self.spawn_points = spawn_points

        # Core systems
        self.catalog = catalog or PlantCatalog.default()
        self.clock = GameClock(speed_factor=speed_factor, logger=self.logger)
        self.progression = Progression(level=unlock_level)
        self.registry = PotRegistry(self.catalog, self.progression, self.rng, self.logger)

        # Collaborators
        self.inventory = Inventory(self.catalog, logger=self.logger)
        self.save_manager = SaveManager(save_path, logger=self.logger)
        self.metrics = MetricsCollector()

        self._hour_callback: Optional[Callable[[int, int, MetricsCollector], None]] = None
        self._hour_pending = False
        self._hours_since_sample = 0

        self.clock.add_hour_listener(self._on_hour_changed)
        self.clock.add_day_listener(self._on_day_changed)

    def initialize(self, starting_seeds: Optional[dict[str, int]] = None) -> None:
        """Spawn the default pots, hand out starting seeds and start the clock."""
        self.registry.initialise(self.spawn_points)
        seeds = STARTING_SEEDS if starting_seeds is None else starting_seeds
        for name, quantity in seeds.items():
            self.inventory.add_item(name, quantity)
        self.clock.start()
        # The starting hour is announced, not elapsed
        self._hour_pending = False
        self.logger.log(
            GardenLogger.REGISTRY,
            f"Garden started with {len(self.registry)} pots",
            day=self.clock.day,
        )

    def set_hour_callback(self, callback: Callable[[int, int, MetricsCollector], None]) -> None:
        """Called with (day, hour, metrics) after pots have caught up with a new hour."""
        self._hour_callback = callback

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------
    def _on_hour_changed(self, hour: int) -> None:
        self._hour_pending = True

    def _on_day_changed(self, day: int) -> None:
        self.logger.flush_day(day - 1)

    def tick(self, real_delta_seconds: float) -> None:
        """One frame: the clock advances fully before any pot recomputes."""
        self.clock.tick(real_delta_seconds)
        self.registry.tick(self.clock.now)

        if self._hour_pending:
            self._hour_pending = False
            self._hours_since_sample += 1
            if self._hours_since_sample >= METRICS_SAMPLE_HOURS:
                self._hours_since_sample = 0
                self.metrics.collect_hourly(self.clock.day, self.clock.hour, self.registry.pots, self.inventory)
            if self._hour_callback:
                self._hour_callback(self.clock.day, self.clock.hour, self.metrics)

    def run(self, real_seconds: float, step: float = 1.0) -> None:
        """Run for real_seconds of wall-clock time in frames of step seconds."""
        if step <= 0:
            raise ValueError("step must be positive")
        elapsed = 0.0
        while elapsed < real_seconds:
            delta = min(step, real_seconds - elapsed)
            self.tick(delta)
            elapsed += delta

    def advance_hours(self, hours: float, step: float = 1.0) -> None:
        """Run until roughly `hours` in-game hours have passed at the current speed."""
        real_seconds = hours * MINUTES_PER_HOUR / self.clock.scale
        self.run(real_seconds, step)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _unknown_pot(self, pot_id: str) -> ActionResult:
        reason = f"Unknown pot '{pot_id}'"
        self.logger.warn(reason, day=self.clock.day)
        return ActionResult(False, reason)

    def plant(self, pot_id: str, plant_name: str) -> ActionResult:
        """Plant a seed from the inventory; the seed is only used up on success."""
        pot = self.registry.get(pot_id)
        if pot is None:
            return self._unknown_pot(pot_id)

        spec = self.catalog.resolve(plant_name)
        if spec is None:
            reason = f"Unknown plant '{plant_name}'"
            self.logger.warn(reason, pot_ids=[pot_id], day=self.clock.day)
            return ActionResult(False, reason)
        if not self.inventory.has(plant_name):
            reason = f"No {plant_name} seeds in inventory"
            self.logger.warn(reason, pot_ids=[pot_id], day=self.clock.day)
            return ActionResult(False, reason)

        result = pot.plant_item(spec, self.clock.now)
        if result:
            self.inventory.remove_item(plant_name, 1)
            self.metrics.record_planting()
        return result

    def water(self, pot_id: str, amount: float = WATER_PER_POUR) -> ActionResult:
        pot = self.registry.get(pot_id)
        if pot is None:
            return self._unknown_pot(pot_id)
        result = pot.water(amount, day=self.clock.day)
        if result:
            self.metrics.record_watering()
        return result

    def harvest(self, pot_id: str) -> ActionResult:
        pot = self.registry.get(pot_id)
        if pot is None:
            return self._unknown_pot(pot_id)
        result = pot.harvest(self.clock.now, self.inventory)
        if result:
            self.metrics.record_harvest(result.item, result.quantity)
        return result

    def unplant(self, pot_id: str) -> ActionResult:
        pot = self.registry.get(pot_id)
        if pot is None:
            return self._unknown_pot(pot_id)
        was_ready = pot.is_ready
        result = pot.unplant(self.clock.now, self.inventory)
        if result and was_ready:
            self.metrics.record_harvest(result.item, result.quantity)
        return result

    def tend(self, water_below: float = 1.0) -> dict[str, int]:
        """Harvest ripe pots, top up thirsty ones and fill empty pots with seeds that fit."""
        counts = {"harvested": 0, "watered": 0, "planted": 0}
        for pot in self.registry:
            if pot.is_ready and self.harvest(pot.pot_id):
                counts["harvested"] += 1
            if not pot.is_empty and pot.water_level < water_below and self.water(pot.pot_id):
                counts["watered"] += 1
            if pot.is_empty:
                for spec in self.catalog.plants_for_size(pot.size):
                    if self.inventory.has(spec.name):
                        if self.plant(pot.pot_id, spec.name):
                            counts["planted"] += 1
                        break
        return counts

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def game_data(self) -> GameData:
        return GameData(
            time_data=self.clock.get_time_data(),
            pot_data=self.registry.snapshot(),
            inventory_data=self.inventory.to_dict(),
            unlock_level=self.progression.level,
        )

    def save(self) -> bool:
        return self.save_manager.save_game(self.game_data())

    def load(self) -> bool:
        """Restore from the save file; without one, spawn fresh default pots."""
        loaded = self.save_manager.load_game()
        data = self.save_manager.current_game_data
        if loaded:
            self.progression.level = data.unlock_level
            self.clock.set_time_data(data.time_data)
            self.inventory.load_dict(data.inventory_data)
        self.registry.restore(data.pot_data, self.spawn_points)
        self._hour_pending = False
        return loaded

    def close(self) -> None:
        self.logger.flush_day(self.clock.day)
        self.logger.close()
