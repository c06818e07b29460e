"""Pot registry: spawning pots at unlocked spawn points and snapshotting them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
from numpy.random import Generator

from garden_sim.core.clock import SimTime
from garden_sim.core.config import DEFAULT_SPAWN_POINTS, POT_ID_HEX_DIGITS, POT_ID_PREFIX
from garden_sim.core.progression import Progression
from garden_sim.viz.logger import GardenLogger, quiet_logger
from garden_sim.world.plants import PlantCatalog, PotSize
from garden_sim.world.pots import Pot, PotState


@dataclass(frozen=True)
class SpawnPoint:
    """A place where a pot appears once the player reaches unlock_level."""

    position: tuple[float, float, float]
    size: PotSize = PotSize.MEDIUM
    unlock_level: int = 0
    rotation_y: float = 0.0


def default_spawn_points() -> list[SpawnPoint]:
    """Spawn points from the config file."""
    return [
        SpawnPoint(
            position=tuple(float(c) for c in entry["position"]),
            size=PotSize[entry["size"]],
            unlock_level=entry.get("unlock_level", 0),
            rotation_y=entry.get("rotation_y", 0.0),
        )
        for entry in DEFAULT_SPAWN_POINTS
    ]


class PotRegistry:
    """Owns every pot in the garden, keyed by a unique id."""

    def __init__(
        self,
        catalog: PlantCatalog,
        progression: Optional[Progression] = None,
        rng: Optional[Generator] = None,
        logger: Optional[GardenLogger] = None,
    ) -> None:
        self.catalog = catalog
        self.progression = progression or Progression()
        self._rng: Generator = rng if rng is not None else np.random.default_rng()
        self.logger = logger or quiet_logger()
        self._pots: dict[str, Pot] = {}

    @property
    def pots(self) -> list[Pot]:
        return list(self._pots.values())

    def get(self, pot_id: str) -> Optional[Pot]:
        return self._pots.get(pot_id)

    def __len__(self) -> int:
        return len(self._pots)

    def __iter__(self) -> Iterator[Pot]:
        return iter(list(self._pots.values()))

    def __contains__(self, pot_id: object) -> bool:
        return pot_id in self._pots

    def _next_pot_id(self) -> str:
        upper = 16 ** POT_ID_HEX_DIGITS
        while True:
            pot_id = f"{POT_ID_PREFIX}{int(self._rng.integers(0, upper)):0{POT_ID_HEX_DIGITS}x}"
            if pot_id not in self._pots:
                return pot_id

    def clear(self) -> None:
        self._pots.clear()

    def create_at(self, point: SpawnPoint) -> Optional[Pot]:
        """Create an empty pot at a spawn point, unless the point is still locked."""
        if not self.progression.has_unlocked(point.unlock_level):
            self.logger.log(
                GardenLogger.REGISTRY,
                f"Skipping pot at {point.position} - unlock level {point.unlock_level} not reached",
            )
            return None

        pot = Pot(
            pot_id=self._next_pot_id(),
            size=point.size,
            unlock_level=point.unlock_level,
            position=point.position,
            rotation_y=point.rotation_y,
            logger=self.logger,
        )
        self._pots[pot.pot_id] = pot
        self.logger.log(
            GardenLogger.REGISTRY,
            f"{pot.pot_id} created at {point.position} (size {point.size.name}, unlock {point.unlock_level})",
            pot_ids=[pot.pot_id],
        )
        return pot

    def initialise(self, spawn_points: Optional[list[SpawnPoint]] = None) -> int:
        """Replace all pots with fresh empty ones at every unlocked spawn point."""
        self.clear()
        points = default_spawn_points() if spawn_points is None else spawn_points
        for point in points:
            self.create_at(point)
        return len(self._pots)

    def tick(self, now: SimTime) -> None:
        for pot in self._pots.values():
            pot.recompute(now)

    def ready_pots(self) -> list[Pot]:
        return [p for p in self._pots.values() if p.is_ready]

    def pots_needing_water(self) -> list[Pot]:
        return [p for p in self._pots.values() if p.needs_water]

    def empty_pots(self) -> list[Pot]:
        return [p for p in self._pots.values() if p.is_empty]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def snapshot(self) -> list[PotState]:
        states = [pot.to_state() for pot in self._pots.values()]
        self.logger.log(GardenLogger.SAVE, f"Collected {len(states)} pots to save")
        return states

    def restore(
        self,
        states: Optional[list[PotState]],
        spawn_points: Optional[list[SpawnPoint]] = None,
    ) -> int:
        """Rebuild pots from a snapshot. An empty snapshot falls back to a fresh spawn."""
        if not states:
            self.logger.warn("No pot data to restore, using default pots")
            return self.initialise(spawn_points)

        self.clear()
        for state in states:
            pot = Pot.from_state(state, self.catalog, self.logger)
            if pot.pot_id in self._pots or not pot.pot_id:
                new_id = self._next_pot_id()
                self.logger.warn(f"Duplicate pot id '{pot.pot_id}' in save, renamed to {new_id}")
                pot.pot_id = new_id
            self._pots[pot.pot_id] = pot
            self.logger.log(GardenLogger.REGISTRY, f"Loaded pot '{pot.pot_id}' at {pot.position}", pot_ids=[pot.pot_id])
        return len(self._pots)
