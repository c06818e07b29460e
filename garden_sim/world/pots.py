"""Pot lifecycle: planting, watering, growth stages and harvesting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from garden_sim.core.clock import SimTime
from garden_sim.core.config import (
    HARVEST_WATER_COST,
    HOURS_PER_DAY,
    MAX_WATER_LEVEL,
    MIN_WATER_LEVEL,
    POT_SCALES,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    WATER_PER_POUR,
)
from garden_sim.viz.logger import GardenLogger, quiet_logger
from garden_sim.world.plants import PlantCatalog, PlantSpec, PotSize


class PotStatus(Enum):
    EMPTY = "empty"
    PLANTED = "planted"
    READY_TO_HARVEST = "ready_to_harvest"


class GrowthStage(Enum):
    NONE = "none"
    SEEDLING = "seedling"
    VEGETATIVE = "vegetative"
    FLOWERING = "flowering"


class AgeUnit(Enum):
    HOURS = "hours"
    DAYS = "days"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a pot command. Truthy when the command went through."""

    success: bool
    reason: str = ""
    item: Optional[str] = None
    quantity: int = 0

    def __bool__(self) -> bool:
        return self.success


def format_duration(seconds: float) -> str:
    """Format a countdown as ``"1d 04:30"``, ``"04:30"``, ``"Ready!"`` or ``"Overdue!"``."""
    if seconds < 0:
        return "Overdue!"
    total = int(seconds)
    if total == 0:
        return "Ready!"

    days, remaining = divmod(total, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes = remaining // SECONDS_PER_MINUTE

    result = f"{days}d " if days > 0 else ""
    return f"{result}{hours:02d}:{minutes:02d}"


def _optional(convert, value):
    return None if value is None else convert(value)


@dataclass
class PotState:
    """Persisted fields of one pot."""

    pot_id: str
    pot_size: PotSize = PotSize.MEDIUM
    plant_name: str = ""
    status: PotStatus = PotStatus.EMPTY
    growth_stage: GrowthStage = GrowthStage.NONE
    water_level: float = 0.0
    plant_age: int = 0
    age_unit: AgeUnit = AgeUnit.HOURS
    birth_day: int = 0
    birth_time: float = 0.0
    last_harvest_day: Optional[int] = None
    last_harvest_time: Optional[float] = None
    last_drain_hour: int = -1
    unlock_level: int = 0
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    rotation_y: float = 0.0

    def to_dict(self) -> dict:
        return {
            "pot_id": self.pot_id,
            "pot_size": self.pot_size.name,
            "plant_name": self.plant_name,
            "status": self.status.name,
            "growth_stage": self.growth_stage.name,
            "water_level": self.water_level,
            "plant_age": self.plant_age,
            "age_unit": self.age_unit.name,
            "birth_day": self.birth_day,
            "birth_time": self.birth_time,
            "last_harvest_day": self.last_harvest_day,
            "last_harvest_time": self.last_harvest_time,
            "last_drain_hour": self.last_drain_hour,
            "unlock_level": self.unlock_level,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "position_z": self.position_z,
            "rotation_y": self.rotation_y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PotState:
        """Raises KeyError or ValueError on malformed data."""
        return cls(
            pot_id=str(data["pot_id"]),
            pot_size=PotSize[data["pot_size"]],
            plant_name=data.get("plant_name") or "",
            status=PotStatus[data["status"]],
            growth_stage=GrowthStage[data["growth_stage"]],
            water_level=float(data["water_level"]),
            plant_age=int(data.get("plant_age", 0)),
            age_unit=AgeUnit[data.get("age_unit", "HOURS")],
            birth_day=int(data.get("birth_day", 0)),
            birth_time=float(data.get("birth_time", 0.0)),
            last_harvest_day=_optional(int, data.get("last_harvest_day")),
            last_harvest_time=_optional(float, data.get("last_harvest_time")),
            last_drain_hour=int(data.get("last_drain_hour", -1)),
            unlock_level=int(data.get("unlock_level", 0)),
            position_x=float(data.get("position_x", 0.0)),
            position_y=float(data.get("position_y", 0.0)),
            position_z=float(data.get("position_z", 0.0)),
            rotation_y=float(data.get("rotation_y", 0.0)),
        )


@dataclass
class Pot:
    """A pot that can hold one plant at a time.

    Status goes Empty -> Planted -> ReadyToHarvest -> Planted (after a harvest), and
    back to Empty when the plant is pulled out. Age, water and growth stage are derived
    from the clock reading passed to ``recompute`` each tick.
    """

    pot_id: str
    size: PotSize = PotSize.MEDIUM
    unlock_level: int = 0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation_y: float = 0.0

    status: PotStatus = PotStatus.EMPTY
    growth_stage: GrowthStage = GrowthStage.NONE
    plant: Optional[PlantSpec] = None
    water_level: float = 0.0
    birth: SimTime = field(default_factory=SimTime)
    last_harvest: Optional[SimTime] = None
    last_drain_hour: int = -1
    plant_age: int = 0
    age_unit: AgeUnit = AgeUnit.HOURS

    logger: GardenLogger = field(default_factory=quiet_logger, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return self.status == PotStatus.EMPTY

    @property
    def is_ready(self) -> bool:
        return self.status == PotStatus.READY_TO_HARVEST

    @property
    def needs_water(self) -> bool:
        return not self.is_empty and self.water_level <= MIN_WATER_LEVEL

    @property
    def is_growing(self) -> bool:
        return self.status == PotStatus.PLANTED and self.water_level > MIN_WATER_LEVEL

    @property
    def plant_name(self) -> str:
        return self.plant.name if self.plant else ""

    @property
    def scale(self) -> float:
        return POT_SCALES[self.size.name]

    def age_string(self) -> str:
        unit = "hour" if self.age_unit == AgeUnit.HOURS else "day"
        return f"{self.plant_age} {unit}{'' if self.plant_age == 1 else 's'}"

    def _fail(self, reason: str, day: int = 0) -> ActionResult:
        self.logger.warn(f"{self.pot_id}: {reason}", pot_ids=[self.pot_id], day=day)
        return ActionResult(False, reason)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def plant_item(self, plant: Optional[PlantSpec], now: Optional[SimTime]) -> ActionResult:
        """Put a new plant in this pot, stamping its birth with the current time."""
        day = now.day if now else 0
        if self.status != PotStatus.EMPTY:
            return self._fail("Pot is not empty! Cannot plant new item!", day)
        if plant is None:
            return self._fail("Cannot plant empty item!", day)
        if not self.size.fits(plant.required_pot_size):
            return self._fail(f"Pot is too small for {plant.name}!", day)
        if now is None:
            return self._fail("No clock reading, unable to set the plant's birthday", day)

        self.plant = plant
        self.status = PotStatus.PLANTED
        self.growth_stage = GrowthStage.SEEDLING
        self.birth = now
        self.last_harvest = None
        self.water_level = MAX_WATER_LEVEL
        self.plant_age = 0
        self.age_unit = AgeUnit.HOURS
        self.last_drain_hour = -1

        self.logger.log(GardenLogger.PLANT, f"{self.pot_id}: Planted {plant.name}", pot_ids=[self.pot_id], day=day)
        return ActionResult(True, item=plant.name)

    def water(self, amount: float = WATER_PER_POUR, day: int = 0) -> ActionResult:
        if self.status == PotStatus.EMPTY:
            return self._fail("Nothing planted to water", day)

        self.water_level = max(MIN_WATER_LEVEL, min(MAX_WATER_LEVEL, self.water_level + amount))
        self.logger.log(
            GardenLogger.WATER,
            f"{self.pot_id}: Watered, level now {self.water_level:.2f}",
            pot_ids=[self.pot_id],
            day=day,
        )
        return ActionResult(True)

    def harvest(self, now: Optional[SimTime], inventory: Optional["Inventory"] = None) -> ActionResult:  # noqa: F821
        """Collect the crop; the plant stays and starts a new growth cycle."""
        day = now.day if now else 0
        if self.status != PotStatus.READY_TO_HARVEST or self.plant is None:
            return self._fail("Plant not ready for harvest", day)
        if now is None:
            return self._fail("No clock reading, unable to record the harvest", day)

        quantity = self.plant.yield_per_harvest
        if inventory is not None and not inventory.can_add(self.plant.name, quantity):
            return self._fail("Inventory full, harvest left in the pot", day)

        self.last_harvest = now
        self.water_level = max(MIN_WATER_LEVEL, self.water_level - HARVEST_WATER_COST)
        self.status = PotStatus.PLANTED
        self.growth_stage = GrowthStage.SEEDLING
        if inventory is not None:
            inventory.add_item(self.plant.name, quantity)

        self.logger.log(
            GardenLogger.HARVEST,
            f"{self.pot_id}: Harvested {quantity} x {self.plant.name}",
            pot_ids=[self.pot_id],
            day=day,
        )
        return ActionResult(True, item=self.plant.name, quantity=quantity)

    def unplant(self, now: Optional[SimTime], inventory: Optional["Inventory"] = None) -> ActionResult:  # noqa: F821
        """Pull the plant out, returning it (or its ripe crop) to the inventory."""
        day = now.day if now else 0
        if self.status == PotStatus.EMPTY or self.plant is None:
            return self._fail("Nothing planted to remove", day)

        if self.status == PotStatus.READY_TO_HARVEST:
            result = self.harvest(now, inventory)
            if not result:
                return result
        else:
            if inventory is not None and not inventory.can_add(self.plant.name, 1):
                return self._fail("Inventory full, cannot unplant", day)
            if inventory is not None:
                inventory.add_item(self.plant.name, 1)
            result = ActionResult(True, item=self.plant.name, quantity=1)

        self.logger.log(GardenLogger.PLANT, f"{self.pot_id}: Unplanted {self.plant.name}", pot_ids=[self.pot_id], day=day)
        self._clear_plant()
        return result

    def set_ready_to_harvest(self, ready: bool) -> ActionResult:
        """Debug control: force the pot in or out of the ready state."""
        if self.plant is None:
            return self._fail("No plant to mark ready")
        if ready:
            self.status = PotStatus.READY_TO_HARVEST
            self.growth_stage = GrowthStage.FLOWERING
        else:
            self.status = PotStatus.PLANTED
        return ActionResult(True)

    def _clear_plant(self) -> None:
        self.status = PotStatus.EMPTY
        self.plant = None
        self.growth_stage = GrowthStage.NONE
        self.water_level = 0.0
        self.birth = SimTime()
        self.last_harvest = None
        self.last_drain_hour = -1
        self.plant_age = 0
        self.age_unit = AgeUnit.HOURS

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    def time_until_harvest(self, now: Optional[SimTime]) -> float:
        """Seconds left in the current growth cycle, floored at 0; -1 if it cannot be known."""
        if self.plant is None or now is None:
            return -1

        growth_seconds = self.plant.growth_days * SECONDS_PER_DAY
        if self.last_harvest is None:
            target = self.birth.absolute_seconds + growth_seconds
        else:
            target = self.last_harvest.absolute_seconds + growth_seconds

        return max(0.0, target - now.absolute_seconds)

    def formatted_time_until_harvest(self, now: Optional[SimTime]) -> str:
        return format_duration(self.time_until_harvest(now))

    def recompute(self, now: SimTime) -> None:
        """Refresh age, water and growth stage against the current clock reading."""
        if self.status == PotStatus.EMPTY or self.plant is None:
            return

        elapsed_hours = max(0, now.absolute_hours - self.birth.absolute_hours)
        if elapsed_hours >= HOURS_PER_DAY:
            self.plant_age = elapsed_hours // HOURS_PER_DAY
            self.age_unit = AgeUnit.DAYS
        else:
            self.plant_age = elapsed_hours
            self.age_unit = AgeUnit.HOURS

        # Growth halts once ripe or dry
        if self.status == PotStatus.READY_TO_HARVEST or self.water_level <= MIN_WATER_LEVEL:
            return

        if now.hour != self.last_drain_hour:
            self.water_level = max(MIN_WATER_LEVEL, self.water_level - self.plant.drain_rate)
            self.last_drain_hour = now.hour
            self.logger.log(
                GardenLogger.CLOCK,
                f"{self.pot_id}: Water drained to {self.water_level:.2f}, age {self.age_string()}",
                pot_ids=[self.pot_id],
                day=now.day,
            )

        time_left = self.time_until_harvest(now)
        total_growth_seconds = self.plant.growth_days * SECONDS_PER_DAY

        if time_left <= 0:
            self.status = PotStatus.READY_TO_HARVEST
            self.growth_stage = GrowthStage.FLOWERING
            self.logger.log(
                GardenLogger.HARVEST,
                f"{self.pot_id}: {self.plant.name} is ready to harvest",
                pot_ids=[self.pot_id],
                day=now.day,
            )
        elif time_left < total_growth_seconds / 3:
            self.growth_stage = GrowthStage.FLOWERING
        elif time_left < total_growth_seconds / 2:
            self.growth_stage = GrowthStage.VEGETATIVE
        else:
            self.growth_stage = GrowthStage.SEEDLING

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_state(self) -> PotState:
        return PotState(
            pot_id=self.pot_id,
            pot_size=self.size,
            plant_name=self.plant_name,
            status=self.status,
            growth_stage=self.growth_stage,
            water_level=self.water_level,
            plant_age=self.plant_age,
            age_unit=self.age_unit,
            birth_day=self.birth.day,
            birth_time=self.birth.seconds_of_day,
            last_harvest_day=self.last_harvest.day if self.last_harvest is not None else None,
            last_harvest_time=self.last_harvest.seconds_of_day if self.last_harvest is not None else None,
            last_drain_hour=self.last_drain_hour,
            unlock_level=self.unlock_level,
            position_x=self.position[0],
            position_y=self.position[1],
            position_z=self.position[2],
            rotation_y=self.rotation_y,
        )

    @classmethod
    def from_state(
        cls,
        state: PotState,
        catalog: PlantCatalog,
        logger: Optional[GardenLogger] = None,
    ) -> Pot:
        """Rebuild a pot from a snapshot. An unknown plant leaves the pot empty."""
        pot = cls(
            pot_id=state.pot_id,
            size=state.pot_size,
            unlock_level=state.unlock_level,
            position=(state.position_x, state.position_y, state.position_z),
            rotation_y=state.rotation_y,
            logger=logger or quiet_logger(),
        )

        if state.status == PotStatus.EMPTY or not state.plant_name:
            return pot

        plant = catalog.resolve(state.plant_name)
        if plant is None:
            pot.logger.warn(
                f"{pot.pot_id}: Could not load plant '{state.plant_name}'. Pot will be empty.",
                pot_ids=[pot.pot_id],
            )
            return pot

        pot.plant = plant
        pot.status = state.status
        pot.growth_stage = state.growth_stage
        if state.status == PotStatus.READY_TO_HARVEST:
            pot.growth_stage = GrowthStage.FLOWERING
        elif pot.growth_stage == GrowthStage.NONE:
            pot.growth_stage = GrowthStage.SEEDLING
        pot.water_level = max(MIN_WATER_LEVEL, min(MAX_WATER_LEVEL, state.water_level))
        pot.birth = SimTime(state.birth_day, state.birth_time)
        if state.last_harvest_day is not None:
            pot.last_harvest = SimTime(state.last_harvest_day, state.last_harvest_time or 0.0)
        pot.last_drain_hour = state.last_drain_hour
        pot.plant_age = state.plant_age
        pot.age_unit = state.age_unit
        return pot
