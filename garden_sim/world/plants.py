"""Plant definitions: sizes, item types and the catalog plants are resolved from."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from garden_sim.core.config import (
    DEFAULT_YIELD_PER_HARVEST,
    MAX_STACK_SIZE,
    PLANT_CATALOG,
)


class PotSize(Enum):
    """Pot sizes, ordered: a plant fits any pot at least as large as it requires."""

    SMALL = 0
    MEDIUM = 1
    LARGE = 2

    def fits(self, required: PotSize) -> bool:
        return required.value <= self.value


class ItemType(Enum):
    FLOWER = "flower"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    MISC = "misc"


class PlantCatalogError(ValueError):
    """Raised when a catalog entry is malformed."""


@dataclass(frozen=True)
class PlantSpec:
    """Static growth parameters for one plant type."""

    name: str
    required_pot_size: PotSize
    growth_days: float
    drain_rate: float  # water units per in-game hour
    yield_per_harvest: int = DEFAULT_YIELD_PER_HARVEST
    item_type: ItemType = ItemType.MISC
    is_stackable: bool = True
    max_stack_size: int = MAX_STACK_SIZE

    def validate(self) -> None:
        if not self.name:
            raise PlantCatalogError("Plant name must not be empty")
        if self.growth_days <= 0:
            raise PlantCatalogError(f"{self.name}: growth_days must be positive, got {self.growth_days}")
        if not 0.0 <= self.drain_rate <= 1.0:
            raise PlantCatalogError(f"{self.name}: drain_rate must be within [0, 1], got {self.drain_rate}")
        if self.yield_per_harvest < 1:
            raise PlantCatalogError(f"{self.name}: yield_per_harvest must be at least 1")
        if self.max_stack_size < 1:
            raise PlantCatalogError(f"{self.name}: max_stack_size must be at least 1")


def _enum_member(enum_cls, raw, plant_name: str):
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls[str(raw).upper()]
    except KeyError:
        raise PlantCatalogError(f"{plant_name}: unknown {enum_cls.__name__} '{raw}'") from None


def create_plant_spec(name: str, entry: dict) -> PlantSpec:
    """Factory to build and validate a PlantSpec from a catalog entry."""
    try:
        spec = PlantSpec(
            name=name,
            required_pot_size=_enum_member(PotSize, entry.get("required_pot_size", "SMALL"), name),
            growth_days=float(entry["growth_days"]),
            drain_rate=float(entry["drain_rate"]),
            yield_per_harvest=int(entry.get("yield_per_harvest", DEFAULT_YIELD_PER_HARVEST)),
            item_type=_enum_member(ItemType, entry.get("item_type", "MISC"), name),
            is_stackable=bool(entry.get("is_stackable", True)),
            max_stack_size=int(entry.get("max_stack_size", MAX_STACK_SIZE)),
        )
    except PlantCatalogError:
        raise
    except KeyError as e:
        raise PlantCatalogError(f"{name}: missing field {e}") from None
    except (TypeError, ValueError) as e:
        raise PlantCatalogError(f"{name}: {e}") from None
    spec.validate()
    return spec


class PlantCatalog:
    """Plant types keyed by name, validated when loaded."""

    def __init__(self, specs: Optional[list[PlantSpec]] = None) -> None:
        self._specs: dict[str, PlantSpec] = {}
        for spec in specs or []:
            self.register(spec)

    @classmethod
    def from_dict(cls, data: dict[str, dict]) -> PlantCatalog:
        return cls([create_plant_spec(name, entry) for name, entry in data.items()])

    @classmethod
    def default(cls) -> PlantCatalog:
        return cls.from_dict(PLANT_CATALOG)

    @classmethod
    def load_json(cls, filepath: str) -> PlantCatalog:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise PlantCatalogError(f"{filepath}: expected an object of plant entries")
        return cls.from_dict(data)

    def register(self, spec: PlantSpec) -> None:
        spec.validate()
        if spec.name in self._specs:
            raise PlantCatalogError(f"Duplicate plant name '{spec.name}'")
        self._specs[spec.name] = spec

    def resolve(self, name: Optional[str]) -> Optional[PlantSpec]:
        """Look up a plant by name. Returns None when there is no such plant."""
        if not name:
            return None
        return self._specs.get(name)

    def names(self) -> list[str]:
        return list(self._specs.keys())

    def plants_for_size(self, size: PotSize) -> list[PlantSpec]:
        """All plants that fit in a pot of the given size."""
        return [s for s in self._specs.values() if size.fits(s.required_pot_size)]

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[PlantSpec]:
        return iter(self._specs.values())
