"""Slot-based player inventory for seeds and harvested crops."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from garden_sim.core.config import INVENTORY_SIZE, MAX_STACK_SIZE
from garden_sim.viz.logger import GardenLogger, quiet_logger
from garden_sim.world.plants import ItemType, PlantCatalog


@dataclass
class InventorySlot:
    """One slot holding a stack of a single item."""

    item_name: Optional[str] = None
    amount: int = 0

    @property
    def is_empty(self) -> bool:
        return self.item_name is None or self.amount <= 0

    def clear(self) -> None:
        self.item_name = None
        self.amount = 0


class Inventory:
    """Fixed number of slots; stack limits come from the plant catalog."""

    def __init__(
        self,
        catalog: Optional[PlantCatalog] = None,
        size: int = INVENTORY_SIZE,
        logger: Optional[GardenLogger] = None,
    ) -> None:
        self.catalog = catalog
        self.slots: list[InventorySlot] = [InventorySlot() for _ in range(size)]
        self.logger = logger or quiet_logger()
        self._listeners: list[Callable[[], None]] = []

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def stack_limit(self, item_name: str) -> int:
        spec = self.catalog.resolve(item_name) if self.catalog else None
        if spec is None:
            return MAX_STACK_SIZE
        return spec.max_stack_size if spec.is_stackable else 1

    def free_space_for(self, item_name: str) -> int:
        """How many more units of item_name would fit."""
        limit = self.stack_limit(item_name)
        space = 0
        for slot in self.slots:
            if slot.is_empty:
                space += limit
            elif slot.item_name == item_name:
                space += max(0, limit - slot.amount)
        return space

    def can_add(self, item_name: str, quantity: int = 1) -> bool:
        return quantity > 0 and self.free_space_for(item_name) >= quantity

    def add_item(self, item_name: str, quantity: int = 1) -> bool:
        """Add quantity units. Nothing is added unless all of it fits."""
        if not self.can_add(item_name, quantity):
            self.logger.log(GardenLogger.INVENTORY, f"Inventory full, could not add {quantity} x {item_name}")
            return False

        limit = self.stack_limit(item_name)
        remaining = quantity

        # Top up existing stacks first
        for slot in self.slots:
            if remaining == 0:
                break
            if not slot.is_empty and slot.item_name == item_name and slot.amount < limit:
                take = min(remaining, limit - slot.amount)
                slot.amount += take
                remaining -= take

        for slot in self.slots:
            if remaining == 0:
                break
            if slot.is_empty:
                take = min(remaining, limit)
                slot.item_name = item_name
                slot.amount = take
                remaining -= take

        self.logger.log(GardenLogger.INVENTORY, f"Added {quantity} x {item_name}")
        self._notify()
        return True

    def remove_item(self, item_name: str, quantity: int = 1) -> bool:
        """Remove quantity units, oldest slots first. Fails if not enough are held."""
        if quantity <= 0 or self.count(item_name) < quantity:
            self.logger.log(GardenLogger.INVENTORY, f"Item not found in inventory: {quantity} x {item_name}")
            return False

        remaining = quantity
        for slot in self.slots:
            if remaining == 0:
                break
            if slot.item_name == item_name and not slot.is_empty:
                take = min(remaining, slot.amount)
                slot.amount -= take
                remaining -= take
                if slot.amount <= 0:
                    slot.clear()

        self.logger.log(GardenLogger.INVENTORY, f"Removed {quantity} x {item_name}")
        self._notify()
        return True

    def count(self, item_name: str) -> int:
        return sum(s.amount for s in self.slots if s.item_name == item_name and not s.is_empty)

    def has(self, item_name: str, min_quantity: int = 1) -> bool:
        return self.count(item_name) >= min_quantity

    def is_full(self) -> bool:
        return all(not s.is_empty for s in self.slots)

    def totals(self) -> dict[str, int]:
        """Units held per item name."""
        result: dict[str, int] = {}
        for slot in self.slots:
            if not slot.is_empty:
                result[slot.item_name] = result.get(slot.item_name, 0) + slot.amount
        return result

    def items_of_type(self, item_type: Optional[ItemType]) -> list[InventorySlot]:
        """Non-empty slots whose item is of item_type (all of them when None)."""
        result: list[InventorySlot] = []
        for slot in self.slots:
            if slot.is_empty:
                continue
            if item_type is None:
                result.append(slot)
                continue
            spec = self.catalog.resolve(slot.item_name) if self.catalog else None
            slot_type = spec.item_type if spec else ItemType.MISC
            if slot_type == item_type:
                result.append(slot)
        return result

    def to_dict(self) -> dict:
        return {
            "size": len(self.slots),
            "slots": [
                None if s.is_empty else {"item": s.item_name, "amount": s.amount}
                for s in self.slots
            ],
        }

    def load_dict(self, data: Optional[dict]) -> None:
        """Replace slot contents from a snapshot; unknown or malformed slots are left empty."""
        for slot in self.slots:
            slot.clear()
        if not isinstance(data, dict) or not isinstance(data.get("slots"), list):
            self._notify()
            return
        for slot, entry in zip(self.slots, data["slots"]):
            if not isinstance(entry, dict) or not entry.get("item"):
                continue
            item_name, amount = entry["item"], entry.get("amount", 0)
            if not isinstance(item_name, str) or not isinstance(amount, (int, float)) or amount <= 0:
                self.logger.warn(f"Dropping malformed inventory slot {entry!r}")
                continue
            if self.catalog is not None and item_name not in self.catalog:
                self.logger.warn(f"Dropping unknown inventory item '{item_name}'")
                continue
            slot.item_name = item_name
            slot.amount = int(amount)
        self._notify()
