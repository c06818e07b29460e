"""Save game persistence: the clock, every pot and the inventory in one JSON file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional

from garden_sim.core.clock import TimeData
from garden_sim.core.config import SAVE_FILE_NAME, SAVE_FORMAT_VERSION
from garden_sim.viz.logger import GardenLogger, quiet_logger
from garden_sim.world.pots import PotState


def _section(data: dict, key: str) -> dict:
    """A nested object of the save file; absent or null reads as empty."""
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object, got {type(value).__name__}")
    return value


@dataclass
class GameData:
    """Everything written to the save file. Defaults describe a new game."""

    time_data: TimeData = field(default_factory=TimeData)
    pot_data: list[PotState] = field(default_factory=list)
    inventory_data: dict = field(default_factory=dict)
    unlock_level: int = 0
    version: int = SAVE_FORMAT_VERSION

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "time_data": self.time_data.to_dict(),
            "pot_data": {"pots": [p.to_dict() for p in self.pot_data]},
            "inventory_data": self.inventory_data,
            "unlock_level": self.unlock_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GameData:
        """Raises KeyError, TypeError or ValueError on malformed data."""
        time_raw = _section(data, "time_data")
        pots_raw = _section(data, "pot_data").get("pots") or []
        inventory_raw = _section(data, "inventory_data")
        if not isinstance(pots_raw, list) or not all(isinstance(p, dict) for p in pots_raw):
            raise ValueError("pot_data.pots must be a list of objects")
        slots_raw = inventory_raw.get("slots") or []
        if not isinstance(slots_raw, list) or not all(s is None or isinstance(s, dict) for s in slots_raw):
            raise ValueError("inventory_data.slots must be a list of objects or nulls")

        return cls(
            time_data=TimeData.from_dict(time_raw) if time_raw else TimeData(),
            pot_data=[PotState.from_dict(p) for p in pots_raw],
            inventory_data=inventory_raw,
            unlock_level=int(data.get("unlock_level", 0)),
            version=int(data.get("version", SAVE_FORMAT_VERSION)),
        )


class SaveManager:
    """Reads and writes the save file."""

    def __init__(self, save_path: Optional[str] = None, logger: Optional[GardenLogger] = None) -> None:
        self.save_path = save_path or SAVE_FILE_NAME
        self.logger = logger or quiet_logger()
        self.current_game_data = GameData()

    def has_save(self) -> bool:
        return os.path.isfile(self.save_path)

    def save_game(self, data: Optional[GameData] = None) -> bool:
        """Write data (or the current game data) to disk."""
        if data is not None:
            self.current_game_data = data
        directory = os.path.dirname(self.save_path)
        tmp_path = self.save_path + ".tmp"
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.current_game_data.to_dict(), f, indent=2)
            os.replace(tmp_path, self.save_path)
        except OSError as e:
            self.logger.warn(f"Failed to save the game: {e}")
            return False

        self.logger.log(GardenLogger.SAVE, f"Game saved to: {self.save_path}")
        return True

    def load_game(self) -> bool:
        """Load the save file into current_game_data. A missing or bad file starts a new game."""
        if not self.has_save():
            self.logger.warn("No save file found! Starting new game!")
            self.current_game_data = GameData()
            return False

        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ValueError("save file root is not an object")
            self.current_game_data = GameData.from_dict(raw)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            self.logger.warn(f"Failed to load the game: {e}")
            self.current_game_data = GameData()
            return False

        self.logger.log(GardenLogger.SAVE, f"Game loaded from: {self.save_path}")
        return True

    def delete_save(self) -> bool:
        if not self.has_save():
            self.logger.warn("No save file found!")
            return False
        os.remove(self.save_path)
        self.current_game_data = GameData()
        self.logger.log(GardenLogger.SAVE, f"Game deleted from: {self.save_path}")
        return True
