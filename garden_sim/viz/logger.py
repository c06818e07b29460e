"""Structured event logging for the garden: pots, harvests, saves and the clock."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional, TextIO


@dataclass
class LogEntry:
    """A single log entry."""

    day: int
    category: str
    message: str
    pot_ids: list[str] = field(default_factory=list)
    data: dict = field(default_factory=dict)


class GardenLogger:
    """Structured logging with categories and verbosity control."""

    # Category constants
    CLOCK = "CLOCK"
    PLANT = "PLANT"
    WATER = "WATER"
    HARVEST = "HARVEST"
    REGISTRY = "REGISTRY"
    SAVE = "SAVE"
    INVENTORY = "INVENTORY"
    WARNING = "WARNING"

    _VERBOSITY_MAP: dict[str, int] = {
        WARNING: 0,
        SAVE: 0,
        HARVEST: 0,
        PLANT: 1,
        REGISTRY: 1,
        WATER: 2,
        INVENTORY: 2,
        CLOCK: 3,
    }

    def __init__(
        self,
        verbosity: int = 1,
        log_file: Optional[str] = None,
        stdout: bool = True,
    ) -> None:
        """
        verbosity levels:
            0 = warnings, saves and harvests
            1 = + planting and pot registry changes
            2 = + watering and inventory
            3 = everything (clock ticks, water drain)
        """
        self.verbosity = verbosity
        self._buffer: list[LogEntry] = []
        self._all_entries: list[LogEntry] = []
        self._file: Optional[TextIO] = None
        self._stdout = stdout

        if log_file:
            os.makedirs(os.path.dirname(log_file) if os.path.dirname(log_file) else ".", exist_ok=True)
            self._file = open(log_file, "w", encoding="utf-8")

    def log(
        self,
        category: str,
        message: str,
        pot_ids: Optional[list[str]] = None,
        day: int = 0,
        **data,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            day=day,
            category=category,
            message=message,
            pot_ids=pot_ids or [],
            data=data,
        )
        self._buffer.append(entry)

    def warn(self, message: str, pot_ids: Optional[list[str]] = None, day: int = 0, **data) -> None:
        self.log(self.WARNING, message, pot_ids=pot_ids, day=day, **data)

    @property
    def entries(self) -> list[LogEntry]:
        """Every entry logged so far, flushed or not."""
        return self._all_entries + self._buffer

    def flush_day(self, day: int) -> None:
        """Write buffered logs for the day."""
        for entry in self._buffer:
            required_verbosity = self._VERBOSITY_MAP.get(entry.category, 1)
            if required_verbosity <= self.verbosity:
                line = f"[Day {entry.day:>4}] [{entry.category:<10}] {entry.message}"
                if self._stdout:
                    print(line)
                if self._file:
                    self._file.write(line + "\n")

        self._all_entries.extend(self._buffer)
        self._buffer.clear()

        if self._file:
            self._file.flush()

    def get_narrative(self, day: int) -> str:
        """Generate a human-readable summary of a specific day."""
        day_entries = [e for e in self.entries if e.day == day]
        if not day_entries:
            return f"Day {day}: Nothing notable happened."

        lines = [f"=== Day {day} ==="]
        for entry in day_entries:
            lines.append(f"  [{entry.category}] {entry.message}")
        return "\n".join(lines)

    def export_json(self, filepath: str) -> None:
        """Export all log entries to JSON."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        data = [
            {
                "day": e.day,
                "category": e.category,
                "message": e.message,
                "pot_ids": e.pot_ids,
                "data": e.data,
            }
            for e in self.entries
        ]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None


def quiet_logger() -> GardenLogger:
    """A logger that buffers entries but never prints; the default for components."""
    return GardenLogger(verbosity=0, stdout=False)
