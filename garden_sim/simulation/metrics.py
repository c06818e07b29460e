"""Hourly garden snapshots, summary statistics and CSV export."""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GardenSnapshot:
    """The state of the garden at one in-game hour."""

    day: int = 0
    hour: int = 0
    pot_count: int = 0
    empty: int = 0
    planted: int = 0
    ready: int = 0
    dry: int = 0
    avg_water: float = 0.0
    water_levels: dict[str, float] = field(default_factory=dict)
    stages: dict[str, str] = field(default_factory=dict)
    harvested: int = 0
    waterings: int = 0
    plantings: int = 0
    inventory_units: int = 0

    @property
    def absolute_hour(self) -> int:
        return self.day * 24 + self.hour


class MetricsCollector:
    """Collects a time series of garden snapshots."""

    def __init__(self) -> None:
        self.snapshots: list[GardenSnapshot] = []
        self.total_harvested: dict[str, int] = {}
        self._hourly_harvested: int = 0
        self._hourly_waterings: int = 0
        self._hourly_plantings: int = 0

    def record_harvest(self, plant_name: str, quantity: int) -> None:
        self._hourly_harvested += quantity
        self.total_harvested[plant_name] = self.total_harvested.get(plant_name, 0) + quantity

    def record_watering(self) -> None:
        self._hourly_waterings += 1

    def record_planting(self) -> None:
        self._hourly_plantings += 1

    def collect_hourly(
        self,
        day: int,
        hour: int,
        pots: list["Pot"],  # noqa: F821
        inventory: Optional["Inventory"] = None,  # noqa: F821
    ) -> GardenSnapshot:
        """Record the garden as it stands now and reset the hourly counters."""
        planted = [p for p in pots if not p.is_empty]
        n = len(planted)

        snap = GardenSnapshot(
            day=day,
            hour=hour,
            pot_count=len(pots),
            empty=len(pots) - n,
            planted=sum(1 for p in planted if not p.is_ready),
            ready=sum(1 for p in planted if p.is_ready),
            dry=sum(1 for p in planted if p.needs_water),
            avg_water=sum(p.water_level for p in planted) / max(1, n),
            water_levels={p.pot_id: p.water_level for p in planted},
            stages={p.pot_id: p.growth_stage.name for p in pots},
            harvested=self._hourly_harvested,
            waterings=self._hourly_waterings,
            plantings=self._hourly_plantings,
            inventory_units=sum(inventory.totals().values()) if inventory is not None else 0,
        )
        self.snapshots.append(snap)

        self._hourly_harvested = 0
        self._hourly_waterings = 0
        self._hourly_plantings = 0
        return snap

    def export_csv(self, filepath: str) -> None:
        """Export all snapshots to CSV."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "day", "hour", "pots", "empty", "planted", "ready", "dry",
                "avg_water", "harvested", "waterings", "plantings", "inventory_units",
            ])
            for s in self.snapshots:
                writer.writerow([
                    s.day, s.hour, s.pot_count, s.empty, s.planted, s.ready, s.dry,
                    f"{s.avg_water:.2f}", s.harvested, s.waterings, s.plantings,
                    s.inventory_units,
                ])

    def summary_report(self) -> str:
        """Generate a human-readable summary of the run."""
        if not self.snapshots:
            return "No data available."

        first = self.snapshots[0]
        last = self.snapshots[-1]
        hours = last.absolute_hour - first.absolute_hour + 1
        total_waterings = sum(s.waterings for s in self.snapshots)
        total_plantings = sum(s.plantings for s in self.snapshots)
        dry_hours = sum(1 for s in self.snapshots if s.dry > 0)

        lines = [
            f"=== Garden Summary: Day {first.day} {first.hour:02d}:00 to Day {last.day} {last.hour:02d}:00 ===",
            f"Duration: {hours} hours ({hours / 24:.1f} days)",
            f"",
            f"Pots: {last.pot_count} ({last.planted} growing, {last.ready} ready, {last.empty} empty)",
            f"  Avg water level (final): {last.avg_water:.2f}",
            f"  Hours with a dry pot: {dry_hours}",
            f"",
            f"Activity:",
            f"  Plantings: {total_plantings}",
            f"  Waterings: {total_waterings}",
            f"  Units harvested: {sum(self.total_harvested.values())}",
        ]

        if self.total_harvested:
            lines.append(f"")
            lines.append(f"Harvest by plant:")
            for name, qty in sorted(self.total_harvested.items(), key=lambda x: -x[1]):
                lines.append(f"  {name}: {qty}")

        return "\n".join(lines)
