"""Static matplotlib report of a garden run."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # Files only, no window
import matplotlib.pyplot as plt
import numpy as np


def garden_report(metrics: "MetricsCollector", output_dir: str) -> list[str]:  # noqa: F821
    """Save water-level and pot-status PNGs. Returns the written paths."""
    snapshots = metrics.snapshots
    if not snapshots:
        return []

    os.makedirs(output_dir, exist_ok=True)
    hours = np.array([s.absolute_hour for s in snapshots]) - snapshots[0].absolute_hour
    written: list[str] = []

    # Water level per pot
    fig, ax = plt.subplots(figsize=(10, 5))
    pot_ids = sorted({pid for s in snapshots for pid in s.water_levels})
    for pot_id in pot_ids:
        levels = np.array([s.water_levels.get(pot_id, np.nan) for s in snapshots], dtype=float)
        ax.plot(hours, levels, linewidth=1.5, label=pot_id)
    ax.set_title("Water Level per Pot")
    ax.set_xlabel("Hours since start")
    ax.set_ylabel("Water (0-5)")
    ax.set_ylim(0, 5.2)
    if pot_ids:
        ax.legend(fontsize=7, loc="upper right")
    ax.grid(True, alpha=0.3)
    path = os.path.join(output_dir, "water_levels.png")
    fig.savefig(path, dpi=150)
    plt.close(fig)
    written.append(path)

    # Pot status counts
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.stackplot(
        hours,
        [s.empty for s in snapshots],
        [s.planted for s in snapshots],
        [s.ready for s in snapshots],
        labels=["Empty", "Growing", "Ready"],
        colors=["#d1ecf1", "#d4edda", "#fff3cd"],
    )
    ax.plot(hours, [s.dry for s in snapshots], "r--", linewidth=1.2, label="Dry")
    ax.set_title("Pot Status Over Time")
    ax.set_xlabel("Hours since start")
    ax.set_ylabel("Pots")
    ax.legend(fontsize=8, loc="upper left")
    ax.grid(True, alpha=0.3)
    path = os.path.join(output_dir, "pot_status.png")
    fig.savefig(path, dpi=150)
    plt.close(fig)
    written.append(path)

    # Cumulative harvest
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(hours, np.cumsum([s.harvested for s in snapshots]), "g-", linewidth=2)
    ax.set_title("Cumulative Harvest")
    ax.set_xlabel("Hours since start")
    ax.set_ylabel("Units")
    ax.grid(True, alpha=0.3)
    path = os.path.join(output_dir, "harvest.png")
    fig.savefig(path, dpi=150)
    plt.close(fig)
    written.append(path)

    print(f"Reports saved to {output_dir}/")
    return written
