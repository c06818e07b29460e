"""
Garden Simulation Runner
========================
Run the garden headless, tending every pot automatically, then save and report.

Usage:
    python run_simulation.py                          # defaults: 72 in-game hours at 3x
    python run_simulation.py --hours 240 --seed 7     # custom run
    python run_simulation.py --load                   # continue from the last save
    python run_simulation.py --help                   # full options
"""

from __future__ import annotations

import os
import sys

# Ensure garden_sim package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from garden_sim.main import main  # noqa: E402


if __name__ == "__main__":
    main()
