"""Entry point for the headless garden simulation."""

from __future__ import annotations

import argparse
import os
import time


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Garden Growth Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--hours", type=float, default=72, help="In-game hours to simulate")
    parser.add_argument("--speed", type=int, default=3, choices=[1, 2, 3], help="Clock speed factor")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for pot ids")
    parser.add_argument("--unlock-level", type=int, default=0, help="Player unlock level for spawn points")
    parser.add_argument("--verbosity", type=int, default=0, choices=[0, 1, 2, 3], help="Log verbosity level")
    parser.add_argument("--step", type=float, default=1.0, help="Real seconds per simulation frame")
    parser.add_argument("--output-dir", type=str, default="results", help="Output directory for results")
    parser.add_argument("--save-file", type=str, default=None, help="Path of the save file")
    parser.add_argument("--load", action="store_true", help="Continue from the save file if present")
    parser.add_argument("--no-report", action="store_true", help="Skip writing PNG reports")

    args = parser.parse_args()

    # Import here to allow --help without loading everything
    from garden_sim.simulation.engine import GardenEngine
    from garden_sim.viz.logger import GardenLogger

    save_path = args.save_file or os.path.join(args.output_dir, "gamesave.json")
    logger = GardenLogger(
        verbosity=args.verbosity,
        log_file=os.path.join(args.output_dir, "garden.log"),
        stdout=(args.verbosity > 0),
    )
    engine = GardenEngine(
        seed=args.seed,
        unlock_level=args.unlock_level,
        speed_factor=args.speed,
        save_path=save_path,
        logger=logger,
    )

    print(f"=== Garden Growth Simulation ===")
    print(f"Hours: {args.hours} | Speed: {args.speed}x | Seed: {args.seed}")
    print()

    if not (args.load and engine.load()):
        engine.initialize()
    print(f"  Pots: {len(engine.registry)} | Plants known: {len(engine.catalog)}")
    print(f"  {engine.clock.time_string().replace(chr(10), ' ')}")

    engine.set_hour_callback(lambda day, hour, metrics: engine.tend())
    engine.tend()

    print(f"Running simulation for {args.hours} in-game hours...")
    t0 = time.time()
    try:
        engine.advance_hours(args.hours, step=args.step)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
    print(f"Simulation complete in {time.time() - t0:.2f}s, now {engine.clock.time_string().replace(chr(10), ' ')}")

    os.makedirs(args.output_dir, exist_ok=True)
    if engine.save():
        print(f"Game saved to {save_path}")

    csv_path = os.path.join(args.output_dir, "metrics.csv")
    engine.metrics.export_csv(csv_path)
    print(f"Metrics exported to {csv_path}")

    if not args.no_report:
        from garden_sim.viz.report import garden_report
        garden_report(engine.metrics, args.output_dir)

    print()
    print(engine.metrics.summary_report())
    print()
    for pot in engine.registry:
        status = pot.status.name.replace("_", " ").title()
        countdown = pot.formatted_time_until_harvest(engine.clock.now) if pot.plant else "-"
        print(f"  {pot.pot_id} [{pot.size.name:<6}] {pot.plant_name or '(empty)':<12} {status:<16} "
              f"water {pot.water_level:.1f}  {countdown}")

    engine.logger.export_json(os.path.join(args.output_dir, "events.json"))
    engine.close()


if __name__ == "__main__":
    main()
