#!/usr/bin/env python
"""Simulate a single shot on a configured course and report where the ball stops."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from golfsim.physics import BallState
from golfsim.simulation import ShotSimulator, SimulationConfig, load_simulation_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one headless golf shot over a height field.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML simulation config (height function, physics, friction zones, goal)",
    )
    parser.add_argument("--speed", type=float, required=True, help="Initial ball speed (m/s)")
    parser.add_argument("--angle", type=float, default=0.0, help="Shot angle in radians")
    parser.add_argument("--start-x", type=float, default=0.0, help="Starting x position")
    parser.add_argument("--start-y", type=float, default=0.0, help="Starting y position")
    parser.add_argument("--output", type=Path, default=None, help="Optional JSON path for the shot path")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = load_simulation_config(args.config) if args.config else SimulationConfig()
    simulator = ShotSimulator.from_config(config, start=BallState(args.start_x, args.start_y))
    result = simulator.hit(args.speed, args.angle)
    if args.output:
        result.write_json(args.output)
    final = result.final_state
    print(
        f"Ball stopped at ({final.x:.3f}, {final.y:.3f}) after {result.steps} steps "
        f"(goal={result.reached_goal}, water={result.in_water})"
    )


if __name__ == "__main__":
    main()
