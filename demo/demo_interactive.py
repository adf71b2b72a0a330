#!/usr/bin/env python3
"""
Demo: Interactive Gravity

Opens a 512x512 window with one seed mass at (50, 50).
- Move the mouse over the window
- Left click to drop a new mass (random mass in [5, 50))
- Radius on screen is sqrt(mass) (--radius-policy linear for radius = mass)
"""

import argparse

from gravsim.core import GravityConfig, Simulation, SimulationConfig, SpawnConfig
from gravsim.logging_config import setup_logging
from gravsim.viz import SimulationViewer, ViewerConfig


def parse_args():
    parser = argparse.ArgumentParser(description="Interactive 2D gravity simulator")
    parser.add_argument("--seed", type=int, default=None, help="Seed for spawned masses")
    parser.add_argument("--G", type=float, default=100.0, help="Gravitational constant")
    parser.add_argument("--radius-policy", choices=["sqrt", "linear"], default="sqrt")
    parser.add_argument("--fixed-dt", type=float, default=None,
                        help="Step with a constant dt instead of wall-clock time")
    parser.add_argument("--max-particles", type=int, default=1024)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main():
    args = parse_args()
    setup_logging(args.log_level)

    config = SimulationConfig(
        gravity=GravityConfig(gravitational_constant=args.G),
        spawn=SpawnConfig(seed=args.seed),
        radius_policy=args.radius_policy,
        max_particles=args.max_particles,
    )
    simulation = Simulation(config)

    viewer = SimulationViewer(simulation, ViewerConfig(fixed_dt=args.fixed_dt))
    viewer.show()


if __name__ == "__main__":
    main()
