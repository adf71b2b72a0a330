#!/usr/bin/env python3
"""
Demo: Two-Body Infall

Two equal masses start at rest 40 units apart and fall toward each other:
1. Build a simulation with no seed particle
2. Place two masses symmetrically about the center
3. Step with a fixed dt, recording trajectories and energy
4. Plot trajectories and the energy/momentum history

The distance floor (3 units) keeps the close pass bounded: the masses pass
through each other instead of colliding.
"""

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from gravsim.core import Simulation, SimulationConfig
from gravsim.analysis import TrajectoryRecorder, energy_report
from gravsim.viz import plot_trajectories, save_figure


def main():
    print("=" * 60)
    print("  TWO-BODY INFALL")
    print("=" * 60)

    separation = 40.0
    mass = 10.0
    cx, cy = 256.0, 256.0
    dt = 1.0 / 60.0
    n_steps = 600

    sim = Simulation(SimulationConfig(seed_particle=None, initial_dt=dt))
    sim.spawn_at((cx - separation / 2, cy), mass)
    sim.spawn_at((cx + separation / 2, cy), mass)

    print(f"\n1. Setup:")
    print(f"   Masses: {mass} at ({cx - separation / 2}, {cy}) and ({cx + separation / 2}, {cy})")
    print(f"   G = {sim.config.gravity.gravitational_constant}, floor = {sim.config.gravity.min_distance}")
    print(f"   dt = {dt:.4f}, steps = {n_steps}")

    recorder = TrajectoryRecorder()
    recorder.record_simulation(sim)

    steps, totals, momenta = [], [], []
    print("\n2. Running...")
    for _ in range(n_steps):
        sim.advance(dt)
        recorder.record_simulation(sim)
        report = energy_report(sim)
        steps.append(report.step)
        totals.append(report.total)
        momenta.append(np.hypot(*report.momentum))

    final = energy_report(sim)
    print(f"   {sim.step_count} steps completed ({sim.skipped_steps} skipped)")
    print(f"   Final total energy: {final.total:.4f}")
    print(f"   Final |momentum|:   {np.hypot(*final.momentum):.2e}")
    print(f"   Center of mass:     ({final.center_of_mass[0]:.3f}, {final.center_of_mass[1]:.3f})")

    print("\n3. Creating visualization...")
    output_dir = Path("output/demo_two_body")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = plot_trajectories(recorder, title="Two-Body Infall")
    save_figure(fig, output_dir / "trajectories.png")
    plt.close(fig)

    fig, axes = plt.subplots(1, 2, figsize=(12, 4))
    axes[0].plot(steps, totals, linewidth=2)
    axes[0].set_xlabel("Step")
    axes[0].set_ylabel("Total energy")
    axes[0].set_title("Energy (softened potential)")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(steps, momenta, linewidth=2, color="tab:orange")
    axes[1].set_xlabel("Step")
    axes[1].set_ylabel("|p|")
    axes[1].set_title("Total momentum")
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    save_figure(fig, output_dir / "energy.png")
    plt.close(fig)
    print(f"   Saved: {output_dir}")

    print("\n" + "=" * 60)
    print("  SUMMARY")
    print("=" * 60)
    print("  • Equal masses fall symmetrically toward the center of mass")
    print("  • Total momentum stays at floating-point zero")
    print("  • The distance floor bounds the force at closest approach")
    print("=" * 60)


if __name__ == "__main__":
    main()
