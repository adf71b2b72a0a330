"""
TrajectoryRecorder: positions of every particle over time.

Particles spawned mid-run begin their trajectory at the step they first
appear in, so trajectories can have different lengths.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from gravsim.core.simulation import Simulation, Snapshot


class TrajectoryRecorder:
    """Records one point per particle per recorded snapshot."""

    def __init__(self, max_points: int | None = None):
        self.max_points = max_points
        self._points: list[list[tuple[float, float]]] = []
        self._start_steps: list[int] = []

    def __len__(self) -> int:
        """Number of particles with a trajectory."""
        return len(self._points)

    def record(self, snapshot: "Snapshot"):
        """Append the snapshot's positions."""
        for pid, (x, y) in enumerate(snapshot.positions):
            if pid == len(self._points):
                self._points.append([])
                self._start_steps.append(snapshot.step)
            trail = self._points[pid]
            trail.append((float(x), float(y)))
            if self.max_points is not None and len(trail) > self.max_points:
                del trail[0]

    def record_simulation(self, simulation: "Simulation"):
        self.record(simulation.snapshot())

    def start_step(self, pid: int) -> int:
        """Step at which particle `pid` was first recorded."""
        return self._start_steps[pid]

    def get_trajectory_arrays(self, pid: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the trajectory of particle `pid` as (x_array, y_array)."""
        trail = self._points[pid]
        if not trail:
            return np.array([]), np.array([])
        traj = np.array(trail)
        return traj[:, 0], traj[:, 1]

    def displacement(self, pid: int) -> tuple[float, float]:
        """Last recorded position minus first recorded position."""
        x, y = self.get_trajectory_arrays(pid)
        return float(x[-1] - x[0]), float(y[-1] - y[0])
