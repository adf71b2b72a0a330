"""
Visualization utilities.

- Interactive viewer (pointer, clicks and frame clock for a Simulation)
- Snapshot plots
- Trajectory plots
"""

from gravsim.viz.plots import (
    plot_snapshot,
    plot_trajectories,
    particle_circles,
    save_figure,
)
from gravsim.viz.viewer import SimulationViewer, ViewerConfig

__all__ = [
    "plot_snapshot",
    "plot_trajectories",
    "particle_circles",
    "save_figure",
    "SimulationViewer",
    "ViewerConfig",
]
