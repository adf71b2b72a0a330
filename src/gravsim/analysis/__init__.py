"""
Analysis layer: diagnostics computed FROM the simulation state.

Nothing here feeds back into the core. It only reads:
- Implicit velocities from the last position delta
- Kinetic and (softened) potential energy
- Total momentum and center of mass
- Recorded trajectories
"""

from gravsim.analysis.diagnostics import (
    EnergyReport,
    center_of_mass,
    energy_report,
    implicit_velocities,
    kinetic_energy,
    potential_energy,
    total_momentum,
)
from gravsim.analysis.trajectories import TrajectoryRecorder

__all__ = [
    "EnergyReport",
    "center_of_mass",
    "energy_report",
    "implicit_velocities",
    "kinetic_energy",
    "potential_energy",
    "total_momentum",
    "TrajectoryRecorder",
]
