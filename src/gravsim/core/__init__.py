"""
Core simulation primitives.

This layer knows NOTHING about windows, mice or drawing.
It only knows:
- Particles with position, previous position, mass and acceleration
- Pairwise gravity with a distance floor
- Variable-timestep Verlet integration
- Appending particles between steps

The Simulation object ties these together and is the only thing an outer
loop needs to drive.
"""

from gravsim.core.store import ParticleId, ParticleStore, ParticleView, StoreFullError
from gravsim.core.clock import SimulationClock
from gravsim.core.gravity import ForceField, GravityConfig
from gravsim.core.integrator import VerletIntegrator, verlet_positions
from gravsim.core.spawner import PointerState, SpawnConfig, Spawner
from gravsim.core.simulation import (
    Simulation,
    SimulationConfig,
    SimulationStateError,
    Snapshot,
    StepState,
    create_default_simulation,
)

__all__ = [
    "ParticleId",
    "ParticleStore",
    "ParticleView",
    "StoreFullError",
    "SimulationClock",
    "ForceField",
    "GravityConfig",
    "VerletIntegrator",
    "verlet_positions",
    "PointerState",
    "SpawnConfig",
    "Spawner",
    "Simulation",
    "SimulationConfig",
    "SimulationStateError",
    "Snapshot",
    "StepState",
    "create_default_simulation",
]
