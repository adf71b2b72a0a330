"""
Simulation: the explicit context object that drives one frame at a time.

One external "time advanced by dt" signal runs exactly one step:

    IDLE ──advance(dt)──▶ STEPPING (ForceField, then VerletIntegrator) ──▶ IDLE

The two passes always run in that order: the integrator consumes the
accelerations the force pass just produced. Spawning is only allowed while
IDLE, so a snapshot always sees a complete pre-step or post-step world.

Degenerate frame deltas (zero, negative, NaN, inf) and non-finite integration
results skip the step: a warning is logged, advance() returns False, and the
particle state and clock are left as they were before the call.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Literal

import numpy as np

from gravsim.core.clock import DEFAULT_INITIAL_DT, SimulationClock
from gravsim.core.gravity import ForceField, GravityConfig
from gravsim.core.integrator import VerletIntegrator
from gravsim.core.spawner import PointerState, SpawnConfig, Spawner
from gravsim.core.store import ParticleId, ParticleStore

logger = logging.getLogger(__name__)


class SimulationStateError(RuntimeError):
    """Raised when the store would be mutated while a step is in flight."""


class StepState(Enum):
    IDLE = "idle"
    STEPPING = "stepping"


@dataclass
class SimulationConfig:
    """Configuration for a simulation."""

    gravity: GravityConfig = field(default_factory=GravityConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    initial_dt: float = DEFAULT_INITIAL_DT  # Seed for previous_dt
    radius_policy: Literal["sqrt", "linear"] = "sqrt"  # Render radius from mass
    max_particles: int | None = 1024  # None = unbounded growth

    # Particle created at start-up: ((x, y), mass), or None for an empty world
    seed_particle: tuple[tuple[float, float], float] | None = ((50.0, 50.0), 10.0)

    def __post_init__(self):
        if not (math.isfinite(self.initial_dt) and self.initial_dt > 0.0):
            raise ValueError(f"initial_dt must be positive, got {self.initial_dt}")
        if self.radius_policy not in ("sqrt", "linear"):
            raise ValueError("Unknown radius_policy: " + str(self.radius_policy))


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    Read-only copy of the renderable world state.

    Iterating yields ((x, y), mass) per particle.
    """

    positions: np.ndarray  # [n, 2]
    masses: np.ndarray  # [n]
    radii: np.ndarray  # [n]
    step: int

    def __len__(self) -> int:
        return self.masses.shape[0]

    def __iter__(self) -> Iterator[tuple[tuple[float, float], float]]:
        for (x, y), m in zip(self.positions, self.masses):
            yield (float(x), float(y)), float(m)


def render_radii(masses: np.ndarray, policy: str) -> np.ndarray:
    """Render radius per particle: sqrt(mass) or mass itself."""
    if policy == "sqrt":
        return np.sqrt(masses)
    if policy == "linear":
        return masses.copy()
    raise ValueError("Unknown radius_policy: " + str(policy))


class Simulation:
    """
    The simulation context: store, clock, spawner and the two passes.

    Collaborators talk to it through four calls:
    - advance(dt): run one step
    - set_pointer(position | None): pointer moved / left the surface
    - trigger_spawn(): primary click
    - snapshot(): read the world for rendering
    """

    def __init__(self, config: SimulationConfig | None = None):
        self.config = config if config is not None else SimulationConfig()

        self.store = ParticleStore(max_particles=self.config.max_particles)
        self.clock = SimulationClock(previous_dt=self.config.initial_dt)
        self.force_field = ForceField(self.config.gravity)
        self.integrator = VerletIntegrator()
        self.spawner = Spawner(self.store, self.config.spawn)

        self.state = StepState.IDLE
        self.step_count = 0
        self.skipped_steps = 0

        if self.config.seed_particle is not None:
            position, mass = self.config.seed_particle
            self.store.create(position, mass)

    def __len__(self) -> int:
        return len(self.store)

    @property
    def pointer(self) -> PointerState:
        return self.spawner.pointer

    def advance(self, dt: float) -> bool:
        """
        Run one simulation step with current_dt = dt.

        Returns:
            True if the step ran, False if it was skipped
        """
        if self.state is not StepState.IDLE:
            raise SimulationStateError("advance() called while a step is in flight")

        if not self.clock.begin(dt):
            self.skipped_steps += 1
            logger.warning("Skipping step with degenerate dt=%r", dt)
            return False

        self.state = StepState.STEPPING
        try:
            self.force_field.accumulate(self.store)
            if not self.integrator.step(self.store, self.clock):
                self.store.clear_accelerations()
                self.skipped_steps += 1
                logger.warning(
                    "Skipping step %d: integration produced non-finite positions",
                    self.step_count,
                )
                return False
        finally:
            self.state = StepState.IDLE

        self.step_count += 1
        return True

    def run(self, n_steps: int, dt: float) -> int:
        """Advance n_steps times with a fixed dt; return how many steps ran."""
        completed = 0
        for _ in range(n_steps):
            if self.advance(dt):
                completed += 1
        return completed

    def set_pointer(self, position: PointerState):
        """Pointer moved to `position`, or left the surface (None)."""
        self.spawner.set_pointer(position)

    def trigger_spawn(self) -> ParticleId | None:
        """Primary click: spawn at the pointer with the configured mass policy."""
        self._require_idle()
        return self.spawner.trigger()

    def spawn_at(
        self, position: PointerState, mass: float | None = None
    ) -> ParticleId | None:
        """Spawn one particle at `position` between steps."""
        self._require_idle()
        return self.spawner.spawn_at(position, mass)

    def snapshot(self) -> Snapshot:
        """Consistent read-only copy of positions, masses and render radii."""
        positions = self.store.positions.copy()
        masses = self.store.masses.copy()
        radii = render_radii(masses, self.config.radius_policy)
        for arr in (positions, masses, radii):
            arr.setflags(write=False)
        return Snapshot(
            positions=positions, masses=masses, radii=radii, step=self.step_count
        )

    def _require_idle(self):
        if self.state is not StepState.IDLE:
            raise SimulationStateError("Cannot spawn while a step is in flight")


def create_default_simulation(seed: int | None = None) -> Simulation:
    """
    Factory for the default interactive setup.

    One seed particle at (50, 50) with mass 10, G = 100, distance floor 3,
    clicked masses drawn from [5, 50).
    """
    return Simulation(SimulationConfig(spawn=SpawnConfig(seed=seed)))
