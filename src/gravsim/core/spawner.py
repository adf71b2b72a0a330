"""
Spawner: turns pointer clicks into new particles.

The spawner owns the pointer state (last known pointer position, or None when
the pointer left the surface) and the mass policy for clicked particles:
- a fixed spawn_mass, if configured
- otherwise a mass drawn uniformly from mass_range with a seeded Generator

Invalid requests are REJECTED rather than clamped: the store is left
untouched, a warning is logged and None is returned.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gravsim.core.store import StoreFullError

if TYPE_CHECKING:
    from gravsim.core.store import ParticleId, ParticleStore

logger = logging.getLogger(__name__)

PointerState = tuple[float, float] | None


@dataclass
class SpawnConfig:
    """Configuration for interactively spawned particles."""

    mass_range: tuple[float, float] = (5.0, 50.0)  # Uniform draw in [low, high)
    spawn_mass: float | None = None  # Fixed mass; overrides mass_range
    seed: int | None = None  # Seed for the mass Generator

    def __post_init__(self):
        low, high = self.mass_range
        if not (math.isfinite(low) and math.isfinite(high)) or low <= 0.0 or high <= low:
            raise ValueError(
                f"mass_range must satisfy 0 < low < high, got {self.mass_range}"
            )
        if self.spawn_mass is not None and not (
            math.isfinite(self.spawn_mass) and self.spawn_mass > 0.0
        ):
            raise ValueError(f"spawn_mass must be positive, got {self.spawn_mass}")


class Spawner:
    """Appends particles to a store at the pointer position."""

    def __init__(self, store: "ParticleStore", config: SpawnConfig | None = None):
        self.store = store
        self.config = config if config is not None else SpawnConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.pointer: PointerState = None

    def set_pointer(self, position: PointerState):
        """Record the pointer position (None = pointer off the surface)."""
        if position is None:
            self.pointer = None
        else:
            self.pointer = (float(position[0]), float(position[1]))

    def next_mass(self) -> float:
        """Mass for the next clicked particle."""
        if self.config.spawn_mass is not None:
            return float(self.config.spawn_mass)
        low, high = self.config.mass_range
        return float(self.rng.uniform(low, high))

    def spawn_at(
        self, position: PointerState, mass: float | None = None
    ) -> "ParticleId | None":
        """
        Add one particle at rest at `position`.

        Args:
            position: (x, y), or None for "pointer unknown" (no-op)
            mass: Particle mass; drawn from the mass policy if omitted

        Returns:
            Id of the new particle, or None if nothing was spawned
        """
        if position is None:
            return None

        if mass is None:
            mass = self.next_mass()

        try:
            pid = self.store.create(position, mass)
        except (ValueError, StoreFullError) as exc:
            logger.warning("Rejected spawn at %s: %s", position, exc)
            return None

        logger.debug("Spawned particle %d at %s with mass %.3f", pid, position, mass)
        return pid

    def trigger(self) -> "ParticleId | None":
        """Spawn at the current pointer position (click handler)."""
        return self.spawn_at(self.pointer)
