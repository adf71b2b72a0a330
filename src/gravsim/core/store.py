"""
ParticleStore: the struct-of-arrays substrate every other component works on.

The store holds ONLY particle primitives:
- Current position
- Previous position (velocity is implicit in the difference)
- Mass
- Acceleration accumulator

Particles are addressed by a stable integer id (their row in the arrays).
Particles are never removed, so an id stays valid for the lifetime of the store.
"""

from __future__ import annotations
import logging
from typing import Iterator

import numpy as np

logger = logging.getLogger(__name__)

ParticleId = int


class StoreFullError(RuntimeError):
    """Raised when creating a particle in a store that reached max_particles."""


class ParticleView:
    """
    Mutable view of a single particle.

    Reads and writes go straight to the store's arrays; the view holds no copy.
    """

    __slots__ = ("_store", "pid")

    def __init__(self, store: "ParticleStore", pid: ParticleId):
        self._store = store
        self.pid = pid

    @property
    def position(self) -> tuple[float, float]:
        x, y = self._store._position[self.pid]
        return float(x), float(y)

    @position.setter
    def position(self, value: tuple[float, float]):
        self._store._position[self.pid] = value

    @property
    def prev_position(self) -> tuple[float, float]:
        x, y = self._store._prev_position[self.pid]
        return float(x), float(y)

    @prev_position.setter
    def prev_position(self, value: tuple[float, float]):
        self._store._prev_position[self.pid] = value

    @property
    def mass(self) -> float:
        return float(self._store._mass[self.pid])

    @property
    def acceleration(self) -> tuple[float, float]:
        ax, ay = self._store._acceleration[self.pid]
        return float(ax), float(ay)

    @acceleration.setter
    def acceleration(self, value: tuple[float, float]):
        self._store._acceleration[self.pid] = value

    def add_acceleration(self, ax: float, ay: float):
        """Sum (ax, ay) into this particle's accumulator."""
        self._store._acceleration[self.pid, 0] += ax
        self._store._acceleration[self.pid, 1] += ay

    def __repr__(self) -> str:
        return (
            f"ParticleView(pid={self.pid}, position={self.position}, "
            f"mass={self.mass})"
        )


class ParticleStore:
    """
    Expandable collection of particle records.

    Storage is a set of parallel numpy arrays so the O(n²) force pass can run
    over contiguous memory. Capacity doubles when full; `max_particles` caps
    the number of live particles (None = unbounded).
    """

    def __init__(self, initial_capacity: int = 16, max_particles: int | None = None):
        if initial_capacity < 1:
            raise ValueError("initial_capacity must be at least 1")
        if max_particles is not None and max_particles < 1:
            raise ValueError("max_particles must be at least 1 or None")

        self.max_particles = max_particles
        self._count = 0

        # ═══════════════════════════════════════════════════════════════
        # PARTICLE STATE: rows [0, _count) are live
        # ═══════════════════════════════════════════════════════════════
        self._position = np.zeros((initial_capacity, 2), dtype=np.float64)
        self._prev_position = np.zeros((initial_capacity, 2), dtype=np.float64)
        self._mass = np.zeros(initial_capacity, dtype=np.float64)
        self._acceleration = np.zeros((initial_capacity, 2), dtype=np.float64)

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        """Number of rows currently allocated."""
        return self._mass.shape[0]

    @property
    def is_full(self) -> bool:
        return self.max_particles is not None and self._count >= self.max_particles

    # Live views (no copies): writes through these arrays modify the store.

    @property
    def positions(self) -> np.ndarray:
        return self._position[: self._count]

    @property
    def prev_positions(self) -> np.ndarray:
        return self._prev_position[: self._count]

    @property
    def masses(self) -> np.ndarray:
        return self._mass[: self._count]

    @property
    def accelerations(self) -> np.ndarray:
        return self._acceleration[: self._count]

    def create(self, position: tuple[float, float], mass: float) -> ParticleId:
        """
        Create a particle at rest.

        Sets position, prev_position = position (zero initial velocity),
        mass, and a zero acceleration in one go.

        Args:
            position: (x, y) location
            mass: Strictly positive, finite mass

        Returns:
            Id of the new particle

        Raises:
            ValueError: If mass is not positive and finite, or position is not finite
            StoreFullError: If the store already holds max_particles particles
        """
        mass = float(mass)
        if not np.isfinite(mass) or mass <= 0.0:
            raise ValueError(f"Particle mass must be positive and finite, got {mass}")

        x, y = float(position[0]), float(position[1])
        if not (np.isfinite(x) and np.isfinite(y)):
            raise ValueError(f"Particle position must be finite, got ({x}, {y})")

        if self.is_full:
            raise StoreFullError(
                f"Particle store is full ({self.max_particles} particles)"
            )

        if self._count == self.capacity:
            self._grow()

        pid = self._count
        self._position[pid] = (x, y)
        self._prev_position[pid] = (x, y)
        self._mass[pid] = mass
        self._acceleration[pid] = (0.0, 0.0)
        self._count += 1
        return pid

    def get(self, pid: ParticleId) -> ParticleView:
        """Get a mutable view of particle `pid`."""
        if not 0 <= pid < self._count:
            raise IndexError(f"No particle with id {pid}")
        return ParticleView(self, pid)

    def iter_particles(self) -> Iterator[ParticleView]:
        """Iterate over every live particle once."""
        for pid in range(self._count):
            yield ParticleView(self, pid)

    def iter_pairs(self) -> Iterator[tuple[ParticleId, ParticleId]]:
        """Iterate over every ordered pair (i, j) of distinct particles."""
        n = self._count
        for i in range(n):
            for j in range(n):
                if i != j:
                    yield i, j

    def clear_accelerations(self):
        """Reset every live accumulator to (0, 0)."""
        self._acceleration[: self._count] = 0.0

    def _grow(self):
        """Double the allocated capacity, keeping live rows."""
        new_capacity = self.capacity * 2
        if self.max_particles is not None:
            new_capacity = min(new_capacity, self.max_particles)

        for name in ("_position", "_prev_position", "_mass", "_acceleration"):
            old = getattr(self, name)
            new = np.zeros((new_capacity,) + old.shape[1:], dtype=old.dtype)
            new[: self._count] = old[: self._count]
            setattr(self, name, new)

        logger.debug("Particle store grown to capacity %d", new_capacity)
