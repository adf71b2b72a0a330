"""
ForceField: pairwise Newtonian gravity accumulated into each particle.

For particle i and every other particle j:

    (dx, dy) = pos[j] - pos[i]
    d        = max(|(dx, dy)|, min_distance)
    a_i     += G * m_j / d³ * (dx, dy)

The distance floor stands in for collision handling: particles closer than
min_distance pull on each other as if they were min_distance apart. This
keeps the force bounded at close range at the cost of accuracy there.

Every ordered pair is evaluated, so a step costs O(n²). Two algorithms are
available:
- "vectorized": numpy broadcasting over the full n×n displacement matrix
- "pairwise": reference loop over ParticleStore.iter_pairs()
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Literal, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from gravsim.core.store import ParticleStore


@dataclass
class GravityConfig:
    """Configuration for the gravity pass."""

    gravitational_constant: float = 100.0  # G; use 1.0 for the "no G" variant
    min_distance: float = 3.0  # Separation floor (collision stand-in)
    algorithm: Literal["vectorized", "pairwise"] = "vectorized"

    def __post_init__(self):
        if not math.isfinite(self.gravitational_constant):
            raise ValueError("gravitational_constant must be finite")
        if not (math.isfinite(self.min_distance) and self.min_distance > 0.0):
            raise ValueError("min_distance must be positive and finite")
        if self.algorithm not in ("vectorized", "pairwise"):
            raise ValueError("Unknown algorithm: " + str(self.algorithm))


class ForceField:
    """
    Sums the gravitational pull of every other particle into each accumulator.

    The pass only ADDS to the accumulators; it relies on the integrator having
    cleared them at the end of the previous step.
    """

    def __init__(self, config: GravityConfig | None = None):
        self.config = config if config is not None else GravityConfig()

    def accumulate(self, store: "ParticleStore") -> None:
        """Run one gravity pass over the whole store."""
        if len(store) < 2:
            return

        if self.config.algorithm == "vectorized":
            store.accelerations[...] += self.compute_accelerations(
                store.positions, store.masses
            )
        else:
            self._accumulate_pairwise(store)

    def compute_accelerations(
        self, positions: np.ndarray, masses: np.ndarray
    ) -> np.ndarray:
        """
        Net gravitational acceleration on every particle.

        Args:
            positions: [n, 2] array of positions
            masses: [n] array of masses

        Returns:
            [n, 2] array of accelerations
        """
        G = self.config.gravitational_constant

        # disp[i, j] = pos[j] - pos[i]
        disp = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        distance = np.sqrt(np.einsum("ijk,ijk->ij", disp, disp))
        np.maximum(distance, self.config.min_distance, out=distance)

        # coeff[i, j] = G * m_j / d_ij³, no self-interaction on the diagonal
        coeff = G * masses[np.newaxis, :] / distance**3
        np.fill_diagonal(coeff, 0.0)

        return np.einsum("ij,ijk->ik", coeff, disp)

    def _accumulate_pairwise(self, store: "ParticleStore") -> None:
        G = self.config.gravitational_constant
        min_distance = self.config.min_distance
        positions = store.positions
        masses = store.masses
        accelerations = store.accelerations

        for i, j in store.iter_pairs():
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            distance = math.sqrt(dx * dx + dy * dy)
            if distance < min_distance:
                distance = min_distance
            accel = G * masses[j] / (distance * distance * distance)
            accelerations[i, 0] += dx * accel
            accelerations[i, 1] += dy * accel
