"""
Conserved-quantity diagnostics for a running simulation.

Verlet stores no velocity, so velocities here are RECONSTRUCTED from the
position delta of the last step:

    v ≈ (pos - prev_pos) / dt

where dt is the delta of the step that produced pos (clock.previous_dt after
a completed step). These are diagnostics only; nothing in the core reads them.

The potential uses the same distance floor as the force pass, so that the
energy reported is the energy of the softened system actually simulated.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial.distance import pdist

if TYPE_CHECKING:
    from gravsim.core.simulation import Simulation
    from gravsim.core.store import ParticleStore


def implicit_velocities(store: "ParticleStore", dt: float) -> np.ndarray:
    """Per-particle velocity [n, 2] reconstructed from the last step."""
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    return (store.positions - store.prev_positions) / dt


def center_of_mass(store: "ParticleStore") -> tuple[float, float]:
    """Mass-weighted mean position."""
    if len(store) == 0:
        raise ValueError("center_of_mass of an empty store")
    masses = store.masses
    com = (store.positions * masses[:, np.newaxis]).sum(axis=0) / masses.sum()
    return float(com[0]), float(com[1])


def total_momentum(store: "ParticleStore", dt: float) -> tuple[float, float]:
    """Sum of m·v over all particles."""
    if len(store) == 0:
        return 0.0, 0.0
    p = (implicit_velocities(store, dt) * store.masses[:, np.newaxis]).sum(axis=0)
    return float(p[0]), float(p[1])


def kinetic_energy(store: "ParticleStore", dt: float) -> float:
    """Σ ½ m v²."""
    if len(store) == 0:
        return 0.0
    v = implicit_velocities(store, dt)
    return float(0.5 * np.sum(store.masses * np.sum(v * v, axis=1)))


def potential_energy(
    store: "ParticleStore",
    gravitational_constant: float,
    min_distance: float,
) -> float:
    """
    Σ_{i<j} -G m_i m_j / max(r_ij, min_distance).

    Uses the condensed pair ordering of scipy's pdist for both distances
    and mass products.
    """
    n = len(store)
    if n < 2:
        return 0.0

    distances = np.maximum(pdist(store.positions), min_distance)
    i, j = np.triu_indices(n, k=1)
    masses = store.masses
    return float(-gravitational_constant * np.sum(masses[i] * masses[j] / distances))


@dataclass
class EnergyReport:
    """Energy and momentum of the system after a step."""

    step: int
    n_particles: int
    kinetic: float
    potential: float
    momentum: tuple[float, float]
    center_of_mass: tuple[float, float] | None

    @property
    def total(self) -> float:
        return self.kinetic + self.potential


def energy_report(simulation: "Simulation") -> EnergyReport:
    """
    Compute energies and momentum for the current state of `simulation`.

    The velocity reconstruction uses clock.previous_dt, i.e. the delta of
    the last completed step.
    """
    store = simulation.store
    gravity = simulation.config.gravity
    dt = simulation.clock.previous_dt

    return EnergyReport(
        step=simulation.step_count,
        n_particles=len(store),
        kinetic=kinetic_energy(store, dt),
        potential=potential_energy(
            store, gravity.gravitational_constant, gravity.min_distance
        ),
        momentum=total_momentum(store, dt),
        center_of_mass=center_of_mass(store) if len(store) > 0 else None,
    )
