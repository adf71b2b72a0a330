"""
VerletIntegrator: position Verlet with a variable-timestep correction.

    timescale = current_dt / previous_dt
    new_pos   = pos + (pos - prev_pos) * timescale + acc * current_dt²

No velocity is stored: it is implicit in pos - prev_pos. That is why
prev_pos must be set to the PRE-step position, and why the timescale factor
is needed when frame deltas vary (the stored displacement covers
previous_dt, not current_dt).
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from gravsim.core.clock import SimulationClock
    from gravsim.core.store import ParticleStore


def verlet_positions(
    positions: np.ndarray,
    prev_positions: np.ndarray,
    accelerations: np.ndarray,
    current_dt: float,
    previous_dt: float,
) -> np.ndarray:
    """
    Compute the next positions without touching the inputs.

    Raises:
        ValueError: If previous_dt is zero
    """
    if previous_dt == 0.0:
        raise ValueError("previous_dt must be nonzero")

    timescale = current_dt / previous_dt
    timesq = current_dt * current_dt
    return positions + (positions - prev_positions) * timescale + accelerations * timesq


class VerletIntegrator:
    """Advances every particle by one step and clears its accumulator."""

    def step(self, store: "ParticleStore", clock: "SimulationClock") -> bool:
        """
        Integrate all particles with the clock's current and previous dt.

        The clock is committed (previous_dt ← current_dt) after all particles
        are processed.

        Returns:
            False if the result was non-finite. In that case nothing is
            written: positions, accumulators and the clock are left as they were.
        """
        # Overflow is detected below, not reported by numpy
        with np.errstate(over="ignore", invalid="ignore"):
            new_positions = verlet_positions(
                store.positions,
                store.prev_positions,
                store.accelerations,
                clock.current_dt,
                clock.previous_dt,
            )
        if not np.all(np.isfinite(new_positions)):
            return False

        store.prev_positions[...] = store.positions
        store.positions[...] = new_positions
        store.clear_accelerations()
        clock.commit()
        return True
