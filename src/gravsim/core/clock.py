"""
SimulationClock: the frame deltas the integrator needs.

The Verlet step uses the ratio current_dt / previous_dt to correct for
uneven frame pacing. previous_dt is seeded with a nonzero value so the very
first step has something to divide by, and afterwards it only ever takes a
value that was accepted as a current_dt. It can therefore never be zero.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

DEFAULT_INITIAL_DT = 0.1


def is_valid_dt(dt: float) -> bool:
    """A frame delta is usable if it is finite and strictly positive."""
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        return False
    return math.isfinite(dt) and dt > 0.0


@dataclass
class SimulationClock:
    """Current and previous frame delta."""

    previous_dt: float = DEFAULT_INITIAL_DT
    current_dt: float = DEFAULT_INITIAL_DT

    def __post_init__(self):
        if not is_valid_dt(self.previous_dt):
            raise ValueError(
                f"previous_dt must be positive and finite, got {self.previous_dt}"
            )

    @property
    def timescale(self) -> float:
        """current_dt / previous_dt."""
        return self.current_dt / self.previous_dt

    @property
    def timesq(self) -> float:
        """current_dt squared."""
        return self.current_dt * self.current_dt

    def begin(self, dt: float) -> bool:
        """
        Set the delta for the step about to run.

        Returns:
            False (and leaves the clock untouched) if dt is degenerate.
        """
        if not is_valid_dt(dt):
            return False
        self.current_dt = float(dt)
        return True

    def commit(self):
        """Called after a completed step: the current delta becomes previous."""
        self.previous_dt = self.current_dt
