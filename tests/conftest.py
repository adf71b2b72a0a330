"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import numpy as np


@pytest.fixture
def empty_config():
    """Simulation configuration without the start-up seed particle."""
    from gravsim.core import SimulationConfig
    return SimulationConfig(seed_particle=None)


@pytest.fixture
def empty_simulation(empty_config):
    """A simulation with no particles."""
    from gravsim.core import Simulation
    return Simulation(empty_config)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
