"""Unit tests for ForceField and GravityConfig."""

import numpy as np
import pytest

from gravsim.core.gravity import ForceField, GravityConfig
from gravsim.core.store import ParticleStore


def make_store(particles):
    store = ParticleStore()
    for position, mass in particles:
        store.create(position, mass)
    return store


class TestGravityConfig:
    """Tests for GravityConfig."""

    def test_default_config(self):
        cfg = GravityConfig()
        assert cfg.gravitational_constant == 100.0
        assert cfg.min_distance == 3.0
        assert cfg.algorithm == "vectorized"

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            GravityConfig(algorithm="barnes_hut")

    @pytest.mark.parametrize("min_distance", [0.0, -1.0, float("nan")])
    def test_invalid_min_distance(self, min_distance):
        with pytest.raises(ValueError):
            GravityConfig(min_distance=min_distance)


@pytest.mark.parametrize("algorithm", ["vectorized", "pairwise"])
class TestForceField:
    """Behavior shared by both algorithms."""

    def test_single_particle_no_force(self, algorithm):
        store = make_store([((50.0, 50.0), 10.0)])
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)
        assert tuple(store.accelerations[0]) == (0.0, 0.0)

    def test_inverse_square_far_field(self, algorithm):
        store = make_store([((0.0, 0.0), 1.0), ((10.0, 0.0), 2.0)])
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)

        # |a| = G * m_j / d²
        assert np.isclose(store.accelerations[0, 0], 100.0 * 2.0 / 100.0)
        assert np.isclose(store.accelerations[1, 0], -100.0 * 1.0 / 100.0)
        assert store.accelerations[0, 1] == 0.0

    def test_distance_floor(self, algorithm):
        store = make_store([((0.0, 0.0), 1.0), ((1.0, 0.0), 1.0)])
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)

        # d = 1 is floored to 3: a = G * m * dx / 3³
        expected = 100.0 * 1.0 * 1.0 / 27.0
        assert np.isclose(store.accelerations[0, 0], expected)
        assert not np.isclose(store.accelerations[0, 0], 100.0)

    def test_coincident_particles_finite(self, algorithm):
        store = make_store([((5.0, 5.0), 1.0), ((5.0, 5.0), 1.0)])
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)
        assert np.all(store.accelerations == 0.0)

    def test_equal_masses_symmetric(self, algorithm):
        store = make_store([((10.0, 20.0), 7.0), ((25.0, 12.0), 7.0)])
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)

        a0, a1 = store.accelerations
        np.testing.assert_allclose(a0, -a1)
        assert np.linalg.norm(a0) > 0

    def test_accumulates_into_existing_value(self, algorithm):
        store = make_store([((0.0, 0.0), 1.0), ((10.0, 0.0), 1.0)])
        store.accelerations[0] = (1.0, 1.0)
        ForceField(GravityConfig(algorithm=algorithm)).accumulate(store)
        assert np.isclose(store.accelerations[0, 0], 1.0 + 1.0)
        assert store.accelerations[0, 1] == 1.0

    def test_gravitational_constant_scales(self, algorithm):
        store_a = make_store([((0.0, 0.0), 1.0), ((10.0, 0.0), 5.0)])
        store_b = make_store([((0.0, 0.0), 1.0), ((10.0, 0.0), 5.0)])
        ForceField(GravityConfig(gravitational_constant=1.0, algorithm=algorithm)).accumulate(store_a)
        ForceField(GravityConfig(gravitational_constant=100.0, algorithm=algorithm)).accumulate(store_b)
        np.testing.assert_allclose(store_b.accelerations, 100.0 * store_a.accelerations)


class TestAlgorithmsAgree:
    """The vectorized pass must match the reference loop."""

    def test_random_cloud(self, rng):
        particles = [
            ((float(x), float(y)), float(m))
            for (x, y), m in zip(rng.uniform(0, 100, (30, 2)), rng.uniform(5, 50, 30))
        ]
        vec = make_store(particles)
        ref = make_store(particles)

        ForceField(GravityConfig(algorithm="vectorized")).accumulate(vec)
        ForceField(GravityConfig(algorithm="pairwise")).accumulate(ref)

        np.testing.assert_allclose(vec.accelerations, ref.accelerations, rtol=1e-10, atol=1e-12)

    def test_compute_accelerations_does_not_touch_inputs(self, rng):
        positions = rng.uniform(0, 100, (5, 2))
        masses = rng.uniform(5, 50, 5)
        pos_copy, mass_copy = positions.copy(), masses.copy()

        ForceField().compute_accelerations(positions, masses)

        np.testing.assert_array_equal(positions, pos_copy)
        np.testing.assert_array_equal(masses, mass_copy)
