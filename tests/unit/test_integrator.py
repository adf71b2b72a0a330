"""Unit tests for VerletIntegrator and SimulationClock."""

import numpy as np
import pytest

from gravsim.core.clock import SimulationClock, is_valid_dt
from gravsim.core.integrator import VerletIntegrator, verlet_positions
from gravsim.core.store import ParticleStore


class TestSimulationClock:
    """Tests for SimulationClock."""

    def test_default_seed(self):
        clock = SimulationClock()
        assert clock.previous_dt == 0.1

    def test_zero_seed_rejected(self):
        with pytest.raises(ValueError):
            SimulationClock(previous_dt=0.0)

    def test_begin_and_commit(self):
        clock = SimulationClock(previous_dt=0.1)
        assert clock.begin(0.2)
        assert clock.timescale == pytest.approx(2.0)
        assert clock.timesq == pytest.approx(0.04)

        clock.commit()
        assert clock.previous_dt == 0.2

    @pytest.mark.parametrize("dt", [0.0, -0.1, float("nan"), float("inf")])
    def test_begin_rejects_degenerate(self, dt):
        clock = SimulationClock(previous_dt=0.1)
        assert not clock.begin(dt)
        assert clock.current_dt == 0.1
        assert clock.previous_dt == 0.1

    def test_is_valid_dt(self):
        assert is_valid_dt(1e-6)
        assert not is_valid_dt(0.0)
        assert not is_valid_dt(float("-inf"))


class TestVerletPositions:
    """Tests for the pure update formula."""

    def test_known_values(self):
        pos = np.array([[10.0, 0.0]])
        prev = np.array([[9.0, 0.0]])
        acc = np.array([[2.0, 0.0]])

        # timescale = 2, timesq = 0.04: 10 + 1 * 2 + 2 * 0.04
        new = verlet_positions(pos, prev, acc, current_dt=0.2, previous_dt=0.1)
        assert np.isclose(new[0, 0], 12.08)
        assert new[0, 1] == 0.0

    def test_at_rest_stays_put(self):
        pos = np.array([[3.0, 4.0]])
        new = verlet_positions(pos, pos.copy(), np.zeros((1, 2)), 0.1, 0.1)
        np.testing.assert_array_equal(new, pos)

    def test_deterministic(self, rng):
        pos = rng.uniform(0, 100, (20, 2))
        prev = pos + rng.normal(0, 1, (20, 2))
        acc = rng.normal(0, 10, (20, 2))

        first = verlet_positions(pos, prev, acc, 0.016, 0.017)
        second = verlet_positions(pos, prev, acc, 0.016, 0.017)
        assert np.array_equal(first, second)

    def test_zero_previous_dt(self):
        pos = np.zeros((1, 2))
        with pytest.raises(ValueError):
            verlet_positions(pos, pos, pos, 0.1, 0.0)


class TestVerletIntegrator:
    """Tests for the store-level step."""

    def test_step_updates_prev_to_pre_step_position(self):
        store = ParticleStore()
        pid = store.create((10.0, 0.0), 1.0)
        store.get(pid).prev_position = (9.0, 0.0)
        store.accelerations[pid] = (2.0, 0.0)
        clock = SimulationClock(previous_dt=0.1)
        clock.begin(0.2)

        assert VerletIntegrator().step(store, clock)

        p = store.get(pid)
        assert p.prev_position == (10.0, 0.0)
        assert np.isclose(p.position[0], 12.08)
        assert p.acceleration == (0.0, 0.0)
        assert clock.previous_dt == 0.2

    def test_acceleration_reset(self, rng):
        store = ParticleStore()
        for x, y in rng.uniform(0, 100, (10, 2)):
            store.create((float(x), float(y)), 1.0)
        store.accelerations[...] = rng.normal(0, 100, (10, 2))
        clock = SimulationClock()

        VerletIntegrator().step(store, clock)
        assert np.all(store.accelerations == 0.0)

    def test_non_finite_result_leaves_state(self):
        store = ParticleStore()
        pid = store.create((0.0, 0.0), 1.0)
        store.get(pid).position = (1e308, 0.0)
        store.get(pid).prev_position = (-1e308, 0.0)
        clock = SimulationClock(previous_dt=0.1)
        clock.begin(0.1)

        with np.errstate(over="ignore", invalid="ignore"):
            assert not VerletIntegrator().step(store, clock)

        assert store.get(pid).position == (1e308, 0.0)
        assert store.get(pid).prev_position == (-1e308, 0.0)
